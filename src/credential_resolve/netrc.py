# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""
Netrc file parsing for HTTP Basic Authentication credentials.

This module turns a .netrc file into an ordered list of Credential
records, one per ``machine`` or ``default`` block, in file order. The
tokenizer follows the line-oriented approach curl used before 7.84.0
(https://daniel.haxx.se/blog/2022/05/31/netrc-pains/):

- Tokens are separated by spaces and tabs; quoting is not supported
- ``#`` starts a comment that runs to the end of the line
- ``macdef`` bodies run until the next empty line and are discarded
- Incomplete entries are kept, with missing fields left empty

Nothing in here raises on malformed input: netrc lookup is best effort.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .models import Credential

log = logging.getLogger(__name__)

# Token constants to avoid S105 false positives
_TOKEN_MACHINE = "machine"  # noqa: S105
_TOKEN_LOGIN = "login"  # noqa: S105
_TOKEN_PASSWORD = "password"  # noqa: S105
_TOKEN_ACCOUNT = "account"  # noqa: S105
_TOKEN_DEFAULT = "default"  # noqa: S105
_TOKEN_MACDEF = "macdef"  # noqa: S105

_VALUE_TOKENS = (_TOKEN_LOGIN, _TOKEN_PASSWORD, _TOKEN_ACCOUNT)


class ParserState(Enum):
    """States of the netrc tokenizer."""

    SCANNING = "scanning"
    AWAITING_VALUE = "awaiting_value"
    MACRO_SKIP = "macro_skip"


@dataclass
class _PendingEntry:
    """The machine or default block currently being filled in."""

    scope: str = ""
    username: str = ""
    password: str = ""

    def set(self, field: str, value: str) -> None:
        if field == _TOKEN_MACHINE:
            self.scope = value
        elif field == _TOKEN_LOGIN:
            self.username = value
        elif field == _TOKEN_PASSWORD:
            self.password = value
        # account values are accepted and dropped

    def freeze(self) -> Credential:
        return Credential(
            scope=self.scope,
            username=self.username,
            password=self.password,
        )


class NetrcParser:
    """
    Line-fed state machine for .netrc content.

    Feed lines with :meth:`feed` and collect the records with
    :meth:`close`. The parser moves between three states:

    - SCANNING: dispatching on keywords
    - AWAITING_VALUE: the next token is the value for ``pending_field``
    - MACRO_SKIP: discarding a ``macdef`` body until an empty line
    """

    def __init__(self) -> None:
        self._state = ParserState.SCANNING
        self._pending_field: Optional[str] = None
        self._entry: Optional[_PendingEntry] = None
        self._credentials: list[Credential] = []

    @property
    def state(self) -> ParserState:
        return self._state

    @property
    def pending_field(self) -> Optional[str]:
        return self._pending_field

    def feed(self, line: str) -> None:
        """
        Consume a single line of netrc content.

        Args:
            line: One line, with or without its trailing line terminator.
        """
        line = line.rstrip("\r\n")

        if self._state is ParserState.MACRO_SKIP:
            if line == "":
                self._state = ParserState.SCANNING
            return

        macro_started = False
        # Split on whitespace runs: repeated separators never yield empty
        # tokens, so "machine  foo.com" still binds foo.com as the scope
        for token in line.replace("\t", " ").strip().split():
            if self._state is ParserState.AWAITING_VALUE:
                self._assign(token)
            elif token.startswith("#"):
                break
            elif token == _TOKEN_MACHINE:
                self._start_entry()
                self._await(_TOKEN_MACHINE)
            elif token == _TOKEN_MACDEF:
                # The next token is the macro name; the body starts on the next line
                macro_started = True
                self._await(_TOKEN_MACDEF)
            elif token in _VALUE_TOKENS:
                self._await(token)
            elif token == _TOKEN_DEFAULT:
                self._start_entry()

        if macro_started:
            self._pending_field = None
            self._state = ParserState.MACRO_SKIP

    def close(self) -> list[Credential]:
        """
        Finish parsing and return the records in file order.

        A command still waiting for its value leaves that field empty.
        """
        self._pending_field = None
        self._state = ParserState.SCANNING
        self._flush()
        return list(self._credentials)

    def _await(self, field: str) -> None:
        self._pending_field = field
        self._state = ParserState.AWAITING_VALUE

    def _assign(self, value: str) -> None:
        field = self._pending_field
        self._pending_field = None
        self._state = ParserState.SCANNING
        if field is None or field == _TOKEN_MACDEF:
            return
        if self._entry is None:
            log.debug("Ignoring netrc %r value outside of a machine block", field)
            return
        self._entry.set(field, value)

    def _start_entry(self) -> None:
        self._flush()
        self._entry = _PendingEntry()

    def _flush(self) -> None:
        if self._entry is not None:
            self._credentials.append(self._entry.freeze())
            self._entry = None


def parse_netrc(source: Union[str, Iterable[str]]) -> list[Credential]:
    """
    Parse netrc content into Credential records.

    Args:
        source: Raw file content, or an iterable of lines such as an
            open text file.

    Returns:
        One Credential per machine/default block, in file order. The
        default block has an empty scope.

    Examples:
        >>> parse_netrc("machine foo.com login bob password hunter2")
        [Credential(scope='foo.com', username='bob', password='****')]
    """
    lines = source.splitlines() if isinstance(source, str) else source
    parser = NetrcParser()
    for line in lines:
        parser.feed(line)
    return parser.close()


def load_netrc(path: Path) -> list[Credential]:
    """
    Load and parse a netrc file.

    A file that cannot be opened counts as an empty store.

    Args:
        path: Path to the netrc file.

    Returns:
        Parsed records, or an empty list if the file is unavailable.
    """
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            return parse_netrc(handle)
    except OSError as e:
        log.debug("Unable to load an existing netrc file %s: %s", path, e)
        return []


def check_store_permissions(path: Path) -> bool:
    """
    Check if a credential store file has secure permissions.

    Warns if the file is readable by others (Unix only).

    Args:
        path: Path to the store file.

    Returns:
        True if permissions are secure, False otherwise.
    """
    if os.name == "nt":
        # Windows doesn't have the same permission model
        return True

    try:
        mode = path.stat().st_mode
    except OSError as e:
        log.debug("Could not check permissions for %s: %s", path, e)
        return True

    if not stat.S_ISREG(mode):
        return True

    # Check if group or others have read permission
    if mode & (stat.S_IRGRP | stat.S_IROTH):
        log.warning(
            "Credential file %s has insecure permissions. "
            "Consider running: chmod 600 %s",
            path,
            path,
        )
        return False
    return True


__all__ = [
    "NetrcParser",
    "ParserState",
    "check_store_permissions",
    "load_netrc",
    "parse_netrc",
]
