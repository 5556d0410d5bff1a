# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""
Credential resolution across the local credential stores.

Resolution order:
1. ~/.git-credentials, in line order
2. ~/.netrc, in file order (its default entry, if any, comes last)

The first record whose scope applies to the target wins. Both stores
are read again on every lookup; nothing is cached between calls.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from .git_credentials import load_git_credentials
from .matcher import match_credential
from .models import Credential, CredentialStore, ResolverConfig
from .netrc import check_store_permissions, load_netrc

log = logging.getLogger(__name__)

GIT_CREDENTIALS_FILENAME = ".git-credentials"
NETRC_FILENAME = ".netrc"
WINDOWS_NETRC_FILENAME = "_netrc"


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as e:
        log.debug("Could not stat %s: %s", path, e)
        return False


def default_git_credentials_path(home: Optional[Path] = None) -> Path:
    """Return the git credentials path under ``home`` (default: user's home)."""
    return (home or Path.home()) / GIT_CREDENTIALS_FILENAME


def default_netrc_path(home: Optional[Path] = None) -> Path:
    """
    Return the netrc path under ``home`` (default: user's home).

    On Windows, ``_netrc`` is used when ``.netrc`` does not exist but
    ``_netrc`` does.
    """
    home = home or Path.home()
    candidate = home / NETRC_FILENAME
    if os.name == "nt" and not _is_file(candidate):
        fallback = home / WINDOWS_NETRC_FILENAME
        if _is_file(fallback):
            return fallback
    return candidate


class CredentialResolver:
    """
    Resolve Basic Authentication credentials for a URL or host.

    The resolver holds only its configuration, so one instance can be
    shared freely; each call to :meth:`resolve` re-reads both stores.
    """

    def __init__(self, config: Optional[ResolverConfig] = None) -> None:
        self._config = config or ResolverConfig()

    def __repr__(self) -> str:
        return (
            f"CredentialResolver(git_credentials_path={str(self.git_credentials_path)!r}, "
            f"netrc_path={str(self.netrc_path)!r})"
        )

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def git_credentials_path(self) -> Path:
        if self._config.git_credentials_file is not None:
            return self._config.git_credentials_file
        return default_git_credentials_path(self._config.home)

    @property
    def netrc_path(self) -> Path:
        if self._config.netrc_file is not None:
            return self._config.netrc_file
        return default_netrc_path(self._config.home)

    def _load(
        self,
        store: CredentialStore,
        path: Path,
        loader: Callable[[Path], list[Credential]],
    ) -> list[Credential]:
        if self._config.check_permissions:
            check_store_permissions(path)
        credentials = loader(path)
        log.debug("Loaded %d credential(s) from %s file %s", len(credentials), store.value, path)
        return credentials

    def load_git_credentials(self) -> list[Credential]:
        """Parse the git credentials store; an unavailable file yields []."""
        return self._load(CredentialStore.GIT_CREDENTIALS, self.git_credentials_path, load_git_credentials)

    def load_netrc(self) -> list[Credential]:
        """Parse the netrc store; an unavailable file yields []."""
        return self._load(CredentialStore.NETRC, self.netrc_path, load_netrc)

    def load_credentials(self) -> list[Credential]:
        """
        Return every known credential in precedence order.

        Git credentials come first because the netrc file may contain a
        default entry that would otherwise shadow them.
        """
        return self.load_git_credentials() + self.load_netrc()

    def resolve(self, target: str) -> Credential:
        """
        Find the credential for a URL or host.

        Args:
            target: URL or hostname to authenticate against.

        Returns:
            The first applicable Credential, or an empty Credential
            (``is_empty`` is True) when no store has one.
        """
        credential = match_credential(target, self.load_credentials())
        if credential.is_empty:
            log.debug("No credentials found for %s", target)
        elif credential.is_default:
            log.debug("Using default netrc credentials for %s (login: %s)", target, credential.username)
        else:
            log.debug(
                "Found credentials for %s (scope: %s, login: %s)",
                target,
                credential.scope,
                credential.username,
            )
        return credential


def find_auth_for_host(
    target: str,
    *,
    home: Optional[Path] = None,
    git_credentials_file: Optional[Path] = None,
    netrc_file: Optional[Path] = None,
) -> Credential:
    """
    Resolve credentials for a URL or host in a single call.

    Args:
        target: URL or hostname to authenticate against.
        home: Home directory for the default store paths.
        git_credentials_file: Explicit git credentials file.
        netrc_file: Explicit netrc file.

    Returns:
        The matching Credential, or an empty Credential.
    """
    config = ResolverConfig(
        home=home,
        git_credentials_file=git_credentials_file,
        netrc_file=netrc_file,
    )
    return CredentialResolver(config).resolve(target)


__all__ = [
    "CredentialResolver",
    "default_git_credentials_path",
    "default_netrc_path",
    "find_auth_for_host",
]
