# SPDX-FileCopyrightText: 2025 Linux Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Data models for credential resolution.

This module defines:
- The immutable Credential record produced by both store parsers
- The store labels used in logging and listings
- The pydantic configuration model carrying injected store paths
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class CredentialStore(Enum):
    """Enum naming the local store a credential was read from."""

    GIT_CREDENTIALS = "git-credentials"
    NETRC = "netrc"


@dataclass(frozen=True)
class Credential:
    """A username/password pair scoped to a host.

    An empty ``scope`` marks the fallback record that applies to any
    target. The all-empty instance is the "no credential" value returned
    when nothing matches.
    """

    scope: str = ""
    username: str = ""
    password: str = ""

    def __repr__(self) -> str:
        """Mask password in repr for security."""
        return (
            f"Credential(scope={self.scope!r}, "
            f"username={self.username!r}, password='****')"
        )

    @property
    def is_default(self) -> bool:
        """Return True if this record applies to every target."""
        return self.scope == ""

    @property
    def is_empty(self) -> bool:
        """Return True for the zero value meaning no credential was found."""
        return not (self.scope or self.username or self.password)

    def as_basic_auth(self) -> tuple[str, str]:
        """Return the (username, password) pair for HTTP Basic Authentication."""
        return self.username, self.password


class ResolverConfig(BaseModel):
    """Configuration for locating the credential stores."""

    home: Optional[Path] = Field(
        None, description="Home directory used for default store paths (defaults to the user's home)"
    )
    git_credentials_file: Optional[Path] = Field(
        None, description="Explicit path to a git credentials file"
    )
    netrc_file: Optional[Path] = Field(None, description="Explicit path to a netrc file")
    check_permissions: bool = Field(
        True, description="Warn when a store file is readable by group or others"
    )
