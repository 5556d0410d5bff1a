# SPDX-FileCopyrightText: 2025 Linux Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Resolve HTTP Basic Authentication credentials from local credential stores.

Credentials are looked up in ~/.git-credentials first and ~/.netrc
second; the first entry that applies to the target URL is returned.
"""

from .git_credentials import load_git_credentials, parse_git_credentials
from .matcher import match_credential
from .models import Credential, CredentialStore, ResolverConfig
from .netrc import NetrcParser, load_netrc, parse_netrc
from .resolver import CredentialResolver, find_auth_for_host

__version__ = "0.1.0"

__all__ = [
    "Credential",
    "CredentialResolver",
    "CredentialStore",
    "NetrcParser",
    "ResolverConfig",
    "__version__",
    "find_auth_for_host",
    "load_git_credentials",
    "load_netrc",
    "match_credential",
    "parse_git_credentials",
    "parse_netrc",
]
