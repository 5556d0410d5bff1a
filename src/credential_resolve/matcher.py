# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Host matching over an ordered list of credentials."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Credential


def match_credential(target: str, credentials: Iterable[Credential]) -> Credential:
    """
    Return the first credential that applies to a target URL or host.

    A credential applies when its scope is empty (a netrc default entry)
    or when the scope occurs anywhere in ``target``. The scan stops at
    the first hit, so list order decides precedence: a default entry
    placed before a specific one wins over it.

    Args:
        target: URL or hostname the credential is needed for.
        credentials: Candidates in precedence order.

    Returns:
        The matching Credential, or an empty Credential if none applies.

    Examples:
        >>> creds = [Credential("foo.com", "bob", "x"), Credential("", "anon", "")]
        >>> match_credential("https://foo.com/repo", creds).username
        'bob'
        >>> match_credential("https://bar.com/repo", creds).username
        'anon'
    """
    for credential in credentials:
        if credential.scope == "" or credential.scope in target:
            return credential
    return Credential()
