# SPDX-FileCopyrightText: 2025 Linux Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Command-line interface for credential-resolve.

This module provides a Typer-based CLI for looking up the HTTP Basic
Authentication credentials that the local git credentials and netrc
stores hold for a URL, and for listing those stores in lookup order.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .matcher import match_credential
from .models import Credential, CredentialStore, ResolverConfig
from .resolver import CredentialResolver

# Exit codes
EXIT_SUCCESS = 0
EXIT_NO_CREDENTIALS = 1  # No store holds credentials for the target
EXIT_INVALID_INPUT = 3
EXIT_UNEXPECTED_ERROR = 4

MASKED_PASSWORD = "****"  # noqa: S105


class CustomTyper(typer.Typer):
    """Custom Typer class that shows version in help."""

    def __call__(self, *args, **kwargs):
        # Check if help is being requested
        if "--help" in sys.argv or "-h" in sys.argv:
            console = Console()
            console.print(f"🔑 credential-resolve version {__version__}")
        return super().__call__(*args, **kwargs)


# Initialize Typer app
app = CustomTyper(
    name="credential-resolve",
    help="Resolve HTTP Basic Authentication credentials from ~/.git-credentials and ~/.netrc",
    add_completion=False,
)

# Initialize Rich console
console = Console()

# Configure logging (will be suppressed for JSON output)
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger("credential_resolve")


def _suppress_logging_for_json():
    """Suppress all logging output for JSON mode."""
    logging.disable(logging.CRITICAL)
    logging.getLogger().setLevel(logging.CRITICAL)
    logger.setLevel(logging.CRITICAL)


def _build_resolver(
    home: Optional[Path],
    git_credentials_file: Optional[Path],
    netrc_file: Optional[Path],
) -> CredentialResolver:
    config = ResolverConfig(
        home=home,
        git_credentials_file=git_credentials_file,
        netrc_file=netrc_file,
    )
    return CredentialResolver(config)


def _credential_to_dict(credential: Credential, show_password: bool) -> dict:
    return {
        "scope": credential.scope,
        "username": credential.username,
        "password": credential.password if show_password else MASKED_PASSWORD,
        "default": credential.is_default,
    }


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"credential-resolve version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all output except errors",
    ),
):
    """
    Credential lookup for outbound HTTP(S) and git requests.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logging.getLogger().setLevel(logging.ERROR)
        logger.setLevel(logging.ERROR)


HOME_OPTION = typer.Option(
    None,
    "--home",
    help="Home directory to read .git-credentials and .netrc from (default: current user's home)",
    file_okay=False,
    dir_okay=True,
)
GIT_CREDENTIALS_OPTION = typer.Option(
    None,
    "--git-credentials-file",
    help="Path to a git credentials file (overrides <home>/.git-credentials)",
    dir_okay=False,
)
NETRC_OPTION = typer.Option(
    None,
    "--netrc-file",
    envvar="NETRC",
    help="Path to a netrc file (overrides <home>/.netrc, can also use NETRC env var)",
    dir_okay=False,
)
JSON_OPTION = typer.Option(
    False,
    "--json",
    "-j",
    help="Output results as JSON",
)


@app.command()
def lookup(
    target: str = typer.Argument(
        ...,
        help="URL or hostname to find credentials for (e.g., 'https://git.example.com/org/repo')",
    ),
    home: Optional[Path] = HOME_OPTION,
    git_credentials_file: Optional[Path] = GIT_CREDENTIALS_OPTION,
    netrc_file: Optional[Path] = NETRC_OPTION,
    json_output: bool = JSON_OPTION,
    show_password: bool = typer.Option(
        False,
        "--show-password",
        help="Print the password instead of masking it",
    ),
):
    """
    Look up the credentials that apply to a URL or host.

    ~/.git-credentials is consulted first, then ~/.netrc. The first
    entry whose host occurs in TARGET is used; a netrc 'default' entry
    matches any target.

    Examples:
        credential-resolve lookup https://git.example.com/org/repo

        credential-resolve lookup git.example.com --netrc-file ./netrc --json
    """
    try:
        if json_output:
            _suppress_logging_for_json()

        if not target.strip():
            error_msg = "TARGET must not be empty"
            if json_output:
                console.print_json(data={"success": False, "error": error_msg})
            else:
                console.print(f"[red]❌ {error_msg}[/red]")
            raise typer.Exit(EXIT_INVALID_INPUT)

        resolver = _build_resolver(home, git_credentials_file, netrc_file)
        logger.debug("Resolving credentials for %s using %r", target, resolver)
        credential = resolver.resolve(target)

        if json_output:
            result = {
                "target": target,
                "success": not credential.is_empty,
                "credential": None if credential.is_empty else _credential_to_dict(credential, show_password),
            }
            console.print_json(data=result)
        else:
            _display_lookup_result(target, credential, show_password)

        if credential.is_empty:
            raise typer.Exit(EXIT_NO_CREDENTIALS)

    except typer.Exit:
        raise
    except Exception as e:
        if json_output:
            console.print_json(data={"success": False, "error": str(e)})
        else:
            console.print(f"\n[red]❌ Unexpected error:[/red] {e}")
            if logger.isEnabledFor(logging.DEBUG):
                logger.exception("Unexpected error during credential lookup")
            else:
                logger.error(f"Unexpected error during credential lookup: {e}")
        raise typer.Exit(EXIT_UNEXPECTED_ERROR)


@app.command(name="list")
def list_credentials(
    home: Optional[Path] = HOME_OPTION,
    git_credentials_file: Optional[Path] = GIT_CREDENTIALS_OPTION,
    netrc_file: Optional[Path] = NETRC_OPTION,
    json_output: bool = JSON_OPTION,
    target: Optional[str] = typer.Option(
        None,
        "--target",
        "-t",
        help="Mark the entry that a lookup for this URL or host would use",
    ),
):
    """
    List every stored credential in lookup order.

    Passwords are always masked.

    Example:
        credential-resolve list --target https://git.example.com
    """
    try:
        if json_output:
            _suppress_logging_for_json()

        resolver = _build_resolver(home, git_credentials_file, netrc_file)
        entries = [
            (CredentialStore.GIT_CREDENTIALS, resolver.git_credentials_path, credential)
            for credential in resolver.load_git_credentials()
        ] + [
            (CredentialStore.NETRC, resolver.netrc_path, credential)
            for credential in resolver.load_netrc()
        ]

        selected: Optional[int] = None
        if target:
            match = match_credential(target, [credential for _, _, credential in entries])
            if not match.is_empty:
                # First entry equal to the match is the one the scan stopped at
                selected = next(i for i, (_, _, c) in enumerate(entries) if c == match)

        if json_output:
            result = {
                "target": target,
                "credentials": [
                    {
                        "store": store.value,
                        "path": str(path),
                        "selected": index == selected,
                        **_credential_to_dict(credential, show_password=False),
                    }
                    for index, (store, path, credential) in enumerate(entries)
                ],
            }
            console.print_json(data=result)
        else:
            _display_credential_table(entries, selected)

    except typer.Exit:
        raise
    except Exception as e:
        if json_output:
            console.print_json(data={"success": False, "error": str(e)})
        else:
            console.print(f"\n[red]❌ Unexpected error:[/red] {e}")
            if logger.isEnabledFor(logging.DEBUG):
                logger.exception("Unexpected error while listing credentials")
            else:
                logger.error(f"Unexpected error while listing credentials: {e}")
        raise typer.Exit(EXIT_UNEXPECTED_ERROR)


def _display_lookup_result(target: str, credential: Credential, show_password: bool):
    """Display a lookup result in a formatted panel."""
    if credential.is_empty:
        panel = Panel(
            f"[bold]❌ NO CREDENTIALS[/bold]\n\n  • Target: {target}",
            title="Credential Lookup",
            border_style="red",
            padding=(1, 2),
        )
        console.print(panel)
        return

    scope_display = "(default)" if credential.is_default else credential.scope
    password_display = credential.password if show_password else MASKED_PASSWORD
    content = "\n".join([
        "[bold]✅ FOUND[/bold]",
        "",
        f"  • Target: {target}",
        f"  • Scope: {scope_display}",
        f"  • Username: {credential.username or '(empty)'}",
        f"  • Password: {password_display}",
    ])
    panel = Panel(
        content,
        title="Credential Lookup",
        border_style="green",
        padding=(1, 2),
    )
    console.print(panel)


def _display_credential_table(entries, selected: Optional[int]):
    """Display stored credentials in a formatted table."""
    if not entries:
        console.print("[yellow]No credentials found in any store[/yellow]")
        return

    table = Table(title="Stored Credentials (lookup order)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Store", style="cyan", no_wrap=True)
    table.add_column("Scope", style="magenta")
    table.add_column("Username")
    table.add_column("Password")

    for index, (store, _path, credential) in enumerate(entries):
        marker = "→ " if index == selected else ""
        table.add_row(
            f"{marker}{index + 1}",
            store.value,
            "(default)" if credential.is_default else credential.scope,
            credential.username,
            MASKED_PASSWORD if credential.password else "",
        )

    console.print(table)
