"""CLI entry point for codex-session-bridge.

Invoked as::

    codex-session-bridge [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m codex_session_bridge.cli.main

Commands
--------
- version  — Show version information
- exec     — Run codex, optionally continuing a session
- session  — Session management command group

Session sub-commands
---------------------
- session new     — Create a session and print its ID
- session list    — List stored sessions
- session show    — Show one session
- session reset   — Forget a session's codex conversation
- session delete  — Remove a session
"""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from codex_session_bridge import __version__
from codex_session_bridge.config import BridgeConfig
from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.errors import BridgeError, ConfigError
from codex_session_bridge.execution.runner import CommandRunner, SubprocessRunner
from codex_session_bridge.session.serializer import SessionSerializer
from codex_session_bridge.session.store import SessionStore
from codex_session_bridge.storage.async_base import AsyncStorageBackend

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def _make_backend(config: BridgeConfig) -> AsyncStorageBackend:
    """Instantiate the storage backend named by ``config.storage``."""
    from codex_session_bridge.storage.async_memory import AsyncInMemoryBackend
    from codex_session_bridge.storage.async_sqlite import AsyncSQLiteBackend

    if config.storage == "memory":
        return AsyncInMemoryBackend()
    return AsyncSQLiteBackend(db_path=config.db_path)


def _make_runner(config: BridgeConfig) -> CommandRunner:
    return SubprocessRunner(cwd=config.working_directory, timeout=config.timeout_seconds)


def _make_dispatcher(config: BridgeConfig, runner: CommandRunner | None = None) -> CommandDispatcher:
    return CommandDispatcher(
        SessionStore(_make_backend(config)),
        runner or _make_runner(config),
        command=config.command,
        default_model=config.default_model,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="codex-session-bridge")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML configuration file.",
)
@click.option(
    "--storage",
    default=None,
    type=click.Choice(["memory", "sqlite"], case_sensitive=False),
    help="Session storage backend (default: sqlite).",
)
@click.option("--db-path", default=None, help="Path to SQLite database (sqlite backend).")
@click.option("-v", "--verbose", is_flag=True, help="Log dispatcher activity to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    storage: str | None,
    db_path: str | None,
    verbose: bool,
) -> None:
    """Drive the codex CLI with multi-turn session tracking."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )

    try:
        config = BridgeConfig.load(config_path)
    except ConfigError as exc:
        _fail(str(exc))
    if storage:
        config.storage = storage.lower()  # type: ignore[assignment]
    if db_path:
        config.db_path = Path(db_path)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj.setdefault("runner", None)


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    console.print(f"[bold]codex-session-bridge[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# exec
# ---------------------------------------------------------------------------


@cli.command(name="exec")
@click.argument("prompt")
@click.option("--session-id", default=None, help="Continue this session.")
@click.option("--model", default=None, help="Model identifier passed to codex.")
@click.option("--reset", is_flag=True, help="Start a new conversation in the session.")
@click.option(
    "--arg",
    "extra_args",
    multiple=True,
    help="Extra argument forwarded to codex verbatim (repeatable).",
)
@click.option("--show-stderr", is_flag=True, help="Also print codex's stderr.")
@click.pass_context
def exec_command(
    ctx: click.Context,
    prompt: str,
    session_id: str | None,
    model: str | None,
    reset: bool,
    extra_args: tuple[str, ...],
    show_stderr: bool,
) -> None:
    """Run codex with PROMPT and print its output."""
    dispatcher = _make_dispatcher(ctx.obj["config"], ctx.obj["runner"])
    request = {
        "prompt": prompt,
        "model": model,
        "session_id": session_id,
        "additional_args": list(extra_args),
        "reset_session": reset,
    }
    try:
        result = asyncio.run(dispatcher.execute(request))
    except BridgeError as exc:
        _fail(str(exc))

    click.echo(result.stdout, nl=not result.stdout.endswith("\n"))
    if show_stderr and result.stderr:
        err_console.print(result.stderr, style="dim", markup=False, highlight=False)


# ---------------------------------------------------------------------------
# session command group
# ---------------------------------------------------------------------------


@cli.group(name="session")
@click.pass_context
def session_group(ctx: click.Context) -> None:
    """Session management commands."""
    ctx.obj["store"] = SessionStore(_make_backend(ctx.obj["config"]))


@session_group.command(name="new")
@click.pass_context
def session_new(ctx: click.Context) -> None:
    """Create a session and print its ID."""
    store: SessionStore = ctx.obj["store"]
    session_id = asyncio.run(store.create_session())
    click.echo(session_id)


@session_group.command(name="list")
@click.option("--limit", default=50, show_default=True, help="Maximum sessions to show.")
@click.pass_context
def session_list(ctx: click.Context, limit: int) -> None:
    """List stored sessions, most recently used first."""
    store: SessionStore = ctx.obj["store"]
    try:
        sessions = asyncio.run(store.list_sessions())
    except BridgeError as exc:
        _fail(str(exc))

    if not sessions:
        console.print("[yellow]No sessions found.[/yellow]")
        return

    table = Table(title="Sessions", show_lines=False)
    table.add_column("Session ID", style="cyan", no_wrap=True)
    table.add_column("Conversation ID", style="green")
    table.add_column("Turns", justify="right")
    table.add_column("Updated")

    for session in sessions[:limit]:
        table.add_row(
            session.session_id,
            session.conversation_id or "-",
            str(session.turn_count),
            session.updated_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)
    console.print(f"\n[dim]Showing {min(limit, len(sessions))} of {len(sessions)} sessions.[/dim]")


@session_group.command(name="show")
@click.argument("session_id")
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    help="Output format.",
)
@click.pass_context
def session_show(ctx: click.Context, session_id: str, output_format: str) -> None:
    """Show the session SESSION_ID."""
    store: SessionStore = ctx.obj["store"]
    try:
        session = asyncio.run(store.get_session(session_id))
    except BridgeError as exc:
        _fail(str(exc))
    if session is None:
        console.print(f"[red]Session not found:[/red] {session_id}")
        sys.exit(1)

    output_format = output_format.lower()
    if output_format != "table":
        click.echo(SessionSerializer().export(session, output_format).rstrip("\n"))  # type: ignore[arg-type]
        return

    table = Table(title=f"Session {session.session_id[:8]}", show_lines=True)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("session_id", session.session_id)
    table.add_row("conversation_id", session.conversation_id or "-")
    table.add_row("mode", "resume" if session.is_resumable else "new")
    table.add_row("turn_count", str(session.turn_count))
    table.add_row("created_at", session.created_at.isoformat())
    table.add_row("updated_at", session.updated_at.isoformat())
    console.print(table)


@session_group.command(name="reset")
@click.argument("session_id")
@click.pass_context
def session_reset(ctx: click.Context, session_id: str) -> None:
    """Forget the codex conversation bound to SESSION_ID."""
    store: SessionStore = ctx.obj["store"]
    try:
        asyncio.run(store.reset_session(session_id))
    except BridgeError as exc:
        _fail(str(exc))
    console.print(f"[green]Session reset:[/green] {session_id}")


@session_group.command(name="delete")
@click.argument("session_id")
@click.pass_context
def session_delete(ctx: click.Context, session_id: str) -> None:
    """Remove SESSION_ID from storage."""
    store: SessionStore = ctx.obj["store"]
    if not asyncio.run(store.delete_session(session_id)):
        console.print(f"[red]Session not found:[/red] {session_id}")
        sys.exit(1)
    console.print(f"[green]Session deleted:[/green] {session_id}")


if __name__ == "__main__":
    cli()
