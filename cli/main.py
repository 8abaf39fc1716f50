"""DepLock CLI -- Click-based command-line interface.

Usage:
    deplock verify <graph_file> [--lock-dir <dir>] [--configuration <name>]
    deplock write <graph_file> [--lock-dir <dir>] [--configuration <name>]
    deplock show <configuration>
    deplock delete <configuration>
    deplock list
"""

from __future__ import annotations

import sys
from dataclasses import replace

import click

from core.errors import DepLockError, LockOutOfDateError
from core.loader import load_graph_file
from core.lock_store import DEFAULT_LOCK_DIR, FileLockStore
from core.observability import setup_logging
from engines.traversal import attach_lock_state, run_locking

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"))
    sys.exit(1)


def _load(graph_file: str, store: FileLockStore | None = None, configuration: str | None = None):
    """Load a graph document, attaching the stored lock state when *store* is given.

    *configuration* overrides the name given in the document.
    """
    try:
        graph = load_graph_file(graph_file)
        if configuration:
            graph = replace(graph, root=replace(graph.root, configuration=configuration))
        return attach_lock_state(graph, store) if store is not None else graph
    except DepLockError as exc:
        _fail(str(exc))


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(version="1.0.0", prog_name="deplock")
@click.option(
    "--lock-dir",
    default=str(DEFAULT_LOCK_DIR),
    envvar="DEPLOCK_LOCK_DIR",
    show_default=True,
    help="Directory holding <configuration>.lockfile files.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--log-format", type=click.Choice(["text", "json"]), default="text", help="Log output format.")
@click.pass_context
def cli(ctx: click.Context, lock_dir: str, verbose: bool, log_format: str):
    """DepLock -- verify resolved dependency graphs against lock files."""
    if verbose:
        setup_logging("DEBUG", log_format)
    ctx.obj = FileLockStore(lock_dir)


# ---------------------------------------------------------------------------
# verify
# ---------------------------------------------------------------------------

@cli.command("verify")
@click.argument("graph_file", type=click.Path())
@click.option("--configuration", "-c", default=None, help="Configuration name (overrides the graph document).")
@click.pass_obj
def verify(store: FileLockStore, graph_file: str, configuration: str | None):
    """Check a resolved graph against its configuration's lock file."""
    graph = _load(graph_file, store, configuration)

    try:
        outcome = run_locking(graph)
    except LockOutOfDateError as exc:
        click.echo(click.style(
            f"  Dependency lock state for configuration '{exc.configuration}' is out of date:",
            fg="red", bold=True,
        ))
        for error in exc.errors:
            click.echo(f"    {click.style('-', fg='red')} {error}")
        sys.exit(1)

    if not outcome.locked:
        click.echo(click.style(
            f"  Configuration '{outcome.configuration}' is not locked "
            f"({len(outcome.modules)} modules resolved).",
            fg="yellow",
        ))
        return

    click.echo(click.style(
        f"  Lock state matches for '{outcome.configuration}' "
        f"({len(outcome.modules)} modules).",
        fg="green",
    ))


# ---------------------------------------------------------------------------
# write
# ---------------------------------------------------------------------------

@cli.command("write")
@click.argument("graph_file", type=click.Path())
@click.option("--configuration", "-c", default=None, help="Configuration name (overrides the graph document).")
@click.pass_obj
def write(store: FileLockStore, graph_file: str, configuration: str | None):
    """Write (or rewrite) the lock file from a resolved graph."""
    graph = _load(graph_file, configuration=configuration)
    try:
        outcome = run_locking(graph, persistor=store, write_locks=True)
    except DepLockError as exc:
        _fail(str(exc))

    path = store.lock_file(outcome.configuration)
    click.echo(click.style(
        f"  Locked {len(set(outcome.modules))} modules for '{outcome.configuration}'",
        fg="green",
    ) + f" -> {path}")


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------

@cli.command("show")
@click.argument("configuration")
@click.pass_obj
def show(store: FileLockStore, configuration: str):
    """Print the locked modules of a configuration."""
    try:
        constraints = store.read_constraints(configuration)
    except DepLockError as exc:
        _fail(str(exc))

    if constraints is None:
        click.echo(click.style(f"  Configuration '{configuration}' is not locked.", fg="yellow"))
        return

    click.echo()
    click.echo(click.style(f"  {configuration}", bold=True) + f"  ({len(constraints)} locked)")
    click.echo(click.style(f"  {'-' * 56}", dim=True))
    for c in constraints:
        click.echo(f"  {c.key}")
    click.echo()


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------

@cli.command("delete")
@click.argument("configuration")
@click.pass_obj
def delete(store: FileLockStore, configuration: str):
    """Remove the lock file of a configuration."""
    try:
        removed = store.delete_lock(configuration)
    except DepLockError as exc:
        _fail(str(exc))

    if not removed:
        click.echo(click.style(f"  Configuration '{configuration}' is not locked.", fg="yellow"))
        return
    click.echo(click.style(f"  Removed lock for '{configuration}'", fg="green"))


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------

@cli.command("list")
@click.pass_obj
def list_locks(store: FileLockStore):
    """List configurations that have a lock file."""
    configurations = store.list_configurations()
    if not configurations:
        click.echo(click.style(f"  No lock files in {store.lock_dir}", fg="yellow"))
        return
    for name in configurations:
        click.echo(f"  {name}")


def main():
    cli()


if __name__ == "__main__":
    main()
