"""CLI entry point for clusterkit.

Invoked as::

    clusterkit [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m clusterkit.cli.main

Commands
--------
config set      Validate and persist a setting, then run its callbacks
config get      Print a persisted setting
config unset    Remove a persisted setting
config view     Dump the persisted configuration as JSON or YAML
addons list     List add-ons and whether they are enabled
addons enable   Enable an add-on on the running cluster
addons disable  Disable an add-on on the running cluster
backends        List registered backends
version         Show version information
"""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from clusterkit.addons import (
    AddonCatalog,
    AddonError,
    AddonToggler,
    FatalToggleError,
    SecretOperationErrors,
    default_catalog,
    default_handlers,
)
from clusterkit.config import RuntimeFlags, SecretPolicy
from clusterkit.machine import BackendNotFoundError, BackendRegistry, Prompter
from clusterkit.settings import (
    ConfigFileError,
    SettingApplier,
    SettingsError,
    build_default_registry,
    config_path,
    load_config,
    save_config,
)
from clusterkit.settings.store import HOME_ENV_VAR, ConfigStore, default_home

console = Console()
err_console = Console(stderr=True)


@dataclass
class AppContext:
    """State shared by every command of one invocation.

    Callers embedding the CLI (and tests) may pass a pre-built instance
    as ``obj`` to supply their own backends, prompter or catalog.
    """

    backends: BackendRegistry | None = None
    prompter: Prompter | None = None
    catalog: AddonCatalog = field(default_factory=default_catalog)
    home: Path | None = None
    flags: RuntimeFlags = field(default_factory=RuntimeFlags)

    @property
    def config_file(self) -> Path:
        return config_path(self.home)


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("clusterkit")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False, show_time=False))


def _load_or_exit(state: AppContext) -> ConfigStore:
    try:
        return load_config(state.config_file)
    except ConfigFileError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)


def _require_backends(state: AppContext) -> BackendRegistry:
    if state.backends is None:
        raise click.ClickException("No backend registry configured")
    return state.backends


def _build_toggler(state: AppContext, store: ConfigStore) -> AddonToggler:
    if state.prompter is None:
        raise click.ClickException("No prompter configured")
    backend = _require_backends(state).create(state.flags.backend)
    return AddonToggler(
        catalog=state.catalog,
        handlers=default_handlers(),
        client_factory=backend.client_factory(),
        secret_manager=backend.secret_manager(),
        transport=backend.transport(),
        prompter=state.prompter,
        flags=state.flags.with_store(store),
    )


def _build_applier(state: AppContext, store: ConfigStore) -> SettingApplier:
    def toggle_addon(name: str, raw: str) -> None:
        _build_toggler(state, store).toggle(name, raw)

    return SettingApplier(build_default_registry(state.catalog, addon_callback=toggle_addon))


def _set_value(state: AppContext, name: str, value: str) -> None:
    """Apply, persist, then run callbacks; exit non-zero on any failure."""
    store = _load_or_exit(state)
    applier = _build_applier(state, store)

    try:
        applier.apply(store, name, value)
    except SettingsError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    save_config(state.config_file, store)

    try:
        applier.run_callbacks(name, value)
    except SecretOperationErrors as exc:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(str(exc))}")
    except FatalToggleError as exc:
        err_console.print(f"[red]Fatal:[/red] {escape(str(exc))}")
        sys.exit(1)
    except (AddonError, BackendNotFoundError, SettingsError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="clusterkit")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.option(
    "--home",
    envvar=HOME_ENV_VAR,
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding clusterkit state (default: ~/.clusterkit)",
)
@click.option(
    "--backend",
    envvar="CLUSTERKIT_BACKEND",
    default="default",
    show_default=True,
    help="Registered backend supplying the cluster client, secrets and transport",
)
@click.option(
    "--use-vendored-driver",
    envvar="CLUSTERKIT_USE_VENDORED_DRIVER",
    is_flag=True,
    default=False,
    help="Use the in-process driver instead of the RPC driver plugin",
)
@click.option(
    "--secret-policy",
    envvar="CLUSTERKIT_SECRET_POLICY",
    type=click.Choice([p.value for p in SecretPolicy], case_sensitive=False),
    default=SecretPolicy.AGGREGATE.value,
    show_default=True,
    help="How registry credential secret failures are handled",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    home: str | None,
    backend: str,
    use_vendored_driver: bool,
    secret_policy: str,
) -> None:
    """Manage settings and add-ons of a local single-node cluster."""
    _configure_logging(verbose)
    state = ctx.ensure_object(AppContext)
    if state.backends is None:
        state.backends = BackendRegistry()
        state.backends.load_entrypoints()
    if state.prompter is None:
        from clusterkit.cli.prompt import ClickPrompter

        state.prompter = ClickPrompter()
    state.home = Path(home) if home else default_home()
    state.flags = RuntimeFlags(
        use_vendored_driver=use_vendored_driver,
        backend=backend,
        secret_policy=SecretPolicy(secret_policy.lower()),
    )


# ---------------------------------------------------------------------------
# version / backends commands
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from clusterkit import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]clusterkit[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


@cli.command(name="backends")
@click.pass_obj
def backends_command(state: AppContext) -> None:
    """List registered backends."""
    names = _require_backends(state).list_backends()
    console.print("[bold]Registered backends:[/bold]")
    if not names:
        console.print("  (No backends registered. Install a backend package to see entries here.)")
    for name in names:
        marker = " [green](selected)[/green]" if name == state.flags.backend else ""
        console.print(f"  - {name}{marker}")


# ---------------------------------------------------------------------------
# config commands
# ---------------------------------------------------------------------------


@cli.group(name="config")
def config_group() -> None:
    """Modify persistent configuration values."""


@config_group.command(name="set")
@click.argument("name")
@click.argument("value")
@click.pass_obj
def config_set_command(state: AppContext, name: str, value: str) -> None:
    """Set NAME to VALUE.

    Every validator for NAME runs and all failures are reported together.
    """
    _set_value(state, name, value)


@config_group.command(name="get")
@click.argument("name")
@click.pass_obj
def config_get_command(state: AppContext, name: str) -> None:
    """Print the persisted value of NAME."""
    store = _load_or_exit(state)
    if name not in store:
        err_console.print(f"[red]Error:[/red] specified key could not be found in config: {name}")
        sys.exit(1)
    click.echo(json.dumps(store[name]) if isinstance(store[name], bool) else store[name])


@config_group.command(name="unset")
@click.argument("name")
@click.pass_obj
def config_unset_command(state: AppContext, name: str) -> None:
    """Remove NAME from the persisted configuration."""
    store = _load_or_exit(state)
    applier = SettingApplier(build_default_registry(state.catalog))
    try:
        applier.unset(store, name)
    except SettingsError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)
    save_config(state.config_file, store)


@config_group.command(name="view")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="yaml",
    help="Output format",
)
@click.pass_obj
def config_view_command(state: AppContext, output_format: str) -> None:
    """Dump the persisted configuration."""
    store = _load_or_exit(state)
    if output_format.lower() == "json":
        text = json.dumps(store, indent=2, sort_keys=True)
    else:
        text = yaml.safe_dump(store, default_flow_style=False, sort_keys=True) if store else "{}"
    click.echo(text.rstrip("\n"))


# ---------------------------------------------------------------------------
# addons commands
# ---------------------------------------------------------------------------


@cli.group(name="addons")
def addons_group() -> None:
    """Enable or disable cluster add-ons."""


@addons_group.command(name="list")
@click.pass_obj
def addons_list_command(state: AppContext) -> None:
    """List every add-on and whether it is enabled."""
    store = _load_or_exit(state)
    table = Table(title="Addons")
    table.add_column("Name", style="bold")
    table.add_column("Status")
    for addon in state.catalog:
        value = store.get(addon.name, addon.enabled_by_default)
        status = "[green]enabled[/green]" if value is True else "[dim]disabled[/dim]"
        table.add_row(addon.name, status)
    console.print(table)


def _check_addon_or_exit(state: AppContext, name: str) -> None:
    if name not in state.catalog:
        err_console.print(
            f"[red]Error:[/red] {name} is not a valid addon "
            f"(available: {', '.join(state.catalog.names())})"
        )
        sys.exit(1)


@addons_group.command(name="enable")
@click.argument("name")
@click.pass_obj
def addons_enable_command(state: AppContext, name: str) -> None:
    """Enable add-on NAME on the running cluster."""
    _check_addon_or_exit(state, name)
    _set_value(state, name, "true")
    console.print(f"[green]{name} was successfully enabled[/green]")


@addons_group.command(name="disable")
@click.argument("name")
@click.pass_obj
def addons_disable_command(state: AppContext, name: str) -> None:
    """Disable add-on NAME on the running cluster."""
    _check_addon_or_exit(state, name)
    _set_value(state, name, "false")
    console.print(f"[green]{name} was successfully disabled[/green]")


if __name__ == "__main__":
    cli()
