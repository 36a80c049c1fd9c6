# recentfiles/cli/interface.py
import sys
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import Any, Dict

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
import structlog

from recentfiles import __version__ as app_version
from recentfiles.config.loader import load_and_merge_configs, resolve_config_options
from recentfiles.config.settings import (
    SearchConfig, OutputFormat, DEFAULT_LIMIT, DEFAULT_OUTPUT_FORMAT,
)
from recentfiles.core.output import format_result, render_table, write_to_file, write_to_stdout
from recentfiles.core.search import search_with_config
from recentfiles.core.tools import discover_external_tools
from recentfiles.exceptions import OutputError, RecentFilesError
from recentfiles.logging_setup import configure_logging

log = structlog.get_logger(__name__)

# maps command-line parameter names to SearchConfig attributes.
CLI_PARAM_TO_SEARCHCONFIG_ATTR: Dict[str, str] = {
    "limit": "limit",
    "max_workers": "max_workers",
    "follow_symlinks": "follow_symlinks",
    "output_format_str": "output_format",
    "relative_paths": "relative_paths",
    "output_file": "output_file",
}

def _build_search_config(ctx: click.Context, pattern: str, root: Path, cli_params: Dict[str, Any]) -> SearchConfig:
    # layers dataclass defaults, config files, the chosen profile and finally explicit flags.
    raw_configs_from_toml_files = load_and_merge_configs()
    effective_options = resolve_config_options(raw_configs_from_toml_files, cli_params.get("active_config_profile_name"))

    for param_name, attr in CLI_PARAM_TO_SEARCHCONFIG_ATTR.items():
        if ctx.get_parameter_source(param_name) == click.core.ParameterSource.COMMANDLINE:
            effective_options[attr] = cli_params[param_name]

    valid_fields = {f.name for f in dataclass_fields(SearchConfig) if f.init}
    final_kwargs = {k: v for k, v in effective_options.items() if k in valid_fields}
    final_kwargs["pattern"] = pattern
    final_kwargs["root_path"] = root
    log.debug("effective_search_config", **{k: str(v) for k, v in final_kwargs.items()})
    return SearchConfig(**final_kwargs)

def _emit_result(config: SearchConfig, result) -> None:
    if config.output_format == OutputFormat.TABLE:
        if config.output_file:
            try:
                with config.output_file.open("w", encoding="utf-8") as f_obj:
                    RichConsole(file=f_obj, width=120).print(render_table(result, config))
            except OSError as e:
                raise OutputError(f"failed to write to file '{config.output_file}': {e}")
        else:
            RichConsole().print(render_table(result, config))
    else:
        output_to_write = format_result(result, config)
        if config.output_file:
            write_to_file(config.output_file, output_to_write)
        else:
            write_to_stdout(output_to_write)

    if config.output_file:
        click.echo(f"Info: Output written to: {config.output_file}", err=True)
    if result.truncated and config.output_format != OutputFormat.JSON:
        click.secho(
            f"Results truncated to {config.limit} most recent matches. Use a more specific pattern or a larger --limit.",
            fg="yellow",
            err=True,
        )

def _run_search_flow(config: SearchConfig):
    log.info("search_orchestration_started", pattern=config.pattern, root=str(config.root_path))
    stderr_console = RichConsole(file=sys.stderr)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=stderr_console,
        transient=True,
        disable=not sys.stderr.isatty(),
    ) as progress:
        progress.add_task(f"searching {config.root_path} for {config.pattern}...", total=None)
        result = search_with_config(config)
    _emit_result(config, result)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@click.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="recentfiles", prog_name="recentfiles", help="Show version and exit.")
def main_cli_group(verbosity_level: int, force_json_logs_cli: bool):
    """recentfiles: find files matching a glob, most recently modified first,
    skipping hidden, build and .gitignore'd paths."""
    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs_cli)


@main_cli_group.command("search")
@click.argument("pattern")
@click.argument("root", required=False, default=".", type=click.Path(path_type=Path))
@optgroup.group("Search Options", help="Control how the tree is walked.")
@optgroup.option("-n", "--limit", "limit", type=int, default=DEFAULT_LIMIT, show_default=True, help="Maximum number of results; 0 for unlimited.")
@optgroup.option("-w", "--workers", "max_workers", type=click.IntRange(min=1), default=None, help="Number of walker threads. Default: max(4, CPU count).")
@optgroup.option("--follow-symlinks/--no-follow-symlinks", "follow_symlinks", default=True, help="Descend into symlinked directories. Default: on.")
@optgroup.group("Output Options", help="Control how results are printed.")
@optgroup.option("-F", "--output-format", "output_format_str", type=click.Choice([f.value for f in OutputFormat]), default=DEFAULT_OUTPUT_FORMAT.value, help=f"Output format. Default: {DEFAULT_OUTPUT_FORMAT.value}.")
@optgroup.option("--relative", "relative_paths", is_flag=True, default=False, help="Print paths relative to ROOT.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the output to.")
@optgroup.group("Application Behavior", help="Configuration profiles.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@click.pass_context
def search_command(ctx: click.Context, pattern: str, root: Path, **cli_params: Any):
    """Search ROOT (default: current directory) for files matching PATTERN.

    PATTERN is matched against paths relative to ROOT; use '**/' to match at
    any depth, e.g. '**/*.py'.
    """
    log.debug("cli_command_invoked", command="search", pattern=pattern, root=str(root), params=cli_params)
    try:
        config = _build_search_config(ctx, pattern, root, cli_params)
        _run_search_flow(config)
    except RecentFilesError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@main_cli_group.command("tools")
def tools_command():
    """Report which optional external helper tools are on PATH."""
    statuses = discover_external_tools()
    table = Table(title="External tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Status")
    table.add_column("Path", overflow="fold")
    for status in statuses.values():
        state = "[green]available[/green]" if status.available else "[yellow]not found[/yellow]"
        table.add_row(status.name, state, status.path or "-")
    RichConsole().print(table)
