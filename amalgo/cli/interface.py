# amalgo/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Dict, List

import click
from click_option_group import optgroup
import structlog

from amalgo import __version__ as app_version
from amalgo.config.settings import (
    AmalgoConfig, OutputFormat, DEFAULT_IGNORE_DIRS, DEFAULT_HEADING_LEVEL,
    DEFAULT_OUTPUT_FORMAT, STDOUT_MARKER,
)
from amalgo.config.loader import load_and_merge_configs, resolve_config_values
from amalgo.config.parsing import parse_extensions, parse_ignore_dirs, parse_ignore_patterns
from amalgo.core.output import write_to_stdout, write_to_file
from amalgo.core.pipeline import AmalgamationPipeline, AmalgamationResult
from amalgo.core.templating.renderer import RendererRegistry, build_renderer_registry
from amalgo.exceptions import AmalgoError, ConfigError
from amalgo.logging_setup import configure_logging

log = structlog.get_logger(__name__)

# cli parameter name -> AmalgoConfig attribute, for values that may also come from toml.
CLI_PARAM_TO_ATTR_MAP: Dict[str, str] = {
    "base_dir": "base_dir",
    "extensions": "extensions",
    "ignore_dirs": "ignore_dirs",
    "include_hidden": "include_hidden",
    "gitignore_path": "gitignore_path",
    "use_gitignore": "use_gitignore",
    "ignore_patterns": "ignore_patterns",
    "follow_symlinks": "follow_symlinks",
    "output_format_str": "output_format",
    "heading_level": "heading_level",
    "output_file": "output_file",
}


def _as_list(value: Any) -> List[str]:
    # toml values may be a single string or an array.
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def _coerce_output_format(value: Any, registry: RendererRegistry) -> OutputFormat:
    if isinstance(value, OutputFormat):
        return value
    parsed = OutputFormat.from_string(value)
    if parsed is None:
        raise ConfigError(f"unknown output format: {value}\nAvailable formats: {', '.join(registry.names())}")
    return parsed


def _coerce_heading_level(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"heading level must be an integer, got {value!r}") from None


def build_config(
    ctx: click.Context, cli_params: Dict[str, Any], toml_values: Dict[str, Any], registry: RendererRegistry
) -> AmalgoConfig:
    """
    Layers values: built-in defaults, then toml files/profile, then options
    given explicitly on the command line. Normalizes and validates the result.
    """
    effective: Dict[str, Any] = {}
    for param_name, attr in CLI_PARAM_TO_ATTR_MAP.items():
        effective[attr] = cli_params.get(param_name)
    effective.update(toml_values)
    for param_name, attr in CLI_PARAM_TO_ATTR_MAP.items():
        if ctx.get_parameter_source(param_name) == click.core.ParameterSource.COMMANDLINE:
            effective[attr] = cli_params[param_name]

    gitignore_value = effective.get("gitignore_path")
    output_value = effective.get("output_file")
    return AmalgoConfig(
        base_dir=Path(effective.get("base_dir") or "."),
        extensions=parse_extensions(_as_list(effective.get("extensions"))),
        ignore_dirs=parse_ignore_dirs(_as_list(effective.get("ignore_dirs"))),
        include_hidden=bool(effective.get("include_hidden")),
        gitignore_path=Path(gitignore_value) if gitignore_value else None,
        use_gitignore=bool(effective.get("use_gitignore")),
        ignore_patterns=parse_ignore_patterns(_as_list(effective.get("ignore_patterns"))),
        follow_symlinks=bool(effective.get("follow_symlinks")),
        output_format=_coerce_output_format(effective.get("output_format") or DEFAULT_OUTPUT_FORMAT, registry),
        heading_level=_coerce_heading_level(effective.get("heading_level", DEFAULT_HEADING_LEVEL)),
        output_file=Path(output_value) if output_value else None,
    )


def _emit_result(config: AmalgoConfig, result: AmalgamationResult):
    if config.writes_to_stdout:
        log.info("writing_final_output_to_stdout")
        write_to_stdout(result.content)
        return
    out_path = config.output_file or Path("concat" + result.renderer.file_extension)
    write_to_file(out_path, result.content)
    click.echo(f"Wrote {len(result.files)} file(s) to {out_path}", err=True)


def _run_amalgamation_flow(config: AmalgoConfig, registry: RendererRegistry):
    log.info("amalgamation_orchestration_started", base_dir=str(config.base_dir))
    result = AmalgamationPipeline(config, registry).run()

    if config.gitignore_path is None and result.gitignore_used is not None:
        click.echo(f"Using .gitignore: {result.gitignore_used}", err=True)

    if result.is_empty:
        click.echo("No files found matching criteria", err=True)
        return

    _emit_result(config, result)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Input Options", help="Where to scan.")
@optgroup.option("-d", "--dir", "base_dir", type=click.Path(file_okay=False, path_type=Path), default=Path("."), show_default=True, help="Root directory to scan.")
@optgroup.group("Filtering Options", help="Control which files and directories are included.")
@optgroup.option("-e", "--ext", "extensions", multiple=True, help="File extension(s) to include, e.g. .rs,.py or repeat -e. Required.")
@optgroup.option("-i", "--ignore-dirs", "ignore_dirs", multiple=True, default=DEFAULT_IGNORE_DIRS, show_default=True, help="Top-level directory names to skip.")
@optgroup.option("--include-hidden", "include_hidden", is_flag=True, default=False, help="Include hidden files and directories.")
@optgroup.option("-g", "--gitignore", "gitignore_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Path to a .gitignore-format file (default: auto-detect in the scan root).")
@optgroup.option("--use-gitignore/--no-use-gitignore", "use_gitignore", default=True, help="Automatically use .gitignore in the scan root if present.")
@optgroup.option("-p", "--ignore-pattern", "ignore_patterns", multiple=True, help="Extra gitignore-style pattern(s) to exclude, comma-separated or repeat -p.")
@optgroup.option("-L", "--follow-symlinks", "follow_symlinks", is_flag=True, default=False, help="Descend into symlinked directories.")
@optgroup.group("Output Options", help="Format and destination of the generated document.")
@optgroup.option("-f", "--format", "output_format_str", type=click.Choice([f.value for f in OutputFormat]), default=DEFAULT_OUTPUT_FORMAT.value, show_default=True, help="Output format.")
@optgroup.option("-o", "--out", "output_file", type=str, default=None, help=f"Output file path ('{STDOUT_MARKER}' for stdout, default: concat.<format extension>).")
@optgroup.option("-l", "--heading-level", "heading_level", type=int, default=DEFAULT_HEADING_LEVEL, show_default=True, help="Markdown heading level (1-6).")
@optgroup.group("Application Behavior", help="Configuration profiles and logging.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="amalgo", prog_name="amalgo", help="Show version and exit.")
@click.pass_context
def main_cli(ctx: click.Context, **cli_params: Any):
    """amalgo: concatenate files by extension into a single document.

    Recursively scans a directory, applies hidden-file, directory and
    .gitignore-style filters, and writes every matching file into one
    Markdown (or XML) file. Handy for passing a small project as context
    to an LLM or for documentation."""

    log_level = "warning"
    if cli_params.get("verbosity_level", 0) == 1: log_level = "info"
    elif cli_params.get("verbosity_level", 0) >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=cli_params.get("force_json_logs_cli", False))

    log.debug("cli_command_invoked", params=cli_params)

    try:
        registry = build_renderer_registry()
        raw_configs_from_toml_files = load_and_merge_configs()
        toml_values = resolve_config_values(raw_configs_from_toml_files, cli_params.get("active_config_profile_name"))
        final_config = build_config(ctx, cli_params, toml_values, registry)
        _run_amalgamation_flow(final_config, registry)
    except AmalgoError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except click.ClickException:
        raise
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)
