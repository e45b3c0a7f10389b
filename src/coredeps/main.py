import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel

from .catalog import DependencyCatalog, Scope
from .cli_config import (
    ComprehensiveConfig,
    coerce_config_value,
    create_sample_config,
    get_config,
    load_config_file,
    validate_config_values,
)
from .error_handling import ExportError, setup_error_handling
from .exporter import CatalogExporter, ExportFormat
from .reporting import CatalogReporter
from .structured_logging import configure_logging, log_catalog_built

__version__ = "1.0.0"

console = Console()


CATALOG_OPTIONS = (
    click.option(
        "--platform-version",
        "-p",
        help="Framework version the platform artifacts are pinned to",
    ),
    click.option(
        "--target-platform-version",
        "-t",
        help="Target servlet specification version (default: 3.0)",
    ),
    click.option(
        "--legacy-compatible/--no-legacy-compatible",
        default=None,
        help="Add the schema-binding API for legacy runtimes",
    ),
    click.option(
        "--framework-project/--plain-project",
        default=None,
        help="Choose the framework or plain-project test dependencies",
    ),
)


def catalog_options(func):
    """Options shared by every command that builds a catalog."""
    for option in reversed(CATALOG_OPTIONS):
        func = option(func)
    return func


def build_catalog(
    config: ComprehensiveConfig,
    platform_version: Optional[str],
    target_platform_version: Optional[str],
    legacy_compatible: Optional[bool],
    framework_project: Optional[bool],
) -> DependencyCatalog:
    """Build a catalog from CLI values, falling back to configuration."""
    settings = config.catalog
    resolved_platform = platform_version or settings.platform_version
    if not resolved_platform:
        raise click.UsageError(
            "A platform version is required: pass --platform-version, set "
            "COREDEPS_PLATFORM_VERSION, or add catalog.platform_version to a config file"
        )

    catalog = DependencyCatalog(
        platform_version=resolved_platform,
        target_platform_version=target_platform_version or settings.target_platform_version,
        legacy_compatible=(
            settings.legacy_compatible if legacy_compatible is None else legacy_compatible
        ),
        framework_project=(
            settings.framework_project if framework_project is None else framework_project
        ),
        scripting_runtime_version=settings.scripting_runtime_version,
    )
    log_catalog_built(catalog)
    return catalog


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version information")
@click.option("--verbose", "-v", is_flag=True, help="Emit structured log events")
@click.pass_context
def cli(ctx, version, verbose):
    """
    📦 coredeps: core dependency catalog for framework projects

    Lists the build, doc, provided, compile, runtime and test dependencies
    a project build needs, and exports them for other build tools.
    """
    if version:
        console.print(f"coredeps version {__version__}", style="bold blue")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        return

    current_config = get_config()
    log_level = current_config.logging.log_level
    if verbose or current_config.output.verbose:
        log_level = "INFO"
    configure_logging(
        log_level, current_config.logging.enable_json, current_config.logging.log_format
    )
    setup_error_handling(getattr(logging, str(log_level).upper(), logging.WARNING))


@cli.command()
@catalog_options
@click.option(
    "--scope",
    "-s",
    "scopes",
    multiple=True,
    type=click.Choice([scope.value for scope in Scope], case_sensitive=False),
    help="Only show the given scope (repeatable)",
)
def show(
    platform_version: Optional[str],
    target_platform_version: Optional[str],
    legacy_compatible: Optional[bool],
    framework_project: Optional[bool],
    scopes: Tuple[str, ...],
):
    """Show the catalog as tables, one per scope."""
    catalog = build_catalog(
        get_config(),
        platform_version,
        target_platform_version,
        legacy_compatible,
        framework_project,
    )
    selected = [Scope.parse(scope) for scope in scopes] or None
    CatalogReporter(console).print_catalog(catalog, selected)


@cli.command()
@catalog_options
def patterns(
    platform_version: Optional[str],
    target_platform_version: Optional[str],
    legacy_compatible: Optional[bool],
    framework_project: Optional[bool],
):
    """Print the build-scope dependency patterns, one per line."""
    catalog = build_catalog(
        get_config(),
        platform_version,
        target_platform_version,
        legacy_compatible,
        framework_project,
    )
    for pattern in catalog.build_dependency_patterns:
        click.echo(pattern)


@cli.command()
@catalog_options
@click.option(
    "--format",
    "-f",
    "export_format",
    type=click.Choice([fmt.value for fmt in ExportFormat], case_sensitive=False),
    default=None,
    help="Export format (default: configured output format, else json)",
)
@click.option(
    "--output-file",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write to this file instead of stdout",
)
def export(
    platform_version: Optional[str],
    target_platform_version: Optional[str],
    legacy_compatible: Optional[bool],
    framework_project: Optional[bool],
    export_format: Optional[str],
    output_file: Optional[str],
):
    """Export the catalog as JSON, TOML or a Maven POM fragment."""
    current_config = get_config()
    catalog = build_catalog(
        current_config,
        platform_version,
        target_platform_version,
        legacy_compatible,
        framework_project,
    )

    if export_format is None:
        configured = current_config.output.output_format
        export_format = configured if configured in {f.value for f in ExportFormat} else "json"
    output_file = output_file or current_config.output.output_file

    try:
        content = CatalogExporter().export(catalog, export_format, output_file)
    except ExportError as e:
        raise click.ClickException(str(e))

    if output_file:
        if not current_config.output.quiet:
            console.print(f"✅ Catalog saved to {output_file}", style="green")
    else:
        click.echo(content, nl=False)


@cli.command()
def info():
    """Show information about scopes, configuration and usage examples."""
    info_text = """
[bold blue]📋 Scopes:[/bold blue]

• [green]build[/green] - Artifacts the build tool itself runs with
• [green]doc[/green] - Documentation generator
• [green]provided[/green] - Supplied by the servlet container at runtime
• [green]compile[/green] - Scripting runtime and framework plugins
• [green]runtime[/green] - Embedded database, logging and resources
• [green]test[/green] - Testing plugin, spec framework and unit-test library

[bold blue]🔀 Variants:[/bold blue]

• [yellow]Target servlet version > 3.0[/yellow] - Adds the async support plugin
• [yellow]Legacy compatible[/yellow] - Adds the schema-binding API
• [yellow]Plain project[/yellow] - Minimal two-entry test scope

[bold blue]🌍 Environment Variables:[/bold blue]

• [cyan]COREDEPS_PLATFORM_VERSION[/cyan] - Default platform version
• [cyan]COREDEPS_TARGET_PLATFORM_VERSION[/cyan] - Default servlet version
• [cyan]COREDEPS_LEGACY_COMPATIBLE[/cyan] - Enable legacy compatibility
• [cyan]COREDEPS_FRAMEWORK_PROJECT[/cyan] - Framework (true) or plain project
• [cyan]CI_GROOVY_VERSION[/cyan] - Override the scripting runtime version

[bold blue]📄 Configuration Files:[/bold blue]

• [green].coredeps.json[/green] / [green].coredeps.toml[/green] - Project-level config
• [green]~/.config/coredeps/config.json[/green] - User-level config

[bold blue]💡 Usage Examples:[/bold blue]

  # Show every scope
  coredeps show -p 2.5.6

  # Servlet 3.1 target with legacy compatibility
  coredeps show -p 2.5.6 -t 3.1 --legacy-compatible

  # Build-scope patterns for artifact filtering
  coredeps patterns -p 2.5.6

  # Maven POM fragment
  coredeps export -p 2.5.6 --format pom -o deps.xml
"""
    console.print(
        Panel(
            info_text,
            title="[bold]coredeps Information[/bold]",
            border_style="blue",
        )
    )


@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command("init")
@click.option(
    "--path",
    type=click.Path(),
    default=".coredeps.json",
    help="Path where to create the config file",
    show_default=True,
)
@click.option("--force", is_flag=True, help="Overwrite existing config file")
def config_init(path: str, force: bool):
    """Create a sample configuration file."""
    config_path = Path(path)

    if config_path.exists() and not force:
        console.print(f"⚠️  Config file already exists at {config_path}", style="yellow")
        console.print("Use --force to overwrite", style="dim")
        return

    try:
        config_path.write_text(create_sample_config(), encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Failed to create config file: {e}")

    console.print(f"✅ Created configuration file at {config_path}", style="green")
    console.print("Edit this file to customize your settings", style="dim")


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Print the settings as JSON")
def config_show(as_json: bool):
    """Show current configuration settings."""
    current_config = get_config()

    if as_json:
        console.print_json(data=current_config.to_dict())
        return

    console.print(Panel("[bold blue]🔧 Configuration[/bold blue]", border_style="blue"))
    console.print(f"  Source: {current_config.source or 'defaults'}")

    console.print("\n[bold cyan]📦 Catalog Settings:[/bold cyan]")
    console.print(f"  Platform Version: {current_config.catalog.platform_version or '-'}")
    console.print(
        f"  Target Platform Version: {current_config.catalog.target_platform_version or '3.0 (default)'}"
    )
    console.print(f"  Legacy Compatible: {current_config.catalog.legacy_compatible}")
    console.print(f"  Framework Project: {current_config.catalog.framework_project}")
    console.print(
        f"  Scripting Runtime: {current_config.catalog.scripting_runtime_version or 'default'}"
    )

    console.print("\n[bold cyan]🖨️  Output Settings:[/bold cyan]")
    console.print(f"  Format: {current_config.output.output_format}")
    console.print(f"  Output File: {current_config.output.output_file or 'stdout'}")

    console.print("\n[bold cyan]📝 Logging Settings:[/bold cyan]")
    console.print(f"  Log Level: {current_config.logging.log_level}")
    console.print(f"  JSON Logs: {current_config.logging.enable_json}")


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True))
def config_validate(config_file: str):
    """Validate a configuration file."""
    config_data = load_config_file(Path(config_file))

    if config_data is None:
        raise click.ClickException(f"Could not load config from {config_file}")

    candidate = ComprehensiveConfig()
    unknown = []
    for section_name in ("catalog", "output", "logging"):
        section = getattr(candidate, section_name)
        section_data = config_data.get(section_name)
        if not isinstance(section_data, dict):
            continue
        for key, value in section_data.items():
            if hasattr(section, key):
                setattr(section, key, coerce_config_value(section, key, value))
            else:
                unknown.append(f"{section_name}.{key}")

    errors = validate_config_values(candidate)
    errors.extend(f"unknown key: {key}" for key in unknown)
    if errors:
        for error in errors:
            console.print(f"  • {error}", style="red")
        raise click.ClickException(f"Configuration file {config_file} is invalid")

    console.print(f"✅ Configuration file {config_file} is valid", style="green")


if __name__ == "__main__":
    cli()
