"""
Console rendering for dependency catalogs.

Provides color-coded console output using Rich library.
"""

from typing import Iterable, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .catalog import DependencyCatalog, Scope
from .dependency import Dependency

SCOPE_STYLES = {
    Scope.BUILD: "magenta",
    Scope.DOC: "blue",
    Scope.PROVIDED: "yellow",
    Scope.COMPILE: "green",
    Scope.RUNTIME: "cyan",
    Scope.TEST: "white",
}


class CatalogReporter:
    """Formats and displays a dependency catalog."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_catalog(
        self, catalog: DependencyCatalog, scopes: Optional[Iterable[Scope]] = None
    ) -> None:
        """
        Print the catalog header, one table per scope, and a summary.

        Args:
            catalog: The catalog to display
            scopes: Limit output to these scopes; all scopes when None
        """
        selected = list(scopes) if scopes is not None else list(Scope)

        self.console.print()
        self._print_header(catalog)

        for scope in selected:
            self._print_scope(scope, catalog.dependencies_for(scope))

        self._print_summary(catalog, selected)

    def _print_header(self, catalog: DependencyCatalog) -> None:
        lines = [
            f"Platform version: [bold]{catalog.platform_version}[/bold]",
            f"Target servlet version: [bold]{catalog.target_platform_version}[/bold]",
            f"Legacy compatible: {catalog.legacy_compatible}",
            f"Framework project: {catalog.framework_project}",
            "",
            "Pinned versions: "
            + ", ".join(f"{name}={version}" for name, version in catalog.version_pins().items()),
        ]
        self.console.print(
            Panel(
                "\n".join(lines),
                title="[bold blue]Core Dependency Catalog[/bold blue]",
                border_style="blue",
            )
        )

    def _print_scope(self, scope: Scope, dependencies: Sequence[Dependency]) -> None:
        style = SCOPE_STYLES.get(scope, "white")
        table = Table(
            title=f"{scope.value} ({len(dependencies)})",
            box=box.ROUNDED,
            title_style=f"bold {style}",
        )
        table.add_column("Group", style=style)
        table.add_column("Name", style="bold")
        table.add_column("Version")
        table.add_column("Transitive", justify="center")
        table.add_column("Exclusions", style="dim")

        for dep in dependencies:
            table.add_row(
                dep.group,
                dep.name,
                dep.version,
                "yes" if dep.transitive else "no",
                "\n".join(dep.exclusions) or "-",
            )

        self.console.print(table)

    def _print_summary(self, catalog: DependencyCatalog, scopes: Sequence[Scope]) -> None:
        table = Table(title="📊 Summary", box=box.SIMPLE, title_style="bold cyan")
        table.add_column("Scope", style="bold")
        table.add_column("Count", justify="center")

        total = 0
        for scope in scopes:
            count = len(catalog.dependencies_for(scope))
            total += count
            table.add_row(scope.value, str(count))
        table.add_row("[bold]total[/bold]", f"[bold]{total}[/bold]")

        self.console.print(table)
