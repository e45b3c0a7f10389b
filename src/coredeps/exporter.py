"""Catalog export to JSON, TOML and Maven POM fragments."""

import json
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import toml

from .catalog import DependencyCatalog, Scope
from .dependency import Dependency
from .error_handling import ErrorCategory, ExportError, get_error_handler
from .structured_logging import log_export


class ExportFormat(Enum):
    """Supported export formats."""

    JSON = "json"
    TOML = "toml"
    POM = "pom"


# Maven has no equivalent of the build tool and doc scopes
POM_SCOPES = {
    Scope.PROVIDED: "provided",
    Scope.COMPILE: "compile",
    Scope.RUNTIME: "runtime",
    Scope.TEST: "test",
}


class CatalogExporter:
    """Renders a dependency catalog in machine-readable formats."""

    def __init__(self):
        self.error_handler = get_error_handler()

    def parse_format(self, fmt: Union[ExportFormat, str]) -> ExportFormat:
        if isinstance(fmt, ExportFormat):
            return fmt
        try:
            return ExportFormat(str(fmt).strip().lower())
        except ValueError as e:
            self.error_handler.error(
                ErrorCategory.EXPORT,
                f"Unsupported export format: {fmt}",
                "exporter",
                "parse_format",
                suggestions=[f"Use one of: {', '.join(f.value for f in ExportFormat)}"],
            )
            raise ExportError(f"Unsupported export format: {fmt}") from e

    def render(self, catalog: DependencyCatalog, fmt: Union[ExportFormat, str]) -> str:
        export_format = self.parse_format(fmt)

        if export_format == ExportFormat.JSON:
            return json.dumps(catalog.to_dict(), indent=2)
        if export_format == ExportFormat.TOML:
            return toml.dumps(catalog.to_dict())
        return self._render_pom(catalog)

    def _render_pom(self, catalog: DependencyCatalog) -> str:
        root = ET.Element("dependencies")

        for scope, maven_scope in POM_SCOPES.items():
            for dependency in catalog.dependencies_for(scope):
                root.append(self._pom_dependency(dependency, maven_scope))

        ET.indent(root, space="  ")
        return ET.tostring(root, encoding="unicode") + "\n"

    @staticmethod
    def _pom_dependency(dependency: Dependency, maven_scope: str) -> ET.Element:
        element = ET.Element("dependency")
        ET.SubElement(element, "groupId").text = dependency.group
        ET.SubElement(element, "artifactId").text = dependency.name
        ET.SubElement(element, "version").text = dependency.version
        ET.SubElement(element, "scope").text = maven_scope

        excluded = list(dependency.exclusions)
        if not dependency.transitive:
            excluded.append("*:*")

        if excluded:
            exclusions = ET.SubElement(element, "exclusions")
            for coordinates in excluded:
                group, _, name = coordinates.partition(":")
                exclusion = ET.SubElement(exclusions, "exclusion")
                ET.SubElement(exclusion, "groupId").text = group
                ET.SubElement(exclusion, "artifactId").text = name or "*"

        return element

    def export(
        self,
        catalog: DependencyCatalog,
        fmt: Union[ExportFormat, str],
        output_file: Optional[Union[str, Path]] = None,
    ) -> str:
        """
        Render the catalog and optionally write it to a file.

        Args:
            catalog: Catalog to export
            fmt: Export format
            output_file: Destination path; nothing is written when None

        Returns:
            str: The rendered document

        Raises:
            ExportError: On unsupported formats or write failures
        """
        export_format = self.parse_format(fmt)
        content = self.render(catalog, export_format)

        if output_file is not None:
            path = Path(output_file)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
            except OSError as e:
                self.error_handler.error(
                    ErrorCategory.FILESYSTEM,
                    f"Failed to write export: {e}",
                    "exporter",
                    "export",
                    exception=e,
                    details={"output_file": str(path)},
                )
                raise ExportError(f"Failed to write {path}: {e}") from e

        log_export(
            export_format.value,
            str(output_file) if output_file is not None else None,
            len(catalog.all_dependencies()),
        )
        return content


def export_catalog(
    catalog: DependencyCatalog,
    fmt: Union[ExportFormat, str],
    output_file: Optional[Union[str, Path]] = None,
) -> str:
    """Convenience wrapper around CatalogExporter.export."""
    return CatalogExporter().export(catalog, fmt, output_file)
