"""
Configuration management for coredeps.

Settings are layered: built-in defaults, then the first config file found
(JSON or TOML), then environment variables. The catalog never reads the
environment itself; this module is the one place that does.
"""

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
from rich.console import Console

from .error_handling import ConfigurationError, log_config_error
from .structured_logging import DEFAULT_LOG_FORMAT, log_config_loaded

console = Console(stderr=True)

OUTPUT_FORMATS = ("console", "json", "toml", "pom")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRUE_VALUES = ("true", "1", "yes", "on")


@dataclass
class CatalogConfig:
    """Parameters the dependency catalog is built from."""

    platform_version: Optional[str] = None
    target_platform_version: Optional[str] = None
    legacy_compatible: bool = False
    framework_project: bool = True
    scripting_runtime_version: Optional[str] = None


@dataclass
class OutputConfig:
    """Output and presentation configuration."""

    output_format: str = "console"
    output_file: Optional[str] = None
    quiet: bool = False
    verbose: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = "WARNING"
    enable_json: bool = True
    log_format: str = DEFAULT_LOG_FORMAT


@dataclass
class ComprehensiveConfig:
    """Main configuration containing all subsections."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "catalog": asdict(self.catalog),
            "output": asdict(self.output),
            "logging": asdict(self.logging),
        }


# Global configuration instance
_global_config: Optional[ComprehensiveConfig] = None


def validate_config_values(config: ComprehensiveConfig) -> List[str]:
    """
    Validate configuration values and return any errors.

    Version strings are deliberately left unchecked; any text the build
    tool hands over is accepted by the catalog.

    Args:
        config: Configuration to validate

    Returns:
        List[str]: List of validation errors (empty if valid)
    """
    errors = []

    for section_name in ("catalog", "output", "logging"):
        section = getattr(config, section_name)
        for section_field in fields(section):
            problem = check_config_value(
                section, section_field.name, getattr(section, section_field.name)
            )
            if problem:
                errors.append(f"{section_name}.{section_field.name} {problem}")

    if config.catalog.platform_version is not None and not str(
        config.catalog.platform_version
    ).strip():
        errors.append("catalog.platform_version must not be empty when set")

    if config.output.output_format not in OUTPUT_FORMATS:
        errors.append(
            f"output.output_format must be one of {', '.join(OUTPUT_FORMATS)}"
        )

    if str(config.logging.log_level).upper() not in LOG_LEVELS:
        errors.append(f"logging.log_level must be one of {', '.join(LOG_LEVELS)}")

    return errors


def load_config_file(config_path: Path) -> Optional[Dict[str, Any]]:
    """Load config from a JSON or TOML file, returning None on failure."""
    if not config_path.exists():
        return None

    try:
        with open(config_path, encoding="utf-8") as f:
            suffix = config_path.suffix.lower()
            if suffix == ".toml":
                return toml.load(f)
            if suffix == ".json":
                return json.load(f)
    except (OSError, ValueError, toml.TomlDecodeError) as e:
        log_config_error(
            f"Error loading config from {config_path}: {e}",
            "cli_config",
            "load_config_file",
            config_path=str(config_path),
            exception=e,
        )
        console.print(f"⚠️  Error loading config from {config_path}: {e}", style="yellow")

    return None


def find_config_file() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / ".coredeps.json",
        Path.cwd() / ".coredeps.toml",
        Path.home() / ".config" / "coredeps" / "config.json",
        Path.home() / ".config" / "coredeps" / "config.toml",
        Path.home() / ".coredeps.json",
    ]

    for location in locations:
        if location.exists():
            return location

    return None


def parse_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


def get_env_bool(key: str, default: bool = False) -> bool:
    value = os.environ.get(key, "")
    return parse_bool(value) if value else default


def load_environment_overrides(config: ComprehensiveConfig) -> int:
    """Apply environment variable overrides and return how many were used."""
    applied = 0

    if platform_version := os.environ.get("COREDEPS_PLATFORM_VERSION"):
        config.catalog.platform_version = platform_version
        applied += 1
    if target := os.environ.get("COREDEPS_TARGET_PLATFORM_VERSION"):
        config.catalog.target_platform_version = target
        applied += 1
    if "COREDEPS_LEGACY_COMPATIBLE" in os.environ:
        config.catalog.legacy_compatible = get_env_bool(
            "COREDEPS_LEGACY_COMPATIBLE", config.catalog.legacy_compatible
        )
        applied += 1
    if "COREDEPS_FRAMEWORK_PROJECT" in os.environ:
        config.catalog.framework_project = get_env_bool(
            "COREDEPS_FRAMEWORK_PROJECT", config.catalog.framework_project
        )
        applied += 1

    # Empty means unset, so the catalog falls back to its default runtime
    if groovy_version := os.environ.get("CI_GROOVY_VERSION"):
        config.catalog.scripting_runtime_version = groovy_version
        applied += 1

    if output_format := os.environ.get("COREDEPS_OUTPUT_FORMAT"):
        config.output.output_format = output_format.lower()
        applied += 1
    if log_level := os.environ.get("COREDEPS_LOG_LEVEL"):
        config.logging.log_level = log_level.upper()
        applied += 1

    return applied


def _field_types(section: Any) -> Dict[str, Any]:
    return {f.name: f.type for f in fields(section)}


def coerce_config_value(section: Any, key: str, value: Any) -> Any:
    """
    Bring a config file value to the type of the field it is assigned to.

    Unquoted TOML versions arrive as numbers and hand-written JSON often
    quotes booleans. Version numbers are converted with ``str`` (so TOML
    ``3.10`` becomes ``"3.1"``) and boolean strings follow the same rule as
    boolean environment variables. Other values are returned unchanged.
    """
    expected = _field_types(section).get(key)
    if expected is bool and isinstance(value, str):
        return parse_bool(value)
    if (
        expected in (str, Optional[str])
        and isinstance(value, (int, float))
        and not isinstance(value, bool)
    ):
        return str(value)
    return value


def check_config_value(section: Any, key: str, value: Any) -> Optional[str]:
    """Return a problem description if value has the wrong type for key."""
    expected = _field_types(section).get(key)
    if expected is bool and not isinstance(value, bool):
        return "must be a boolean"
    if expected is str and not isinstance(value, str):
        return "must be a string"
    if expected == Optional[str] and value is not None and not isinstance(value, str):
        return "must be a string"
    return None


def apply_config_section(
    config: Any, section_data: Dict[str, Any], section_name: str
) -> None:
    """Apply configuration from dictionary to config section."""
    for key, value in section_data.items():
        if not hasattr(config, key):
            console.print(
                f"⚠️  Unknown config key in {section_name}: {key}", style="yellow"
            )
            continue

        value = coerce_config_value(config, key, value)
        problem = check_config_value(config, key, value)
        if problem:
            console.print(
                f"⚠️  Ignoring {section_name}.{key}: {problem}", style="yellow"
            )
            continue
        setattr(config, key, value)


def apply_file_config(config: ComprehensiveConfig, file_config: Dict[str, Any]) -> None:
    for section_name in ("catalog", "output", "logging"):
        section_data = file_config.get(section_name)
        if isinstance(section_data, dict):
            apply_config_section(getattr(config, section_name), section_data, section_name)


def load_config(config_path: Optional[Path] = None) -> ComprehensiveConfig:
    """
    Load configuration from file and environment.

    Raises:
        ConfigurationError: If an explicitly given config file does not exist
    """
    global _global_config

    if _global_config is not None and config_path is None:
        return _global_config

    if config_path is not None and not Path(config_path).exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    config = ComprehensiveConfig()

    config_file = Path(config_path) if config_path is not None else find_config_file()
    if config_file:
        file_config = load_config_file(config_file)
        if file_config:
            apply_file_config(config, file_config)
            config.source = str(config_file)

    override_count = load_environment_overrides(config)
    log_config_loaded(config.source, override_count)

    validation_errors = validate_config_values(config)
    if validation_errors:
        console.print("⚠️  Configuration validation errors:", style="red")
        for error in validation_errors:
            console.print(f"  • {error}", style="red")

    _global_config = config
    return config


def get_config() -> ComprehensiveConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _global_config
    _global_config = None


def create_sample_config() -> str:
    """Generate a sample JSON configuration."""
    sample_config = {
        "catalog": {
            "platform_version": "2.5.6",
            "target_platform_version": "3.0",
            "legacy_compatible": False,
            "framework_project": True,
        },
        "output": {
            "output_format": "console",
            "quiet": False,
            "verbose": False,
        },
        "logging": {
            "log_level": "WARNING",
            "enable_json": True,
        },
    }

    return json.dumps(sample_config, indent=2)
