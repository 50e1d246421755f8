"""Configuration loading for entity-to-model.

The only behavioral switch a deployment has to make is the severity of the
EntityToModel finding. The rest of the settings name the generated model
and where it goes. Configuration sources are merged in priority order:
    1. Defaults (defined in AnalyzerConfig)
    2. [tool.entity-to-model] table in the project's pyproject.toml
    3. Project config (entity-to-model.toml in the project directory)
    4. Explicit config file (if config_file provided)
    5. Keyword overrides

Example:
    >>> config = load_config(severity="hidden")
    >>> config.severity
    'hidden'
    >>> config.target_namespace
    'Logic.Models'
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional

from .exceptions import ConfigFileError, InvalidConfigError

SeverityMode = Literal["hidden", "warning"]

SEVERITY_MODES: tuple[str, ...] = ("hidden", "warning")

PROJECT_CONFIG_NAME = "entity-to-model.toml"
PYPROJECT_TABLE = "entity-to-model"


@dataclass(frozen=True)
class AnalyzerConfig:
    """Settings for the analyzer and its code fix.

    Attributes:
        severity: "warning" shows a standard warning marker; "hidden" reports
            the finding without a visual marker so the fix is still offered.
        target_namespace: Name of the destination that receives generated models.
        model_suffix: Appended to the entity name to form the model name.
        replace_existing_model: When True, a destination document that already
            carries the model's file name is updated instead of a second
            document being added next to it.
        max_workers: Thread pool size for analyzing many documents
            (None = CPU count, capped at 8).
    """

    severity: SeverityMode = "warning"
    target_namespace: str = "Logic.Models"
    model_suffix: str = "Model"
    replace_existing_model: bool = False
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.severity not in SEVERITY_MODES:
            raise InvalidConfigError(
                "severity", self.severity, f"expected one of {', '.join(SEVERITY_MODES)}"
            )
        if not self.target_namespace.strip():
            raise InvalidConfigError("target_namespace", self.target_namespace, "must not be empty")
        if not self.model_suffix.isidentifier():
            raise InvalidConfigError(
                "model_suffix", self.model_suffix, "must be a valid Python identifier"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise InvalidConfigError("max_workers", self.max_workers, "must be at least 1")


DEFAULT_CONFIG = AnalyzerConfig()


def load_config(
    config_file: Optional[Path] = None,
    project_dir: Optional[Path] = None,
    **overrides: Any,
) -> AnalyzerConfig:
    """Load configuration with project discovery and merging.

    Args:
        config_file: Optional explicit config file path
        project_dir: Directory searched for pyproject.toml and
            entity-to-model.toml (defaults to the current directory)
        **overrides: Direct overrides, applied last

    Returns:
        Validated AnalyzerConfig instance

    Raises:
        ConfigFileError: If a config file is unreadable or missing
        InvalidConfigError: If a setting is unknown or has an invalid value
    """
    root = project_dir if project_dir is not None else Path.cwd()
    merged: dict[str, Any] = {}

    # 1. pyproject.toml [tool.entity-to-model]
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        table = _load_toml_file(pyproject).get("tool", {}).get(PYPROJECT_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigFileError(pyproject, f"[tool.{PYPROJECT_TABLE}] must be a table")
        merged.update(table)

    # 2. Project config
    project_config = root / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    # 3. Explicit config file (highest priority from files)
    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    # 4. Keyword overrides
    merged.update(overrides)

    # TOML keys may be written with dashes
    normalized = {key.replace("-", "_"): value for key, value in merged.items()}

    known = set(AnalyzerConfig.__dataclass_fields__)
    for key, value in normalized.items():
        if key not in known:
            raise InvalidConfigError(key, value, "unknown setting")

    return AnalyzerConfig(**normalized)


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigFileError: If the file cannot be read or parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Fallback to tomli for Python 3.10
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e)) from e
