"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from arithgraph._arith import OverflowPolicy


class ConfigError(Exception):
    """Error in arithgraph configuration."""


@dataclass(slots=True, frozen=True)
class ArithgraphConfig:
    """Configuration loaded from the ``[tool.arithgraph]`` table of pyproject.toml."""

    overflow: OverflowPolicy = OverflowPolicy.WRAP
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_overflow(value: object) -> OverflowPolicy:
    if not isinstance(value, str):
        msg = "Invalid [tool.arithgraph].overflow: expected string"
        raise ConfigError(msg)
    try:
        return OverflowPolicy(value.lower())
    except ValueError:
        choices = ", ".join(f"'{p}'" for p in OverflowPolicy)
        msg = f"Invalid [tool.arithgraph].overflow '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from None


def load_config(pyproject_path: Path) -> ArithgraphConfig:
    """Load and validate [tool.arithgraph] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed ArithgraphConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("arithgraph", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.arithgraph] configuration: expected a table"
        raise ConfigError(msg)

    overflow = OverflowPolicy.WRAP
    if "overflow" in section:
        overflow = _parse_overflow(section["overflow"])

    return ArithgraphConfig(overflow=overflow, project_root=project_root)


def get_config() -> ArithgraphConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        ArithgraphConfig (defaults if no pyproject.toml or no [tool.arithgraph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return ArithgraphConfig()
    return load_config(pyproject_path)
