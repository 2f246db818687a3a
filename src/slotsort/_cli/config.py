"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in slotsort configuration."""


@dataclass(slots=True, frozen=True)
class SlotsortConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    input: Path | None = None
    output: Path | None = None
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


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.slotsort].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> SlotsortConfig:
    """Load and validate [tool.slotsort] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed SlotsortConfig

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

    tool_section = data.get("tool", {})
    if not isinstance(tool_section, dict):
        msg = "Invalid [tool] configuration. Expected a table."
        raise ConfigError(msg)

    section = tool_section.get("slotsort", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.slotsort] configuration. Expected a table."
        raise ConfigError(msg)

    return SlotsortConfig(
        input=_parse_path(section, "input", project_root),
        output=_parse_path(section, "output", project_root),
        project_root=project_root,
    )


def get_config() -> SlotsortConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        SlotsortConfig (may be empty if no pyproject.toml or no [tool.slotsort] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return SlotsortConfig()
    return load_config(pyproject_path)
