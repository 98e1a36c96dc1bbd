"""Project settings resolution.

Locates the ``.gutenrc`` settings file by searching upward from a start
directory, merges it over the defaults and validates the result into an
explicit ``ProjectConfig`` value that callers pass down.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

RC_FILE_NAMES: tuple[str, ...] = (".gutenrc.json", ".gutenrc.yml", ".gutenrc.yaml")
DEFAULT_RC_FILE = RC_FILE_NAMES[0]
DEFAULT_IGNORE_FILE = ".gutenignore"

MIN_VERBOSITY = 0
MAX_VERBOSITY = 5

DEFAULT_SETTINGS: dict[str, Any] = {
    "verbosity": 1,
    "ignoreFile": DEFAULT_IGNORE_FILE,
}


class ConfigValidationError(RuntimeError):
    """Raised when project settings are missing or invalid."""


@dataclass(frozen=True)
class ProjectConfig:
    """Resolved project settings.

    Attributes:
        abs_path: Directory holding the settings file; the scan root.
        api_dir: Name of the generated documentation folder.
        verbosity: Output detail level, 0 (quiet) to 5.
        ignore_file: Ignore file name looked up in ``abs_path``.
        settings: Full merged settings mapping.
    """

    abs_path: str
    api_dir: str
    verbosity: int = DEFAULT_SETTINGS["verbosity"]
    ignore_file: str = DEFAULT_IGNORE_FILE
    settings: dict[str, Any] = field(default_factory=dict)

    @property
    def api_path(self) -> str:
        return os.path.join(self.abs_path, self.api_dir)


def validate_verbosity(value: Any) -> int:
    """Return ``value`` as a verbosity level or raise ``ConfigValidationError``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigValidationError(
            f"Verbosity level must be a number from {MIN_VERBOSITY} to {MAX_VERBOSITY}"
        )
    if not MIN_VERBOSITY <= value <= MAX_VERBOSITY:
        raise ConfigValidationError(
            f"Verbosity level must be a number from {MIN_VERBOSITY} to {MAX_VERBOSITY}"
        )
    return value


def find_config_path(start: str | None = None) -> Path:
    """Find the closest settings file at or above ``start``.

    Raises:
        ConfigValidationError: If no settings file exists up to the filesystem root.
    """
    current = Path(start or os.getcwd()).resolve()
    for directory in (current, *current.parents):
        for name in RC_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file():
                logger.debug("Found settings file %s", candidate)
                return candidate
    raise ConfigValidationError(
        'Project is not initialized: no .gutenrc file found. Run "init" first.'
    )


def _load_payload(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigValidationError(f"Cannot read settings file {path}: {exc}") from exc

    try:
        if path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Failed to parse settings file {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigValidationError(
            f"Settings file {path} must contain an object, got {type(payload).__name__}"
        )
    return payload


def load_project_config(path: str | Path) -> ProjectConfig:
    """Load, merge over defaults and validate a settings file."""
    rc_path = Path(path).resolve()
    payload = _load_payload(rc_path)

    api_dir = str(payload.get("apiDir") or "").strip()
    if not api_dir:
        raise ConfigValidationError(
            f"Settings file {rc_path} is missing an apiDir key naming the "
            "documentation folder. Add it or delete the file and reinitialize."
        )

    settings = {**DEFAULT_SETTINGS, **payload}
    verbosity = validate_verbosity(settings["verbosity"])
    ignore_file = str(settings.get("ignoreFile") or DEFAULT_IGNORE_FILE)

    return ProjectConfig(
        abs_path=str(rc_path.parent),
        api_dir=api_dir,
        verbosity=verbosity,
        ignore_file=ignore_file,
        settings=settings,
    )


def resolve_project_config(start: str | None = None) -> ProjectConfig:
    """Find and load the settings for the project containing ``start``."""
    return load_project_config(find_config_path(start))


def default_ignore_contents(api_dir: str) -> str:
    """Ignore file written for a freshly initialized project."""
    return (
        "# ignore your dependencies\n"
        "node_modules\n"
        "# ignore hidden folders like .git\n"
        ".*\n"
        "# ignore your generated API folder\n"
        f"{api_dir}\n"
        "\n"
        "# additional folders and files to ignore\n"
    )


def init_project(root: str, api_dir: str) -> ProjectConfig:
    """Write a settings file and a default ignore file into ``root``.

    Raises:
        ConfigValidationError: If ``root`` is already initialized, is not a
            directory, or ``api_dir`` is empty.
    """
    root_path = Path(root).resolve()
    if not root_path.is_dir():
        raise ConfigValidationError(f"Project root not found: {root_path}")

    api_dir = api_dir.strip()
    if not api_dir:
        raise ConfigValidationError("apiDir must not be empty")

    existing = [name for name in RC_FILE_NAMES if (root_path / name).exists()]
    if existing:
        raise ConfigValidationError(
            f"Project at {root_path} is already initialized ({existing[0]})"
        )

    settings = {**DEFAULT_SETTINGS, "apiDir": api_dir}
    rc_path = root_path / DEFAULT_RC_FILE
    rc_path.write_text(json.dumps(settings, indent=2) + "\n", encoding="utf-8")
    logger.info("Wrote settings file %s", rc_path)

    ignore_path = root_path / DEFAULT_IGNORE_FILE
    if not ignore_path.exists():
        ignore_path.write_text(default_ignore_contents(api_dir), encoding="utf-8")
        logger.info("Wrote ignore file %s", ignore_path)

    return load_project_config(rc_path)


def set_verbosity(config_path: str | Path, level: Any) -> ProjectConfig:
    """Persist a new verbosity level, keeping every other setting.

    Raises:
        ConfigValidationError: If ``level`` is not an int from 0 to 5 or the
            settings file cannot be read.
    """
    level = validate_verbosity(level)
    rc_path = Path(config_path).resolve()
    payload = _load_payload(rc_path)
    payload["verbosity"] = level

    if rc_path.suffix.lower() == ".json":
        text = json.dumps(payload, indent=2) + "\n"
    else:
        text = yaml.safe_dump(payload, sort_keys=False)
    rc_path.write_text(text, encoding="utf-8")
    logger.info("Set verbosity to %d in %s", level, rc_path)

    return load_project_config(rc_path)
