"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for postforge:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.postforge/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~postforge.models.GlobalConfig`
  JSON file storing defaults (base URL, collection name, folder strategy,
  output format).
* **Project config** -- an optional ``./postforge.json`` overriding any of
  the global keys for one repository.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  final effective configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so a crash never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from postforge.exceptions import ConfigError
from postforge.models import FolderStrategy, GlobalConfig

logger = logging.getLogger(__name__)

_APP_NAME = "postforge"
_CONFIG_FILENAME = "config.json"
PROJECT_CONFIG_FILENAME = "postforge.json"

ENV_BASE_URL = "POSTFORGE_BASE_URL"
ENV_FOLDER_STRATEGY = "POSTFORGE_FOLDER_STRATEGY"
ENV_COLLECTION_NAME = "POSTFORGE_COLLECTION_NAME"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform uses the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/postforge/`` (default ``~/.config/postforge/``).
    On macOS/Windows: ``~/.postforge/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/postforge/`` (default ``~/.local/share/postforge/``).
    On macOS/Windows: ``~/.postforge/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.  On any failure the
    temp file is removed and the error re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~postforge.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


def set_config_value(key: str, value: str) -> GlobalConfig:
    """Set one top-level key of the global config and save it.

    ``output.format`` is accepted as a dotted key for the nested output
    section.

    Returns:
        The saved configuration.

    Raises:
        ConfigError: If *key* is unknown or *value* fails validation.
    """
    config = load_global_config()
    data = config.model_dump(mode="json")

    if key == "output.format":
        data["output"]["format"] = value
    elif key in GlobalConfig.model_fields and key != "output":
        data[key] = value
    else:
        raise ConfigError(f"Unknown config key: {key}")

    try:
        updated = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from exc

    save_global_config(updated)
    return updated


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./postforge.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but does not contain a JSON object.
    """
    path = Path.cwd() / PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_base_url: Optional[str] = None,
    cli_name: Optional[str] = None,
    cli_folder_strategy: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``POSTFORGE_BASE_URL``,
           ``POSTFORGE_COLLECTION_NAME``, ``POSTFORGE_FOLDER_STRATEGY``)
        3. Project config (``./postforge.json``)
        4. User config (``~/.config/postforge/config.json``)
        5. Defaults

    Raises:
        ConfigError: If a layer supplies an invalid value.
    """
    # 5 + 4. Base global config (fills in defaults automatically)
    data = load_global_config().model_dump(mode="json")

    # 3. Project-local overrides
    project = load_project_config()
    if project is not None:
        logger.debug("Applying project config from %s", PROJECT_CONFIG_FILENAME)
        for key, value in project.items():
            if key == "output" and isinstance(value, dict):
                data["output"].update(value)
            else:
                data[key] = value

    # 2. Environment variables
    for env_var, key in (
        (ENV_BASE_URL, "base_url"),
        (ENV_COLLECTION_NAME, "collection_name"),
        (ENV_FOLDER_STRATEGY, "folder_strategy"),
    ):
        env_value = os.environ.get(env_var)
        if env_value:
            data[key] = env_value

    # 1. CLI flags (highest precedence)
    if cli_base_url is not None:
        data["base_url"] = cli_base_url
    if cli_name is not None:
        data["collection_name"] = cli_name
    if cli_folder_strategy is not None:
        data["folder_strategy"] = cli_folder_strategy
    if cli_format is not None:
        data["output"]["format"] = cli_format

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        strategies = ", ".join(s.value for s in FolderStrategy)
        raise ConfigError(
            f"Invalid configuration: {exc.errors()[0].get('msg', exc)} "
            f"(folder strategies: {strategies})"
        ) from exc
