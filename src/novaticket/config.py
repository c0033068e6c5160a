"""Data directory layout and git-config-style settings for novaticket."""

from pathlib import Path
from typing import Any

from git.config import GitConfigParser

from novaticket.storage import DirectoryBackend, StoragePartition

SECTION = "novaticket"

DEFAULTS = {
    "sync-interval": 2.0,
    "auth-latency": 0.0,
    "quota": 5 * 1024 * 1024,
}


def _python_key(config_key: str) -> str:
    """Convert config-style key (hyphenated) to Python-style (underscored)."""
    return config_key.replace("-", "_")


def _config_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to config-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce(config_key: str, raw: str):
    """Type-coerce a value using the type of its default."""
    default = DEFAULTS.get(config_key)
    if default is None:
        return raw
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


def config_path(data_dir: str | Path) -> Path:
    return Path(data_dir) / "config"


def storage_path(data_dir: str | Path) -> Path:
    return Path(data_dir) / "storage"


def default_config() -> dict[str, Any]:
    """DEFAULTS with Python-style keys."""
    return {_python_key(k): v for k, v in DEFAULTS.items()}


def read_config(data_dir: str | Path) -> dict[str, Any]:
    """Read the novaticket section into a {python_key: value} dict.

    Missing keys (or a missing file) fall back to DEFAULTS. Unknown keys
    are kept as raw strings.
    """
    result: dict[str, Any] = {}
    path = config_path(data_dir)
    if path.is_file():
        reader = GitConfigParser(str(path), read_only=True)
        if SECTION in reader.sections():
            for key, raw in reader.items(SECTION):
                result[_python_key(key)] = _coerce(key, raw)
    return {**default_config(), **result}


def write_config_key(data_dir: str | Path, key: str, value) -> None:
    """Write one key to the config file. key is python-style (underscores)."""
    config_key = _config_key(key)
    if config_key in DEFAULTS:
        _coerce(config_key, str(value))  # reject values of the wrong type
    path = config_path(data_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    writer = GitConfigParser(str(path), read_only=False)
    if isinstance(value, bool):
        writer.set_value(SECTION, config_key, str(value).lower())
    else:
        writer.set_value(SECTION, config_key, str(value))
    writer.release()


def open_partition(data_dir: str | Path, config: dict[str, Any] | None = None) -> StoragePartition:
    """Open the directory-backed storage partition for a data directory."""
    if config is None:
        config = read_config(data_dir)
    quota = config.get("quota") or None
    return StoragePartition(DirectoryBackend(storage_path(data_dir), quota=quota))
