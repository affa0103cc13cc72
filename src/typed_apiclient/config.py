"""Configuration loading from JSON profile files and environment variables.

A :class:`~typed_apiclient.models.Configuration` can be built in code, but
deployments usually keep the host, port and session settings outside the
program. This module reads them from two places:

* **JSON profile files** -- :func:`load_configuration` /
  :func:`save_configuration`. Files hold the serialisable fields only;
  ``decoder``, ``encoder``, ``delegate`` and ``session.transport`` are
  runtime objects and are never persisted.
* **Environment variables** -- ``TYPED_APICLIENT_HOST``,
  ``TYPED_APICLIENT_BASE_PATH``, ``TYPED_APICLIENT_PORT``,
  ``TYPED_APICLIENT_INSECURE`` and ``TYPED_APICLIENT_TIMEOUT``.

:func:`resolve_configuration` layers them (high to low precedence):

    1. Environment variables
    2. JSON profile file
    3. Model defaults

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so a crash never leaves a half-written profile.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from typed_apiclient.exceptions import ConfigError
from typed_apiclient.models import Configuration

ENV_PREFIX = "TYPED_APICLIENT_"

# env suffix -> (section, field); section None means top level
_ENV_FIELDS: dict[str, tuple[Optional[str], str]] = {
    "HOST": (None, "host"),
    "BASE_PATH": (None, "base_path"),
    "PORT": (None, "port"),
    "INSECURE": (None, "is_insecure"),
    "TIMEOUT": ("session", "timeout"),
}

PathLike = Union[str, Path]


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the original exception re-raised.
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
        fd = None
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


# --- JSON profile files ---


def _read_profile(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Configuration file not found at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Invalid configuration at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid configuration at {path}: expected a JSON object")
    return data


def load_configuration(path: PathLike) -> Configuration:
    """Load and validate a configuration from a JSON profile file.

    Args:
        path: Path to the JSON file.

    Returns:
        The validated :class:`~typed_apiclient.models.Configuration`.

    Raises:
        ConfigError: If the file does not exist, is not valid JSON, or fails
            validation.
    """
    path = Path(path)
    return _validate(_read_profile(path), source=str(path))


def save_configuration(configuration: Configuration, path: PathLike) -> None:
    """Persist the serialisable part of *configuration* to *path* atomically."""
    data = configuration.model_dump(mode="json")
    _atomic_write(Path(path), json.dumps(data, indent=2) + "\n")


# --- Environment variables ---


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``TYPED_APICLIENT_*`` values into a nested configuration dict."""
    overrides: dict[str, Any] = {}
    for suffix, (section, name) in _ENV_FIELDS.items():
        value = environ.get(f"{ENV_PREFIX}{suffix}")
        if value is None or value == "":
            continue
        if section is None:
            overrides[name] = value
        else:
            overrides.setdefault(section, {})[name] = value
    return overrides


def configuration_from_env(environ: Optional[Mapping[str, str]] = None) -> Configuration:
    """Build a configuration from ``TYPED_APICLIENT_*`` environment variables.

    String values are coerced by pydantic (``"8080"`` becomes ``8080``,
    ``"true"``/``"1"``/``"yes"``/``"on"`` become ``True``).

    Raises:
        ConfigError: If ``TYPED_APICLIENT_HOST`` is missing or a value is invalid.
    """
    environ = os.environ if environ is None else environ
    return _validate(_env_overrides(environ), source="environment")


def resolve_configuration(
    path: Optional[PathLike] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Configuration:
    """Resolve a configuration from an optional profile file and the environment.

    Environment variables override individual fields from the file; session
    settings are merged field by field.

    Args:
        path: Optional JSON profile file.
        environ: Environment mapping; defaults to :data:`os.environ`.

    Raises:
        ConfigError: If the file is unreadable or the merged values are invalid.
    """
    environ = os.environ if environ is None else environ
    data: dict[str, Any] = _read_profile(Path(path)) if path is not None else {}

    for key, value in _env_overrides(environ).items():
        if isinstance(value, dict):
            section = dict(data.get(key) or {})
            section.update(value)
            data[key] = section
        else:
            data[key] = value

    return _validate(data, source=str(path) if path is not None else "environment")


def _validate(data: dict[str, Any], source: str) -> Configuration:
    try:
        return Configuration.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration from {source}: {exc}") from exc
