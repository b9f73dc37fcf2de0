# src/shiptrack/config/env.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import dotenv_values, find_dotenv, load_dotenv

from shiptrack.models import EnvCfg


class EnvError(RuntimeError):
    """Raised when required environment variables are missing."""


# Only the API user id is required when running with --strict-env; the rest
# may come from the YAML config.
REQUIRED_KEYS: Tuple[str, ...] = (
    "USPS_USERNAME",
)

OPTIONAL_KEYS: Tuple[str, ...] = (
    "USPS_CLIENT_IP",
    "USPS_SOURCE_ID",
    "USPS_API_BASE_URL",
)


def load_project_dotenv(*, override: bool = False) -> Path:
    """
    Load variables from the nearest `.env` file (searching upward from CWD).
    Does NOT override existing env vars unless `override=True`.
    Returns the resolved Path to the .env file if found; otherwise Path().
    """
    dotenv_str = find_dotenv(filename=".env", usecwd=True)
    if not dotenv_str:
        return Path()

    dotenv_path = Path(dotenv_str)
    load_dotenv(dotenv_path=dotenv_path, override=override)
    return dotenv_path.resolve()


def env(name: str, *, default: Optional[str] = None, required: bool = False, cast=None):
    """
    Test-friendly accessor.

    - If `required=True` and var is missing, raise KeyError(name).
    - If `cast` is provided, apply it to the raw string and propagate cast errors.
    - Returns `default` when missing and not required.
    """
    raw = os.getenv(name)
    if raw is None:
        if required:
            raise KeyError(name)
        return default

    if cast is not None:
        return cast(raw)
    return raw


def load_env(
    dotenv_path: Optional[Path] = None,
    *,
    override: bool = False,
    required_keys: Tuple[str, ...] = (),
    strict: bool = False,
) -> Dict[str, str]:
    """
    Load env vars from a .env file into the process environment and return the
    key/value pairs found in that file.

    - If `dotenv_path` is provided, load exactly that file.
    - Otherwise, auto-discover the nearest .env via `load_project_dotenv`.
    - If `strict=True`, every name in `required_keys` must be set afterwards,
      otherwise EnvError is raised.
    """
    if dotenv_path:
        path = Path(dotenv_path)
        if path.is_file():
            load_dotenv(dotenv_path=path, override=override)
    else:
        path = load_project_dotenv(override=override)

    loaded: Dict[str, str] = {}
    if path.is_file():
        loaded = {k: v for k, v in dotenv_values(path).items() if v is not None}

    if strict and required_keys:
        missing = [k for k in required_keys if not os.getenv(k)]
        if missing:
            raise EnvError(
                f"Missing required environment variable(s): {', '.join(missing)}")

    return loaded


def get_app_env(dotenv_path: Path | str | None = ".env", *, strict: bool = False) -> EnvCfg:
    """
    Load USPS credential fallbacks and return a typed config object.

    - `dotenv_path` may point to a specific .env file or be None to auto-discover.
    - Existing process env always wins over file values.
    - When `strict=True` this validates REQUIRED_KEYS and raises EnvError on missing values.
    """
    load_env(
        Path(dotenv_path) if dotenv_path else None,
        override=False,
        required_keys=REQUIRED_KEYS,
        strict=strict,
    )

    values = {k: env(k) or None for k in REQUIRED_KEYS + OPTIONAL_KEYS}
    return EnvCfg(**values)


__all__ = [
    "EnvError",
    "REQUIRED_KEYS",
    "OPTIONAL_KEYS",
    "load_project_dotenv",
    "load_env",
    "env",
    "get_app_env",
]
