from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple

from shiptrack.config.logging_config import default_log_path_for_config

DEFAULT_CONFIG_CANDIDATES: Tuple[Path, ...] = (
    Path("tracking.yml"),
    Path("tracking.yaml"),
    Path.home() / ".config" / "shiptrack" / "tracking.yml",
)


def find_config_file(
    config_path: Optional[Path] = None,
    candidates: Sequence[Path] = DEFAULT_CONFIG_CANDIDATES,
) -> Path:
    """
    Return the config file to use: `config_path` when given, otherwise the
    first existing default location.

    Raises FileNotFoundError (explicit early signal for the CLI).
    """
    if config_path is not None:
        p = Path(config_path)
        if not p.is_file():
            raise FileNotFoundError(p)
        return p

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(", ".join(str(c) for c in candidates))


def derive_run_paths(config_path: Optional[Path] = None, log_file: Optional[Path] = None) -> Tuple[Path, Path]:
    """(config_path, log_path): the log sits next to the config unless overridden."""
    cfg = find_config_file(config_path)
    log = Path(log_file) if log_file is not None else default_log_path_for_config(cfg)
    return cfg, log
