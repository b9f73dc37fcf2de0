"""Load tracking.yml into a TrackingConfig."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union
import logging
import re

import yaml
from pydantic import ValidationError

from shiptrack.config.env import get_app_env
from shiptrack.config.schema import TrackingDocument
from shiptrack.models import Annotation, EnvCfg, TrackingConfig

logger = logging.getLogger("shiptrack.config.loader")

DEFAULT_CONFIG_FILENAME = "tracking.yml"


class ConfigError(ValueError):
    """Raised when the tracking configuration is missing or invalid."""


class ConfigYamlLoader(yaml.SafeLoader):
    """SafeLoader that keeps zero-padded digit scalars (zips, tracking numbers) as strings."""


ConfigYamlLoader.yaml_implicit_resolvers = {
    first: list(resolvers)
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
# YAML 1.1 reads 02134 as octal; must win over the int resolver for "0"
ConfigYamlLoader.yaml_implicit_resolvers["0"].insert(
    0, ("tag:yaml.org,2002:str", re.compile(r"^0[0-9]+$")))


def _format_validation_error(e: ValidationError) -> str:
    details = []
    for error in e.errors():
        field_path = " -> ".join(str(part) for part in error["loc"])
        if error["type"] == "missing":
            details.append(f"Missing required field: {field_path}")
        else:
            details.append(f"{field_path}: {error['msg']}")
    return "Invalid configuration: " + "; ".join(details)


def build_config(data: Mapping[str, Any], env_cfg: Optional[EnvCfg] = None) -> TrackingConfig:
    """
    Validate a parsed config document. Credentials missing from the `usps`
    block fall back to the environment (USPS_USERNAME, USPS_CLIENT_IP, ...).
    """
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration must be a mapping at the top level")

    try:
        doc = TrackingDocument.model_validate(dict(data), context={"env": env_cfg or EnvCfg()})
    except ValidationError as e:
        raise ConfigError(_format_validation_error(e)) from e

    usps = doc.usps
    return TrackingConfig(
        zip=doc.zip,
        username=usps.username,
        client_ip=usps.client_ip,
        source_id=usps.source_id,
        api_base_url=usps.api_base_url,
        tracking_numbers=tuple(usps.tracking),
        annotations={
            number: Annotation(sender=note.sender, description=note.description)
            for number, note in doc.annotations.items()
        },
        timeout=float(usps.timeout),
        verify_tls=usps.verify_tls,
    )


def load_config(
    config_path: Union[str, Path] = DEFAULT_CONFIG_FILENAME,
    *,
    env_cfg: Optional[EnvCfg] = None,
) -> TrackingConfig:
    """
    Read and validate a YAML tracking config.

    Raises ConfigError when the file is missing, unreadable, not valid YAML,
    or lacks required values.
    """
    path = Path(config_path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.load(fh, Loader=ConfigYamlLoader)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML configuration {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}") from e

    if not data:
        raise ConfigError(f"Configuration file is empty: {path}")

    if env_cfg is None:
        env_cfg = get_app_env(dotenv_path=None, strict=False)

    cfg = build_config(data, env_cfg)
    logger.info(
        "Loaded %s: %d tracking number(s), %d annotation(s)",
        path, len(cfg.tracking_numbers), len(cfg.annotations),
    )
    return cfg
