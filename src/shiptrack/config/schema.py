"""Pydantic schema for tracking.yml."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    ValidationInfo,
    field_validator,
    model_validator,
)

from shiptrack.models import DEFAULT_USPS_API_BASE_URL, EnvCfg

ZIP_LENGTH = 5


def _as_text(value: Any) -> Any:
    # YAML turns zips and all-digit tracking numbers into ints
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


class AnnotationModel(BaseModel):
    """Sender/description note for one tracking number."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    sender: Optional[str] = None
    description: Optional[str] = None

    @field_validator("sender", "description", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        v = _as_text(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v


class UspsSection(BaseModel):
    """The `usps:` block. Credentials left out here come from the environment."""

    model_config = ConfigDict(
        str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    username: Optional[str] = None
    client_ip: Optional[str] = Field(None, alias="ip")
    source_id: Optional[str] = Field(None, alias="app")
    api_base_url: Optional[str] = Field(None, alias="apiBaseUrl")
    tracking: List[str] = Field(default_factory=list)
    timeout: PositiveFloat = 30.0
    verify_tls: bool = Field(True, alias="verifyTls")

    @field_validator("username", "client_ip", "source_id", "api_base_url", mode="before")
    @classmethod
    def scalar_text(cls, v: Any) -> Any:
        v = _as_text(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("tracking", mode="before")
    @classmethod
    def tracking_as_text(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        return [str(_as_text(t)).strip() for t in v if t is not None and str(t).strip()]

    @model_validator(mode="after")
    def fill_from_env(self, info: ValidationInfo) -> "UspsSection":
        env_cfg: EnvCfg = (info.context or {}).get("env") or EnvCfg()

        self.username = self.username or env_cfg.USPS_USERNAME
        self.client_ip = self.client_ip or env_cfg.USPS_CLIENT_IP
        self.source_id = self.source_id or env_cfg.USPS_SOURCE_ID
        self.api_base_url = (self.api_base_url or env_cfg.USPS_API_BASE_URL
                             or DEFAULT_USPS_API_BASE_URL)

        missing = [
            what for what, value in (
                ("usps.username (or USPS_USERNAME)", self.username),
                ("usps.ip (or USPS_CLIENT_IP)", self.client_ip),
                ("usps.app (or USPS_SOURCE_ID)", self.source_id),
            ) if not value
        ]
        if missing:
            raise ValueError(f"missing {', '.join(missing)}")
        return self


class TrackingDocument(BaseModel):
    """Top level of tracking.yml."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    zip: str = Field(..., min_length=1)
    usps: UspsSection = Field(default_factory=dict, validate_default=True)
    annotations: Dict[str, AnnotationModel] = Field(default_factory=dict)

    @field_validator("zip", mode="before")
    @classmethod
    def zip_as_text(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            # an unquoted 02134 has already lost its leading zero (or been read as octal)
            if len(str(v)) != ZIP_LENGTH:
                raise ValueError(
                    f"numeric zip {v} is not {ZIP_LENGTH} digits; quote it in the config, e.g. zip: \"0{v}\"")
            return str(v)
        return v

    @field_validator("usps", mode="before")
    @classmethod
    def usps_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("annotations", mode="before")
    @classmethod
    def annotation_keys_as_text(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {str(k).strip(): note for k, note in v.items() if note is not None}
