from .config import Annotation, TrackingConfig, DEFAULT_USPS_API_BASE_URL
from .env_cfg import EnvCfg
from .normalized import Carrier, NormalizedTrackingRecord

__all__ = [
    "Annotation",
    "Carrier",
    "DEFAULT_USPS_API_BASE_URL",
    "EnvCfg",
    "NormalizedTrackingRecord",
    "TrackingConfig",
]
