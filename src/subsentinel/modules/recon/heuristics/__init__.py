"""Pure detection heuristics over collected DNS and HTTP data."""

from .anomaly import ANOMALY_TOKENS, AnomalyResult, detect_anomaly
from .cloud import CLOUD_PROVIDERS, detect_cloud_provider
from .fingerprint import fingerprint_technologies
from .takeover import TAKEOVER_FINGERPRINTS, TakeoverResult, check_takeover

__all__ = [
    "ANOMALY_TOKENS",
    "AnomalyResult",
    "CLOUD_PROVIDERS",
    "TAKEOVER_FINGERPRINTS",
    "TakeoverResult",
    "check_takeover",
    "detect_anomaly",
    "detect_cloud_provider",
    "fingerprint_technologies",
]
