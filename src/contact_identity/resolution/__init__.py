from contact_identity.resolution.response import IdentifyResult, build_identify_result
from contact_identity.resolution.service import get_cluster, identify

__all__ = [
    "IdentifyResult",
    "build_identify_result",
    "get_cluster",
    "identify",
]
