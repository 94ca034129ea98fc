# Services - payload normalization and event application
from .applier import apply
from .normalizer import decode_payload, normalize

__all__ = ["apply", "decode_payload", "normalize"]
