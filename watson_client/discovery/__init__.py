from . import models
from .enums import FileContentType, Language, Size, Step
from .v1 import DiscoveryV1

__all__ = [
    "DiscoveryV1",
    "FileContentType",
    "Language",
    "Size",
    "Step",
    "models",
]
