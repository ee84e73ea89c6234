from .loader import load_config
from .models import AssetsConfig, FingerprintConfig, WardenConfig

__all__ = [
    "AssetsConfig",
    "FingerprintConfig",
    "WardenConfig",
    "load_config",
]
