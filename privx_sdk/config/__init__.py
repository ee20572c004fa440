"""SDK configuration."""
from .settings import SdkConfig, load_settings

__all__ = ["SdkConfig", "load_settings"]
