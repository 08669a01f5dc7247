# amalgo/config/__init__.py
from .settings import AmalgoConfig, OutputFormat

__all__ = ["AmalgoConfig", "OutputFormat"]
