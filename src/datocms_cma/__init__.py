"""Cliente Python de la Content Management API de DatoCMS."""

from datocms_cma.client import Client
from datocms_cma.core.config import ClientSettings
from datocms_cma.core.errors import (
    ApiConnectionError,
    ApiError,
    ApiTimeoutError,
    ConfigurationError,
    DatoCMSError,
    JobTimeoutError,
    RateLimitError,
)

__all__ = [
    "ApiConnectionError",
    "ApiError",
    "ApiTimeoutError",
    "Client",
    "ClientSettings",
    "ConfigurationError",
    "DatoCMSError",
    "JobTimeoutError",
    "RateLimitError",
]

__version__ = "0.1.0"
