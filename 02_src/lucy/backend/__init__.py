"""Backend client module."""

from .backend import AssetsResult, CinemaResult, IBackend
from .http_backend import HttpBackend

__all__ = ["AssetsResult", "CinemaResult", "HttpBackend", "IBackend"]
