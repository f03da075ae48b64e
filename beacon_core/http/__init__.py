"""
HTTP Client Module

requests-backed HTTP client shared by the network adapters.
"""

from .client import HttpClient, HttpResponse, HttpError

__all__ = [
    "HttpClient",
    "HttpResponse",
    "HttpError",
]
