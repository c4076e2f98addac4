"""
HTTP Client Module

HTTP transport and the execution-layer JSON-RPC client.
"""

from .client import HttpClient, HttpError, HttpResponse
from .rpc import JsonRpcClient

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "JsonRpcClient",
]
