"""MCP transport implementations."""

from glmsearch.mcp.transports.base import BaseTransport, TransportResponse
from glmsearch.mcp.transports.http import SESSION_HEADER, HTTPTransport

__all__ = [
  "BaseTransport",
  "TransportResponse",
  "HTTPTransport",
  "SESSION_HEADER",
]
