"""
glmsearch MCP - minimal Model Context Protocol client over Streamable HTTP.

Direct Usage:
    from glmsearch.mcp import HTTPTransport, MCPSessionManager

    transport = HTTPTransport()
    sessions = MCPSessionManager(transport)

    async def main():
        session_id = await sessions.ensure_session(url, api_key)
        response = await transport.request(
            url, api_key, "tools/call",
            {"name": "webSearchPrime", "arguments": {"search_query": "mcp"}},
            session_id=session_id,
        )
"""

# Errors
from glmsearch.mcp.errors import (
  MCPError,
  MCPHandshakeError,
  MCPProtocolError,
  MCPTimeoutError,
  MCPToolError,
  MCPTransportError,
)

# Sessions
from glmsearch.mcp.session import SESSION_MAX_AGE_SECONDS, MCPSession, MCPSessionManager

# Transports
from glmsearch.mcp.transports import SESSION_HEADER, BaseTransport, HTTPTransport, TransportResponse

# Types (commonly used)
from glmsearch.mcp.types import (
  MCP_PROTOCOL_VERSION,
  JSONRPCErrorData,
  JSONRPCNotification,
  JSONRPCRequest,
  JSONRPCResponse,
)

__all__ = [
  # Errors
  "MCPError",
  "MCPTransportError",
  "MCPTimeoutError",
  "MCPProtocolError",
  "MCPHandshakeError",
  "MCPToolError",
  # Sessions
  "MCPSession",
  "MCPSessionManager",
  "SESSION_MAX_AGE_SECONDS",
  # Transports
  "BaseTransport",
  "HTTPTransport",
  "TransportResponse",
  "SESSION_HEADER",
  # Types
  "MCP_PROTOCOL_VERSION",
  "JSONRPCRequest",
  "JSONRPCNotification",
  "JSONRPCResponse",
  "JSONRPCErrorData",
]
