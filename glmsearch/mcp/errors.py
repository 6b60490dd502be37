"""MCP-specific exceptions.

Custom exceptions for transport failures, timeouts, protocol violations,
handshake failures and tool-level errors reported by the server.
"""

from typing import Any, Optional

from glmsearch.exceptions import GlmSearchError


class MCPError(GlmSearchError):
  """Base exception for MCP-related errors."""

  def __init__(
    self,
    message: str,
    status_code: int = 500,
    endpoint: Optional[str] = None,
  ):
    super().__init__(message, status_code)
    self.endpoint = endpoint
    self.type = "mcp_error"
    self.error_id = "mcp_error"


class MCPTransportError(MCPError):
  """Raised when an HTTP exchange with the MCP endpoint fails.

  This can happen due to:
  - Non-2xx HTTP status (``http_status`` and ``body`` are set)
  - Network connection refused or reset
  - TLS/SSL errors
  """

  def __init__(
    self,
    message: str,
    endpoint: Optional[str] = None,
    http_status: Optional[int] = None,
    body: Optional[str] = None,
    original_error: Optional[Exception] = None,
  ):
    super().__init__(message, status_code=503, endpoint=endpoint)
    self.http_status = http_status
    self.body = body
    self.original_error = original_error
    self.type = "mcp_transport_error"
    self.error_id = "mcp_transport_error"


class MCPTimeoutError(MCPError):
  """Raised when an MCP request exceeds its deadline.

  The in-flight HTTP request is cancelled before this is raised.
  """

  def __init__(
    self,
    message: str,
    endpoint: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
  ):
    super().__init__(message, status_code=504, endpoint=endpoint)
    self.timeout_seconds = timeout_seconds
    self.type = "mcp_timeout_error"
    self.error_id = "mcp_timeout_error"


class MCPProtocolError(MCPError):
  """Raised when the MCP protocol is violated.

  This can happen due to:
  - Invalid JSON or JSON-RPC envelopes
  - An event stream without any ``data:`` line
  - Missing required fields
  """

  def __init__(
    self,
    message: str,
    endpoint: Optional[str] = None,
    error_code: Optional[int] = None,
    error_data: Optional[Any] = None,
  ):
    super().__init__(message, status_code=502, endpoint=endpoint)
    self.error_code = error_code
    self.error_data = error_data
    self.type = "mcp_protocol_error"
    self.error_id = "mcp_protocol_error"


class MCPHandshakeError(MCPProtocolError):
  """Raised when the initialize handshake does not yield a session."""

  def __init__(
    self,
    message: str,
    endpoint: Optional[str] = None,
    error_code: Optional[int] = None,
    error_data: Optional[Any] = None,
  ):
    super().__init__(message, endpoint=endpoint, error_code=error_code, error_data=error_data)
    self.type = "mcp_handshake_error"
    self.error_id = "mcp_handshake_error"


class MCPToolError(MCPError):
  """Raised when a ``tools/call`` response carries a JSON-RPC error."""

  def __init__(
    self,
    message: str,
    tool_name: str,
    endpoint: Optional[str] = None,
    error_code: Optional[int] = None,
    error_data: Optional[Any] = None,
  ):
    super().__init__(message, status_code=502, endpoint=endpoint)
    self.tool_name = tool_name
    self.error_code = error_code
    self.error_data = error_data
    self.type = "mcp_tool_error"
    self.error_id = "mcp_tool_error"
