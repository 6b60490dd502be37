"""Base transport interface for MCP protocol."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from glmsearch.mcp.protocol import build_message
from glmsearch.mcp.types import JSONRPCMessage, JSONRPCResponse

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass
class TransportResponse:
  """Outcome of one request/response cycle.

  Attributes:
    message: Decoded JSON-RPC response, or None when the server answered
        without a body (202/204 or ``Content-Length: 0``).
    session_id: Authoritative session id: the one returned by the server,
        falling back to the one sent with the request.
  """

  message: Optional[JSONRPCResponse] = None
  session_id: Optional[str] = None


class BaseTransport(ABC):
  """Abstract base class for MCP transports.

  A transport performs exactly one request/response exchange per ``send``
  call. It holds no session state: the session id travels in and out of
  every call, so one transport can serve any number of endpoints.
  """

  def __init__(self) -> None:
    self._request_id: int = 0

  def next_request_id(self) -> int:
    self._request_id += 1
    return self._request_id

  @abstractmethod
  async def send(
    self,
    url: str,
    api_key: str,
    message: JSONRPCMessage,
    session_id: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
  ) -> TransportResponse:
    """Send one JSON-RPC message and decode the reply.

    Args:
        url: MCP endpoint URL.
        api_key: Bearer token.
        message: Request or notification to send.
        session_id: Session id to attach, if any.
        timeout: Deadline in seconds for the whole exchange.

    Returns:
        TransportResponse with the decoded envelope and session id.

    Raises:
        MCPTransportError: On non-2xx status or network failure.
        MCPTimeoutError: If the deadline is exceeded.
        MCPProtocolError: If the body cannot be decoded.
    """
    pass

  async def request(
    self,
    url: str,
    api_key: str,
    method: str,
    params: Optional[Dict[str, Any]] = None,
    session_id: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
  ) -> TransportResponse:
    """Send a JSON-RPC request with a fresh id."""
    message = build_message(method, params, request_id=self.next_request_id())
    return await self.send(url, api_key, message, session_id=session_id, timeout=timeout)

  async def notify(
    self,
    url: str,
    api_key: str,
    method: str,
    params: Optional[Dict[str, Any]] = None,
    session_id: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
  ) -> TransportResponse:
    """Send a JSON-RPC notification (no id, no response expected)."""
    message = build_message(method, params)
    return await self.send(url, api_key, message, session_id=session_id, timeout=timeout)
