"""MCP session management.

Owns the per-endpoint session identity: performs the initialize handshake
when no live session exists and drops sessions that are suspected stale.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from glmsearch.mcp.errors import MCPHandshakeError
from glmsearch.mcp.transports.base import DEFAULT_TIMEOUT_SECONDS, BaseTransport
from glmsearch.mcp.types import MCPClientInfo, MCPServerInfo
from glmsearch.utils.log import log_debug, log_info

# Client-side freshness heuristic; the server may expire sessions earlier or later.
SESSION_MAX_AGE_SECONDS = 10 * 60


@dataclass(frozen=True)
class MCPSession:
  """A server-issued session bound to one endpoint.

  Attributes:
    endpoint_url: MCP endpoint the session belongs to.
    session_id: Opaque ``Mcp-Session-Id`` value.
    created_at: Clock reading at the end of the handshake.
  """

  endpoint_url: str
  session_id: str
  created_at: float = field(default_factory=time.monotonic)


class MCPSessionManager:
  """Session manager keyed by endpoint URL.

  Each endpoint moves through NoSession -> Handshaking -> Active -> Stale
  -> Handshaking ... Sessions are replaced on re-handshake, never mutated.

  Args:
    transport: Transport used for the handshake.
    max_age_seconds: Age after which a session is treated as stale.
    clock: Monotonic time source.
  """

  def __init__(
    self,
    transport: BaseTransport,
    max_age_seconds: float = SESSION_MAX_AGE_SECONDS,
    clock: Callable[[], float] = time.monotonic,
  ) -> None:
    self._transport = transport
    self._max_age = max_age_seconds
    self._clock = clock
    self._sessions: Dict[str, MCPSession] = {}

  def _is_expired(self, session: MCPSession) -> bool:
    return (self._clock() - session.created_at) >= self._max_age

  def get(self, url: str) -> Optional[MCPSession]:
    """Return the live session for ``url``, or None if absent or stale."""
    session = self._sessions.get(url)
    if session is None or self._is_expired(session):
      return None
    return session

  async def ensure_session(self, url: str, api_key: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Return a live session id for ``url``, handshaking if necessary.

    Args:
      url: MCP endpoint URL.
      api_key: Bearer token.
      timeout: Deadline in seconds for each handshake request.

    Returns:
      The session id.

    Raises:
      MCPHandshakeError: If the server does not issue a session id.
      MCPTransportError, MCPTimeoutError, MCPProtocolError: From the transport.
    """
    existing = self.get(url)
    if existing is not None:
      return existing.session_id

    log_debug(f"MCP [{url}] Initializing session...")

    # Step 1: initialize
    init = await self._transport.request(
      url,
      api_key,
      "initialize",
      params=MCPClientInfo().model_dump(),
      timeout=timeout,
    )

    if init.message is not None and init.message.error is not None:
      error = init.message.error
      raise MCPHandshakeError(
        f"MCP initialize failed: {error.message}",
        endpoint=url,
        error_code=error.code,
        error_data=error.data,
      )

    session_id = init.session_id
    if not session_id:
      raise MCPHandshakeError("MCP server did not return Mcp-Session-Id", endpoint=url)

    if init.message is not None and isinstance(init.message.result, dict):
      try:
        server = MCPServerInfo.model_validate(init.message.result)
        if server.serverInfo:
          log_debug(f"MCP [{url}] Server: {server.serverInfo.name} v{server.serverInfo.version}")
      except Exception as e:
        log_debug(f"MCP [{url}] Unrecognised initialize result: {e}")

    # Step 2: notifications/initialized
    await self._transport.notify(
      url,
      api_key,
      "notifications/initialized",
      params={},
      session_id=session_id,
      timeout=timeout,
    )

    self._sessions[url] = MCPSession(endpoint_url=url, session_id=session_id, created_at=self._clock())
    log_info(f"MCP [{url}] Session established")
    return session_id

  def invalidate(self, url: str) -> bool:
    """Drop the stored session for ``url``.

    Returns:
      True if a session was removed, False otherwise.
    """
    if self._sessions.pop(url, None) is not None:
      log_debug(f"MCP [{url}] Session invalidated")
      return True
    return False

  def __contains__(self, url: object) -> bool:
    return isinstance(url, str) and self.get(url) is not None
