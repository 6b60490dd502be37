"""HTTP transport for MCP servers using the Streamable HTTP protocol.

This implements the MCP Streamable HTTP transport where all communication
happens via POST requests and responses can be either JSON or SSE streams.
"""

import asyncio
from typing import Dict, Optional

import httpx

from glmsearch.mcp.errors import MCPProtocolError, MCPTimeoutError, MCPTransportError
from glmsearch.mcp.protocol import decode_response, encode_message, last_event_data
from glmsearch.mcp.transports.base import DEFAULT_TIMEOUT_SECONDS, BaseTransport, TransportResponse
from glmsearch.mcp.types import JSONRPCMessage, JSONRPCNotification
from glmsearch.utils.log import log_debug

SESSION_HEADER = "Mcp-Session-Id"

# Status codes a server may use to acknowledge a notification without a body.
EMPTY_BODY_STATUS_CODES = (202, 204)


class HTTPTransport(BaseTransport):
  """Transport for MCP servers using HTTP POST with JSON or SSE responses.

  This implements the MCP "Streamable HTTP" transport, where:
  - All messages are sent via HTTP POST to a single endpoint
  - The Accept header must include both application/json and text/event-stream
  - Responses can be direct JSON or SSE streams with event: message
  - The session is carried in the ``Mcp-Session-Id`` header

  Example:
      transport = HTTPTransport()
      response = await transport.request(
          "https://example.com/mcp",
          api_key,
          "tools/call",
          {"name": "webSearchPrime", "arguments": {"search_query": "python"}},
          session_id=session_id,
      )
  """

  def __init__(
    self,
    client: Optional[httpx.AsyncClient] = None,
    headers: Optional[Dict[str, str]] = None,
  ) -> None:
    """Initialize the HTTP transport.

    Args:
        client: Shared HTTP client. When omitted, a short-lived client is
            created for every request.
        headers: Additional HTTP headers to send.
    """
    super().__init__()
    self._client: Optional[httpx.AsyncClient] = client
    self._headers: Dict[str, str] = headers or {}

  def _build_headers(self, api_key: str, session_id: Optional[str]) -> Dict[str, str]:
    headers = {
      **self._headers,
      "Content-Type": "application/json",
      "Accept": "application/json, text/event-stream",
      "Authorization": f"Bearer {api_key}",
    }
    if session_id:
      headers[SESSION_HEADER] = session_id
    return headers

  async def send(
    self,
    url: str,
    api_key: str,
    message: JSONRPCMessage,
    session_id: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
  ) -> TransportResponse:
    """Send a JSON-RPC message via HTTP POST.

    The timeout bounds the whole exchange (connect, upload and body read).
    On expiry the pending request task is cancelled, which closes the
    underlying connection.

    Raises:
        MCPTransportError: On non-2xx status or network failure.
        MCPTimeoutError: If the request times out.
        MCPProtocolError: If the response body is invalid.
    """
    method = message.method
    if isinstance(message, JSONRPCNotification):
      log_debug(f"MCP [{url}] -> {method} (notification)")
    else:
      log_debug(f"MCP [{url}] -> {method} (id={message.id})")

    headers = self._build_headers(api_key, session_id)
    body = encode_message(message)

    try:
      response = await asyncio.wait_for(self._post(url, headers, body, timeout), timeout=timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException):
      raise MCPTimeoutError(
        f"Request '{method}' to '{url}' timed out after {timeout}s",
        endpoint=url,
        timeout_seconds=timeout,
      )
    except httpx.HTTPError as e:
      raise MCPTransportError(
        f"Request '{method}' to '{url}' failed: {e}",
        endpoint=url,
        original_error=e,
      )

    return self._decode(url, method, response, session_id)

  async def _post(self, url: str, headers: Dict[str, str], body: dict, timeout: float) -> httpx.Response:
    if self._client is not None:
      return await self._client.post(url, headers=headers, json=body, timeout=timeout)
    async with httpx.AsyncClient(timeout=timeout) as client:
      return await client.post(url, headers=headers, json=body)

  def _decode(
    self,
    url: str,
    method: str,
    response: httpx.Response,
    sent_session_id: Optional[str],
  ) -> TransportResponse:
    session_id = response.headers.get(SESSION_HEADER) or sent_session_id

    if not response.is_success:
      detail = response.text.strip()
      raise MCPTransportError(
        f"MCP request error ({response.status_code}): {detail[:500] or response.reason_phrase}",
        endpoint=url,
        http_status=response.status_code,
        body=detail,
      )

    # JSON-RPC notifications may be acknowledged with no body at all.
    if (
      response.status_code in EMPTY_BODY_STATUS_CODES
      or response.headers.get("content-length") == "0"
      or not response.content.strip()
    ):
      log_debug(f"MCP [{url}] <- {method} (empty body, status={response.status_code})")
      return TransportResponse(message=None, session_id=session_id)

    content_type = response.headers.get("content-type", "")
    if "text/event-stream" in content_type:
      data = last_event_data(response.text, endpoint=url)
    else:
      data = response.text

    try:
      decoded = decode_response(data, endpoint=url)
    except MCPProtocolError:
      log_debug(f"MCP [{url}] <- {method} undecodable body (content-type={content_type!r})")
      raise

    log_debug(f"MCP [{url}] <- response (id={decoded.id})")
    return TransportResponse(message=decoded, session_id=session_id)
