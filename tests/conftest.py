"""
Root conftest: shared fixtures for the entire test suite.

Fixture guide:
  clock        → manually advanced monotonic clock
  mcp_server   → in-process fake MCP server implementing BaseTransport
  make_hits    → factory for provider-shaped search hits
  tool_result  → factory wrapping text into a tools/call result

No test in this suite touches the network.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import pytest

from glmsearch.mcp.transports.base import BaseTransport, TransportResponse
from glmsearch.mcp.types import JSONRPCErrorData, JSONRPCMessage, JSONRPCResponse


class FakeClock:
  """Monotonic clock that only moves when told to."""

  def __init__(self, start: float = 1_000.0) -> None:
    self.now = start

  def __call__(self) -> float:
    return self.now

  def advance(self, seconds: float) -> None:
    self.now += seconds


@dataclass
class SentMessage:
  url: str
  api_key: str
  method: str
  session_id: Optional[str]
  message: JSONRPCMessage
  timeout: float


class FakeMCPServer(BaseTransport):
  """Scripted stand-in for a Streamable HTTP MCP endpoint.

  Attributes:
    tool_result: ``result`` returned for ``tools/call``.
    tool_failures: Queue consumed one per ``tools/call``; an Exception is
        raised, a JSONRPCResponse (or None, for an empty body) is returned as-is.
    issue_session_ids: When False, initialize returns no session id.
    initialize_error: JSON-RPC error returned for initialize.
  """

  def __init__(self) -> None:
    super().__init__()
    self.sent: List[SentMessage] = []
    self.sessions_issued = 0
    self.tool_result: Any = {"content": []}
    self.tool_failures: List[Union[Exception, JSONRPCResponse, None]] = []
    self.issue_session_ids = True
    self.initialize_error: Optional[JSONRPCErrorData] = None

  async def send(
    self,
    url: str,
    api_key: str,
    message: JSONRPCMessage,
    session_id: Optional[str] = None,
    timeout: float = 30.0,
  ) -> TransportResponse:
    self.sent.append(SentMessage(url, api_key, message.method, session_id, message, timeout))
    request_id = getattr(message, "id", None)

    if message.method == "initialize":
      if self.initialize_error is not None:
        return TransportResponse(message=JSONRPCResponse(id=request_id, error=self.initialize_error))
      result = {
        "protocolVersion": "2025-03-26",
        "capabilities": {"tools": {}},
        "serverInfo": {"name": "fake-mcp", "version": "0.0.1"},
      }
      if not self.issue_session_ids:
        return TransportResponse(message=JSONRPCResponse(id=request_id, result=result))
      self.sessions_issued += 1
      return TransportResponse(message=JSONRPCResponse(id=request_id, result=result), session_id=f"sess-{self.sessions_issued}")

    if message.method == "notifications/initialized":
      return TransportResponse(message=None, session_id=session_id)

    if message.method == "tools/call":
      if self.tool_failures:
        failure = self.tool_failures.pop(0)
        if isinstance(failure, Exception):
          raise failure
        return TransportResponse(message=failure, session_id=session_id)
      return TransportResponse(message=JSONRPCResponse(id=request_id, result=self.tool_result), session_id=session_id)

    return TransportResponse(
      message=JSONRPCResponse(id=request_id, error=JSONRPCErrorData(code=-32601, message=f"Method not found: {message.method}")),
      session_id=session_id,
    )

  def methods(self) -> List[str]:
    return [s.method for s in self.sent]

  def count(self, method: str) -> int:
    return sum(1 for s in self.sent if s.method == method)


@pytest.fixture
def clock() -> FakeClock:
  return FakeClock()


@pytest.fixture
def mcp_server() -> FakeMCPServer:
  return FakeMCPServer()


@pytest.fixture
def make_hits():
  """Return a factory producing ``n`` provider-shaped hits."""

  def _make(n: int) -> List[Dict[str, Any]]:
    return [
      {
        "title": f"Result {i}",
        "link": f"https://example.com/{i}",
        "content": f"Summary {i}",
        "icon": f"https://example.com/{i}/favicon.ico",
        "media": "Example",
        "refer": f"ref_{i}",
      }
      for i in range(1, n + 1)
    ]

  return _make


@pytest.fixture
def tool_result():
  """Return a factory wrapping text (or JSON-able data) into a tools/call result."""

  def _wrap(data: Any) -> Dict[str, Any]:
    text = data if isinstance(data, str) else json.dumps(data)
    return {"content": [{"type": "text", "text": text}]}

  return _wrap
