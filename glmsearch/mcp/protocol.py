"""JSON-RPC 2.0 protocol utilities for MCP.

Helpers for encoding/decoding MCP protocol messages, including the
``text/event-stream`` framing used by Streamable HTTP servers.
"""

import json
from typing import Any, Dict, Optional, Union

from glmsearch.mcp.errors import MCPProtocolError
from glmsearch.mcp.types import (
  JSONRPCMessage,
  JSONRPCNotification,
  JSONRPCRequest,
  JSONRPCResponse,
)


def build_message(
  method: str,
  params: Optional[Dict[str, Any]] = None,
  request_id: Optional[Union[str, int]] = None,
) -> JSONRPCMessage:
  """Build a JSON-RPC request, or a notification when ``request_id`` is None."""
  if request_id is None:
    return JSONRPCNotification(method=method, params=params)
  return JSONRPCRequest(method=method, params=params, id=request_id)


def encode_message(message: JSONRPCMessage) -> Dict[str, Any]:
  """Encode a message into the dict sent as the HTTP body."""
  return message.model_dump(exclude_none=True)


def decode_response(data: Union[str, bytes, Dict[str, Any]], endpoint: Optional[str] = None) -> JSONRPCResponse:
  """Decode a JSON-RPC response from string, bytes, or dict.

  Args:
      data: Response data to decode.
      endpoint: Endpoint URL for error messages.

  Returns:
      Parsed JSONRPCResponse.

  Raises:
      MCPProtocolError: If data is invalid JSON-RPC.
  """
  if isinstance(data, bytes):
    data = data.decode("utf-8")

  if isinstance(data, str):
    try:
      data = json.loads(data)
    except json.JSONDecodeError as e:
      raise MCPProtocolError(f"Invalid JSON: {e}", endpoint=endpoint)

  if not isinstance(data, dict):
    raise MCPProtocolError("JSON-RPC response must be an object", endpoint=endpoint)

  try:
    return JSONRPCResponse.model_validate(data)
  except Exception as e:
    raise MCPProtocolError(f"Invalid JSON-RPC response: {e}", endpoint=endpoint)


def last_event_data(text: str, endpoint: Optional[str] = None) -> str:
  """Return the payload of the last ``data:`` line of an event stream.

  Earlier data lines are intermediate events (progress, logging) and are
  discarded; the final one carries the JSON-RPC response.

  Raises:
      MCPProtocolError: If the stream contains no usable data line.
  """
  # SSE format:
  # event: message
  # data: {"jsonrpc":"2.0","result":...,"id":1}
  last_data: Optional[str] = None
  for line in text.splitlines():
    if line.startswith("data:"):
      last_data = line[5:].strip()

  if not last_data:
    raise MCPProtocolError("Empty SSE response from MCP server", endpoint=endpoint)
  return last_data
