"""MCP protocol type definitions.

Pydantic models for the JSON-RPC 2.0 envelopes and the small subset of
Model Context Protocol types this client exchanges.
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

from glmsearch.version import __version__

MCP_PROTOCOL_VERSION = "2025-03-26"
MCP_CLIENT_NAME = "glmsearch"


# =============================================================================
# JSON-RPC 2.0 Types
# =============================================================================


class JSONRPCRequest(BaseModel):
  """JSON-RPC 2.0 request message."""

  jsonrpc: Literal["2.0"] = "2.0"
  method: str
  params: Optional[Dict[str, Any]] = None
  id: Optional[Union[str, int]] = None


class JSONRPCNotification(BaseModel):
  """JSON-RPC 2.0 notification (no id = no response expected)."""

  jsonrpc: Literal["2.0"] = "2.0"
  method: str
  params: Optional[Dict[str, Any]] = None


class JSONRPCErrorData(BaseModel):
  """JSON-RPC 2.0 error object."""

  code: int
  message: str
  data: Optional[Any] = None


class JSONRPCResponse(BaseModel):
  """JSON-RPC 2.0 response message."""

  jsonrpc: Literal["2.0"] = "2.0"
  id: Optional[Union[str, int]] = None
  result: Optional[Any] = None
  error: Optional[JSONRPCErrorData] = None


JSONRPCMessage = Union[JSONRPCRequest, JSONRPCNotification]


# =============================================================================
# MCP Protocol Types
# =============================================================================


class MCPImplementation(BaseModel):
  """MCP implementation info."""

  name: str
  version: str


class MCPClientInfo(BaseModel):
  """MCP client info sent during initialize."""

  protocolVersion: str = MCP_PROTOCOL_VERSION
  capabilities: Dict[str, Any] = Field(default_factory=dict)
  clientInfo: MCPImplementation = Field(default_factory=lambda: MCPImplementation(name=MCP_CLIENT_NAME, version=__version__))


class MCPServerInfo(BaseModel):
  """Server info returned from initialize (fields are best-effort)."""

  protocolVersion: Optional[str] = None
  capabilities: Optional[Dict[str, Any]] = None
  serverInfo: Optional[MCPImplementation] = None
