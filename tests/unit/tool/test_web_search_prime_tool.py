"""Unit tests for the host-facing web_search_prime tool."""

import pytest

from glmsearch.config import WebSearchPrimeConfig
from glmsearch.mcp.session import MCPSessionManager
from glmsearch.tool import TOOL_NAME, TOOL_PARAMETERS, WebSearchPrimeTool, create_web_search_prime_tool

URL = "https://mcp.example.test/mcp"


@pytest.fixture
def make_tool(mcp_server, clock):
  """Return a factory building an enabled tool wired to the fake server."""

  def _make(config=None, env=None):
    config = config if config is not None else {"apiKey": "k", "url": URL}
    return create_web_search_prime_tool(
      config,
      env=env if env is not None else {},
      transport=mcp_server,
      sessions=MCPSessionManager(mcp_server, clock=clock),
      clock=clock,
    )

  return _make


@pytest.mark.unit
class TestCreateTool:
  """Tests for create_web_search_prime_tool()."""

  def test_disabled_returns_none(self):
    """An explicitly disabled tool is not created."""
    assert create_web_search_prime_tool({"enabled": False, "apiKey": "k"}, env={}) is None

  def test_no_key_and_no_flag_returns_none(self):
    """Without a key and without enabled, the tool is not created."""
    assert create_web_search_prime_tool({}, env={}) is None

  def test_env_key_enables(self):
    """A key from the environment is enough."""
    tool = create_web_search_prime_tool(None, env={"ZHIPU_API_KEY": "z"})
    assert isinstance(tool, WebSearchPrimeTool)
    assert tool.api_key == "z"

  def test_accepts_config_object(self):
    """A WebSearchPrimeConfig is used as-is."""
    tool = create_web_search_prime_tool(WebSearchPrimeConfig(api_key="k", timeout_seconds=9.5, cache_ttl_minutes=1), env={})
    assert tool.timeout_seconds == 9
    assert tool.cache_ttl_ms == 60_000

  def test_metadata(self):
    """The tool advertises its name and a query/count schema."""
    tool = create_web_search_prime_tool({"apiKey": "k"}, env={})
    assert tool.name == TOOL_NAME == "web_search_prime"
    assert TOOL_PARAMETERS["required"] == ["query"]
    assert TOOL_PARAMETERS["properties"]["count"]["maximum"] == 20


@pytest.mark.unit
class TestExecute:
  """Tests for WebSearchPrimeTool.execute()."""

  @pytest.mark.asyncio
  async def test_missing_api_key(self, make_tool, mcp_server):
    """Enabled without a key returns missing_api_key and sends nothing."""
    tool = make_tool({"enabled": True})

    payload = await tool.execute({"query": "python"})

    assert payload["error"] == "missing_api_key"
    assert "GLM_API_KEY" in payload["message"]
    assert mcp_server.sent == []

  @pytest.mark.asyncio
  @pytest.mark.parametrize("args", [{}, {"query": ""}, {"query": "   "}, {"query": 42}, None])
  async def test_invalid_query(self, make_tool, mcp_server, args):
    """A missing or blank query is rejected before any network call."""
    tool = make_tool()

    payload = await tool.execute(args)

    assert payload["error"] == "invalid_input"
    assert mcp_server.sent == []

  @pytest.mark.asyncio
  async def test_successful_search(self, make_tool, mcp_server, make_hits, tool_result):
    """A valid call returns the search payload with the trimmed query."""
    mcp_server.tool_result = tool_result(make_hits(8))
    tool = make_tool()

    payload = await tool.execute({"query": "  python  "})

    assert payload["query"] == "python"
    assert payload["count"] == 5
    assert mcp_server.sent[0].url == URL
    assert mcp_server.sent[0].api_key == "k"

  @pytest.mark.asyncio
  async def test_count_clamped(self, make_tool, mcp_server, make_hits, tool_result):
    """Counts above 20 are clamped."""
    mcp_server.tool_result = tool_result(make_hits(25))
    tool = make_tool()

    payload = await tool.execute({"query": "python", "count": 50})

    assert payload["count"] == 20

  @pytest.mark.asyncio
  async def test_env_key_used_for_requests(self, make_tool, mcp_server, tool_result):
    """The env fallback key is the bearer token."""
    mcp_server.tool_result = tool_result([])
    tool = make_tool({"url": URL}, env={"GLM_API_KEY": "env-key"})

    await tool.execute({"query": "python"})

    assert {s.api_key for s in mcp_server.sent} == {"env-key"}

  @pytest.mark.asyncio
  async def test_failure_is_a_payload(self, make_tool, mcp_server):
    """Remote failures surface as search_failed, never as exceptions."""
    mcp_server.tool_failures = [RuntimeError("down"), RuntimeError("still down")]
    tool = make_tool()

    payload = await tool.execute({"query": "python"})

    assert payload["error"] == "search_failed"
    assert payload["message"] == "still down"

  @pytest.mark.asyncio
  async def test_call_shortcut(self, make_tool, mcp_server, tool_result):
    """Calling the tool directly is the same as execute()."""
    mcp_server.tool_result = tool_result([])
    tool = make_tool()

    payload = await tool("python", count=2)

    assert payload["query"] == "python"
    assert payload["provider"] == "glm-web-search-prime"

  @pytest.mark.asyncio
  async def test_cache_disabled_by_zero_ttl(self, make_tool, mcp_server, tool_result):
    """cacheTtlMinutes of 0 turns caching off."""
    mcp_server.tool_result = tool_result([])
    tool = make_tool({"apiKey": "k", "url": URL, "cacheTtlMinutes": 0})

    await tool.execute({"query": "python"})
    payload = await tool.execute({"query": "python"})

    assert "cached" not in payload
    assert mcp_server.count("tools/call") == 2
