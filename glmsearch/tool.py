"""Host-facing ``web_search_prime`` tool.

Resolves configuration, validates the call arguments and delegates to
:class:`WebSearchPrime`. Every outcome, including misconfiguration and
unexpected failures, comes back as a JSON-serializable dict.

Example:
    tool = create_web_search_prime_tool({"apiKey": "..."})
    if tool is not None:
        payload = await tool.execute({"query": "latest python release", "count": 3})
"""

import time
from typing import Any, Dict, Mapping, Optional, Union

from glmsearch.config import (
  API_KEY_ENV_VARS,
  WebSearchPrimeConfig,
  resolve_api_key,
  resolve_cache_ttl_ms,
  resolve_enabled,
  resolve_mcp_url,
  resolve_timeout_seconds,
)
from glmsearch.exceptions import ConfigError
from glmsearch.mcp.transports.base import BaseTransport
from glmsearch.search.orchestrator import DEFAULT_MAX_RESULTS, MAX_RESULTS, WebSearchPrime, clamp_count
from glmsearch.utils.log import log_debug, log_error

TOOL_NAME = "web_search_prime"
TOOL_LABEL = "Web Search (GLM)"
TOOL_DESCRIPTION = (
  "Search the web using GLM web-search-prime (via MCP). Returns page titles, URLs, "
  "summaries, site names, and icons. Use this for real-time web information."
)

TOOL_PARAMETERS: Dict[str, Any] = {
  "type": "object",
  "properties": {
    "query": {"type": "string", "description": "Search query string."},
    "count": {
      "type": "integer",
      "description": f"Maximum number of results to return (1-{MAX_RESULTS}).",
      "minimum": 1,
      "maximum": MAX_RESULTS,
    },
  },
  "required": ["query"],
}

MISSING_API_KEY_MESSAGE = (
  f"{TOOL_NAME} needs a GLM API key. Set {' or '.join(API_KEY_ENV_VARS)} in the environment, "
  "or configure apiKey for the tool."
)


class WebSearchPrimeTool:
  """Callable tool wrapper around a lazily built :class:`WebSearchPrime`.

  Args:
    config: Resolved tool configuration.
    env: Environment used for the API-key fallback (defaults to os.environ).
    **search_kwargs: Extra collaborators forwarded to WebSearchPrime
        (``transport``, ``sessions``, ``cache``, ``clock``).
  """

  name = TOOL_NAME
  label = TOOL_LABEL
  description = TOOL_DESCRIPTION
  parameters = TOOL_PARAMETERS

  def __init__(
    self,
    config: Optional[WebSearchPrimeConfig] = None,
    env: Optional[Mapping[str, str]] = None,
    **search_kwargs: Any,
  ) -> None:
    self.config = config or WebSearchPrimeConfig()
    self.api_key = resolve_api_key(self.config, env)
    self.url = resolve_mcp_url(self.config)
    self.timeout_seconds = resolve_timeout_seconds(self.config.timeout_seconds)
    self.cache_ttl_ms = resolve_cache_ttl_ms(self.config.cache_ttl_minutes)
    self._search_kwargs = search_kwargs
    self._search: Optional[WebSearchPrime] = None

  def _get_search(self) -> WebSearchPrime:
    if self._search is None:
      self._search = WebSearchPrime(
        api_key=self.api_key or "",
        url=self.url,
        timeout_seconds=self.timeout_seconds,
        cache_ttl_ms=self.cache_ttl_ms,
        **self._search_kwargs,
      )
    return self._search

  async def execute(self, args: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Run one search call from host-supplied arguments."""
    args = args or {}

    try:
      search = self._get_search()
    except ConfigError:
      return {"error": "missing_api_key", "message": MISSING_API_KEY_MESSAGE}

    query = args.get("query")
    if not isinstance(query, str) or not query.strip():
      return {"error": "invalid_input", "message": "query is required and must be a non-empty string"}
    query = query.strip()
    count = clamp_count(args.get("count", DEFAULT_MAX_RESULTS))

    log_debug(f"{TOOL_NAME}: query={query!r} count={count}")
    start = time.monotonic()
    try:
      return await search.search(query, count)
    except Exception as e:
      log_error(f"{TOOL_NAME}: unexpected failure: {e}")
      return {
        "error": "search_failed",
        "message": str(e) or type(e).__name__,
        "query": query,
        "tookMs": int(round((time.monotonic() - start) * 1000)),
      }

  async def __call__(self, query: str, count: int = DEFAULT_MAX_RESULTS) -> Dict[str, Any]:
    return await self.execute({"query": query, "count": count})


def create_web_search_prime_tool(
  config: Optional[Union[WebSearchPrimeConfig, Mapping[str, Any]]] = None,
  env: Optional[Mapping[str, str]] = None,
  **search_kwargs: Any,
) -> Optional[WebSearchPrimeTool]:
  """Build the tool, or return None when it is disabled.

  The tool is enabled when ``enabled`` is true, or when it is unset and an
  API key resolves from config or environment.

  Args:
    config: WebSearchPrimeConfig or the host's raw config mapping.
    env: Environment used for the API-key fallback (defaults to os.environ).
    **search_kwargs: Collaborators forwarded to WebSearchPrime.
  """
  if not isinstance(config, WebSearchPrimeConfig):
    config = WebSearchPrimeConfig.from_dict(config)
  if not resolve_enabled(config, env):
    log_debug(f"{TOOL_NAME}: disabled")
    return None
  return WebSearchPrimeTool(config, env=env, **search_kwargs)
