"""Search orchestration for GLM web-search-prime.

Composes the cache, the MCP session manager, the transport and the result
normalizer, and applies the retry-once policy around the remote call.
"""

import copy
import time
from typing import Any, Callable, Dict, Optional

from glmsearch.cache import TTLCache, normalize_cache_key
from glmsearch.config import DEFAULT_CACHE_TTL_MINUTES, DEFAULT_MCP_URL, DEFAULT_TIMEOUT_SECONDS
from glmsearch.exceptions import ConfigError
from glmsearch.mcp.errors import MCPProtocolError, MCPToolError
from glmsearch.mcp.session import MCPSessionManager
from glmsearch.mcp.transports.base import BaseTransport
from glmsearch.mcp.transports.http import HTTPTransport
from glmsearch.search.base import AttemptFailure, AttemptSuccess, NormalizedResults, SearchAttempt
from glmsearch.search.normalizer import parse_search_results
from glmsearch.utils.log import log_debug, log_error, log_warning

PROVIDER = "glm-web-search-prime"
CACHE_KEY_PREFIX = "glm"
TOOL_NAME = "webSearchPrime"
# The GLM tool takes "search_query", not "query".
QUERY_ARGUMENT = "search_query"

DEFAULT_MAX_RESULTS = 5
MAX_RESULTS = 20
MAX_ATTEMPTS = 2


def clamp_count(count: Any, default: int = DEFAULT_MAX_RESULTS) -> int:
  """Coerce a result-count hint into an integer in [1, MAX_RESULTS]."""
  if isinstance(count, bool):
    return default
  try:
    value = int(count)
  except (TypeError, ValueError, OverflowError):
    return default
  return max(1, min(value, MAX_RESULTS))


class WebSearchPrime:
  """Web search through the GLM ``webSearchPrime`` MCP tool.

  Session and cache state are owned by the injected collaborators, so two
  instances never share sessions unless they are handed the same manager.

  Args:
    api_key: Bearer token for the MCP endpoint.
    url: MCP endpoint URL.
    timeout_seconds: Deadline for every HTTP request.
    cache_ttl_ms: Lifetime of cached payloads; 0 disables caching.
    transport: Transport to use (defaults to HTTPTransport).
    sessions: Session manager (defaults to one built on ``transport``).
    cache: Payload cache.
    clock: Monotonic time source, in seconds.

  Example:
      search = WebSearchPrime(api_key="...")
      payload = await search.search("python asyncio", count=3)
  """

  def __init__(
    self,
    api_key: str,
    url: str = DEFAULT_MCP_URL,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    cache_ttl_ms: float = DEFAULT_CACHE_TTL_MINUTES * 60_000,
    transport: Optional[BaseTransport] = None,
    sessions: Optional[MCPSessionManager] = None,
    cache: Optional[TTLCache[Dict[str, Any]]] = None,
    clock: Callable[[], float] = time.monotonic,
  ) -> None:
    if not api_key:
      raise ConfigError("WebSearchPrime requires an API key", setting="api_key")

    self.api_key = api_key
    self.url = url
    self.timeout_seconds = timeout_seconds
    self.cache_ttl_ms = cache_ttl_ms
    self._clock = clock

    self.transport: BaseTransport = transport if transport is not None else HTTPTransport()
    self.sessions = sessions if sessions is not None else MCPSessionManager(self.transport, clock=clock)
    self.cache: TTLCache[Dict[str, Any]] = cache if cache is not None else TTLCache(clock=clock)

  def _elapsed_ms(self, start: float) -> int:
    return int(round((self._clock() - start) * 1000))

  async def search(self, query: str, count: int = DEFAULT_MAX_RESULTS) -> Dict[str, Any]:
    """Search the web and return a JSON-serializable payload.

    Never raises for remote failures: after two failed attempts an error
    payload ``{"error": "search_failed", ...}`` is returned instead.

    Args:
      query: Search query; surrounding whitespace is ignored.
      count: Maximum number of results (clamped to 1-20).

    Returns:
      Success payload ``{query, provider, count, tookMs, results|content}``,
      with ``cached: True`` when served from cache, or the error payload.
    """
    query = query.strip()
    count = clamp_count(count)
    cache_key = normalize_cache_key(f"{CACHE_KEY_PREFIX}:{query}:{count}")

    cached = self.cache.read(cache_key)
    if cached is not None:
      log_debug(f"WebSearchPrime: cache hit for {cache_key!r}")
      return {**copy.deepcopy(cached), "cached": True}

    start = self._clock()
    attempt = await self.search_with_retry(query, count, start)

    if isinstance(attempt, AttemptFailure):
      log_error(f"WebSearchPrime: search failed for {query!r}: {attempt.message}")
      return {
        "error": "search_failed",
        "message": attempt.message,
        "query": query,
        "tookMs": self._elapsed_ms(start),
      }

    self.cache.write(cache_key, attempt.payload, self.cache_ttl_ms)
    return copy.deepcopy(attempt.payload)

  async def search_with_retry(self, query: str, count: int, start: float) -> SearchAttempt:
    """Run up to MAX_ATTEMPTS attempts, invalidating the session after each failure.

    A failure cannot be told apart from an expired server-side session, so
    the session is always dropped before the next attempt.
    """
    attempt: SearchAttempt = AttemptFailure(RuntimeError("no attempt made"))
    for number in range(1, MAX_ATTEMPTS + 1):
      attempt = await self.attempt(query, count, start)
      if isinstance(attempt, AttemptSuccess):
        return attempt
      self.sessions.invalidate(self.url)
      if number < MAX_ATTEMPTS:
        log_warning(f"WebSearchPrime: attempt {number}/{MAX_ATTEMPTS} failed, retrying: {attempt.message}")
      else:
        log_debug(f"WebSearchPrime: attempt {number}/{MAX_ATTEMPTS} failed: {attempt.message}")
    return attempt

  async def attempt(self, query: str, count: int, start: float) -> SearchAttempt:
    """One pass of ensure-session, tool call and normalization."""
    try:
      session_id = await self.sessions.ensure_session(self.url, self.api_key, timeout=self.timeout_seconds)
      result = await self.call_tool(session_id, query)
      normalized = parse_search_results(result)
    except Exception as e:
      return AttemptFailure(e)
    return AttemptSuccess(self._build_payload(query, count, normalized, start))

  async def call_tool(self, session_id: str, query: str) -> Any:
    """Invoke ``webSearchPrime`` and return the JSON-RPC ``result``.

    Raises:
      MCPToolError: If the response carries a JSON-RPC error.
      MCPProtocolError: If the server answered without a body.
    """
    response = await self.transport.request(
      self.url,
      self.api_key,
      "tools/call",
      params={"name": TOOL_NAME, "arguments": {QUERY_ARGUMENT: query}},
      session_id=session_id,
      timeout=self.timeout_seconds,
    )

    message = response.message
    if message is None:
      raise MCPProtocolError("Empty response to tools/call", endpoint=self.url)
    if message.error is not None:
      raise MCPToolError(
        f"MCP tool error: {message.error.message} (code {message.error.code})",
        tool_name=TOOL_NAME,
        endpoint=self.url,
        error_code=message.error.code,
        error_data=message.error.data,
      )
    if message.result is None:
      return message.model_dump(exclude_none=True)
    return message.result

  def _build_payload(self, query: str, count: int, normalized: NormalizedResults, start: float) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
      "query": query,
      "provider": PROVIDER,
      "count": len(normalized.results),
      "tookMs": self._elapsed_ms(start),
    }
    if normalized.results:
      # The upstream has no limit parameter; truncate client-side.
      results = normalized.results[:count]
      payload["results"] = [item.to_dict() for item in results]
      payload["count"] = len(results)
    elif normalized.raw:
      payload["content"] = normalized.raw
    return payload
