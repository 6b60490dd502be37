"""
glmsearch - resilient GLM web-search-prime client over MCP Streamable HTTP.

Quick Start:
    from glmsearch import WebSearchPrime

    search = WebSearchPrime(api_key="...")
    payload = await search.search("python 3.13 release notes", count=3)

As a host tool:
    from glmsearch import create_web_search_prime_tool

    tool = create_web_search_prime_tool({"timeoutSeconds": 20})  # key from GLM_API_KEY
    if tool is not None:
        payload = await tool.execute({"query": "python 3.13", "count": 3})
"""

from glmsearch.cache import TTLCache, normalize_cache_key
from glmsearch.config import WebSearchPrimeConfig
from glmsearch.exceptions import ConfigError, GlmSearchError
from glmsearch.search import SearchResultItem, WebSearchPrime, parse_search_results
from glmsearch.tool import WebSearchPrimeTool, create_web_search_prime_tool
from glmsearch.version import __version__

__all__ = [
  "__version__",
  "GlmSearchError",
  "ConfigError",
  "TTLCache",
  "normalize_cache_key",
  "WebSearchPrimeConfig",
  "SearchResultItem",
  "WebSearchPrime",
  "parse_search_results",
  "WebSearchPrimeTool",
  "create_web_search_prime_tool",
]
