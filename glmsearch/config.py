"""Configuration for the GLM web-search-prime tool.

The host hands over a config mapping (``enabled``, ``apiKey``, ``url``,
``timeoutSeconds``, ``cacheTtlMinutes``); the API key falls back to the
``GLM_API_KEY`` / ``ZHIPU_API_KEY`` environment variables.
"""

import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

DEFAULT_MCP_URL = "https://open.bigmodel.cn/api/mcp/web_search_prime/mcp"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_CACHE_TTL_MINUTES = 15

API_KEY_ENV_VARS = ("GLM_API_KEY", "ZHIPU_API_KEY")


@dataclass
class WebSearchPrimeConfig:
  """Host-supplied settings for the tool.

  Example:
      config = WebSearchPrimeConfig.from_dict({"apiKey": "...", "timeoutSeconds": 10})
  """

  # None means "enabled when an API key is available"
  enabled: Optional[bool] = None
  api_key: Optional[str] = None
  url: Optional[str] = None
  timeout_seconds: Optional[float] = None
  cache_ttl_minutes: Optional[float] = None

  def to_dict(self) -> Dict[str, Any]:
    """Convert to the host's camelCase representation, omitting unset fields."""
    result: Dict[str, Any] = {}
    if self.enabled is not None:
      result["enabled"] = self.enabled
    if self.api_key is not None:
      result["apiKey"] = self.api_key
    if self.url is not None:
      result["url"] = self.url
    if self.timeout_seconds is not None:
      result["timeoutSeconds"] = self.timeout_seconds
    if self.cache_ttl_minutes is not None:
      result["cacheTtlMinutes"] = self.cache_ttl_minutes
    return result

  @classmethod
  def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "WebSearchPrimeConfig":
    """Create from a host mapping. Accepts camelCase or snake_case keys.

    Values of the wrong type are ignored rather than rejected.
    """
    data = data or {}

    def pick(*keys: str) -> Any:
      for key in keys:
        if key in data:
          return data[key]
      return None

    enabled = pick("enabled")
    api_key = pick("apiKey", "api_key")
    url = pick("url")
    timeout = pick("timeoutSeconds", "timeout_seconds")
    ttl = pick("cacheTtlMinutes", "cache_ttl_minutes")

    return cls(
      enabled=enabled if isinstance(enabled, bool) else None,
      api_key=api_key if isinstance(api_key, str) else None,
      url=url if isinstance(url, str) else None,
      timeout_seconds=timeout if _is_number(timeout) else None,
      cache_ttl_minutes=ttl if _is_number(ttl) else None,
    )


def _is_number(value: Any) -> bool:
  return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def resolve_api_key(config: Optional[WebSearchPrimeConfig] = None, env: Optional[Mapping[str, str]] = None) -> Optional[str]:
  """Return the configured API key, else the first env var that is set.

  A set but blank ``GLM_API_KEY`` shadows ``ZHIPU_API_KEY``.
  """
  env = os.environ if env is None else env
  from_config = (config.api_key or "").strip() if config else ""
  if from_config:
    return from_config
  from_env = next((env[name] for name in API_KEY_ENV_VARS if env.get(name) is not None), "")
  return from_env.strip() or None


def resolve_enabled(config: Optional[WebSearchPrimeConfig] = None, env: Optional[Mapping[str, str]] = None) -> bool:
  """Explicit ``enabled`` wins; otherwise enabled iff an API key resolves."""
  if config is not None and config.enabled is not None:
    return config.enabled
  return resolve_api_key(config, env) is not None


def resolve_mcp_url(config: Optional[WebSearchPrimeConfig] = None) -> str:
  from_config = (config.url or "").strip() if config else ""
  return from_config or DEFAULT_MCP_URL


def resolve_timeout_seconds(value: Any, fallback: float = DEFAULT_TIMEOUT_SECONDS) -> float:
  """Whole seconds, at least 1."""
  if not _is_number(value):
    return fallback
  return max(1, int(value))


def resolve_cache_ttl_ms(value: Any, fallback_minutes: float = DEFAULT_CACHE_TTL_MINUTES) -> int:
  """Cache TTL in milliseconds; 0 disables caching."""
  minutes = value if _is_number(value) else fallback_minutes
  return round(max(0, minutes) * 60_000)
