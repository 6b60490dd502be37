"""Normalization of ``webSearchPrime`` tool results.

The upstream provider's encoding is not contractually stable: the JSON
array of hits may arrive as plain JSON, wrapped in an extra pair of quotes,
or fully double-encoded, and hit lists may sit under ``results``, ``items``
or ``data``. Parsing is an ordered chain of attempts; the first attempt
that yields hits wins and the final fallback is the raw text.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

from glmsearch.search.base import NormalizedResults, SearchResultItem
from glmsearch.utils.log import log_debug, log_info

RESULT_LIST_KEYS = ("results", "items", "data")


def _str_or_none(value: Any) -> Optional[str]:
  return value if isinstance(value, str) else None


def to_result_item(item: Dict[str, Any]) -> SearchResultItem:
  """Map one provider hit onto a SearchResultItem (``link`` wins over ``url``)."""
  url = _str_or_none(item.get("link"))
  if url is None:
    url = _str_or_none(item.get("url"))
  return SearchResultItem(
    title=_str_or_none(item.get("title")),
    url=url,
    content=_str_or_none(item.get("content")),
    icon=_str_or_none(item.get("icon")),
    media=_str_or_none(item.get("media")),
    refer=_str_or_none(item.get("refer")),
  )


def _to_items(values: List[Any]) -> Optional[List[SearchResultItem]]:
  items = [to_result_item(v) for v in values if isinstance(v, dict)]
  # A non-empty list without a single object is not a hit list.
  if values and not items:
    return None
  return items


def extract_items(parsed: Any) -> Optional[List[SearchResultItem]]:
  """Pull hits out of a parsed document, or None if it has no known shape."""
  if isinstance(parsed, list):
    return _to_items(parsed)
  if isinstance(parsed, dict):
    for key in RESULT_LIST_KEYS:
      value = parsed.get(key)
      if isinstance(value, list):
        items = _to_items(value)
        if items is not None:
          return items
  return None


def _parse_unwrapped(text: str) -> Any:
  candidate = text.strip()
  if len(candidate) >= 2 and candidate.startswith('"') and candidate.endswith('"'):
    candidate = candidate[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    log_info("WebSearchPrime: result text was wrapped in quotes, unwrapped before parsing")
  return json.loads(candidate)


def _parse_double_encoded(text: str) -> Any:
  decoded = json.loads(text)
  if isinstance(decoded, str):
    log_info("WebSearchPrime: result text was a JSON string, decoding twice")
    decoded = json.loads(decoded)
  return decoded


PARSE_ATTEMPTS: Tuple[Callable[[str], Any], ...] = (_parse_unwrapped, _parse_double_encoded)


def collect_text(content: List[Any]) -> str:
  """Join the ``text`` of every text-bearing content part with newlines."""
  return "\n".join(part["text"] for part in content if isinstance(part, dict) and isinstance(part.get("text"), str))


def parse_search_results(payload: Any) -> NormalizedResults:
  """Convert a ``tools/call`` result into search hits.

  Never raises: anything that cannot be parsed is returned as ``raw``.

  Args:
    payload: The ``result`` object of a successful tool call.

  Returns:
    NormalizedResults with either ``results`` or the ``raw`` fallback text.
  """
  content = payload.get("content") if isinstance(payload, dict) else None
  if not isinstance(content, list):
    return NormalizedResults(raw=json.dumps(payload, ensure_ascii=False, default=str))

  full_text = collect_text(content)

  for attempt in PARSE_ATTEMPTS:
    try:
      parsed = attempt(full_text)
    except (ValueError, RecursionError) as e:
      log_debug(f"WebSearchPrime: {attempt.__name__} failed: {e}")
      continue
    items = extract_items(parsed)
    if items is not None:
      return NormalizedResults(results=items)

  return NormalizedResults(raw=full_text)
