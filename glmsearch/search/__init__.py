"""Web search orchestration and result normalization."""

from glmsearch.search.base import AttemptFailure, AttemptSuccess, NormalizedResults, SearchAttempt, SearchResultItem
from glmsearch.search.normalizer import parse_search_results
from glmsearch.search.orchestrator import DEFAULT_MAX_RESULTS, MAX_RESULTS, PROVIDER, WebSearchPrime, clamp_count

__all__ = [
  "SearchResultItem",
  "NormalizedResults",
  "SearchAttempt",
  "AttemptSuccess",
  "AttemptFailure",
  "parse_search_results",
  "WebSearchPrime",
  "clamp_count",
  "PROVIDER",
  "DEFAULT_MAX_RESULTS",
  "MAX_RESULTS",
]
