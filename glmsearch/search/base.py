"""Search result types."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class SearchResultItem:
  """A single normalized search hit. Every field is optional."""

  title: Optional[str] = None
  url: Optional[str] = None
  content: Optional[str] = None
  icon: Optional[str] = None
  media: Optional[str] = None
  refer: Optional[str] = None

  def to_dict(self) -> Dict[str, str]:
    """Serialize, leaving out absent fields."""
    return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class NormalizedResults:
  """Output of the result normalizer.

  Attributes:
    results: Parsed hits, in server order.
    raw: Unparsed text, set when no structured results could be recovered.
  """

  results: List[SearchResultItem] = field(default_factory=list)
  raw: Optional[str] = None


@dataclass
class AttemptSuccess:
  payload: Dict[str, Any]


@dataclass
class AttemptFailure:
  error: Exception

  @property
  def message(self) -> str:
    return str(self.error) or type(self.error).__name__


SearchAttempt = Union[AttemptSuccess, AttemptFailure]
