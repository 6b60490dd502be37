"""Base exceptions for glmsearch."""

from typing import Optional


class GlmSearchError(Exception):
  """Base exception for all glmsearch errors.

  Attributes:
    message: Human-readable error message.
    status_code: HTTP-style status code describing the failure class.
    type: Machine-readable error type.
    error_id: Stable identifier for the error.
  """

  def __init__(self, message: str, status_code: int = 500):
    super().__init__(message)
    self.message = message
    self.status_code = status_code
    self.type = "glmsearch_error"
    self.error_id = "glmsearch_error"

  def __str__(self) -> str:
    return str(self.message)


class ConfigError(GlmSearchError):
  """Raised when the client is misconfigured (e.g. no API key)."""

  def __init__(self, message: str, setting: Optional[str] = None):
    super().__init__(message, status_code=400)
    self.setting = setting
    self.type = "config_error"
    self.error_id = "config_error"
