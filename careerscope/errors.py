# careerscope/errors.py
"""
Exception hierarchy for careerscope.

- ValidationError: the profile is incomplete; raised before any request is built
- ServiceUnavailable: the LLM call itself failed (network, auth, quota)
- MalformedResponse: a reply arrived but is not the JSON shape we asked for
"""
from __future__ import annotations

from typing import Iterable, Optional


class CareerScopeError(Exception):
    """Base exception for careerscope."""
    pass


class ValidationError(CareerScopeError):
    """Profile is missing a required field or has no soft skills."""

    USER_MESSAGE = "Please fill out all fields and add at least one soft skill."

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(f"Incomplete profile; missing: {', '.join(self.missing)}")


class AnalysisError(CareerScopeError):
    """Base for failures of the analysis round-trip."""
    pass


class ServiceUnavailable(AnalysisError):
    """The external call could not be completed. Not retried."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class MalformedResponse(AnalysisError):
    """Reply did not parse as JSON or did not match the required shape."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw
