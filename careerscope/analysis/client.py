# careerscope/analysis/client.py
from __future__ import annotations

import json
import logging
import math
import numbers
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from careerscope.errors import MalformedResponse, ServiceUnavailable, ValidationError
from careerscope.llm import openai_client
from careerscope.llm.prompts import REQUIRED_FIELDS, build_request
from careerscope.profile.models import CandidateProfile, ProfileAnalysis, validate_profile
from careerscope.settings import SETTINGS, Settings

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")

# nested record fields, by wire name of the enclosing list
_RECORD_FIELDS = {
    "learningPath": ("step", "description"),
    "jobRecommendations": ("role", "reason"),
}


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_json_text(raw: str) -> Any:
    """Parse the reply as JSON, tolerating a surrounding markdown code fence."""
    text = (raw or "").strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text)
        text = _FENCE_CLOSE.sub("", text)
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise MalformedResponse(f"Reply is not valid JSON: {e}", raw=raw) from e


def shape_problems(data: Any) -> List[str]:
    """Return a list of structural problems; empty means the reply can be trusted."""
    if not isinstance(data, dict):
        return [f"expected a JSON object, got {type(data).__name__}"]

    problems = [f"missing field '{name}'" for name in REQUIRED_FIELDS if name not in data]
    if problems:
        return problems

    if not _is_number(data["score"]):
        problems.append("'score' is not a number")
    for name in ("strengths", "improvements"):
        if not isinstance(data[name], str) or not data[name].strip():
            problems.append(f"'{name}' is not a non-empty string")

    gaps = data["skillGaps"]
    if not isinstance(gaps, list):
        problems.append("'skillGaps' is not a list")
    elif not all(isinstance(g, str) for g in gaps):
        problems.append("'skillGaps' contains non-string items")

    for name, keys in _RECORD_FIELDS.items():
        items = data[name]
        if not isinstance(items, list):
            problems.append(f"'{name}' is not a list")
            continue
        for idx, item in enumerate(items):
            if not isinstance(item, dict) or not all(isinstance(item.get(k), str) for k in keys):
                problems.append(f"'{name}[{idx}]' must have string fields {', '.join(keys)}")
    return problems


def parse_analysis(raw: str) -> ProfileAnalysis:
    data = parse_json_text(raw)
    problems = shape_problems(data)
    if problems:
        raise MalformedResponse("Invalid JSON structure received from API: " + "; ".join(problems), raw=raw)
    return ProfileAnalysis.from_dict(data)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Tagged result of one submission: exactly one of analysis / error is set."""

    kind: str  # success | invalid_profile | service_unavailable | malformed_response
    analysis: Optional[ProfileAnalysis] = None
    error: Optional[Exception] = None

    SUCCESS = "success"
    INVALID_PROFILE = "invalid_profile"
    SERVICE_UNAVAILABLE = "service_unavailable"
    MALFORMED_RESPONSE = "malformed_response"

    @property
    def ok(self) -> bool:
        return self.kind == self.SUCCESS


class ProfileAnalyzer:
    """
    Sends one profile to the LLM and returns a validated ProfileAnalysis.

    The chat client is injected; when none is given it is built from settings
    on first use, so a missing credential shows up as ServiceUnavailable.
    """

    def __init__(self, llm: Any = None, settings: Optional[Settings] = None):
        self._llm = llm
        self.settings = settings or SETTINGS

    def _client(self) -> Any:
        if self._llm is None:
            try:
                self._llm = openai_client.client_from_settings(self.settings)
            except Exception as e:
                logger.error("Could not build LLM client: %s", e)
                raise ServiceUnavailable("LLM client is not configured", cause=e) from e
        return self._llm

    async def evaluate(self, profile: CandidateProfile) -> ProfileAnalysis:
        validate_profile(profile)
        request = build_request(profile)
        llm = self._client()
        logger.debug(
            "evaluate: model=%s prompt_len=%d",
            getattr(llm, "model_name", self.settings.openai_model),
            len(request.prompt),
        )

        try:
            raw = await openai_client.structured_json_chat(
                llm, request.system, request.prompt, request.schema, name=request.schema_name
            )
        except Exception as e:
            logger.exception("evaluate: LLM call failed")
            raise ServiceUnavailable("Failed to communicate with the AI service.", cause=e) from e

        try:
            analysis = parse_analysis(raw)
        except MalformedResponse as e:
            logger.warning("evaluate: malformed reply (%s)", e)
            raise

        if not analysis.score_in_range:
            # passed through as received
            logger.warning("evaluate: score %s outside 0-100", analysis.score)
        return analysis

    async def analyze(self, profile: CandidateProfile) -> AnalysisOutcome:
        """Like evaluate(), but folds every failure into a tagged outcome."""
        try:
            analysis = await self.evaluate(profile)
        except ValidationError as e:
            return AnalysisOutcome(AnalysisOutcome.INVALID_PROFILE, error=e)
        except ServiceUnavailable as e:
            return AnalysisOutcome(AnalysisOutcome.SERVICE_UNAVAILABLE, error=e)
        except MalformedResponse as e:
            return AnalysisOutcome(AnalysisOutcome.MALFORMED_RESPONSE, error=e)
        return AnalysisOutcome(AnalysisOutcome.SUCCESS, analysis=analysis)


async def evaluate(profile: CandidateProfile, llm: Any = None, settings: Optional[Settings] = None) -> ProfileAnalysis:
    return await ProfileAnalyzer(llm, settings).evaluate(profile)
