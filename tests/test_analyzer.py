from dataclasses import replace

import pytest

from careerscope.analysis import client as client_mod
from careerscope.analysis.client import AnalysisOutcome, ProfileAnalyzer, parse_analysis
from careerscope.errors import MalformedResponse, ServiceUnavailable, ValidationError
from careerscope.settings import Settings


@pytest.mark.asyncio
async def test_evaluate_returns_values_unmodified(profile, reply_data, make_chat):
    chat = make_chat(reply_data)
    analysis = await ProfileAnalyzer(llm=chat).evaluate(profile)
    assert analysis.to_dict() == reply_data
    assert len(chat.calls) == 1


@pytest.mark.asyncio
async def test_evaluate_requests_strict_schema(profile, reply_data, make_chat):
    chat = make_chat(reply_data)
    await ProfileAnalyzer(llm=chat).evaluate(profile)
    fmt = chat.bound["response_format"]
    assert fmt["type"] == "json_schema"
    assert fmt["json_schema"]["strict"] is True
    assert fmt["json_schema"]["name"] == "profile_analysis"
    system, human = chat.calls[0]
    assert "career coach" in system.content
    assert profile.projects in human.content


@pytest.mark.asyncio
async def test_invalid_profile_never_calls_service(profile, make_chat):
    chat = make_chat("{}")
    with pytest.raises(ValidationError):
        await ProfileAnalyzer(llm=chat).evaluate(replace(profile, soft_skills=()))
    with pytest.raises(ValidationError):
        await ProfileAnalyzer(llm=chat).evaluate(replace(profile, achievements=""))
    assert len(chat.calls) == 0


@pytest.mark.asyncio
async def test_wrong_score_type_is_malformed(profile, reply_data, make_chat):
    reply_data["score"] = "high"
    with pytest.raises(MalformedResponse):
        await ProfileAnalyzer(llm=make_chat(reply_data)).evaluate(profile)


@pytest.mark.asyncio
async def test_missing_job_recommendations_is_malformed(profile, reply_data, make_chat):
    del reply_data["jobRecommendations"]
    with pytest.raises(MalformedResponse) as exc:
        await ProfileAnalyzer(llm=make_chat(reply_data)).evaluate(profile)
    assert "jobRecommendations" in str(exc.value)


@pytest.mark.asyncio
async def test_unparsable_reply_is_malformed(profile, make_chat):
    with pytest.raises(MalformedResponse) as exc:
        await ProfileAnalyzer(llm=make_chat("Sure! Here is your analysis")).evaluate(profile)
    assert exc.value.raw == "Sure! Here is your analysis"


@pytest.mark.asyncio
async def test_transport_failure_is_service_unavailable(profile, make_chat, monkeypatch):
    def _no_parse(raw):
        raise AssertionError("parsing must not run after a failed call")
    monkeypatch.setattr(client_mod, "parse_analysis", _no_parse)

    boom = ConnectionError("network down")
    with pytest.raises(ServiceUnavailable) as exc:
        await ProfileAnalyzer(llm=make_chat(error=boom)).evaluate(profile)
    assert exc.value.cause is boom


@pytest.mark.asyncio
async def test_missing_api_key_surfaces_at_call_time(profile):
    analyzer = ProfileAnalyzer(settings=Settings(openai_api_key=""))
    with pytest.raises(ServiceUnavailable):
        await analyzer.evaluate(profile)


@pytest.mark.asyncio
async def test_out_of_range_score_is_passed_through(profile, reply_data, make_chat):
    reply_data["score"] = 140
    analysis = await ProfileAnalyzer(llm=make_chat(reply_data)).evaluate(profile)
    assert analysis.score == 140
    assert not analysis.score_in_range


@pytest.mark.asyncio
async def test_analyze_tags_each_outcome(profile, reply_data, make_chat):
    ok = await ProfileAnalyzer(llm=make_chat(reply_data)).analyze(profile)
    assert ok.ok and ok.analysis.score == 82 and ok.error is None

    bad = await ProfileAnalyzer(llm=make_chat("[]")).analyze(profile)
    assert bad.kind == AnalysisOutcome.MALFORMED_RESPONSE and bad.analysis is None

    down = await ProfileAnalyzer(llm=make_chat(error=TimeoutError())).analyze(profile)
    assert down.kind == AnalysisOutcome.SERVICE_UNAVAILABLE

    invalid = await ProfileAnalyzer(llm=make_chat(reply_data)).analyze(replace(profile, academics=" "))
    assert invalid.kind == AnalysisOutcome.INVALID_PROFILE


def test_parse_accepts_fenced_json(reply_data):
    import json
    raw = "```json\n" + json.dumps(reply_data) + "\n```"
    assert parse_analysis(raw).score == 82


@pytest.mark.parametrize(
    "field,value",
    [
        ("score", True),
        ("score", None),
        ("strengths", ""),
        ("improvements", 3),
        ("skillGaps", "A, B"),
        ("skillGaps", ["A", 2]),
        ("learningPath", [{"step": "S1"}]),
        ("jobRecommendations", [{"role": "R1", "reason": None}]),
        ("jobRecommendations", {"role": "R1", "reason": "Re1"}),
    ],
)
def test_parse_rejects_bad_shapes(reply_data, field, value):
    import json
    reply_data[field] = value
    with pytest.raises(MalformedResponse):
        parse_analysis(json.dumps(reply_data))


@pytest.mark.asyncio
async def test_module_level_evaluate(profile, reply_data, make_chat):
    analysis = await client_mod.evaluate(profile, llm=make_chat(reply_data))
    assert analysis.skill_gaps == ("A", "B", "C")


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_score_is_malformed(reply_data, constant):
    import json
    raw = json.dumps(reply_data).replace('"score": 82', f'"score": {constant}')
    with pytest.raises(MalformedResponse):
        parse_analysis(raw)


def test_overflowing_score_is_malformed(reply_data):
    import json
    raw = json.dumps(reply_data).replace('"score": 82', '"score": 1e400')
    with pytest.raises(MalformedResponse):
        parse_analysis(raw)
