import json
from types import SimpleNamespace

import pytest

from careerscope.profile.models import CandidateProfile


class FakeChat:
    """Stands in for ChatOpenAI: records bind() kwargs and each ainvoke() call."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []
        self.bound = None

    def bind(self, **kwargs):
        self.bound = kwargs
        return self

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.reply)


@pytest.fixture
def profile():
    return CandidateProfile(
        target_job_role="Data Scientist",
        academics="B.Sc. in Statistics, University of Lisbon",
        projects="Churn prediction model for a telecom operator",
        achievements="Kaggle bronze medal",
        soft_skills=("Communication", "Teamwork"),
    )


@pytest.fixture
def reply_data():
    return {
        "score": 82,
        "strengths": "...",
        "improvements": "...",
        "skillGaps": ["A", "B", "C"],
        "learningPath": [{"step": "S1", "description": "D1"}],
        "jobRecommendations": [{"role": "R1", "reason": "Re1"}],
    }


@pytest.fixture
def make_chat():
    def _make(reply=None, error=None):
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        return FakeChat(reply=reply, error=error)
    return _make
