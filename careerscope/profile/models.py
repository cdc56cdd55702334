# careerscope/profile/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

from careerscope.errors import ValidationError

DEFAULT_SOFT_SKILLS = ("Communication", "Teamwork")

# Text fields in form order; values are the wire (camelCase) names.
TEXT_FIELDS = {
    "target_job_role": "targetJobRole",
    "academics": "academics",
    "projects": "projects",
    "achievements": "achievements",
}


@dataclass(frozen=True)
class CandidateProfile:
    """Submitted candidate input. Build via ProfileDraft.freeze() or validate_profile()."""

    target_job_role: str
    academics: str
    projects: str
    achievements: str
    soft_skills: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {wire: getattr(self, attr) for attr, wire in TEXT_FIELDS.items()}
        out["softSkills"] = list(self.soft_skills)
        return out


def missing_fields(profile: CandidateProfile) -> List[str]:
    missing = [attr for attr in TEXT_FIELDS if not (getattr(profile, attr) or "").strip()]
    # tags must be non-blank strings, unique after trimming
    tags = [s.strip() if isinstance(s, str) else "" for s in profile.soft_skills or ()]
    if not tags or not all(tags) or len(set(tags)) != len(tags):
        missing.append("soft_skills")
    return missing


def validate_profile(profile: CandidateProfile) -> CandidateProfile:
    """Raise ValidationError unless every text field is filled and the skills are distinct, non-blank tags."""
    missing = missing_fields(profile)
    if missing:
        raise ValidationError(missing)
    return profile


@dataclass
class ProfileDraft:
    """Mutable form state; edited field by field, frozen at submission."""

    target_job_role: str = ""
    academics: str = ""
    projects: str = ""
    achievements: str = ""
    soft_skills: List[str] = field(default_factory=lambda: list(DEFAULT_SOFT_SKILLS))

    def add_skill(self, value: str) -> bool:
        """Add a trimmed skill tag; empty values and duplicates are ignored."""
        tag = (value or "").strip()
        if not tag or tag in self.soft_skills:
            return False
        self.soft_skills.append(tag)
        return True

    def remove_skill(self, value: str) -> bool:
        tag = (value or "").strip()
        if tag not in self.soft_skills:
            return False
        self.soft_skills = [s for s in self.soft_skills if s != tag]
        return True

    def freeze(self) -> CandidateProfile:
        profile = CandidateProfile(
            target_job_role=self.target_job_role,
            academics=self.academics,
            projects=self.projects,
            achievements=self.achievements,
            soft_skills=tuple(self.soft_skills),
        )
        return validate_profile(profile)


@dataclass(frozen=True)
class LearningStep:
    step: str
    description: str


@dataclass(frozen=True)
class JobRecommendation:
    role: str
    reason: str


@dataclass(frozen=True)
class ProfileAnalysis:
    """Evaluation returned by the model. Created whole from a validated reply."""

    score: Union[int, float]
    strengths: str
    improvements: str
    skill_gaps: Tuple[str, ...]
    learning_path: Tuple[LearningStep, ...]
    job_recommendations: Tuple[JobRecommendation, ...]

    @property
    def score_in_range(self) -> bool:
        return 0 <= self.score <= 100

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileAnalysis":
        """Map an already shape-checked wire dict onto the dataclass."""
        return cls(
            score=data["score"],
            strengths=data["strengths"],
            improvements=data["improvements"],
            skill_gaps=tuple(data["skillGaps"]),
            learning_path=tuple(
                LearningStep(step=i["step"], description=i["description"]) for i in data["learningPath"]
            ),
            job_recommendations=tuple(
                JobRecommendation(role=i["role"], reason=i["reason"]) for i in data["jobRecommendations"]
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "strengths": self.strengths,
            "improvements": self.improvements,
            "skillGaps": list(self.skill_gaps),
            "learningPath": [{"step": s.step, "description": s.description} for s in self.learning_path],
            "jobRecommendations": [{"role": j.role, "reason": j.reason} for j in self.job_recommendations],
        }
