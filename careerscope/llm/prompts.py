from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from careerscope.profile.models import CandidateProfile

SYSTEM_COACH = """You are an expert career coach and tech recruiter.
You evaluate candidate profiles for tech roles honestly and constructively.
Return ONLY valid JSON (no markdown) matching the requested schema."""

PROMPT_TEMPLATE = """Act as an expert career coach and tech recruiter. Analyze the following candidate profile and provide a comprehensive evaluation for a tech role, specifically tailored to their stated career goal.

**Candidate Information:**

**1. Target Job Role / Career Goal:**
{target_job_role}

**2. Academic Record:**
{academics}

**3. Key Projects:**
{projects}

**4. Achievements:**
{achievements}

**5. Soft Skills:**
{soft_skills}

**Your Tasks:**
1. **Score Profile:** Assign an overall score from 0-100, reflecting the candidate's readiness for their target role.
2. **Analyze Strengths & Weaknesses:** Write concise paragraphs on strengths and areas for improvement.
3. **Identify Skill Gaps:** List the most critical skills the candidate is missing for their target role.
4. **Create a Learning Pathway:** Suggest a concrete, step-by-step plan to fill these gaps.
5. **Recommend Jobs:** Suggest a few job roles that fit the candidate's current skillset, including a rationale for each.

Generate the entire analysis in the provided JSON schema format. Be insightful, constructive, and encouraging."""

SCHEMA_NAME = "profile_analysis"

REQUIRED_FIELDS = ("score", "strengths", "improvements", "skillGaps", "learningPath", "jobRecommendations")

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "score": {
            "type": "integer",
            "description": "A score from 0 to 100 representing the strength of the candidate profile for their target role.",
        },
        "strengths": {
            "type": "string",
            "description": "A concise paragraph (2-3 sentences) highlighting the candidate's key strengths.",
        },
        "improvements": {
            "type": "string",
            "description": "A concise paragraph (2-3 sentences) with constructive feedback on areas for improvement.",
        },
        "skillGaps": {
            "type": "array",
            "description": "A list of 3-5 specific skills the candidate is lacking for their target job role.",
            "items": {"type": "string"},
        },
        "learningPath": {
            "type": "array",
            "description": "A step-by-step learning path to address the skill gaps. Provide 3-4 concrete steps.",
            "items": {
                "type": "object",
                "properties": {
                    "step": {"type": "string", "description": "A short title for the learning step (e.g., 'Master React Hooks')."},
                    "description": {"type": "string", "description": "A 1-2 sentence description of what to do for this step."},
                },
                "required": ["step", "description"],
                "additionalProperties": False,
            },
        },
        "jobRecommendations": {
            "type": "array",
            "description": "A list of 2-3 suitable job roles based on the candidate's current profile.",
            "items": {
                "type": "object",
                "properties": {
                    "role": {"type": "string", "description": "The job title (e.g., 'Frontend Developer')."},
                    "reason": {"type": "string", "description": "A 1-2 sentence explanation for why this role is a good fit."},
                },
                "required": ["role", "reason"],
                "additionalProperties": False,
            },
        },
    },
    "required": list(REQUIRED_FIELDS),
    "additionalProperties": False,
}


@dataclass(frozen=True)
class AnalysisRequest:
    system: str
    prompt: str
    schema: Dict[str, Any]
    schema_name: str = SCHEMA_NAME


def build_prompt(profile: CandidateProfile) -> str:
    """Render a profile into the instruction text. Pure; assumes the profile was validated."""
    return PROMPT_TEMPLATE.format(
        target_job_role=profile.target_job_role,
        academics=profile.academics,
        projects=profile.projects,
        achievements=profile.achievements,
        soft_skills=", ".join(profile.soft_skills),
    )


def build_request(profile: CandidateProfile) -> AnalysisRequest:
    return AnalysisRequest(system=SYSTEM_COACH, prompt=build_prompt(profile), schema=RESPONSE_SCHEMA)
