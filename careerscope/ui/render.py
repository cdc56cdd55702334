# careerscope/ui/render.py
from __future__ import annotations

from typing import List, Union

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from careerscope.analysis.client import AnalysisOutcome
from careerscope.errors import ValidationError
from careerscope.profile.models import ProfileAnalysis

TABS = ("analysis", "learning", "jobs")
TAB_TITLES = {
    "analysis": "Analysis",
    "learning": "Learning Path",
    "jobs": "Job Matches",
}

ERROR_MESSAGES = {
    AnalysisOutcome.INVALID_PROFILE: ValidationError.USER_MESSAGE,
    AnalysisOutcome.SERVICE_UNAVAILABLE: "Could not reach the AI service. Please check your API key and connection, then try again.",
    AnalysisOutcome.MALFORMED_RESPONSE: "The AI service returned an analysis we could not read. Please try again.",
}


def score_style(score: Union[int, float]) -> str:
    if score < 40:
        return "red"
    if score < 75:
        return "yellow"
    return "green"


def render_analysis_tab(analysis: ProfileAnalysis) -> RenderableType:
    style = score_style(analysis.score)
    score = Text(f"{analysis.score}", style=f"bold {style}")
    score.append(" / 100", style="dim")
    parts: List[RenderableType] = [score]
    if not analysis.score_in_range:
        parts.append(Text("Score is outside the expected 0-100 range; shown as received.", style="yellow"))
    parts += [
        Text(""),
        Text("Strengths", style="bold green"),
        Text(analysis.strengths),
        Text(""),
        Text("Areas for Improvement", style="bold yellow"),
        Text(analysis.improvements),
    ]
    return Panel(Group(*parts), title=TAB_TITLES["analysis"], border_style="cyan")


def render_learning_tab(analysis: ProfileAnalysis) -> RenderableType:
    gaps = Text("Skill Gaps", style="bold cyan")
    tags = Text(" ".join(f"[{g}]" for g in analysis.skill_gaps) or "none", style="yellow")

    table = Table(title="Recommended Learning Path", title_style="bold cyan", show_lines=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Step", style="bold", overflow="fold")
    table.add_column("Description", overflow="fold")
    for idx, item in enumerate(analysis.learning_path, start=1):
        table.add_row(str(idx), item.step, item.description)

    return Panel(Group(gaps, tags, Text(""), table), title=TAB_TITLES["learning"], border_style="cyan")


def render_jobs_tab(analysis: ProfileAnalysis) -> RenderableType:
    table = Table(title="Suitable Job Roles", title_style="bold cyan", show_lines=True)
    table.add_column("Role", style="bold", overflow="fold", ratio=1)
    table.add_column("Why it fits", overflow="fold", ratio=3)
    for job in analysis.job_recommendations:
        table.add_row(job.role, job.reason)
    return Panel(table, title=TAB_TITLES["jobs"], border_style="cyan")


_RENDERERS = {
    "analysis": render_analysis_tab,
    "learning": render_learning_tab,
    "jobs": render_jobs_tab,
}


def render_tabs(analysis: ProfileAnalysis, tab: str = "all") -> List[RenderableType]:
    if tab == "all":
        return [_RENDERERS[t](analysis) for t in TABS]
    if tab not in _RENDERERS:
        raise ValueError(f"Unknown tab: {tab}")
    return [_RENDERERS[tab](analysis)]


def render_error(outcome: AnalysisOutcome) -> RenderableType:
    message = ERROR_MESSAGES.get(outcome.kind, "Failed to get analysis. Please try again.")
    return Panel(Text(message), title="Error", border_style="red", title_align="left")
