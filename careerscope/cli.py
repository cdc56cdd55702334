# careerscope/cli.py
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.text import Text
from rich.theme import Theme

from careerscope.analysis.client import AnalysisOutcome, ProfileAnalyzer
from careerscope.errors import ValidationError
from careerscope.profile.models import ProfileDraft
from careerscope.settings import SETTINGS
from careerscope.ui.render import TABS, render_error, render_tabs
from careerscope.utils.logging import setup_logger

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

CS_THEME = Theme({
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
    "prompt": "bold cyan",
    "prompt.choices": "cyan",
    "prompt.default": "dim cyan",
    "banner": "bold cyan",
})
console = Console(theme=CS_THEME)

BANNER = "AI Candidate Profile Scorer"
TAGLINE = (
    "Get an instant AI-powered analysis of your professional profile "
    "to identify strengths and areas for improvement."
)

FORM_FIELDS = (
    ("target_job_role", "Target Job Role (e.g., Senior Frontend Developer, Data Scientist)"),
    ("academics", "Academic Record (e.g., M.S. in Computer Science from XYZ University)"),
    ("achievements", "Key Achievements (e.g., Won 'Best Project' award at University Codefest 2023)"),
    ("projects", "Projects (1-2 key projects: goal and outcome)"),
)


def _print_banner(console: Console) -> None:
    """Startup banner; disable with CAREERSCOPE_NO_BANNER=1."""
    if SETTINGS.no_banner:
        return
    text = Text(BANNER, style="banner")
    text.append("\n").append(TAGLINE, style="dim")
    console.print(Panel(text, border_style="cyan", padding=(0, 2)))


def _edit_fields(draft: ProfileDraft) -> None:
    for attr, label in FORM_FIELDS:
        current = getattr(draft, attr)
        value = Prompt.ask(label, default=current, show_default=bool(current), console=console)
        setattr(draft, attr, (value or "").strip())


def _apply_skill_tokens(draft: ProfileDraft, raw: str) -> None:
    """Comma separated tags; a leading '-' removes the tag."""
    for token in raw.split(","):
        token = token.strip()
        if token.startswith("-"):
            draft.remove_skill(token[1:])
        else:
            draft.add_skill(token)


def _edit_skills(draft: ProfileDraft) -> None:
    while True:
        shown = ", ".join(draft.soft_skills) if draft.soft_skills else "none"
        console.print(f"[info]Soft skills:[/info] {escape(shown)}")
        raw = Prompt.ask(
            "Add skills (comma separated, '-Skill' removes, Enter to finish)",
            default="",
            show_default=False,
            console=console,
        )
        if not raw.strip():
            return
        _apply_skill_tokens(draft, raw)


def _show_outcome(outcome: AnalysisOutcome, tab: str) -> None:
    console.print()
    if outcome.ok:
        for renderable in render_tabs(outcome.analysis, tab):
            console.print(renderable)
    else:
        console.print(render_error(outcome))
    console.print()


async def _session(analyzer: ProfileAnalyzer, draft: ProfileDraft, tab: str, no_input: bool) -> int:
    """Form -> analyze -> render, repeated until the user stops. Returns the exit code."""
    while True:
        if not no_input:
            _edit_fields(draft)
            _edit_skills(draft)

        try:
            profile = draft.freeze()
        except ValidationError as e:
            logger.debug("profile rejected: missing=%s", e.missing)
            console.print(f"[error]{ValidationError.USER_MESSAGE}[/error]")
            if no_input:
                return 2
            continue

        with console.status("Analyzing..."):
            outcome = await analyzer.analyze(profile)
        _show_outcome(outcome, tab)

        if no_input:
            return 0 if outcome.ok else 1
        if not Confirm.ask("Edit the profile and analyze again?", default=False, console=console):
            return 0


@app.command()
def main(
    role: Optional[str] = typer.Option(None, "--role", help="Target job role / career goal."),
    academics: Optional[str] = typer.Option(None, help="Academic record."),
    projects: Optional[str] = typer.Option(None, help="Key projects."),
    achievements: Optional[str] = typer.Option(None, help="Achievements."),
    skill: Optional[List[str]] = typer.Option(
        None, "--skill", help="Soft skill (repeatable). Replaces the default skills."
    ),
    tab: str = typer.Option("all", help=f"Section to show: {', '.join(TABS)} or all."),
    no_input: bool = typer.Option(False, "--no-input", help="Use the options as given; do not prompt."),
):
    setup_logger(SETTINGS.log_level, SETTINGS.log_json)

    if tab != "all" and tab not in TABS:
        console.print(f"[error]Unknown tab: {tab}[/error]")
        raise typer.Exit(code=2)

    _print_banner(console)

    # one analyzer (and one LLM client) for the whole session;
    # the client is bound to the event loop below, so the session runs in one loop
    analyzer = ProfileAnalyzer(settings=SETTINGS)

    draft = ProfileDraft(
        target_job_role=role or "",
        academics=academics or "",
        projects=projects or "",
        achievements=achievements or "",
    )
    if skill:
        draft.soft_skills = []
        for s in skill:
            _apply_skill_tokens(draft, s)

    code = asyncio.run(_session(analyzer, draft, tab, no_input))
    if code:
        raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
