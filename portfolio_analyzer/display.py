"""Helper functions for rendering a portfolio report in the terminal."""

from __future__ import annotations

from typing import Any, Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .constants import SCORING_WEIGHTS
from .models import Profile, Report

STAT_LABELS = {
    "total_repos": "Total Repos",
    "total_stars": "Total Stars",
    "languages": "Languages",
    "active_repos": "Active Repos (90d)",
    "followers": "Followers",
    "account_age_days": "Account Age (Days)",
}

BAR_WIDTH = 20


def score_style(value: int, maximum: int) -> str:
    """Pick a theme style for a score relative to its maximum."""
    ratio = value / maximum if maximum else 0
    if ratio >= 0.75:
        return "success"
    if ratio >= 0.4:
        return "warning"
    return "danger"


def score_bar(value: int, maximum: int, width: int = BAR_WIDTH) -> Text:
    """Render a horizontal bar for a score."""
    filled = round(width * max(0, min(value, maximum)) / maximum) if maximum else 0
    bar = Text("█" * filled, style=score_style(value, maximum))
    bar.append("░" * (width - filled), style="muted")
    return bar


def build_profile_panel(profile: Profile) -> Panel:
    """Profile card with name, bio and profile link."""
    body = Text()
    body.append(profile.display_name, style="title")
    if profile.name:
        body.append(f"  @{profile.login}", style="muted")
    body.append("\n")
    body.append(profile.bio or "No bio provided", style="value" if profile.bio else "muted")
    if profile.html_url:
        body.append("\n")
        body.append(profile.html_url, style=f"link {profile.html_url}")
    return Panel(body, border_style="frame", box=box.ROUNDED)


def build_breakdown_table(report: Report) -> Table:
    """Category breakdown with a bar per category."""
    cap = SCORING_WEIGHTS['category_max']
    table = Table(box=box.SIMPLE_HEAVY, show_header=True, header_style="label")
    table.add_column("Category", style="accent")
    table.add_column("Score", justify="right")
    table.add_column("", no_wrap=True)

    for name, value in report.breakdown.items():
        table.add_row(
            name,
            Text(f"{value}/{cap}", style=score_style(value, cap)),
            score_bar(value, cap),
        )
    return table


def build_stats_table(report: Report) -> Table:
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Stat", style="label")
    table.add_column("Value", style="value", justify="right")
    for key, value in report.stats.items():
        table.add_row(STAT_LABELS.get(key, key), str(value))
    return table


def build_insight_panel(title: str, items: Sequence[str], marker: str, style: str) -> Panel:
    text = Text()
    if not items:
        text.append("None", style="muted")
    for index, item in enumerate(items):
        if index:
            text.append("\n")
        text.append(f"{marker} ", style=style)
        text.append(item)
    return Panel(text, title=title, title_align="left", border_style=style, box=box.ROUNDED)


def render_report(console: Any, profile: Profile, report: Report) -> None:
    """Print the full report: profile, score, breakdown, stats and insights."""
    total_max = SCORING_WEIGHTS['total_max']

    console.print(build_profile_panel(profile))
    console.print()
    headline = Text("Portfolio Score: ", style="title")
    headline.append(f"{report.total_score}/{total_max}", style=score_style(report.total_score, total_max))
    console.print(headline)
    console.print(build_breakdown_table(report))
    console.print(build_stats_table(report))
    console.print(build_insight_panel("Strengths", report.strengths, "✔", "success"))
    console.print(build_insight_panel("Red Flags", report.red_flags, "✖", "danger"))
    console.print(build_insight_panel("Actionable Recommendations", report.recommendations, "•", "accent"))
