"""Report files for portfolio analyses."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from .constants import SCORING_WEIGHTS
from .display import STAT_LABELS
from .models import Profile, Report

logger = logging.getLogger(__name__)


def _bullet_section(title: str, items: Sequence[str]) -> List[str]:
    lines = [f"## {title}", ""]
    if items:
        lines.extend(f"- {item}" for item in items)
    else:
        lines.append("_None_")
    lines.append("")
    return lines


@dataclass(slots=True)
class Reporter:
    """Write human-readable and machine-readable report artefacts."""

    output_dir: Path = Path("reports")

    def ensure_structure(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def generate_markdown_content(
        self,
        profile: Profile,
        report: Report,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render the report as Markdown without touching the filesystem."""
        generated_at = generated_at or datetime.now(timezone.utc)
        category_max = SCORING_WEIGHTS['category_max']

        lines: List[str] = [
            f"# Portfolio Report: {profile.display_name}",
            "",
        ]
        if profile.avatar_url:
            lines.extend([f"![avatar]({profile.avatar_url})", ""])
        if profile.bio:
            lines.extend([f"> {profile.bio}", ""])
        if profile.html_url:
            lines.extend([f"[View GitHub Profile]({profile.html_url})", ""])
        lines.extend(
            [
                f"_Generated {generated_at.strftime('%Y-%m-%d %H:%M UTC')}_",
                "",
                f"## Portfolio Score: {report.total_score}/{SCORING_WEIGHTS['total_max']}",
                "",
                "| Category | Score |",
                "|---|---|",
            ]
        )
        lines.extend(
            f"| {name} | {value}/{category_max} |" for name, value in report.breakdown.items()
        )
        lines.extend(["", "## Stats", "", "| Stat | Value |", "|---|---|"])
        lines.extend(
            f"| {STAT_LABELS.get(key, key)} | {value} |" for key, value in report.stats.items()
        )
        lines.append("")
        lines.extend(_bullet_section("Strengths", report.strengths))
        lines.extend(_bullet_section("Red Flags", report.red_flags))
        lines.extend(_bullet_section("Actionable Recommendations", report.recommendations))
        return "\n".join(lines)

    def generate_markdown(self, profile: Profile, report: Report) -> Path:
        """Create ``report.md`` in the output directory."""
        self.ensure_structure()
        report_path = self.output_dir / "report.md"
        logger.debug(f"Writing markdown report to {report_path}")
        report_path.write_text(self.generate_markdown_content(profile, report), encoding="utf-8")
        return report_path

    def generate_json(self, profile: Profile, report: Report) -> Path:
        """Create ``report.json`` with the profile and report payloads."""
        self.ensure_structure()
        report_path = self.output_dir / "report.json"
        payload = {"profile": profile.to_dict(), "report": report.to_dict()}
        logger.debug(f"Writing JSON report to {report_path}")
        report_path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        return report_path
