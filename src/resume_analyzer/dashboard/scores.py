"""Score labels and preview helpers for the dashboard cards."""

from __future__ import annotations

from typing import Literal

from resume_analyzer.models.analysis import ContactInfo

ScoreBand = Literal["high", "medium", "low"]

SKILLS_PREVIEW_LIMIT = 15


def score_band(score: int) -> ScoreBand:
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"


def ats_score_label(score: int) -> str:
    return {"high": "Excellent", "medium": "Good Start", "low": "Needs Work"}[score_band(score)]


def parsability_message(score: int) -> str:
    if score >= 90:
        return "Format is machine-readable."
    return "Layout may confuse some ATS."


def keyword_message(score: int) -> str:
    if score < 70:
        return "Critical keywords missing."
    return "Good keyword coverage."


def skills_preview(skills: list[str], limit: int = SKILLS_PREVIEW_LIMIT) -> tuple[list[str], int]:
    """First ``limit`` skills and how many more were left out."""
    return list(skills[:limit]), max(0, len(skills) - limit)


def contact_line(contact: ContactInfo) -> str:
    return " | ".join([
        contact.location.strip() or "Location N/A",
        contact.phone.strip() or "Phone N/A",
        contact.email.strip() or "Email N/A",
    ])
