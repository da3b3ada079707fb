"""Progress steps and rotating tips shown while an analysis runs."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Literal

StepStatus = Literal["completed", "active", "pending"]

PROGRESS_CAP = 95.0  # simulated progress stalls here until the answer arrives
INSIGHT_SECONDS = 6

STEPS = (
    "File Upload Complete",
    "ATS Keyword Scan",
    "Soft Skills Evaluation",
    "Formatting Check",
)


@dataclass(frozen=True)
class Insight:
    title: str
    text: str


INSIGHTS = (
    Insight(
        "Quantify your impact with numbers",
        "Resumes with metrics (e.g., 'Increased sales by 20%') are 40% more likely to get "
        "an interview than those that just list duties. Recruiters love seeing tangible "
        "proof of your achievements.",
    ),
    Insight(
        "Tailor your skills section",
        "75% of ATS algorithms filter candidates based on keyword matches in the 'Skills' "
        "section relative to the job description. Make sure to mirror the language of "
        "the job post.",
    ),
    Insight(
        "Use strong active verbs",
        "Start bullet points with strong action verbs like 'Spearheaded', 'Orchestrated', "
        "or 'Developed'. Avoid passive phrases like 'Responsible for' or 'Helped with'.",
    ),
    Insight(
        "Keep formatting simple",
        "Complex columns, tables, and graphics often confuse ATS parsers. A clean, "
        "single-column layout is the safest bet for ensuring your data is read correctly.",
    ),
)


def step_status(index: int, progress: float) -> StepStatus:
    if index == 0:
        return "completed"
    threshold = index * 25
    if progress > threshold + 25:
        return "completed"
    if progress > threshold:
        return "active"
    return "pending"


def advance_progress(progress: float, rng: random.Random | None = None) -> float:
    """Next simulated progress value; never exceeds PROGRESS_CAP."""
    if progress >= PROGRESS_CAP:
        return progress
    increment = (rng or random).random() * 1.5
    return min(progress + increment, PROGRESS_CAP)


def insight_at(elapsed_seconds: float) -> Insight:
    return INSIGHTS[int(elapsed_seconds // INSIGHT_SECONDS) % len(INSIGHTS)]
