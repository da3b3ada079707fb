"""Feedback feed derived from an AnalysisResult.

The feed is built from three sources, always in this order:

1. one "Missing Critical Keywords" item when any keywords are missing,
2. one item per formatting issue,
3. one item per improvement plan step.

Each item names the resume ``section`` it concerns so the preview can
highlight it.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from resume_analyzer.models.analysis import AnalysisResult, Category, ImprovementItem, Priority

Tab = Literal["All", "Content", "Keywords", "Formatting"]
TABS: tuple[str, ...] = ("All", "Content", "Keywords", "Formatting")

Section = Literal["skills", "summary", "experience", "document"]

MISSING_KEYWORDS_TITLE = "Missing Critical Keywords"
FORMATTING_ISSUE_TITLE = "Formatting Issue"


class FeedbackItem(BaseModel):
    type: Literal["missing_keywords", "formatting", "plan"]
    priority: Priority
    category: Category
    title: str
    description: str
    section: Section
    keywords: list[str] = []
    benefit: str | None = None

    @property
    def is_alert(self) -> bool:
        return self.priority == "High" or self.category == "Formatting"


def plan_section(item: ImprovementItem) -> Section:
    """Resume section an improvement plan step refers to."""
    if item.category == "Keywords":
        return "skills"
    action = item.action.lower()
    if "summary" in action or "objective" in action:
        return "summary"
    if item.category == "Content":
        return "experience"
    return "document"


def build_feedback_items(result: AnalysisResult) -> list[FeedbackItem]:
    items: list[FeedbackItem] = []

    if result.missing_keywords:
        count = len(result.missing_keywords)
        items.append(FeedbackItem(
            type="missing_keywords",
            priority="High",
            category="Keywords",
            title=MISSING_KEYWORDS_TITLE,
            description=(
                f"Your resume is missing {count} top keywords found in typical job "
                "descriptions for this role. Adding these can boost your score significantly."
            ),
            keywords=list(result.missing_keywords),
            section="skills",
        ))

    for issue in result.formatting_issues:
        items.append(FeedbackItem(
            type="formatting",
            priority="Medium",
            category="Formatting",
            title=FORMATTING_ISSUE_TITLE,
            description=issue,
            section="document",
        ))

    for step in result.improvement_plan:
        items.append(FeedbackItem(
            type="plan",
            priority=step.priority,
            category=step.category,
            title=step.action,
            description=step.explanation,
            benefit=step.expected_benefit,
            section=plan_section(step),
        ))

    return items


def filter_feedback(items: list[FeedbackItem], tab: str) -> list[FeedbackItem]:
    """Items shown under ``tab``, in their original order."""
    if tab not in TABS:
        raise ValueError(f"Unknown feedback tab: {tab!r}")
    if tab == "All":
        return list(items)
    return [item for item in items if item.category == tab]


def tab_counts(result: AnalysisResult) -> dict[str, int]:
    plan = result.improvement_plan
    content = sum(1 for step in plan if step.category == "Content")
    keywords = (1 if result.missing_keywords else 0) + sum(
        1 for step in plan if step.category == "Keywords"
    )
    formatting = len(result.formatting_issues) + sum(
        1 for step in plan if step.category == "Formatting"
    )
    return {
        "All": content + keywords + formatting,
        "Content": content,
        "Keywords": keywords,
        "Formatting": formatting,
    }
