"""Pydantic models for the resume analysis returned by the model.

Field names are snake_case in Python; the camelCase aliases are the names
used on the wire (in the request schema and in the model's JSON answer).
"""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

Priority = Literal["High", "Medium", "Low"]
Category = Literal["Content", "Keywords", "Formatting"]

_MODEL_CONFIG = {"populate_by_name": True, "frozen": True}


def clamp_score(value: Any) -> int:
    """Coerce a model-supplied score to an int in 0-100."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"score must be a number, got {value!r}")
    if isinstance(value, int):
        return max(0, min(100, value))
    try:
        number = float(value)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"score must be a number, got {value!r}") from exc
    if math.isnan(number):
        raise ValueError("score must be a number, got NaN")
    return round(max(0.0, min(100.0, number)))


class ContactInfo(BaseModel):
    email: str = Field(description="Extracted email address.")
    phone: str = Field(description="Extracted phone number.")
    location: str = Field(description="City and State/Country inferred from the resume.")

    model_config = _MODEL_CONFIG


class WorkExperience(BaseModel):
    role: str
    company: str
    duration: str
    description: list[str]

    model_config = _MODEL_CONFIG


class ImprovementItem(BaseModel):
    priority: Priority
    category: Category
    action: str = Field(description="Short actionable title, e.g., 'Quantify Impact'.")
    explanation: str = Field(description="Detailed explanation of what to fix and why.")
    expected_benefit: str = Field(
        alias="expectedBenefit",
        description="E.g., 'Could boost score by ~5 points'.",
    )

    model_config = _MODEL_CONFIG


class SkillScore(BaseModel):
    category: str
    score: int = Field(ge=0, le=100)

    model_config = _MODEL_CONFIG

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)


class AnalysisResult(BaseModel):
    """Structured ATS analysis of one resume."""

    ats_score: int = Field(
        alias="atsScore",
        ge=0,
        le=100,
        description="Overall ATS score (0-100). Be critical. Most resumes should score between 40-80.",
    )
    parsability_score: int = Field(
        alias="parsabilityScore",
        ge=0,
        le=100,
        description=(
            "Score (0-100) indicating how easily an ATS can extract data. "
            "Penalize columns, tables, icons, and complex layouts."
        ),
    )
    keyword_match_score: int = Field(
        alias="keywordMatchScore",
        ge=0,
        le=100,
        description=(
            "Score (0-100) based on industry standards for the inferred role. "
            "Check for hard skills coverage."
        ),
    )
    candidate_name: str = Field(
        alias="candidateName",
        description="Candidate's full name extracted exactly as it appears at the top.",
    )
    candidate_title: str = Field(
        alias="candidateTitle",
        description=(
            "The professional title inferred from the resume "
            "(e.g., 'Senior Product Manager') or the most recent role."
        ),
    )
    contact_info: ContactInfo = Field(
        alias="contactInfo",
        description="Candidate's contact information.",
    )
    professional_summary: str = Field(
        alias="professionalSummary",
        description=(
            "The summary section text. If missing, generate a concise "
            "professional summary based on experience."
        ),
    )
    work_experience: list[WorkExperience] = Field(
        alias="workExperience",
        description="Chronological work history extracted from the resume.",
    )
    extracted_skills: list[str] = Field(
        alias="extractedSkills",
        description="Comprehensive list of extracted technical and soft skills.",
    )
    missing_keywords: list[str] = Field(
        alias="missingKeywords",
        description=(
            "Critical keywords missing for this specific role/industry that are "
            "commonly found in Job Descriptions for this role."
        ),
    )
    strengths: list[str] = Field(description="List 3-5 strong selling points of the candidate.")
    weaknesses: list[str] = Field(
        description="List 3-5 areas where the resume falls short (e.g., passive voice, lack of metrics).",
    )
    formatting_issues: list[str] = Field(
        alias="formattingIssues",
        description="Specific formatting errors (e.g., 'Header in footer', 'Tables used', 'Font too small').",
    )
    improvement_plan: list[ImprovementItem] = Field(
        alias="improvementPlan",
        description="Actionable improvement steps prioritized by impact.",
    )
    skill_breakdown: list[SkillScore] = Field(alias="skillBreakdown")

    model_config = _MODEL_CONFIG

    @field_validator("ats_score", "parsability_score", "keyword_match_score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)


def analysis_schema() -> dict[str, Any]:
    """JSON Schema (wire names) the model is instructed to follow."""
    return AnalysisResult.model_json_schema(by_alias=True)
