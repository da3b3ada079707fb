"""Data models for the resume analyzer."""

from resume_analyzer.models.analysis import (
    AnalysisResult,
    Category,
    ContactInfo,
    ImprovementItem,
    Priority,
    SkillScore,
    WorkExperience,
    analysis_schema,
)

__all__ = [
    "AnalysisResult",
    "Category",
    "ContactInfo",
    "ImprovementItem",
    "Priority",
    "SkillScore",
    "WorkExperience",
    "analysis_schema",
]
