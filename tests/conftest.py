"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from resume_analyzer.clients.llm_client import LLMClient, LLMResponse
from resume_analyzer.models.analysis import AnalysisResult


def _analysis_payload() -> dict:
    return {
        "atsScore": 72,
        "parsabilityScore": 88,
        "keywordMatchScore": 64,
        "candidateName": "Jane Q. Doe",
        "candidateTitle": "Senior Backend Engineer",
        "contactInfo": {
            "email": "jane.doe@example.com",
            "phone": "+1 555 0100",
            "location": "Austin, TX",
        },
        "professionalSummary": "Backend engineer with 7 years building high-traffic APIs.",
        "workExperience": [
            {
                "role": "Senior Backend Engineer",
                "company": "Acme Corp",
                "duration": "2021 - Present",
                "description": [
                    "Led migration of monolith to 12 Python microservices",
                    "Cut p95 latency by 40% with Redis caching",
                ],
            },
            {
                "role": "Software Engineer",
                "company": "Initech",
                "duration": "2017 - 2021",
                "description": ["Built billing APIs in Django"],
            },
        ],
        "extractedSkills": ["Python", "Django", "PostgreSQL", "Redis", "AWS"],
        "missingKeywords": ["Kubernetes", "Terraform"],
        "strengths": ["Quantified achievements", "Clear progression"],
        "weaknesses": ["No summary of leadership scope"],
        "formattingIssues": ["Two-column layout", "Contact details in header"],
        "improvementPlan": [
            {
                "priority": "High",
                "category": "Keywords",
                "action": "Add cloud tooling",
                "explanation": "Mention Kubernetes and Terraform where you used them.",
                "expectedBenefit": "Could boost score by ~8 points",
            },
            {
                "priority": "Medium",
                "category": "Content",
                "action": "Rewrite the professional summary",
                "explanation": "Lead with scope and impact.",
                "expectedBenefit": "Stronger first impression",
            },
            {
                "priority": "Low",
                "category": "Content",
                "action": "Quantify Impact",
                "explanation": "Add numbers to the Initech bullets.",
                "expectedBenefit": "Could boost score by ~3 points",
            },
            {
                "priority": "Medium",
                "category": "Formatting",
                "action": "Use a single column",
                "explanation": "Columns confuse many ATS parsers.",
                "expectedBenefit": "Higher parsability",
            },
        ],
        "skillBreakdown": [
            {"category": "Backend", "score": 90},
            {"category": "Cloud", "score": 55},
            {"category": "Leadership", "score": 60},
        ],
    }


@pytest.fixture
def sample_analysis_payload() -> dict:
    return _analysis_payload()


@pytest.fixture
def sample_analysis_json(sample_analysis_payload) -> str:
    return json.dumps(sample_analysis_payload)


@pytest.fixture
def sample_result(sample_analysis_payload) -> AnalysisResult:
    return AnalysisResult.model_validate(sample_analysis_payload)


@pytest.fixture
def minimal_pdf_bytes() -> bytes:
    """A one-page PDF built with PyMuPDF."""
    import fitz

    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Jane Q. Doe - Senior Backend Engineer")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate_from_document = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    return client
