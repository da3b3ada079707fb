"""Tests for score labels and dashboard preview helpers."""

import pytest

from resume_analyzer.dashboard.scores import (
    ats_score_label,
    contact_line,
    keyword_message,
    parsability_message,
    score_band,
    skills_preview,
)
from resume_analyzer.models.analysis import ContactInfo


class TestScoreLabels:
    @pytest.mark.parametrize(
        "score, band, label",
        [
            (100, "high", "Excellent"),
            (80, "high", "Excellent"),
            (79, "medium", "Good Start"),
            (60, "medium", "Good Start"),
            (59, "low", "Needs Work"),
            (0, "low", "Needs Work"),
        ],
    )
    def test_band_boundaries(self, score, band, label):
        assert score_band(score) == band
        assert ats_score_label(score) == label

    def test_parsability_message(self):
        assert parsability_message(90) == "Format is machine-readable."
        assert parsability_message(89) == "Layout may confuse some ATS."

    def test_keyword_message(self):
        assert keyword_message(69) == "Critical keywords missing."
        assert keyword_message(70) == "Good keyword coverage."


class TestPreviewHelpers:
    def test_skills_preview_truncates_at_fifteen(self):
        skills = [f"skill-{i}" for i in range(20)]
        shown, hidden = skills_preview(skills)
        assert shown == skills[:15]
        assert hidden == 5

    def test_skills_preview_short_list(self):
        assert skills_preview(["Python"]) == (["Python"], 0)

    def test_contact_line_uses_placeholders(self):
        contact = ContactInfo(email="jane@example.com", phone="", location=" ")
        assert contact_line(contact) == "Location N/A | Phone N/A | jane@example.com"
