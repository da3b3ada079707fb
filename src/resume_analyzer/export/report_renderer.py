from __future__ import annotations

import html
import logging
import re
from pathlib import Path

import markdown
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_analyzer.dashboard.feedback import build_feedback_items
from resume_analyzer.dashboard.scores import (
    ats_score_label,
    contact_line,
    keyword_message,
    parsability_message,
)
from resume_analyzer.models.analysis import AnalysisResult

logger = logging.getLogger(__name__)

CSS_THEMES_DIR = Path(__file__).parent / "css_themes"
TEMPLATE_DIR = Path(__file__).parent / "templates"

AVAILABLE_THEMES = ("professional", "minimal")


def report_filename(result: AnalysisResult) -> str:
    """Download name for the exported report, e.g. ``Jane_Doe_Resume_Analysis.pdf``."""
    name = re.sub(r"\s+", "_", result.candidate_name.strip()) or "Candidate"
    return f"{name}_Resume_Analysis.pdf"


def render_report_markdown(result: AnalysisResult) -> str:
    """Markdown rendition of the analysis dashboard."""
    e = _escape
    lines: list[str] = [
        f"# {e(result.candidate_name) or 'Candidate'}",
        "",
        f"**{e(result.candidate_title) or 'Professional'}**",
        "",
        e(contact_line(result.contact_info)),
        "",
        "## Analysis Overview",
        "",
        "| Metric | Score | Assessment |",
        "| --- | --- | --- |",
        f"| Overall ATS Score | {result.ats_score}/100 | {ats_score_label(result.ats_score)} |",
        f"| Parsability | {result.parsability_score}% | {parsability_message(result.parsability_score)} |",
        f"| Keyword Match | {result.keyword_match_score}% | {keyword_message(result.keyword_match_score)} |",
        "",
    ]

    if result.skill_breakdown:
        lines += ["## Skill Breakdown", "", "| Category | Score |", "| --- | --- |"]
        lines += [f"| {e(s.category)} | {s.score} |" for s in result.skill_breakdown]
        lines.append("")

    lines += ["## Professional Summary", "", e(result.professional_summary), ""]

    lines += ["## Experience", ""]
    if result.work_experience:
        for job in result.work_experience:
            lines.append(f"### {e(job.role)}, {e(job.company)} ({e(job.duration)})")
            lines.append("")
            lines += [f"- {e(bullet)}" for bullet in job.description]
            lines.append("")
    else:
        lines += ["*No work experience detected.*", ""]

    if result.extracted_skills:
        lines += ["## Skills", "", ", ".join(e(s) for s in result.extracted_skills), ""]

    for heading, entries in (("Strengths", result.strengths), ("Weaknesses", result.weaknesses)):
        if entries:
            lines += [f"## {heading}", ""]
            lines += [f"- {e(entry)}" for entry in entries]
            lines.append("")

    items = build_feedback_items(result)
    if items:
        lines += ["## Feedback", ""]
        for item in items:
            lines.append(f"### [{item.priority}] {e(item.title)} ({item.category})")
            lines.append("")
            lines.append(e(item.description))
            lines.append("")
            if item.keywords:
                lines.append(f"**Keywords:** {', '.join(e(k) for k in item.keywords)}")
                lines.append("")
            if item.benefit:
                lines.append(f"**Expected benefit:** {e(item.benefit)}")
                lines.append("")

    return "\n".join(lines).strip() + "\n"


def render_report_html(result: AnalysisResult, theme: str = "professional") -> str:
    """Themed HTML report (also used for the in-app preview)."""
    if theme not in AVAILABLE_THEMES:
        theme = "professional"
    html_body = markdown.markdown(
        render_report_markdown(result),
        extensions=["tables", "nl2br"],
    )
    css_path = CSS_THEMES_DIR / f"{theme}.css"
    css = css_path.read_text(encoding="utf-8") if css_path.exists() else ""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("report.html")
    return template.render(
        title=f"{result.candidate_name} - Resume Analysis",
        css=Markup(css),
        body=Markup(html_body),
    )


def render_report_pdf(result: AnalysisResult, theme: str = "professional") -> bytes:
    """Export the analysis dashboard as PDF bytes."""
    return _html_to_pdf(render_report_html(result, theme))


def _html_to_pdf(html_content: str) -> bytes:
    """Convert HTML string to PDF bytes using WeasyPrint, with fpdf2 fallback."""
    try:
        from weasyprint import HTML
        return HTML(string=html_content).write_pdf()
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        from resume_analyzer.export.pdf_fallback import html_to_pdf_fpdf2
        return html_to_pdf_fpdf2(html_content)


def _escape(text: str) -> str:
    """Neutralise HTML and table pipes in model-supplied text."""
    return html.escape(text.strip(), quote=False).replace("|", "\\|")
