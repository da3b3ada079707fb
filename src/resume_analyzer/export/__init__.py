"""PDF report export for the analysis dashboard."""
from resume_analyzer.export.report_renderer import (
    AVAILABLE_THEMES,
    render_report_html,
    render_report_pdf,
    report_filename,
)

__all__ = ["render_report_pdf", "render_report_html", "report_filename", "AVAILABLE_THEMES"]
