"""Streamlit Web UI for resume-analyzer.

Upload a PDF resume → one Claude analysis call → ATS dashboard + PDF report export.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Streamlit Cloud: sync st.secrets → os.environ so the API client can read it
if "ANTHROPIC_API_KEY" not in os.environ:
    try:
        os.environ["ANTHROPIC_API_KEY"] = st.secrets["ANTHROPIC_API_KEY"]
    except Exception:
        pass

from resume_analyzer.config import load_config
from resume_analyzer.dashboard.feedback import TABS, build_feedback_items, filter_feedback, tab_counts
from resume_analyzer.dashboard.loading import (
    INSIGHTS,
    STEPS,
    advance_progress,
    insight_at,
    step_status,
)
from resume_analyzer.dashboard.scores import (
    ats_score_label,
    contact_line,
    keyword_message,
    parsability_message,
    score_band,
    skills_preview,
)
from resume_analyzer.errors import LocalValidationError
from resume_analyzer.export.report_renderer import render_report_pdf, report_filename
from resume_analyzer.logging.cost_calculator import describe_usage
from resume_analyzer.models.analysis import AnalysisResult
from resume_analyzer.parsers.pdf_upload import ValidatedUpload, validate_upload
from resume_analyzer.pipeline.resume_analyst import create_analyst
from resume_analyzer.session.controller import AnalysisSession
from resume_analyzer.session.state import ErrorKind, Reset, Retried, Status

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume Analyzer",
    page_icon=":page_facing_up:",
    layout="wide",
)

config = load_config()

CANCEL_GRACE_SECONDS = 2.0
BAND_COLORS = {"high": "green", "medium": "blue", "low": "red"}
STEP_ICONS = {"completed": ":white_check_mark:", "active": ":hourglass_flowing_sand:", "pending": ":white_circle:"}
SECTION_LABELS = {
    "skills": "Skills",
    "summary": "Professional Summary",
    "experience": "Experience",
    "document": "Whole document",
}

# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


async def _analyze(document: bytes) -> AnalysisResult:
    """Build the analyst (API key check included) and run one analysis."""
    analyst = create_analyst(config)
    try:
        return await analyst.analyze(document)
    finally:
        usage = analyst.llm.get_token_summary()
        if usage["calls"]:
            st.session_state["last_usage"] = describe_usage(usage)
            logger.info("Analysis usage: %s", st.session_state["last_usage"])


def _get_session() -> AnalysisSession:
    if "analysis_session" not in st.session_state:
        st.session_state.analysis_session = AnalysisSession(_analyze)
    return st.session_state.analysis_session


session = _get_session()
st.session_state.setdefault("uploader_key", 0)

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("Resume Analyzer")
    st.caption("AI-powered ATS resume scoring")
    st.divider()
    st.markdown(f"**Model**: `{config.llm.model}`")
    if "last_usage" in st.session_state:
        st.caption(f"Last analysis: {st.session_state['last_usage']}")

# ---------------------------------------------------------------------------
# Idle: upload
# ---------------------------------------------------------------------------


def _view_idle():
    st.title("AI-Powered PDF Resume Analyzer")
    st.markdown("Upload, analyze, and score resumes instantly using generative AI.")

    uploaded = st.file_uploader(
        "Upload your resume",
        type=["pdf"],
        help=f"PDF only ({config.upload.max_file_mb}MB max)",
        key=f"resume_upload_{st.session_state.uploader_key}",
    )
    if uploaded is not None:
        try:
            upload = validate_upload(
                uploaded.name,
                uploaded.type,
                uploaded.getvalue(),
                max_bytes=config.upload.max_bytes,
            )
        except LocalValidationError as e:
            st.error(str(e))
        else:
            # New uploader key so the same file is not picked up again after this attempt
            st.session_state.uploader_key += 1
            st.session_state.pending_upload = upload
            st.rerun()

    cols = st.columns(3)
    features = [
        ("Instant Scoring", "Get a 0-100 score based on real-world ATS algorithms.", ":zap:"),
        ("Keyword Analysis", "Identify missing skills critical for your target role.", ":mag:"),
        ("Smart Feedback", "Actionable advice to increase your interview chances.", ":dart:"),
    ]
    for col, (title, desc, icon) in zip(cols, features):
        with col, st.container(border=True):
            st.markdown(f"### {icon} {title}")
            st.write(desc)


# ---------------------------------------------------------------------------
# Analyzing: progress + cancel
# ---------------------------------------------------------------------------


def _render_progress(progress: float, elapsed: float, bar, steps_slot, insight_slot):
    bar.progress(progress / 100, text=f"Analysis progress: {round(progress)}%")
    steps_slot.markdown(
        "\n".join(
            f"{STEP_ICONS[step_status(i, progress)]} {label}" for i, label in enumerate(STEPS)
        )
    )
    insight = insight_at(elapsed)
    position = INSIGHTS.index(insight) + 1
    insight_slot.info(f"**Pro tip {position}/{len(INSIGHTS)}: {insight.title}**\n\n{insight.text}")


async def _run_with_progress(upload: ValidatedUpload, bar, steps_slot, insight_slot):
    run_task = asyncio.ensure_future(session.run(upload.data, upload.filename))
    progress, started = 0.0, time.monotonic()
    try:
        while not run_task.done():
            progress = advance_progress(progress)
            # Streamlit raises its rerun/stop exception here when the user leaves the page
            _render_progress(progress, time.monotonic() - started, bar, steps_slot, insight_slot)
            await asyncio.sleep(0.1)
    finally:
        if not run_task.done():
            # Let the cancelled request unwind before Streamlit reruns the script
            await session.cancel_and_wait(CANCEL_GRACE_SECONDS)
    return await run_task


def _view_analyzing(upload: ValidatedUpload):
    st.header("Analyzing Your Profile")
    st.caption(f"{upload.filename} · {upload.page_count} page(s)")
    bar = st.progress(0, text="Preparing...")
    steps_slot = st.empty()
    insight_slot = st.empty()
    st.button("Cancel analysis", on_click=session.cancel)

    asyncio.run(_run_with_progress(upload, bar, steps_slot, insight_slot))
    st.rerun()


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


def _view_error():
    state = session.state
    st.header("Analysis Failed")
    st.error(state.error_message)
    if state.error_kind is ErrorKind.CONFIGURATION:
        st.info("Set ANTHROPIC_API_KEY in your environment (or Streamlit secrets) and reload the app.")
    elif state.can_retry and st.button("Try Again", type="primary"):
        session.dispatch(Retried())
        st.rerun()


# ---------------------------------------------------------------------------
# Success: dashboard
# ---------------------------------------------------------------------------


def _score_card(title: str, value: str, caption: str, band: str, help_text: str):
    with st.container(border=True):
        st.metric(title, value, help=help_text)
        st.markdown(f":{BAND_COLORS[band]}[{caption}]")


def _render_preview(data: AnalysisResult, highlighted: str | None):
    def _heading(section: str, label: str):
        marker = " :large_blue_circle:" if highlighted == section else ""
        st.markdown(f"**{label.upper()}**{marker}")

    with st.container(border=True):
        st.caption("DOCUMENT PREVIEW" + (" :large_blue_circle:" if highlighted == "document" else ""))
        st.subheader(data.candidate_name or "Candidate")
        st.markdown(f"**{data.candidate_title or 'Professional'}**")
        st.caption(contact_line(data.contact_info))

        _heading("summary", "Professional Summary")
        st.write(data.professional_summary)

        _heading("experience", "Experience")
        if data.work_experience:
            for job in data.work_experience:
                st.markdown(f"**{job.role}** · {job.duration}  \n*{job.company}*")
                st.markdown("\n".join(f"- {bullet}" for bullet in job.description))
        else:
            st.caption("No work experience detected.")

        _heading("skills", "Skills")
        shown, hidden = skills_preview(data.extracted_skills)
        skills_text = " · ".join(shown)
        if hidden:
            skills_text += f"  (+{hidden} more)"
        st.write(skills_text)


def _view_success():
    data = session.state.result
    generation = session.state.generation

    head_left, head_right = st.columns([3, 2])
    with head_left:
        st.header("Analysis Overview")
    with head_right:
        export_cols = st.columns(2)
        with export_cols[0]:
            cache_key = f"report_pdf_{generation}"
            if cache_key not in st.session_state:
                try:
                    st.session_state[cache_key] = render_report_pdf(data, theme=config.export.theme)
                except Exception:
                    logger.exception("PDF export failed")
                    st.session_state[cache_key] = None
            pdf_bytes = st.session_state[cache_key]
            if pdf_bytes is not None:
                st.download_button(
                    label="Export PDF",
                    data=pdf_bytes,
                    file_name=report_filename(data),
                    mime="application/pdf",
                )
            else:
                st.warning("Failed to export PDF. Please try again.")
        with export_cols[1]:
            if st.button("Analyze New"):
                st.session_state.pop(f"report_pdf_{generation}", None)
                session.dispatch(Reset())
                st.rerun()

    left, right = st.columns([1, 2])

    with right:
        cards = st.columns(3)
        with cards[0]:
            _score_card(
                "Overall ATS Score",
                f"{data.ats_score}/100",
                ats_score_label(data.ats_score),
                score_band(data.ats_score),
                "How well your resume parses and matches job requirements: keyword "
                "relevance, formatting cleanliness, and content quality combined.",
            )
        with cards[1]:
            _score_card(
                "Parsability",
                f"{data.parsability_score}%",
                parsability_message(data.parsability_score),
                "high" if data.parsability_score >= 90 else "medium",
                "How easily an ATS can read your file. Tables, columns, and graphics lower it.",
            )
        with cards[2]:
            _score_card(
                "Keyword Match",
                f"{data.keyword_match_score}%",
                keyword_message(data.keyword_match_score),
                "low" if data.keyword_match_score < 70 else "high",
                "Essential industry keywords found compared to standard job descriptions for this role.",
            )

        if data.skill_breakdown:
            st.subheader("Skill Breakdown")
            st.bar_chart(
                [{"category": s.category, "score": s.score} for s in data.skill_breakdown],
                x="category",
                y="score",
                horizontal=True,
            )

        counts = tab_counts(data)
        items = build_feedback_items(data)
        tab_labels = [
            f"{'All Feedback' if tab == 'All' else tab} ({counts[tab]})" for tab in TABS
        ]
        focus_options = ["None"] + list(SECTION_LABELS.values())
        focus = st.radio("Highlight section", focus_options, horizontal=True, index=0)
        highlighted = next(
            (key for key, label in SECTION_LABELS.items() if label == focus), None
        )

        for tab, container in zip(TABS, st.tabs(tab_labels)):
            with container:
                visible = filter_feedback(items, tab)
                if not visible:
                    st.caption("No feedback in this category.")
                for item in visible:
                    with st.container(border=True):
                        icon = ":red_circle:" if item.is_alert else ":large_blue_circle:"
                        marker = " :pushpin:" if item.section == highlighted else ""
                        st.markdown(f"{icon} **{item.title}**{marker}")
                        st.caption(
                            f"{item.priority} priority · {item.category} · "
                            f"{SECTION_LABELS[item.section]}"
                        )
                        st.write(item.description)
                        if item.keywords:
                            st.markdown(" ".join(f"`{k}`" for k in item.keywords))
                        if item.benefit:
                            st.markdown(f":green[{item.benefit}]")

        strengths_col, weaknesses_col = st.columns(2)
        with strengths_col:
            st.subheader("Strengths")
            for entry in data.strengths:
                st.markdown(f"- {entry}")
        with weaknesses_col:
            st.subheader("Weaknesses")
            for entry in data.weaknesses:
                st.markdown(f"- {entry}")

    with left:
        _render_preview(data, highlighted)


# ---------------------------------------------------------------------------
# Main router
# ---------------------------------------------------------------------------

status = session.state.status
pending = st.session_state.pop("pending_upload", None)

if status is Status.IDLE and pending is not None:
    _view_analyzing(pending)
elif status is Status.IDLE:
    _view_idle()
elif status is Status.ANALYZING:
    # A previous run was interrupted without reaching cancel(); start over
    session.cancel()
    st.rerun()
elif status is Status.ERROR:
    _view_error()
else:
    _view_success()
