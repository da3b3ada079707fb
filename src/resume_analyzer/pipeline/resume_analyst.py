"""Resume Analyst - scores a PDF resume against ATS expectations in one model call."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from resume_analyzer.clients.llm_client import DEFAULT_MODEL, LLMClient
from resume_analyzer.config import AppConfig, resolve_api_key
from resume_analyzer.errors import EmptyResponseError, MalformedResponseError
from resume_analyzer.models.analysis import AnalysisResult, analysis_schema
from resume_analyzer.parsers.pdf_upload import PDF_MEDIA_TYPE
from resume_analyzer.utils.json_parser import extract_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_TEMPLATE = """\
You are an expert recruiter and Applicant Tracking System (ATS) specialist.
You review resumes the way modern ATS software and experienced hiring managers do.

Respond with a single JSON object that conforms exactly to this JSON Schema.
Use the property names as written, include every required property, and output
nothing before or after the object:

{schema}"""

ANALYSIS_PROMPT = """\
Analyze the attached resume PDF.

1. Extract the candidate's name, professional title, contact information,
   professional summary, work history and skills exactly as they appear.
2. Infer the target role from the resume and score it:
   - atsScore: overall ATS compatibility. Be critical; most resumes score 40-80.
   - parsabilityScore: how reliably an ATS can extract fields from the layout.
     Penalize multiple columns, tables, icons, headers/footers and images.
   - keywordMatchScore: coverage of the hard skills typically required for the role.
3. List missing keywords that job descriptions for this role commonly require.
4. List 3-5 strengths, 3-5 weaknesses, and any concrete formatting issues.
5. Produce an improvement plan ordered by impact. Each step has a priority
   (High, Medium or Low), a category (Content, Keywords or Formatting), a short
   action title, an explanation and the expected benefit.
6. Break the candidate's skills into 4-6 categories with a 0-100 score each.

Respond with JSON only."""


def build_system_prompt() -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(schema=json.dumps(analysis_schema(), indent=2))


class ResumeAnalyst:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.1,
        max_tokens: int = 8192,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def analyze(self, document: bytes) -> AnalysisResult:
        """Analyze a PDF resume and return the validated result.

        Raises:
            EmptyResponseError: the model returned no text.
            MalformedResponseError: the text is not a valid AnalysisResult.
            anthropic.APIError: transport or service failures, unchanged.
        """
        response = await self.llm.generate_from_document(
            document=document,
            prompt=ANALYSIS_PROMPT,
            media_type=PDF_MEDIA_TYPE,
            system=build_system_prompt(),
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not response.text.strip():
            raise EmptyResponseError("No response extracted from the model.")
        return parse_analysis(response.text)


def parse_analysis(text: str) -> AnalysisResult:
    """Strictly decode and validate a model answer into an AnalysisResult."""
    try:
        data = extract_json_object(text)
    except ValueError as exc:
        logger.warning("Unparseable analysis response: %s", exc)
        raise MalformedResponseError(
            "The analysis service returned an unreadable response. Please try again."
        ) from exc

    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        logger.warning("Analysis response failed validation: %s", ", ".join(fields))
        raise MalformedResponseError(
            f"The analysis response was incomplete or invalid ({', '.join(fields)})."
        ) from exc


def create_analyst(config: AppConfig, api_key: str | None = None) -> ResumeAnalyst:
    """Build a ResumeAnalyst from config.

    Raises:
        ConfigurationError: no API key was given and none is set in the environment.
    """
    llm = LLMClient(
        api_key=resolve_api_key(api_key),
        timeout=config.llm.timeout,
        max_attempts=config.llm.max_attempts,
    )
    return ResumeAnalyst(
        llm,
        model=config.llm.model,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )
