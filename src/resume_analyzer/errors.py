"""Exceptions raised along the resume analysis path."""


class ResumeAnalyzerError(RuntimeError):
    """Base class for errors raised by resume_analyzer itself"""


class ConfigurationError(ResumeAnalyzerError):
    """Raised when a required setting (the API key) is missing"""


class LocalValidationError(ResumeAnalyzerError):
    """Raised at the upload boundary when a file cannot be analyzed.

    The analysis request is never issued for a file that fails validation.
    """


class AnalysisFailedError(ResumeAnalyzerError):
    """Raised when the model answered but the answer is unusable"""


class EmptyResponseError(AnalysisFailedError):
    """Raised when the model response contains no text"""


class MalformedResponseError(AnalysisFailedError):
    """Raised when the response text is not a valid analysis result"""
