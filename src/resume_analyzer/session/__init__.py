"""Analysis lifecycle: pure state machine and the session that owns it."""
from resume_analyzer.session.controller import AnalysisSession
from resume_analyzer.session.state import AppState, ErrorKind, Status, transition

__all__ = ["AnalysisSession", "AppState", "ErrorKind", "Status", "transition"]
