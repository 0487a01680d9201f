"""
Journal endpoints: lexical signal extraction.
"""

from fastapi import APIRouter

from app.asf.journal import analyze_journal
from app.schemas.journal import JournalAnalysisResult, JournalRequest

router = APIRouter()


@router.post("/analyze", summary="Extract psychological signals from a journal entry.",
             response_model=JournalAnalysisResult)
def analyze(data: JournalRequest):
    """Empty text is valid and returns the neutral defaults."""
    return analyze_journal(data.text)
