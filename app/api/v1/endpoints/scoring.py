"""
Domain scoring endpoints: mind and sleep.
"""

from fastapi import APIRouter

from app.asf.mind import evaluate_mind_state
from app.asf.sleep import evaluate_sleep
from app.schemas.domain_score import (
    DomainScoreResult,
    MindEvaluationRequest,
    SleepEvaluation,
    SleepEvaluationRequest,
)

router = APIRouter()


@router.post("/mind", summary="Score the mind domain and pick a candidate protocol.", response_model=DomainScoreResult)
def score_mind(data: MindEvaluationRequest):
    return evaluate_mind_state(data.state, data.baseline)


@router.post("/sleep", summary="Score last night's sleep against baseline.", response_model=SleepEvaluation)
def score_sleep(data: SleepEvaluationRequest):
    return evaluate_sleep(data.state, data.baseline)
