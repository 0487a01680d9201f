"""
Analytics endpoints: trajectory, weights, state vector, gating and advice.

Every endpoint is stateless: the caller sends the full snapshot and
stores whatever it wants to keep.
"""

from fastapi import APIRouter

from app.asf.advisor import compute_session_advice
from app.asf.fusion import calculate_readiness, evaluate_state_vector
from app.asf.gating import get_available_protocols, triggered_rules
from app.asf.trajectory import calculate_trajectory
from app.asf.weights import calculate_weights
from app.schemas.advice import AdviceRequest, AdviceResponse
from app.schemas.context import ProtocolRequest, ProtocolResponse
from app.schemas.profile import ReadinessWeights, UserProfile
from app.schemas.state_vector import StateVectorRequest, StateVectorResponse
from app.schemas.trajectory import TrajectoryRequest, TrajectoryResult

router = APIRouter()


@router.post(
    "/trajectory",
    summary="Trend, volatility and breakdown risk of a cognitive metric.",
    response_model=TrajectoryResult,
)
def get_trajectory(data: TrajectoryRequest):
    return calculate_trajectory(data.metric, data.history, data.baseline, data.as_of)


@router.post(
    "/weights",
    summary="Per-domain fusion weights for a profile.",
    response_model=ReadinessWeights,
)
def get_weights(profile: UserProfile):
    return calculate_weights(profile)


@router.post(
    "/state-vector",
    summary="Fold new observations into the state vector.",
    response_model=StateVectorResponse,
)
def update_state_vector(data: StateVectorRequest):
    vector = evaluate_state_vector(data.current, data.inputs, data.baseline)
    return StateVectorResponse(state_vector=vector, readiness=calculate_readiness(vector))


@router.post(
    "/protocols",
    summary="Protocols available for the current state and context.",
    response_model=ProtocolResponse,
)
def get_protocols(data: ProtocolRequest):
    available = get_available_protocols(data.state, data.context, data.as_of)
    fired = triggered_rules(data.state, data.context, data.as_of)
    return ProtocolResponse(available=available, triggered_rules=[rule.name for rule in fired])


@router.post(
    "/advice",
    summary="Run the full engine on one snapshot.",
    response_model=AdviceResponse,
)
def get_advice(data: AdviceRequest):
    return compute_session_advice(data)
