"""
Named threshold table for the scoring engine.

Every magic number used by the domain scorers, the trajectory analyzer
and the context gate lives here, in one pydantic model.  The defaults
reproduce the reference behaviour; callers can pass a modified copy to
any scoring function to tune it without touching the logic::

    cfg = DEFAULT_THRESHOLDS.model_copy(update={"stress_critical": 8.5})

Several of these values (breakdown-risk increments, trajectory confidence,
journal confidence length) are heuristics chosen by hand.  They are kept
for behavioural parity, not because they have been validated.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ThresholdConfig(BaseModel):
    """Thresholds and coefficients for all scorers."""

    # ------------------------------------------------------------------
    # Stress bands (0-10 slider)
    # ------------------------------------------------------------------
    stress_quadratic: float = Field(6.0, description="Above this, stress penalty turns quadratic")
    stress_regulation: float = Field(7.0, description="Above this, regulation protocol is selected")
    stress_scattered: float = Field(5.0, description="Scattered focus interacts with stress above this")
    stress_critical: float = Field(9.0, description="Above this, testing protocols are gated off")

    # ------------------------------------------------------------------
    # Mood
    # ------------------------------------------------------------------
    mood_neutral: float = Field(5.0, description="Mood midpoint; below penalises, above offsets")
    mood_coefficient: float = 3.0

    # ------------------------------------------------------------------
    # Focus quality modifiers
    # ------------------------------------------------------------------
    scattered_high_stress_penalty: float = 15.0
    scattered_low_stress_penalty: float = 8.0
    tunnel_penalty: float = 10.0
    flow_bonus: float = 5.0

    # ------------------------------------------------------------------
    # Reaction time bands (ms vs baseline)
    # ------------------------------------------------------------------
    default_reaction_baseline: float = 250.0
    rt_severe_delta: float = 100.0
    rt_severe_penalty: float = 25.0
    rt_moderate_delta: float = 50.0
    rt_moderate_penalty: float = 10.0
    rt_primed_delta: float = -20.0
    rt_primed_bonus: float = 5.0

    # ------------------------------------------------------------------
    # Other cognitive metrics
    # ------------------------------------------------------------------
    impulse_control_floor: float = 50.0
    impulse_control_penalty: float = 10.0
    memory_span_floor: float = 5.0
    general_prep_score: float = Field(60.0, description="Below this score, general preparation is offered")

    # ------------------------------------------------------------------
    # Sleep
    # ------------------------------------------------------------------
    sleep_debt_ratio: float = Field(0.75, description="Duration / need below this is critical debt")
    sleep_debt_multiplier: float = 0.8
    sleep_debt_penalty: float = 25.0
    efficiency_floor: float = 80.0
    efficiency_penalty: float = 15.0

    # ------------------------------------------------------------------
    # HRV
    # ------------------------------------------------------------------
    hrv_high_ratio: float = 1.05
    hrv_low_ratio: float = 0.85
    hrv_low_penalty: float = 20.0
    hrv_acute_drop: float = Field(0.20, description="Fractional drop vs baseline that flags acute overload")
    hrv_acute_penalty: float = 40.0
    hrv_neutral_factor: float = Field(70.0, description="HRV factor when no reading or baseline exists")

    # ------------------------------------------------------------------
    # Resting heart rate tiers (bpm over baseline)
    # ------------------------------------------------------------------
    rhr_mild_delta: float = 5.0
    rhr_mild_penalty: float = 5.0
    rhr_severe_delta: float = 10.0
    rhr_severe_penalty: float = 15.0

    # ------------------------------------------------------------------
    # Trajectory
    # ------------------------------------------------------------------
    trend_slope: float = Field(0.5, description="|slope| above this is rising / declining")
    breakdown_velocity: float = 2.0
    breakdown_decline_risk: float = 0.4
    breakdown_volatility: float = 10.0
    breakdown_volatility_risk: float = 0.3
    breakdown_alert_risk: float = Field(0.7, description="Risk above this predicts a breakdown date")
    breakdown_horizon_days: int = 4
    prediction_confidence: float = 0.6
    trajectory_window: int = 7
    focus_decline_alert: float = -3.0
    latency_rise_alert: float = 15.0
    unstable_volatility_alert: float = 15.0

    # ------------------------------------------------------------------
    # Context gate
    # ------------------------------------------------------------------
    imminent_event_minutes: float = 20.0
    pre_event_minutes: float = 60.0
    failure_cooldown_minutes: float = 5.0
    sleep_deficit_hours: float = 5.0


DEFAULT_THRESHOLDS = ThresholdConfig()


# Letter-grade bands per metric: ordered ``(upper_bound_exclusive, grade)``.
# A score that clears every bound gets the ``fallback`` grade of the table.
GRADE_BANDS: dict[str, tuple[list[tuple[float, str]], str]] = {
    "reaction_time": ([(200.0, "S"), (230.0, "A"), (270.0, "B"), (350.0, "C")], "F"),
}

# Grade for metrics with no band table.  This is a known gap: focus,
# impulse-control and memory samples are all graded "B".
UNGRADED_METRIC_GRADE = "B"
