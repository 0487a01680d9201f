"""What would ASF tell you this morning?

Runs the full engine on a hand-written snapshot (poor sleep, high
stress, a match in 45 minutes) and prints the advice, then replays a
week of reaction-time tests through the trajectory analyzer.
"""

import datetime

from app.asf.advisor import compute_session_advice
from app.asf.trajectory import calculate_trajectory
from app.schemas.advice import AdviceRequest
from app.schemas.context import Context
from app.schemas.domain_score import CognitiveScores, MindState, SleepState
from app.schemas.labels import FocusQuality
from app.schemas.profile import ClinicalProfile, UserProfile
from app.schemas.state_vector import Baseline
from app.schemas.trajectory import ScoreSample

NOW = datetime.datetime(2026, 2, 8, 7, 30, tzinfo=datetime.timezone.utc)

BASELINE = Baseline(resting_hr=52, hrv_baseline=78, reaction_time=240, sleep_need=8)

PROFILE = UserProfile(sport_type="football", training_level="advanced",
                      clinical=ClinicalProfile(conditions=[]))

JOURNAL = (
    "Slept badly again and I feel tired. Worried about the match, what if I fail in front of everyone. "
    "Still, I showed up and trained today. I notice the story my mind tells me is just a thought."
)

# Reaction times (ms) from the last nine mornings; only the last seven count.
REACTION_HISTORY = [248, 245, 251, 259, 262, 270, 268, 281, 290]


def main():
    request = AdviceRequest(
        baseline=BASELINE,
        profile=PROFILE,
        context=Context(time_until_event=45),
        mind=MindState(stress=7.5, mood=4, focus_quality=FocusQuality.TUNNEL,
                       cognitive_scores=CognitiveScores(reaction_time=305, memory_span=6, impulse_control=62)),
        sleep=SleepState(duration=5.6, efficiency=76, hrv=59, resting_hr=60, wake_time=datetime.time(6, 30)),
        journal_text=JOURNAL,
        cognitive_load=7,
        recovery_score=64,
        fuel_score=71,
    )
    advice = compute_session_advice(request, as_of=NOW)

    print()
    print("=" * 65)
    print(f"  ASF Morning Advice - {NOW.strftime('%A %d %B %Y %H:%M')}")
    print("=" * 65)
    print()
    print(f"  Readiness (state vector): {advice.readiness}")
    print(f"  Readiness (weighted):     {advice.fused.score:.1f} ({advice.fused.status}, "
          f"bottleneck {advice.fused.bottleneck_domain})")
    print()
    print(f"  Mind score:   {advice.mind.score}")
    for reason in advice.mind.reasons:
        print(f"    - {reason}")
    if advice.sleep:
        print(f"  Sleep factor: {advice.sleep.sleep_factor:.0f}   HRV factor: {advice.sleep.hrv_factor:.0f}")
        for reason in advice.sleep.reasons:
            print(f"    - {reason}")
        print(f"  Bedtime tonight: {advice.sleep.recommended_bedtime}")
    print()

    vector = advice.state_vector
    print(f"  Autonomic balance: {vector.autonomic_balance:+.1f}")
    print(f"  Emotional valence: {vector.emotional_valence:+.1f}")
    print(f"  Resilience:        {vector.resilience_state.value}")
    print()

    print("  " + "-" * 63)
    print(f"  Protocols available: {', '.join(advice.available_protocols)}")
    print(f"  Gating rules fired:  {', '.join(advice.triggered_rules) or '-'}")
    print(f"  Recommended:         {advice.recommended_protocol or '-'}")
    if advice.withheld_protocol:
        print(f"  Withheld by gate:    {advice.withheld_protocol}")
    print()

    history = [
        ScoreSample(score=score, timestamp=NOW - datetime.timedelta(days=len(REACTION_HISTORY) - i))
        for i, score in enumerate(REACTION_HISTORY)
    ]
    trajectory = calculate_trajectory("reaction_time", history, BASELINE, as_of=NOW)

    print("  Reaction-time trajectory (7d):")
    print("  " + " ".join(f"{s.score:.0f}{s.grade.value}" for s in trajectory.scores_7d))
    trend = trajectory.trend
    print(f"  Trend: {trend.direction.value}  velocity {trend.velocity:+.2f}  volatility {trend.volatility:.2f}%")
    print(f"  Breakdown risk: {trajectory.predictions.breakdown_risk:.2f}")
    for alert in trajectory.alerts:
        print(f"    ! {alert}")
    print()


if __name__ == "__main__":
    main()
