"""
Unit tests for the cognitive trajectory analyzer.
"""

import datetime

import pytest

from app.asf.thresholds import DEFAULT_THRESHOLDS
from app.asf.trajectory import (
    calculate_trajectory,
    calculate_trend,
    generate_alerts,
    generate_predictions,
    grade_score,
)
from app.schemas.labels import Grade, TrendDirection
from app.schemas.trajectory import ScoreSample, Trend

AS_OF = datetime.datetime(2026, 3, 1, 8, 0, tzinfo=datetime.timezone.utc)


# ======================================================================
# Helpers
# ======================================================================


def _make_history(scores: list[float]) -> list[ScoreSample]:
    """One sample per day, oldest first, ending the day before AS_OF."""
    n = len(scores)
    return [
        ScoreSample(score=s, timestamp=AS_OF - datetime.timedelta(days=n - i))
        for i, s in enumerate(scores)
    ]


def _make_trend(direction=TrendDirection.STABLE, velocity=0.0, volatility=0.0) -> Trend:
    return Trend(direction=direction, velocity=velocity, volatility=volatility)


# ======================================================================
# calculate_trend
# ======================================================================


class TestCalculateTrend:

    def test_rising(self):
        trend = calculate_trend([1, 2, 3, 4, 5])
        assert trend.direction == TrendDirection.RISING
        assert trend.velocity == 1.0
        # stddev sqrt(2) / mean 3
        assert trend.volatility == pytest.approx(47.14, abs=0.01)

    def test_declining(self):
        trend = calculate_trend([5, 4, 3, 2, 1])
        assert trend.direction == TrendDirection.DECLINING
        assert trend.velocity == -1.0

    def test_flat(self):
        trend = calculate_trend([100] * 7)
        assert trend.direction == TrendDirection.STABLE
        assert trend.velocity == 0.0
        assert trend.volatility == 0.0

    def test_small_slope_is_stable(self):
        trend = calculate_trend([10, 10.4, 10.8])
        assert trend.velocity == pytest.approx(0.4)
        assert trend.direction == TrendDirection.STABLE

    @pytest.mark.parametrize("scores", [[], [42]])
    def test_too_few_samples(self, scores):
        trend = calculate_trend(scores)
        assert trend == Trend()

    def test_zero_mean(self):
        trend = calculate_trend([0, 0, 0])
        assert trend.volatility == 0.0

    def test_negative_mean_volatility_is_non_negative(self):
        trend = calculate_trend([-1, -2, -3])
        assert trend.volatility == pytest.approx(40.82, abs=0.01)

    def test_acceleration_reserved(self):
        assert calculate_trend([1, 5, 2, 8]).acceleration == 0.0


# ======================================================================
# generate_predictions / generate_alerts
# ======================================================================


class TestPredictions:

    def test_quiet_series(self):
        predictions = generate_predictions(_make_trend(), AS_OF)
        assert predictions.breakdown_risk == 0.0
        assert predictions.breakdown_date is None
        assert predictions.confidence == 0.6

    def test_steep_decline(self):
        trend = _make_trend(TrendDirection.DECLINING, velocity=-3.0)
        assert generate_predictions(trend, AS_OF).breakdown_risk == pytest.approx(0.4)

    def test_maximum_default_risk_has_no_date(self):
        trend = _make_trend(TrendDirection.DECLINING, velocity=-3.0, volatility=12.0)
        predictions = generate_predictions(trend, AS_OF)
        assert predictions.breakdown_risk == pytest.approx(0.7)
        assert predictions.breakdown_date is None

    def test_tuned_increments_predict_date(self):
        cfg = DEFAULT_THRESHOLDS.model_copy(update={"breakdown_decline_risk": 0.5})
        trend = _make_trend(TrendDirection.DECLINING, velocity=-3.0, volatility=12.0)
        predictions = generate_predictions(trend, AS_OF, cfg)
        assert predictions.breakdown_risk == pytest.approx(0.8)
        assert predictions.breakdown_date == AS_OF + datetime.timedelta(days=4)


class TestAlerts:

    def test_focus_declining(self):
        alerts = generate_alerts(_make_trend(velocity=-4.0), "focus_density")
        assert alerts == ["Focus declining rapidly."]

    def test_latency_rising(self):
        alerts = generate_alerts(_make_trend(velocity=16.0), "reaction_time")
        assert alerts == ["CNS latency increasing (slowing)."]

    def test_metric_specific(self):
        assert generate_alerts(_make_trend(velocity=-4.0), "memory_span") == []

    def test_unstable(self):
        alerts = generate_alerts(_make_trend(volatility=20.0), "memory_span")
        assert alerts == ["Performance unstable."]


# ======================================================================
# grade_score
# ======================================================================


class TestGradeScore:

    @pytest.mark.parametrize("score,expected", [
        (190, Grade.S),
        (200, Grade.A),
        (229, Grade.A),
        (230, Grade.B),
        (269, Grade.B),
        (270, Grade.C),
        (349, Grade.C),
        (350, Grade.F),
        (500, Grade.F),
    ])
    def test_reaction_time_bands(self, score, expected):
        assert grade_score(score, "reaction_time") == expected

    @pytest.mark.parametrize("metric", ["focus_density", "memory_span", "impulse_control"])
    def test_ungraded_metrics(self, metric):
        assert grade_score(99, metric) == Grade.B


# ======================================================================
# calculate_trajectory
# ======================================================================


class TestCalculateTrajectory:

    def test_window_keeps_latest_seven(self):
        history = _make_history([300, 300, 250, 255, 260, 265, 270, 275, 280])
        result = calculate_trajectory("reaction_time", history, as_of=AS_OF)
        assert len(result.scores_7d) == 7
        assert [s.score for s in result.scores_7d] == [250, 255, 260, 265, 270, 275, 280]
        assert result.trend.direction == TrendDirection.RISING
        assert result.trend.velocity == 5.0

    def test_unsorted_input_is_sorted_not_modified(self):
        history = _make_history([250, 260, 270])
        shuffled = [history[2], history[0], history[1]]
        result = calculate_trajectory("reaction_time", shuffled, as_of=AS_OF)
        assert [s.score for s in result.scores_7d] == [250, 260, 270]
        assert shuffled[0].score == 270

    def test_samples_are_graded(self):
        result = calculate_trajectory("reaction_time", _make_history([195, 240, 360]), as_of=AS_OF)
        assert [s.grade for s in result.scores_7d] == [Grade.S, Grade.B, Grade.F]

    def test_empty_history(self):
        result = calculate_trajectory("focus_density", [], as_of=AS_OF)
        assert result.scores_7d == []
        assert result.trend.direction == TrendDirection.STABLE
        assert result.alerts == []

    def test_slowing_reaction_raises_alert(self):
        history = _make_history([230, 250, 270, 290, 310, 330, 350])
        result = calculate_trajectory("reaction_time", history, as_of=AS_OF)
        assert result.trend.velocity == 20.0
        assert "CNS latency increasing (slowing)." in result.alerts

    def test_mixed_naive_and_aware_timestamps(self):
        """Naive timestamps sort as UTC next to aware ones."""
        history = [
            ScoreSample(score=300, timestamp=datetime.datetime(2026, 2, 28, 8, 0, tzinfo=datetime.timezone.utc)),
            ScoreSample(score=250, timestamp=datetime.datetime(2026, 2, 27, 8, 0)),
            ScoreSample(score=350, timestamp=datetime.datetime(2026, 2, 28, 9, 0)),
        ]
        result = calculate_trajectory("reaction_time", history, as_of=AS_OF)
        assert [s.score for s in result.scores_7d] == [250, 300, 350]
        assert result.trend.direction == TrendDirection.RISING
