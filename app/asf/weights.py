"""
Profile weighter: per-domain fusion weights from the user profile.

Adjustments are applied **in sequence**; later ones see the result of
earlier ones, and nothing is mutually exclusive:

1. Balanced default         sleep .30  hrv .30  recovery .20  mind .10  fuel .10
2. Metabolic fragility      (t1d, pcos, red_s) fuel becomes the bottleneck:
                            sleep .20  hrv .20  recovery .15  mind .15  fuel .30
3. Elite / advanced level   volume assumed high, hrv and recovery dominate:
                            sleep .20  hrv .35  recovery .25  mind .05  fuel .15
4. Sport nudges             strength / football: recovery >= .30, hrv and
                            sleep -.05 each; running / hybrid: fuel >= .20,
                            recovery -.05
5. Renormalise              every weight divided by the running sum

Step 3 replaces step 2 outright when both apply.
"""

from __future__ import annotations

import logging

from app.schemas.profile import ReadinessWeights, UserProfile

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS: dict[str, float] = {
    "sleep": 0.30,
    "hrv": 0.30,
    "recovery": 0.20,
    "mind": 0.10,
    "fuel": 0.10,
}

METABOLIC_FRAGILITY_CONDITIONS = frozenset({"t1d", "pcos", "red_s"})
METABOLIC_FRAGILITY_WEIGHTS: dict[str, float] = {
    "sleep": 0.20,
    "hrv": 0.20,
    "recovery": 0.15,
    "mind": 0.15,
    "fuel": 0.30,
}

HIGH_OUTPUT_LEVELS = frozenset({"elite", "advanced"})
HIGH_OUTPUT_WEIGHTS: dict[str, float] = {
    "sleep": 0.20,
    "hrv": 0.35,
    "recovery": 0.25,
    "mind": 0.05,
    "fuel": 0.15,
}

STRENGTH_SPORTS = frozenset({"strength", "football"})
ENDURANCE_SPORTS = frozenset({"running", "hybrid"})

_SPORT_FLOOR = {"recovery": 0.30, "fuel": 0.20}
_SPORT_DECREMENT = 0.05


def calculate_weights(profile: UserProfile) -> ReadinessWeights:
    """Derive normalised fusion weights for *profile*.

    The result always sums to 1.0 (within float epsilon) however many
    adjustments fired.
    """
    weights = dict(DEFAULT_WEIGHTS)
    fired: list[str] = []

    if METABOLIC_FRAGILITY_CONDITIONS.intersection(profile.clinical.conditions):
        weights.update(METABOLIC_FRAGILITY_WEIGHTS)
        fired.append("metabolic_fragility")

    if profile.training_level in HIGH_OUTPUT_LEVELS:
        weights.update(HIGH_OUTPUT_WEIGHTS)
        fired.append("high_output")

    if profile.sport_type in STRENGTH_SPORTS:
        weights["recovery"] = max(weights["recovery"], _SPORT_FLOOR["recovery"])
        weights["hrv"] -= _SPORT_DECREMENT
        weights["sleep"] -= _SPORT_DECREMENT
        fired.append("strength_sport")
    elif profile.sport_type in ENDURANCE_SPORTS:
        weights["fuel"] = max(weights["fuel"], _SPORT_FLOOR["fuel"])
        weights["recovery"] -= _SPORT_DECREMENT
        fired.append("endurance_sport")

    logger.debug("weight adjustments: %s", fired or ["default"])

    return ReadinessWeights(**weights).normalised()
