"""
User profile and readiness weight schemas.

The profile only carries what the Profile Weighter needs: clinical
conditions, training level and sport type.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

WEIGHT_DOMAINS = ["sleep", "hrv", "recovery", "mind", "fuel"]


class ClinicalProfile(BaseModel):
    """Clinical flags (e.g. ``t1d``, ``pcos``, ``red_s``, ``hypertension``)."""

    conditions: list[str] = Field(default_factory=list)


class UserProfile(BaseModel):
    """Subset of the user profile relevant to weighting."""

    sport_type: str = Field("general", description="general, running, football, strength or hybrid")
    training_level: str = Field("intermediate", description="beginner, intermediate, advanced or elite")
    clinical: ClinicalProfile = Field(default_factory=ClinicalProfile)


class ReadinessWeights(BaseModel):
    """Per-domain fusion weights.  Normalised weights sum to 1.0."""

    sleep: float = Field(..., ge=0.0)
    hrv: float = Field(..., ge=0.0)
    recovery: float = Field(..., ge=0.0)
    mind: float = Field(..., ge=0.0)
    fuel: float = Field(..., ge=0.0)

    def total(self) -> float:
        """Return the sum of all weights."""
        return sum(self.as_list())

    def as_list(self) -> list[float]:
        """Return as ordered list ``[sleep, hrv, recovery, mind, fuel]``."""
        return [getattr(self, name) for name in WEIGHT_DOMAINS]

    def as_dict(self) -> dict[str, float]:
        """Return as ``{domain: weight}``."""
        return {name: getattr(self, name) for name in WEIGHT_DOMAINS}

    def normalised(self) -> ReadinessWeights:
        """Return a copy with every weight divided by the running sum."""
        total = self.total()
        if total <= 0:
            share = 1.0 / len(WEIGHT_DOMAINS)
            return ReadinessWeights(**{name: share for name in WEIGHT_DOMAINS})
        return ReadinessWeights(**{name: getattr(self, name) / total for name in WEIGHT_DOMAINS})
