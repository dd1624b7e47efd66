"""
Engineer profile: a second gamified tier combining intensity, focus and volume.
"""

from dataclasses import dataclass
from typing import Sequence

from github_wrapped.core.models import DailyActivity, EngineerProfile

INTENSE_DAY_MIN_COUNT = 5  # a day is intense when count > 5
DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class ProfileStep:
    min_intensity: int
    min_focus: float
    min_contributions: int
    level: str
    description: str
    percentile: int
    intensity: str

    def matches(self, intensity: int, focus: float, contributions: int) -> bool:
        return (
            intensity > self.min_intensity
            and focus > self.min_focus
            and contributions > self.min_contributions
        )


PROFILE_STEPS: tuple[ProfileStep, ...] = (
    ProfileStep(150, 80, 2000, "Tech Grandmaster",
                "A legendary force in the coding universe, inspiring generations!", 99, "Mythical"),
    ProfileStep(120, 70, 1500, "Code Virtuoso",
                "Mastering the art of code with extraordinary skill!", 97, "Legendary"),
    ProfileStep(100, 60, 1200, "Elite Architect",
                "Designing the future of technology with masterful precision", 95, "Exceptional"),
    ProfileStep(80, 50, 1000, "Innovation Sage",
                "Pioneering new frontiers in software development", 90, "Intense"),
    ProfileStep(60, 40, 500, "Code Maestro",
                "Orchestrating complex solutions with elegant code", 85, "High"),
)

ROOKIE_CONSISTENCY_CEILING = 80


def classify_engineer(
    days: Sequence[DailyActivity],
    total_contributions: int,
    longest_streak: int,
    consistency: float,
) -> EngineerProfile:
    """First matching step wins; otherwise Rookie below 80% consistency, else Code Artisan."""
    intensity_score = sum(1 for day in days if day.count > INTENSE_DAY_MIN_COUNT)
    focus_score = longest_streak / DAYS_PER_YEAR * 100

    for step in PROFILE_STEPS:
        if step.matches(intensity_score, focus_score, total_contributions):
            return EngineerProfile(
                level=step.level,
                description=step.description,
                percentile=step.percentile,
                intensity=step.intensity,
                focus_score=focus_score,
            )

    if consistency < ROOKIE_CONSISTENCY_CEILING:
        return EngineerProfile(
            level="Rookie",
            description="Beginning an exciting journey in code",
            percentile=50,
            intensity="Learning",
            focus_score=focus_score,
        )

    return EngineerProfile(
        level="Code Artisan",
        description="Crafting code with growing expertise",
        percentile=80,
        intensity="Steady",
        focus_score=focus_score,
    )
