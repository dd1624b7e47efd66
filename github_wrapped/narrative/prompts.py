"""
Prompt templates for the yearly story.
"""

from github_wrapped.core.models import AggregateStats

MAX_PROMPT_ACHIEVEMENTS = 3
MAX_PROMPT_LANGUAGES = 3

STORY_PROMPT_TEMPLATE = """
Create an inspiring and fun story about a developer's GitHub journey this year. Here are the key details:
- Total Contributions: {total_contributions}
- Longest Streak: {longest_streak} days
- Power Level: {power_level}
- Most Active Month: {most_active_month}
- Stars Earned: {stars_earned}
- Notable Achievements: {achievements}
- Top Languages: {languages}

Make it personal, motivating, and include anime/gaming references. Keep it under 200 words and make it sound epic!
Focus on their growth, dedication, and impact. Include specific numbers but write them in a narrative way.
"""


def build_story_prompt(stats: AggregateStats) -> str:
    """
    Build the story prompt from a stats summary.

    Only the first three achievements and the first three languages are
    included.
    """
    achievements = stats.special_achievements[:MAX_PROMPT_ACHIEVEMENTS]
    languages = [language for language, _ in stats.top_languages[:MAX_PROMPT_LANGUAGES]]

    return STORY_PROMPT_TEMPLATE.format(
        total_contributions=stats.total_contributions,
        longest_streak=stats.longest_streak,
        power_level=stats.power_level,
        most_active_month=stats.most_active_month or "n/a",
        stars_earned=stats.stars_earned,
        achievements=", ".join(achievements) or "none yet",
        languages=", ".join(languages) or "none reported",
    ).strip()


def build_highlights(stats: AggregateStats) -> list[str]:
    return [
        f"{stats.total_contributions} Total Contributions",
        f"{stats.longest_streak} Days Longest Streak",
        f"{stats.stars_earned} Stars Earned",
    ]
