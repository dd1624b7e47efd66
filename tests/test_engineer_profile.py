from conftest import build_timeline
from github_wrapped.pipelines.engineer_profile import classify_engineer


def test_heavy_year_is_grandmaster():
    days = build_timeline([10] * 365)
    profile = classify_engineer(days, 3650, 365, 100.0)
    assert profile.level == "Tech Grandmaster"
    assert profile.percentile == 99
    assert profile.focus_score == 100.0


def test_quiet_year_is_rookie():
    profile = classify_engineer(build_timeline([0] * 365), 0, 0, 0.0)
    assert profile.level == "Rookie"
    assert profile.intensity == "Learning"
    assert profile.focus_score == 0.0


def test_steady_low_volume_is_artisan():
    profile = classify_engineer(build_timeline([1] * 365), 365, 365, 100.0)
    assert profile.level == "Code Artisan"
    assert profile.percentile == 80


def test_steps_require_every_threshold():
    days = build_timeline([6] * 180 + [0] * 185)
    profile = classify_engineer(days, 1080, 180, 49.3)
    assert profile.level == "Code Maestro"

    # Same intensity but a short streak keeps focus under every step
    profile = classify_engineer(days, 1080, 30, 49.3)
    assert profile.level == "Rookie"
