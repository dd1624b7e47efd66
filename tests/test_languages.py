"""Tests for the language breakdown."""

from github_wrapped.pipelines.languages import build_language_breakdown, top_languages


def test_bytes_are_summed_across_repositories():
    breakdown = build_language_breakdown([{"Python": 300}, {"Go": 100, "Python": 100}])
    assert breakdown == {"Python": 80.0, "Go": 20.0}


def test_percentages_round_to_one_decimal():
    assert build_language_breakdown([{"A": 1, "B": 2}]) == {"A": 33.3, "B": 66.7}


def test_no_repositories_gives_empty_breakdown():
    assert build_language_breakdown([]) == {}


def test_zero_byte_languages_keep_their_keys():
    assert build_language_breakdown([{"Markdown": 0}]) == {"Markdown": 0.0}


def test_top_languages_ties_keep_first_seen_order():
    breakdown = build_language_breakdown([{"Rust": 50}, {"Go": 50}, {"C": 100}])
    assert top_languages(breakdown) == [("C", 50.0), ("Rust", 25.0), ("Go", 25.0)]


def test_top_languages_is_stable_across_runs():
    maps = [{"Rust": 10, "Go": 10}, {"Zig": 10, "C": 30}]
    first = top_languages(build_language_breakdown(maps))
    second = top_languages(build_language_breakdown(maps))
    assert first == second
    assert [language for language, _ in first] == ["C", "Rust", "Go", "Zig"]


def test_top_languages_limit():
    breakdown = {"A": 40.0, "B": 30.0, "C": 20.0, "D": 10.0}
    assert top_languages(breakdown, limit=2) == [("A", 40.0), ("B", 30.0)]
