"""Tests for the plugin matching engine."""

import re

import pytest

from launcher.plugins.matcher import PluginMatcher, fuzzy_score, match
from launcher.plugins.types import MatchType

CALC_PATTERN = r"^[\d+\-*/().\s]+$"


@pytest.fixture
def matcher():
    return PluginMatcher()


class TestBlankQuery:
    """Blank input never matches anything."""

    @pytest.mark.parametrize("query", ["", " ", "   ", "\t\n"])
    def test_blank_query_returns_empty_list(self, matcher, make_plugin, query):
        plugins = [
            make_plugin("kw", keywords=["translate"]),
            make_plugin("re", pattern=r".*"),
            make_plugin("fz", name="Calculator", fuzzy_match=True),
        ]
        assert matcher.match(query, plugins) == []

    def test_no_plugins(self, matcher):
        assert matcher.match("anything", []) == []


class TestKeywordMatch:
    """Keyword strategy."""

    def test_keyword_with_payload(self, matcher, make_plugin):
        plugin = make_plugin("translate", keywords=["translate"])

        results = matcher.match("translate  hello world", [plugin])

        assert len(results) == 1
        assert results[0].plugin is plugin
        assert results[0].extracted_input == "hello world"
        assert results[0].score == 100
        assert results[0].match_type == MatchType.KEYWORD

    def test_keyword_alone(self, matcher, make_plugin):
        plugin = make_plugin("translate", keywords=["translate"])

        results = matcher.match("translate", [plugin])

        assert len(results) == 1
        assert results[0].extracted_input == ""
        assert results[0].score == 90
        assert results[0].match_type == MatchType.KEYWORD

    def test_keyword_is_case_insensitive(self, matcher, make_plugin):
        plugin = make_plugin("translate", keywords=["translate"])

        assert matcher.match("TRANSLATE Hello", [plugin])[0].extracted_input == "Hello"
        assert matcher.match("Translate", [plugin])[0].score == 90

    def test_query_is_trimmed(self, matcher, make_plugin):
        plugin = make_plugin("translate", keywords=["translate"])

        results = matcher.match("   translate hello   ", [plugin])

        assert results[0].extracted_input == "hello"
        assert results[0].score == 100

    def test_keyword_needs_separating_whitespace(self, matcher, make_plugin):
        plugin = make_plugin("translate", keywords=["translate"])
        assert matcher.match("translatehello", [plugin]) == []

    def test_keyword_must_lead(self, matcher, make_plugin):
        plugin = make_plugin("translate", keywords=["translate"])
        assert matcher.match("please translate this", [plugin]) == []

    def test_later_keyword_matches(self, matcher, make_plugin):
        plugin = make_plugin("translate", keywords=["translate", "fy"])

        results = matcher.match("fy 你好", [plugin])

        assert results[0].extracted_input == "你好"
        assert results[0].score == 100

    def test_first_matching_keyword_wins(self, matcher, make_plugin):
        # "go" is tried first and takes "home" as its payload
        plugin = make_plugin("search", keywords=["go", "go home"])

        results = matcher.match("go home", [plugin])

        assert results[0].score == 100
        assert results[0].extracted_input == "home"

    def test_keyword_metacharacters_are_literal(self, matcher, make_plugin):
        plugin = make_plugin("dots", keywords=["a.b"])

        assert matcher.match("axb hello", [plugin]) == []
        assert matcher.match("a.b hello", [plugin])[0].extracted_input == "hello"

    def test_keyword_with_regex_operators(self, matcher, make_plugin):
        plugin = make_plugin("cpp", keywords=["c++"])

        results = matcher.match("c++ templates", [plugin])

        assert results[0].extracted_input == "templates"

    def test_keyword_beats_regex(self, matcher, make_plugin):
        plugin = make_plugin("calc", keywords=["calc"], pattern=r".*")

        results = matcher.match("calc 1+1", [plugin])

        assert len(results) == 1
        assert results[0].match_type == MatchType.KEYWORD
        assert results[0].extracted_input == "1+1"


class TestRegexMatch:
    """Regex strategy."""

    def test_regex_forwards_whole_query(self, matcher, make_plugin):
        plugin = make_plugin("calculator", pattern=CALC_PATTERN)

        results = matcher.match("12 + 3", [plugin])

        assert len(results) == 1
        assert results[0].extracted_input == "12 + 3"
        assert results[0].match_type == MatchType.REGEX

    def test_regex_default_score(self, matcher, make_plugin):
        plugin = make_plugin("calculator", pattern=CALC_PATTERN)
        assert matcher.match("1+1", [plugin])[0].score == 80

    def test_regex_score_is_priority_when_set(self, matcher, make_plugin):
        plugin = make_plugin("calculator", pattern=CALC_PATTERN, priority=65)
        assert matcher.match("1+1", [plugin])[0].score == 65

    def test_regex_no_match(self, matcher, make_plugin):
        plugin = make_plugin("calculator", pattern=CALC_PATTERN)
        assert matcher.match("hello", [plugin]) == []

    def test_unanchored_pattern_searches(self, matcher, make_plugin):
        plugin = make_plugin("mail", pattern=r"@\w+\.com")

        results = matcher.match("write to bob@example.com", [plugin])

        assert results[0].extracted_input == "write to bob@example.com"

    def test_precompiled_pattern_flags_are_kept(self, matcher, make_plugin):
        plugin = make_plugin("hello", pattern=re.compile(r"^hello", re.IGNORECASE))
        assert matcher.match("HELLO there", [plugin])[0].match_type == MatchType.REGEX


class TestFuzzyScore:
    """Greedy subsequence scorer."""

    def test_calc_matches_calculator(self):
        assert fuzzy_score("calc", "calculator") >= 50

    def test_calc_calculator_exact_value(self):
        # 10 + 14 + 16 + 18 = 58 for the hits, +20 completion, -12 length penalty
        assert fuzzy_score("calc", "calculator") == 66

    def test_unrelated_input_scores_low(self):
        assert fuzzy_score("xyz", "calculator") < 50

    @pytest.mark.parametrize("s", ["a", "calc", "calculator", "web search"])
    def test_identity_is_100(self, s):
        assert fuzzy_score(s, s) == 100

    def test_score_is_clamped_to_100(self):
        assert fuzzy_score("abcdefghij", "abcdefghijk") == 100

    def test_score_is_never_negative(self):
        assert fuzzy_score("zzzz", "a very long plugin name") == 0

    def test_non_consecutive_hits_get_no_run_bonus(self):
        # c, l, c hits separated by misses: 3 x 10, no completion bonus, -2
        assert fuzzy_score("clcx", "cxlxc") == 28

    def test_greedy_walk_does_not_backtrack(self):
        # Greedy takes the first "a", so "ab" never runs consecutively
        assert fuzzy_score("ab", "aab") == 10 + 10 + 20 - 2

    def test_case_sensitive_on_its_own(self):
        assert fuzzy_score("CALC", "calculator") < fuzzy_score("calc", "calculator")


class TestFuzzyMatch:
    """Fuzzy strategy inside the matcher."""

    def test_fuzzy_match_against_name(self, matcher, make_plugin):
        plugin = make_plugin("calculator", name="Calculator", fuzzy_match=True)

        results = matcher.match("calc", [plugin])

        assert len(results) == 1
        assert results[0].match_type == MatchType.FUZZY
        assert results[0].score == 66
        assert results[0].extracted_input == "calc"

    def test_fuzzy_score_capped_at_70(self, matcher, make_plugin):
        plugin = make_plugin("calculator", name="Calculator", fuzzy_match=True)

        results = matcher.match("calculator", [plugin])

        assert results[0].score == 70

    def test_fuzzy_below_threshold(self, matcher, make_plugin):
        plugin = make_plugin("calculator", name="Calculator", fuzzy_match=True)
        assert matcher.match("xyz", [plugin]) == []

    def test_fuzzy_requires_opt_in(self, matcher, make_plugin):
        plugin = make_plugin("calculator", name="Calculator")
        assert matcher.match("calc", [plugin]) == []

    def test_regex_beats_fuzzy(self, matcher, make_plugin):
        plugin = make_plugin("calculator", name="Calculator", fuzzy_match=True, pattern=r"^calc")

        results = matcher.match("calc", [plugin])

        assert results[0].match_type == MatchType.REGEX


class TestDisabledPlugins:
    """Disabled plugins are skipped even if handed to the matcher."""

    def test_disabled_plugin_never_matches(self, matcher, make_plugin):
        plugin = make_plugin(
            "calculator",
            name="Calculator",
            keywords=["calc"],
            pattern=r".*",
            fuzzy_match=True,
            enabled=False,
        )

        for query in ["calc 1+1", "calc", "12 + 3", "calculator"]:
            assert matcher.match(query, [plugin]) == []

    def test_only_enabled_plugins_returned(self, matcher, make_plugin):
        on = make_plugin("on", keywords=["x"])
        off = make_plugin("off", keywords=["x"], enabled=False)

        results = matcher.match("x y", [on, off])

        assert [r.plugin.id for r in results] == ["on"]


class TestRanking:
    """Score, then priority ordering."""

    def test_regex_priorities_order(self, matcher, make_plugin):
        low = make_plugin("low", pattern=CALC_PATTERN, priority=30)
        high = make_plugin("high", pattern=CALC_PATTERN, priority=70)

        results = matcher.match("1 + 2", [low, high])

        assert [r.plugin.id for r in results] == ["high", "low"]

    def test_equal_score_broken_by_priority(self, matcher, make_plugin):
        low = make_plugin("low", keywords=["t"], priority=30)
        high = make_plugin("high", keywords=["t"], priority=70)

        results = matcher.match("t hello", [low, high])

        assert [r.score for r in results] == [100, 100]
        assert [r.plugin.id for r in results] == ["high", "low"]

    def test_unset_priority_counts_as_50(self, matcher, make_plugin):
        below = make_plugin("below", keywords=["t"], priority=40)
        default = make_plugin("default", keywords=["t"])
        above = make_plugin("above", keywords=["t"], priority=60)

        results = matcher.match("t x", [below, default, above])

        assert [r.plugin.id for r in results] == ["above", "default", "below"]

    def test_score_dominates_priority(self, matcher, make_plugin):
        keyword = make_plugin("keyword", keywords=["calc"], priority=0)
        fuzzy = make_plugin("fuzzy", name="Calc", fuzzy_match=True, priority=100)

        results = matcher.match("calc", [fuzzy, keyword])

        assert [r.plugin.id for r in results] == ["keyword", "fuzzy"]
        assert [r.score for r in results] == [90, 70]

    def test_one_result_per_plugin(self, matcher, make_plugin):
        plugin = make_plugin("all", name="All", keywords=["all"], pattern=r".*", fuzzy_match=True)
        assert len(matcher.match("all", [plugin])) == 1

    def test_module_level_match(self, make_plugin):
        plugin = make_plugin("translate", keywords=["translate"])
        assert match("translate hi", [plugin])[0].extracted_input == "hi"
