"""Plugin matching engine - decides which plugins a query addresses and ranks them."""

import logging
import re
from typing import Iterable, List, Optional

from launcher.plugins.types import MatchResult, MatchType, Plugin

logger = logging.getLogger(__name__)

KEYWORD_SCORE = 100
KEYWORD_ONLY_SCORE = 90
REGEX_DEFAULT_SCORE = 80
FUZZY_MAX_SCORE = 70
FUZZY_THRESHOLD = 50


def fuzzy_score(input: str, target: str) -> int:
    """Score how well ``input`` matches ``target`` as a subsequence.

    Greedy single pass, no backtracking: every hit is worth 10, consecutive
    hits add an escalating bonus, consuming the whole input adds 20 and the
    length difference is penalised. The 50-point match threshold is tuned
    against this exact scoring, so it can under-score inputs whose best
    alignment is non-greedy.

    Args:
        input: User input (callers lower-case both sides)
        target: String to match against, e.g. a plugin name

    Returns:
        Score clamped to 0-100
    """
    if input == target:
        return 100

    score = 0
    input_index = 0
    consecutive = 0

    for char in target:
        if input_index >= len(input):
            break
        if char == input[input_index]:
            score += 10
            consecutive += 1
            if consecutive > 1:
                score += consecutive * 2
            input_index += 1
        else:
            consecutive = 0

    if input_index == len(input):
        score += 20

    score -= abs(len(target) - len(input)) * 2

    return max(0, min(100, score))


class PluginMatcher:
    """Stateless matcher: (query, plugins) -> ranked MatchResult list.

    Each plugin is tried against keyword, regex and fuzzy strategies in that
    order; the first hit wins, so a plugin yields at most one result.
    """

    def match(self, query: str, plugins: Iterable[Plugin]) -> List[MatchResult]:
        """Match a query against plugins.

        Args:
            query: Raw user input
            plugins: Candidate plugins, normally ``registry.get_enabled()``

        Returns:
            Match results sorted by score, then priority, highest first
        """
        if not query or not query.strip():
            return []

        trimmed = query.strip()
        results: List[MatchResult] = []

        for plugin in plugins:
            if plugin.config.enabled is False:
                continue

            result = self._match_keyword(trimmed, plugin) or self._match_regex(trimmed, plugin)
            if result is None and plugin.config.fuzzy_match:
                result = self._match_fuzzy(trimmed, plugin)

            if result is not None:
                results.append(result)

        results.sort(
            key=lambda r: (r.score, r.plugin.config.effective_priority),
            reverse=True,
        )

        logger.debug(f"Found {len(results)} matches for '{query}'")
        return results

    def _match_keyword(self, query: str, plugin: Plugin) -> Optional[MatchResult]:
        for keyword in plugin.config.keywords:
            m = re.fullmatch(rf"{re.escape(keyword)}\s+(.+)", query, re.IGNORECASE)
            if m:
                logger.debug(f"Keyword match: '{keyword}' for plugin {plugin.id}")
                return MatchResult(
                    plugin=plugin,
                    score=KEYWORD_SCORE,
                    extracted_input=m.group(1).strip(),
                    match_type=MatchType.KEYWORD,
                )

            # Keyword typed on its own
            if query.lower() == keyword.lower():
                return MatchResult(
                    plugin=plugin,
                    score=KEYWORD_ONLY_SCORE,
                    extracted_input="",
                    match_type=MatchType.KEYWORD,
                )

        return None

    def _match_regex(self, query: str, plugin: Plugin) -> Optional[MatchResult]:
        pattern = plugin.config.pattern
        if pattern is None or not pattern.search(query):
            return None

        logger.debug(f"Regex match for plugin {plugin.id}")
        priority = plugin.config.priority
        return MatchResult(
            plugin=plugin,
            score=REGEX_DEFAULT_SCORE if priority is None else priority,
            extracted_input=query,
            match_type=MatchType.REGEX,
        )

    def _match_fuzzy(self, query: str, plugin: Plugin) -> Optional[MatchResult]:
        score = fuzzy_score(query.lower(), plugin.name.lower())
        if score < FUZZY_THRESHOLD:
            return None

        logger.debug(f"Fuzzy match: score={score} for plugin {plugin.id}")
        return MatchResult(
            plugin=plugin,
            score=min(score, FUZZY_MAX_SCORE),
            extracted_input=query,
            match_type=MatchType.FUZZY,
        )


def match(query: str, plugins: Iterable[Plugin]) -> List[MatchResult]:
    """Module-level shortcut for ``PluginMatcher().match``."""
    return PluginMatcher().match(query, plugins)
