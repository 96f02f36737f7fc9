"""
Contextual re-ranking of replacement candidates from the rule-based provider.

Scores are additive:

- +10 when the candidate is a high-frequency English word
- +15 when the error starts a sentence and the candidate is a greeting
- +5 when the candidate's first letter has the same case as the original's
- -0.5 per character of length difference
- -1 per unit of Levenshtein distance (case-insensitive)
- +20 for "hello" when "how" is near the error; +10 for "help" near "need"/"can"

Ordering is a stable descending sort, so ties keep provider order.
"""

from __future__ import annotations

import re

from services.grammar_check_service.protocols import SuggestionRankerProtocol

COMMON_WORDS: frozenset[str] = frozenset(
    """
    hello help here there have has had will would could should can may might must
    the be to of and a in that i it for not on with he as you do at this but his by
    from they we say her she or an my one all their what so up out if about who get
    which go me when make like time no just him know take people into year your good
    some them see other than then now look only come its over think also back after
    use two how our work first well way even new want because any these give day
    most us
    """.split()
)

GREETINGS: frozenset[str] = frozenset({"hello", "hi", "hey", "dear", "greetings"})

CONTEXT_WINDOW = 50

_SENTENCE_END = re.compile(r"[.!?]\s*$")


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute all cost 1)."""
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def _same_initial_case(candidate: str, original: str) -> bool:
    if not candidate or not original:
        return False
    return candidate[0].isupper() == original[0].isupper()


class SuggestionRanker(SuggestionRankerProtocol):
    def score(
        self,
        candidate: str,
        original_word: str,
        context_words: set[str],
        at_sentence_start: bool,
    ) -> float:
        """Score one candidate; the +5 case bonus also covers lowercase pairs."""
        candidate_lower = candidate.lower()
        score = 0.0

        if candidate_lower in COMMON_WORDS:
            score += 10
        if at_sentence_start and candidate_lower in GREETINGS:
            score += 15
        if _same_initial_case(candidate, original_word):
            score += 5

        score -= abs(len(candidate) - len(original_word)) * 0.5
        score -= levenshtein_distance(original_word.lower(), candidate_lower)

        if candidate_lower == "hello" and "how" in context_words:
            score += 20
        if candidate_lower == "help" and context_words & {"need", "can"}:
            score += 10

        return score

    def rank(
        self, candidates: list[str], original_word: str, full_text: str, error_offset: int
    ) -> list[str]:
        if len(candidates) < 2:
            return list(candidates)

        error_end = error_offset + len(original_word)
        before = full_text[max(0, error_offset - CONTEXT_WINDOW) : error_offset]
        after = full_text[error_end : error_end + CONTEXT_WINDOW]

        at_sentence_start = error_offset == 0 or bool(_SENTENCE_END.search(before))
        context_words = set(f"{before} {after}".lower().split())

        scores = [
            self.score(candidate, original_word, context_words, at_sentence_start)
            for candidate in candidates
        ]
        order = sorted(range(len(candidates)), key=lambda index: -scores[index])
        return [candidates[index] for index in order]
