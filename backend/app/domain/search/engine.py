"""Accent-insensitive fuzzy matching with word-boundary aware scoring."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from app.domain.search.models import ScoredMatch

WORD_START_FACTOR = 4
WORD_END_FACTOR = 2

_SUB_QUERY_SEPARATOR = re.compile(r"\s+")

# Base letters expanded to a class holding their accented variants.
_EXPANSIONS = {
	"c": "[cç]",
	"a": "[aáàâä]",
	"e": "[eéèêë]",
	"i": "[iíìîï]",
	"o": "[oóòôö]",
	"u": "[uúùûü]",
}


def split_query(query: str) -> list[str]:
	"""Split a raw query into its non-empty whitespace separated words."""

	return [part for part in _SUB_QUERY_SEPARATOR.split(query) if part]


def pattern_for(sub_query: str) -> re.Pattern[str]:
	"""Compile the pattern matching one query word.

	An all lower-case word matches case-insensitively (``leo`` finds ``Léo``).
	A word containing an upper-case letter keeps its case (``Leo`` does not
	match ``leo``).
	"""

	regex = "".join(_EXPANSIONS.get(char, re.escape(char)) for char in sub_query)
	flags = 0 if any(char.isupper() for char in sub_query) else re.IGNORECASE
	return re.compile(regex, flags)


class SearchEngine:
	"""Ranks candidate strings against a query.

	Every query word must match a candidate. Each word contributes the score of
	its leftmost match: the share of the candidate it covers, multiplied by
	``word_start_factor`` when the match starts a word and ``word_end_factor``
	when it ends one.
	"""

	def __init__(self, word_start_factor: int = WORD_START_FACTOR, word_end_factor: int = WORD_END_FACTOR) -> None:
		self.word_start_factor = word_start_factor
		self.word_end_factor = word_end_factor

	def search(self, query: str, candidates: Iterable[str], limit: Optional[int] = None) -> list[ScoredMatch]:
		patterns = [pattern_for(word) for word in split_query(query)]
		if not patterns:
			return []
		matches = [match for match in (self.total_score(candidate, patterns) for candidate in candidates) if match]
		matches.sort(key=lambda match: match.score, reverse=True)
		if limit is not None:
			return matches[:limit]
		return matches

	def total_score(self, string: str, patterns: Sequence[re.Pattern[str]]) -> Optional[ScoredMatch]:
		if not string:
			return None
		total = 0
		for pattern in patterns:
			found = pattern.search(string)
			if found is None:
				return None
			total += self.score(string, found.start(), found.end())
		return ScoredMatch(score=total, string=string)

	def score(self, string: str, start: int, end: int) -> int:
		length = len(string)
		score = 100 * (end - start) // length
		if start == 0 or not string[start - 1].isalpha():
			score *= self.word_start_factor
		if end == length or not string[end].isalpha():
			score *= self.word_end_factor
		return score
