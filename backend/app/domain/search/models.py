"""Domain models backing user search."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ScoredMatch:
	"""A corpus string that matched every query word, with its total score."""

	score: int
	string: str
