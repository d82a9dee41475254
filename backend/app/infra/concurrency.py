"""Bounded fan-out for independent store calls."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_bounded(
	items: Iterable[T],
	func: Callable[[T], Awaitable[R]],
	*,
	limit: int,
) -> list[R]:
	"""Run ``func`` over ``items`` with at most ``limit`` calls in flight.

	Results keep the order of ``items``. The first failure (or a cancellation
	of the caller) cancels every outstanding call before the error propagates,
	so no partial result ever escapes.
	"""

	semaphore = asyncio.Semaphore(max(1, limit))

	async def _run(item: T) -> R:
		async with semaphore:
			return await func(item)

	tasks = [asyncio.ensure_future(_run(item)) for item in items]
	if not tasks:
		return []
	try:
		return list(await asyncio.gather(*tasks))
	except BaseException:
		for task in tasks:
			task.cancel()
		await asyncio.gather(*tasks, return_exceptions=True)
		raise
