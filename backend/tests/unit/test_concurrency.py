import asyncio

import pytest

from app.infra.concurrency import gather_bounded


@pytest.mark.asyncio
async def test_results_keep_input_order():
	async def slow_echo(value: int) -> int:
		await asyncio.sleep(0.001 * (5 - value))
		return value * 10

	assert await gather_bounded([1, 2, 3, 4], slow_echo, limit=4) == [10, 20, 30, 40]


@pytest.mark.asyncio
async def test_empty_input():
	async def never(value):
		raise AssertionError("should not run")

	assert await gather_bounded([], never, limit=2) == []


@pytest.mark.asyncio
async def test_failure_cancels_outstanding_calls():
	cancelled: list[int] = []

	async def work(value: int) -> int:
		if value == 0:
			await asyncio.sleep(0.01)
			raise RuntimeError("boom")
		try:
			await asyncio.sleep(10)
		except asyncio.CancelledError:
			cancelled.append(value)
			raise
		return value

	with pytest.raises(RuntimeError):
		await gather_bounded([0, 1, 2], work, limit=3)
	assert sorted(cancelled) == [1, 2]
