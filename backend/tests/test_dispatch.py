import asyncio

from farmops.services.dispatch import BackgroundDispatcher


def test_spawned_task_runs_detached():
    dispatcher = BackgroundDispatcher()
    seen = []

    async def job():
        await asyncio.sleep(0)
        seen.append("done")

    async def scenario():
        dispatcher.spawn(job(), name="job")
        assert dispatcher.pending == 1
        assert seen == []
        await dispatcher.drain()

    asyncio.run(scenario())
    assert seen == ["done"]
    assert dispatcher.pending == 0


def test_failing_task_is_contained():
    dispatcher = BackgroundDispatcher()

    async def boom():
        raise RuntimeError("boom")

    async def scenario():
        dispatcher.spawn(boom())
        await dispatcher.drain()

    asyncio.run(scenario())
    assert dispatcher.pending == 0


def test_drain_times_out_on_stuck_task():
    dispatcher = BackgroundDispatcher()

    async def scenario():
        gate = asyncio.Event()

        async def stuck():
            await gate.wait()

        dispatcher.spawn(stuck())
        await dispatcher.drain(timeout=0.01)
        still_pending = dispatcher.pending
        gate.set()
        await dispatcher.drain()
        return still_pending

    assert asyncio.run(scenario()) == 1
    assert dispatcher.pending == 0


def test_drain_without_tasks_returns():
    asyncio.run(BackgroundDispatcher().drain())
