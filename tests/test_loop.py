import itertools
from unittest.mock import MagicMock

import pytest

from flowfield.loop import LoopState, RenderLoop
from flowfield.profiler import Profiler


def fixed_clock(step=1.0 / 60.0, start=100.0):
    counter = itertools.count()
    return lambda: start + next(counter) * step


@pytest.fixture
def loop(store):
    return RenderLoop(
        MagicMock(), MagicMock(), store, clock=fixed_clock(), profiler=Profiler()
    )


def test_starts_stopped(loop):
    assert loop.state is LoopState.STOPPED
    assert not loop.running


def test_tick_before_start_raises(loop):
    with pytest.raises(RuntimeError):
        loop.tick()


def test_cannot_start_twice(loop):
    loop.start()
    with pytest.raises(RuntimeError):
        loop.start()
    loop.stop()
    with pytest.raises(RuntimeError):
        loop.start()


def test_elapsed_time_monotonic(loop, store):
    loop.start()
    seen = [loop.tick() for _ in range(30)]
    assert len(seen) == 30
    assert all(b >= a for a, b in zip(seen, seen[1:]))
    assert store.elapsed_time == seen[-1]
    assert seen[0] >= 0.0


def test_clock_going_backwards_does_not_rewind(store):
    times = iter([10.0, 11.0, 10.5, 12.0])
    loop = RenderLoop(MagicMock(), MagicMock(), store, clock=lambda: next(times), profiler=Profiler())
    loop.start()
    assert [loop.tick(), loop.tick(), loop.tick()] == [1.0, 1.0, 2.0]


def test_one_draw_per_tick(loop, store):
    loop.start()
    for _ in range(5):
        loop.tick()
    assert loop.program.draw.call_count == 5
    loop.program.draw.assert_called_with(loop.surface, store)
    assert loop.frame_count == 5


def test_first_frame_callback_fires_once(loop):
    first = MagicMock()
    every = MagicMock()
    loop.on_first_frame(first)
    loop.on_frame(every)
    loop.start()
    for _ in range(3):
        loop.tick()
    first.assert_called_once()
    assert every.call_count == 3


def test_run_until_host_closes(loop):
    host = MagicMock()
    host.should_close.side_effect = [False, False, False, True]
    loop.run(host)
    assert loop.frame_count == 3
    assert host.present.call_count == 3
    assert host.poll_events.call_count == 3
    assert loop.state is LoopState.FINISHED


def test_stop_ends_run(loop):
    host = MagicMock()
    host.should_close.return_value = False
    loop.on_frame(lambda _t: loop.stop() if loop.frame_count == 4 else None)
    loop.run(host)
    assert loop.frame_count == 4
    assert loop.state is LoopState.FINISHED


def test_run_finishes_on_error(loop):
    host = MagicMock()
    host.should_close.return_value = False
    loop.program.draw.side_effect = RuntimeError("lost context")
    with pytest.raises(RuntimeError):
        loop.run(host)
    assert loop.state is LoopState.FINISHED
