import time
from unittest.mock import MagicMock, patch
import pytest
from flowfield.profiler import Profiler, get_profiler


@pytest.fixture
def profiler():
    """Returns a new Profiler instance for each test."""
    with patch("flowfield.profiler._profiler", None):
        yield get_profiler()


def test_get_profiler_singleton():
    """Test that get_profiler always returns the same instance."""
    assert get_profiler() is get_profiler()


def test_profiler_record(profiler):
    with profiler.record("draw"):
        time.sleep(0.01)

    timings = profiler.get_timings()
    assert "draw" in timings
    assert timings["draw"] > 0.0


def test_profiler_ema(profiler):
    profiler.ema_alpha = 0.5
    with patch("flowfield.profiler.time.perf_counter", side_effect=[0.0, 1.0, 0.0, 3.0]):
        with profiler.record("op"):
            pass
        with profiler.record("op"):
            pass
    assert profiler.get_timings()["op"] == pytest.approx(2.0)


@patch("flowfield.profiler.get_logger")
def test_frame_logs_fps_each_interval(mock_get_logger):
    mock_logger = MagicMock()
    mock_get_logger.return_value = mock_logger
    profiler = Profiler(log_interval=1.0)

    logged = [profiler.frame(0.25) for _ in range(8)]

    assert logged == [False, False, False, True] * 2
    assert profiler.fps == pytest.approx(4.0)
    fps_lines = [c[0][0] for c in mock_logger.info.call_args_list if "FPS" in c[0][0]]
    assert len(fps_lines) == 2
    assert "FPS: 4.00" in fps_lines[0]


@patch("flowfield.profiler.get_logger")
def test_profiler_log_stats(mock_get_logger):
    """Test that log_stats calls the logger with the correct stats."""
    mock_logger = MagicMock()
    mock_get_logger.return_value = mock_logger

    profiler = Profiler()

    with profiler.record("swap"):
        time.sleep(0.01)

    profiler.log_stats()

    mock_logger.info.assert_called_once()
    call_args = mock_logger.info.call_args[0][0]
    assert "swap" in call_args
    assert "ms" in call_args
