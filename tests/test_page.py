from unittest.mock import MagicMock

import pytest

from flowfield.page import PageLayer


@pytest.fixture
def overlay():
    ov = MagicMock()
    ov.line_height = 40
    return ov


def test_window_starts_transparent_and_fades_in(cfg, store, overlay):
    host = MagicMock()
    page = PageLayer(cfg, overlay, host, store)
    host.set_opacity.assert_called_once_with(0.0)

    page.begin(1.0)
    page.draw(1.0 + cfg.container_fade)
    host.set_opacity.assert_called_with(1.0)


def test_no_entrance_shows_everything(cfg, store, overlay):
    cfg.entrance = False
    host = MagicMock()
    page = PageLayer(cfg, overlay, host, store)
    host.set_opacity.assert_called_once_with(1.0)
    page.draw(0.0)
    alphas = [c.kwargs["alpha"] for c in overlay.render.call_args_list]
    assert alphas == [1.0] * (len(cfg.headline) + 1)


def test_draws_each_headline_line_and_nav(cfg, store, overlay):
    page = PageLayer(cfg, overlay, MagicMock(), store)
    page.begin(0.0)
    page.draw(10.0)
    drawn = [c.args[0] for c in overlay.render.call_args_list]
    assert drawn == [[line] for line in cfg.headline] + [[cfg.nav]]
    assert overlay.viewport == store.resolution


def test_opacity_only_pushed_on_change(cfg, store, overlay):
    host = MagicMock()
    page = PageLayer(cfg, overlay, host, store)
    page.begin(0.0)
    page.draw(100.0)
    page.draw(101.0)
    page.draw(102.0)
    assert host.set_opacity.call_count == 2
