from __future__ import annotations

from .config import AppConfig
from .entrance import EntranceSequencer, RevealTarget
from .logging import get_logger
from .overlay import TextOverlay
from .uniforms import UniformStore


class PageLayer:
    """
    The content in front of the flow field: a headline block and a nav line.

    The window itself plays the container role; its opacity follows the
    container target. Everything is revealed by an EntranceSequencer that starts
    on the first rendered frame.
    """

    def __init__(
        self,
        cfg: AppConfig,
        overlay: TextOverlay,
        host,
        uniforms: UniformStore,
    ):
        self.cfg = cfg
        self.overlay = overlay
        self.host = host
        self.uniforms = uniforms
        self.logger = get_logger(__name__)

        self.container = RevealTarget("container", opacity=0.0 if cfg.entrance else 1.0)
        self.texts = [RevealTarget(f"text-{i}") for i in range(len(cfg.headline))]
        self.nav = RevealTarget("nav") if cfg.nav else None

        self.sequencer = EntranceSequencer()
        if cfg.entrance:
            self.sequencer.play_default(cfg, self.container, self.texts, self.nav)

        self._opacity = None
        self._sync_opacity()

    def _sync_opacity(self):
        if self.container.opacity != self._opacity:
            self._opacity = self.container.opacity
            self.host.set_opacity(self._opacity)

    def begin(self, elapsed: float):
        self.sequencer.begin(elapsed)
        self.logger.info("First frame ready, playing entrance")

    def draw(self, elapsed: float):
        self.sequencer.update(elapsed)
        self._sync_opacity()

        w, h = self.uniforms.resolution
        self.overlay.viewport = (w, h)
        lh = self.overlay.line_height

        x = 0.08 * w
        y = 0.5 * h + 0.5 * lh * (len(self.texts) - 1)
        for i, (line, target) in enumerate(zip(self.cfg.headline, self.texts)):
            # Offsets are screen-space: positive moves the line down
            self.overlay.render(
                [line], x, y - i * lh - target.offset_y, alpha=target.opacity
            )

        if self.nav is not None:
            self.overlay.render(
                [self.cfg.nav], x, h - 1.5 * lh - self.nav.offset_y, alpha=self.nav.opacity
            )
