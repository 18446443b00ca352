"""
One-shot reveal tweens played once the first frame is on screen.

A tiny timeline in the spirit of GSAP: ``to`` animates a target attribute to a
value, ``from_`` snaps it to a start value immediately and animates back to
where it was. Times are in seconds on the render loop's clock; the timeline is
anchored by ``begin``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from .config import AppConfig
from .logging import get_logger

logger = get_logger(__name__)


def linear(t: float) -> float:
    return t


def power2_in_out(t: float) -> float:
    # cubic
    if t < 0.5:
        return 4.0 * t * t * t
    u = -2.0 * t + 2.0
    return 1.0 - u * u * u / 2.0


def power3_out(t: float) -> float:
    # quartic
    u = 1.0 - t
    return 1.0 - u * u * u * u


EASINGS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "none": linear,
    "power2.inOut": power2_in_out,
    "power3.out": power3_out,
}


@dataclass
class RevealTarget:
    """Something the sequencer can fade and slide: opacity in [0, 1], offset in px."""

    name: str
    opacity: float = 1.0
    offset_y: float = 0.0


@dataclass
class Tween:
    target: object
    attribute: str
    start: float
    end: float
    duration: float
    delay: float = 0.0
    ease: Callable[[float], float] = linear
    done: bool = False

    def value_at(self, t: float) -> float:
        """Value ``t`` seconds after the timeline began."""
        local = t - self.delay
        if local <= 0.0:
            return self.start
        if self.duration <= 0.0 or local >= self.duration:
            return self.end
        k = self.ease(local / self.duration)
        return self.start + (self.end - self.start) * k

    def apply(self, t: float):
        setattr(self.target, self.attribute, self.value_at(t))
        if t - self.delay >= self.duration:
            self.done = True


def _ease(name: str) -> Callable[[float], float]:
    try:
        return EASINGS[name]
    except KeyError:
        raise ValueError(f"Unknown ease {name!r}") from None


@dataclass
class EntranceSequencer:
    tweens: list[Tween] = field(default_factory=list)
    started_at: float | None = None

    def to(
        self,
        target,
        duration: float,
        ease: str = "linear",
        delay: float = 0.0,
        **values: float,
    ) -> list[Tween]:
        """Animate attributes from their current value to ``values``."""
        added = []
        for attr, end in values.items():
            tw = Tween(
                target,
                attr,
                float(getattr(target, attr)),
                float(end),
                duration,
                delay,
                _ease(ease),
            )
            self.tweens.append(tw)
            added.append(tw)
        return added

    def from_(
        self,
        targets: Sequence,
        duration: float,
        ease: str = "linear",
        delay: float = 0.0,
        stagger: float = 0.0,
        **values: float,
    ) -> list[Tween]:
        """
        Animate each target from ``values`` back to its current state.

        Start values are applied right away so nothing flashes in its final
        position before the timeline begins. Target ``i`` starts
        ``delay + i * stagger`` seconds in.
        """
        added = []
        for i, target in enumerate(targets):
            for attr, start in values.items():
                end = float(getattr(target, attr))
                tw = Tween(
                    target,
                    attr,
                    float(start),
                    end,
                    duration,
                    delay + i * stagger,
                    _ease(ease),
                )
                setattr(target, attr, tw.start)
                self.tweens.append(tw)
                added.append(tw)
        return added

    def play_default(
        self,
        cfg: AppConfig,
        container: RevealTarget,
        texts: Sequence[RevealTarget],
        nav: RevealTarget | None,
    ):
        """Schedule the surface fade, the staggered headline and the nav reveal."""
        self.to(container, cfg.container_fade, ease="power2.inOut", opacity=1.0)
        if texts:
            self.from_(
                texts,
                cfg.text_duration,
                ease="power3.out",
                delay=cfg.text_delay,
                stagger=cfg.text_stagger,
                offset_y=cfg.text_offset,
                opacity=0.0,
            )
        if nav is not None:
            self.from_(
                [nav],
                cfg.nav_duration,
                ease="power3.out",
                delay=cfg.nav_delay,
                offset_y=cfg.nav_offset,
                opacity=0.0,
            )

    def begin(self, now: float):
        self.started_at = now
        logger.debug(f"Entrance sequence started at t={now:.3f}s ({len(self.tweens)} tweens)")

    @property
    def finished(self) -> bool:
        return all(tw.done for tw in self.tweens)

    def update(self, now: float):
        if self.started_at is None:
            return
        t = now - self.started_at
        for tw in self.tweens:
            if not tw.done:
                tw.apply(t)
