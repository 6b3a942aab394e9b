"""Presentation state for interactive nodes.

The parser returns inert data. This module owns what changes after
rendering: one recurring timer per live countdown and a reveal flag per
spoiler. It reads the node tree and never writes back into it.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from lvzj.countdown import format_countdown, is_expired
from lvzj.nodes import Direction, LvzjNode, NodeType, walk

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Countdown
# ---------------------------------------------------------------------------

class CountdownTicker:
    """Re-evaluate a countdown node on a fixed period.

    Runs on the asyncio loop that is running when :meth:`start` is called.
    The first tick happens immediately. A ``TO_TARGET`` countdown stops by
    itself once it shows the expired text.
    """

    PERIOD = 1.0

    def __init__(
        self,
        node: LvzjNode,
        on_tick: Callable[[str], None],
        *,
        clock: Clock = _utc_now,
        period: float = PERIOD,
    ) -> None:
        if node.type is not NodeType.COUNTDOWN:
            raise ValueError(f"Expected COUNTDOWN node, got {node.type}")
        self.node = node
        self.on_tick = on_tick
        self.clock = clock
        self.period = period
        self.text = ""
        self._handle: Optional[asyncio.TimerHandle] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._active = False

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self._active:
            return
        self._loop = asyncio.get_running_loop()
        self._active = True
        self._step()

    def tick(self) -> str:
        """Recompute the text once, without touching the timer."""
        self.text = format_countdown(self.node, self.clock())
        return self.text

    def cancel(self) -> None:
        self._active = False
        self._clear()

    def rearm(self, node: LvzjNode) -> None:
        """Switch to *node*, restarting the timer if its parameters differ."""
        if _same_countdown(self.node, node):
            self.node = node
            return
        self._clear()
        self.node = node
        if self._active:
            self._step()

    def _clear(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _step(self) -> None:
        self._handle = None
        self.on_tick(self.tick())
        if self.node.direction is Direction.TO_TARGET and is_expired(self.node, self.clock()):
            logger.debug("Countdown to %s expired, timer stopped", self.node.target)
            return
        assert self._loop is not None
        self._handle = self._loop.call_later(self.period, self._step)


def _same_countdown(a: LvzjNode, b: LvzjNode) -> bool:
    return (
        a.target == b.target
        and a.direction == b.direction
        and a.countdown_style == b.countdown_style
    )


# ---------------------------------------------------------------------------
# Spoiler
# ---------------------------------------------------------------------------

@dataclass
class SpoilerState:
    """Reveal flag of one spoiler; hidden until toggled."""

    revealed: bool = False

    def toggle(self) -> bool:
        self.revealed = not self.revealed
        return self.revealed


# ---------------------------------------------------------------------------
# Live view
# ---------------------------------------------------------------------------

class LiveView:
    """Interactive state for one rendered tree.

    Countdowns and spoilers are addressed by their index in document order.

    Usage::

        async with LiveView(tree, on_tick=redraw) as view:
            view.toggle_spoiler(0)
    """

    def __init__(
        self,
        tree: LvzjNode,
        on_tick: Optional[Callable[[int, str], None]] = None,
        *,
        clock: Clock = _utc_now,
        period: float = CountdownTicker.PERIOD,
    ) -> None:
        self.on_tick = on_tick
        self.clock = clock
        self.period = period
        self.texts: dict[int, str] = {}
        self.tickers: list[CountdownTicker] = []
        self.spoilers: list[SpoilerState] = []
        self._started = False
        self._bind(tree)

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        self._started = True
        for ticker in self.tickers:
            ticker.start()

    def close(self) -> None:
        for ticker in self.tickers:
            ticker.cancel()
        self._started = False

    def update(self, tree: LvzjNode) -> None:
        """Follow a re-parsed tree, re-arming only what changed."""
        countdowns = [n for n in walk(tree) if n.type is NodeType.COUNTDOWN]
        for ticker in self.tickers[len(countdowns):]:
            ticker.cancel()
        for idx in range(len(countdowns), len(self.tickers)):
            self.texts.pop(idx, None)
        self.tickers = self.tickers[:len(countdowns)]
        for idx, node in enumerate(countdowns):
            if idx < len(self.tickers):
                self.tickers[idx].rearm(node)
            else:
                ticker = self._make_ticker(idx, node)
                self.tickers.append(ticker)
                if self._started:
                    ticker.start()

        spoiler_count = sum(1 for n in walk(tree) if n.type is NodeType.SPOILER)
        self.spoilers = self.spoilers[:spoiler_count]
        self.spoilers.extend(
            SpoilerState() for _ in range(spoiler_count - len(self.spoilers))
        )

    async def __aenter__(self) -> LiveView:
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    # -- interaction --------------------------------------------------------

    def toggle_spoiler(self, index: int) -> bool:
        return self.spoilers[index].toggle()

    def is_revealed(self, index: int) -> bool:
        return self.spoilers[index].revealed

    @property
    def active_timers(self) -> int:
        return sum(1 for t in self.tickers if t.running)

    # -- internals ----------------------------------------------------------

    def _bind(self, tree: LvzjNode) -> None:
        for node in walk(tree):
            if node.type is NodeType.COUNTDOWN:
                self.tickers.append(self._make_ticker(len(self.tickers), node))
            elif node.type is NodeType.SPOILER:
                self.spoilers.append(SpoilerState())

    def _make_ticker(self, idx: int, node: LvzjNode) -> CountdownTicker:
        def on_tick(text: str) -> None:
            self.texts[idx] = text
            if self.on_tick is not None:
                self.on_tick(idx, text)

        return CountdownTicker(node, on_tick, clock=self.clock, period=self.period)
