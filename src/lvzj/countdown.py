"""Countdown text formatting.

A countdown node only carries its target instant, direction and style; the
displayed text is recomputed from "now" every time it is evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from lvzj.nodes import CountdownStyle, Direction, LvzjNode

EXPIRED_COMPACT = "0:00:00:00"
EXPIRED_VERBOSE = "Čas vypršel"

_UNITS = (
    ("den", "dny", "dní"),
    ("hodina", "hodiny", "hodin"),
    ("minuta", "minuty", "minut"),
    ("sekunda", "sekundy", "sekund"),
)


@dataclass(frozen=True)
class Remaining:
    days: int
    hours: int
    minutes: int
    seconds: int
    expired: bool = False


def czech_plural(n: int, one: str, few: str, many: str) -> str:
    # Grammatical Czech: 0 takes the "many" form ("0 sekund", not "0 sekundy").
    if n == 1:
        return one
    if 2 <= n <= 4:
        return few
    return many


def _align_now(node: LvzjNode, now: datetime) -> datetime:
    target = node.target
    if target is not None and target.tzinfo is not None and now.tzinfo is None:
        return now.replace(tzinfo=target.tzinfo)
    return now


def remaining(node: LvzjNode, now: datetime) -> Remaining:
    """Split the distance between *now* and the node's target into units."""
    if node.target is None:
        raise ValueError("countdown node has no target")
    now = _align_now(node, now)
    diff = (node.target - now).total_seconds()
    if node.direction is Direction.TO_TARGET:
        if diff <= 0:
            return Remaining(0, 0, 0, 0, expired=True)
    else:
        diff = -diff
    total = int(abs(diff))
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return Remaining(days, hours, minutes, seconds)


def is_expired(node: LvzjNode, now: datetime) -> bool:
    return remaining(node, now).expired


def format_countdown(node: LvzjNode, now: datetime) -> str:
    """Return the text a countdown shows at *now*."""
    r = remaining(node, now)
    verbose = node.countdown_style is CountdownStyle.VERBOSE
    if r.expired:
        return EXPIRED_VERBOSE if verbose else EXPIRED_COMPACT
    if not verbose:
        return f"{r.days}:{r.hours:02d}:{r.minutes:02d}:{r.seconds:02d}"

    parts: list[str] = []
    for amount, forms in zip((r.days, r.hours, r.minutes), _UNITS):
        if amount > 0:
            parts.append(f"{amount} {czech_plural(amount, *forms)}")
    if r.seconds > 0 or not parts:
        parts.append(f"{r.seconds} {czech_plural(r.seconds, *_UNITS[3])}")
    return ", ".join(parts)
