"""Odometer cycle reconciliation.

Pairs open/close odometer events into cycles. Events are matched by their
``pair_id``, or by their own id when they have none. Unreferenced events
without a pair_id, and events whose pair group is ambiguous, are paired
chronologically within their local calendar day.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from drivetrack.domain.entities import Cycle, OdometerEvent, Period
from drivetrack.domain.timezone import ensure_instant, local_date
from drivetrack.utils.logger import get_logger

logger = get_logger(__name__)


def _sort_key(event: OdometerEvent):
    return (ensure_instant(event.date), event.id)


def _pair_by_id(
    events: Sequence[OdometerEvent],
) -> tuple[list[Cycle], list[OdometerEvent]]:
    """Pair events sharing a pair_id.

    An event without a pair_id is keyed by its own id, so a close that points
    at a legacy open still pairs with it.

    Returns:
        Tuple of (cycles, events left for chronological pairing)
    """
    groups: dict[str, list[OdometerEvent]] = defaultdict(list)
    pool: list[OdometerEvent] = []

    for event in events:
        groups[event.pair_id or str(event.id)].append(event)

    cycles: list[Cycle] = []
    for pair_id, group in groups.items():
        opens = [e for e in group if e.is_open]
        closes = [e for e in group if e.is_close]

        if len(opens) > 1 or len(closes) > 1:
            logger.debug(
                "Pair %s is ambiguous (%d opens, %d closes), pairing chronologically",
                pair_id,
                len(opens),
                len(closes),
            )
            pool.extend(group)
            continue

        if len(group) == 1 and not group[0].pair_id:
            # Nothing refers to it
            pool.append(group[0])
            continue

        if not opens:
            logger.info("Dropping orphan close event %s (pair %s)", closes[0].id, pair_id)
            continue

        cycles.append(Cycle(open=opens[0], close=closes[0] if closes else None))

    return cycles, pool


def _pair_chronologically(events: Sequence[OdometerEvent]) -> list[Cycle]:
    """Greedily pair consecutive open -> close events within each local day."""
    by_day: dict[date, list[OdometerEvent]] = defaultdict(list)
    for event in events:
        by_day[local_date(event.date)].append(event)

    cycles: list[Cycle] = []
    for day in sorted(by_day):
        pending: Optional[OdometerEvent] = None
        for event in sorted(by_day[day], key=_sort_key):
            if event.is_open:
                if pending is not None:
                    cycles.append(Cycle(open=pending))
                pending = event
            elif pending is not None:
                cycles.append(Cycle(open=pending, close=event))
                pending = None
            else:
                logger.info(
                    "Dropping orphan close event %s on %s", event.id, day.isoformat()
                )
        if pending is not None:
            cycles.append(Cycle(open=pending))

    return cycles


def reconcile_cycles(events: Iterable[OdometerEvent]) -> list[Cycle]:
    """Reconstruct cycles from odometer events.

    Args:
        events: Odometer events in any order

    Returns:
        Cycles ordered by their open event; dangling cycles have no close
    """
    events = list(events)
    paired, pool = _pair_by_id(events)
    cycles = paired + _pair_chronologically(pool)
    cycles.sort(key=lambda cycle: _sort_key(cycle.open))

    dangling = sum(1 for cycle in cycles if cycle.is_dangling)
    if dangling > 1:
        logger.info("%d dangling cycles found; they contribute no distance", dangling)
    logger.debug("Reconciled %d events into %d cycles", len(events), len(cycles))
    return cycles


def find_dangling(cycles: Iterable[Cycle]) -> list[Cycle]:
    """Cycles that have been opened but not closed."""
    return [cycle for cycle in cycles if cycle.is_dangling]


def distance_by_day(cycles: Iterable[Cycle]) -> dict[str, int]:
    """Sum closed-cycle distance per local day of the open event."""
    totals: dict[str, int] = defaultdict(int)
    for cycle in cycles:
        if cycle.is_closed:
            totals[cycle.day.isoformat()] += cycle.distance
    return dict(totals)


def total_distance(cycles: Iterable[Cycle], period: Period) -> int:
    """Distance of closed cycles attributed to a day inside the period."""
    return sum(
        cycle.distance
        for cycle in cycles
        if cycle.is_closed and period.contains_day(cycle.day)
    )
