"""Work-hour attribution with a 04:00 cutoff.

Hours worked before 04:00 local belong to the previous working day. Sessions
crossing the cutoff are split in two so each half is booked to its own day.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable

from drivetrack.domain.entities import Period, ProcessedSegment, WorkSession
from drivetrack.domain.timezone import local_datetime, to_local_time
from drivetrack.utils.logger import get_logger

logger = get_logger(__name__)

CUTOFF_HOUR = 4

# Split boundaries around the cutoff: part 1 ends at 03:59:59.999 and
# part 2 starts at 04:00:01.
FIRST_PART_END_OFFSET = timedelta(milliseconds=1)
SECOND_PART_START_OFFSET = timedelta(seconds=1)


def working_date(instant: datetime) -> date:
    """Day an instant's hours are booked to."""
    local = to_local_time(instant)
    if local.hour < CUTOFF_HOUR:
        return local.date() - timedelta(days=1)
    return local.date()


def split_cutoff(start: datetime, end: datetime):
    """Cutoff instant a session must be split at, or None.

    Args:
        start: Local session start
        end: Local session end
    """
    if start.date() == end.date():
        if start.hour < CUTOFF_HOUR <= end.hour:
            return local_datetime(start.date(), CUTOFF_HOUR)
        return None

    cutoff = local_datetime(end.date(), CUTOFF_HOUR)
    if end > cutoff:
        return cutoff
    return None


def attribute_working_day(session: WorkSession) -> list[ProcessedSegment]:
    """Book a session to its working day, splitting at the cutoff if needed.

    Args:
        session: Work session; sessions still in progress yield no segments

    Returns:
        One segment, or two when the session crosses the cutoff
    """
    if session.end is None:
        logger.debug("Skipping work session %s, still in progress", session.id)
        return []

    start = to_local_time(session.start)
    end = to_local_time(session.end)
    cutoff = split_cutoff(start, end)

    if cutoff is None:
        return [
            ProcessedSegment(
                id=str(session.id),
                session_id=session.id,
                start=start,
                end=end,
                working_date=working_date(start),
            )
        ]

    first_end = cutoff - FIRST_PART_END_OFFSET
    # A session ending inside the gap keeps an empty second part.
    second_start = min(cutoff + SECOND_PART_START_OFFSET, end)
    logger.debug(
        "Splitting work session %s at %s", session.id, cutoff.isoformat()
    )
    return [
        ProcessedSegment(
            id=f"{session.id}_part1",
            session_id=session.id,
            start=start,
            end=first_end,
            working_date=working_date(start),
            is_partial=True,
            part_number=1,
        ),
        ProcessedSegment(
            id=f"{session.id}_part2",
            session_id=session.id,
            start=second_start,
            end=end,
            working_date=working_date(second_start),
            is_partial=True,
            part_number=2,
        ),
    ]


def attribute_working_days(sessions: Iterable[WorkSession]) -> list[ProcessedSegment]:
    """Segments for every finished session, ordered by start."""
    segments: list[ProcessedSegment] = []
    for session in sessions:
        segments.extend(attribute_working_day(session))
    segments.sort(key=lambda segment: (segment.start, segment.id))
    return segments


def hours_by_day(segments: Iterable[ProcessedSegment]) -> dict[str, float]:
    """Sum segment hours per working date."""
    totals: dict[str, float] = defaultdict(float)
    for segment in segments:
        totals[segment.working_date.isoformat()] += segment.duration_hours
    return dict(totals)


def total_hours(segments: Iterable[ProcessedSegment], period: Period) -> float:
    """Hours of segments whose working date falls inside the period."""
    return sum(
        segment.duration_hours
        for segment in segments
        if period.contains_day(segment.working_date)
    )
