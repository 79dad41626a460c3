"""
GPS History Query
Bounded, chronologically ordered point list for drawing a track on a map
"""
import logging

from django.db import DatabaseError

from .exceptions import NotNumeric, OutOfRange, StorageError
from .models import TrackPoint

logger = logging.getLogger(__name__)

NO_LIMIT = 0


def parse_max_points(value):
    """
    Parse a maxPoints request value

    Returns:
        int >= 0 or None when the value is absent
    """
    if value is None or value == '':
        return None
    try:
        max_points = int(value)
    except (TypeError, ValueError):
        raise NotNumeric('maxPoints', 'maxPoints must be an integer')
    if max_points < 0:
        raise OutOfRange('maxPoints', 'maxPoints must not be negative')
    return max_points


def effective_cap(config, max_points=None):
    """
    Decide how many points a history query may return

    The caller's override wins only when the deployment allows it.
    NO_LIMIT (0) from either source means uncapped.

    Returns:
        Positive int, or None for no limit
    """
    if config.allow_max_points_override and max_points is not None:
        cap = max_points
    else:
        if max_points is not None:
            logger.debug(f"[HISTORY] maxPoints={max_points} ignored, override not allowed")
        cap = config.max_history_points

    if cap == NO_LIMIT:
        return None
    return cap


def history_points(store, scope, config, max_points=None):
    """
    Track points for a scope, oldest first

    With a cap the newest `cap` points are taken (id descending + LIMIT)
    and then put back in ascending order, so the map always gets the tail
    of the track in chronological order. Without a cap the rows are read
    ascending directly.

    Args:
        store: PointStore
        scope: Scope, empty for every user
        config: TrackerConfig
        max_points: Caller supplied cap, already parsed

    Returns:
        List of TrackPoint
    """
    cap = effective_cap(config, max_points)
    rows = store.scoped(scope).values_list(*TrackPoint._fields)

    try:
        if cap is None:
            points = list(rows.order_by('id'))
        else:
            points = list(rows.order_by('-id')[:cap])
            points.reverse()
    except DatabaseError as e:
        raise StorageError(f'History lookup failed for {scope}: {e}') from e

    logger.debug(f"[HISTORY] {scope}: {len(points)} points (cap={cap})")
    return [TrackPoint(*row) for row in points]
