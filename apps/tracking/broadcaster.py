"""
Live Position Broadcaster

Per-connection polling loop that pushes the last known position of a
user/session each time it changes.

    Idle -> Polling -> (Event | NoChange) -> Polling -> ... -> Closed

The store is queried in asgiref's worker thread so one slow lookup never
stalls other connections. The loop ends when close() is called, when the
consuming task is cancelled (client disconnect) or when the store fails.
"""
import asyncio
import enum
import logging
from typing import NamedTuple

from asgiref.sync import sync_to_async

from .models import TrackPoint

logger = logging.getLogger(__name__)


class BroadcastState(enum.Enum):
    IDLE = 'idle'
    POLLING = 'polling'
    CLOSED = 'closed'


class PositionEvent(NamedTuple):
    id: int
    point: TrackPoint

    def as_dict(self):
        return {'id': self.id, **self.point._asdict()}


class LiveBroadcaster:
    """
    Emits one PositionEvent per detected change of the scope's last position

    Args:
        store: PointStore
        scope: Scope with at least a user
        interval: Seconds between two store lookups

    Raises:
        MissingField: scope has no user (the whole table is never streamed)
    """

    def __init__(self, store, scope, interval):
        self.store = store
        self.scope = scope.require_user()
        self.interval = interval
        self.state = BroadcastState.IDLE
        self._closed = asyncio.Event()
        self._last = None

    def close(self):
        """Stop the loop; takes effect within one tick"""
        self._closed.set()

    async def _poll(self):
        point = await sync_to_async(self.store.last_position)(self.scope)
        if point is None:
            return None
        current = point.as_track_point()
        if current == self._last:
            return None
        self._last = current
        return PositionEvent(id=point.id, point=current)

    async def _wait_tick(self):
        """
        Sleep one interval unless close() fires first

        Returns:
            True if the loop should go on
        """
        try:
            await asyncio.wait_for(self._closed.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            return True
        return False

    async def events(self):
        """
        Async generator of PositionEvent

        Raises:
            StorageError: store lookup failed; the stream is over
        """
        self.state = BroadcastState.POLLING
        logger.info(f"[LIVE] Stream opened for {self.scope} every {self.interval}s")
        try:
            while not self._closed.is_set():
                event = await self._poll()
                if event is not None:
                    logger.debug(f"[LIVE] {self.scope} moved, point id={event.id}")
                    yield event
                if not await self._wait_tick():
                    break
        finally:
            self.state = BroadcastState.CLOSED
            logger.info(f"[LIVE] Stream closed for {self.scope}")
