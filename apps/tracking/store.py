"""
GPS Point Store
Owns every read and write of the tracking_point table
"""
import logging
from dataclasses import dataclass
from typing import Optional

from django.db import DatabaseError, router, transaction

from .exceptions import MissingField, StorageError
from .models import Point

logger = logging.getLogger(__name__)

UNSCOPED = '0'


def _normalize(value):
    if value is None:
        return None
    value = str(value).strip()
    if not value or value == UNSCOPED:
        return None
    return value


@dataclass(frozen=True)
class Scope:
    """
    Which device/track a query applies to

    Empty values and the anonymous default "0" both mean "not scoped".
    A session without a user is ignored.
    """
    user: Optional[str] = None
    session: Optional[str] = None

    def __post_init__(self):
        user = _normalize(self.user)
        session = _normalize(self.session) if user else None
        object.__setattr__(self, 'user', user)
        object.__setattr__(self, 'session', session)

    @classmethod
    def from_params(cls, params):
        return cls(user=params.get('user'), session=params.get('session'))

    @property
    def is_empty(self):
        return self.user is None

    def filters(self):
        """ORM keyword filters for this scope"""
        if self.user is None:
            return {}
        if self.session is None:
            return {'user': self.user}
        return {'user': self.user, 'session': self.session}

    def require_user(self):
        if self.user is None:
            raise MissingField('user', 'user is required')
        return self

    def __str__(self):
        return f"{self.user or '*'}/{self.session or '*'}"


class PointStore:
    """
    Persistence for GPS points

    Every engine failure is raised as StorageError. Writes run inside a
    transaction on the write database so they either land completely or
    not at all.
    """

    def _write_db(self):
        return router.db_for_write(Point)

    def insert(self, record):
        """
        Persist one validated PointRecord

        Returns:
            Point with its assigned id
        """
        try:
            with transaction.atomic(using=self._write_db()):
                point = Point.objects.create(**record._asdict())
        except DatabaseError as e:
            logger.error(f"[STORAGE] Insert failed for {record.user}/{record.session}: {e}")
            raise StorageError(f'Insert failed: {e}') from e
        return point

    def last_position(self, scope):
        """
        Most recent point (highest id) for the scope, None if it has none yet

        Raises:
            MissingField: scope has no user
        """
        scope.require_user()
        try:
            return Point.objects.filter(**scope.filters()).order_by('-id').first()
        except DatabaseError as e:
            raise StorageError(f'Last position lookup failed for {scope}: {e}') from e

    def distinct_sessions(self, user):
        """Session ids ever recorded for a user"""
        scope = Scope(user=user).require_user()
        try:
            sessions = (
                Point.objects.filter(user=scope.user)
                .order_by('session')
                .values_list('session', flat=True)
                .distinct()
            )
            return list(sessions)
        except DatabaseError as e:
            raise StorageError(f'Session listing failed for {scope.user}: {e}') from e

    def ordered_track(self, scope):
        """Every point of the scope in arrival order (id ascending)"""
        scope.require_user()
        try:
            return list(Point.objects.filter(**scope.filters()).order_by('id'))
        except DatabaseError as e:
            raise StorageError(f'Track lookup failed for {scope}: {e}') from e

    def scoped(self, scope):
        """Lazy queryset of the scope; an empty scope covers every point"""
        return Point.objects.filter(**scope.filters())

    def count(self, scope=None):
        scope = scope or Scope()
        try:
            return Point.objects.filter(**scope.filters()).count()
        except DatabaseError as e:
            raise StorageError(f'Count failed for {scope}: {e}') from e

    def reset(self, scope=None):
        """
        Delete every point, or every point of one user/session pair

        Raises:
            MissingField: scope given without both user and session

        Returns:
            Number of deleted points
        """
        if scope is not None and not scope.is_empty:
            if scope.session is None:
                raise MissingField('session', 'session is required for a scoped reset')
        else:
            scope = Scope()

        try:
            with transaction.atomic(using=self._write_db()):
                deleted, _ = Point.objects.filter(**scope.filters()).delete()
        except DatabaseError as e:
            logger.error(f"[STORAGE] Reset failed for {scope}: {e}")
            raise StorageError(f'Reset failed: {e}') from e

        logger.info(f"[RESET] Deleted {deleted} points for {scope}")
        return deleted
