"""
GPS Point Models for Django
One row per accepted GPS fix, ordered by its auto-increment id
"""
from typing import NamedTuple

from django.db import models

FIELD_MAX_LENGTH = 255


class PointRecord(NamedTuple):
    """
    Validated GPS fix ready for storage (no id until inserted)
    """
    lat: str
    lon: str
    alt: str = '0'
    speed: str = '0'
    bearing: str = '0'
    hdop: str = '0'
    time: str = '0'
    user: str = '0'
    session: str = '0'


class TrackPoint(NamedTuple):
    """
    Lightweight point used by history, live stream and export consumers
    """
    lat: str
    lon: str
    alt: str
    speed: str
    time: str
    bearing: str
    hdop: str


class Point(models.Model):
    """
    GPS fix as received from the device

    Values are kept as the validated request strings so that exports
    reproduce exactly what the device sent.
    """
    id = models.BigAutoField(primary_key=True)

    # GPS coordinates
    lat = models.CharField(max_length=FIELD_MAX_LENGTH)
    lon = models.CharField(max_length=FIELD_MAX_LENGTH)
    alt = models.CharField(max_length=FIELD_MAX_LENGTH, default='0')

    # Movement and quality
    speed = models.CharField(max_length=FIELD_MAX_LENGTH, default='0')
    bearing = models.CharField(max_length=FIELD_MAX_LENGTH, default='0', help_text="Opaque direction text")
    hdop = models.CharField(max_length=FIELD_MAX_LENGTH, default='0', help_text="Horizontal Dilution of Precision")

    # Raw epoch millis or the localized rendering
    time = models.CharField(max_length=FIELD_MAX_LENGTH, default='0')

    # Scope, "0" means anonymous
    user = models.CharField(max_length=FIELD_MAX_LENGTH, default='0')
    session = models.CharField(max_length=FIELD_MAX_LENGTH, default='0')

    class Meta:
        db_table = 'tracking_point'
        indexes = [
            models.Index(fields=['user'], name='tracking_point_user_idx'),
            models.Index(fields=['session'], name='tracking_point_session_idx'),
            models.Index(fields=['user', 'session'], name='tracking_point_scope_idx'),
        ]
        ordering = ['id']

    def __str__(self):
        return f"Point {self.id} [{self.user}/{self.session}] ({self.lat}, {self.lon})"

    def as_track_point(self):
        return TrackPoint(
            lat=self.lat,
            lon=self.lon,
            alt=self.alt,
            speed=self.speed,
            time=self.time,
            bearing=self.bearing,
            hdop=self.hdop,
        )
