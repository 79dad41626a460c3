"""
Tracker Configuration
Typed view of the GPS_TRACKER block in Django settings
"""
import logging
from dataclasses import dataclass

from django.conf import settings

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 5.0

DEFAULTS = {
    'KEY': '',
    'MAX_PARAM_LENGTH': 32,
    'CONVERT_TIMESTAMP': False,
    'TIME_ZONE': 'UTC',
    'MAX_HISTORY_POINTS': 0,
    'ALLOW_MAX_POINTS_OVERRIDE': False,
    'LIVE_REFRESH_INTERVAL': DEFAULT_REFRESH_INTERVAL,
}


def parse_interval(value):
    """
    Parse the live refresh interval in seconds

    Raises:
        ConfigurationError: value is not a positive number
    """
    try:
        interval = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f'Refresh interval is not a number: {value!r}') from e
    if not interval > 0:
        raise ConfigurationError(f'Refresh interval must be positive: {value!r}')
    return interval


@dataclass(frozen=True)
class TrackerConfig:
    key: str
    max_param_length: int
    convert_timestamp: bool
    time_zone: str
    max_history_points: int
    allow_max_points_override: bool
    live_refresh_interval: float

    @classmethod
    def from_settings(cls, overrides=None):
        """
        Build the config from settings.GPS_TRACKER

        Args:
            overrides: Optional mapping applied on top of the settings block

        Returns:
            TrackerConfig
        """
        values = dict(DEFAULTS)
        values.update(getattr(settings, 'GPS_TRACKER', {}))
        if overrides:
            values.update(overrides)

        try:
            interval = parse_interval(values['LIVE_REFRESH_INTERVAL'])
        except ConfigurationError as e:
            logger.warning(f"[CONFIG] {e}, using {DEFAULT_REFRESH_INTERVAL}s")
            interval = DEFAULT_REFRESH_INTERVAL

        if not values['KEY']:
            logger.warning("[CONFIG] GPS_TRACKER KEY is empty, requests without a key are accepted")

        return cls(
            key=str(values['KEY']),
            max_param_length=int(values['MAX_PARAM_LENGTH']),
            convert_timestamp=bool(values['CONVERT_TIMESTAMP']),
            time_zone=str(values['TIME_ZONE']),
            max_history_points=max(int(values['MAX_HISTORY_POINTS']), 0),
            allow_max_points_override=bool(values['ALLOW_MAX_POINTS_OVERRIDE']),
            live_refresh_interval=interval,
        )
