"""
GPS helper functions
Number parsing and timestamp conversion shared by the validator and GPX codec
"""
import logging
import math
from datetime import datetime, timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def parse_number(value):
    """
    Parse a decimal string strictly

    Leading/trailing whitespace, digit separators and non-finite values
    (nan, inf) are refused.

    Returns:
        float or None if the string is not a finite number
    """
    if not value or value != value.strip() or '_' in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def is_numeric(value):
    return parse_number(value) is not None


def load_zone(name):
    """
    Resolve an IANA time zone name

    Raises:
        ConfigurationError: name is empty or unknown
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
        raise ConfigurationError(f'Unknown time zone {name!r}: {e}') from e


def localize_timestamp(epoch_millis, zone_name):
    """
    Render epoch milliseconds as local time in the given zone

    Args:
        epoch_millis: Numeric string, milliseconds since the epoch
        zone_name: IANA time zone name; an unknown zone falls back to UTC

    Returns:
        String like '2024-05-01 14:03:12 +0200 CEST'

    Raises:
        ValueError: the moment is outside the range the platform can represent
    """
    try:
        zone = load_zone(zone_name)
    except ConfigurationError as e:
        logger.warning(f"[CONFIG] {e}, rendering timestamp in UTC")
        zone = dt_timezone.utc

    # truncated toward zero, -1500 ms is one second before the epoch
    seconds = int(float(epoch_millis) / 1000)
    try:
        moment = datetime.fromtimestamp(seconds, tz=zone)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f'Timestamp {epoch_millis} out of range') from e
    return moment.strftime('%Y-%m-%d %H:%M:%S %z %Z')


def millis_to_iso(epoch_millis):
    """Epoch milliseconds string to ISO 8601 UTC, None if not convertible"""
    number = parse_number(epoch_millis)
    if number is None or number <= 0:
        return None
    try:
        moment = datetime.fromtimestamp(number / 1000, tz=dt_timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def iso_to_millis(value):
    """ISO 8601 timestamp to an epoch milliseconds string, None if unparsable"""
    if not value:
        return None
    try:
        moment = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt_timezone.utc)
    return str(round(moment.timestamp() * 1000))
