"""
GPS Point Validator

Turns raw request parameters into a PointRecord or raises the first
rejection found. No I/O: the caller decides what to do with the result.

Parameter names follow the device protocol:
    lat, lon, timestamp, altitude, speed, bearing, hdop, user, session, key
"""
import logging

from django.utils.crypto import constant_time_compare

from .exceptions import MissingField, NotNumeric, OutOfRange, TooLong, Unauthorized
from .functions import localize_timestamp, parse_number
from .models import PointRecord

logger = logging.getLogger(__name__)

DEFAULT_VALUE = '0'

COORDINATE_LIMITS = {
    'lat': 90.0,
    'lon': 180.0,
}

# Checked in this order; the first failure is the one reported
OPTIONAL_NUMERIC = ('timestamp', 'altitude', 'speed', 'hdop', 'user', 'session')


def check_key(params, config):
    """
    Raises:
        Unauthorized: key parameter does not match the shared secret
    """
    key = params.get('key') or ''
    if not constant_time_compare(key, config.key):
        raise Unauthorized()


def _check_length(name, value, config):
    if len(value) > config.max_param_length:
        raise TooLong(name, f'{name} too big')


def _required_coordinate(params, config):
    values = {name: params.get(name) or '' for name in COORDINATE_LIMITS}

    for name, value in values.items():
        if not value:
            raise MissingField(name, f'{name} not found')
    for name, value in values.items():
        if parse_number(value) is None:
            raise NotNumeric(name, f'{name} not a number')
    for name, value in values.items():
        _check_length(name, value, config)
    for name, value in values.items():
        limit = COORDINATE_LIMITS[name]
        if not -limit <= parse_number(value) <= limit:
            raise OutOfRange(name, f'{name} outside [-{limit:g}, {limit:g}]')

    return values['lat'], values['lon']


def _optional_numeric(params, name, config):
    value = params.get(name) or ''
    if not value:
        return DEFAULT_VALUE
    if parse_number(value) is None:
        raise NotNumeric(name, f'{name} not numeric')
    _check_length(name, value, config)
    return value


def validate_point(params, config):
    """
    Validate and normalize one GPS fix

    Args:
        params: Mapping of parameter name to raw string (QueryDict works)
        config: TrackerConfig

    Returns:
        PointRecord

    Raises:
        Unauthorized: wrong shared secret
        ValidationError: first invalid field (MissingField, NotNumeric,
            TooLong or OutOfRange)
    """
    check_key(params, config)

    lat, lon = _required_coordinate(params, config)

    optional = {name: _optional_numeric(params, name, config) for name in OPTIONAL_NUMERIC}

    # bearing may carry directional text, only its size is bounded
    bearing = params.get('bearing') or DEFAULT_VALUE
    _check_length('bearing', bearing, config)

    timestamp = optional['timestamp']
    if config.convert_timestamp and params.get('timestamp'):
        try:
            timestamp = localize_timestamp(timestamp, config.time_zone)
        except ValueError as e:
            raise OutOfRange('timestamp', str(e)) from e

    return PointRecord(
        lat=lat,
        lon=lon,
        alt=optional['altitude'],
        speed=optional['speed'],
        bearing=bearing,
        hdop=optional['hdop'],
        time=timestamp,
        user=optional['user'],
        session=optional['session'],
    )
