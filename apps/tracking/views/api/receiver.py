"""
GPS Point Receiver API

Devices report one fix per request, as query string or form data:
    lat, lon, timestamp, altitude, speed, bearing, hdop, user, session, key
"""
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from ...apps import get_tracking
from ...exceptions import StorageError, Unauthorized, ValidationError
from ...validator import validate_point
from .responses import (
    merged_params,
    storage_error_response,
    unauthorized_response,
    validation_error_response,
)

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def add_point(request):
    """
    Validate and store one GPS fix

    Returns:
        JSON acknowledgement echoing the stored lat/lon and the new id
    """
    store, config = get_tracking()
    params = merged_params(request)

    logger.debug(f"[INCOMING] {', '.join(f'{k}={v}' for k, v in params.items() if k != 'key')}")

    try:
        record = validate_point(params, config)
    except Unauthorized:
        logger.warning(f"[AUTH] Wrong key from {request.META.get('REMOTE_ADDR')}")
        return unauthorized_response()
    except ValidationError as e:
        logger.warning(f"[REJECT] {e.code} {e}")
        return validation_error_response(e)

    try:
        point = store.insert(record)
    except StorageError as e:
        logger.error(f"[ERROR] Point not stored: {e}")
        return storage_error_response()

    logger.info(f"[INSERT] user {point.user} session {point.session}: ({point.lat}, {point.lon}) id={point.id}")

    return JsonResponse({
        'status': 'success',
        'id': point.id,
        'lat': point.lat,
        'lon': point.lon,
    })
