"""
GPS History API
Track history and last known position for map rendering
"""
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from ...apps import get_tracking
from ...exceptions import StorageError, ValidationError
from ...history import history_points, parse_max_points
from ...store import Scope
from .responses import storage_error_response, validation_error_response

logger = logging.getLogger(__name__)


@require_GET
def get_history(request):
    """
    Ordered track points, oldest first

    Query parameters:
        user: Optional user filter
        session: Optional session filter (needs user)
        maxPoints: Cap override, honoured only when the deployment allows it
    """
    store, config = get_tracking()
    scope = Scope.from_params(request.GET)

    try:
        max_points = None
        if config.allow_max_points_override:
            max_points = parse_max_points(request.GET.get('maxPoints'))
        points = history_points(store, scope, config, max_points)
    except ValidationError as e:
        return validation_error_response(e)
    except StorageError as e:
        logger.error(f"[ERROR] History for {scope} failed: {e}")
        return storage_error_response()

    return JsonResponse([point._asdict() for point in points], safe=False)


@require_GET
def get_last_position(request):
    """
    Last known position of a user (and session)

    Returns:
        JSON object, or null when nothing was recorded yet
    """
    store, _ = get_tracking()
    scope = Scope.from_params(request.GET)

    try:
        point = store.last_position(scope)
    except ValidationError as e:
        return validation_error_response(e)
    except StorageError as e:
        logger.error(f"[ERROR] Last position for {scope} failed: {e}")
        return storage_error_response()

    if point is None:
        return JsonResponse(None, safe=False)
    return JsonResponse({'id': point.id, **point.as_track_point()._asdict()})
