"""
GPS Track Export API
Full track of a user (optionally one session) as a GPX download
"""
import logging

from django.http import HttpResponse
from django.utils.http import content_disposition_header
from django.views.decorators.http import require_GET

from ...apps import get_tracking
from ...exceptions import StorageError, Unauthorized, ValidationError
from ...gpx import render_gpx
from ...store import Scope
from ...validator import check_key
from .responses import storage_error_response, unauthorized_response, validation_error_response

logger = logging.getLogger(__name__)


@require_GET
def export_track(request):
    """
    Query parameters:
        key: Shared secret (required)
        user: Required
        session: Optional, every session of the user when absent
    """
    store, config = get_tracking()
    scope = Scope.from_params(request.GET)

    try:
        check_key(request.GET, config)
        points = store.ordered_track(scope)
    except Unauthorized:
        logger.warning(f"[AUTH] Export refused for {request.META.get('REMOTE_ADDR')}")
        return unauthorized_response()
    except ValidationError as e:
        return validation_error_response(e)
    except StorageError as e:
        logger.error(f"[ERROR] Export for {scope} failed: {e}")
        return storage_error_response()

    logger.info(f"[EXPORT] {len(points)} points for {scope}")

    filename = f"track-{scope.user}-{scope.session or 'all'}.gpx"
    response = HttpResponse(
        render_gpx(points, user=scope.user, session=scope.session),
        content_type='application/gpx+xml; charset=utf-8',
    )
    response['Content-Disposition'] = content_disposition_header(as_attachment=True, filename=filename)
    return response
