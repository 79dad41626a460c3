"""
GPS Maintenance API
Key protected bulk reset and session listing
"""
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from ...apps import get_tracking
from ...exceptions import MissingField, StorageError, Unauthorized, ValidationError
from ...store import Scope
from ...validator import check_key
from .responses import (
    merged_params,
    storage_error_response,
    unauthorized_response,
    validation_error_response,
)

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def reset_points(request):
    """
    Delete every point, or every point of one user/session pair

    Parameters:
        key: Shared secret (required)
        user, session: Both or neither
    """
    store, config = get_tracking()
    params = merged_params(request)

    try:
        check_key(params, config)
        scope = None
        if params.get('user') or params.get('session'):
            scope = Scope.from_params(params)
            if scope.user is None:
                raise MissingField('user', 'user is required for a scoped reset')
        deleted = store.reset(scope)
    except Unauthorized:
        logger.warning(f"[AUTH] Reset refused for {request.META.get('REMOTE_ADDR')}")
        return unauthorized_response()
    except ValidationError as e:
        return validation_error_response(e)
    except StorageError as e:
        logger.error(f"[ERROR] Reset failed: {e}")
        return storage_error_response()

    return JsonResponse({'status': 'success', 'deleted': deleted})


@require_GET
def list_sessions(request):
    """
    Sessions recorded for a user

    Query parameters:
        key: Shared secret (required)
        user: Required
    """
    store, config = get_tracking()

    try:
        check_key(request.GET, config)
        sessions = store.distinct_sessions(request.GET.get('user'))
    except Unauthorized:
        logger.warning(f"[AUTH] Session listing refused for {request.META.get('REMOTE_ADDR')}")
        return unauthorized_response()
    except ValidationError as e:
        return validation_error_response(e)
    except StorageError as e:
        logger.error(f"[ERROR] Session listing failed: {e}")
        return storage_error_response()

    return JsonResponse({'user': request.GET.get('user'), 'sessions': sessions})
