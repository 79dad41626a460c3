"""
GPS Live Position Stream
Server-Sent Events endpoint, one event per position change (needs ASGI)
"""
import json
import logging

from django.http import StreamingHttpResponse
from django.views.decorators.http import require_GET

from ...apps import get_tracking
from ...broadcaster import LiveBroadcaster
from ...exceptions import StorageError, ValidationError
from ...store import Scope
from .responses import validation_error_response

logger = logging.getLogger(__name__)


def format_event(event):
    payload = json.dumps(event.as_dict())
    return f"id: {event.id}\nevent: position\ndata: {payload}\n\n"


def format_error(message):
    return f"event: error\ndata: {json.dumps({'message': message})}\n\n"


async def event_stream(broadcaster):
    """
    SSE frames for a broadcaster

    Client disconnects cancel this generator; the broadcaster loop stops
    with it.
    """
    try:
        async for event in broadcaster.events():
            yield format_event(event)
    except StorageError as e:
        logger.error(f"[LIVE] Stream for {broadcaster.scope} aborted: {e}")
        yield format_error('Storage error')
    finally:
        broadcaster.close()


@require_GET
async def live_stream(request):
    """
    Push the last known position whenever it changes

    Query parameters:
        user: Required
        session: Optional
    """
    store, config = get_tracking()
    scope = Scope.from_params(request.GET)

    try:
        broadcaster = LiveBroadcaster(store, scope, config.live_refresh_interval)
    except ValidationError as e:
        logger.warning(f"[LIVE] Rejected unscoped stream: {e}")
        return validation_error_response(e)

    response = StreamingHttpResponse(event_stream(broadcaster), content_type='text/event-stream')
    response['Cache-Control'] = 'no-cache'
    response['X-Accel-Buffering'] = 'no'
    return response
