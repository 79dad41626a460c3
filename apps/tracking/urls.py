"""
URL Configuration for GPS Tracking Application
"""
from django.urls import path
from .views.api import (
    add_point,
    export_track,
    get_history,
    get_last_position,
    list_sessions,
    live_stream,
    reset_points,
)

app_name = 'tracking'

urlpatterns = [
    # Point receiver (GET or POST)
    # Usage: /addpoint/?lat=..&lon=..&timestamp=..&user=..&session=..&key=..
    path('addpoint/', add_point, name='add_point'),

    # Track history for the map, oldest first
    # Usage: GET /history/?user=1&session=2&maxPoints=500
    path('history/', get_history, name='history'),

    # Last known position (JSON)
    # Usage: GET /lastpos/?user=1&session=2
    path('lastpos/', get_last_position, name='last_position'),

    # Server-Sent Events stream of position changes
    # Usage: GET /live/?user=1&session=2
    path('live/', live_stream, name='live'),

    # Sessions of a user
    # Usage: GET /sessions/?key=..&user=1
    path('sessions/', list_sessions, name='sessions'),

    # Bulk delete, everything or one user/session pair
    # Usage: /resetpoint/?key=.. or /resetpoint/?key=..&user=1&session=2
    path('resetpoint/', reset_points, name='reset_points'),

    # GPX download
    # Usage: GET /export/?key=..&user=1&session=2
    path('export/', export_track, name='export'),
]
