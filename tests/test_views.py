"""
Tests for the HTTP endpoints
"""
import json
import logging

import pytest
from django.urls import reverse

from apps.tracking.broadcaster import LiveBroadcaster, PositionEvent
from apps.tracking.exceptions import StorageError
from apps.tracking.models import Point, TrackPoint
from apps.tracking.store import Scope
from apps.tracking.views.api.live import event_stream, format_error, format_event

KEY = 'test-key'


@pytest.fixture
def tracker_settings(settings):
    """Change GPS_TRACKER keys for one test, the app reloads its config"""
    def _apply(**overrides):
        settings.GPS_TRACKER = {**settings.GPS_TRACKER, **overrides}
    return _apply


def post_point(client, **params):
    return client.post(reverse('tracking:add_point'), {'key': KEY, **params})


def get_point(client, **params):
    return client.get(reverse('tracking:add_point'), {'key': KEY, **params})


@pytest.mark.django_db
class TestAddPoint:

    def test_get_request_is_stored(self, client):
        response = get_point(client, lat='10', lon='20', user='1', session='1')

        assert response.status_code == 200
        body = response.json()
        assert body['status'] == 'success'
        assert (body['lat'], body['lon']) == ('10', '20')
        assert Point.objects.get(id=body['id']).user == '1'

    def test_post_request_is_stored(self, client):
        response = post_point(client, lat='50.1', lon='19.9', bearing='N', timestamp='1700000000000')

        assert response.status_code == 200
        point = Point.objects.get()
        assert (point.bearing, point.time, point.user, point.session) == ('N', '1700000000000', '0', '0')

    def test_ids_increase(self, client):
        first = get_point(client, lat='1', lon='1').json()['id']
        second = get_point(client, lat='1', lon='1').json()['id']
        assert second > first

    def test_wrong_key_is_403_without_detail(self, client):
        response = client.get(reverse('tracking:add_point'), {'key': 'bad', 'lat': '1', 'lon': '1'})

        assert response.status_code == 403
        assert response.json() == {'status': 'error'}
        assert Point.objects.count() == 0

    @pytest.mark.parametrize('params, field, code', [
        ({'lon': '20'}, 'lat', 'missing'),
        ({'lat': 'abc', 'lon': '20'}, 'lat', 'not_numeric'),
        ({'lat': '95', 'lon': '20'}, 'lat', 'out_of_range'),
        ({'lat': '10', 'lon': '20', 'speed': '1' * 21}, 'speed', 'too_long'),
        ({'lat': '10', 'lon': '20', 'user': 'bob'}, 'user', 'not_numeric'),
    ])
    def test_rejections_store_nothing(self, client, params, field, code):
        response = get_point(client, **params)

        assert response.status_code == 400
        body = response.json()
        assert (body['status'], body['field'], body['code']) == ('error', field, code)
        assert Point.objects.count() == 0

    def test_other_methods_not_allowed(self, client):
        assert client.put(reverse('tracking:add_point')).status_code == 405

    def test_storage_failure_is_500(self, client, monkeypatch):
        def broken(self, record):
            raise StorageError('disk full')

        monkeypatch.setattr('apps.tracking.store.PointStore.insert', broken)
        response = get_point(client, lat='10', lon='20')

        assert response.status_code == 500
        assert response.json()['status'] == 'error'

    def test_timestamp_conversion(self, client, tracker_settings):
        tracker_settings(CONVERT_TIMESTAMP=True, TIME_ZONE='UTC')

        get_point(client, lat='10', lon='20', timestamp='1700000000000')

        assert Point.objects.get().time == '2023-11-14 22:13:20 +0000 UTC'

    def test_unrepresentable_timestamp_is_rejected(self, client, tracker_settings):
        tracker_settings(CONVERT_TIMESTAMP=True, TIME_ZONE='UTC')

        response = get_point(client, lat='10', lon='20', timestamp='99999999999999999999')

        assert response.status_code == 400
        assert (response.json()['field'], response.json()['code']) == ('timestamp', 'out_of_range')
        assert Point.objects.count() == 0

    def test_accepted_point_logged_once(self, client, caplog):
        with caplog.at_level(logging.DEBUG, logger='apps.tracking'):
            get_point(client, lat='10', lon='20', user='1', session='1')

        inserts = [r for r in caplog.records if r.getMessage().startswith('[INSERT]')]
        assert len(inserts) == 1


@pytest.mark.django_db
class TestHistory:

    def test_worked_example(self, client, add_point):
        add_point(10, 20, user=1, session=1)
        add_point(11, 21, user=1, session=1)

        response = client.get(reverse('tracking:history'), {'user': '1', 'session': '1'})

        assert response.status_code == 200
        assert [(p['lat'], p['lon']) for p in response.json()] == [('10', '20'), ('11', '21')]

    def test_point_fields(self, client, add_point):
        add_point(10, 20, altitude=5, speed=2, bearing=90, hdop=1, timestamp=1700000000000, user=1)

        (point,) = client.get(reverse('tracking:history'), {'user': '1'}).json()
        assert point == {
            'lat': '10', 'lon': '20', 'alt': '5', 'speed': '2',
            'time': '1700000000000', 'bearing': '90', 'hdop': '1',
        }

    def test_no_points_is_empty_list(self, client):
        response = client.get(reverse('tracking:history'), {'user': '7'})
        assert response.json() == []

    def test_configured_cap(self, client, add_point, tracker_settings):
        tracker_settings(MAX_HISTORY_POINTS=1)
        add_point(10, 20, user=1, session=1)
        add_point(11, 21, user=1, session=1)

        points = client.get(reverse('tracking:history'), {'user': '1', 'session': '1'}).json()
        assert [(p['lat'], p['lon']) for p in points] == [('11', '21')]

    def test_max_points_ignored_unless_allowed(self, client, add_point):
        for lat in range(3):
            add_point(lat, 0, user=1)

        points = client.get(reverse('tracking:history'), {'user': '1', 'maxPoints': 'junk'}).json()
        assert len(points) == 3

    def test_max_points_override(self, client, add_point, tracker_settings):
        tracker_settings(MAX_HISTORY_POINTS=2, ALLOW_MAX_POINTS_OVERRIDE=True)
        for lat in range(5):
            add_point(lat, 0, user=1)

        points = client.get(reverse('tracking:history'), {'user': '1', 'maxPoints': '3'}).json()
        assert [p['lat'] for p in points] == ['2', '3', '4']

    def test_bad_max_points_when_allowed(self, client, tracker_settings):
        tracker_settings(ALLOW_MAX_POINTS_OVERRIDE=True)

        response = client.get(reverse('tracking:history'), {'maxPoints': '-4'})

        assert response.status_code == 400
        assert response.json()['field'] == 'maxPoints'


@pytest.mark.django_db
class TestLastPosition:

    def test_latest_point(self, client, add_point):
        add_point(10, 20, user=1, session=1)
        newest = add_point(11, 21, user=1, session=1)

        body = client.get(reverse('tracking:last_position'), {'user': '1', 'session': '1'}).json()
        assert body['id'] == newest.id
        assert (body['lat'], body['lon']) == ('11', '21')

    def test_nothing_recorded(self, client):
        response = client.get(reverse('tracking:last_position'), {'user': '1'})
        assert response.status_code == 200
        assert response.json() is None

    def test_user_required(self, client):
        response = client.get(reverse('tracking:last_position'))
        assert response.status_code == 400
        assert response.json()['field'] == 'user'


@pytest.mark.django_db
class TestSessions:

    def test_sessions_of_user(self, client, add_point):
        for session in (2, 1, 2):
            add_point(10, 20, user=3, session=session)

        body = client.get(reverse('tracking:sessions'), {'key': KEY, 'user': '3'}).json()
        assert body == {'user': '3', 'sessions': ['1', '2']}

    def test_key_required(self, client):
        response = client.get(reverse('tracking:sessions'), {'user': '3'})
        assert response.status_code == 403

    def test_user_required(self, client):
        response = client.get(reverse('tracking:sessions'), {'key': KEY})
        assert response.status_code == 400


@pytest.mark.django_db
class TestResetPoints:

    def test_reset_all(self, client, add_point):
        add_point(1, 1, user=1, session=1)
        add_point(2, 2, user=2, session=2)

        response = client.post(reverse('tracking:reset_points'), {'key': KEY})

        assert response.json() == {'status': 'success', 'deleted': 2}
        assert Point.objects.count() == 0

    def test_reset_scope(self, client, add_point):
        add_point(1, 1, user=1, session=1)
        add_point(2, 2, user=1, session=2)

        response = client.get(reverse('tracking:reset_points'), {'key': KEY, 'user': '1', 'session': '1'})

        assert response.json()['deleted'] == 1
        assert list(Point.objects.values_list('session', flat=True)) == ['2']

    @pytest.mark.parametrize('params', [{'user': '1'}, {'session': '1'}])
    def test_half_scope_is_refused(self, client, add_point, params):
        add_point(1, 1, user=1, session=1)

        response = client.get(reverse('tracking:reset_points'), {'key': KEY, **params})

        assert response.status_code == 400
        assert Point.objects.count() == 1

    def test_wrong_key(self, client, add_point):
        add_point(1, 1, user=1, session=1)

        response = client.post(reverse('tracking:reset_points'), {'key': 'nope'})

        assert response.status_code == 403
        assert Point.objects.count() == 1


@pytest.mark.django_db
class TestExport:

    def test_gpx_download(self, client, add_point):
        add_point(10, 20, user=1, session=1, timestamp=1700000000000)
        add_point(11, 21, user=1, session=1)

        response = client.get(reverse('tracking:export'), {'key': KEY, 'user': '1', 'session': '1'})

        assert response.status_code == 200
        assert response['Content-Type'].startswith('application/gpx+xml')
        assert 'track-1-1.gpx' in response['Content-Disposition']
        body = response.content.decode()
        assert body.index('lat="10"') < body.index('lat="11"')
        assert '<time>2023-11-14T22:13:20.000Z</time>' in body

    def test_track_with_unrepresentable_time_still_exports(self, client, add_point):
        add_point(10, 20, user=1, session=1, timestamp='1e300')
        add_point(11, 21, user=1, session=1, timestamp=1700000000000)

        response = client.get(reverse('tracking:export'), {'key': KEY, 'user': '1', 'session': '1'})

        assert response.status_code == 200
        body = response.content.decode()
        assert body.count('<time>') == 1
        assert 'lat="10"' in body

    def test_all_sessions_filename(self, client, add_point):
        add_point(10, 20, user=1, session=1)

        response = client.get(reverse('tracking:export'), {'key': KEY, 'user': '1'})
        assert 'track-1-all.gpx' in response['Content-Disposition']

    def test_key_required(self, client):
        response = client.get(reverse('tracking:export'), {'user': '1'})
        assert response.status_code == 403

    def test_user_required(self, client):
        response = client.get(reverse('tracking:export'), {'key': KEY})
        assert response.status_code == 400


class TestLiveStream:

    def test_unscoped_stream_is_refused(self, client):
        response = client.get(reverse('tracking:live'))

        assert response.status_code == 400
        assert response.json()['field'] == 'user'

    def test_stream_headers(self, client):
        response = client.get(reverse('tracking:live'), {'user': '1'})

        assert response.status_code == 200
        assert response.streaming
        assert response['Content-Type'] == 'text/event-stream'
        assert response['Cache-Control'] == 'no-cache'

    def test_event_frame(self):
        point = TrackPoint(lat='1', lon='2', alt='0', speed='0', time='0', bearing='0', hdop='0')
        frame = format_event(PositionEvent(id=4, point=point))

        lines = frame.split('\n')
        assert lines[:2] == ['id: 4', 'event: position']
        assert json.loads(lines[2][len('data: '):]) == {'id': 4, **point._asdict()}
        assert frame.endswith('\n\n')

    def test_error_frame(self):
        assert format_error('Storage error') == 'event: error\ndata: {"message": "Storage error"}\n\n'

    @pytest.mark.asyncio
    async def test_storage_error_ends_stream_with_error_frame(self):
        class FailingStore:
            def last_position(self, scope):
                raise StorageError('locked')

        broadcaster = LiveBroadcaster(FailingStore(), Scope(user='1'), interval=0.01)

        frames = [frame async for frame in event_stream(broadcaster)]

        assert frames == [format_error('Storage error')]
