"""
Shared fixtures for the tracking tests
"""
import pytest

from apps.tracking.conf import TrackerConfig
from apps.tracking.store import PointStore
from apps.tracking.validator import validate_point

TEST_KEY = 'test-key'


@pytest.fixture
def store():
    return PointStore()


@pytest.fixture
def config():
    """Config from core.settings_test"""
    return TrackerConfig.from_settings()


@pytest.fixture
def make_config():
    """Config with GPS_TRACKER keys overridden, e.g. make_config(MAX_HISTORY_POINTS=3)"""
    def _make(**overrides):
        return TrackerConfig.from_settings(overrides)
    return _make


@pytest.fixture
def add_point(store, config):
    """Validate and insert a point the way the receiver view does"""
    def _add(lat, lon, **params):
        params = {'lat': str(lat), 'lon': str(lon), 'key': TEST_KEY, **{k: str(v) for k, v in params.items()}}
        return store.insert(validate_point(params, config))
    return _add
