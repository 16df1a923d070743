"""Tests for cache management functions in core/cache.py"""

from datetime import timedelta

import pytest

from core.cache import (
    Cache,
    ensure_fresh_cache,
    get_cache_info,
    invalidate_cache,
    is_cache_stale,
    load_cache,
    reload_cache,
)
from core.errors import HueConnectionError
from models.types import CloudScene
from tests.conftest import NOW


class TestReloadCache:
    """Test cache reloading functionality."""

    def test_reload_success(self, ctx, mock_controller, cache_store, lights):
        """Should fetch all resources and save to cache."""
        reload_cache(ctx)

        assert ctx.cache.last_update == NOW
        assert ctx.cache.lights == lights
        assert len(ctx.cache.scenes) == 4
        assert len(ctx.cache.groups) == 2
        mock_controller.get_lights.assert_called_once()
        mock_controller.get_scenes.assert_called_once()
        mock_controller.get_groups.assert_called_once()
        assert len(cache_store.saves) == 1
        assert cache_store.saves[0]['LastUpdate'] == NOW.isoformat()
        assert cache_store.saves[0]['Lights']['1']['name'] == 'Kitchen'

    def test_reload_failure_leaves_cache_untouched(self, ctx, mock_controller, cache_store):
        """A failed fetch should propagate and write nothing."""
        old = NOW - timedelta(minutes=5)
        ctx.cache = Cache(last_update=old)
        mock_controller.get_groups.side_effect = HueConnectionError("hub unreachable")

        with pytest.raises(HueConnectionError):
            reload_cache(ctx)

        assert ctx.cache.last_update == old
        assert ctx.cache.lights == {}
        assert cache_store.saves == []

    def test_reload_keeps_cloud_scenes(self, ctx):
        """Cloud scenes are not owned by the hub and survive a reload."""
        ctx.cache.cloud_scenes = {'c1': CloudScene('c1', 'Sunset')}

        reload_cache(ctx)

        assert 'c1' in ctx.cache.cloud_scenes


class TestIsCacheStale:
    """Test cache staleness detection."""

    def test_stale_when_never_updated(self, ctx):
        assert is_cache_stale(ctx) is True

    def test_fresh_when_recently_updated(self, ctx):
        ctx.cache.last_update = NOW - timedelta(seconds=10)
        assert is_cache_stale(ctx) is False

    def test_fresh_at_exactly_sixty_seconds(self, ctx):
        ctx.cache.last_update = NOW - timedelta(seconds=60)
        assert is_cache_stale(ctx) is False

    def test_stale_after_sixty_seconds(self, ctx):
        ctx.cache.last_update = NOW - timedelta(seconds=61)
        assert is_cache_stale(ctx) is True

    def test_custom_max_age(self, ctx):
        ctx.cache.last_update = NOW - timedelta(hours=2)
        assert is_cache_stale(ctx, max_age=timedelta(hours=24)) is False
        assert is_cache_stale(ctx, max_age=timedelta(hours=1)) is True


class TestEnsureFreshCache:
    """Test cache freshness enforcement."""

    @pytest.mark.parametrize('age', [0, 1, 30, 59, 60])
    def test_no_hub_calls_when_fresh(self, ctx, mock_controller, cache_store, age):
        ctx.cache.last_update = NOW - timedelta(seconds=age)

        assert ensure_fresh_cache(ctx) is False

        mock_controller.get_lights.assert_not_called()
        mock_controller.get_scenes.assert_not_called()
        mock_controller.get_groups.assert_not_called()
        assert cache_store.saves == []

    @pytest.mark.parametrize('age', [61, 600, 86400])
    def test_single_refresh_when_stale(self, ctx, mock_controller, age):
        ctx.cache.last_update = NOW - timedelta(seconds=age)

        assert ensure_fresh_cache(ctx) is True

        assert mock_controller.get_lights.call_count == 1
        assert mock_controller.get_scenes.call_count == 1
        assert mock_controller.get_groups.call_count == 1
        assert ctx.cache.last_update == NOW

    def test_reload_when_never_updated(self, ctx, mock_controller):
        assert ensure_fresh_cache(ctx) is True
        mock_controller.get_lights.assert_called_once()

    def test_error_propagates(self, ctx, mock_controller, cache_store):
        mock_controller.get_lights.side_effect = HueConnectionError("timeout")

        with pytest.raises(HueConnectionError):
            ensure_fresh_cache(ctx)

        assert ctx.cache.last_update is None
        assert cache_store.saves == []


class TestInvalidateCache:

    def test_invalidate_resets_timestamp_and_saves(self, fresh_ctx, cache_store):
        invalidate_cache(fresh_ctx)

        assert fresh_ctx.cache.last_update is None
        assert cache_store.saves[-1]['LastUpdate'] is None
        # Data is kept for display until the next refresh
        assert cache_store.saves[-1]['Lights']
        assert is_cache_stale(fresh_ctx) is True


class TestGetCacheInfo:
    """Test cache information retrieval."""

    def test_info_when_no_cache(self, ctx):
        info = get_cache_info(ctx)

        assert info['exists'] is False
        assert info['last_updated'] is None
        assert info['age_seconds'] is None
        assert info['is_stale'] is True
        assert info['counts']['lights'] == 0

    def test_info_with_valid_cache(self, fresh_ctx):
        fresh_ctx.clock = lambda: NOW + timedelta(seconds=30)

        info = get_cache_info(fresh_ctx)

        assert info['exists'] is True
        assert info['last_updated'] == NOW.isoformat()
        assert info['age_seconds'] == 30
        assert info['is_stale'] is False
        assert info['counts'] == {'lights': 3, 'scenes': 4, 'groups': 2, 'cloud_scenes': 0}


class TestLoadCache:
    """Test building a Cache from the cache file format."""

    def test_round_trip(self, fresh_ctx):
        data = fresh_ctx.cache.to_dict()

        cache = load_cache(data)

        assert cache.last_update == NOW
        assert cache.lights == fresh_ctx.cache.lights
        assert cache.scenes == fresh_ctx.cache.scenes
        assert cache.groups == fresh_ctx.cache.groups

    def test_empty_data(self):
        cache = load_cache({})
        assert cache.last_update is None
        assert cache.lights == {}

    def test_invalid_timestamp_is_stale(self):
        cache = load_cache({'LastUpdate': 'not-a-date', 'Lights': {}})
        assert cache.last_update is None

    def test_malformed_entries_give_empty_cache(self):
        cache = load_cache({'LastUpdate': NOW.isoformat(), 'Lights': {'1': {'name': 'no id'}}})
        assert cache.last_update is None
        assert cache.lights == {}

    def test_wrong_shape_gives_empty_cache(self):
        cache = load_cache({'Lights': ['not', 'a', 'map']})
        assert cache.lights == {}
