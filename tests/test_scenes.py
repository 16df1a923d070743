"""Tests for the scenes command in commands/scenes.py"""

from unittest.mock import call

import pytest

from commands.scenes import SceneCommand
from core.errors import HueError
from models.types import CloudScene


@pytest.fixture
def command():
    return SceneCommand()


@pytest.fixture
def cloud_ctx(fresh_ctx):
    fresh_ctx.cache.cloud_scenes = {
        'c1': CloudScene('c1', 'Sunset', 'Relax', {'3': {'on': True, 'bri': 80}, '1': {'on': False}}),
    }
    return fresh_ctx


class TestSceneItems:
    """Query mode for the scenes command."""

    def test_duplicates_and_hidden_scenes_are_dropped(self, command, fresh_ctx):
        items = command.items(fresh_ctx, '')

        assert [item.title for item in items] == ['Bright', 'Relax']

    def test_first_copy_by_id_is_kept(self, command, fresh_ctx):
        relax = command.items(fresh_ctx, 'relax')[0]

        assert relax.arg.data == 'abc'
        assert relax.subtitle == 'Kitchen, Bedroom'
        assert relax.actionable is True

    def test_same_name_different_lights_both_shown(self, command, fresh_ctx):
        scene = fresh_ctx.cache.scenes['def']
        scene.light_ids = ['1']

        items = command.items(fresh_ctx, 'relax')

        assert [item.arg.data for item in items] == ['abc', 'def']

    def test_filter(self, command, fresh_ctx):
        assert [item.title for item in command.items(fresh_ctx, 'bri')] == ['Bright']

    def test_cloud_scenes_listed(self, command, cloud_ctx):
        items = command.items(cloud_ctx, '')

        assert [item.title for item in items] == ['Bright', 'Relax', 'Sunset']
        assert items[2].subtitle == 'Relax, Kitchen, Bedroom'
        assert items[2].arg.data == 'c1'


class TestSceneEnabled:

    def test_disabled_without_scenes(self, command, ctx):
        assert command.is_enabled(ctx) is False

    def test_enabled_with_scenes(self, command, fresh_ctx):
        assert command.is_enabled(fresh_ctx) is True

    def test_disabled_without_hub(self, command, fresh_ctx):
        fresh_ctx.config.username = ''
        assert command.is_enabled(fresh_ctx) is False


class TestSceneAction:
    """Action mode for the scenes command."""

    def test_activate_hub_scene(self, command, fresh_ctx, mock_controller):
        out = command.do(fresh_ctx, 'abc')

        mock_controller.activate_scene.assert_called_once_with('abc')
        mock_controller.set_light_state.assert_not_called()
        assert out == 'Activated scene Relax'
        assert fresh_ctx.cache.last_update is None

    def test_activate_cloud_scene(self, command, cloud_ctx, mock_controller):
        out = command.do(cloud_ctx, 'c1')

        assert mock_controller.set_light_state.call_args_list == [
            call('1', {'on': False}),
            call('3', {'on': True, 'bri': 80}),
        ]
        mock_controller.activate_scene.assert_not_called()
        assert out == 'Activated scene Sunset'

    def test_unknown_scene(self, command, fresh_ctx, mock_controller, cache_store):
        with pytest.raises(HueError, match="Invalid scene 'zzz'"):
            command.do(fresh_ctx, 'zzz')

        mock_controller.activate_scene.assert_not_called()
        assert cache_store.saves == []

    def test_missing_scene(self, command, fresh_ctx):
        with pytest.raises(HueError, match="Invalid scene ''"):
            command.do(fresh_ctx, None)
