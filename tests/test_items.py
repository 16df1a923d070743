"""Tests for launcher menu items in models/items.py"""

import json

import pytest

from models.items import ICON_ON, ItemArg, ItemMod, MenuItem, error_item, render_items


class TestItemArg:

    def test_to_json_is_compact(self):
        arg = ItemArg('lights', {'light': '1', 'state': {'on': True}})
        assert arg.to_json() == '{"keyword":"lights","data":{"light":"1","state":{"on":true}}}'

    def test_from_json(self):
        arg = ItemArg.from_json('{"keyword":"scenes","data":"abc"}')
        assert arg == ItemArg('scenes', 'abc')

    def test_from_json_without_data(self):
        assert ItemArg.from_json('{"keyword":"sync"}') == ItemArg('sync', None)

    @pytest.mark.parametrize('text', ['[1, 2]', '{"data": 1}', '{"keyword": ""}', 'not json'])
    def test_from_json_rejects_other_values(self, text):
        with pytest.raises(ValueError):
            ItemArg.from_json(text)


class TestMenuItem:
    """Tests for MenuItem validity and rendering."""

    def test_item_with_arg_is_actionable(self):
        assert MenuItem('Relax', arg=ItemArg('scenes', 'abc')).actionable is True

    def test_item_without_arg_is_not_actionable(self):
        assert MenuItem('Level: 100').actionable is False

    def test_explicit_valid_wins(self):
        assert MenuItem('Relax', arg=ItemArg('scenes', 'abc'), valid=False).actionable is False

    def test_to_dict_minimal(self):
        assert MenuItem('No lights are currently on', valid=False).to_dict() == {
            'title': 'No lights are currently on',
            'valid': False,
        }

    def test_to_dict_full(self):
        item = MenuItem(
            title='1: Kitchen',
            subtitle='Hue: 0',
            arg=ItemArg('lights', {'light': '1'}),
            autocomplete='lights 1▸ ',
            icon=ICON_ON,
            mods={'cmd': ItemMod('Turn light off', ItemArg('lights', {'light': '1', 'state': {'on': False}}))},
        )

        result = item.to_dict()

        assert result['title'] == '1: Kitchen'
        assert result['subtitle'] == 'Hue: 0'
        assert result['valid'] is True
        assert json.loads(result['arg']) == {'keyword': 'lights', 'data': {'light': '1'}}
        assert result['autocomplete'] == 'lights 1▸ '
        assert result['icon'] == {'path': 'on.png'}
        assert result['mods']['cmd']['valid'] is True
        assert json.loads(result['mods']['cmd']['arg'])['data']['state'] == {'on': False}

    def test_mod_without_arg_is_invalid(self):
        assert ItemMod('Nothing to do').to_dict() == {'subtitle': 'Nothing to do', 'valid': False}


def test_error_item():
    item = error_item(ValueError("hub unreachable"))
    assert item.title == 'Error'
    assert item.subtitle == 'hub unreachable'
    assert item.actionable is False


def test_render_items():
    output = render_items([MenuItem('Level: 150', valid=False), MenuItem('Relax', arg=ItemArg('scenes', 'a'))])

    data = json.loads(output)

    assert [item['title'] for item in data['items']] == ['Level: 150', 'Relax']
    assert data['items'][1]['valid'] is True


def test_render_items_keeps_unicode():
    output = render_items([MenuItem('Bedroom', autocomplete='lights 3▸ ')])
    assert '▸' in output


def test_render_empty():
    assert json.loads(render_items([])) == {'items': []}
