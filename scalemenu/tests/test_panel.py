#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2026 The scalemenu authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

import pytest

from scalemenu.component import Component
from scalemenu.panel import Panel, Placement, layout, to_svg
from scalemenu.parse import ParseError
from scalemenu.utils import Rectangle, LayoutWarning


NESTED = {
    'name': 'root',
    'children': [
        {'name': 'left', 'column': 0, 'row': 0},
        {'name': 'right', 'type': 'panel', 'column': 1, 'row': 0, 'text_resize': False, 'children': [
            {'name': 'inner', 'x': '10', 'y': 'height/2', 'width': '?width-10', 'height': '10'},
        ]},
    ]}


def rects(placements):
    return {p.component.name: p.rect.as_tuple() for p in placements}


def test_sample_layout(sample_layout, window):
    root = Panel.from_dict(sample_layout)
    placements = list(layout(root, window))
    assert [p.component.name for p in placements] == ['root', 'a', 'b', 'c']
    assert [p.depth for p in placements] == [0, 1, 1, 1]
    assert rects(placements) == {
            'root': (0, 0, 400, 300),
            'a': (0, 0, 200, 300),
            'b': (200, 0, 200, 300),
            'c': (150, 10, 100, 20),
            }


def test_layout_is_repeatable(sample_layout, window):
    root = Panel.from_dict(sample_layout)
    assert rects(layout(root, Rectangle(0, 0, 800, 600)))['c'] == (300, 10, 200, 20)
    assert rects(layout(root, window))['c'] == (150, 10, 100, 20)


def test_nested_layout(window):
    root = Panel.from_dict(NESTED)
    placements = list(layout(root, window))
    assert [(p.component.name, p.depth) for p in placements] == [('root', 0), ('left', 1), ('right', 1), ('inner', 2)]
    assert rects(placements)['inner'] == (210, 150, 180, 10)
    assert isinstance(root.find('right'), Panel)


def test_text_scaling(window):
    root = Panel.from_dict(NESTED)
    scales = {p.component.name: p.scale for p in layout(root, Rectangle(0, 0, 400, 740))}
    assert scales['left'].text_size(12) == 24
    # the panel itself is still scaled by its parent, its children are not
    assert scales['right'].text_size(12) == 24
    assert scales['inner'].text_size(12) == 12


def test_find():
    root = Panel.from_dict(NESTED)
    assert root.find('inner').name == 'inner'
    assert root.find('left').grid_location == (0, 0)
    assert root.find('missing') is None


def test_children_order():
    root = Panel()
    free = root.add(Component(name='free'))
    b = root.add_to_grid(Component(name='b'), 0, 1)
    a = root.add_to_grid(Component(name='a'), 1, 0)
    c = root.add_to_grid(Component(name='c'), 0, 0)
    assert root.children() == [c, a, b, free]


def test_add_gridded_as_free():
    with pytest.raises(ValueError):
        Panel().add(Component.gridded(0, 0))


def test_add_to_grid_replaces():
    root = Panel()
    a = root.add_to_grid(Component(name='a'), 0, 0)
    b = root.add_to_grid(Component(name='b'), 0, 0)
    assert root.grid.entry_at(0, 0) is b
    assert a.grid_location is None
    assert root.children() == [b]


def test_move_within_grid():
    root = Panel()
    a = root.add_to_grid(Component(name='a'), 0, 0)
    root.add_to_grid(a, 2, 0)
    assert a.grid_location == (2, 0)
    assert root.grid.entry_at(0, 0) is None
    assert len(root.grid) == 1


def test_remove(sample_layout, window):
    root = Panel.from_dict(sample_layout)
    assert root.remove(root.find('b'))
    assert rects(layout(root, window))['a'] == (0, 0, 400, 300)
    assert root.remove(root.find('c'))
    assert [p.component.name for p in layout(root, window)] == ['root', 'a']
    assert not root.remove(Component(name='stranger'))
    assert not root.remove(Component.gridded(0, 0))


def test_invisible_components(window):
    obj = dict(NESTED)
    obj['children'] = [dict(NESTED['children'][0]), dict(NESTED['children'][1], visible=False)]
    root = Panel.from_dict(obj)
    assert [p.component.name for p in layout(root, window)] == ['root', 'left']
    # invisible components still take up their grid cell
    assert rects(layout(root, window))['left'] == (0, 0, 200, 300)


def test_grid_options():
    root = Panel.from_dict({
        'name': 'root',
        'margin': ['gap', '0'],
        'variables': {'gap': 10},
        'column_weights': {'0': 2},
        'children': [{'name': str(i), 'column': i, 'row': 0} for i in range(3)],
        })
    r = rects(layout(root, Rectangle(0, 0, 420, 100)))
    assert r['0'] == (0, 0, 200, 100)
    assert r['1'] == (210, 0, 100, 100)
    assert r['2'] == (320, 0, 100, 100)


def test_frame_option(window):
    root = Panel.from_dict({'frame': '20', 'children': [{'name': 'a', 'column': 0, 'row': 0}]})
    assert rects(layout(root, window))['a'] == (20, 20, 360, 260)


def test_panel_position(window):
    root = Panel.from_dict({'children': [
        {'name': 'sub', 'x': 'CENTERX', 'y': '0', 'width': 'width/2', 'height': 'height/2', 'children': [
            {'name': 'cell', 'column': 0, 'row': 0},
        ]}]})
    assert rects(layout(root, window))['cell'] == (100, 0, 200, 150)


def test_unknown_keys_warn():
    with pytest.warns(LayoutWarning, match='bogus'):
        Panel.from_dict({'children': [{'name': 'a', 'bogus': 1}]})


def test_gridded_geometry_warns():
    with pytest.warns(LayoutWarning, match='ignores'):
        root = Panel.from_dict({'children': [{'name': 'a', 'column': 0, 'row': 0, 'x': '10'}]})
    assert root.find('a').render_rect(Rectangle(0, 0, 10, 10)) == Rectangle(0, 0, 10, 10)


@pytest.mark.parametrize('obj', [
    [],
    'panel',
    {'type': 'component', 'x': '10'},
    {'children': ['not a node']},
    {'children': [{'variables': {'width': 5}}]},
    {'column_weights': {'0': 0}},
    ])
def test_invalid_layouts(obj):
    with pytest.raises(ValueError):
        Panel.from_dict(obj)


def test_malformed_expression():
    with pytest.raises(ParseError) as exc_info:
        Panel.from_dict({'children': [{'x': 'width/(2'}]})
    assert exc_info.value.position == 6


def test_open(layout_file, sample_layout, window):
    root = Panel.open(layout_file(sample_layout))
    assert root.name == 'root'
    assert len(root.children()) == 3


def test_placement_fields(sample_layout, window):
    root = Panel.from_dict(sample_layout)
    first = next(layout(root, window))
    assert isinstance(first, Placement)
    assert first.component is root
    assert first.scale.root_height == 300


def test_svg(window):
    root = Panel.from_dict({'name': 'a<b', 'children': [
        {'name': 'x', 'column': 0, 'row': 0},
        {'name': 'empty', 'width': '0'},
        ]})
    svg = str(to_svg(layout(root, window), window.width, window.height))
    assert svg.startswith('<?xml')
    assert 'width="400px"' in svg
    assert 'a&lt;b' in svg
    assert 'a<b' not in svg
    assert 'empty' not in svg
    # background, root and x
    assert svg.count('<rect') == 3


def test_remove_from_grid_then_add_free(window):
    root = Panel()
    comp = root.add_to_grid(Component(x='10', width='50', name='moved'), 0, 0)
    assert comp.render_rect(window) == window

    assert root.remove(comp)
    assert not comp.is_gridded
    assert comp.grid_location is None
    assert len(root.grid) == 0

    root.add(comp)
    assert root.children() == [comp]
    assert rects(layout(root, window))['moved'] == (10, 0, 50, 300)
