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

from scalemenu.component import Component, ScaleContext
from scalemenu.parse import ParseError
from scalemenu.settings import LayoutSettings
from scalemenu.utils import Rectangle, LayoutWarning


def test_defaults_fill_container():
    comp = Component()
    assert comp.render_rect(Rectangle(5, 6, 70, 80)) == Rectangle(5, 6, 70, 80)


def test_plain_expressions():
    comp = Component('width/4', 'height/2', 'width/2', '20')
    assert comp.render_rect(Rectangle(0, 0, 400, 300)) == Rectangle(100, 150, 200, 20)
    # container offsets are added to the position
    assert comp.render_rect(Rectangle(10, 20, 400, 300)) == Rectangle(110, 170, 200, 20)


def test_end_coordinate():
    comp = Component(x='50', width='?200')
    assert comp.render_rect(Rectangle(0, 0, 300, 200)) == Rectangle(50, 0, 150, 200)
    assert Component(x='50', width='150').render_rect(Rectangle(0, 0, 300, 200)).width == 150

    comp = Component(x='width/8', y='10', width='?width', height='?height-10')
    assert comp.render_rect(Rectangle(0, 0, 800, 100)) == Rectangle(100, 10, 700, 80)


def test_end_coordinate_before_start():
    comp = Component(x='200', width='?100')
    assert comp.render_rect(Rectangle(0, 0, 300, 300)).width == 0


def test_centering():
    comp = Component('CENTERX', 'CENTERY', '100', '50')
    assert comp.render_rect(Rectangle(10, 20, 300, 200)) == Rectangle(110, 95, 100, 50)


def test_own_size_position():
    comp = Component(x='width-WIDTH', y='height-HEIGHT-5', width='40', height='10')
    assert comp.render_rect(Rectangle(0, 0, 200, 100)) == Rectangle(160, 85, 40, 10)


def test_rounding():
    comp = Component(width='width/8')
    assert comp.render_rect(Rectangle(0, 0, 100, 10)).width == 13

    comp = Component(width='width/8', settings=LayoutSettings(free_rounding='truncate'))
    assert comp.render_rect(Rectangle(0, 0, 100, 10)).width == 12


def test_own_size_and_end_coordinate_conflict():
    with pytest.raises(ValueError):
        Component(x='CENTERX', width='?width')

    comp = Component(x='CENTERX', width='100')
    with pytest.raises(ValueError):
        comp.set_size('?width', None)
    # the failed call leaves the component unchanged
    assert comp.width.to_source() == '100'

    comp = Component(width='?width-10')
    with pytest.raises(ValueError):
        comp.set_position('WIDTH', None)

    # the axes are independent
    comp = Component(x='CENTERX', height='?height', width='20')
    assert comp.render_rect(Rectangle(0, 0, 100, 100)) == Rectangle(40, 0, 20, 100)


def test_expression_permissions():
    with pytest.raises(ParseError):
        Component(width='WIDTH')
    with pytest.raises(ParseError):
        Component(x='?10')
    with pytest.raises(ParseError):
        Component(x='10+')


def test_custom_marker():
    settings = LayoutSettings(preface_marker='!')
    comp = Component(x='10', width='!50', settings=settings)
    assert comp.render_rect(Rectangle(0, 0, 100, 100)).width == 40

    with pytest.raises(ParseError):
        Component(width='?50', settings=settings)


def test_custom_variables():
    comp = Component(y='scroll')
    comp.solver.define('scroll', 25)
    assert comp.render_rect(Rectangle(0, 0, 100, 100)).y == 25
    comp.solver.define('scroll', 30)
    assert comp.render_rect(Rectangle(0, 0, 100, 100)).y == 30


def test_division_by_zero():
    comp = Component(width='width/0')
    with pytest.warns(LayoutWarning):
        assert comp.render_rect(Rectangle(0, 0, 100, 100)).width == 0


def test_gridded():
    comp = Component.gridded(2, 1, name='cell')
    assert comp.is_gridded
    assert comp.grid_location == (2, 1)
    assert comp.name == 'cell'
    assert comp.render_rect(Rectangle(3, 4, 5, 6)) == Rectangle(3, 4, 5, 6)
    assert not Component().is_gridded


@pytest.mark.parametrize('root_height, font_size, expected', [
    (370, 12, 12),
    (740, 12, 24),
    (185, 12, 6),
    (300, 10, 8),
    (0, 12, 0),
    (-5, 12, 0),
    ])
def test_text_size(root_height, font_size, expected):
    assert ScaleContext(root_height).text_size(font_size) == expected


def test_text_size_settings():
    ctx = ScaleContext.for_root(Rectangle(0, 0, 10, 200), LayoutSettings(text_resize_factor=100))
    assert ctx.text_size(10) == 20
    assert ScaleContext(740, enabled=False).text_size(12) == 12

