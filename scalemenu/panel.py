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

import json
import warnings
from dataclasses import dataclass, replace
from pathlib import Path

from .component import Component, ScaleContext
from .grid import GridFormatter
from .settings import LayoutSettings
from .utils import LayoutWarning, Rectangle, Tag, setup_svg


@dataclass(frozen=True)
class Placement:
    """ One component's resolved position in a layout pass """
    component : Component
    rect : Rectangle
    scale : ScaleContext
    #: Nesting depth, 1 for direct children of the root panel
    depth : int = 1


class Panel(Component):
    """ A component that holds other components, either in its grid or in free form. """

    def __init__(self, x=None, y=None, width=None, height=None, *, text_resize=True, **kwargs):
        super().__init__(x, y, width, height, **kwargs)
        self.grid = GridFormatter(self.solver, self.settings)
        self.free_components = []
        self.text_resize = text_resize

    def add(self, component):
        """ Add a free-form component. """
        if component.is_gridded:
            raise ValueError(f'{component} is gridded, use add_to_grid')
        if component not in self.free_components:
            self.free_components.append(component)
        return component

    def add_to_grid(self, component, column, row):
        """ Place ``component`` in cell ``(column, row)`` of this panel's grid, replacing whatever was there. """
        if (old := self.grid.entry_at(column, row)) is not None and old is not component:
            old.grid_location = None
        if (loc := self.grid.location_of(component)) is not None:
            self.grid.remove_entry(*loc, resize=False)
        self.grid.add_entry(component, column, row)
        component.grid_location = (column, row)
        return component

    def remove(self, component, resize=True):
        """ Remove ``component`` from this panel. Returns whether it was found. """
        if component.is_gridded:
            if self.grid.entry_at(*component.grid_location) is not component:
                return False
            self.grid.remove_entry(*component.grid_location, resize=resize)
            component.grid_location = None
            return True

        try:
            self.free_components.remove(component)
            return True
        except ValueError:
            return False

    def children(self):
        """ All components directly held by this panel, in paint order: grid cells row by row, then free-form
        components in the order they were added. """
        gridded = sorted(self.grid.items(), key=lambda item: (item[0][1], item[0][0]))
        return [comp for _loc, comp in gridded] + list(self.free_components)

    def find(self, name):
        """ Depth-first search for a component called ``name``. """
        for child in self.children():
            if child.name == name:
                return child
            if isinstance(child, Panel) and (found := child.find(name)) is not None:
                return found
        return None

    def layout(self, container, scale=None, depth=1):
        """ Resolve all visible components inside this panel, which occupies ``container``. Yields a
        :py:class:`.Placement` for every component, descending into child panels right after yielding them. """
        if scale is None:
            scale = ScaleContext.for_root(container, self.settings)
        if not self.text_resize:
            scale = replace(scale, enabled=False)

        for child in self.children():
            if not child.visible:
                continue

            if child.is_gridded:
                cell = self.grid.resolve(child, container)
                if cell is None:
                    continue
                rect = child.render_rect(cell)
            else:
                rect = child.render_rect(container)

            yield Placement(child, rect, scale, depth)
            if isinstance(child, Panel):
                yield from child.layout(rect, scale, depth+1)

    @classmethod
    def from_dict(kls, obj, settings=None):
        """ Build a panel tree from a JSON-style dict. Expression strings are parsed right away, so a malformed layout
        raises :py:class:`~.parse.ParseError` here and not while rendering. """
        panel = _from_dict(obj, settings or LayoutSettings.defaults(), panel_class=kls)
        if not isinstance(panel, Panel):
            raise ValueError('Layout root must be a panel')
        return panel

    @classmethod
    def open(kls, filename, settings=None):
        return kls.from_dict(json.loads(Path(filename).read_text()), settings)


_COMPONENT_KEYS = {'type', 'name', 'x', 'y', 'width', 'height', 'column', 'row', 'visible', 'variables'}
_PANEL_KEYS = _COMPONENT_KEYS | {'children', 'margin', 'frame', 'column_weights', 'row_weights', 'text_resize'}

def _pair(obj, key):
    value = obj.get(key)
    if value is None:
        return None, None
    if isinstance(value, str):
        return value, value
    x, y = value
    return x, y

def _from_dict(obj, settings, panel_class=Panel):
    if not isinstance(obj, dict):
        raise ValueError(f'Layout node must be a JSON object, not {obj!r}')

    is_panel = obj.get('type', 'panel' if 'children' in obj else 'component') == 'panel'
    known = _PANEL_KEYS if is_panel else _COMPONENT_KEYS
    if (unknown := set(obj) - known):
        warnings.warn(f'Ignoring unknown layout key(s) {", ".join(sorted(unknown))} in node {obj.get("name")!r}',
                      LayoutWarning)

    kwargs = dict(name=obj.get('name'), visible=bool(obj.get('visible', True)), settings=settings)
    if is_panel:
        comp = panel_class(obj.get('x'), obj.get('y'), obj.get('width'), obj.get('height'),
                           text_resize=bool(obj.get('text_resize', True)), **kwargs)
    else:
        comp = Component(obj.get('x'), obj.get('y'), obj.get('width'), obj.get('height'), **kwargs)

    for name, value in obj.get('variables', {}).items():
        comp.solver.define(name, value)

    if not is_panel:
        return comp

    if obj.get('margin') is not None:
        comp.grid.set_margin(*_pair(obj, 'margin'))
    if obj.get('frame') is not None:
        comp.grid.set_frame(*_pair(obj, 'frame'))
    for index, weight in obj.get('column_weights', {}).items():
        comp.grid.specify_column_weight(int(index), weight)
    for index, weight in obj.get('row_weights', {}).items():
        comp.grid.specify_row_weight(int(index), weight)

    for child_obj in obj.get('children', []):
        child = _from_dict(child_obj, settings)
        if 'column' in child_obj or 'row' in child_obj:
            if any(child_obj.get(key) is not None for key in ('x', 'y', 'width', 'height')):
                warnings.warn(f'Gridded layout node {child_obj.get("name")!r} ignores its x, y, width and height',
                              LayoutWarning)
            comp.add_to_grid(child, int(child_obj.get('column', 0)), int(child_obj.get('row', 0)))
        else:
            comp.add(child)

    return comp


def layout(root, container, settings=None):
    """ Run a layout pass for ``root`` inside the window area ``container``. Yields a :py:class:`.Placement` for the
    root panel itself followed by all of its visible descendants. """
    scale = ScaleContext.for_root(container, settings or root.settings)
    rect = root.render_rect(container)
    yield Placement(root, rect, scale, 0)
    yield from root.layout(rect, scale)


DEPTH_COLORS = ['#d0d0d0', '#8fb8de', '#9bd19b', '#e8c37a', '#d98c8c']

def to_svg(placements, width, height, tag=Tag):
    """ Render the rectangles of a layout pass into an SVG outline drawing. """
    tags = []
    for p in placements:
        if p.rect.is_empty:
            continue
        color = DEPTH_COLORS[p.depth % len(DEPTH_COLORS)]
        tags.append(tag('rect', x=p.rect.x, y=p.rect.y, width=p.rect.width, height=p.rect.height,
                        style=f'fill: {color}; fill-opacity: 0.5; stroke: black; stroke-width: 1'))
        if p.component.name:
            size = max(p.scale.text_size(14), 1)
            label = tag('text', [p.component.name], x=p.rect.x + 2, y=p.rect.y + size, font_size=size,
                        font_family='sans-serif')
            tags.append(label)
    return setup_svg(tags, width, height, tag=tag)
