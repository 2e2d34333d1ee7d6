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

from dataclasses import dataclass

from .parse import parse
from .solver import Solver
from .settings import LayoutSettings
from .utils import Rectangle, to_pixel


@dataclass(frozen=True)
class ScaleContext:
    """ Text scaling information handed down through a layout pass. Text is drawn in its original size when the root
    container is exactly ``text_resize_factor`` pixels high, and scaled proportionally otherwise. """
    #: Height of the root container of this layout pass
    root_height : int
    #: Root height at which fonts are drawn in their original size
    text_resize_factor : int = 370
    #: Panels can disable text scaling for their subtree
    enabled : bool = True

    @classmethod
    def for_root(kls, container, settings=None):
        settings = settings or LayoutSettings.defaults()
        return kls(container.height, settings.text_resize_factor)

    def text_size(self, font_size):
        """ Return the font size to draw text of original size ``font_size`` with. """
        if not self.enabled:
            return font_size
        if self.root_height <= 0:
            return 0
        return int(font_size / (self.text_resize_factor / self.root_height))


class Component:
    """ A layout client. Free-form components describe their rectangle with four expression strings, gridded
    components (see :py:meth:`gridded`) are placed by their panel's :py:class:`~.grid.GridFormatter`.

    ``x`` and ``y`` may use ``WIDTH``, ``HEIGHT``, ``CENTERX`` and ``CENTERY``, which refer to this component's own
    resolved size. ``"CENTERX"`` as x centers the component horizontally. ``width`` and ``height`` may start with the
    preface marker ``?``, in which case they give the right resp. bottom edge instead of the size, e.g. ``x="width/8"``
    with ``width="?width"`` spans from one eighth of the container to its right edge. The two features cannot be
    combined within the same axis since the component's size is not known before its position in that case.
    """

    def __init__(self, x=None, y=None, width=None, height=None, *, name=None, visible=True, solver=None,
                 settings=None):
        self.name = name
        self.visible = visible
        self.solver = solver or Solver()
        self.settings = settings or LayoutSettings.defaults()
        self.grid_location = None
        self.x = self.y = self.width = self.height = None
        self.set_size(width, height)
        self.set_position(x, y)

    @classmethod
    def gridded(kls, column, row, **kwargs):
        comp = kls(**kwargs)
        comp.grid_location = (column, row)
        return comp

    @property
    def is_gridded(self):
        return self.grid_location is not None

    def set_position(self, x, y):
        """ Replace the x and y expressions. ``None`` places the component at the container's origin. """
        x = None if x is None else parse(x, allow_extended=True)
        y = None if y is None else parse(y, allow_extended=True)
        self._check_axis(x, self.width, 'x', 'width')
        self._check_axis(y, self.height, 'y', 'height')
        self.x, self.y = x, y

    def set_size(self, width, height):
        """ Replace the width and height expressions. ``None`` makes the component as large as its container. """
        marker = self.settings.preface_marker
        width = None if width is None else parse(width, allow_preface=True, marker=marker)
        height = None if height is None else parse(height, allow_preface=True, marker=marker)
        self._check_axis(self.x, width, 'x', 'width')
        self._check_axis(self.y, height, 'y', 'height')
        self.width, self.height = width, height

    @staticmethod
    def _check_axis(position, size, pos_name, size_name):
        if position is not None and size is not None and size.prefaced and position.uses_own_size:
            raise ValueError(f'{pos_name} expression {position} uses the component\'s own size, which is not known '
                             f'when {size_name} {size} is given as an end coordinate')

    def render_rect(self, container):
        """ Return the :py:class:`~.utils.Rectangle` this component occupies inside ``container``. For gridded
        components, ``container`` already is the grid cell and is returned unchanged. """
        if self.is_gridded:
            return container

        cw, ch = container.width, container.height
        w = self.solver.evaluate(self.width, cw, ch) if self.width is not None else cw
        h = self.solver.evaluate(self.height, cw, ch) if self.height is not None else ch

        x = self.solver.evaluate_extended(self.x, cw, ch, w, h) if self.x is not None else 0
        y = self.solver.evaluate_extended(self.y, cw, ch, w, h) if self.y is not None else 0

        if self.width is not None and self.width.prefaced:
            w -= x
        if self.height is not None and self.height.prefaced:
            h -= y

        rounding = self.settings.free_rounding
        return Rectangle(
                container.x + to_pixel(x, rounding),
                container.y + to_pixel(y, rounding),
                max(to_pixel(w, rounding), 0),
                max(to_pixel(h, rounding), 0))

    def __repr__(self):
        name = f' {self.name!r}' if self.name else ''
        if self.is_gridded:
            return f'<{type(self).__name__}{name} at cell {self.grid_location}>'
        return f'<{type(self).__name__}{name} x={self.x} y={self.y} w={self.width} h={self.height}>'

