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

"""
scalemenu.utils
===============
**Geometry and conversion helpers shared by the layout code**

Everything that crosses the boundary to a drawing or event layer is a :py:class:`.Rectangle` of integer pixels. The
conversion from the floating point results of expression evaluation into those pixels happens in :py:func:`to_pixel`.
"""

import math
import textwrap
from html import escape
import warnings
from dataclasses import dataclass


class LayoutWarning(UserWarning):
    """ scalemenu had to absorb a degenerate layout value, e.g. a division by zero inside a coordinate expression. """
    pass


ROUNDING_MODES = ('truncate', 'nearest')

def to_pixel(value, mode='truncate'):
    """ Convert the result of an expression evaluation into an integer pixel value.

    ``'truncate'`` rounds towards zero, which is what the grid math uses so a cell never overshoots its weighted span.
    ``'nearest'`` rounds half-up to the nearest integer and is used for free-form components. Non-finite values (e.g.
    the result of a division by zero) are clamped to ``0`` and a :py:class:`.LayoutWarning` is emitted.

    :param float value: Value to convert
    :param str mode: ``'truncate'`` or ``'nearest'``
    :rtype: int
    """

    if mode not in ROUNDING_MODES:
        raise ValueError(f'Invalid rounding mode {mode!r}, must be one of {", ".join(ROUNDING_MODES)}')

    value = float(value)
    if not math.isfinite(value):
        warnings.warn(f'Non-finite layout value {value} clamped to 0', LayoutWarning, stacklevel=2)
        return 0

    if mode == 'truncate':
        return int(value)
    else:
        return math.floor(value + 0.5)


@dataclass(frozen=True, slots=True)
class Rectangle:
    """ Axis-aligned pixel rectangle. ``x`` and ``y`` are the top-left corner. """
    x : int = 0
    y : int = 0
    width : int = 0
    height : int = 0

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def is_empty(self):
        return self.width <= 0 or self.height <= 0

    def contains(self, px, py):
        """ Check whether the point ``(px, py)`` lies inside this rectangle. The right and bottom edges are exclusive,
        so adjacent grid cells never both claim the same pixel. """
        return self.x <= px < self.right and self.y <= py < self.bottom

    def shrunk(self, dx, dy):
        """ Inset this rectangle by ``dx`` on the left and right and ``dy`` on the top and bottom. An axis that would
        end up with negative size collapses to zero size without moving its origin. """
        x, w = (self.x + dx, self.width - 2*dx) if self.width - 2*dx >= 0 else (self.x, 0)
        y, h = (self.y + dy, self.height - 2*dy) if self.height - 2*dy >= 0 else (self.y, 0)
        return Rectangle(x, y, w, h)

    def fitted(self, aspect_w, aspect_h):
        """ Return the largest rectangle with aspect ratio ``aspect_w : aspect_h`` centered inside this one, e.g. to
        draw an image of that size without stretching it. """
        if aspect_w <= 0 or aspect_h <= 0:
            return Rectangle(self.x, self.y, 0, 0)

        ratio_w = self.width / aspect_w
        ratio_h = self.height / aspect_h
        if ratio_w <= ratio_h: # width is the limiting dimension
            h = int(ratio_w * aspect_h)
            return Rectangle(self.x, self.y + self.height//2 - h//2, self.width, h)
        else:
            w = int(ratio_h * aspect_w)
            return Rectangle(self.x + self.width//2 - w//2, self.y, w, self.height)

    def as_tuple(self):
        return (self.x, self.y, self.width, self.height)

    def __str__(self):
        return f'<Rectangle {self.width}x{self.height}+{self.x}+{self.y}>'


class Tag:
    """ SVG element used by the layout preview export. Functions producing SVG take a ``tag`` parameter so callers can
    substitute their own element class.

    Keyword attribute names map ``__`` to ``:`` and ``_`` to ``-``, so ``font_size`` becomes ``font-size``. Attribute
    values and plain string children are XML-escaped, component names can be passed in as they are. """

    def __init__(self, name, children=None, root=False, **attrs):
        self.name, self.attrs = name, attrs
        self.children = children or []
        self.root = root

    @staticmethod
    def _attr_name(key):
        return key.replace('__', ':').replace('_', '-')

    def _render_child(self, child):
        text = str(child) if isinstance(child, Tag) else escape(str(child), quote=False)
        return textwrap.indent(text, '  ')

    def __str__(self):
        prefix = '<?xml version="1.0" encoding="utf-8"?>\n' if self.root else ''
        attrs = [f'{self._attr_name(key)}="{escape(str(value))}"' for key, value in self.attrs.items()]
        opening = ' '.join([self.name, *attrs])
        if not self.children:
            return f'{prefix}<{opening}/>'

        children = '\n'.join(self._render_child(c) for c in self.children)
        return f'{prefix}<{opening}>\n{children}\n</{self.name}>'


def setup_svg(tags, width, height, pagecolor='white', tag=Tag):
    """ Wrap ``tags`` in an SVG root element of the given pixel size. """
    w = max(width, 1)
    h = max(height, 1)
    background = tag('rect', x=0, y=0, width=w, height=h, style=f'fill: {pagecolor}')
    return tag('svg', [background, *tags],
            width=f'{w}px', height=f'{h}px',
            viewBox=f'0 0 {w} {h}',
            xmlns="http://www.w3.org/2000/svg",
            xmlns__xlink="http://www.w3.org/1999/xlink",
            root=True)

