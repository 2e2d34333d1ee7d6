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
scalemenu.grid
==============
**Weighted grid layout**

A :py:class:`.GridFormatter` holds layout clients at integer ``(column, row)`` coordinates and splits the container
rectangle between them. Rows and columns default to a weight of 1, a column of weight 2 gets twice the width of a
column of weight 1. Frames inset the whole grid, margins separate neighboring cells.
"""

import math

from .parse import parse
from .solver import Solver
from .settings import LayoutSettings
from .utils import Rectangle, to_pixel


def _check_weight(weight):
    weight = float(weight)
    if not math.isfinite(weight) or weight <= 0:
        raise ValueError(f'Grid weights must be positive, finite numbers, not {weight}')
    return weight


class GridFormatter:
    """ Sparse grid of layout clients. A client placed with :py:meth:`add_entry` is located again during
    :py:meth:`resolve` through its ``grid_location`` attribute, which must hold its ``(column, row)`` tuple. """

    def __init__(self, solver=None, settings=None):
        self.solver = solver or Solver()
        self.settings = settings or LayoutSettings.defaults()
        self._entries = {}
        self._row_weights = {}
        self._col_weights = {}
        #: Tracked extent, ``(max column + 1, max row + 1)``. May be larger than the true extent after a removal
        #: without resize.
        self._dim = (0, 0)
        self.x_margin = self.y_margin = None
        self.x_frame = self.y_frame = None

    @property
    def grid_width(self):
        return self._dim[0]

    @property
    def grid_height(self):
        return self._dim[1]

    def add_entry(self, entry, column, row):
        """ Place ``entry`` at ``(column, row)``, replacing any previous occupant of that cell. The tracked extent
        grows to include the cell. """
        if column < 0 or row < 0:
            raise ValueError(f'Grid coordinates must be non-negative, not ({column}, {row})')

        w, h = self._dim
        self._dim = max(w, column+1), max(h, row+1)
        self._entries[column, row] = entry

    def remove_entry(self, column, row, resize=True):
        """ Remove whatever is at ``(column, row)``.

        :param bool resize: Shrink the tracked extent if the removed cell was on its boundary
        :returns: ``True`` if something was removed
        """
        removed = (column, row) in self._entries
        self._entries.pop((column, row), None)
        if not removed or not resize:
            return removed

        if not self._entries:
            self._dim = (0, 0)
            return removed

        w, h = self._dim
        # Only a removal on the maximum boundary can shrink the grid
        if column == w-1 or row == h-1:
            max_x, max_y = 0, 0
            for x, y in self._entries:
                max_x, max_y = max(max_x, x), max(max_y, y)
                if max_x >= w-1 and max_y >= h-1:
                    break # boundary still occupied in both axes, nothing to shrink
            else:
                self._dim = max_x+1, max_y+1

        return removed

    def shrink_to_fit(self):
        """ Recalculate the tracked extent from all entries, e.g. after removals with ``resize=False``. """
        self._dim = (max((x for x, _y in self._entries), default=-1) + 1,
                     max((y for _x, y in self._entries), default=-1) + 1)

    def entry_at(self, column, row):
        return self._entries.get((column, row))

    def entries(self):
        """ Return a list of all held entries. """
        return list(self._entries.values())

    def items(self):
        """ Return a list of ``((column, row), entry)`` tuples. """
        return list(self._entries.items())

    def location_of(self, entry):
        """ Return the ``(column, row)`` of ``entry`` in this grid, or ``None`` if it is not held here. """
        for loc, held in self._entries.items():
            if held is entry:
                return loc
        return None

    def __len__(self):
        return len(self._entries)

    def __contains__(self, entry):
        return self.location_of(entry) is not None

    def set_margin(self, x_margin, y_margin):
        """ Set the space between neighboring columns resp. rows. Each argument is an expression string or ``None`` for
        no margin. Margins are evaluated against the frame-inset grid area. """
        self.x_margin = None if x_margin is None else parse(x_margin)
        self.y_margin = None if y_margin is None else parse(y_margin)

    def set_frame(self, x_frame, y_frame):
        """ Set the space between the grid and the container's edges. Each argument is an expression string or ``None``
        for no frame. Unlike margins, frames are only applied to the outside of the grid. """
        self.x_frame = None if x_frame is None else parse(x_frame)
        self.y_frame = None if y_frame is None else parse(y_frame)

    def specify_row_weight(self, row, weight):
        """ Set the weight of ``row``. A weight of 1 restores the default. """
        weight = _check_weight(weight)
        if weight == 1:
            self._row_weights.pop(row, None)
        else:
            self._row_weights[row] = weight

    def specify_column_weight(self, column, weight):
        """ Set the weight of ``column``. A weight of 1 restores the default. """
        weight = _check_weight(weight)
        if weight == 1:
            self._col_weights.pop(column, None)
        else:
            self._col_weights[column] = weight

    def row_weight(self, row):
        return self._row_weights.get(row, 1.0)

    def column_weight(self, column):
        return self._col_weights.get(column, 1.0)

    @property
    def row_weights(self):
        """ Non-default row weights """
        return dict(self._row_weights)

    @property
    def column_weights(self):
        """ Non-default column weights """
        return dict(self._col_weights)

    def _weight_sum(self, weights, limit):
        return sum(weights.get(i, 1.0) for i in range(limit))

    def _pixels(self, expression, container):
        if expression is None:
            return 0
        value = to_pixel(self.solver.evaluate(expression, container.width, container.height), self.settings.grid_rounding)
        return max(value, 0)

    def _span(self, start, available, margin, weights, count, index):
        if margin < 0 or available < 1:
            margin = 0

        total = self._weight_sum(weights, count)
        usable = available - margin * max(count-1, 0)
        rounding = self.settings.grid_rounding

        def boundary(k):
            if k >= count: # land exactly on the far edge independent of rounding
                return usable
            return to_pixel(usable * self._weight_sum(weights, k) / total, rounding)

        begin = start + boundary(index) + margin*index
        end = start + boundary(index+1) + margin*(index+1)
        return begin, max(end - begin - margin, 0)

    def resolve_at(self, column, row, container):
        """ Return the pixel :py:class:`~.utils.Rectangle` of cell ``(column, row)`` inside ``container``, no matter
        whether the cell is occupied. The cell must lie within the tracked extent. """
        w, h = self._dim
        if not (0 <= column < w and 0 <= row < h):
            raise IndexError(f'Cell ({column}, {row}) is outside of the {w}x{h} grid')

        frame_x = self._pixels(self.x_frame, container)
        frame_y = self._pixels(self.y_frame, container)
        area = container.shrunk(frame_x, frame_y)

        margin_x = self._pixels(self.x_margin, area)
        margin_y = self._pixels(self.y_margin, area)

        x, width = self._span(area.x, area.width, margin_x, self._col_weights, w, column)
        y, height = self._span(area.y, area.height, margin_y, self._row_weights, h, row)
        return Rectangle(x, y, width, height)

    def resolve(self, entry, container):
        """ Return the pixel :py:class:`~.utils.Rectangle` of ``entry`` inside ``container``, or ``None`` if
        ``entry`` is not held at its recorded ``grid_location``. """
        loc = getattr(entry, 'grid_location', None)
        if loc is None or self._entries.get(tuple(loc)) is not entry:
            return None
        return self.resolve_at(*loc, container)

    def __repr__(self):
        return f'<GridFormatter {self.grid_width}x{self.grid_height} with {len(self)} entries>'

