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
from copy import deepcopy

from .utils import ROUNDING_MODES


@dataclass
class LayoutSettings:
    ''' Settings shared by grid formatters, components and panels.

    .. note::
        Grid cells and free-form components use different rounding policies by default. Grid boundaries are truncated
        so a cell never overshoots its weighted share, while free-form rectangles are rounded to the nearest pixel.
        Changing either policy shifts rendered components by up to one pixel.
    '''
    #: Pixel conversion for grid cell boundaries. ``'truncate'`` or ``'nearest'``.
    grid_rounding : str = 'truncate'
    #: Pixel conversion for free-form component rectangles. ``'truncate'`` or ``'nearest'``.
    free_rounding : str = 'nearest'
    #: Root container height at which text is drawn in its original font size.
    text_resize_factor : int = 370
    #: Leading character that turns a width or height expression into an end coordinate.
    preface_marker : str = '?'

    # input validation
    def __setattr__(self, name, value):
        if name in ('grid_rounding', 'free_rounding') and value not in ROUNDING_MODES:
            raise ValueError(f'{name} must be one of {", ".join(ROUNDING_MODES)}, not {value!r}')
        elif name == 'text_resize_factor' and (not isinstance(value, int) or value <= 0):
            raise ValueError(f'Text resize factor must be a positive integer, not {value!r}')
        elif name == 'preface_marker':
            if not isinstance(value, str) or len(value) != 1 or value.isalnum() or value in '+-*/()._' or value.isspace():
                raise ValueError(f'Preface marker must be a single character that is not part of the expression grammar, not {value!r}')

        super().__setattr__(name, value)

    @classmethod
    def defaults(kls):
        """ Return a fresh settings object with default values. """
        return kls()

    def copy(self):
        return deepcopy(self)

    def __str__(self):
        return f'<Layout settings: grid={self.grid_rounding} free={self.free_rounding} text_factor={self.text_resize_factor} marker={self.preface_marker!r}>'

