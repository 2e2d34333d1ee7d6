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
scalemenu
=========

scalemenu lays out on-screen components with positions and sizes given as small algebraic expressions like
``"centerx-width/4"`` instead of fixed pixel values, so a menu can be resized without any re-layout code. It provides
the expression parser and evaluator, a weighted grid layout engine and a few helpers around them.
"""

__version__ = '1.0.0'

from .parse import parse, ParseError
from .expression import UnresolvedVariableError, VariableKind
from .solver import Solver, evaluate, evaluate_extended
from .grid import GridFormatter
from .component import Component, ScaleContext
from .panel import Panel, Placement, layout
from .settings import LayoutSettings
from .utils import Rectangle, LayoutWarning, to_pixel
