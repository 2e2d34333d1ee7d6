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
Evaluation of parsed layout expressions against a container size.

There are two evaluation modes. :py:func:`evaluate` only knows about the container (``width``, ``height``,
``centerx``, ``centery``) and custom variables. :py:func:`evaluate_extended` additionally knows the component's own
resolved size (``WIDTH``, ``HEIGHT``, ``CENTERX``, ``CENTERY``). Expressions are never cached, every call evaluates
the tree from scratch.
"""

import keyword
import re
from dataclasses import dataclass, field

from .expression import UnresolvedVariableError, VariableKind, BUILTIN_NAMES


@dataclass(frozen=True)
class EvaluationContext:
    """ Variable values for a single evaluation. Build a fresh one for every resolution call. """
    #: Container width
    width : float
    #: Container height
    height : float
    #: Component's own resolved width, ``None`` outside of extended evaluation
    own_width : float = None
    #: Component's own resolved height, ``None`` outside of extended evaluation
    own_height : float = None
    #: Custom variables by name
    custom : dict = field(default_factory=dict)

    @property
    def is_extended(self):
        return self.own_width is not None and self.own_height is not None

    def get(self, variable, default=None):
        """ Look up the value of a :py:class:`~.expression.VariableExpression`, returning ``default`` if this context
        does not provide it. """
        match variable.kind, variable.name:
            case VariableKind.CONTAINER, 'width':
                return self.width
            case VariableKind.CONTAINER, 'height':
                return self.height
            case VariableKind.CONTAINER, 'centerx':
                return self.width / 2
            case VariableKind.CONTAINER, 'centery':
                return self.height / 2

            case VariableKind.OWN, _ if not self.is_extended:
                return default
            case VariableKind.OWN, 'width':
                return self.own_width
            case VariableKind.OWN, 'height':
                return self.own_height
            case VariableKind.OWN, 'centerx':
                return (self.width - self.own_width) / 2
            case VariableKind.OWN, 'centery':
                return (self.height - self.own_height) / 2

            case VariableKind.CUSTOM, name:
                return self.custom.get(name, default)

        return default


def evaluate(expression, container_width, container_height, variables=None):
    """ Evaluate ``expression`` using only container and custom variables.

    :raises UnresolvedVariableError: if the expression uses own-size or unknown custom variables
    :rtype: float
    """
    ctx = EvaluationContext(container_width, container_height, custom=variables or {})
    return expression.calculate(ctx)


def evaluate_extended(expression, container_width, container_height, own_width, own_height, variables=None):
    """ Evaluate ``expression`` with the component's own size known. ``CENTERX`` evaluates to
    ``(container_width - own_width)/2``, i.e. the x offset that centers the component.

    :raises UnresolvedVariableError: if the expression uses unknown custom variables
    :rtype: float
    """
    ctx = EvaluationContext(container_width, container_height, own_width, own_height, custom=variables or {})
    return expression.calculate(ctx)


def _check_name(name):
    if not isinstance(name, str) or not re.fullmatch(r'[A-Za-z_][A-Za-z0-9_]*', name) or keyword.iskeyword(name):
        raise ValueError(f'Invalid variable name {name!r}')

    if name.lower() in BUILTIN_NAMES and name in (name.lower(), name.upper()):
        raise ValueError(f'Cannot redefine built-in variable {name!r}')


class Solver:
    """ Evaluates expressions with a registry of custom variables. Each component or grid formatter owns one, so a
    caller can e.g. define ``scroll`` on one component without affecting others.
    """

    def __init__(self, variables=None):
        self._variables = {}
        for name, value in (variables or {}).items():
            self.define(name, value)

    def define(self, name, value):
        """ Register or update custom variable ``name``. Names are case-sensitive and must not collide with the
        built-in variables. """
        _check_name(name)
        self._variables[name] = float(value)

    def undefine(self, name):
        """ Remove custom variable ``name``. Returns whether it was defined. """
        return self._variables.pop(name, None) is not None

    @property
    def variables(self):
        return dict(self._variables)

    def context(self, container_width, container_height, own_width=None, own_height=None):
        return EvaluationContext(container_width, container_height, own_width, own_height, custom=dict(self._variables))

    def evaluate(self, expression, container_width, container_height):
        return evaluate(expression, container_width, container_height, self._variables)

    def evaluate_extended(self, expression, container_width, container_height, own_width, own_height):
        return evaluate_extended(expression, container_width, container_height, own_width, own_height, self._variables)

    def __repr__(self):
        return f'<Solver variables={self._variables}>'

