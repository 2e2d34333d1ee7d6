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

from dataclasses import dataclass, field, KW_ONLY
from enum import Enum
import operator
import math


class UnresolvedVariableError(LookupError):
    """ An expression references variables that the evaluation context does not provide. """

    def __init__(self, names, expression=None):
        self.names = tuple(sorted(names))
        self.expression = expression
        where = f' in {expression}' if expression is not None else ''
        super().__init__(f'Cannot resolve variable(s) {", ".join(self.names)}{where}')


class VariableKind(Enum):
    """ Scope a variable reference resolves in. """
    #: ``width``, ``height``, ``centerx``, ``centery`` of the container
    CONTAINER = 'container'
    #: ``WIDTH``, ``HEIGHT``, ``CENTERX``, ``CENTERY``: the component's own resolved size
    OWN = 'own'
    #: Any other name, registered by the caller at evaluation time
    CUSTOM = 'custom'


BUILTIN_NAMES = ('width', 'height', 'centerx', 'centery')


def expr(obj):
    return obj if isinstance(obj, Expression) else ConstantExpression(obj)


def _apply(op, l, r):
    # Division by zero does not raise. It produces an infinite (or for 0/0, a NaN) sentinel that is clamped when
    # converting to pixels.
    if op is operator.truediv and r == 0:
        if l == 0 or math.isnan(l):
            return math.nan
        return math.copysign(math.inf, l) * math.copysign(1.0, r)
    return op(l, r)


@dataclass(frozen=True, slots=True)
class Expression:
    _ : KW_ONLY
    #: Set on the outermost node when the source string started with the preface marker. The expression then describes
    #: the end coordinate of a dimension instead of its length.
    prefaced : bool = field(default=False, compare=False)

    def optimized(self, variable_binding={}):
        return self

    def __str__(self):
        return f'<{self.to_source()}>'

    def __repr__(self):
        return f'<E {self.to_source()}>'

    def to_source(self):
        raise NotImplementedError()

    def calculate(self, variable_binding={}):
        """ Evaluate this expression to a float. ``variable_binding`` must provide a ``get(variable)`` method that
        returns the value of a :py:class:`.VariableExpression` or ``None``, e.g. an
        :py:class:`~.solver.EvaluationContext`. """
        missing = {var.to_source() for var in self.variables() if variable_binding.get(var) is None}
        if missing:
            raise UnresolvedVariableError(missing, self)

        result = self.optimized(variable_binding)
        if not isinstance(result, ConstantExpression):
            raise UnresolvedVariableError((), self)
        return float(result.value)

    def __add__(self, other):
        return OperatorExpression(operator.add, self, expr(other)).optimized()

    def __radd__(self, other):
        return expr(other) + self

    def __sub__(self, other):
        return OperatorExpression(operator.sub, self, expr(other)).optimized()

    def __rsub__(self, other):
        return expr(other) - self

    def __mul__(self, other):
        return OperatorExpression(operator.mul, self, expr(other)).optimized()

    def __rmul__(self, other):
        return expr(other) * self

    def __truediv__(self, other):
        return OperatorExpression(operator.truediv, self, expr(other)).optimized()

    def __rtruediv__(self, other):
        return expr(other) / self

    def __neg__(self):
        return NegatedExpression(self)

    def __pos__(self):
        return self

    def variables(self):
        return tuple()

    @property
    def uses_own_size(self):
        """ ``True`` if this expression needs the component's own width or height to be evaluated. """
        return any(var.kind == VariableKind.OWN for var in self.variables())


@dataclass(frozen=True, slots=True)
class ConstantExpression(Expression):
    value: float

    def __float__(self):
        return float(self.value)

    def __eq__(self, other):
        try:
            return math.isclose(self.value, float(other), abs_tol=1e-9)
        except (TypeError, ValueError):
            return False

    def to_source(self):
        prefix = '?' if self.prefaced else ''
        if self == 0: # Avoid producing "-0" for negative floating point zeros
            return f'{prefix}0'
        return prefix + f'{self.value:.6f}'.rstrip('0').rstrip('.')


@dataclass(frozen=True, slots=True)
class VariableExpression(Expression):
    ''' A reference to a named variable. Built-in names are stored in lower case, their scope is given by ``kind``. '''
    name: str
    kind: VariableKind = VariableKind.CUSTOM

    def optimized(self, variable_binding={}):
        value = variable_binding.get(self)
        if value is None:
            return self
        return expr(value)

    def __eq__(self, other):
        return type(self) == type(other) and \
                self.name == other.name and \
                self.kind == other.kind

    def to_source(self):
        prefix = '?' if self.prefaced else ''
        if self.kind == VariableKind.OWN:
            return prefix + self.name.upper()
        return prefix + self.name

    def variables(self):
        yield self


@dataclass(frozen=True, slots=True)
class NegatedExpression(Expression):
    value: Expression

    def optimized(self, variable_binding={}):
        match self.value.optimized(variable_binding):
            # -(-x) == x
            case NegatedExpression(inner_value):
                return inner_value
            # -(x) == -x
            case ConstantExpression(inner_value):
                return ConstantExpression(-inner_value)
            # -(x-y) == y-x
            case OperatorExpression(operator.sub, l, r):
                return OperatorExpression(operator.sub, r, l)
            # Round very small values and negative floating point zeros to a (positive) zero
            case 0:
                return expr(0)
            case x:
                return NegatedExpression(x)

    def __eq__(self, other):
        return type(self) == type(other) and \
                self.value == other.value

    def to_source(self):
        prefix = '?' if self.prefaced else ''
        val_str = self.value.to_source()
        if isinstance(self.value, (VariableExpression, ConstantExpression)):
            return f'{prefix}-{val_str}'
        else:
            return f'{prefix}-({val_str})'

    def variables(self):
        yield from self.value.variables()


OPERATOR_SYMBOLS = {
        operator.add: '+',
        operator.sub: '-',
        operator.mul: '*',
        operator.truediv: '/'}


@dataclass(frozen=True, slots=True)
class OperatorExpression(Expression):
    op: object
    l: Expression
    r: Expression

    def __init__(self, op, l, r, *, prefaced=False):
        if op not in OPERATOR_SYMBOLS:
            raise ValueError(f'Unsupported operator {op!r}')
        object.__setattr__(self, 'op', op)
        object.__setattr__(self, 'l', expr(l))
        object.__setattr__(self, 'r', expr(r))
        object.__setattr__(self, 'prefaced', prefaced)

    def __eq__(self, other):
        return type(self) == type(other) and \
                self.op == other.op and \
                self.l == other.l and \
                self.r == other.r

    def optimized(self, variable_binding={}):
        l = self.l.optimized(variable_binding)
        r = self.r.optimized(variable_binding)

        match (l, self.op, r):
            case (ConstantExpression(), op, ConstantExpression()):
                return ConstantExpression(_apply(op, float(l), float(r)))

            # 0 + x == x
            case (0, operator.add, r):
                return r
            # x + 0 == x
            case (l, operator.add, 0):
                return l
            # x * 1 == x
            case (l, operator.mul, 1):
                return l
            # 1 * x == x
            case (1, operator.mul, r):
                return r
            # x * -1 == -x
            case (l, operator.mul, -1):
                rv = -l
            # -1 * x == -x
            case (-1, operator.mul, r):
                rv = -r
            # x - 0 == x
            case (l, operator.sub, 0):
                return l
            # 0 - x == -x
            case (0, operator.sub, r):
                rv = -r
            # x - -y == x + y
            case (l, operator.sub, NegatedExpression(r)):
                rv = (l + r)
            # x / 1 == x
            case (l, operator.truediv, 1):
                return l
            # x / -1 == -x
            case (l, operator.truediv, -1):
                rv = -l
            # x + -y == x - y
            case (l, operator.add, NegatedExpression(r)):
                rv = l-r

            case _:
                return OperatorExpression(self.op, l, r)

        return expr(rv).optimized(variable_binding)

    def to_source(self):
        lval = self.l.to_source()
        rval = self.r.to_source()

        if isinstance(self.l, OperatorExpression):
            lval = f'({lval})'
        if isinstance(self.r, (OperatorExpression, NegatedExpression)):
            rval = f'({rval})'

        prefix = '?' if self.prefaced else ''
        return f'{prefix}{lval}{OPERATOR_SYMBOLS[self.op]}{rval}'

    def variables(self):
        yield from self.l.variables()
        yield from self.r.variables()

