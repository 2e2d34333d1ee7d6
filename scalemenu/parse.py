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

import ast
import keyword
import math
import operator
import re
from dataclasses import replace

from .expression import *


class ParseError(ValueError):
    """ Malformed layout expression. ``position`` is the index of the offending character in ``source``. """

    def __init__(self, message, source, position):
        self.message, self.source, self.position = message, source, position
        super().__init__(f'{message} at position {position}')

    def __str__(self):
        return f'{self.message} at position {self.position}:\n    {self.source}\n    {" "*self.position}^'


DEFAULT_PREFACE_MARKER = '?'

token_regex = r"""(?x)
    (\s+)|
    (\d+\.\d*|\.\d+|\d+)|
    ([A-Za-z_][A-Za-z0-9_]*)|
    ([-+*/])|
    (\()|
    (\))|
    (.)"""


def tokenize(source, start=0):
    """ Split ``source[start:]`` into ``(text, position)`` tuples, dropping whitespace. Catches everything the grammar
    rejects on a lexical level, including unbalanced parentheses. """
    tokens = []
    open_parens = []
    last_kind = None
    for match in re.compile(token_regex).finditer(source, start):
        space, number, name, op, lparen, rparen, garbage = match.groups()
        pos = match.start()

        if space:
            last_kind = None
            continue

        if garbage is not None:
            raise ParseError(f'Unexpected character {garbage!r}', source, pos)

        if (number or name) and last_kind == 'number':
            # Catches implicit multiplication ("2width") as well as exponent, hex and underscore notation
            raise ParseError('Number must not be directly followed by a name or another number', source, pos)

        if name and keyword.iskeyword(name):
            raise ParseError(f'Reserved word {name!r} cannot be used as a variable name', source, pos)

        if lparen:
            open_parens.append(pos)
        elif rparen:
            if not open_parens:
                raise ParseError('Unbalanced closing parenthesis', source, pos)
            open_parens.pop()

        last_kind = 'number' if number else 'name' if name else None
        tokens.append((match.group(), pos))

    if open_parens:
        raise ParseError('Unclosed parenthesis', source, open_parens[-1])

    if not tokens:
        raise ParseError('Empty expression', source, len(source))

    return tokens


def _resolve_name(name, allow_extended):
    if name in BUILTIN_NAMES:
        return VariableExpression(name, VariableKind.CONTAINER)

    if name.lower() in BUILTIN_NAMES and name == name.upper():
        if not allow_extended:
            return None
        return VariableExpression(name.lower(), VariableKind.OWN)

    return VariableExpression(name, VariableKind.CUSTOM)


class _Mapper:
    op_map = {ast.Add: operator.add, ast.Sub: operator.sub, ast.Mult: operator.mul, ast.Div: operator.truediv}

    def __init__(self, source, tokens, allow_extended):
        self.source = source
        self.allow_extended = allow_extended
        self.rendered = []
        # Map from column in the re-joined token string back to the position in the original source
        self.columns = []
        col = 0
        for text, pos in tokens:
            if text[0].isdigit() or text[0] == '.':
                # Python's literal rules reject e.g. "05", so hand it a canonical float literal. An overlong literal
                # becomes inf, written as 1e999 since "inf" would be a name.
                value = float(text)
                text = repr(value) if math.isfinite(value) else '1e999'
            self.columns.append((col, pos))
            self.rendered.append(text)
            col += len(text) + 1

    @property
    def joined(self):
        return ' '.join(self.rendered)

    def position(self, col):
        for start, pos in reversed(self.columns):
            if start <= col:
                return pos + (col - start)
        return 0

    def error(self, message, node_or_col):
        col = node_or_col if isinstance(node_or_col, int) else node_or_col.col_offset
        return ParseError(message, self.source, min(self.position(col), len(self.source)))

    def map(self, node):
        if isinstance(node, ast.Constant):
            if type(node.value) not in (int, float):
                raise self.error('Invalid literal', node)
            return ConstantExpression(float(node.value))

        elif isinstance(node, ast.BinOp):
            if type(node.op) not in self.op_map:
                raise self.error('Unsupported operator', node.right)
            return OperatorExpression(self.op_map[type(node.op)], self.map(node.left), self.map(node.right))

        elif isinstance(node, ast.UnaryOp):
            if type(node.op) == ast.UAdd:
                return self.map(node.operand)
            elif type(node.op) == ast.USub:
                return NegatedExpression(self.map(node.operand))
            raise self.error('Unsupported unary operator', node)

        elif isinstance(node, ast.Name):
            var = _resolve_name(node.id, self.allow_extended)
            if var is None:
                raise self.error(f'Variable {node.id} refers to the component\'s own size and is not allowed here', node)
            return var

        elif isinstance(node, ast.Tuple):
            raise self.error('Empty parentheses', node)

        else:
            raise self.error('Invalid layout expression', node)


def parse(source, allow_extended=False, allow_preface=False, marker=DEFAULT_PREFACE_MARKER):
    """ Parse a layout expression string such as ``"centerx-width/4"``.

    :param str source: Expression source
    :param bool allow_extended: Allow ``WIDTH``, ``HEIGHT``, ``CENTERX`` and ``CENTERY``, which refer to the
                                component's own resolved size. Only valid for x/y expressions.
    :param bool allow_preface: Allow a leading preface marker, turning the expression into an end coordinate. Only
                               valid for width/height expressions.
    :param str marker: The preface marker character
    :raises ParseError: if the string is not a valid expression
    :rtype: :py:class:`~.expression.Expression`
    """
    if not isinstance(source, str):
        raise TypeError(f'Layout expression must be a string, not {type(source)}')

    prefaced = False
    start = 0
    if allow_preface and source.startswith(marker):
        prefaced = True
        start = len(marker)

    tokens = tokenize(source, start)
    mapper = _Mapper(source, tokens, allow_extended)
    try:
        tree = ast.parse(mapper.joined, mode='eval').body
        result = mapper.map(tree)
    except SyntaxError as e:
        col = (e.offset or 1) - 1
        raise mapper.error('Invalid expression syntax', col) from None
    except (RecursionError, MemoryError):
        raise ParseError('Expression too deeply nested', source, start) from None

    if prefaced:
        result = replace(result, prefaced=True)
    return result

