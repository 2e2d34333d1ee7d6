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

import pytest
from click.testing import CliRunner

from scalemenu import __version__
from scalemenu.cli import cli


def run(*args, exit_code=0):
    result = CliRunner().invoke(cli, [str(arg) for arg in args])
    assert result.exit_code == exit_code, result.output
    return result


def test_version():
    assert f'Version {__version__}' in run('--version').output


@pytest.mark.parametrize('args, output', [
    (['centerx-width/4'], '200'),
    (['-s', '300x200', 'width/8'], '37.5'),
    (['-s', '300,200', 'height-height/3'], '133.333'),
    (['-s', '200x100', '-o', '50x20', 'CENTERX'], '75'),
    (['-D', 'scroll=0.5', 'scroll*height'], '300'),
    (['-D', 'a=2', '-D', 'b=3', 'a*b'], '6'),
    (['--preface', '?width-10'], '790 (end coordinate)'),
    (['2*(3+4)'], '14'),
    ])
def test_eval(args, output):
    assert run('eval', *args).output.splitlines() == [output]


def test_eval_pixels():
    assert run('eval', '-s', '300x200', '--pixels', 'nearest', 'width/8').output.splitlines() == ['37.5', '38 px']
    assert run('eval', '-s', '300x200', '--pixels', 'truncate', 'width/8').output.splitlines() == ['37.5', '37 px']


def test_eval_division_by_zero():
    lines = run('eval', '--warnings', 'ignore', '--pixels', 'truncate', '10/0').output.splitlines()
    assert lines == ['inf', '0 px']


def test_eval_errors():
    result = run('eval', 'width/(2', exit_code=1)
    assert 'Unclosed parenthesis' in result.output

    result = run('eval', 'CENTERX', exit_code=1)
    assert 'not allowed' in result.output

    result = run('eval', 'scroll', exit_code=1)
    assert 'scroll' in result.output

    run('eval', '?width', exit_code=1)


@pytest.mark.parametrize('args', [
    ['-s', 'abc', 'width'],
    ['-s', '-5x10', 'width'],
    ['-s', 'infx600', 'width'],
    ['-s', '800xnan', 'width'],
    ['-o', 'infxinf', 'WIDTH'],
    ['-D', 'scroll', 'width'],
    ['-D', 'width=3', 'width'],
    ['-o', '10', 'WIDTH'],
    ])
def test_eval_bad_options(args):
    run('eval', *args, exit_code=2)


def test_layout_text(layout_file, sample_layout):
    result = run('layout', '-s', '400x300', layout_file(sample_layout))
    assert result.output == (
            'root: 0 0 400 300\n'
            '  a: 0 0 200 300\n'
            '  b: 200 0 200 300\n'
            '  c: 150 10 100 20\n')


def test_layout_json(layout_file, sample_layout):
    result = run('layout', '-s', '800x600', '-f', 'json', layout_file(sample_layout))
    rects = json.loads(result.output)
    assert [r['name'] for r in rects] == ['root', 'a', 'b', 'c']
    assert rects[3] == {'name': 'c', 'depth': 1, 'x': 300, 'y': 10, 'width': 200, 'height': 20}


def test_layout_svg(layout_file, sample_layout, tmp_path):
    out = tmp_path / 'out.svg'
    run('layout', '-s', '400x300', '-f', 'svg', layout_file(sample_layout), out)
    svg = out.read_text()
    assert svg.startswith('<?xml')
    assert '<svg' in svg
    assert svg.count('<rect') == 5


def test_layout_errors(layout_file, tmp_path):
    result = run('layout', layout_file({'children': [{'x': 'width/(2'}]}), exit_code=1)
    assert 'Cannot load layout' in result.output

    result = run('layout', layout_file({'children': [{'x': 'scroll'}]}), exit_code=1)
    assert 'scroll' in result.output

    run('layout', layout_file([1, 2, 3]), exit_code=1)
    run('layout', tmp_path / 'missing.json', exit_code=2)


def test_hit(layout_file, sample_layout):
    path = layout_file(sample_layout)
    assert run('hit', '-s', '400x300', path, 160, 15).output.strip() == 'c'
    assert run('hit', '-s', '400x300', path, 10, 290).output.strip() == 'a'
    assert run('hit', '-s', '400x300', path, 399, 0).output.strip() == 'b'
    run('hit', '-s', '400x300', path, 400, 10, exit_code=1)



def test_layout_rejects_infinite_size(layout_file, sample_layout):
    result = run('layout', '-s', 'infx600', layout_file(sample_layout), exit_code=2)
    assert 'not a valid size' in result.output
