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
import math
import sys
import warnings
from pathlib import Path

import click

from . import __version__
from .parse import parse, ParseError
from .expression import UnresolvedVariableError
from .solver import Solver
from .panel import Panel, layout as layout_pass, to_svg
from .hitmap import HitMap
from .utils import Rectangle, to_pixel, ROUNDING_MODES


def _showwarning(message, category, filename, lineno, file=None, line=None):
    if file is None:
        file = sys.stderr

    filename = Path(filename)
    module_install_location = Path(__file__).parent.parent
    if filename.is_relative_to(module_install_location):
        filename = filename.relative_to(module_install_location)

    print(f'{filename}:{lineno}: {message}', file=file)
warnings.showwarning = _showwarning

def _print_version(ctx, param, value):
    if value and not ctx.resilient_parsing:
        click.echo(f'Version {__version__}')
        ctx.exit()


class Size(click.ParamType):
    name = 'size'

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value

        try:
            w, h = [float(e) for e in value.replace(',', 'x').split('x')]
            if not (math.isfinite(w) and math.isfinite(h)) or w < 0 or h < 0:
                raise ValueError()
            return w, h

        except ValueError:
            self.fail(f'{value!r} is not a valid size. A size is given as "[width]x[height]", e.g. "800x600".')


class Definition(click.ParamType):
    name = 'definition'

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value

        name, sep, number = value.partition('=')
        try:
            if not sep:
                raise ValueError()
            return name.strip(), float(number)

        except ValueError:
            self.fail(f'{value!r} is not a valid variable definition. Use "[name]=[number]", e.g. "scroll=0.5".')


def _warnings_option(fun):
    return click.option('--warnings', 'format_warnings', type=click.Choice(['default', 'ignore', 'once']),
                        default='default', help='''Enable or disable layout warnings, e.g. about values that had to
                        be clamped (default: on)''')(fun)


def _load(path, format_warnings):
    with warnings.catch_warnings():
        warnings.simplefilter(format_warnings)
        try:
            return Panel.open(path)
        except (ParseError, ValueError, TypeError) as e:
            raise click.ClickException(f'Cannot load layout {path}: {e}')


@click.group()
@click.option('--version', is_flag=True, callback=_print_version, expose_value=False, is_eager=True)
def cli():
    """ The scalemenu CLI lets you evaluate layout expressions and inspect layout files at arbitrary window sizes. """
    pass


@cli.command('eval')
@_warnings_option
@click.option('-s', '--size', type=Size(), default='800x600', help='Container size (default: 800x600)')
@click.option('-o', '--own', type=Size(), help='''Component's own size. Enables the variables WIDTH, HEIGHT, CENTERX
              and CENTERY.''')
@click.option('-D', '--define', 'definitions', type=Definition(), multiple=True, help='''Define a custom variable as
              "[name]=[number]". Can be given multiple times.''')
@click.option('--preface/--no-preface', default=False, help='Allow a leading "?" end coordinate marker')
@click.option('--pixels', type=click.Choice(ROUNDING_MODES), help='Also print the value converted to pixels')
@click.argument('expression')
def eval_(expression, size, own, definitions, preface, pixels, format_warnings):
    """ Evaluate a single layout expression, e.g. "centerx-width/4". """
    solver = Solver()
    try:
        for name, value in definitions:
            solver.define(name, value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--define')

    try:
        expr = parse(expression, allow_extended=own is not None, allow_preface=preface)
    except ParseError as e:
        raise click.ClickException(str(e))

    with warnings.catch_warnings():
        warnings.simplefilter(format_warnings)
        try:
            if own is None:
                value = solver.evaluate(expr, *size)
            else:
                value = solver.evaluate_extended(expr, *size, *own)
        except UnresolvedVariableError as e:
            raise click.ClickException(str(e))

        marker = ' (end coordinate)' if expr.prefaced else ''
        click.echo(f'{value:g}{marker}')
        if pixels:
            click.echo(f'{to_pixel(value, pixels)} px')


@cli.command()
@_warnings_option
@click.option('-s', '--size', type=Size(), default='800x600', help='Window size (default: 800x600)')
@click.option('-f', '--format', 'output_format', type=click.Choice(['text', 'json', 'svg']), default='text',
              help='Output format (default: text)')
@click.argument('path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('outfile', type=click.File('w'), default='-')
def layout(path, outfile, size, output_format, format_warnings):
    """ Resolve all component rectangles of a JSON layout file at the given window size. """
    root = _load(path, format_warnings)
    w, h = int(size[0]), int(size[1])

    with warnings.catch_warnings():
        warnings.simplefilter(format_warnings)
        try:
            placements = list(layout_pass(root, Rectangle(0, 0, w, h)))
        except UnresolvedVariableError as e:
            raise click.ClickException(str(e))

    if output_format == 'svg':
        outfile.write(str(to_svg(placements, w, h)))

    elif output_format == 'json':
        json.dump([{'name': p.component.name, 'depth': p.depth, 'x': p.rect.x, 'y': p.rect.y,
                    'width': p.rect.width, 'height': p.rect.height} for p in placements], outfile, indent=2)
        outfile.write('\n')

    else:
        for p in placements:
            name = p.component.name or f'<{type(p.component).__name__}>'
            outfile.write(f'{"  "*p.depth}{name}: {p.rect.x} {p.rect.y} {p.rect.width} {p.rect.height}\n')


@cli.command()
@_warnings_option
@click.option('-s', '--size', type=Size(), default='800x600', help='Window size (default: 800x600)')
@click.argument('path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('x', type=int)
@click.argument('y', type=int)
def hit(path, x, y, size, format_warnings):
    """ Print the name of the top-most component at pixel (X, Y). Exits with status 1 if there is none. """
    root = _load(path, format_warnings)
    with warnings.catch_warnings():
        warnings.simplefilter(format_warnings)
        try:
            placements = [p for p in layout_pass(root, Rectangle(0, 0, int(size[0]), int(size[1]))) if p.depth > 0]
        except UnresolvedVariableError as e:
            raise click.ClickException(str(e))

    found = HitMap.build(placements).at(x, y)
    if found is None:
        click.echo('No component at this position', err=True)
        sys.exit(1)
    click.echo(found.name or repr(found))


@cli.command()
@click.option('-h', '--host', default=None, help='Hostname to listen on. Defaults to localhost.')
@click.option('-p', '--port', type=int, default=1337, help='Port to listen on. Defaults to 1337')
def serve(host, port):
    ''' Launch the interactive layout preview in your browser '''
    import webbrowser
    from . import layoutserve

    if host is None:
        @layoutserve.app.before_serving
        async def open_browser():
            webbrowser.open_new(f'http://localhost:{port}/')
    layoutserve.app.run(host=host, port=port, use_reloader=False, debug=False)


if __name__ == '__main__':
    cli()

