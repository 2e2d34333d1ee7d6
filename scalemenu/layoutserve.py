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

import importlib.resources
import warnings

from quart import Quart, request, Response, jsonify

from . import layoutserve_data
from .expression import UnresolvedVariableError
from .panel import Panel, layout, to_svg
from .utils import Rectangle

app = Quart(__name__)


@app.route('/')
async def index():
    html = importlib.resources.files(layoutserve_data).joinpath('layoutserve.html').read_text()
    return Response(html, mimetype='text/html')


def resolve(obj):
    if not isinstance(obj, dict) or not isinstance(obj.get('layout'), dict):
        raise ValueError('Request body must be a JSON object with a "layout" object')

    width = int(obj.get('width', 640))
    height = int(obj.get('height', 480))
    if width < 0 or height < 0:
        raise ValueError(f'Preview size must not be negative, got {width}x{height}')

    with warnings.catch_warnings():
        warnings.simplefilter('ignore')
        root = Panel.from_dict(obj['layout'])
        placements = list(layout(root, Rectangle(0, 0, width, height)))
    return placements, width, height


def _bad_request(e):
    return Response(str(e), status=400, mimetype='text/plain')


@app.route('/preview.svg', methods=['POST'])
async def preview():
    obj = await request.get_json()
    try:
        placements, width, height = resolve(obj)
    except (KeyError, TypeError, ValueError, UnresolvedVariableError) as e:
        return _bad_request(e)
    return Response(str(to_svg(placements, width, height)), mimetype='image/svg+xml')


@app.route('/rects.json', methods=['POST'])
async def rects():
    obj = await request.get_json()
    try:
        placements, _width, _height = resolve(obj)
    except (KeyError, TypeError, ValueError, UnresolvedVariableError) as e:
        return _bad_request(e)
    return jsonify([{'name': p.component.name, 'depth': p.depth,
             'x': p.rect.x, 'y': p.rect.y, 'width': p.rect.width, 'height': p.rect.height}
            for p in placements])


if __name__ == '__main__':
    app.run()

