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

from scalemenu.utils import Rectangle


@pytest.fixture()
def sample_layout():
    return {
        'name': 'root',
        'children': [
            {'name': 'a', 'column': 0, 'row': 0},
            {'name': 'b', 'column': 1, 'row': 0},
            {'name': 'c', 'x': 'CENTERX', 'y': '10', 'width': 'width/4', 'height': '20'},
        ]}


@pytest.fixture()
def layout_file(tmp_path):
    def write(obj, name='layout.json'):
        path = tmp_path / name
        path.write_text(json.dumps(obj))
        return path
    return write


@pytest.fixture()
def window():
    return Rectangle(0, 0, 400, 300)

