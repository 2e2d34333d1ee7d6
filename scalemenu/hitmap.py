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

import rtree.index

from .panel import Placement


class HitMap:
    """ Spatial index over the rectangles of one layout pass, used to find the component under the mouse pointer.
    Components painted later lie on top of components painted earlier. Empty rectangles are never hit. """

    def __init__(self):
        self._index = rtree.index.Index()
        self._clients = {}
        self._next_id = 0

    @classmethod
    def build(kls, placements):
        """ Build a hit map from :py:class:`~.panel.Placement` objects or ``(client, rect)`` tuples in paint order. """
        hits = kls()
        for item in placements:
            if isinstance(item, Placement):
                hits.insert(item.component, item.rect)
            else:
                hits.insert(*item)
        return hits

    def insert(self, client, rect):
        if rect.is_empty:
            return
        obj_id = self._next_id
        self._next_id += 1
        self._clients[obj_id] = client, rect
        self._index.insert(obj_id, (rect.x, rect.y, rect.right, rect.bottom))

    def all_at(self, px, py):
        """ Return all clients whose rectangle contains ``(px, py)``, bottom-most first. """
        ids = sorted(self._index.intersection((px, py, px, py)))
        return [self._clients[i][0] for i in ids if self._clients[i][1].contains(px, py)]

    def at(self, px, py):
        """ Return the top-most client at ``(px, py)`` or ``None``. """
        hits = self.all_at(px, py)
        return hits[-1] if hits else None

    def __len__(self):
        return len(self._clients)

