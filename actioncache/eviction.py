# Copyright 2026 Firefly Software Solutions Inc
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

"""Size-bounded eviction for per-key pattern lists."""

from __future__ import annotations

from typing import List

from actioncache.patterns import CachedPattern


def evict_lowest_confidence(patterns: List[CachedPattern], max_size: int) -> List[CachedPattern]:
    """
    Trim ``patterns`` in place down to ``max_size`` entries.

    The list is stably sorted by confidence, highest first, and entries are
    dropped from the tail. Among equal confidences the most recently
    inserted entry goes first. Called right after each insertion, so at
    most one entry is dropped per call.

    Returns:
        The evicted patterns (empty if the list was within bounds)
    """
    if len(patterns) <= max_size:
        return []

    patterns.sort(key=lambda p: p.confidence, reverse=True)

    evicted: List[CachedPattern] = []
    while len(patterns) > max_size:
        evicted.append(patterns.pop())
    return evicted
