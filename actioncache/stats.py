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

"""Aggregate statistics over the pattern store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence

from actioncache.patterns import CachedPattern


@dataclass(frozen=True)
class CacheStats:
    """
    Snapshot of cache contents.

    Attributes:
        total_patterns: Patterns across all keys
        total_hits: Sum of success counts across all patterns
        cache_size: Number of distinct cache keys
        estimated_hit_rate: total_hits / total_patterns, or 0 when empty
    """
    total_patterns: int = 0
    total_hits: int = 0
    cache_size: int = 0
    estimated_hit_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_patterns": self.total_patterns,
            "total_hits": self.total_hits,
            "cache_size": self.cache_size,
            "estimated_hit_rate": self.estimated_hit_rate,
        }


def compute_stats(store: Mapping[str, Sequence[CachedPattern]]) -> CacheStats:
    """Walk every pattern once and aggregate counts. Does not mutate ``store``."""
    total_patterns = 0
    total_hits = 0

    for patterns in store.values():
        total_patterns += len(patterns)
        total_hits += sum(p.success_count for p in patterns)

    return CacheStats(
        total_patterns=total_patterns,
        total_hits=total_hits,
        cache_size=len(store),
        estimated_hit_rate=total_hits / total_patterns if total_patterns > 0 else 0.0,
    )
