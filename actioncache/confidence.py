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

"""
Confidence model for cached patterns.

Confidence is the historical success rate discounted by how long the
pattern has gone unused:

    confidence = success_rate * (0.5 + 0.5 * exp(-elapsed / decay_seconds))

A pattern used moments ago keeps its full success rate. One left idle for
days approaches half of it, so it drops below the reuse threshold without
being thrown away.
"""

from __future__ import annotations

import math

from actioncache.patterns import CachedPattern

DEFAULT_DECAY_SECONDS = 24 * 60 * 60


def decay_factor(elapsed_seconds: float, decay_seconds: float = DEFAULT_DECAY_SECONDS) -> float:
    """Exponential staleness factor in (0, 1]. Negative elapsed counts as zero."""
    return math.exp(-max(elapsed_seconds, 0.0) / decay_seconds)


def compute_confidence(
    success_count: int,
    failure_count: int,
    elapsed_seconds: float,
    decay_seconds: float = DEFAULT_DECAY_SECONDS,
) -> float:
    """
    Compute confidence from outcome counts and idle time.

    Args:
        success_count: Successful executions
        failure_count: Failed executions
        elapsed_seconds: Time since the pattern was last used
        decay_seconds: Time constant of the exponential decay

    Returns:
        Confidence clamped to [0, 1]
    """
    total = success_count + failure_count
    if total <= 0:
        return 0.0

    success_rate = success_count / total
    confidence = success_rate * (0.5 + 0.5 * decay_factor(elapsed_seconds, decay_seconds))
    return min(1.0, max(0.0, confidence))


def apply_outcome(
    pattern: CachedPattern,
    success: bool,
    now: float,
    decay_seconds: float = DEFAULT_DECAY_SECONDS,
) -> float:
    """
    Record an execution outcome on ``pattern`` and recompute its confidence.

    Decay is measured from the pattern's previous ``last_used``; ``last_used``
    moves to ``now`` only after the new confidence is computed.

    Returns:
        The updated confidence
    """
    if success:
        pattern.success_count += 1
    else:
        pattern.failure_count += 1

    pattern.confidence = compute_confidence(
        pattern.success_count,
        pattern.failure_count,
        now - pattern.last_used,
        decay_seconds,
    )
    pattern.last_used = now
    return pattern.confidence
