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

"""Tests for the confidence model."""

from __future__ import annotations

import math
import random
import re

import pytest

from actioncache.confidence import (
    DEFAULT_DECAY_SECONDS,
    apply_outcome,
    compute_confidence,
    decay_factor,
)
from actioncache.patterns import CachedPattern

DAY = 24 * 60 * 60


def make_pattern(last_used: float = 0.0) -> CachedPattern:
    return CachedPattern(
        id="example.com/_0",
        label="pattern_login",
        page_matcher=re.compile(re.escape("example.com/")),
        task_keywords=("login",),
        actions=({"action": "click", "selector": "#login"},),
        last_used=last_used,
        created_at=last_used,
    )


class TestDecayFactor:
    """Tests for decay_factor."""

    def test_no_elapsed_time(self):
        assert decay_factor(0) == 1.0

    def test_one_time_constant(self):
        assert decay_factor(DAY) == pytest.approx(math.exp(-1))

    def test_negative_elapsed_treated_as_zero(self):
        assert decay_factor(-500) == 1.0

    def test_default_constant_is_one_day(self):
        assert DEFAULT_DECAY_SECONDS == DAY


class TestComputeConfidence:
    """Tests for compute_confidence."""

    def test_fresh_pattern_keeps_success_rate(self):
        assert compute_confidence(3, 1, 0) == pytest.approx(0.75)

    def test_stale_pattern_discounted_toward_half(self):
        expected = 1.0 * (0.5 + 0.5 * math.exp(-1))
        assert compute_confidence(2, 0, DAY) == pytest.approx(expected)

    def test_very_stale_pattern_approaches_half_rate(self):
        assert compute_confidence(4, 0, 365 * DAY) == pytest.approx(0.5)

    def test_no_attempts(self):
        assert compute_confidence(0, 0, 0) == 0.0

    def test_only_failures(self):
        assert compute_confidence(0, 4, 0) == 0.0

    def test_stays_within_unit_interval(self):
        rng = random.Random(7)
        for _ in range(500):
            value = compute_confidence(
                rng.randint(0, 50),
                rng.randint(0, 50),
                rng.uniform(-DAY, 30 * DAY),
            )
            assert 0.0 <= value <= 1.0


class TestApplyOutcome:
    """Tests for apply_outcome."""

    def test_success_increments_and_recomputes(self):
        pattern = make_pattern(last_used=100.0)
        confidence = apply_outcome(pattern, success=True, now=100.0)
        assert pattern.success_count == 2
        assert pattern.failure_count == 0
        assert confidence == pytest.approx(1.0)
        assert pattern.confidence == confidence

    def test_failure_increments_failure_count(self):
        pattern = make_pattern(last_used=100.0)
        apply_outcome(pattern, success=False, now=100.0)
        assert pattern.success_count == 1
        assert pattern.failure_count == 1
        assert pattern.confidence == pytest.approx(0.5)

    def test_decay_uses_previous_last_used(self):
        pattern = make_pattern(last_used=0.0)
        confidence = apply_outcome(pattern, success=True, now=float(DAY))
        assert confidence == pytest.approx(0.5 + 0.5 * math.exp(-1))
        assert pattern.last_used == float(DAY)

    def test_second_update_measures_from_first(self):
        pattern = make_pattern(last_used=0.0)
        apply_outcome(pattern, success=True, now=float(DAY))
        confidence = apply_outcome(pattern, success=True, now=float(DAY))
        assert confidence == pytest.approx(1.0)
