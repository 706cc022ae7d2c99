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

"""Tests for clock implementations."""

import time

import pytest

from actioncache.utils.clock import Clock, ManualClock, SystemClock


class TestManualClock:
    def test_starts_at_given_time(self):
        assert ManualClock(start=42.0).now() == 42.0

    def test_advance(self):
        clock = ManualClock()
        assert clock.advance(1.5) == 1.5
        assert clock.now() == 1.5

    def test_cannot_go_backwards(self):
        with pytest.raises(ValueError):
            ManualClock().advance(-1)

    def test_set(self):
        clock = ManualClock()
        clock.set(99)
        assert clock.now() == 99.0


def test_system_clock_tracks_wall_time():
    before = time.time()
    now = SystemClock().now()
    assert before <= now <= time.time()


def test_clocks_satisfy_protocol():
    assert isinstance(SystemClock(), Clock)
    assert isinstance(ManualClock(), Clock)
