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

"""Tests for CachedPattern."""

from __future__ import annotations

from actioncache.keys import compile_page_matcher
from actioncache.patterns import INITIAL_CONFIDENCE, CachedPattern


def make_pattern(**overrides) -> CachedPattern:
    fields = dict(
        id="github.com/octocat_1700000000000",
        label="pattern_github",
        page_matcher=compile_page_matcher("https://github.com/octocat"),
        task_keywords=("github", "portfolio"),
        actions=({"action": "click", "target": {"selector": "#repo"}},),
        last_used=1000.0,
        created_at=1000.0,
    )
    fields.update(overrides)
    return CachedPattern(**fields)


class TestCachedPattern:
    def test_defaults(self):
        pattern = make_pattern()
        assert pattern.success_count == 1
        assert pattern.failure_count == 0
        assert pattern.confidence == INITIAL_CONFIDENCE == 0.85
        assert pattern.total_attempts == 1
        assert pattern.success_rate == 1.0

    def test_matches_task_by_substring(self):
        pattern = make_pattern()
        assert pattern.matches_task("please open my github")
        assert pattern.matches_task("my githubprofile")
        assert not pattern.matches_task("open linkedin")

    def test_freshness(self):
        pattern = make_pattern()
        assert pattern.is_fresh(now=1299.0, ttl_seconds=300)
        assert not pattern.is_fresh(now=1300.0, ttl_seconds=300)

    def test_eligibility_requires_confidence_above_threshold(self):
        pattern = make_pattern()
        assert not pattern.is_eligible("open github", 1000.0, 0.85, 300)
        pattern.confidence = 0.9
        assert pattern.is_eligible("open github", 1000.0, 0.85, 300)

    def test_matches_page_is_informational(self):
        pattern = make_pattern()
        assert pattern.matches_page("https://github.com/octocat/repos")
        assert not pattern.matches_page("https://gitlab.com/octocat")

    def test_replay_actions_is_a_deep_copy(self):
        pattern = make_pattern()
        replay = pattern.replay_actions()
        replay[0]["target"]["selector"] = "#changed"
        replay.append({"action": "scroll"})
        assert pattern.actions[0]["target"]["selector"] == "#repo"
        assert len(pattern.actions) == 1

    def test_to_dict(self):
        data = make_pattern().to_dict()
        assert data["label"] == "pattern_github"
        assert data["task_keywords"] == ["github", "portfolio"]
        assert data["page_matcher"] == compile_page_matcher("https://github.com/octocat").pattern
        assert data["confidence"] == 0.85
