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
Cache key and task keyword derivation.

Two pure, total functions sit at the bottom of the cache:

- ``derive_cache_key`` turns a page URL into ``host + path``, bounded in
  length. Query strings, fragments, ports and credentials never reach the
  key, so ``https://github.com/user?tab=repos`` and
  ``https://github.com/user#top`` share one pattern list.
- ``extract_keywords`` turns a task description into at most five
  discriminating lowercase tokens.

Neither function raises. Input that does not parse as a URL falls back to
the raw string, truncated.
"""

from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple
from urllib.parse import urlsplit

DEFAULT_KEY_MAX_LENGTH = 100
DEFAULT_PATTERN_PATH_LENGTH = 50
DEFAULT_MAX_KEYWORDS = 5
MIN_KEYWORD_LENGTH = 4

# Keyword used when a task has no text at all
EMPTY_TASK_KEYWORD = "<empty-task>"

_WHITESPACE = re.compile(r"\s+")


def _split_host_path(page_identifier: str) -> Optional[Tuple[str, str]]:
    """Return ``(hostname, path)`` or None if the identifier is not a URL."""
    try:
        parsed = urlsplit(page_identifier)
        hostname = parsed.hostname or ""
    except ValueError:
        return None

    if not parsed.scheme or not (parsed.netloc or parsed.path):
        return None

    path = parsed.path
    if parsed.netloc and not path:
        path = "/"
    return hostname, path


def derive_cache_key(page_identifier: str, max_length: int = DEFAULT_KEY_MAX_LENGTH) -> str:
    """
    Derive the cache key for a page.

    Args:
        page_identifier: Page URL (anything else falls back to the raw string)
        max_length: Maximum key length

    Returns:
        ``hostname + path`` truncated to ``max_length``

    Example:
        >>> derive_cache_key("https://GitHub.com:443/octocat?tab=repos")
        'github.com/octocat'
    """
    page_identifier = str(page_identifier)
    parts = _split_host_path(page_identifier)
    if parts is None:
        return page_identifier[:max_length]
    hostname, path = parts
    return f"{hostname}{path}"[:max_length]


def url_to_pattern(page_identifier: str, path_length: int = DEFAULT_PATTERN_PATH_LENGTH) -> str:
    """Host plus a shortened path prefix, used as page-matcher source text."""
    page_identifier = str(page_identifier)
    parts = _split_host_path(page_identifier)
    if parts is None:
        return page_identifier[:path_length]
    hostname, path = parts
    return f"{hostname}{path[:path_length]}"


def compile_page_matcher(page_identifier: str, path_length: int = DEFAULT_PATTERN_PATH_LENGTH) -> Pattern[str]:
    """Compile a regex that matches keys/URLs sharing this page's host and path prefix."""
    return re.compile(re.escape(url_to_pattern(page_identifier, path_length)))


def extract_keywords(
    task: str,
    max_keywords: int = DEFAULT_MAX_KEYWORDS,
    min_length: int = MIN_KEYWORD_LENGTH,
) -> List[str]:
    """
    Extract discriminating tokens from a task description.

    Lower-cases the text, splits on whitespace, drops tokens shorter than
    ``min_length`` and keeps the first ``max_keywords`` in original order.

    Example:
        >>> extract_keywords("Open the GitHub link in my portfolio")
        ['open', 'github', 'link', 'portfolio']
    """
    tokens = str(task or "").lower().split()
    return [t for t in tokens if len(t) >= min_length][:max_keywords]


def keywords_or_placeholder(task: str, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> List[str]:
    """
    Keywords for a stored pattern, never empty.

    When no token is long enough ("go to it"), the whole normalized task
    becomes the single keyword, so only tasks containing that phrase match.
    A blank task gets ``EMPTY_TASK_KEYWORD``.
    """
    keywords = extract_keywords(task, max_keywords=max_keywords)
    if keywords:
        return keywords

    normalized = _WHITESPACE.sub(" ", str(task or "")).strip().lower()
    return [normalized or EMPTY_TASK_KEYWORD]
