"""
File-level exemptions.

A file is exempt when it looks like a test file or when its path
matches one of the configured glob patterns.
"""
import fnmatch
import re
from functools import lru_cache
from pathlib import PurePath
from typing import Iterable, Union

from ..data_structures import Configuration

TEST_FILE_PATTERN = re.compile(
    r"\.(test|spec)\.(js|jsx|ts|tsx|mjs|cjs|mts|cts)$",
    re.IGNORECASE,
)


def normalize_path(path: Union[str, PurePath]) -> str:
    text = str(path).replace("\\", "/")
    while text.startswith("./"):
        text = text[2:]
    return text


def is_test_file(path: Union[str, PurePath]) -> bool:
    """Check the trailing path segment, e.g. foo.test.ts, bar.spec.jsx."""
    name = normalize_path(path).rsplit("/", 1)[-1]
    return TEST_FILE_PATTERN.search(name) is not None


def glob_match(path: Union[str, PurePath], pattern: str) -> bool:
    """
    Match a path against a glob pattern segment by segment.

    - * and ? match within a single path segment
    - ** matches zero or more whole segments

    Examples:
        glob_match("src/legacy/x.js", "**/legacy/**")       -> True
        glob_match("a/foo/b/c/bar.js", "**/foo/**/bar.js")  -> True
        glob_match("src/foo/sub/bar.js", "**/foo/*.js")     -> False
    """
    pattern_parts = normalize_path(pattern).split("/")
    path_parts = normalize_path(path).split("/")

    @lru_cache(maxsize=None)
    def match_from(p_idx: int, path_idx: int) -> bool:
        if p_idx >= len(pattern_parts):
            return path_idx >= len(path_parts)

        current = pattern_parts[p_idx]

        if current == "**":
            if p_idx == len(pattern_parts) - 1:
                return True
            # Zero or more segments
            for i in range(path_idx, len(path_parts) + 1):
                if match_from(p_idx + 1, i):
                    return True
            return False

        if path_idx >= len(path_parts):
            return False

        if fnmatch.fnmatchcase(path_parts[path_idx], current):
            return match_from(p_idx + 1, path_idx + 1)

        return False

    return match_from(0, 0)


def matches_any_pattern(path: Union[str, PurePath], patterns: Iterable[str]) -> bool:
    return any(glob_match(path, pattern) for pattern in patterns)


def is_file_exempt(path: Union[str, PurePath], config: Configuration) -> bool:
    """
    Decide whether a whole file is out of scope.

    The result only depends on the path and the run's configuration, so
    callers compute it once when entering a file.
    """
    if config.ignore_test_files and is_test_file(path):
        return True

    if config.ignore_file_patterns:
        return matches_any_pattern(path, config.ignore_file_patterns)

    return False
