"""
Unit tests for file-level exemptions.
"""
import sys
import time
from pathlib import Path, PureWindowsPath

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from objparams.data_structures import Configuration
from objparams.exemptions import glob_match, is_file_exempt, is_test_file


class TestIsTestFile:

    def test_test_and_spec_suffixes(self):
        assert is_test_file("foo.test.ts")
        assert is_test_file("src/bar.spec.jsx")
        assert is_test_file("src/deep/baz.test.mjs")

    def test_case_insensitive(self):
        assert is_test_file("Foo.TEST.TS")

    def test_non_test_files(self):
        assert not is_test_file("foo.ts")
        assert not is_test_file("testing.js")
        assert not is_test_file("foo.test.py")
        assert not is_test_file("foo.test.ts.bak")

    def test_only_trailing_segment_counts(self):
        assert not is_test_file("src/a.test.js/index.js")

    def test_windows_separators(self):
        assert is_test_file(PureWindowsPath("src\\foo.spec.ts"))


class TestGlobMatch:

    def test_double_star_across_segments(self):
        assert glob_match("src/legacy/x.js", "**/legacy/**")
        assert glob_match("legacy/x.js", "**/legacy/**")
        assert glob_match("a/foo/b/c/bar.js", "**/foo/**/bar.js")
        assert glob_match("a/foo/bar.js", "**/foo/**/bar.js")

    def test_single_star_stays_in_segment(self):
        assert glob_match("test-utils.js", "test-*.js")
        assert glob_match("src/foo/bar.js", "**/foo/*.js")
        assert not glob_match("src/foo/sub/bar.js", "**/foo/*.js")
        assert not glob_match("src/test-utils.js", "test-*.js")

    def test_question_mark(self):
        assert glob_match("src/a1.js", "src/a?.js")
        assert not glob_match("src/a12.js", "src/a?.js")

    def test_case_sensitive(self):
        assert not glob_match("src/Legacy/x.js", "**/legacy/**")

    def test_malformed_pattern_does_not_raise(self):
        assert not glob_match("src/a.js", "src/[")
        assert not glob_match("src/a.js", "")


    def test_many_double_stars_on_deep_path(self):
        pattern = "/".join(["**", "a"] * 15) + "/**/x.js"
        path = "/".join(["a"] * 40) + "/y.js"
        start = time.monotonic()
        assert not glob_match(path, pattern)
        assert glob_match(path[:-4] + "x.js", pattern)
        assert time.monotonic() - start < 2.0


class TestIsFileExempt:

    def test_test_files_exempt_by_default(self):
        assert is_file_exempt("src/foo.test.ts", Configuration())

    def test_test_files_checked_when_disabled(self):
        config = Configuration(ignore_test_files=False)
        assert not is_file_exempt("src/foo.test.ts", config)

    def test_patterns(self):
        config = Configuration(ignore_file_patterns=("**/legacy/**", "scripts/*.js"))
        assert is_file_exempt("src/legacy/x.js", config)
        assert is_file_exempt("scripts/build.js", config)
        assert not is_file_exempt("src/app.js", config)

    def test_patterns_apply_without_test_heuristic(self):
        config = Configuration(ignore_test_files=False, ignore_file_patterns=("**/legacy/**",))
        assert is_file_exempt("src/legacy/x.js", config)
        assert not is_file_exempt("src/x.test.js", config)

    def test_no_exemption_by_default(self):
        assert not is_file_exempt("src/app.js", Configuration())
