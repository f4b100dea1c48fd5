"""
Unit tests for property key resolution.
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from objparams.data_structures import Configuration
from objparams.keys import resolve_key_name
from objparams.orchestrator import lint_source
from objparams.parser import parse_source

KEY_FIELDS = {
    "pair": "key",
    "method_definition": "name",
    "field_definition": "property",
}


def first_key(code: str):
    """Key node of the first property, method or field in the snippet."""
    stack = [parse_source(code).root_node]
    while stack:
        node = stack.pop()
        if node.type in KEY_FIELDS:
            return node.child_by_field_name(KEY_FIELDS[node.type])
        stack.extend(reversed(node.named_children))
    raise AssertionError(f"No key in: {code}")


def key_name(code: str):
    return resolve_key_name(first_key(code))


class TestResolveKeyName:

    def test_identifier(self):
        assert key_name("({ foo: 1 })") == "foo"
        assert key_name("class C { run() {} }") == "run"

    def test_string_literal(self):
        assert key_name("({ 'foo': 1 })") == "foo"
        assert key_name('({ "foo bar": 1 })') == "foo bar"

    def test_string_escapes(self):
        assert key_name(r"({ 'a\u0041': 1 })") == "aA"

    def test_numeric_literal(self):
        assert key_name("({ 0: 1 })") == "0"
        assert key_name("class Arr { 42(a, b) {} }") == "42"

    def test_numeric_forms_are_normalized(self):
        assert key_name("({ 0x10: 1 })") == "16"
        assert key_name("({ 1.50: 1 })") == "1.5"
        assert key_name("({ 2.0: 1 })") == "2"
        assert key_name("({ 1e3: 1 })") == "1000"
        assert key_name("({ 1_000: 1 })") == "1000"

    def test_private_name(self):
        assert key_name("class C { #secret(a, b) {} }") == "#secret"
        assert key_name("class C { #field = 1 }") == "#field"

    def test_computed_literal(self):
        assert key_name("({ ['foo']: 1 })") == "foo"
        assert key_name("({ [0]: 1 })") == "0"
        assert key_name("({ [true]: 1 })") == "true"
        assert key_name("({ [null]: 1 })") == "null"

    def test_computed_expression_has_no_name(self):
        assert key_name("({ [foo]: 1 })") is None
        assert key_name("({ ['a' + 'b']: 1 })") is None
        assert key_name("({ [`foo`]: 1 })") is None

    def test_missing_key(self):
        assert resolve_key_name(None) is None

    def test_is_pure(self):
        key = first_key("({ ['foo']: 1 })")
        assert resolve_key_name(key) == resolve_key_name(key)

    def test_javascript_string_escapes(self):
        assert key_name(r"({ '\u{61}': 1 })") == "a"
        assert key_name(r"({ '\u{1F600}': 1 })") == "\U0001F600"
        assert key_name(r"({ '😀': 1 })") == "\U0001F600"
        assert key_name(r"({ '\x41\x62': 1 })") == "Ab"
        assert key_name(r"({ 'a\tb': 1 })") == "a\tb"
        assert key_name(r"({ 'a\0': 1 })") == "a\0"
        assert key_name(r"({ '\101': 1 })") == "A"

    def test_identity_escapes(self):
        assert key_name(r"({ '\é': 1 })") == "é"
        assert key_name(r"({ '\q\'': 1 })") == "q'"

    def test_line_continuation(self):
        assert key_name("({ 'ab\\\ncd': 1 })") == "abcd"

    def test_small_and_large_numbers_match_javascript(self):
        assert key_name("({ 1e-7: 1 })") == "1e-7"
        assert key_name("({ 0.000001: 1 })") == "0.000001"
        assert key_name("({ 1.5e-10: 1 })") == "1.5e-10"
        assert key_name("({ 1e21: 1 })") == "1e+21"
        assert key_name("({ 123e20: 1 })") == "1.23e+22"
        assert key_name("({ 1e20: 1 })") == "100000000000000000000"
        assert key_name("({ 12345678901234567890: 1 })") == "12345678901234567000"

    def test_legacy_octal_and_bigint(self):
        assert key_name("({ 010: 1 })") == "8"
        assert key_name("({ 08: 1 })") == "8"
        assert key_name("({ 0b101: 1 })") == "5"
        assert key_name("({ 12345678901234567890n: 1 })") == "12345678901234567890"


class TestMethodKeysEndToEnd:
    """Ignore lists match literal keys written in any equivalent form."""

    def test_ignore_methods_with_coerced_keys(self):
        cases = [
            ("const o = { 1e-7(a, b) {} }", "1e-7"),
            ("const o = { 0.000001(a, b) {} }", "0.000001"),
            (r"const o = { '\u{61}'(a, b) {} }", "a"),
            (r"const o = { '\é'(a, b) {} }", "é"),
        ]
        for code, name in cases:
            config = Configuration(ignore_method_names=frozenset({name}))
            assert lint_source(code, "input.js", config) == [], code
