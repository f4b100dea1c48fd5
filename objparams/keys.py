"""
Property key resolution.

Turns the key of an object property, class member or class field into
a comparable string. Pure helpers over tree-sitter nodes.

Examples:
    foo          -> "foo"
    "foo"        -> "foo"
    0            -> "0"
    0x10         -> "16"
    #foo         -> "#foo"
    ['foo']      -> "foo"
    [someExpr]   -> None
"""
import math
from decimal import Decimal
from typing import Optional

from tree_sitter import Node

IDENTIFIER_KEYS = {"identifier", "property_identifier"}
PRIVATE_KEYS = {"private_property_identifier"}
LITERAL_KEYS = {"string", "number", "true", "false", "null"}


def node_text(node: Node) -> str:
    return node.text.decode("utf-8")


def resolve_key_name(key: Optional[Node]) -> Optional[str]:
    """Return the canonical name of a key node, or None if it has none."""
    if key is None:
        return None

    if key.type in IDENTIFIER_KEYS:
        return node_text(key)

    if key.type in LITERAL_KEYS:
        return literal_value(key)

    if key.type in PRIVATE_KEYS:
        name = node_text(key)
        # Older grammars leave the marker off the node text
        return name if name.startswith("#") else f"#{name}"

    if key.type == "computed_property_name":
        inner = [child for child in key.named_children if child.type != "comment"]
        if len(inner) == 1 and inner[0].type in LITERAL_KEYS:
            return literal_value(inner[0])

    return None


def literal_value(node: Node) -> Optional[str]:
    """String form of a literal, the way JavaScript would coerce it."""
    if node.type == "string":
        return _string_value(node)
    if node.type == "number":
        return _number_value(node_text(node))
    if node.type in ("true", "false", "null"):
        return node.type
    return None


def _string_value(node: Node) -> str:
    parts = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(node_text(child))
        elif child.type == "escape_sequence":
            parts.append(_unescape(node_text(child)))
    # \uD83D\uDE00 escapes arrive as two halves of a surrogate pair
    return "".join(parts).encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


SINGLE_CHAR_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
}

LINE_CONTINUATIONS = {"\n", "\r", "\r\n", "\u2028", "\u2029"}


def _unescape(sequence: str) -> str:
    """
    Decode one JavaScript escape sequence.

    Examples:
        \\n       -> newline
        \\x41     -> "A"
        \\u0041   -> "A"
        \\u{61}   -> "a"
        \\<newline> -> ""
        \\q       -> "q"
    """
    body = sequence[1:]

    if body in SINGLE_CHAR_ESCAPES:
        return SINGLE_CHAR_ESCAPES[body]
    if body in LINE_CONTINUATIONS:
        return ""

    try:
        if body.startswith("u{") and body.endswith("}"):
            return chr(int(body[2:-1], 16))
        if body[:1] in ("u", "x") and len(body) > 1:
            return chr(int(body[1:], 16))
        if body.isdigit() and all(digit in "01234567" for digit in body):
            # Legacy octal escape
            return chr(int(body, 8))
    except ValueError:
        return body

    return body


def _integer_value(text: str) -> int:
    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return int(lowered, 0)
    if len(text) > 1 and text.startswith("0") and all(digit in "01234567" for digit in text):
        # Legacy octal literal
        return int(text, 8)
    return int(text)


def _number_value(raw: str) -> str:
    """
    Normalize a numeric literal to the string JavaScript coerces it to.

    Examples:
        "0"        -> "0"
        "1_000"    -> "1000"
        "0x1F"     -> "31"
        "1.50"     -> "1.5"
        "2.0"      -> "2"
        "1e-7"     -> "1e-7"
        "0.000001" -> "0.000001"
        "1e21"     -> "1e+21"
        "10n"      -> "10"
    """
    text = raw.replace("_", "")

    if text.endswith("n"):
        # BigInt keys keep every digit
        try:
            return str(_integer_value(text[:-1]))
        except ValueError:
            return raw

    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")) or (
        len(text) > 1 and text.startswith("0") and text.isdigit()
    ):
        try:
            value = float(_integer_value(text))
        except OverflowError:
            value = math.inf
        except ValueError:
            return raw
        return format_number(value)

    try:
        value = float(text)
    except ValueError:
        return raw
    return format_number(value)


def format_number(value: float) -> str:
    """
    Format a float the way JavaScript's String(number) does.

    Positional notation for decimal exponents -7 < e < 21, exponential
    notation otherwise, with an unpadded signed exponent.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""

    # Shortest round-trip digits, trailing zeros dropped
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped

    k = len(digits)
    n = exponent + k  # value == 0.<digits> * 10**n

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
