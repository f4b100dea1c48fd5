"""
Tree-sitter front end.

Parses JavaScript/TypeScript source, walks function-like nodes in
document order and reduces each one to a FunctionSite:
- parameters as a closed set of shapes (ParamKind)
- syntactic parent as a closed set of contexts (ParentKind)

Nothing here decides compliance; that is the classifier's job.
"""
from functools import lru_cache
from pathlib import PurePath
from typing import Iterator, List, Optional, Tuple

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from .data_structures import (
    FunctionSite,
    Param,
    ParamKind,
    ParentContext,
    ParentKind,
    SourceLocation,
)
from .keys import node_text, resolve_key_name

JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"
TSX        = "tsx"

LANGUAGE_BY_SUFFIX = {
    ".js":  JAVASCRIPT,
    ".jsx": JAVASCRIPT,
    ".mjs": JAVASCRIPT,
    ".cjs": JAVASCRIPT,
    ".ts":  TYPESCRIPT,
    ".mts": TYPESCRIPT,
    ".cts": TYPESCRIPT,
    ".tsx": TSX,
}

SUPPORTED_SUFFIXES = frozenset(LANGUAGE_BY_SUFFIX)

FUNCTION_NODE_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",  # function expressions in grammars before 0.21
    "generator_function",
    "arrow_function",
    "method_definition",
})

CLASS_FIELD_TYPES = {"field_definition", "public_field_definition"}
ASSIGNMENT_TYPES = {"assignment_expression", "augmented_assignment_expression"}
TS_PARAMETER_TYPES = {"required_parameter", "optional_parameter"}
SKIPPED_CHILDREN = {"comment", "decorator"}


class ParseError(ValueError):
    """Source text contains syntax errors."""


@lru_cache(maxsize=None)
def get_language(name: str) -> Language:
    if name == TYPESCRIPT:
        return Language(tree_sitter_typescript.language_typescript())
    if name == TSX:
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_javascript.language())


def language_for_path(path: str) -> str:
    return LANGUAGE_BY_SUFFIX.get(PurePath(path).suffix.lower(), JAVASCRIPT)


def parse_source(source: str, path: str = "input.js") -> Tree:
    """Parse source with the grammar matching the file extension."""
    parser = Parser(get_language(language_for_path(path)))
    return parser.parse(source.encode("utf-8"))


def parse_checked(source: str, path: str = "input.js") -> Tree:
    """Parse source, raising ParseError if the tree has error nodes."""
    tree = parse_source(source, path)
    if tree.root_node.has_error:
        raise ParseError(f"Could not parse {path}")
    return tree


def location_of(node: Node) -> SourceLocation:
    row, column = node.start_point[0], node.start_point[1]
    return SourceLocation(line=row + 1, column=column + 1)


def iter_function_nodes(root: Node) -> Iterator[Node]:
    """Yield function-like nodes depth-first, in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in FUNCTION_NODE_TYPES:
            yield node
        stack.extend(reversed(node.named_children))


def extract_sites(tree: Tree) -> Iterator[FunctionSite]:
    for node in iter_function_nodes(tree.root_node):
        yield build_site(node)


def build_site(node: Node) -> FunctionSite:
    return FunctionSite(
        node_type=node.type,
        own_name=_own_name(node),
        params=tuple(build_param(param) for param in _parameter_nodes(node)),
        parent=parent_context(node),
        location=location_of(node),
    )


def _own_name(node: Node) -> Optional[str]:
    # A method's name field is its key, not a bound name
    if node.type in ("method_definition", "arrow_function"):
        return None
    name = node.child_by_field_name("name")
    if name is not None and name.type == "identifier":
        return node_text(name)
    return None


def _parameter_nodes(node: Node) -> List[Node]:
    if node.type == "arrow_function":
        single = node.child_by_field_name("parameter")
        if single is not None:
            return [single]

    params = node.child_by_field_name("parameters")
    if params is None:
        return []
    return [child for child in params.named_children if child.type not in SKIPPED_CHILDREN]


# Parameters

def build_param(node: Node) -> Param:
    """
    Classify one parameter node by shape.

    JavaScript grammar:  a | {a} | [a] | ...a | a = 1
    TypeScript grammar wraps each of these in required_parameter /
    optional_parameter, with the default in a `value` field and the
    `this: T` annotation as a `this` pattern.
    """
    location = location_of(node)

    if node.type in TS_PARAMETER_TYPES:
        pattern = node.child_by_field_name("pattern")
        if pattern is None:
            return Param(kind=ParamKind.UNKNOWN, name=node_text(node), location=location)
        if pattern.type == "this":
            return Param(kind=ParamKind.THIS, name=None, location=location)
        kind, name = _pattern_shape(pattern)
        if node.child_by_field_name("value") is not None:
            return Param(kind=ParamKind.DEFAULTED, name=name, location=location, target=kind)
        return Param(kind=kind, name=name, location=location)

    if node.type == "assignment_pattern":
        left = node.child_by_field_name("left")
        if left is None:
            return Param(kind=ParamKind.UNKNOWN, name=node_text(node), location=location)
        kind, name = _pattern_shape(left)
        return Param(kind=ParamKind.DEFAULTED, name=name, location=location, target=kind)

    kind, name = _pattern_shape(node)
    return Param(kind=kind, name=name, location=location)


def _pattern_shape(pattern: Node) -> Tuple[ParamKind, Optional[str]]:
    if pattern.type in ("identifier", "undefined"):
        return ParamKind.PLAIN, node_text(pattern)
    if pattern.type == "object_pattern":
        return ParamKind.OBJECT_PATTERN, None
    if pattern.type == "array_pattern":
        return ParamKind.ARRAY_PATTERN, None
    if pattern.type == "rest_pattern":
        return ParamKind.REST, None
    if pattern.type == "this":
        return ParamKind.THIS, None
    return ParamKind.UNKNOWN, node_text(pattern)


# Parent context

def _unwrap_parens(node: Node) -> Tuple[Node, Optional[Node]]:
    """Climb out of parenthesized expressions; returns (child, parent)."""
    child, parent = node, node.parent
    while parent is not None and parent.type == "parenthesized_expression":
        child, parent = parent, parent.parent
    return child, parent


def _is_class_constructor(method: Node) -> bool:
    parent = method.parent
    if parent is None or parent.type != "class_body":
        return False
    if any(child.type == "static" for child in method.children):
        return False
    key = method.child_by_field_name("name")
    if key is None or key.type == "computed_property_name":
        return False
    return resolve_key_name(key) == "constructor"


def _identifier_name(node: Optional[Node]) -> Optional[str]:
    if node is not None and node.type == "identifier":
        return node_text(node)
    return None


def parent_context(node: Node) -> ParentContext:
    """
    Map a function-like node's syntactic parent to a ParentContext.

    Precedence follows the grammar: method definitions carry their own
    key, everything else is decided by the enclosing node.
    """
    if node.type == "method_definition":
        key_name = resolve_key_name(node.child_by_field_name("name"))
        if _is_class_constructor(node):
            return ParentContext(kind=ParentKind.CONSTRUCTOR, name=key_name)
        return ParentContext(kind=ParentKind.METHOD, name=key_name)

    child, parent = _unwrap_parens(node)
    if parent is None:
        return ParentContext(kind=ParentKind.OTHER)

    if parent.type == "pair" and parent.child_by_field_name("value") == child:
        key_name = resolve_key_name(parent.child_by_field_name("key"))
        return ParentContext(kind=ParentKind.PROPERTY_VALUE, name=key_name)

    if parent.type in CLASS_FIELD_TYPES and parent.child_by_field_name("value") == child:
        key = parent.child_by_field_name("property")
        if key is None:
            key = parent.child_by_field_name("name")
        return ParentContext(kind=ParentKind.CLASS_PROPERTY, name=resolve_key_name(key))

    if parent.type == "variable_declarator" and parent.child_by_field_name("value") == child:
        target = _identifier_name(parent.child_by_field_name("name"))
        return ParentContext(kind=ParentKind.VARIABLE_DECLARATOR, name=target)

    if parent.type in ASSIGNMENT_TYPES and parent.child_by_field_name("right") == child:
        target = _identifier_name(parent.child_by_field_name("left"))
        return ParentContext(kind=ParentKind.ASSIGNMENT, name=target)

    return ParentContext(kind=ParentKind.OTHER)
