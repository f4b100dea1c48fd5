"""
Data structures for function signatures and lint results.

All structures are immutable and deterministic.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Union


@dataclass(frozen=True)
class Configuration:
    """Per-run rule settings. Built once, never mutated."""

    ignore_function_names: FrozenSet[str] = frozenset()
    ignore_method_names:   FrozenSet[str] = frozenset()
    ignore_constructors:   bool = True
    ignore_single_param:   bool = True
    ignore_no_params:      bool = True
    ignore_test_files:     bool = True
    ignore_file_patterns:  Tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceLocation:
    """1-based line and column."""

    line: int
    column: int


class ParamKind(Enum):
    PLAIN          = "plain"
    OBJECT_PATTERN = "object"
    ARRAY_PATTERN  = "array"
    REST           = "rest"
    DEFAULTED      = "defaulted"
    THIS           = "this"
    UNKNOWN        = "unknown"


class ParentKind(Enum):
    CONSTRUCTOR         = "constructor"
    METHOD              = "method"
    CLASS_PROPERTY      = "class_property"
    PROPERTY_VALUE      = "property_value"
    VARIABLE_DECLARATOR = "variable_declarator"
    ASSIGNMENT          = "assignment"
    OTHER               = "other"


# Parents whose key is matched against ignore_method_names
MEMBER_PARENTS = frozenset({
    ParentKind.CONSTRUCTOR,
    ParentKind.METHOD,
    ParentKind.CLASS_PROPERTY,
    ParentKind.PROPERTY_VALUE,
})


@dataclass(frozen=True)
class Param:
    """
    One entry of a parameter list.

    For DEFAULTED parameters `target` is the shape of the left-hand side
    (PLAIN, OBJECT_PATTERN or ARRAY_PATTERN).
    """

    kind: ParamKind
    name: Optional[str]
    location: SourceLocation
    target: Optional[ParamKind] = None


@dataclass(frozen=True)
class ParentContext:
    """
    Syntactic parent of a function-like node.

    `name` is the resolved key (member parents) or the identifier
    target (declarator/assignment parents), None when unavailable.
    """

    kind: ParentKind
    name: Optional[str] = None

    @property
    def is_member(self) -> bool:
        return self.kind in MEMBER_PARENTS


@dataclass(frozen=True)
class FunctionSite:
    """A function-like node reduced to what the rule needs."""

    node_type: str
    own_name: Optional[str]
    params: Tuple[Param, ...]
    parent: ParentContext
    location: SourceLocation

    @property
    def is_anonymous(self) -> bool:
        return self.own_name is None

    @property
    def display_name(self) -> str:
        """Own name, else variable declarator name, else a placeholder."""
        if self.own_name:
            return self.own_name
        if self.parent.kind == ParentKind.VARIABLE_DECLARATOR and self.parent.name:
            return self.parent.name
        return "function"


@dataclass(frozen=True)
class Compliant:
    pass


COMPLIANT = Compliant()


@dataclass(frozen=True)
class Violation:
    anchor:        SourceLocation
    function_name: str
    param_names:   Tuple[str, ...]


Classification = Union[Compliant, Violation]


@dataclass(frozen=True)
class Diagnostic:
    """One reported violation, ready for output."""

    path:       str
    location:   SourceLocation
    rule_id:    str
    message_id: str
    data:       Dict[str, str] = field(hash=False)
    message:    str

    def to_dict(self) -> Dict[str, object]:
        return {
            "path": self.path,
            "line": self.location.line,
            "column": self.location.column,
            "ruleId": self.rule_id,
            "messageId": self.message_id,
            "data": dict(self.data),
            "message": self.message,
        }
