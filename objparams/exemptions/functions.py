"""
Function-level exemptions.

Each check is a pure function: (site, config) -> bool.
is_function_exempt runs them in order; the first match wins.
"""
from ..data_structures import Configuration, FunctionSite, ParentKind


def ignored_member(site: FunctionSite, config: Configuration) -> bool:
    """
    Class methods, class fields and object properties holding a function.

    Matches the resolved key against ignore_method_names, e.g.
    `class C { ['run'](a, b) {} }` with ignoreMethods ['run'].
    """
    parent = site.parent
    if not parent.is_member:
        return False

    if parent.name is not None and parent.name in config.ignore_method_names:
        return True

    return parent.kind == ParentKind.CONSTRUCTOR and config.ignore_constructors


def ignored_own_name(site: FunctionSite, config: Configuration) -> bool:
    """Named declarations and expressions: `function legacy(a, b) {}`."""
    return site.own_name is not None and site.own_name in config.ignore_function_names


def ignored_declarator(site: FunctionSite, config: Configuration) -> bool:
    """`const legacy = (a, b) => {}`"""
    return _anonymous_with_parent(site, config, ParentKind.VARIABLE_DECLARATOR)


def ignored_property_value(site: FunctionSite, config: Configuration) -> bool:
    """`{ legacy: (a, b) => {} }`; method shorthand is not a property value."""
    return _anonymous_with_parent(site, config, ParentKind.PROPERTY_VALUE)


def ignored_assignment(site: FunctionSite, config: Configuration) -> bool:
    """`legacy = (a, b) => {}`"""
    return _anonymous_with_parent(site, config, ParentKind.ASSIGNMENT)


def _anonymous_with_parent(
    site: FunctionSite,
    config: Configuration,
    kind: ParentKind,
) -> bool:
    if not site.is_anonymous or site.parent.kind != kind:
        return False
    return site.parent.name is not None and site.parent.name in config.ignore_function_names


_CHECKS = (
    ignored_member,
    ignored_own_name,
    ignored_declarator,
    ignored_property_value,
    ignored_assignment,
)


def is_function_exempt(site: FunctionSite, config: Configuration) -> bool:
    return any(check(site, config) for check in _CHECKS)
