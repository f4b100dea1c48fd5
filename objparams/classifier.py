"""
Parameter shape classification.

Decides whether one function's parameter list follows the
object-parameters-only convention:

    function foo({ a, b }) {}   compliant
    function foo(a, b) {}       violation: a, b

Every offending parameter is collected in one pass so a single
diagnostic can suggest the complete object form.
"""
from typing import List

from .data_structures import (
    COMPLIANT,
    Classification,
    Configuration,
    FunctionSite,
    Param,
    ParamKind,
    Violation,
)

DESTRUCTURED = frozenset({ParamKind.OBJECT_PATTERN, ParamKind.ARRAY_PATTERN})


def is_allowed(param: Param) -> bool:
    """
    Allowed: {a}, [a], ...rest, this: T, {a} = {}, [a] = []
    Offending: a, a = 1, and any shape not listed here.
    """
    if param.kind in DESTRUCTURED:
        return True
    if param.kind == ParamKind.REST:
        return True
    if param.kind == ParamKind.THIS:
        return True
    if param.kind == ParamKind.DEFAULTED:
        return param.target in DESTRUCTURED
    return False


def offending_params(params) -> List[Param]:
    return [param for param in params if not is_allowed(param)]


def _param_label(param: Param) -> str:
    return param.name if param.name is not None else "param"


def classify(site: FunctionSite, config: Configuration) -> Classification:
    params = site.params

    if not params:
        if config.ignore_no_params:
            return COMPLIANT
        return Violation(
            anchor=site.location,
            function_name=site.display_name,
            param_names=(),
        )

    if len(params) == 1 and config.ignore_single_param:
        return COMPLIANT

    offending = offending_params(params)
    if not offending:
        return COMPLIANT

    return Violation(
        anchor=offending[0].location,
        function_name=site.display_name,
        param_names=tuple(_param_label(param) for param in offending),
    )
