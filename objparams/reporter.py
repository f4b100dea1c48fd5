"""
Reporter

Translate Violations into Diagnostics and append them to a sink.
"""
from typing import Dict, List

from .data_structures import Diagnostic, Violation

RULE_NAME = "prefer-object-params"
MESSAGE_ID = "useObjectParams"

MESSAGES = {
    MESSAGE_ID: (
        "Functions must use object parameters only. "
        "Use {name}({paramsObj}) instead of {name}({params})"
    ),
}


def build_data(violation: Violation) -> Dict[str, str]:
    names = violation.param_names
    return {
        "name":      violation.function_name,
        "params":    ", ".join(names),
        "paramsObj": "{ " + ", ".join(names) + " }" if names else "{}",
    }


def render_message(message_id: str, data: Dict[str, str]) -> str:
    return MESSAGES[message_id].format(**data)


def report(violation: Violation, path: str, sink: List[Diagnostic]) -> None:
    data = build_data(violation)
    sink.append(Diagnostic(
        path=path,
        location=violation.anchor,
        rule_id=RULE_NAME,
        message_id=MESSAGE_ID,
        data=data,
        message=render_message(MESSAGE_ID, data),
    ))
