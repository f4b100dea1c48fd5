"""
objparams - enforce object parameters in JavaScript/TypeScript.

    function foo(a, b) {}      reported
    function foo({ a, b }) {}  allowed
"""
from .data_structures import Configuration, Diagnostic
from .orchestrator import LintResult, lint_paths, lint_source
from .reporter import RULE_NAME

__version__ = "1.0.0"

__all__ = [
    'RULE_NAME',
    'Configuration',
    'Diagnostic',
    'LintResult',
    'lint_paths',
    'lint_source',
]
