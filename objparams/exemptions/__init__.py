"""
Exemption resolution.

Exemptions answer one question: "Must this be skipped?"

Two levels:
- files: the whole file is out of scope (test files, glob patterns)
- functions: one function is out of scope (names, constructors)

Design principles:
- Pure functions of (Configuration, input)
- Return bool only
- Malformed patterns and unresolvable keys never raise, they just
  do not match
"""
from .files import TEST_FILE_PATTERN, glob_match, is_file_exempt, is_test_file
from .functions import is_function_exempt

__all__ = [
    'TEST_FILE_PATTERN',
    'glob_match',
    'is_file_exempt',
    'is_test_file',
    'is_function_exempt',
]
