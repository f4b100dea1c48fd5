"""
Rule options schema.

Validates the user-facing option names (camelCase, as written in a
config file) and builds the immutable Configuration the engine uses.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import pydantic

from .data_structures import Configuration


class ConfigError(ValueError):
    """Options are invalid or the config file cannot be loaded."""


class RuleOptions(pydantic.BaseModel):
    """Recognized options. Unknown keys are rejected."""

    model_config = pydantic.ConfigDict(
        extra='forbid',
        strict=True,
        frozen=True,
        populate_by_name=True,
    )

    ignore_functions: list[str] = pydantic.Field(default_factory=list, alias='ignoreFunctions')
    ignore_methods: list[str] = pydantic.Field(default_factory=list, alias='ignoreMethods')
    ignore_constructors: bool = pydantic.Field(default=True, alias='ignoreConstructors')
    ignore_single_param: bool = pydantic.Field(default=True, alias='ignoreSingleParam')
    ignore_no_params: bool = pydantic.Field(default=True, alias='ignoreNoParams')
    ignore_test_files: bool = pydantic.Field(default=True, alias='ignoreTestFiles')
    ignore_files: list[str] = pydantic.Field(default_factory=list, alias='ignoreFiles')

    def to_configuration(self) -> Configuration:
        return Configuration(
            ignore_function_names=frozenset(self.ignore_functions),
            ignore_method_names=frozenset(self.ignore_methods),
            ignore_constructors=self.ignore_constructors,
            ignore_single_param=self.ignore_single_param,
            ignore_no_params=self.ignore_no_params,
            ignore_test_files=self.ignore_test_files,
            ignore_file_patterns=tuple(self.ignore_files),
        )


def parse_options(raw: Mapping[str, Any] | None = None) -> RuleOptions:
    """Validate a mapping of camelCase options."""
    try:
        return RuleOptions.model_validate(dict(raw or {}))
    except pydantic.ValidationError as e:
        problems = '; '.join(
            f"{'.'.join(str(part) for part in error['loc']) or 'options'}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(f'Invalid options: {problems}') from e


def load_options_file(path: Path) -> dict[str, Any]:
    """Read a JSON config file holding one options object."""
    try:
        raw = json.loads(Path(path).read_text(encoding='utf-8'))
    except OSError as e:
        raise ConfigError(f'Cannot read config file {path}: {e.strerror}') from e
    except json.JSONDecodeError as e:
        raise ConfigError(f'Config file {path} is not valid JSON: {e.msg} (line {e.lineno})') from e

    if not isinstance(raw, dict):
        raise ConfigError(f'Config file {path} must contain a JSON object')
    return raw


def build_configuration(
    config_path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Configuration:
    """
    Merge file options and overrides, validate, freeze.

    Scalar overrides replace file values, list overrides extend them.
    Overrides with a value of None are treated as "not given".
    """
    raw: dict[str, Any] = {}
    if config_path is not None:
        raw.update(load_options_file(config_path))
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if isinstance(value, list) and isinstance(raw.get(key), list):
            raw[key] = raw[key] + value
        else:
            raw[key] = value
    return parse_options(raw).to_configuration()
