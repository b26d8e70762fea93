"""Indentation options: schema validation, normalization and file loading.

Options follow the two positional arguments of the ``indent`` rule: the unit
(``"tab"`` or a number of spaces) and an object of per-construct overrides.
Validation is done with pydantic models that reject unknown keys; the engine
itself only ever sees the normalized, frozen :class:`IndentConfig`.
"""

from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from .errors import ConfigError


logger = logging.getLogger(__name__)

NonNegativeInt = Annotated[StrictInt, Field(ge=0)]
ListOffset = Union[NonNegativeInt, Literal["first"]]
IndentUnit = Union[NonNegativeInt, Literal["tab"]]

CONFIG_FILENAMES = (".jsindent.json", "jsindent.toml", "pyproject.toml")

_UNIT_ADAPTER = TypeAdapter(IndentUnit)


class IndentStyle(Enum):
    """Supported indentation characters."""
    SPACES = "spaces"
    TABS = "tabs"


class _OptionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class FunctionOptions(_OptionModel):
    """``FunctionDeclaration`` / ``FunctionExpression`` option object."""
    parameters: Optional[ListOffset] = None
    body: NonNegativeInt = 1


class CallExpressionOptions(_OptionModel):
    """``CallExpression`` option object."""
    arguments: Optional[ListOffset] = None


class VariableDeclaratorOptions(_OptionModel):
    """Per-keyword ``VariableDeclarator`` levels."""
    var: NonNegativeInt = 1
    let: NonNegativeInt = 1
    const: NonNegativeInt = 1


class IndentOptionsModel(_OptionModel):
    """Schema of the second positional ``indent`` option."""

    switch_case: NonNegativeInt = Field(0, alias="SwitchCase")
    variable_declarator: Union[NonNegativeInt, VariableDeclaratorOptions] = Field(
        default_factory=VariableDeclaratorOptions, alias="VariableDeclarator"
    )
    outer_iife_body: NonNegativeInt = Field(1, alias="outerIIFEBody")
    member_expression: Optional[NonNegativeInt] = Field(None, alias="MemberExpression")
    function_declaration: FunctionOptions = Field(default_factory=FunctionOptions, alias="FunctionDeclaration")
    function_expression: FunctionOptions = Field(default_factory=FunctionOptions, alias="FunctionExpression")
    call_expression: CallExpressionOptions = Field(default_factory=CallExpressionOptions, alias="CallExpression")
    array_expression: ListOffset = Field(1, alias="ArrayExpression")
    object_expression: ListOffset = Field(1, alias="ObjectExpression")


@dataclass(frozen=True)
class FunctionConfig:
    parameters: Optional[Union[int, str]] = None
    body: int = 1


@dataclass(frozen=True)
class VariableDeclaratorConfig:
    var: int = 1
    let: int = 1
    const: int = 1

    def for_kind(self, kind: str) -> int:
        return getattr(self, kind)


@dataclass(frozen=True)
class IndentConfig:
    """Normalized indentation configuration consumed by the engine."""

    indent_style: IndentStyle = IndentStyle.SPACES
    indent_size: int = 4
    switch_case: int = 0
    variable_declarator: VariableDeclaratorConfig = field(default_factory=VariableDeclaratorConfig)
    outer_iife_body: int = 1
    member_expression: Optional[int] = None
    function_declaration: FunctionConfig = field(default_factory=FunctionConfig)
    function_expression: FunctionConfig = field(default_factory=FunctionConfig)
    call_arguments: Optional[Union[int, str]] = None
    array_expression: Union[int, str] = 1
    object_expression: Union[int, str] = 1
    array_pattern: int = 1
    object_pattern: int = 1

    @property
    def indent_char(self) -> str:
        return "\t" if self.indent_style == IndentStyle.TABS else " "

    @property
    def unit_name(self) -> str:
        return "tab" if self.indent_style == IndentStyle.TABS else "space"

    def list_offset(self, node_type: str) -> Union[int, str]:
        """Configured element offset for an array/object literal or pattern."""
        return {
            "ArrayExpression": self.array_expression,
            "ObjectExpression": self.object_expression,
            "ArrayPattern": self.array_pattern,
            "ObjectPattern": self.object_pattern,
        }[node_type]

    @classmethod
    def from_options(
        cls,
        unit: Optional[Union[int, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> "IndentConfig":
        """
        Validate and normalize the positional ``indent`` options.

        Args:
            unit: ``"tab"`` or a non-negative number of spaces (default 4)
            options: Per-construct overrides keyed by their schema names

        Returns:
            A frozen IndentConfig

        Raises:
            ConfigError: If either argument fails schema validation
        """
        style = IndentStyle.SPACES
        size = 4
        if unit is not None:
            try:
                unit = _UNIT_ADAPTER.validate_python(unit)
            except ValidationError as exc:
                raise ConfigError(
                    f"Invalid indentation unit {unit!r}",
                    hint='Use "tab" or a non-negative integer number of spaces.',
                ) from exc
            if unit == "tab":
                style, size = IndentStyle.TABS, 1
            else:
                size = unit

        try:
            model = IndentOptionsModel.model_validate(dict(options or {}))
        except ValidationError as exc:
            raise ConfigError(f"Invalid indentation options: {_describe(exc)}") from exc

        declarator = model.variable_declarator
        if isinstance(declarator, int):
            declarator_config = VariableDeclaratorConfig(var=declarator, let=declarator, const=declarator)
        else:
            declarator_config = VariableDeclaratorConfig(
                var=declarator.var, let=declarator.let, const=declarator.const
            )

        return cls(
            indent_style=style,
            indent_size=size,
            switch_case=model.switch_case,
            variable_declarator=declarator_config,
            outer_iife_body=model.outer_iife_body,
            member_expression=model.member_expression,
            function_declaration=FunctionConfig(
                parameters=model.function_declaration.parameters,
                body=model.function_declaration.body,
            ),
            function_expression=FunctionConfig(
                parameters=model.function_expression.parameters,
                body=model.function_expression.body,
            ),
            call_arguments=model.call_expression.arguments,
            array_expression=model.array_expression,
            object_expression=model.object_expression,
        )


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    if path.name == "pyproject.toml":
        return data.get("tool", {}).get("jsindent", {})
    return data


def load_config(path: Path) -> IndentConfig:
    """
    Load an IndentConfig from a JSON or TOML file.

    The ``indent`` key holds the unit; every other key is an option.
    """
    try:
        if path.suffix == ".toml":
            data = _read_toml_config(path)
        else:
            data = _read_json_config(path)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Cannot read configuration: {exc}", path=str(path)) from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be an object", path=str(path))

    section = dict(data)
    unit = section.pop("indent", None)
    logger.debug("Loaded indentation config from %s", path)
    try:
        return IndentConfig.from_options(unit, section)
    except ConfigError as exc:
        exc.path = str(path)
        raise


def _declares_section(path: Path) -> bool:
    if path.name != "pyproject.toml":
        return True
    with path.open("rb") as handle:
        return "jsindent" in tomllib.load(handle).get("tool", {})


def discover_config(start: Path) -> Optional[Path]:
    """Walk up from ``start`` to the first directory holding a config file."""
    start = start.resolve()
    directory = start if start.is_dir() else start.parent
    for candidate_dir in (directory, *directory.parents):
        for name in CONFIG_FILENAMES:
            path = candidate_dir / name
            if path.is_file() and _declares_section(path):
                return path
    return None


__all__ = [
    "IndentStyle",
    "IndentConfig",
    "FunctionConfig",
    "VariableDeclaratorConfig",
    "IndentOptionsModel",
    "load_config",
    "discover_config",
]
