"""
LiteSpec - a terse, line-oriented notation for data models, compiled to
JSON Schema.

    from litespec import compile_dsl

    schema = compile_dsl('''
    model Customer object {
      gender: string @required @enum(male,female)
    }
    ''')
"""

from __future__ import annotations

from ._version import get_version
from .core import (
    CompilerOptions,
    ConfigError,
    InvalidSchemaError,
    ExpressionFormatError,
    LiteSpecError,
    MissingArgumentError,
    ParseError,
    StructuralError,
    ValidationResult,
    compile_dsl,
    compile_file,
    load_options,
    validate_data,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "CompilerOptions",
    "ConfigError",
    "InvalidSchemaError",
    "ExpressionFormatError",
    "LiteSpecError",
    "MissingArgumentError",
    "ParseError",
    "StructuralError",
    "ValidationResult",
    "compile_dsl",
    "compile_file",
    "load_options",
    "validate_data",
]
