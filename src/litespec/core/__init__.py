"""
LiteSpec core: tokenizer, expression compilers and the schema compiler.
"""

from .compiler import SchemaCompiler, compile_dsl, compile_file
from .config import CompilerOptions, find_config, load_options
from .errors import (
    ConfigError,
    InvalidSchemaError,
    ErrorContext,
    ExpressionFormatError,
    LiteSpecError,
    MissingArgumentError,
    ParseError,
    StructuralError,
)
from .validator import ValidationIssue, ValidationResult, validate_data

__all__ = [
    "SchemaCompiler",
    "compile_dsl",
    "compile_file",
    "CompilerOptions",
    "find_config",
    "load_options",
    "ConfigError",
    "InvalidSchemaError",
    "ErrorContext",
    "ExpressionFormatError",
    "LiteSpecError",
    "MissingArgumentError",
    "ParseError",
    "StructuralError",
    "ValidationIssue",
    "ValidationResult",
    "validate_data",
]
