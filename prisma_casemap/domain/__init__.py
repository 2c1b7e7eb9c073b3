"""
Domain module for prisma-casemap.

This module contains the schema representation and the naming rules,
separated from parsing, rendering and I/O concerns.
"""

from .models import (
    Argument,
    ArrayValue,
    Attribute,
    CompositeType,
    ConfigBlock,
    ConfigEntry,
    Configuration,
    Constant,
    Datamodel,
    EnumDef,
    EnumValue,
    Expression,
    Field,
    FieldType,
    FunctionCall,
    Index,
    IndexField,
    Model,
    NumberLiteral,
    Schema,
    StringLiteral,
)

from .naming import (
    NamingConventions,
    split_words,
    to_upper_camel_case,
    to_lower_camel_case,
    is_valid_schema_identifier,
)

__all__ = [
    # Expressions
    'Argument',
    'ArrayValue',
    'Constant',
    'Expression',
    'FunctionCall',
    'NumberLiteral',
    'StringLiteral',

    # Schema representation
    'Attribute',
    'CompositeType',
    'ConfigBlock',
    'ConfigEntry',
    'Configuration',
    'Datamodel',
    'EnumDef',
    'EnumValue',
    'Field',
    'FieldType',
    'Index',
    'IndexField',
    'Model',
    'Schema',

    # Naming
    'NamingConventions',
    'split_words',
    'to_upper_camel_case',
    'to_lower_camel_case',
    'is_valid_schema_identifier',
]
