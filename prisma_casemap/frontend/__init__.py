"""
Schema language front end.

Parsing is done with a lark grammar, rendering with a jinja2 template.
"""

from .base import SchemaFrontend, PrismaFrontend
from .parser import PrismaSchemaParser, SchemaBuilder
from .renderer import SchemaRenderer, render_index, render_field_attributes


__all__ = [
    'SchemaFrontend',
    'PrismaFrontend',
    'PrismaSchemaParser',
    'SchemaBuilder',
    'SchemaRenderer',
    'render_index',
    'render_field_attributes',
]
