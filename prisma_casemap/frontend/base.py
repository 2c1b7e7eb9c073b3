"""
Front-end contract.

A front end owns the grammar and layout of one schema language: it parses
text into the domain representation and renders it back. The pipeline only
talks to this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..constants import DefaultConfig
from ..domain.models import Schema
from .parser import PrismaSchemaParser
from .renderer import SchemaRenderer


class SchemaFrontend(ABC):
    """Parses and renders one schema language."""

    @abstractmethod
    def parse(self, text: str) -> Schema:
        """Parse text into a Schema; raises SchemaParseError on invalid input."""

    @abstractmethod
    def render(self, schema: Schema) -> str:
        """Render a Schema to text. Never fails for a parsed Schema."""


class PrismaFrontend(SchemaFrontend):
    """Front end for the Prisma schema language."""

    def __init__(
        self,
        parser: Optional[PrismaSchemaParser] = None,
        renderer: Optional[SchemaRenderer] = None,
        indent: int = DefaultConfig.INDENT,
    ):
        self.parser = parser or PrismaSchemaParser()
        self.renderer = renderer or SchemaRenderer(indent=indent)

    def parse(self, text: str) -> Schema:
        return self.parser.parse(text)

    def render(self, schema: Schema) -> str:
        return self.renderer.render(schema)
