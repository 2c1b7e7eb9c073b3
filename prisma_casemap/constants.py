"""
Centralized constants for prisma-casemap.

Default configuration values, schema keywords and the attribute orderings the
renderer relies on live here so they can be tuned in one place.
"""

from typing import List


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    # Conventional schema locations, searched in order
    SEARCH_PATHS = ["./schema.prisma", "./prisma/schema.prisma"]

    # Rendering
    INDENT = 2

    # Naming policy
    MAP_UNCHANGED_NAMES = True
    KEEP_EXISTING_MAPS = True


# =============================================================================
# SCHEMA LANGUAGE
# =============================================================================

class BlockKinds:
    """Top-level block keywords."""

    DATASOURCE = "datasource"
    GENERATOR = "generator"
    MODEL = "model"
    VIEW = "view"
    ENUM = "enum"
    TYPE = "type"

    CONFIG = [DATASOURCE, GENERATOR]


class IndexKinds:
    """Block attributes that describe an index over fields."""

    ID = "id"
    UNIQUE = "unique"
    INDEX = "index"
    FULLTEXT = "fulltext"

    ALL = [ID, UNIQUE, INDEX, FULLTEXT]

    # Kinds whose `name:` argument is a client-facing name
    NAMED = [ID, UNIQUE]


class FieldArity:
    """How many values a field holds."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    LIST = "list"


class AttributeNames:
    """Attribute names the core treats specially."""

    MAP = "map"
    RELATION = "relation"
    NATIVE_TYPE_PREFIX = "db."


# Field attributes are rendered in this order; `@db.*` follows, then the rest
FIELD_ATTRIBUTE_ORDER: List[str] = [
    "id",
    "unique",
    "default",
    "updatedAt",
    "map",
    "relation",
    "ignore",
]

# Block attributes are rendered in this order; unknown ones keep source order
BLOCK_ATTRIBUTE_ORDER: List[str] = [
    "id",
    "unique",
    "index",
    "fulltext",
    "map",
]
