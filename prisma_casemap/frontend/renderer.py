"""
Schema renderer.

Turns a `Schema` back into canonical schema text. Column widths and
attribute ordering are computed here; the block layout itself lives in the
`schema.prisma.j2` jinja2 template.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..constants import (
    BLOCK_ATTRIBUTE_ORDER,
    FIELD_ATTRIBUTE_ORDER,
    AttributeNames,
    BlockKinds,
    DefaultConfig,
    IndexKinds,
)
from ..domain.models import (
    Argument,
    Attribute,
    CompositeType,
    ConfigBlock,
    EnumDef,
    Field,
    Index,
    Model,
    Schema,
    StringLiteral,
    render_arguments,
)

logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"
SCHEMA_TEMPLATE = "schema.prisma.j2"


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    return Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=False,  # Output is schema text, not markup
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def _render_documentation(lines: List[str]) -> List[str]:
    return [f"/// {line}" if line else "///" for line in lines]


def _map_attribute(database_name: str) -> Attribute:
    return Attribute(
        name=AttributeNames.MAP,
        arguments=[Argument(value=StringLiteral(database_name))],
    )


def _field_attribute_rank(attribute: Attribute) -> int:
    if attribute.name in FIELD_ATTRIBUTE_ORDER:
        return FIELD_ATTRIBUTE_ORDER.index(attribute.name)
    if attribute.is_native_type:
        return len(FIELD_ATTRIBUTE_ORDER)
    return len(FIELD_ATTRIBUTE_ORDER) + 1


def _block_attribute_rank(name: str) -> int:
    if name in BLOCK_ATTRIBUTE_ORDER:
        return BLOCK_ATTRIBUTE_ORDER.index(name)
    return len(BLOCK_ATTRIBUTE_ORDER)


def render_field_attributes(field: Field) -> str:
    """Render a field's attributes, mapping annotation included, in canonical order."""
    attributes = list(field.attributes)
    if field.database_name is not None:
        attributes.append(_map_attribute(field.database_name))
    ordered = sorted(attributes, key=_field_attribute_rank)
    return " ".join(attribute.render("@") for attribute in ordered)


def render_index(index: Index) -> str:
    """
    Render a block-level index attribute.

    Only `@@id` and `@@unique` carry a client-facing `name:`; for the other
    kinds the storage name (`map:`) is the only name written.
    """
    parts = ["[" + ", ".join(index_field.render() for index_field in index.fields) + "]"]
    if index.kind in IndexKinds.NAMED and index.name is not None:
        parts.append(f'name: "{index.name}"')
    if index.db_name is not None:
        parts.append(f'map: "{index.db_name}"')
    if index.extra_arguments:
        parts.append(render_arguments(index.extra_arguments))
    return f"@@{index.kind}({', '.join(parts)})"


def _field_rows(fields: List[Field]) -> List[str]:
    if not fields:
        return []
    name_width = max(len(f.name) for f in fields)
    type_width = max(len(f.field_type.render()) for f in fields)

    rows = []
    for f in fields:
        rows.extend(_render_documentation(f.documentation))
        line = f"{f.name.ljust(name_width)} {f.field_type.render().ljust(type_width)} {render_field_attributes(f)}"
        rows.append(line.rstrip())
    return rows


def _model_attributes(model: Model) -> List[str]:
    ranked = [(_block_attribute_rank(index.kind), render_index(index)) for index in model.indexes]
    if model.database_name is not None:
        ranked.append((_block_attribute_rank(AttributeNames.MAP), _map_attribute(model.database_name).render("@@")))
    ranked.extend(
        (_block_attribute_rank(attribute.name), attribute.render("@@")) for attribute in model.attributes
    )
    # sorted() is stable, so equal ranks keep source order
    return [text for _, text in sorted(ranked, key=lambda item: item[0])]


def _config_rows(block: ConfigBlock) -> List[str]:
    if not block.entries:
        return []
    key_width = max(len(entry.key) for entry in block.entries)
    return [f"{entry.key.ljust(key_width)} = {entry.value.render()}" for entry in block.entries]


def _enum_rows(enum_def: EnumDef) -> List[str]:
    rows = []
    for value in enum_def.values:
        rows.extend(_render_documentation(value.documentation))
        attributes = " ".join(attribute.render("@") for attribute in value.attributes)
        rows.append(f"{value.name} {attributes}".rstrip())
    return rows


class SchemaRenderer:
    """Renders a `Schema` to text with stable formatting."""

    def __init__(self, indent: int = DefaultConfig.INDENT, env: Environment = None):
        self.indent = " " * indent
        self.env = env or setup_jinja_env()

    def block_context(self, block) -> Dict[str, Any]:
        """Build the template context for one top-level block."""
        if isinstance(block, ConfigBlock):
            keyword, rows, attributes = block.kind, _config_rows(block), []
        elif isinstance(block, Model):
            keyword, rows, attributes = block.keyword, _field_rows(block.fields), _model_attributes(block)
        elif isinstance(block, CompositeType):
            keyword, rows, attributes = BlockKinds.TYPE, _field_rows(block.fields), []
        elif isinstance(block, EnumDef):
            keyword = BlockKinds.ENUM
            rows = _enum_rows(block)
            attributes = [attribute.render("@@") for attribute in block.attributes]
        else:
            raise TypeError(f"Cannot render block of type {type(block).__name__}")

        return {
            "keyword": keyword,
            "name": block.name,
            "documentation": _render_documentation(block.documentation),
            "rows": rows,
            "attributes": attributes,
        }

    def render(self, schema: Schema) -> str:
        """Render configuration blocks first, then the datamodel in source order."""
        blocks = list(schema.configuration.blocks) + list(schema.datamodel.entries)
        template = self.env.get_template(SCHEMA_TEMPLATE)
        output = template.render(
            blocks=[self.block_context(block) for block in blocks],
            indent=self.indent,
        )
        logger.debug(f"Rendered {len(blocks)} block(s)")
        return output
