"""
Schema parser.

Parses Prisma schema text with the lark grammar in `grammar.lark` and builds
the domain representation from the resulting tree. Mapping annotations
(`@map`, `@@map`) are lifted into `database_name`, block-level index
attributes into `Index` objects; everything else is kept as structured
attributes.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)

from ..constants import AttributeNames, BlockKinds, FieldArity, IndexKinds
from ..domain.models import (
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
from ..exceptions import SchemaParseError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_lark_parser() -> Lark:
    """Compile the schema grammar once per process."""
    return Lark.open("grammar.lark", rel_to=__file__, parser="lalr", propagate_positions=True)


def _is_doc_comment(item) -> bool:
    return isinstance(item, Token) and item.type == "DOC_COMMENT"


def _doc_text(token: Token) -> str:
    return str(token)[3:].strip()


def _attach_documentation(members, documented_types) -> list:
    """
    Pair `///` comments with the members they describe.

    A comment on the line a member ends on documents that member; any other
    comment documents the member that follows it. Comments that end up on a
    member which cannot carry documentation are dropped.

    Returns:
        The members without the comment tokens, in source order
    """
    kept = []
    pending: List[str] = []
    previous = None
    for member in members:
        if _is_doc_comment(member):
            if previous is not None and previous.source_line == member.line:
                if isinstance(previous, documented_types):
                    previous.documentation.append(_doc_text(member))
            else:
                pending.append(_doc_text(member))
            continue
        if isinstance(member, documented_types):
            member.documentation = pending
        pending = []
        previous = member
        kept.append(member)
    return kept


def _string_value(argument: Optional[Argument]) -> Optional[str]:
    if argument is not None and isinstance(argument.value, StringLiteral):
        return argument.value.value
    return None


def _mapped_name(attributes: List[Attribute]) -> Optional[str]:
    """Pop the `@map`/`@@map` attribute and return its string value."""
    for attribute in attributes:
        if attribute.name != AttributeNames.MAP:
            continue
        value = _string_value(attribute.argument("name", position=0))
        if value is not None:
            attributes.remove(attribute)
            return value
    return None


class SchemaBuilder(Transformer):
    """Turns the lark parse tree into a `Schema`."""

    # --- Expressions ---

    def string(self, children):
        return StringLiteral(str(children[0])[1:-1])

    def number(self, children):
        return NumberLiteral(str(children[0]))

    def path(self, children):
        return ".".join(str(part) for part in children)

    def constant(self, children):
        return Constant(str(children[0]))

    def array(self, children):
        return ArrayValue(list(children))

    def function_call(self, children):
        name, *arguments = children
        return FunctionCall(str(name), list(arguments))

    def named_argument(self, children):
        name, value = children
        return Argument(value=value, name=str(name))

    def positional_argument(self, children):
        return Argument(value=children[0])

    def arguments(self, children):
        return list(children)

    # --- Attributes ---

    def attribute_name(self, children):
        return ".".join(str(part) for part in children)

    @v_args(meta=True)
    def field_attribute(self, meta, children):
        name = children[0]
        arguments = children[1] if len(children) > 1 else None
        return Attribute(name=name, arguments=arguments, source_line=meta.end_line)

    block_attribute = field_attribute

    # --- Fields ---

    def plain_type(self, children):
        return str(children[0])

    def unsupported_type(self, children):
        name, literal = children
        return f"{name}({literal})"

    def required_type(self, children):
        return FieldType(children[0], FieldArity.REQUIRED)

    def optional_type(self, children):
        return FieldType(children[0], FieldArity.OPTIONAL)

    def list_type(self, children):
        return FieldType(children[0], FieldArity.LIST)

    @v_args(meta=True)
    def field(self, meta, children):
        name, field_type, *attributes = children
        database_name = _mapped_name(attributes)
        return Field(
            name=str(name),
            field_type=field_type,
            attributes=attributes,
            database_name=database_name,
            source_line=meta.end_line,
        )

    @v_args(meta=True)
    def enum_value(self, meta, children):
        name, *attributes = children
        return EnumValue(name=str(name), attributes=list(attributes), source_line=meta.end_line)

    # --- Blocks ---

    def config_entry(self, children):
        key, value = children
        return ConfigEntry(key=str(key), value=value)

    def _config_block(self, kind: str, children) -> ConfigBlock:
        name, *members = children
        entries = [m for m in members if isinstance(m, ConfigEntry)]
        return ConfigBlock(kind=kind, name=str(name), entries=entries)

    def datasource(self, children):
        return self._config_block(BlockKinds.DATASOURCE, children)

    def generator(self, children):
        return self._config_block(BlockKinds.GENERATOR, children)

    def _model_block(self, keyword: str, children) -> Model:
        name, *members = children
        model = Model(name=str(name), keyword=keyword)
        block_attributes: List[Attribute] = []

        for member in _attach_documentation(members, Field):
            if isinstance(member, Field):
                model.fields.append(member)
            else:
                block_attributes.append(member)

        model.database_name = _mapped_name(block_attributes)
        for attribute in block_attributes:
            if attribute.name in IndexKinds.ALL:
                model.indexes.append(self._build_index(model.name, attribute))
            else:
                model.attributes.append(attribute)
        return model

    def _build_index(self, model_name: str, attribute: Attribute) -> Index:
        kind = attribute.name
        fields_argument = attribute.argument("fields", position=0)
        if fields_argument is None or not isinstance(fields_argument.value, ArrayValue):
            raise SchemaParseError(
                f"@@{kind} on model '{model_name}' must start with a list of fields",
                context={"model": model_name, "attribute": attribute.render("@@")},
            )

        index = Index(kind=kind)
        for item in fields_argument.value.items:
            if isinstance(item, Constant):
                index.fields.append(IndexField(name=item.name))
            elif isinstance(item, FunctionCall):
                index.fields.append(IndexField(name=item.name, arguments=item.arguments))
            else:
                raise SchemaParseError(
                    f"Unexpected entry {item.render()} in @@{kind} on model '{model_name}'",
                    context={"model": model_name},
                )

        for argument in attribute.arguments or []:
            if argument is fields_argument:
                continue
            if argument.name == "name" and isinstance(argument.value, StringLiteral):
                index.name = argument.value.value
            elif argument.name == "map" and isinstance(argument.value, StringLiteral):
                index.db_name = argument.value.value
            else:
                index.extra_arguments.append(argument)

        # Older schemas used `name:` on @@index for what `map:` is now
        if kind not in IndexKinds.NAMED and index.name is not None and index.db_name is None:
            index.db_name, index.name = index.name, None
        return index

    def model(self, children):
        return self._model_block(BlockKinds.MODEL, children)

    def view(self, children):
        return self._model_block(BlockKinds.VIEW, children)

    def composite_type(self, children):
        name, *members = children
        composite = CompositeType(name=str(name))
        for member in _attach_documentation(members, Field):
            if isinstance(member, Field):
                composite.fields.append(member)
            else:
                logger.debug(f"Skipping block attribute {member.render('@@')} on type '{composite.name}'")
        return composite

    def enum(self, children):
        name, *members = children
        enum_def = EnumDef(name=str(name))
        for member in _attach_documentation(members, EnumValue):
            if isinstance(member, EnumValue):
                enum_def.values.append(member)
            else:
                enum_def.attributes.append(member)
        return enum_def

    def start(self, children):
        schema = Schema(configuration=Configuration(), datamodel=Datamodel())
        pending_docs: List[str] = []
        for item in children:
            if _is_doc_comment(item):
                pending_docs.append(_doc_text(item))
                continue
            item.documentation = pending_docs
            pending_docs = []
            if isinstance(item, ConfigBlock):
                schema.configuration.blocks.append(item)
            else:
                schema.datamodel.entries.append(item)
        if pending_docs:
            logger.debug(f"Dropping {len(pending_docs)} trailing documentation line(s)")
        return schema


def _describe_unexpected(error: UnexpectedInput) -> str:
    if isinstance(error, UnexpectedEOF):
        return "Unexpected end of schema"
    if isinstance(error, UnexpectedCharacters):
        return f"Unexpected character {error.char!r}"
    if isinstance(error, UnexpectedToken):
        expected = ", ".join(sorted(error.expected)) if error.expected else "nothing"
        if error.token.type == "$END":
            return f"Unexpected end of schema (expected one of: {expected})"
        return f"Unexpected token {str(error.token)!r} (expected one of: {expected})"
    return "Invalid schema syntax"


class PrismaSchemaParser:
    """Parses schema text into the domain representation."""

    def __init__(self, lark_parser: Optional[Lark] = None):
        self._lark = lark_parser or get_lark_parser()

    def parse(self, text: str) -> Schema:
        """
        Parse schema text.

        Args:
            text: The full schema document

        Returns:
            The parsed Schema

        Raises:
            SchemaParseError: If the text does not conform to the grammar
        """
        try:
            tree = self._lark.parse(text)
        except UnexpectedInput as e:
            # lark reports -1 for positions it does not know (end of input)
            line = e.line if isinstance(e.line, int) and e.line > 0 else None
            column = e.column if isinstance(e.column, int) and e.column > 0 else None
            context = {}
            if line is not None:
                context["snippet"] = e.get_context(text).rstrip()
            raise SchemaParseError(
                _describe_unexpected(e), line=line, column=column, context=context
            ) from e

        try:
            schema = SchemaBuilder().transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, SchemaParseError):
                raise e.orig_exc from None
            raise

        logger.debug(
            f"Parsed {len(schema.configuration.blocks)} configuration block(s) and "
            f"{len(schema.datamodel.entries)} datamodel block(s)"
        )
        return schema
