"""
Core domain models for prisma-casemap.

These dataclasses are the in-memory form of one schema document. The parser
builds them, the naming transformer mutates names on them and the renderer
turns them back into text. Everything the transformer does not touch
(types, defaults, native types, unknown attributes) is kept in a structured
but otherwise opaque form so it round-trips unchanged.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..constants import AttributeNames, BlockKinds, FieldArity, IndexKinds


# =============================================================================
# EXPRESSIONS
# =============================================================================

@dataclass
class StringLiteral:
    """A double-quoted string; `value` is the raw text between the quotes."""

    value: str

    def render(self) -> str:
        return f'"{self.value}"'


@dataclass
class NumberLiteral:
    text: str

    def render(self) -> str:
        return self.text


@dataclass
class Constant:
    """A bare identifier such as `true`, `Desc` or an enum value."""

    name: str

    def render(self) -> str:
        return self.name


@dataclass
class FunctionCall:
    name: str
    arguments: List["Argument"] = field(default_factory=list)

    def render(self) -> str:
        return f"{self.name}({render_arguments(self.arguments)})"


@dataclass
class ArrayValue:
    items: List["Expression"] = field(default_factory=list)

    def render(self) -> str:
        return "[" + ", ".join(item.render() for item in self.items) + "]"


Expression = Union[StringLiteral, NumberLiteral, Constant, FunctionCall, ArrayValue]


@dataclass
class Argument:
    """A positional (`name is None`) or named argument."""

    value: Expression
    name: Optional[str] = None

    def render(self) -> str:
        if self.name is None:
            return self.value.render()
        return f"{self.name}: {self.value.render()}"


def render_arguments(arguments: List[Argument]) -> str:
    return ", ".join(argument.render() for argument in arguments)


# =============================================================================
# ATTRIBUTES
# =============================================================================

@dataclass
class Attribute:
    """
    A field (`@name`) or block (`@@name`) attribute.

    `arguments` is None when the attribute was written without parentheses,
    which is different from an empty argument list (`@default()`).
    """

    name: str
    arguments: Optional[List[Argument]] = None
    source_line: Optional[int] = field(default=None, compare=False, repr=False)

    @property
    def is_native_type(self) -> bool:
        return self.name.startswith(AttributeNames.NATIVE_TYPE_PREFIX)

    def argument(self, name: str, position: Optional[int] = None) -> Optional[Argument]:
        """
        Find an argument by name, falling back to a positional slot.

        Args:
            name: Argument name to look for
            position: Index among positional arguments to use when the
                argument is not given by name

        Returns:
            The matching argument or None
        """
        if not self.arguments:
            return None
        for argument in self.arguments:
            if argument.name == name:
                return argument
        if position is not None:
            positional = [a for a in self.arguments if a.name is None]
            if position < len(positional):
                return positional[position]
        return None

    def render(self, prefix: str = "@") -> str:
        if self.arguments is None:
            return f"{prefix}{self.name}"
        return f"{prefix}{self.name}({render_arguments(self.arguments)})"


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class ConfigEntry:
    key: str
    value: Expression


@dataclass
class ConfigBlock:
    """A `datasource` or `generator` block."""

    kind: str
    name: str
    entries: List[ConfigEntry] = field(default_factory=list)
    documentation: List[str] = field(default_factory=list)


@dataclass
class Configuration:
    blocks: List[ConfigBlock] = field(default_factory=list)


# =============================================================================
# DATAMODEL
# =============================================================================

@dataclass
class FieldType:
    """
    The declared type of a field.

    `name` is either a scalar (`Int`), a model, enum or composite type name,
    or the full `Unsupported("...")` expression.
    """

    name: str
    arity: str = FieldArity.REQUIRED

    @property
    def is_optional(self) -> bool:
        return self.arity == FieldArity.OPTIONAL

    @property
    def is_list(self) -> bool:
        return self.arity == FieldArity.LIST

    def render(self) -> str:
        if self.is_optional:
            return f"{self.name}?"
        if self.is_list:
            return f"{self.name}[]"
        return self.name


@dataclass
class Field:
    """
    A field of a model or composite type.

    `database_name` holds the `@map` value; the mapping annotation is not
    kept in `attributes`.
    `source_line` is the line the field ends on in the parsed text.
    """

    name: str
    field_type: FieldType
    attributes: List[Attribute] = field(default_factory=list)
    database_name: Optional[str] = None
    documentation: List[str] = field(default_factory=list)
    source_line: Optional[int] = field(default=None, compare=False, repr=False)

    @property
    def relation(self) -> Optional[Attribute]:
        for attribute in self.attributes:
            if attribute.name == AttributeNames.RELATION:
                return attribute
        return None


@dataclass
class IndexField:
    """A field reference inside an index, e.g. `title(sort: Desc)`."""

    name: str
    arguments: Optional[List[Argument]] = None

    def render(self) -> str:
        if self.arguments is None:
            return self.name
        return f"{self.name}({render_arguments(self.arguments)})"


@dataclass
class Index:
    """
    A block-level `@@id`, `@@unique`, `@@index` or `@@fulltext`.

    `name` is the client-facing name (`name:`) and `db_name` the storage
    name (`map:`). Any other argument is kept in `extra_arguments`.
    """

    kind: str
    fields: List[IndexField] = field(default_factory=list)
    name: Optional[str] = None
    db_name: Optional[str] = None
    extra_arguments: List[Argument] = field(default_factory=list)

    def __post_init__(self):
        if self.kind not in IndexKinds.ALL:
            raise ValueError(f"Unknown index kind: {self.kind}")

    @property
    def field_names(self) -> List[str]:
        return [index_field.name for index_field in self.fields]


@dataclass
class Model:
    """
    A model (or view) block.

    `database_name` holds the `@@map` value. `attributes` keeps the block
    attributes that are neither indexes nor the mapping annotation.
    """

    name: str
    fields: List[Field] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)
    database_name: Optional[str] = None
    attributes: List[Attribute] = field(default_factory=list)
    documentation: List[str] = field(default_factory=list)
    keyword: str = BlockKinds.MODEL

    def find_field(self, name: str) -> Optional[Field]:
        for model_field in self.fields:
            if model_field.name == name:
                return model_field
        return None


@dataclass
class EnumValue:
    name: str
    attributes: List[Attribute] = field(default_factory=list)
    documentation: List[str] = field(default_factory=list)
    source_line: Optional[int] = field(default=None, compare=False, repr=False)


@dataclass
class EnumDef:
    name: str
    values: List[EnumValue] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)
    documentation: List[str] = field(default_factory=list)


@dataclass
class CompositeType:
    name: str
    fields: List[Field] = field(default_factory=list)
    documentation: List[str] = field(default_factory=list)


DatamodelEntry = Union[Model, EnumDef, CompositeType]


@dataclass
class Datamodel:
    """All model, enum and type blocks in their source order."""

    entries: List[DatamodelEntry] = field(default_factory=list)

    @property
    def models(self) -> List[Model]:
        return [e for e in self.entries if isinstance(e, Model)]

    @property
    def enums(self) -> List[EnumDef]:
        return [e for e in self.entries if isinstance(e, EnumDef)]

    @property
    def composite_types(self) -> List[CompositeType]:
        return [e for e in self.entries if isinstance(e, CompositeType)]

    def find_model(self, name: str) -> Optional[Model]:
        for model in self.models:
            if model.name == name:
                return model
        return None


@dataclass
class Schema:
    """Full parsed representation of one schema document."""

    configuration: Configuration = field(default_factory=Configuration)
    datamodel: Datamodel = field(default_factory=Datamodel)
