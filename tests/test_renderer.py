"""
Tests for the schema renderer.
"""

from unittest import TestCase

from prisma_casemap.domain.models import (
    Argument,
    Attribute,
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
    Schema,
    StringLiteral,
)
from prisma_casemap.frontend.parser import PrismaSchemaParser
from prisma_casemap.frontend.renderer import (
    SchemaRenderer,
    render_field_attributes,
    render_index,
)


class TestRenderFieldAttributes(TestCase):
    """Test cases for field attribute ordering"""

    def test_map_goes_before_native_type(self):
        field = Field(
            name="userAgent",
            field_type=FieldType("String", "optional"),
            attributes=[Attribute("db.VarChar", [Argument(Constant("255"))])],
            database_name="user_agent",
        )
        assert render_field_attributes(field) == '@map("user_agent") @db.VarChar(255)'

    def test_canonical_order(self):
        field = Field(
            name="id",
            field_type=FieldType("Int"),
            attributes=[
                Attribute("db.Integer"),
                Attribute("default", [Argument(FunctionCall("autoincrement"))]),
                Attribute("id"),
            ],
            database_name="id",
        )
        assert render_field_attributes(field) == '@id @default(autoincrement()) @map("id") @db.Integer'

    def test_unknown_attributes_go_last(self):
        field = Field(
            name="a",
            field_type=FieldType("Int"),
            attributes=[Attribute("shardKey"), Attribute("unique")],
        )
        assert render_field_attributes(field) == "@unique @shardKey"

    def test_no_attributes(self):
        assert render_field_attributes(Field(name="a", field_type=FieldType("Int"))) == ""


class TestRenderIndex(TestCase):
    """Test cases for block-level index attributes"""

    def test_index_writes_only_storage_name(self):
        index = Index(kind="index", fields=[IndexField("userId")], name="userId", db_name="user_id")
        assert render_index(index) == '@@index([userId], map: "user_id")'

    def test_unique_writes_both_names(self):
        index = Index(
            kind="unique",
            fields=[IndexField("authorId"), IndexField("title")],
            name="authorTitle",
            db_name="author_title",
        )
        assert render_index(index) == '@@unique([authorId, title], name: "authorTitle", map: "author_title")'

    def test_extra_arguments_and_sort(self):
        index = Index(
            kind="index",
            fields=[IndexField("title", [Argument(Constant("Desc"), name="sort")])],
            extra_arguments=[Argument(Constant("Hash"), name="type")],
        )
        assert render_index(index) == "@@index([title(sort: Desc)], type: Hash)"

    def test_unknown_kind_rejected(self):
        with self.assertRaises(ValueError):
            Index(kind="primary")


class TestSchemaRenderer(TestCase):
    """Test cases for whole-document rendering"""

    def test_model_layout(self):
        model = Model(
            name="AuthOtp",
            database_name="auth_otp",
            fields=[
                Field("id", FieldType("Int"), [Attribute("id")], database_name="id"),
                Field("destroyedAt", FieldType("DateTime", "optional"), database_name="destroyed_at"),
            ],
            indexes=[Index(kind="index", fields=[IndexField("id")], db_name="id_idx")],
        )
        schema = Schema(datamodel=Datamodel(entries=[model]))
        expected = (
            "model AuthOtp {\n"
            '  id          Int       @id @map("id")\n'
            '  destroyedAt DateTime? @map("destroyed_at")\n'
            "\n"
            '  @@index([id], map: "id_idx")\n'
            '  @@map("auth_otp")\n'
            "}\n"
        )
        assert SchemaRenderer().render(schema) == expected

    def test_configuration_first_then_datamodel(self):
        schema = Schema(
            configuration=Configuration(blocks=[
                ConfigBlock(
                    kind="datasource",
                    name="db",
                    entries=[
                        ConfigEntry("provider", StringLiteral("sqlite")),
                        ConfigEntry("url", StringLiteral("file:dev.db")),
                    ],
                ),
            ]),
            datamodel=Datamodel(entries=[
                EnumDef(name="Role", values=[EnumValue("USER"), EnumValue("ADMIN")]),
            ]),
        )
        expected = (
            "datasource db {\n"
            '  provider = "sqlite"\n'
            '  url      = "file:dev.db"\n'
            "}\n"
            "\n"
            "enum Role {\n"
            "  USER\n"
            "  ADMIN\n"
            "}\n"
        )
        assert SchemaRenderer().render(schema) == expected

    def test_documentation_and_indent(self):
        model = Model(
            name="Post",
            documentation=["A post"],
            fields=[Field("id", FieldType("Int"), [Attribute("id")], documentation=["Key"])],
        )
        schema = Schema(datamodel=Datamodel(entries=[model]))
        expected = (
            "/// A post\n"
            "model Post {\n"
            "    /// Key\n"
            "    id Int @id\n"
            "}\n"
        )
        assert SchemaRenderer(indent=4).render(schema) == expected

    def test_empty_schema(self):
        assert SchemaRenderer().render(Schema()) == ""

    def test_parsed_schema_renders_canonically(self):
        text = 'model a {\n  id   Int    @id\n  name String @unique\n}\n'
        schema = PrismaSchemaParser().parse(text)
        assert SchemaRenderer().render(schema) == text

    def test_rendered_output_parses_back(self):
        parser = PrismaSchemaParser()
        text = (
            'model post {\n'
            '  id Int @id @default(autoincrement())\n'
            '  tags String[]\n'
            '  @@index([tags], map: "tags_idx")\n'
            '}\n'
        )
        rendered = SchemaRenderer().render(parser.parse(text))
        assert parser.parse(rendered) == parser.parse(text)
