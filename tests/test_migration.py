"""Tests for Rails migration rendering."""

import io
from textwrap import dedent

import pytest

from tagschema.errors import UnknownTypeError
from tagschema.models import Column, ColumnKind, Table, UnknownType
from tagschema.render.migration import migration_text, write_migration

FRAGMENTS_MIGRATION = """\
create_table 'fragments', primary_key:'hidden_pk' do |t|
  t.integer :id, null:false, limit:8
  t.integer :version, null:false, default:0, limit:2
  t.integer :size, null:false, limit:4
  t.string :addr, null:false
  t.references :piyo, limit:8
end
add_index :fragments, [:id, :version, :addr], unique:true

"""


def integer(name: str, limit: str = "8") -> Column:
    return Column(ColumnKind.INTEGER, name, {"null": "false", "limit": limit})


class TestFragmentsScenario:
    def test_full_output(self, fragments):
        assert migration_text([fragments]) == FRAGMENTS_MIGRATION

    def test_piyo_uses_default_primary_key(self, sample_tables):
        piyo = next(t for t in sample_tables if t.name == "Piyo")
        assert migration_text([piyo]) == dedent("""\
            create_table 'piyo' do |t|
              t.string :some_value, null:false
            end

            """)

    def test_idempotent(self, sample_tables):
        assert migration_text(sample_tables) == migration_text(sample_tables)

    def test_write_to_sink(self, fragments):
        buf = io.StringIO()
        write_migration([fragments], buf)
        assert buf.getvalue() == FRAGMENTS_MIGRATION


class TestPrimaryKey:
    def test_no_primary_key(self):
        table = Table("LogLine", columns=[integer("Seq")])
        assert migration_text([table]) == dedent("""\
            create_table 'log_line', id:false do |t|
              t.integer :seq, null:false, limit:8
            end

            """)

    def test_renamed_primary_key_named_id(self):
        table = Table("User", columns=[integer("id")], primary_key="id")
        out = migration_text([table])
        assert out.startswith("create_table 'user' do |t|\n")
        assert ":id" not in out

    def test_primary_key_column_not_emitted(self):
        table = Table(
            "User",
            columns=[integer("UserKey"), integer("Age", "1")],
            primary_key="UserKey",
        )
        lines = migration_text([table]).splitlines()
        assert lines[0] == "create_table 'user', primary_key:'user_key' do |t|"
        assert lines[1:3] == ["  t.integer :age, null:false, limit:1", "end"]


class TestUniqueness:
    def test_single_unique_inline(self):
        table = Table(
            "Account",
            columns=[integer("Id"), integer("Number")],
            primary_key="Id",
            unique_index=["Number"],
        )
        assert migration_text([table]) == dedent("""\
            create_table 'account' do |t|
              t.integer :number, unique:true, null:false, limit:8
            end

            """)

    def test_composite_index_has_no_inline_flag(self):
        table = Table(
            "Account",
            columns=[integer("Bank"), integer("Number")],
            unique_index=["Bank", "Number"],
        )
        out = migration_text([table])
        assert "unique:true, null" not in out
        assert out.endswith(
            "end\nadd_index :account, [:bank, :number], unique:true\n\n"
        )

    def test_no_unique_no_index(self):
        table = Table("Account", columns=[integer("Bank")])
        assert "add_index" not in migration_text([table])

    def test_unique_reference_keeps_foreign_key_column_in_index(self):
        owner = Column(ColumnKind.REFERENCES, "OwnerId", {"limit": "8"})
        table = Table(
            "Pet",
            columns=[owner, integer("Tag")],
            unique_index=["OwnerId", "Tag"],
        )
        out = migration_text([table])
        assert "  t.references :owner, limit:8\n" in out
        assert "add_index :pet, [:owner_id, :tag], unique:true" in out


class TestColumns:
    def test_reference_suffix_stripped(self):
        col = Column(ColumnKind.REFERENCES, "FooId", {"limit": "8"})
        out = migration_text([Table("T", columns=[col])])
        assert "  t.references :foo, limit:8\n" in out

    def test_reference_renamed_before_refer(self, scanner):
        tables = scanner.scan_source(
            dedent("""
            package p

            // db:"entity"
            type Post struct {
                Author int64 `column:"WriterId" refer:""`
                Editor int64 `refer:"" column:"reviewer"`
            }
            """)
        )
        out = migration_text(tables)
        assert "  t.references :writer, limit:8\n" in out
        assert "  t.references :reviewer, limit:8\n" in out

    def test_option_order_and_empty_values(self):
        col = Column(
            ColumnKind.STRING,
            "Title",
            {"limit": "64", "default": "", "null": "true"},
        )
        out = migration_text([Table("T", columns=[col])])
        assert "  t.string :title, null:true, limit:64\n" in out

    def test_timestamp_and_binary(self):
        cols = [
            Column(
                ColumnKind.TIMESTAMP,
                "CreatedAt",
                {"null": "true", "default": "0"},
            ),
            Column(ColumnKind.BINARY, "Payload", {}),
        ]
        out = migration_text([Table("T", columns=cols)])
        assert "  t.timestamp :created_at, null:true, default:0\n" in out
        assert "  t.binary :payload\n" in out


class TestUnknownTypes:
    @pytest.fixture
    def table(self) -> Table:
        return Table(
            "T",
            columns=[Column(UnknownType("*int64"), "Count", {})],
        )

    def test_strict_raises(self, table):
        with pytest.raises(UnknownTypeError) as exc_info:
            migration_text([table])
        assert exc_info.value.column == "Count"
        assert exc_info.value.native == "*int64"

    def test_strict_failure_writes_nothing(self, table):
        buf = io.StringIO()
        tables = [
            Table("Ok", columns=[integer("N")]),
            table,
            Table("Later", columns=[integer("M")]),
        ]
        with pytest.raises(UnknownTypeError):
            write_migration(tables, buf)
        assert buf.getvalue() == ""

    def test_unknown_primary_key_type_is_not_rendered(self):
        key = Column(UnknownType("uuid.UUID"), "Key", {})
        table = Table("T", columns=[key], primary_key="Key")
        assert migration_text([table]).startswith("create_table 't', ")

    def test_lenient_emits_empty_type(self, table):
        out = migration_text([table], strict=False)
        assert "  t. :count\n" in out
