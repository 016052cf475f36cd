"""Tests for lowering parsed DDL into the Schema/Table/Column model."""

import pytest
from pglast import ast

from lpcheck.core.exceptions import (
    MissingColumnNameError,
    MissingRelationError,
    ParseError,
    UnsupportedDialectError,
)
from lpcheck.core.models import SourceLocation
from lpcheck.parser.sql_parser import LoweringContext, SQLParser, statement_start


@pytest.fixture
def parser() -> SQLParser:
    return SQLParser()


class TestCreateTable:
    """CREATE TABLE lowering."""

    def test_reference_users_table(self, parser: SQLParser, users_sql: str) -> None:
        """The reference statement lowers exactly."""
        schema = parser.parse_sql_schema(users_sql)

        assert len(schema.tables) == 1
        table = schema.tables[0]
        assert table.name == "users"
        assert table.schema == ""
        assert [c.name for c in table.columns] == ["id", "email", "created_at"]

        id_col, email, created_at = table.columns
        assert id_col.type == "bigint"
        assert id_col.is_primary_key is True
        assert id_col.nullable is False

        assert email.type == "text"
        assert email.nullable is False
        assert email.default is None

        assert created_at.type == "timestamp with time zone"
        assert created_at.nullable is True
        assert created_at.default == "NOW()"

    def test_schema_kept_verbatim(self, parser: SQLParser) -> None:
        """Explicit schema qualifiers are stored, public is not filled in."""
        schema = parser.parse_sql_schema("CREATE TABLE auth.users (id int); CREATE TABLE t (id int);")

        assert schema.tables[0].schema == "auth"
        assert schema.tables[1].schema == ""
        assert schema.tables[1].effective_schema == "public"

    @pytest.mark.parametrize(
        "column_sql, expected",
        [
            ("integer", "integer"),
            ("smallint", "smallint"),
            ("varchar(255)", "varchar(255)"),
            ("character varying(20)", "varchar(20)"),
            ("numeric(10,2)", "numeric(10,2)"),
            ("decimal(5, 1)", "numeric(5,1)"),
            ("char(3)", "char(3)"),
            ("boolean", "boolean"),
            ("real", "real"),
            ("float", "double precision"),
            ("float(10)", "real"),
            ("timestamp", "timestamp without time zone"),
            ("time with time zone", "time with time zone"),
            ("text[]", "text[]"),
            ("integer[][]", "integer[]"),
            ("uuid", "uuid"),
            ("jsonb", "jsonb"),
            ("serial", "serial"),
            ("bigserial", "bigserial"),
            ("public.mood", "public.mood"),
            ("pg_catalog.int8", "bigint"),
            ("bit varying(8)", "varbit(8)"),
        ],
    )
    def test_type_rendering(self, parser: SQLParser, column_sql: str, expected: str) -> None:
        """Types are normalized with modifiers and array suffix."""
        schema = parser.parse_sql_schema(f"CREATE TABLE t (c {column_sql});")

        assert schema.tables[0].columns[0].type == expected

    @pytest.mark.parametrize(
        "default_sql, expected",
        [
            ("0", "0"),
            ("-1", "-1"),
            ("1.5", "1.5"),
            ("'active'", "'active'"),
            ("'pending'::text", "'pending'"),
            ("TRUE", "true"),
            ("false", "false"),
            ("NULL", "NULL"),
            ("now()", "now()"),
            ("Now()", "Now()"),
            ("CURRENT_DATE", "CURRENT_DATE"),
            ("LOCALTIMESTAMP", "LOCALTIMESTAMP"),
            ("CURRENT_TIMESTAMP", "CURRENT_TIMESTAMP"),
            ("CURRENT_TIMESTAMP(6)", "CURRENT_TIMESTAMP"),
            ("current_user", "CURRENT_USER"),
            ("gen_random_uuid()", "gen_random_uuid()"),
            ("nextval('users_id_seq'::regclass)", "nextval('users_id_seq')"),
            ("interval '1 day'", "'1 day'"),
            ("1 + 2", "UNDEFINED_EXPRESSION"),
        ],
    )
    def test_default_rendering(self, parser: SQLParser, default_sql: str, expected: str) -> None:
        """DEFAULT expressions are rendered back to SQL."""
        schema = parser.parse_sql_schema(f"CREATE TABLE t (c text DEFAULT {default_sql});")

        assert schema.tables[0].columns[0].default == expected

    def test_last_nullability_constraint_wins(self, parser: SQLParser) -> None:
        """NULL/NOT NULL apply in source order."""
        schema = parser.parse_sql_schema(
            "CREATE TABLE t (a int NOT NULL NULL, b int NULL NOT NULL, c int PRIMARY KEY NULL);"
        )
        a, b, c = schema.tables[0].columns

        assert a.nullable is True
        assert b.nullable is False
        assert c.is_primary_key is True
        assert c.nullable is True

    def test_table_constraints_ignored(self, parser: SQLParser) -> None:
        """Table-level constraints do not become columns or flags."""
        schema = parser.parse_sql_schema(
            "CREATE TABLE t (a int, b int, PRIMARY KEY (a), CONSTRAINT u UNIQUE (b));"
        )
        table = schema.tables[0]

        assert [c.name for c in table.columns] == ["a", "b"]
        assert table.get_column("a").is_primary_key is False

    def test_source_location(self, parser: SQLParser) -> None:
        """Tables record the file, line and column of their statement."""
        sql = "-- users\n\nCREATE TABLE a (id int);\n  CREATE TABLE b (id int);"
        schema = parser.parse_sql_schema(sql, filename="schema/app.lp.sql")

        assert schema.tables[0].source_location == SourceLocation("schema/app.lp.sql", 3, 1)
        assert schema.tables[1].source_location == SourceLocation("schema/app.lp.sql", 4, 3)

    def test_other_statements_ignored(self, parser: SQLParser) -> None:
        """Indexes, comments and functions produce no tables."""
        schema = parser.parse_sql_schema(
            "CREATE TABLE t (id int);\n"
            "CREATE INDEX t_idx ON t (id);\n"
            "COMMENT ON TABLE t IS 'things';\n"
            "CREATE EXTENSION IF NOT EXISTS pgcrypto;\n"
        )

        assert [t.name for t in schema.tables] == ["t"]

    def test_empty_input(self, parser: SQLParser) -> None:
        assert parser.parse_sql_schema("").tables == []


class TestAlterTable:
    """ALTER TABLE lowering."""

    def test_enable_and_disable_rls(self, parser: SQLParser) -> None:
        """Row-level security follows the last ENABLE/DISABLE."""
        schema = parser.parse_sql_schema(
            "CREATE TABLE a (id int);\n"
            "CREATE TABLE b (id int);\n"
            "ALTER TABLE a ENABLE ROW LEVEL SECURITY;\n"
            "ALTER TABLE b ENABLE ROW LEVEL SECURITY;\n"
            "ALTER TABLE b DISABLE ROW LEVEL SECURITY;\n"
        )

        assert schema.find_table("a").rls_enabled is True
        assert schema.find_table("b").rls_enabled is False

    def test_explicit_public_matches_unqualified(self, parser: SQLParser) -> None:
        """public.t targets a table created without a schema."""
        schema = parser.parse_sql_schema(
            "CREATE TABLE t (id int); ALTER TABLE public.t ENABLE ROW LEVEL SECURITY;"
        )

        assert schema.tables[0].rls_enabled is True

    def test_other_schema_not_matched(self, parser: SQLParser) -> None:
        """auth.t does not target public.t."""
        schema = parser.parse_sql_schema(
            "CREATE TABLE t (id int); ALTER TABLE auth.t ENABLE ROW LEVEL SECURITY;"
        )

        assert schema.tables[0].rls_enabled is False

    def test_missing_table_is_noop(self, parser: SQLParser) -> None:
        """ALTER on an unknown table is accepted silently."""
        schema = parser.parse_sql_schema(
            "ALTER TABLE ghost ENABLE ROW LEVEL SECURITY; CREATE TABLE ghost (id int);"
        )

        assert schema.tables[0].rls_enabled is False

    def test_unsupported_commands_ignored(self, parser: SQLParser) -> None:
        """Column changes through ALTER do not touch the model."""
        schema = parser.parse_sql_schema(
            "CREATE TABLE t (id int); ALTER TABLE t ADD COLUMN name text;"
        )

        assert [c.name for c in schema.tables[0].columns] == ["id"]


class TestErrors:
    """Failures raised by lowering."""

    def test_syntax_error_has_location(self, parser: SQLParser) -> None:
        """Parser errors carry a structured location."""
        with pytest.raises(ParseError) as exc_info:
            parser.parse_sql_schema("CREATE TABLE users id INTEGER);", filename="bad.lp.sql")

        error = exc_info.value
        assert error.code == "PARSE_ERROR"
        assert 'syntax error at or near "id"' in error.message
        assert error.location == SourceLocation("bad.lp.sql", 1, 20)
        assert error.details["position"] == 19

    @pytest.mark.parametrize(
        "sql",
        [
            "CREATE TABEL users (id int);",
            "ALTER TABLE users FROBNICATE;",
            "DROP TABLE;",
            "INSERT INTO t VALUES (1;",
            "CREATE TABLE t (id int,);",
            "CREATE TABLE ok (id int); CREATE TABEL broken (id int);",
        ],
    )
    def test_malformed_statements_rejected(self, parser: SQLParser, sql: str) -> None:
        """Any statement the server would reject fails the whole text."""
        with pytest.raises(ParseError) as exc_info:
            parser.parse_sql_schema(sql)

        assert exc_info.value.message.startswith("failed to parse SQL:")
        assert exc_info.value.location is not None

    def test_error_column_counts_bytes(self, parser: SQLParser) -> None:
        """Multi-byte characters before the error widen the column."""
        with pytest.raises(ParseError) as exc_info:
            parser.parse_sql_schema("/* é */ CREATE TABEL users (id int);")

        # TABEL: символ 15, байт 16
        assert exc_info.value.location == SourceLocation("", 1, 17)

    def test_unsupported_dialect(self, parser: SQLParser) -> None:
        with pytest.raises(UnsupportedDialectError) as exc_info:
            parser.parse_sql_schema("CREATE TABLE t (id int);", dialect="mysql")

        assert exc_info.value.details["dialect"] == "mysql"

    def test_missing_relation(self, parser: SQLParser) -> None:
        """Statement nodes without a target relation are rejected."""
        ctx = LoweringContext(sql="")

        with pytest.raises(MissingRelationError) as exc_info:
            parser._lower_create_table(ast.CreateStmt(), ctx, 0)
        assert exc_info.value.message == "CREATE TABLE missing relation"

        with pytest.raises(MissingRelationError):
            parser._lower_alter_table(parser.parse_sql_schema(""), ast.AlterTableStmt())

    def test_missing_column_name(self, parser: SQLParser) -> None:
        """Column definitions without a name are rejected."""
        stmt = ast.CreateStmt(
            relation=ast.RangeVar(relname="t"),
            tableElts=(
                ast.ColumnDef(colname=None, typeName=ast.TypeName(names=(ast.String(sval="text"),))),
            ),
        )

        with pytest.raises(MissingColumnNameError):
            parser._lower_create_table(stmt, LoweringContext(sql=""), 0)


class TestPositions:
    """Statement start and byte-based columns."""

    def test_statement_start_skips_comments(self) -> None:
        sql = "CREATE TABLE a (id int);\n  -- b\n  /* c */ CREATE TABLE b (id int);"

        assert statement_start(sql, 0, 23) == 0
        assert statement_start(sql, 24, 0) == sql.index("CREATE TABLE b")

    def test_statement_start_without_tokens(self) -> None:
        """Blank remainder falls back to the given location."""
        assert statement_start("   ", 0, 0) == 0

    def test_comment_with_multibyte_character(self, parser: SQLParser) -> None:
        """é is two bytes, so the table starts at byte column 10."""
        schema = parser.parse_sql_schema("/* é */ CREATE TABLE b (id int);")

        assert schema.tables[0].source_location == SourceLocation("", 1, 10)

    def test_multibyte_literal_in_previous_statement(self, parser: SQLParser) -> None:
        schema = parser.parse_sql_schema("SELECT 'ééé'; CREATE TABLE t (id int);")

        assert schema.tables[0].source_location == SourceLocation("", 1, 18)
