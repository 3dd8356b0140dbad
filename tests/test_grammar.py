import pytest

from sql_calc_engine.calcast import (
    BinaryOp,
    BinaryOperator,
    Case,
    Cast,
    DataType,
    Delete,
    ExprWithAlias,
    Function,
    Identifier,
    Insert,
    Literal,
    LiteralKind,
    NamedArg,
    Nested,
    QualifiedWildcard,
    Query,
    Select,
    SetOperation,
    SetOperator,
    Subquery,
    UnaryOp,
    UnaryOperator,
    UnnamedArg,
    UnnamedExpr,
    Update,
    Values,
    Wildcard,
)
from sql_calc_engine.calcerrors import CalcSqlParseError
from sql_calc_engine.calcparser import CalcSqlParser


@pytest.fixture(scope="module")
def parser():
    return CalcSqlParser()


def first_expr(parser, query):
    statement = parser.parse(query)[0]
    return statement.body.projection[0].expr


sample_queries = [
    "SELECT 1 + 1",
    "select 1 + 1 * 3",
    "SELECT (1 + (2+3+4)-5)+(6+7)",
    "SELECT SQRT(5 + 2 * 4)",
    "SELECT SQRT(16) > SQRT(4)",
    "SELECT CAST('2' as int)",
    "SELECT CAST(x AS VARCHAR(10))",
    "SELECT * FROM table",
    "SELECT t.* FROM t AS x, u y WHERE a = 1 AND NOT b <> 2 OR c >= 3",
    "SELECT DISTINCT a, b AS bee FROM t GROUP BY a, b HAVING a > 1 ORDER BY a DESC, b LIMIT 10",
    "SELECT 1 UNION ALL SELECT 2 EXCEPT SELECT 3",
    "SELECT CASE WHEN a > 1 THEN 'x' ELSE 'y' END",
    "SELECT (SELECT 1)",
    "SELECT f(x => 1, 2), `quoted`.name, -1, +2, 'it''s', \"dq\", TRUE, null",
    "SELECT 1 -- trailing comment",
    "INSERT INTO table",
    "INSERT INTO t (a, b) VALUES (1, 2), (3, 4)",
    "INSERT INTO t SELECT 1",
    "UPDATE t SET a = 1, b = 'x' WHERE c < 2",
    "DELETE FROM t WHERE a <= 1",
    "SELECT 1; SELECT 2;",
    "",
    ";",
]

invalid_queries = [
    "Give the data",
    "SELECT",
    "SELECT 1 +",
    "SELECT (1",
    "SELECT 'unterminated",
    "SELECT 1 FROM",
    "DROP TABLE t",
]


@pytest.mark.parametrize("query", sample_queries)
def test_sample_queries_are_valid(parser, query):
    assert parser.is_valid(query)
    assert isinstance(parser.parse(query), list)


@pytest.mark.parametrize("query", invalid_queries)
def test_invalid_queries_raise(parser, query):
    assert not parser.is_valid(query)
    with pytest.raises(CalcSqlParseError) as excinfo:
        parser.parse(query)
    assert excinfo.value.query == query
    assert isinstance(excinfo.value, ValueError)


class TestStatements:

    def test_empty_text_gives_no_statements(self, parser):
        assert parser.parse("") == []
        assert parser.parse(" ; ; ") == []

    def test_statement_list(self, parser):
        statements = parser.parse("SELECT 1; SELECT 2")
        assert len(statements) == 2
        assert all(isinstance(statement, Query) for statement in statements)

    def test_select_clauses(self, parser):
        query = parser.parse("SELECT DISTINCT a AS x FROM t WHERE a > 1 GROUP BY a HAVING a > 2 ORDER BY a DESC LIMIT 5")[0]
        select = query.body
        assert isinstance(select, Select)
        assert select.distinct
        assert select.projection == (ExprWithAlias(Identifier(("a",)), "x"),)
        assert select.from_[0].name == ("t",)
        assert select.selection == BinaryOp(Identifier(("a",)), BinaryOperator.GT, Literal(LiteralKind.NUMBER, "1"))
        assert select.group_by == (Identifier(("a",)),)
        assert select.having is not None
        assert query.order_by[0].asc is False
        assert query.limit == Literal(LiteralKind.NUMBER, "5")

    def test_wildcards(self, parser):
        projection = parser.parse("SELECT *, t.* FROM t")[0].body.projection
        assert projection == (Wildcard(), QualifiedWildcard(("t",)))

    def test_set_operation(self, parser):
        body = parser.parse("SELECT 1 UNION ALL SELECT 2")[0].body
        assert isinstance(body, SetOperation)
        assert body.op == SetOperator.UNION
        assert body.all

    def test_insert(self, parser):
        statement = parser.parse("INSERT INTO t (a) VALUES (1)")[0]
        assert statement == Insert(("t",), ("a",), Values(((Literal(LiteralKind.NUMBER, "1"),),)))

    def test_insert_without_source(self, parser):
        assert parser.parse("INSERT INTO table")[0] == Insert(("table",))

    def test_update_and_delete(self, parser):
        update = parser.parse("UPDATE t SET a = 1")[0]
        assert isinstance(update, Update)
        assert update.assignments[0].column == "a"
        assert update.selection is None

        delete = parser.parse("DELETE FROM t")[0]
        assert delete == Delete(("t",))


class TestExpressions:

    def test_multiplication_binds_stronger(self, parser):
        expr = first_expr(parser, "SELECT 1 + 1 * 3")
        assert expr == BinaryOp(
            Literal(LiteralKind.NUMBER, "1"),
            BinaryOperator.PLUS,
            BinaryOp(Literal(LiteralKind.NUMBER, "1"), BinaryOperator.MULTIPLY, Literal(LiteralKind.NUMBER, "3")),
        )

    def test_left_associative(self, parser):
        expr = first_expr(parser, "SELECT 1 - 2 - 3")
        assert expr.op == BinaryOperator.MINUS
        assert isinstance(expr.left, BinaryOp)
        assert expr.right == Literal(LiteralKind.NUMBER, "3")

    def test_comparison_binds_weaker_than_sum(self, parser):
        expr = first_expr(parser, "SELECT 1 + 2 > 3")
        assert expr.op == BinaryOperator.GT
        assert expr.left.op == BinaryOperator.PLUS

    def test_nested(self, parser):
        expr = first_expr(parser, "SELECT (1 + 2) * 3")
        assert isinstance(expr.left, Nested)

    @pytest.mark.parametrize(
        "text, op",
        [
            ("=", BinaryOperator.EQ),
            ("!=", BinaryOperator.NOTEQ),
            ("<>", BinaryOperator.NOTEQ),
            ("<", BinaryOperator.LT),
            ("<=", BinaryOperator.LTEQ),
            (">", BinaryOperator.GT),
            (">=", BinaryOperator.GTEQ),
            ("/", BinaryOperator.DIVIDE),
            ("%", BinaryOperator.MODULO),
            ("||", BinaryOperator.STRINGCONCAT),
            ("AND", BinaryOperator.AND),
            ("or", BinaryOperator.OR),
        ],
    )
    def test_operators(self, parser, text, op):
        assert first_expr(parser, f"SELECT 1 {text} 2").op == op

    def test_unary(self, parser):
        assert first_expr(parser, "SELECT -1") == UnaryOp(UnaryOperator.MINUS, Literal(LiteralKind.NUMBER, "1"))
        assert first_expr(parser, "SELECT NOT 1").op == UnaryOperator.NOT

    def test_literals(self, parser):
        assert first_expr(parser, "SELECT 1.5e3") == Literal(LiteralKind.NUMBER, "1.5e3")
        assert first_expr(parser, "SELECT .5") == Literal(LiteralKind.NUMBER, ".5")
        assert first_expr(parser, "SELECT 'it''s'") == Literal(LiteralKind.SINGLEQUOTEDSTRING, "it's")
        assert first_expr(parser, 'SELECT "a""b"') == Literal(LiteralKind.DOUBLEQUOTEDSTRING, 'a"b')
        assert first_expr(parser, "SELECT True") == Literal(LiteralKind.BOOLEAN, "true")
        assert first_expr(parser, "SELECT NULL") == Literal(LiteralKind.NULL, "NULL")

    def test_function(self, parser):
        expr = first_expr(parser, "SELECT SQRT(x => 4, 5)")
        assert expr == Function(
            ("SQRT",),
            (NamedArg("x", Literal(LiteralKind.NUMBER, "4")), UnnamedArg(Literal(LiteralKind.NUMBER, "5"))),
        )
        assert first_expr(parser, "SELECT SQRT()") == Function(("SQRT",))

    def test_cast(self, parser):
        assert first_expr(parser, "SELECT CAST('2' AS int)") == Cast(
            Literal(LiteralKind.SINGLEQUOTEDSTRING, "2"), DataType("INT")
        )
        assert first_expr(parser, "SELECT CAST(a AS varchar(10))").data_type == DataType("VARCHAR", ("10",))

    def test_case(self, parser):
        expr = first_expr(parser, "SELECT CASE a WHEN 1 THEN 'x' END")
        assert isinstance(expr, Case)
        assert expr.operand == Identifier(("a",))
        assert len(expr.conditions) == 1
        assert expr.else_result is None

    def test_subquery(self, parser):
        assert isinstance(first_expr(parser, "SELECT (SELECT 1)"), Subquery)

    def test_identifiers(self, parser):
        assert first_expr(parser, "SELECT `select`.b") == Identifier(("select", "b"))

    def test_keyword_prefix_is_identifier(self, parser):
        assert first_expr(parser, "SELECT selection") == Identifier(("selection",))

    def test_unnamed_expr(self, parser):
        item = parser.parse("SELECT 1")[0].body.projection[0]
        assert item == UnnamedExpr(Literal(LiteralKind.NUMBER, "1"))
