from lark import Token, v_args
from lark.visitors import Transformer_NonRecursive

from sql_calc_engine.calcast import (
    Assignment,
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
    OrderByItem,
    QualifiedWildcard,
    Query,
    Select,
    SetOperation,
    SetOperator,
    Subquery,
    TableRef,
    UnaryOp,
    UnaryOperator,
    UnnamedArg,
    UnnamedExpr,
    Update,
    Values,
    Wildcard,
)


@v_args(inline=True)
class CalcSqlTransformer(Transformer_NonRecursive):
    """
    Converts the Lark parse tree of CalcSqlParser into calcast nodes, bottom up and without recursion.
    Optional parts of a rule arrive as None (maybe_placeholders).
    """

    def start(self, *statements):
        return [statement for statement in statements if statement is not None]

    # queries

    def query(self, body, order_by, limit):
        return Query(body=body, order_by=order_by or (), limit=limit)

    def set_operation(self, left, operator, right):
        op, all_rows = operator
        return SetOperation(op=op, left=left, right=right, all=all_rows)

    def set_operator(self, op: Token, quantifier: Token | None):
        return SetOperator[op.type], quantifier is not None and quantifier.type == "ALL"

    def select(self, distinct, projection, from_, selection, group_by, having):
        return Select(
            projection=projection,
            distinct=bool(distinct),
            from_=from_ or (),
            selection=selection,
            group_by=group_by or (),
            having=having,
        )

    def select_modifier(self, modifier: Token):
        return modifier.type == "DISTINCT"

    def projection(self, *items):
        return tuple(items)

    def wildcard(self):
        return Wildcard()

    def qualified_wildcard(self, name):
        return QualifiedWildcard(name)

    def expr_with_alias(self, expr, alias):
        return ExprWithAlias(expr, alias)

    def unnamed_expr(self, expr):
        return UnnamedExpr(expr)

    def from_clause(self, *tables):
        return tuple(tables)

    def table_ref(self, name, alias=None):
        return TableRef(name, alias)

    def where_clause(self, expr):
        return expr

    def group_by_clause(self, *exprs):
        return tuple(exprs)

    def having_clause(self, expr):
        return expr

    def order_by_clause(self, *items):
        return tuple(items)

    def order_item(self, expr, direction: Token | None):
        return OrderByItem(expr, asc=direction is None or direction.type == "ASC")

    def limit_clause(self, expr):
        return expr

    # other statements

    def insert(self, table, columns, source):
        return Insert(table=table, columns=columns or (), source=source)

    def column_list(self, *columns):
        return tuple(columns)

    def values(self, *rows):
        return Values(tuple(rows))

    def row(self, *exprs):
        return tuple(exprs)

    def update(self, table, *rest):
        *assignments, selection = rest
        return Update(table=table, assignments=tuple(assignments), selection=selection)

    def assignment(self, column, value):
        return Assignment(column, value)

    def delete(self, table, selection):
        return Delete(table=table, selection=selection)

    # operators

    def or_op(self, left, right):
        return BinaryOp(left, BinaryOperator.OR, right)

    def and_op(self, left, right):
        return BinaryOp(left, BinaryOperator.AND, right)

    def not_op(self, expr):
        return UnaryOp(UnaryOperator.NOT, expr)

    def eq(self, left, right):
        return BinaryOp(left, BinaryOperator.EQ, right)

    def neq(self, left, right):
        return BinaryOp(left, BinaryOperator.NOTEQ, right)

    def le(self, left, right):
        return BinaryOp(left, BinaryOperator.LTEQ, right)

    def lt(self, left, right):
        return BinaryOp(left, BinaryOperator.LT, right)

    def ge(self, left, right):
        return BinaryOp(left, BinaryOperator.GTEQ, right)

    def gt(self, left, right):
        return BinaryOp(left, BinaryOperator.GT, right)

    def add(self, left, right):
        return BinaryOp(left, BinaryOperator.PLUS, right)

    def sub(self, left, right):
        return BinaryOp(left, BinaryOperator.MINUS, right)

    def mul(self, left, right):
        return BinaryOp(left, BinaryOperator.MULTIPLY, right)

    def div(self, left, right):
        return BinaryOp(left, BinaryOperator.DIVIDE, right)

    def mod(self, left, right):
        return BinaryOp(left, BinaryOperator.MODULO, right)

    def concat(self, left, right):
        return BinaryOp(left, BinaryOperator.STRINGCONCAT, right)

    def neg(self, expr):
        return UnaryOp(UnaryOperator.MINUS, expr)

    def pos(self, expr):
        return UnaryOp(UnaryOperator.PLUS, expr)

    # atoms

    def nested(self, expr):
        return Nested(expr)

    def subquery(self, query):
        return Subquery(query)

    def identifier(self, name):
        return Identifier(name)

    def number(self, token: Token):
        return Literal(LiteralKind.NUMBER, str(token))

    def single_quoted_string(self, token: Token):
        return Literal(LiteralKind.SINGLEQUOTEDSTRING, token[1:-1].replace("''", "'"))

    def double_quoted_string(self, token: Token):
        return Literal(LiteralKind.DOUBLEQUOTEDSTRING, token[1:-1].replace('""', '"'))

    def boolean(self, token: Token):
        return Literal(LiteralKind.BOOLEAN, token.lower())

    def null(self):
        return Literal(LiteralKind.NULL, "NULL")

    def function(self, name, args):
        return Function(name, args or ())

    def function_args(self, *args):
        return tuple(args)

    def named_arg(self, name, expr):
        return NamedArg(name, expr)

    def unnamed_arg(self, expr):
        return UnnamedArg(expr)

    def cast(self, expr, data_type):
        return Cast(expr, data_type)

    def data_type(self, name: Token, *params: Token):
        return DataType(name.upper(), tuple(str(param) for param in params))

    def case(self, operand, *rest):
        *conditions, else_result = rest
        return Case(operand, tuple(conditions), else_result)

    def when_clause(self, condition, result):
        return condition, result

    def object_name(self, *parts):
        return tuple(parts)

    def ident(self, token: Token):
        if token.type == "QUOTED_IDENT":
            return token[1:-1]
        return str(token)
