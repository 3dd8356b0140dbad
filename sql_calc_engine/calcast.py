from dataclasses import dataclass
from enum import Enum

from sql_calc_engine.calcutils import INTEGER_TYPES


class BinaryOperator(Enum):
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"
    STRINGCONCAT = "||"
    GT = ">"
    LT = "<"
    GTEQ = ">="
    LTEQ = "<="
    EQ = "="
    NOTEQ = "<>"
    AND = "AND"
    OR = "OR"


class UnaryOperator(Enum):
    PLUS = "+"
    MINUS = "-"
    NOT = "NOT"


class SetOperator(Enum):
    UNION = "UNION"
    INTERSECT = "INTERSECT"
    EXCEPT = "EXCEPT"


class LiteralKind(Enum):
    NUMBER = "number"
    SINGLEQUOTEDSTRING = "single_quoted_string"
    DOUBLEQUOTEDSTRING = "double_quoted_string"
    BOOLEAN = "boolean"
    NULL = "null"


# Expressions


class Expr:
    """Base class of all expression nodes."""


@dataclass(frozen=True)
class Identifier(Expr):
    parts: tuple[str, ...]


@dataclass(frozen=True)
class Literal(Expr):
    kind: LiteralKind
    text: str


@dataclass(frozen=True)
class BinaryOp(Expr):
    left: Expr
    op: BinaryOperator
    right: Expr


@dataclass(frozen=True)
class UnaryOp(Expr):
    op: UnaryOperator
    expr: Expr


@dataclass(frozen=True)
class Nested(Expr):
    expr: Expr


@dataclass(frozen=True)
class NamedArg:
    name: str
    arg: Expr


@dataclass(frozen=True)
class UnnamedArg:
    arg: Expr


FunctionArg = NamedArg | UnnamedArg


@dataclass(frozen=True)
class Function(Expr):
    name: tuple[str, ...]
    args: tuple[FunctionArg, ...] = ()

    @property
    def full_name(self) -> str:
        return ".".join(self.name)


@dataclass(frozen=True)
class DataType:
    name: str
    params: tuple[str, ...] = ()

    @property
    def is_integer(self) -> bool:
        return self.name in INTEGER_TYPES


@dataclass(frozen=True)
class Cast(Expr):
    expr: Expr
    data_type: DataType


@dataclass(frozen=True)
class Case(Expr):
    operand: Expr | None
    conditions: tuple[tuple[Expr, Expr], ...]
    else_result: Expr | None = None


@dataclass(frozen=True)
class Subquery(Expr):
    query: "Query"


# Projection items


@dataclass(frozen=True)
class UnnamedExpr:
    expr: Expr


@dataclass(frozen=True)
class ExprWithAlias:
    expr: Expr
    alias: str


@dataclass(frozen=True)
class Wildcard:
    pass


@dataclass(frozen=True)
class QualifiedWildcard:
    name: tuple[str, ...]


SelectItem = UnnamedExpr | ExprWithAlias | Wildcard | QualifiedWildcard


# Query bodies


@dataclass(frozen=True)
class TableRef:
    name: tuple[str, ...]
    alias: str | None = None


@dataclass(frozen=True)
class Select:
    projection: tuple[SelectItem, ...]
    distinct: bool = False
    from_: tuple[TableRef, ...] = ()
    selection: Expr | None = None
    group_by: tuple[Expr, ...] = ()
    having: Expr | None = None


@dataclass(frozen=True)
class SetOperation:
    op: SetOperator
    left: "Select | SetOperation"
    right: Select
    all: bool = False


SetExpr = Select | SetOperation


@dataclass(frozen=True)
class OrderByItem:
    expr: Expr
    asc: bool = True


# Statements


class Statement:
    """Base class of all top level statements."""


@dataclass(frozen=True)
class Query(Statement):
    body: SetExpr
    order_by: tuple[OrderByItem, ...] = ()
    limit: Expr | None = None


@dataclass(frozen=True)
class Values:
    rows: tuple[tuple[Expr, ...], ...]


@dataclass(frozen=True)
class Insert(Statement):
    table: tuple[str, ...]
    columns: tuple[str, ...] = ()
    source: Values | Query | None = None


@dataclass(frozen=True)
class Assignment:
    column: str
    value: Expr


@dataclass(frozen=True)
class Update(Statement):
    table: tuple[str, ...]
    assignments: tuple[Assignment, ...] = ()
    selection: Expr | None = None


@dataclass(frozen=True)
class Delete(Statement):
    table: tuple[str, ...]
    selection: Expr | None = None
