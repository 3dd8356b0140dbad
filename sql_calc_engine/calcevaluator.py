import math

from sql_calc_engine.calcast import (
    BinaryOp,
    BinaryOperator,
    Cast,
    Expr,
    Function,
    Literal,
    LiteralKind,
    NamedArg,
    Nested,
    UnnamedArg,
)
from sql_calc_engine.calcerrors import (
    InvalidTypeError,
    UnexpectedError,
    UnsupportedFuncError,
    UnsupportedOperatorError,
)
from sql_calc_engine.calcresult import Bool, CalcResult, Num, Str
from sql_calc_engine.calcutils import parse_float


class CalcEvaluator:
    """
    class for reducing an expression tree to a single CalcResult.
    The evaluator holds no state, one instance can be shared by any number of callers.
    """

    def calc(self, expr: Expr) -> CalcResult:
        """
        Evaluates recursively a (sub-) tree depending on the node type of its root.
        Raises a CalcError subclass if the tree can't be reduced.
        Args:
            expr (Expr): The (sub-) tree to evaluate.
        """
        match expr:
            case BinaryOp(left=left, op=op, right=right):
                return self.calc_binary_operation(left, op, right)

            case Function():
                return self.calc_function(expr)

            case Literal():
                return self.parse_primitive_value(expr)

            case Nested(expr=inner):
                return self.calc(inner)

            case Cast(expr=inner, data_type=data_type) if data_type.is_integer:
                return self.cast(inner)

            case _:
                raise UnexpectedError(f"no rule for expression {type(expr).__name__}")

    def calc_binary_operation(self, left: Expr, op: BinaryOperator, right: Expr) -> CalcResult:
        """
        Evaluates a binary operation. A left-deep chain like 1 + 1 + ... + 1 is folded in a loop,
        innermost operation first, so its length doesn't add to the stack depth.
        The left operand is checked first, its error wins if both sides fail.
        """
        operations = [(op, right)]
        while isinstance(left, BinaryOp):
            operations.append((left.op, left.right))
            left = left.left

        result = self.calc(left)
        for op, right in reversed(operations):
            left_value = self.to_num(result)
            right_value = self.parse_num(right)
            result = self.apply(op, left_value, right_value)
        return result

    def parse_num(self, expr: Expr) -> float:
        return self.to_num(self.calc(expr))

    @staticmethod
    def to_num(result: CalcResult) -> float:
        if isinstance(result, Num):
            return result.value
        raise InvalidTypeError("Binary operators supported by Numbers only")

    def apply(self, op: BinaryOperator, left: float, right: float) -> CalcResult:
        match op:
            case BinaryOperator.PLUS:
                return Num(left + right)
            case BinaryOperator.MINUS:
                return Num(left - right)
            case BinaryOperator.MULTIPLY:
                return Num(left * right)
            case BinaryOperator.GT:
                return Bool(left > right)
            case _:
                raise UnsupportedOperatorError(f"You try to use unsupported operator '{op.value}'")

    def calc_function(self, func: Function) -> CalcResult:
        if func.full_name != "SQRT":
            raise UnsupportedFuncError(f"Only SQRT func is supported, got '{func.full_name}'")

        if not func.args:
            raise InvalidTypeError("SQRT must have an argument")
        if len(func.args) > 1:
            raise InvalidTypeError("SQRT takes exactly one argument")

        match func.args[0]:
            case NamedArg(arg=arg) | UnnamedArg(arg=arg):
                result = self.calc(arg)
            case _:
                raise UnexpectedError(f"no rule for function argument {type(func.args[0]).__name__}")

        if isinstance(result, Num):
            return Num(self.sqrt(result.value))
        raise InvalidTypeError("SQRT supports only Number")

    @staticmethod
    def sqrt(value: float) -> float:
        # NaN for negative input, like an IEEE square root
        if not value >= 0:
            return math.nan
        return math.sqrt(value)

    def parse_primitive_value(self, value: Literal) -> CalcResult:
        match value.kind:
            case LiteralKind.NUMBER:
                number = parse_float(value.text)
                if number is None:
                    raise InvalidTypeError(f"'{value.text}' is not a valid number")
                return Num(number)

            case LiteralKind.SINGLEQUOTEDSTRING | LiteralKind.DOUBLEQUOTEDSTRING:
                return Str(value.text)

            case _:
                raise InvalidTypeError("You try to use unsupported type")

    def cast(self, expr: Expr) -> CalcResult:
        result = self.calc(expr)
        if not isinstance(result, Str):
            raise InvalidTypeError("CAST supports only String")

        number = parse_float(result.value)
        if number is None:
            raise InvalidTypeError("CAST supports only Number")
        return Num(number)
