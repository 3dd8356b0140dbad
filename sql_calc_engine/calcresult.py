from dataclasses import dataclass

from sql_calc_engine.calcutils import format_number


@dataclass(frozen=True)
class CalcResult:
    """
    class for the scalar result of an evaluated expression.
    Only the subclasses Num, Bool and Str are ever created.
    """

    def render_value(self) -> str:
        raise NotImplementedError("render_value must be implemented by the result type")

    def __str__(self) -> str:
        return f"Result: {self.render_value()}"


@dataclass(frozen=True)
class Num(CalcResult):
    value: float

    def render_value(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Bool(CalcResult):
    value: bool

    def render_value(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Str(CalcResult):
    value: str

    def render_value(self) -> str:
        return self.value
