from functools import lru_cache
import logging

from sql_calc_engine.calcast import Query, Select, Statement, UnnamedExpr
from sql_calc_engine.calcerrors import CalcSqlParseError, InvalidRequestFormatError
from sql_calc_engine.calcevaluator import CalcEvaluator
from sql_calc_engine.calcparser import CalcSqlParser
from sql_calc_engine.calcresult import CalcResult


class CalcEngine:
    """
    class for running a query text through parser and evaluator.
    Only the first expression of a single SELECT is evaluated.
    """

    def __init__(self):
        self.parser = CalcSqlParser()
        self.evaluator = CalcEvaluator()

    def execute(self, query: str) -> CalcResult:
        """
        Evaluates a SQL text to a CalcResult.
        Raises InvalidRequestFormatError if the text is no single-expression SELECT,
        or any other CalcError the evaluation ends with.
        Args:
            query (str): SQL text, e.g. "SELECT 1 + 1".
        """
        try:
            statements = self.parser.parse(query)
        except CalcSqlParseError as e:
            logging.debug(f"CalcEngine.execute parser error: {e.__cause__}")
            raise InvalidRequestFormatError("It is not SQL") from e

        if not statements:
            raise InvalidRequestFormatError("It is not SQL")

        if len(statements) > 1:
            logging.debug(f"CalcEngine.execute ignoring {len(statements) - 1} statement(s) after the first one")

        return self.execute_statement(statements[0])

    def execute_statement(self, statement: Statement) -> CalcResult:
        match statement:
            case Query(body=Select() as select):
                return self.execute_select(select)

            case Query():
                raise InvalidRequestFormatError("only SELECT is supported")

            case _:
                raise InvalidRequestFormatError("only Queries are supported")

    def execute_select(self, select: Select) -> CalcResult:
        if not select.projection:
            raise InvalidRequestFormatError("SELECT must have an expression")

        if len(select.projection) > 1:
            logging.debug(f"CalcEngine.execute_select ignoring {len(select.projection) - 1} projection item(s)")

        match select.projection[0]:
            case UnnamedExpr(expr=expr):
                try:
                    return self.evaluator.calc(expr)
                except RecursionError as e:
                    logging.debug(f"CalcEngine.execute_select expression too deep: {e}")
                    raise InvalidRequestFormatError("expression is nested too deeply") from e

            case _:
                raise InvalidRequestFormatError("only Unnamed expressions are supported")


@lru_cache(maxsize=1)
def _default_engine() -> CalcEngine:
    return CalcEngine()


def exec_query(query: str) -> CalcResult:
    """Evaluates a SQL text with a shared CalcEngine, see CalcEngine.execute."""
    return _default_engine().execute(query)
