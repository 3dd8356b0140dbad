import logging
import sys

from sql_calc_engine.calcconfig import CalcConfig
from sql_calc_engine.calcengine import exec_query
from sql_calc_engine.calcerrors import CalcError
from sql_calc_engine.calcutils import (
    SUPPORTED_FUNCTIONS,
    SUPPORTED_OPERATORS,
    SUPPORTED_STATEMENTS,
    VERSION,
)


BANNER_LINE = "*" * 40

HELP_TEXT = f"""
{BANNER_LINE}
WELCOME TO THE SQL ENGINE

HELP: -h, --help
GET VERSION: -v, --version


{"-" * 40}
STATEMENTS: {", ".join(SUPPORTED_STATEMENTS)}
OPERATORS: {", ".join(SUPPORTED_OPERATORS)}
FUNCS: {", ".join(SUPPORTED_FUNCTIONS)}
{BANNER_LINE}
"""

DEFAULT_TEXT = f"""
{BANNER_LINE}
SQL ENGINE
PLEASE, TEXT ME COMMAND
{BANNER_LINE}
"""


def main(argv: list[str] | None = None) -> int:
    """
    Entry point of the sqlcalc command.
    All arguments are joined to one query, e.g. sqlcalc "SELECT SQRT(16) > SQRT(4)".
    """
    config = CalcConfig()
    try:
        log_level = config.get_log_level()
    except ValueError as error:
        print(f"Invalid configuration: {error}")
        return 2
    logging.basicConfig(level=log_level, format=config.get_log_format())

    args = sys.argv[1:] if argv is None else argv

    if not args:
        print(DEFAULT_TEXT)
        return 0

    match args[0]:
        case "-v" | "--version":
            print(VERSION)
            return 0
        case "-h" | "--help":
            print(HELP_TEXT)
            return 0

    query = " ".join(args)
    logging.debug(f"sqlcalc query='{query}'")

    try:
        print(exec_query(query))
    except CalcError as error:
        print(error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
