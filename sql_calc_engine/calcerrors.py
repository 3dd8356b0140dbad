from enum import Enum


class CalcErrorKind(Enum):
    INVALIDTYPE = "Invalid Type"
    UNSUPPORTEDOPERATOR = "Unsupported Operator"
    UNSUPPORTEDFUNC = "Unsupported Function"
    INVALIDREQUESTFORMAT = "Invalid Request Format"
    UNEXPECTED = "Unexpected Error"


class CalcError(Exception):
    """
    Base class of all errors an evaluation can end with.
    The kind is used for matching, the message is for humans only.
    """

    kind: CalcErrorKind = CalcErrorKind.UNEXPECTED

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.kind.value}]: {self.message}"


class InvalidTypeError(CalcError):
    kind = CalcErrorKind.INVALIDTYPE


class UnsupportedOperatorError(CalcError):
    kind = CalcErrorKind.UNSUPPORTEDOPERATOR


class UnsupportedFuncError(CalcError):
    kind = CalcErrorKind.UNSUPPORTEDFUNC


class InvalidRequestFormatError(CalcError):
    kind = CalcErrorKind.INVALIDREQUESTFORMAT


class UnexpectedError(CalcError):
    """Evaluation reached a tree shape without a rule. The message is kept for logging only."""

    kind = CalcErrorKind.UNEXPECTED

    def __str__(self) -> str:
        return f"[{self.kind.value}]: Something went wrong"


class CalcSqlParseError(ValueError):
    """Raised by the parser when the text is no valid SQL of the supported dialect."""

    def __init__(self, query: str):
        super().__init__(f"Failed to parse query: {query}")
        self.query = query
