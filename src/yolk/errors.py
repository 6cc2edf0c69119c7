from typing import Any, Optional


class YolkError(Exception):
    """
    Root of every error raised while compiling a Yolk program.
    stmt: the source statement being transpiled when the error surfaced, if any.
    """

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg
        self.stmt: Optional[Any] = None

    def __str__(self):
        if self.stmt is None:
            return self.msg
        return f"{self.msg}\n  in statement: {self.stmt}"


# =========================
# Syntax
# =========================

class LexError(YolkError):
    pass


class ParseError(YolkError):
    pass


# =========================
# Names
# =========================

class NameError_(YolkError):
    def __init__(self, msg: str, ident: str):
        super().__init__(f"{msg}: {ident}")
        self.ident = ident


class ImportTwice(NameError_):
    def __init__(self, ident: str):
        super().__init__("cannot import variable twice", ident)


class ImportExisting(NameError_):
    def __init__(self, ident: str):
        super().__init__("cannot import existing variable", ident)


class ImportKeyword(NameError_):
    def __init__(self, ident: str):
        super().__init__("cannot import keyword", ident)


class DefineExisting(NameError_):
    def __init__(self, ident: str):
        super().__init__("cannot define existing function", ident)


class DefineKeyword(NameError_):
    def __init__(self, ident: str):
        super().__init__("cannot define keyword", ident)


class AssignExisting(NameError_):
    def __init__(self, ident: str):
        super().__init__("cannot assign to existing variable", ident)


class AssignKeyword(NameError_):
    def __init__(self, ident: str):
        super().__init__("cannot assign to keyword", ident)


class AssignConflict(NameError_):
    def __init__(self, ident: str, existing: str):
        super().__init__(f"name conflicts with '{existing}' (identifiers are case-insensitive)", ident)
        self.existing = existing


class UndefinedVariable(NameError_):
    def __init__(self, ident: str):
        super().__init__("undefined variable", ident)


class UndefinedFunction(NameError_):
    def __init__(self, ident: str):
        super().__init__("undefined function", ident)


class ExportTwice(NameError_):
    def __init__(self, ident: str):
        super().__init__("cannot export variable twice", ident)


# =========================
# Functions
# =========================

class FunctionError(YolkError):
    def __init__(self, msg: str, func: str):
        super().__init__(f"{msg}: {func}")
        self.func = func


class DuplicateParams(FunctionError):
    def __init__(self, func: str, param: str):
        super().__init__(f"duplicate parameter '{param}' in function", func)
        self.param = param


class UndefinedLocal(FunctionError):
    def __init__(self, func: str, ident: str):
        super().__init__(f"undefined local '{ident}' in function", func)
        self.ident = ident


class RecursiveCall(FunctionError):
    def __init__(self, func: str):
        super().__init__("recursive call in function", func)


class WrongNumberOfArgs(FunctionError):
    def __init__(self, func: str, expected: int, got: int):
        super().__init__(f"expected {expected} argument(s) but got {got} for function", func)
        self.expected = expected
        self.got = got


# =========================
# Values
# =========================

class ValueError_(YolkError):
    pass


class MismatchedArrays(ValueError_):
    def __init__(self, op: Any, lhs_len: int, rhs_len: int):
        super().__init__(f"mismatched array lengths for '{op}': {lhs_len} and {rhs_len}")
        self.op = op


class NestedArrays(ValueError_):
    def __init__(self):
        super().__init__("cannot nest arrays")


# =========================
# Numbers
# =========================

class NumberError(YolkError):
    pass


class NumberFormatError(NumberError):
    def __init__(self, text: str, reason: str):
        super().__init__(f"invalid number {text!r}: {reason}")
        self.text = text


class DivisionByZero(NumberError):
    def __init__(self, op: str):
        super().__init__(f"division by zero in '{op}'")
        self.op = op


class DomainError(NumberError):
    def __init__(self, op: str, operand: Any):
        super().__init__(f"'{op}' is undefined for {operand}")
        self.op = op


# =========================
# Passes
# =========================

class OptimizerError(YolkError):
    pass


class ExecutionError(YolkError):
    pass
