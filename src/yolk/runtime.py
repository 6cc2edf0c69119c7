from typing import Dict, Mapping, Optional, Sequence, Union

from yolk.ast import Assign, Ident, InfixExpr, Literal, PrefixExpr, YololExpr
from yolk.errors import ExecutionError, NumberError
from yolk.number import ZERO, YololNumber
from yolk.parser import parse_yolol


class Runtime:
    """
    Executes straight-line Yolol assignments.
    Variable names are case-insensitive; unset variables read as 0.
    """

    def __init__(self, inputs: Optional[Mapping[str, YololNumber]] = None):
        self.variables: Dict[str, YololNumber] = {}
        for name, value in (inputs or {}).items():
            self.set(name, value)

    def get(self, name: str) -> YololNumber:
        return self.variables.get(name.lower(), ZERO)

    def set(self, name: str, value: YololNumber) -> None:
        self.variables[name.lower()] = value

    def evaluate(self, expr: YololExpr) -> YololNumber:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Ident):
            return self.get(expr.name)
        if isinstance(expr, PrefixExpr):
            return expr.op.evaluate(self.evaluate(expr.expr))
        if isinstance(expr, InfixExpr):
            return expr.op.evaluate(self.evaluate(expr.lhs), self.evaluate(expr.rhs))
        raise TypeError(f"expected Yolol expression, but got: {expr!r}")

    def execute(self, program: Union[str, Sequence[Assign]]) -> Dict[str, YololNumber]:
        stmts = parse_yolol(program) if isinstance(program, str) else program
        for stmt in stmts:
            try:
                self.set(stmt.ident, self.evaluate(stmt.expr))
            except NumberError as e:
                raise ExecutionError(f"{stmt.ident}: {e.msg}") from e
        return dict(self.variables)
