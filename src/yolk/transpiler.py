from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Set, Tuple

from yolk.ast import (
    ArrayAst,
    Assign,
    CallAst,
    DefineAst,
    ExportAst,
    FOLDS,
    FoldAst,
    IdentAst,
    ImportAst,
    InfixAst,
    LetAst,
    LiteralAst,
    PrefixAst,
    ProgramAst,
    YolkExpr,
    YolkStmt,
)
from yolk.environment import Environment
from yolk.errors import NestedArrays, RecursiveCall, YolkError
from yolk.format import LINE_LIMIT, format_program
from yolk.function import Function
from yolk.optimizer import optimize
from yolk.value import Scalar, Value, Vector, reduce_values

# ==========================================
# Output
# ==========================================


@dataclass(frozen=True)
class YololProgram:
    """Ordered target statements plus the exported target identifiers."""
    stmts: Tuple[Assign, ...] = ()
    roots: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "stmts", tuple(self.stmts))
        object.__setattr__(self, "roots", frozenset(self.roots))

    def optimize(self) -> YololProgram:
        return YololProgram(optimize(self.stmts, self.roots), self.roots)

    def format(self, line_limit: int = LINE_LIMIT) -> str:
        return format_program(self.stmts, line_limit=line_limit)


# ==========================================
# Transpiler
# ==========================================


class Transpiler:
    """Lowers one Yolk program. Owns the Environment; use a fresh instance per program."""

    def __init__(self):
        self.env = Environment()
        self.assigns: List[Assign] = []
        # functions already checked for call cycles
        self._acyclic: Set[str] = set()

    def transpile(self, program: ProgramAst) -> YololProgram:
        for stmt in program:
            try:
                self.transpile_stmt(stmt)
            except YolkError as e:
                e.stmt = stmt
                raise
        return YololProgram(tuple(self.assigns), frozenset(self.env.roots))

    def transpile_stmt(self, stmt: YolkStmt) -> None:
        if isinstance(stmt, ImportAst):
            self.env.import_variable(stmt.ident)
        elif isinstance(stmt, DefineAst):
            self.env.define(stmt.ident, Function(stmt.ident, stmt.params, stmt.body))
        elif isinstance(stmt, LetAst):
            value = self.expr_to_value(stmt.expr)
            self.assigns.extend(self.env.let_value(stmt.ident, value))
        elif isinstance(stmt, ExportAst):
            self.env.export(stmt.ident)
        else:
            raise TypeError(f"expected Yolk statement, but got: {stmt!r}")

    def expr_to_value(self, expr: YolkExpr) -> Value:
        if isinstance(expr, PrefixAst):
            return self.expr_to_value(expr.expr).apply_prefix_op(expr.op)

        if isinstance(expr, InfixAst):
            lhs = self.expr_to_value(expr.lhs)
            rhs = self.expr_to_value(expr.rhs)
            return lhs.apply_infix_op(expr.op, rhs)

        if isinstance(expr, FoldAst):
            return self._fold_to_value(expr)

        if isinstance(expr, CallAst):
            if expr.ident in FOLDS:
                op, _ = FOLDS[expr.ident]
                return self._fold_to_value(FoldAst(op, expr.args))
            return self._call_to_value(expr)

        if isinstance(expr, IdentAst):
            return self.env.variable(expr.name)

        if isinstance(expr, LiteralAst):
            return Scalar.from_number(expr.value)

        if isinstance(expr, ArrayAst):
            scalars = []
            for e in expr.exprs:
                value = self.expr_to_value(e)
                if isinstance(value, Vector):
                    raise NestedArrays()
                scalars.append(value)
            return Vector(tuple(scalars))

        raise TypeError(f"expected Yolk expression, but got: {expr!r}")

    def _fold_to_value(self, expr: FoldAst) -> Scalar:
        _, identity = next(fold for fold in FOLDS.values() if fold[0] is expr.op)
        values = [self.expr_to_value(arg) for arg in expr.args]
        return reduce_values(values, expr.op, Scalar.from_number(identity))

    def _call_to_value(self, expr: CallAst) -> Value:
        function = self.env.function(expr.ident)
        self._check_recursion(function)
        return self.expr_to_value(function.call(expr.args))

    def _check_recursion(self, function: Function) -> None:
        """Raises RecursiveCall if `function` can reach itself through the bodies it calls."""
        if function.ident in self._acyclic:
            return
        seen: Set[str] = set()
        stack = list(function.callees())
        while stack:
            ident = stack.pop()
            if ident == function.ident:
                raise RecursiveCall(function.ident)
            if ident in seen or ident not in self.env.functions:
                continue
            seen.add(ident)
            stack.extend(self.env.functions[ident].callees())
        self._acyclic.add(function.ident)


def transpile(program: ProgramAst) -> YololProgram:
    return Transpiler().transpile(program)
