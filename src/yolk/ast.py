from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, Tuple

from yolk.number import ONE, ZERO, YololNumber

# =========================
# Operators
# =========================


class PrefixOp(Enum):
    NEG = "-"
    NOT = "not"
    ABS = "abs"
    SQRT = "sqrt"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"

    @property
    def precedence(self) -> int:
        return 100 if self is PrefixOp.NEG else 90

    @property
    def is_alpha(self) -> bool:
        return self.value.isalpha()

    def evaluate(self, operand: YololNumber) -> YololNumber:
        return PREFIX_KERNELS[self](operand)

    def __str__(self):
        return self.value


class InfixOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    EXP = "^"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "=="
    NE = "!="
    AND = "and"
    OR = "or"

    @property
    def precedence(self) -> int:
        return INFIX_PRECEDENCE[self]

    @property
    def is_alpha(self) -> bool:
        return self.value.isalpha()

    @property
    def is_associative(self) -> bool:
        # (a op b) op c == a op (b op c), so a same-op right operand needs no parens.
        # MUL is excluded: each product truncates.
        return self in (InfixOp.ADD, InfixOp.AND, InfixOp.OR)

    @property
    def is_right_assoc(self) -> bool:
        return self is InfixOp.EXP

    def evaluate(self, lhs: YololNumber, rhs: YololNumber) -> YololNumber:
        return INFIX_KERNELS[self](lhs, rhs)

    def __str__(self):
        return self.value


# Target-language binding strength (higher binds tighter).
INFIX_PRECEDENCE: Dict[InfixOp, int] = {
    InfixOp.EXP: 80,
    InfixOp.MUL: 70,
    InfixOp.DIV: 70,
    InfixOp.MOD: 70,
    InfixOp.ADD: 60,
    InfixOp.SUB: 60,
    InfixOp.LT: 50,
    InfixOp.LE: 50,
    InfixOp.GT: 50,
    InfixOp.GE: 50,
    InfixOp.EQ: 40,
    InfixOp.NE: 40,
    InfixOp.OR: 30,
    InfixOp.AND: 20,
}

PREFIX_KERNELS: Dict[PrefixOp, Callable[[YololNumber], YololNumber]] = {
    PrefixOp.NEG: operator.neg,
    PrefixOp.NOT: YololNumber.logical_not,
    PrefixOp.ABS: operator.abs,
    PrefixOp.SQRT: YololNumber.sqrt,
    PrefixOp.SIN: YololNumber.sin,
    PrefixOp.COS: YololNumber.cos,
    PrefixOp.TAN: YololNumber.tan,
    PrefixOp.ASIN: YololNumber.asin,
    PrefixOp.ACOS: YololNumber.acos,
    PrefixOp.ATAN: YololNumber.atan,
}

INFIX_KERNELS: Dict[InfixOp, Callable[[YololNumber, YololNumber], YololNumber]] = {
    InfixOp.ADD: operator.add,
    InfixOp.SUB: operator.sub,
    InfixOp.MUL: operator.mul,
    InfixOp.DIV: operator.truediv,
    InfixOp.MOD: operator.mod,
    InfixOp.EXP: operator.pow,
    InfixOp.LT: YololNumber.lt,
    InfixOp.LE: YololNumber.le,
    InfixOp.GT: YololNumber.gt,
    InfixOp.GE: YololNumber.ge,
    InfixOp.EQ: YololNumber.equals,
    InfixOp.NE: YololNumber.not_equals,
    InfixOp.AND: YololNumber.logical_and,
    InfixOp.OR: YololNumber.logical_or,
}

# Builtin reductions: name -> (combining op, identity element)
FOLDS: Dict[str, Tuple[InfixOp, YololNumber]] = {
    "sum": (InfixOp.ADD, ZERO),
    "product": (InfixOp.MUL, ONE),
}


# =========================
# Source AST (Yolk)
# =========================

class YolkExpr:
    pass


def _wrap(e: YolkExpr) -> str:
    return f"({e})" if isinstance(e, InfixAst) else str(e)


@dataclass(frozen=True)
class PrefixAst(YolkExpr):
    op: PrefixOp
    expr: YolkExpr

    def __str__(self):
        sep = " " if self.op.is_alpha else ""
        return f"{self.op}{sep}{_wrap(self.expr)}"


@dataclass(frozen=True)
class InfixAst(YolkExpr):
    lhs: YolkExpr
    op: InfixOp
    rhs: YolkExpr

    def __str__(self):
        return f"{_wrap(self.lhs)} {self.op} {_wrap(self.rhs)}"


@dataclass(frozen=True)
class CallAst(YolkExpr):
    ident: str
    args: Tuple[YolkExpr, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def __str__(self):
        return f"{self.ident}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class FoldAst(YolkExpr):
    op: InfixOp
    args: Tuple[YolkExpr, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def ident(self) -> str:
        return next(name for name, (op, _) in FOLDS.items() if op is self.op)

    def __str__(self):
        return f"{self.ident}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class IdentAst(YolkExpr):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class LiteralAst(YolkExpr):
    value: YololNumber

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class ArrayAst(YolkExpr):
    exprs: Tuple[YolkExpr, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "exprs", tuple(self.exprs))

    def __str__(self):
        return f"[{', '.join(str(e) for e in self.exprs)}]"


class YolkStmt:
    pass


@dataclass(frozen=True)
class ImportAst(YolkStmt):
    ident: str

    def __str__(self):
        return f"import {self.ident};"


@dataclass(frozen=True)
class DefineAst(YolkStmt):
    ident: str
    params: Tuple[str, ...]
    body: YolkExpr

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))

    def __str__(self):
        return f"define {self.ident}({', '.join(self.params)}) = {self.body};"


@dataclass(frozen=True)
class LetAst(YolkStmt):
    ident: str
    expr: YolkExpr

    def __str__(self):
        return f"let {self.ident} = {self.expr};"


@dataclass(frozen=True)
class ExportAst(YolkStmt):
    ident: str

    def __str__(self):
        return f"export {self.ident};"


@dataclass(frozen=True)
class ProgramAst:
    stmts: Tuple[YolkStmt, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "stmts", tuple(self.stmts))

    def __iter__(self) -> Iterator[YolkStmt]:
        return iter(self.stmts)

    def __len__(self) -> int:
        return len(self.stmts)

    def __str__(self):
        return "\n".join(str(s) for s in self.stmts)


# =========================
# Target AST (Yolol)
# =========================

class YololExpr:
    pass


@dataclass(frozen=True)
class PrefixExpr(YololExpr):
    op: PrefixOp
    expr: YololExpr


@dataclass(frozen=True)
class InfixExpr(YololExpr):
    lhs: YololExpr
    op: InfixOp
    rhs: YololExpr


@dataclass(frozen=True)
class Ident(YololExpr):
    name: str


@dataclass(frozen=True)
class Literal(YololExpr):
    value: YololNumber


@dataclass(frozen=True)
class Assign:
    ident: str
    expr: YololExpr
