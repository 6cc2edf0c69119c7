from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from yolk.ast import Assign, Ident, InfixExpr, InfixOp, Literal, PrefixExpr, PrefixOp, YololExpr
from yolk.errors import MismatchedArrays
from yolk.number import YololNumber


class Value:
    """A resolved Yolk expression: one target expression, or a fixed-length list of them."""

    def apply_prefix_op(self, op: PrefixOp) -> Value:
        raise NotImplementedError

    def apply_infix_op(self, op: InfixOp, other: Value) -> Value:
        raise NotImplementedError

    def to_assign_stmts(self, ident: str) -> List[Assign]:
        raise NotImplementedError

    def to_reference(self, ident: str) -> Value:
        raise NotImplementedError

    def target_idents(self) -> List[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class Scalar(Value):
    expr: YololExpr

    @classmethod
    def from_ident(cls, ident: str) -> Scalar:
        return cls(Ident(ident))

    @classmethod
    def from_number(cls, number: YololNumber) -> Scalar:
        return cls(Literal(number))

    def apply_prefix_op(self, op: PrefixOp) -> Scalar:
        return Scalar(PrefixExpr(op, self.expr))

    def apply_infix_op(self, op: InfixOp, other: Value) -> Value:
        if isinstance(other, Vector):
            # broadcast: repeat the scalar to the vector's length
            return Vector((self,) * len(other)).apply_infix_op(op, other)
        return Scalar(InfixExpr(self.expr, op, other.expr))

    def to_assign_stmts(self, ident: str) -> List[Assign]:
        return [Assign(ident, self.expr)]

    def to_reference(self, ident: str) -> Scalar:
        return Scalar.from_ident(ident)

    def target_idents(self) -> List[str]:
        if not isinstance(self.expr, Ident):
            raise TypeError(f"scalar is not a reference: {self.expr!r}")
        return [self.expr.name]


@dataclass(frozen=True)
class Vector(Value):
    scalars: Tuple[Scalar, ...]

    def __post_init__(self):
        object.__setattr__(self, "scalars", tuple(self.scalars))

    def __len__(self) -> int:
        return len(self.scalars)

    @classmethod
    def from_ident(cls, ident: str, size: int) -> Vector:
        return cls(tuple(Scalar.from_ident(element_ident(ident, i)) for i in range(size)))

    def apply_prefix_op(self, op: PrefixOp) -> Vector:
        return Vector(tuple(s.apply_prefix_op(op) for s in self.scalars))

    def apply_infix_op(self, op: InfixOp, other: Value) -> Vector:
        if isinstance(other, Scalar):
            other = Vector((other,) * len(self))
        if len(self) != len(other):
            raise MismatchedArrays(op, len(self), len(other))
        return Vector(tuple(m.apply_infix_op(op, n) for m, n in zip(self.scalars, other.scalars)))

    def to_assign_stmts(self, ident: str) -> List[Assign]:
        return [Assign(element_ident(ident, i), s.expr) for i, s in enumerate(self.scalars)]

    def to_reference(self, ident: str) -> Vector:
        return Vector.from_ident(ident, len(self))

    def target_idents(self) -> List[str]:
        return [name for s in self.scalars for name in s.target_idents()]


def element_ident(ident: str, index: int) -> str:
    return f"{ident}_{index}"


def reduce_values(values: Sequence[Value], op: InfixOp, start: Scalar) -> Scalar:
    """Left-fold every scalar contained in `values` (vectors expand in place) onto `start`."""
    result = start
    for value in values:
        scalars = value.scalars if isinstance(value, Vector) else (value,)
        for scalar in scalars:
            result = result.apply_infix_op(op, scalar)
    return result
