from typing import Dict, Iterable, List, Optional, Sequence

from yolk.ast import Assign, Ident, InfixExpr, InfixOp, Literal, PrefixExpr, YololExpr
from yolk.errors import NumberError, OptimizerError
from yolk.graph import DepGraph
from yolk.number import ONE, ZERO


# ==========================================
# Constant folding
# ==========================================

def _is_literal(expr: YololExpr, number=None) -> bool:
    if not isinstance(expr, Literal):
        return False
    return number is None or expr.value == number


def _apply_identity(lhs: YololExpr, op: InfixOp, rhs: YololExpr) -> Optional[YololExpr]:
    if op is InfixOp.ADD:
        if _is_literal(lhs, ZERO):
            return rhs
        if _is_literal(rhs, ZERO):
            return lhs
    elif op is InfixOp.SUB:
        if _is_literal(rhs, ZERO):
            return lhs
    elif op is InfixOp.MUL:
        if _is_literal(lhs, ZERO) or _is_literal(rhs, ZERO):
            return Literal(ZERO)
        if _is_literal(lhs, ONE):
            return rhs
        if _is_literal(rhs, ONE):
            return lhs
    elif op is InfixOp.DIV:
        if _is_literal(rhs, ONE):
            return lhs
    elif op is InfixOp.EXP:
        if _is_literal(lhs, ONE):
            return Literal(ONE)
        if _is_literal(rhs, ONE):
            return lhs
    return None


def reduce_expr(expr: YololExpr, bindings: Dict[str, YololExpr]) -> YololExpr:
    """
    Folds `expr` bottom-up.
    bindings: ident -> already reduced right-hand side of its latest assignment.
    Identifiers bound to a literal are replaced by it; anything else stays as is.
    Operations outside their numeric domain are left unfolded.
    """
    if isinstance(expr, Literal):
        return expr

    if isinstance(expr, Ident):
        bound = bindings.get(expr.name)
        return bound if isinstance(bound, Literal) else expr

    if isinstance(expr, PrefixExpr):
        inner = reduce_expr(expr.expr, bindings)
        if isinstance(inner, Literal):
            try:
                return Literal(expr.op.evaluate(inner.value))
            except NumberError:
                pass
        return PrefixExpr(expr.op, inner)

    if isinstance(expr, InfixExpr):
        lhs = reduce_expr(expr.lhs, bindings)
        rhs = reduce_expr(expr.rhs, bindings)
        simplified = _apply_identity(lhs, expr.op, rhs)
        if simplified is not None:
            return simplified
        if isinstance(lhs, Literal) and isinstance(rhs, Literal):
            try:
                return Literal(expr.op.evaluate(lhs.value, rhs.value))
            except NumberError:
                pass
        return InfixExpr(lhs, expr.op, rhs)

    raise TypeError(f"expected Yolol expression, but got: {expr!r}")


def fold_constants(stmts: Sequence[Assign]) -> List[Assign]:
    """One left-to-right propagation and folding pass."""
    bindings: Dict[str, YololExpr] = {}
    folded = []
    for stmt in stmts:
        if not isinstance(stmt, Assign):
            raise TypeError(f"expected Yolol assign statement, but got: {stmt!r}")
        expr = reduce_expr(stmt.expr, bindings)
        bindings[stmt.ident] = expr
        folded.append(Assign(stmt.ident, expr))
    return folded


def fold_to_fixpoint(stmts: Sequence[Assign], max_iterations: Optional[int] = None) -> List[Assign]:
    """
    Repeats fold_constants until a pass leaves the statements unchanged.
    max_iterations caps the number of passes, the final unchanged one included.
    """
    current = list(stmts)
    passes = 0
    while True:
        folded = fold_constants(current)
        passes += 1
        if folded == current:
            return folded
        if max_iterations is not None and passes >= max_iterations:
            raise OptimizerError(f"constant folding did not settle within {max_iterations} passes")
        current = folded


# ==========================================
# Dead code elimination
# ==========================================

def eliminate_dead_code(stmts: Sequence[Assign], roots: Iterable[str]) -> List[Assign]:
    """Keeps the statements whose identifier is reachable from `roots`, in order."""
    live = DepGraph.from_assign_stmts(stmts).search_from(roots)
    return [stmt for stmt in stmts if stmt.ident in live]


def optimize(
    stmts: Sequence[Assign],
    roots: Iterable[str],
    max_iterations: Optional[int] = None,
) -> List[Assign]:
    folded = fold_to_fixpoint(stmts, max_iterations=max_iterations)
    return eliminate_dead_code(folded, roots)
