from typing import List, Sequence, Tuple

from yolk.ast import Assign, Ident, InfixExpr, Literal, PrefixExpr, PrefixOp, YololExpr

LINE_LIMIT = 70

# identifiers and non-negative literals never need parentheses
ATOM_PRECEDENCE = 1000


def _wrap(text: str) -> str:
    return f"({text})"


def format_expr(expr: YololExpr) -> Tuple[str, int]:
    """Returns the minimal text for `expr` and the precedence of its outermost node."""
    if isinstance(expr, Ident):
        return expr.name, ATOM_PRECEDENCE

    if isinstance(expr, Literal):
        text = str(expr.value)
        # "-1" reads as a negation of 1
        prec = PrefixOp.NEG.precedence if text.startswith("-") else ATOM_PRECEDENCE
        return text, prec

    if isinstance(expr, PrefixExpr):
        prec = expr.op.precedence
        child, child_prec = format_expr(expr.expr)
        wrapped = child_prec < prec
        if wrapped:
            child = _wrap(child)
        sep = ""
        if expr.op.is_alpha and not wrapped:
            sep = " "
        elif expr.op is PrefixOp.NEG and child.startswith("-"):
            sep = " "
        return f"{expr.op}{sep}{child}", prec

    if isinstance(expr, InfixExpr):
        op = expr.op
        prec = op.precedence
        lhs, lhs_prec = format_expr(expr.lhs)
        rhs, rhs_prec = format_expr(expr.rhs)

        if lhs_prec < prec or (lhs_prec == prec and op.is_right_assoc):
            lhs = _wrap(lhs)

        same_op = isinstance(expr.rhs, InfixExpr) and expr.rhs.op is op
        if rhs_prec < prec:
            rhs = _wrap(rhs)
        elif rhs_prec == prec and not op.is_right_assoc and not (op.is_associative and same_op):
            rhs = _wrap(rhs)

        if op.is_alpha:
            return f"{lhs} {op} {rhs}", prec
        if str(op) == "-" and rhs.startswith("-"):
            return f"{lhs}- {rhs}", prec
        return f"{lhs}{op}{rhs}", prec

    raise TypeError(f"expected Yolol expression, but got: {expr!r}")


def format_stmt(stmt: Assign) -> str:
    if not isinstance(stmt, Assign):
        raise TypeError(f"expected Yolol assign statement, but got: {stmt!r}")
    text, _ = format_expr(stmt.expr)
    return f"{stmt.ident}={text}"


def format_program(stmts: Sequence[Assign], line_limit: int = LINE_LIMIT) -> str:
    """
    Packs statements onto lines separated by single spaces.
    A statement that would push the current line past `line_limit` starts a new
    line; a statement longer than the limit on its own gets a line to itself.
    """
    lines: List[str] = []
    line = ""
    for stmt in stmts:
        text = format_stmt(stmt)
        if line and len(line) + 1 + len(text) > line_limit:
            lines.append(line)
            line = text
        else:
            line = f"{line} {text}" if line else text
    if line:
        lines.append(line)
    return "\n".join(lines)
