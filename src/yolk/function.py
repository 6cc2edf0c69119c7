from typing import Dict, List, Sequence, Set, Tuple

from yolk.ast import (
    ArrayAst,
    CallAst,
    FoldAst,
    IdentAst,
    InfixAst,
    LiteralAst,
    PrefixAst,
    YolkExpr,
)
from yolk.errors import DuplicateParams, RecursiveCall, UndefinedLocal, WrongNumberOfArgs


class Function:
    """
    A user-defined Yolk function.
    Bodies may only reference their own parameters, so calling a function is a
    pure substitution of argument subtrees for parameter identifiers.
    """

    def __init__(self, ident: str, params: Sequence[str], body: YolkExpr):
        self.ident = ident
        self.params: Tuple[str, ...] = tuple(params)
        self.body = body
        self._check_params()
        self._check_body(self.body)

    def __repr__(self):
        return f"Function({self.ident}({', '.join(self.params)}) = {self.body})"

    def _check_params(self) -> None:
        seen = set()
        for p in self.params:
            if p in seen:
                raise DuplicateParams(self.ident, p)
            seen.add(p)

    def _check_body(self, node: YolkExpr) -> None:
        if isinstance(node, PrefixAst):
            self._check_body(node.expr)
        elif isinstance(node, InfixAst):
            self._check_body(node.lhs)
            self._check_body(node.rhs)
        elif isinstance(node, CallAst):
            if node.ident == self.ident:
                raise RecursiveCall(self.ident)
            for arg in node.args:
                self._check_body(arg)
        elif isinstance(node, FoldAst):
            for arg in node.args:
                self._check_body(arg)
        elif isinstance(node, ArrayAst):
            for expr in node.exprs:
                self._check_body(expr)
        elif isinstance(node, IdentAst):
            if node.name not in self.params:
                raise UndefinedLocal(self.ident, node.name)
        elif not isinstance(node, LiteralAst):
            raise TypeError(f"expected Yolk expression, but got: {node!r}")

    def callees(self) -> Set[str]:
        """Names of the user functions this body calls directly."""
        found: Set[str] = set()
        stack: List[YolkExpr] = [self.body]
        while stack:
            node = stack.pop()
            if isinstance(node, PrefixAst):
                stack.append(node.expr)
            elif isinstance(node, InfixAst):
                stack.extend((node.lhs, node.rhs))
            elif isinstance(node, CallAst):
                found.add(node.ident)
                stack.extend(node.args)
            elif isinstance(node, FoldAst):
                stack.extend(node.args)
            elif isinstance(node, ArrayAst):
                stack.extend(node.exprs)
        return found

    def call(self, args: Sequence[YolkExpr]) -> YolkExpr:
        """Returns the body with every parameter replaced by its argument."""
        if len(args) != len(self.params):
            raise WrongNumberOfArgs(self.ident, len(self.params), len(args))
        bindings = dict(zip(self.params, args))
        return substitute(self.body, bindings)


def substitute(node: YolkExpr, bindings: Dict[str, YolkExpr]) -> YolkExpr:
    if isinstance(node, PrefixAst):
        return PrefixAst(node.op, substitute(node.expr, bindings))
    if isinstance(node, InfixAst):
        return InfixAst(substitute(node.lhs, bindings), node.op, substitute(node.rhs, bindings))
    if isinstance(node, CallAst):
        return CallAst(node.ident, tuple(substitute(a, bindings) for a in node.args))
    if isinstance(node, FoldAst):
        return FoldAst(node.op, tuple(substitute(a, bindings) for a in node.args))
    if isinstance(node, ArrayAst):
        return ArrayAst(tuple(substitute(e, bindings) for e in node.exprs))
    if isinstance(node, IdentAst):
        return bindings.get(node.name, node)
    return node
