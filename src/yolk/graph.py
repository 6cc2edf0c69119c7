from __future__ import annotations

from typing import Dict, Iterable, Sequence, Set

from yolk.ast import Assign, Ident, InfixExpr, Literal, PrefixExpr, YololExpr


class DepGraph:
    """Maps each assigned target identifier to every identifier its right-hand sides read."""

    def __init__(self, graph: Dict[str, Set[str]]):
        self.graph = graph

    @classmethod
    def from_assign_stmts(cls, stmts: Sequence[Assign]) -> DepGraph:
        graph: Dict[str, Set[str]] = {}
        for stmt in stmts:
            if not isinstance(stmt, Assign):
                raise TypeError(f"expected assign statement, but got: {stmt!r}")
            # reassignments accumulate: any of them may be the one a reader sees
            graph.setdefault(stmt.ident, set()).update(find_deps(stmt.expr))
        return cls(graph)

    def __contains__(self, ident: str) -> bool:
        return ident in self.graph

    def deps(self, ident: str) -> Set[str]:
        return set(self.graph.get(ident, ()))

    def search_from(self, idents: Iterable[str]) -> Set[str]:
        """Every identifier reachable from `idents`, the starting set included."""
        found: Set[str] = set()
        stack = list(idents)
        while stack:
            ident = stack.pop()
            if ident in found:
                continue
            found.add(ident)
            # unassigned identifiers (imports) have no entry and end the branch
            stack.extend(self.graph.get(ident, ()))
        return found


def find_deps(expr: YololExpr) -> Set[str]:
    deps: Set[str] = set()
    stack = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, PrefixExpr):
            stack.append(node.expr)
        elif isinstance(node, InfixExpr):
            stack.append(node.lhs)
            stack.append(node.rhs)
        elif isinstance(node, Ident):
            deps.add(node.name)
        elif not isinstance(node, Literal):
            raise TypeError(f"expected Yolol expression, but got: {node!r}")
    return deps
