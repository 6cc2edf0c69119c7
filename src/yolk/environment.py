from typing import Dict, FrozenSet, List, Set

from yolk.ast import Assign
from yolk.errors import (
    AssignConflict,
    AssignExisting,
    AssignKeyword,
    DefineExisting,
    DefineKeyword,
    ExportTwice,
    ImportExisting,
    ImportKeyword,
    ImportTwice,
    UndefinedFunction,
    UndefinedVariable,
)
from yolk.function import Function
from yolk.value import Scalar, Value

KEYWORDS: FrozenSet[str] = frozenset({
    # statements
    "import", "define", "let", "export",
    # operators
    "not", "abs", "sqrt", "sin", "cos", "tan", "asin", "acos", "atan", "and", "or",
    # builtins
    "sum", "product",
    # reserved by the target language
    "if", "then", "else", "end", "goto",
})


class Environment:
    """
    Name resolution state for one transpilation.
    imports, variables and functions never collide; exported target identifiers
    are collected in `roots`.
    """

    def __init__(self, keywords: FrozenSet[str] = KEYWORDS):
        self.imports: Set[str] = set()
        self.variables: Dict[str, Value] = {}
        self.functions: Dict[str, Function] = {}
        self.keywords = keywords
        self.exports: Set[str] = set()
        self.roots: Set[str] = set()
        # lowercase name -> original spelling, for bound names and emitted target identifiers
        self.lowercase: Dict[str, str] = {}

    def variable(self, ident: str) -> Value:
        if ident not in self.variables:
            raise UndefinedVariable(ident)
        return self.variables[ident]

    def function(self, ident: str) -> Function:
        if ident not in self.functions:
            raise UndefinedFunction(ident)
        return self.functions[ident]

    def import_variable(self, ident: str) -> None:
        if ident in self.imports:
            raise ImportTwice(ident)
        if ident in self.variables:
            raise ImportExisting(ident)
        if ident in self.keywords:
            raise ImportKeyword(ident)
        if ident.lower() in self.lowercase:
            raise AssignConflict(ident, self.lowercase[ident.lower()])
        self.imports.add(ident)
        self.variables[ident] = Scalar.from_ident(ident)
        self.lowercase[ident.lower()] = ident

    def define(self, ident: str, function: Function) -> None:
        if ident in self.functions:
            raise DefineExisting(ident)
        if ident in self.keywords:
            raise DefineKeyword(ident)
        self.functions[ident] = function

    def let_value(self, ident: str, value: Value) -> List[Assign]:
        """
        Binds `ident` and returns the assign statements that materialize `value`.
        Afterwards `ident` refers to the emitted target identifiers, not to the
        assigned expression.
        """
        if ident in self.imports or ident in self.variables:
            raise AssignExisting(ident)
        if ident in self.keywords:
            raise AssignKeyword(ident)
        if ident.lower() in self.lowercase:
            raise AssignConflict(ident, self.lowercase[ident.lower()])

        stmts = value.to_assign_stmts(ident)
        for stmt in stmts:
            if stmt.ident.lower() in self.lowercase:
                raise AssignConflict(stmt.ident, self.lowercase[stmt.ident.lower()])

        self.variables[ident] = value.to_reference(ident)
        self.lowercase[ident.lower()] = ident
        for stmt in stmts:
            self.lowercase[stmt.ident.lower()] = stmt.ident
        return stmts

    def export(self, ident: str) -> None:
        if ident in self.exports:
            raise ExportTwice(ident)
        value = self.variable(ident)
        self.exports.add(ident)
        self.roots.update(value.target_idents())
