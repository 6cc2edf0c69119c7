from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

from yolk.ast import (
    INFIX_PRECEDENCE,
    ArrayAst,
    Assign,
    CallAst,
    DefineAst,
    ExportAst,
    FOLDS,
    FoldAst,
    Ident,
    IdentAst,
    ImportAst,
    InfixAst,
    InfixExpr,
    InfixOp,
    LetAst,
    Literal,
    LiteralAst,
    PrefixAst,
    PrefixExpr,
    PrefixOp,
    ProgramAst,
    YolkStmt,
)
from yolk.errors import LexError, NumberFormatError, ParseError
from yolk.number import YololNumber

# =========================
# Lexer
# =========================


class TokKind(Enum):
    IDENT = auto()
    NUMBER = auto()
    OP = auto()         # + - * / % ^ < <= > >= == !=

    ASSIGN = auto()     # =
    COMMA = auto()      # ,
    SEMI = auto()       # ;
    LPAREN = auto()     # (
    RPAREN = auto()     # )
    LBRACKET = auto()   # [
    RBRACKET = auto()   # ]
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokKind
    text: str
    line: int
    col: int


PUNCT = {
    "=": TokKind.ASSIGN,
    ",": TokKind.COMMA,
    ";": TokKind.SEMI,
    "(": TokKind.LPAREN,
    ")": TokKind.RPAREN,
    "[": TokKind.LBRACKET,
    "]": TokKind.RBRACKET,
}

TWO_CHAR_OPS = ("<=", ">=", "==", "!=")
ONE_CHAR_OPS = "+-*/%^<>"


class Lexer:
    def __init__(self, src: str):
        self.src = src
        self.i = 0
        self.line = 1
        self.col = 1

    def _peek(self, ahead: int = 0) -> str:
        j = self.i + ahead
        return self.src[j] if j < len(self.src) else ""

    def _adv(self) -> str:
        ch = self._peek()
        if not ch:
            return ""
        self.i += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _pos(self) -> Tuple[int, int]:
        return self.line, self.col

    def tokenize(self) -> List[Token]:
        out: List[Token] = []
        while True:
            ch = self._peek()
            if not ch:
                out.append(Token(TokKind.EOF, "", self.line, self.col))
                return out

            if ch.isspace():
                self._adv()
                continue

            # comment: runs to end of line
            if ch == "/" and self._peek(1) == "/":
                while self._peek() and self._peek() != "\n":
                    self._adv()
                continue

            line, col = self._pos()

            pair = ch + self._peek(1)
            if pair in TWO_CHAR_OPS:
                self._adv()
                self._adv()
                out.append(Token(TokKind.OP, pair, line, col))
                continue

            if ch in ONE_CHAR_OPS:
                self._adv()
                out.append(Token(TokKind.OP, ch, line, col))
                continue

            if ch in PUNCT:
                self._adv()
                out.append(Token(PUNCT[ch], ch, line, col))
                continue

            if ch.isdigit():
                num = []
                while self._peek().isdigit():
                    num.append(self._adv())
                if self._peek() == ".":
                    num.append(self._adv())
                    while self._peek().isdigit():
                        num.append(self._adv())
                out.append(Token(TokKind.NUMBER, "".join(num), line, col))
                continue

            if ch.isalpha() or ch == "_":
                ident = []
                while self._peek().isalnum() or self._peek() == "_":
                    ident.append(self._adv())
                out.append(Token(TokKind.IDENT, "".join(ident), line, col))
                continue

            raise LexError(f"Unexpected character {ch!r} at {line}:{col}")


# =========================
# Expression parsing
# =========================

PREFIX_OPS: Dict[str, PrefixOp] = {op.value: op for op in PrefixOp}
INFIX_OPS: Dict[str, InfixOp] = {op.value: op for op in InfixOp}

# Yolk binding strength: or < and < equality < relational < additive < multiplicative < ^
YOLK_PRECEDENCE: Dict[InfixOp, int] = {
    InfixOp.OR: 1,
    InfixOp.AND: 2,
    InfixOp.EQ: 3,
    InfixOp.NE: 3,
    InfixOp.LT: 4,
    InfixOp.LE: 4,
    InfixOp.GT: 4,
    InfixOp.GE: 4,
    InfixOp.ADD: 5,
    InfixOp.SUB: 5,
    InfixOp.MUL: 6,
    InfixOp.DIV: 6,
    InfixOp.MOD: 6,
    InfixOp.EXP: 7,
}


class _ExprParser:
    """
    Precedence climbing over a token list.
    Subclasses choose the precedence table and build their own tree nodes.
    Prefix operators bind tighter than every infix operator.
    """

    precedence: Dict[InfixOp, int] = {}

    def __init__(self, toks: List[Token]):
        self.toks = toks
        self.i = 0

    def _peek(self) -> Token:
        return self.toks[self.i]

    def _adv(self) -> Token:
        t = self._peek()
        if t.kind != TokKind.EOF:
            self.i += 1
        return t

    def _accept(self, kind: TokKind, text: Optional[str] = None) -> Optional[Token]:
        t = self._peek()
        if t.kind == kind and (text is None or t.text == text):
            return self._adv()
        return None

    def _expect(self, kind: TokKind, msg: str) -> Token:
        t = self._peek()
        if t.kind != kind:
            raise ParseError(f"{msg} at {t.line}:{t.col} (got {t.kind.name} {t.text!r})")
        return self._adv()

    def _number(self, tok: Token, negative: bool = False) -> YololNumber:
        try:
            return YololNumber.from_str(("-" if negative else "") + tok.text)
        except NumberFormatError as e:
            raise ParseError(f"{e.msg} at {tok.line}:{tok.col}") from e

    def _peek_infix(self) -> Optional[InfixOp]:
        t = self._peek()
        if t.kind == TokKind.OP or (t.kind == TokKind.IDENT and t.text in ("and", "or")):
            return INFIX_OPS.get(t.text)
        return None

    def parse_expr(self, min_prec: int = 0):
        lhs = self.parse_unary()
        while True:
            op = self._peek_infix()
            if op is None or self.precedence[op] < min_prec:
                return lhs
            self._adv()
            next_min = self.precedence[op] if op.is_right_assoc else self.precedence[op] + 1
            rhs = self.parse_expr(next_min)
            lhs = self.make_infix(lhs, op, rhs)

    def parse_unary(self):
        t = self._peek()
        if t.kind in (TokKind.OP, TokKind.IDENT) and t.text in PREFIX_OPS:
            self._adv()
            op = PREFIX_OPS[t.text]
            if op is PrefixOp.NEG and self._peek().kind == TokKind.NUMBER:
                return self.make_literal(self._number(self._adv(), negative=True))
            return self.make_prefix(op, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self):
        raise NotImplementedError

    def make_infix(self, lhs, op: InfixOp, rhs):
        raise NotImplementedError

    def make_prefix(self, op: PrefixOp, expr):
        raise NotImplementedError

    def make_literal(self, value: YololNumber):
        raise NotImplementedError


# =========================
# Yolk
# =========================

STMT_KEYWORDS = ("import", "define", "let", "export")


class Parser(_ExprParser):
    precedence = YOLK_PRECEDENCE

    def parse_program(self) -> ProgramAst:
        stmts: List[YolkStmt] = []
        while self._peek().kind != TokKind.EOF:
            stmts.append(self.parse_stmt())
            if not self._accept(TokKind.SEMI) and self._peek().kind != TokKind.EOF:
                t = self._peek()
                raise ParseError(f"Expected ';' at {t.line}:{t.col} (got {t.kind.name} {t.text!r})")
        return ProgramAst(tuple(stmts))

    def parse_stmt(self) -> YolkStmt:
        t = self._peek()
        if self._accept(TokKind.IDENT, "import"):
            return ImportAst(self._expect(TokKind.IDENT, "Expected variable name").text)

        if self._accept(TokKind.IDENT, "define"):
            ident = self._expect(TokKind.IDENT, "Expected function name").text
            self._expect(TokKind.LPAREN, "Expected '('")
            params: List[str] = []
            if self._peek().kind == TokKind.IDENT:
                params.append(self._expect(TokKind.IDENT, "Expected param").text)
                while self._accept(TokKind.COMMA):
                    params.append(self._expect(TokKind.IDENT, "Expected param").text)
            self._expect(TokKind.RPAREN, "Expected ')'")
            self._expect(TokKind.ASSIGN, "Expected '='")
            return DefineAst(ident, tuple(params), self.parse_expr())

        if self._accept(TokKind.IDENT, "let"):
            ident = self._expect(TokKind.IDENT, "Expected variable name").text
            self._expect(TokKind.ASSIGN, "Expected '='")
            return LetAst(ident, self.parse_expr())

        if self._accept(TokKind.IDENT, "export"):
            return ExportAst(self._expect(TokKind.IDENT, "Expected variable name").text)

        raise ParseError(f"Expected statement at {t.line}:{t.col} (got {t.kind.name} {t.text!r})")

    def parse_args(self, close: TokKind, msg: str) -> Tuple:
        args = []
        if self._peek().kind != close:
            args.append(self.parse_expr())
            while self._accept(TokKind.COMMA):
                args.append(self.parse_expr())
        self._expect(close, msg)
        return tuple(args)

    def parse_primary(self):
        t = self._peek()

        if t.kind == TokKind.NUMBER:
            return LiteralAst(self._number(self._adv()))

        if t.kind == TokKind.IDENT and t.text not in ("and", "or") and t.text not in STMT_KEYWORDS:
            name = self._adv().text
            if self._accept(TokKind.LPAREN):
                args = self.parse_args(TokKind.RPAREN, "Expected ')'")
                if name in FOLDS:
                    return FoldAst(FOLDS[name][0], args)
                return CallAst(name, args)
            return IdentAst(name)

        if self._accept(TokKind.LBRACKET):
            return ArrayAst(self.parse_args(TokKind.RBRACKET, "Expected ']'"))

        if self._accept(TokKind.LPAREN):
            expr = self.parse_expr()
            self._expect(TokKind.RPAREN, "Expected ')'")
            return expr

        raise ParseError(f"Unexpected token {t.kind.name} {t.text!r} at {t.line}:{t.col}")

    def make_infix(self, lhs, op, rhs):
        return InfixAst(lhs, op, rhs)

    def make_prefix(self, op, expr):
        return PrefixAst(op, expr)

    def make_literal(self, value):
        return LiteralAst(value)


def parse(source: str) -> ProgramAst:
    """Parses Yolk source text into a program tree."""
    return Parser(Lexer(source).tokenize()).parse_program()


# =========================
# Yolol (assignments only)
# =========================


class YololParser(_ExprParser):
    precedence = INFIX_PRECEDENCE

    def parse_program(self) -> List[Assign]:
        stmts: List[Assign] = []
        while self._peek().kind != TokKind.EOF:
            ident = self._expect(TokKind.IDENT, "Expected assignment target").text
            self._expect(TokKind.ASSIGN, "Expected '='")
            stmts.append(Assign(ident, self.parse_expr()))
        return stmts

    def parse_primary(self):
        t = self._peek()

        if t.kind == TokKind.NUMBER:
            return Literal(self._number(self._adv()))

        if t.kind == TokKind.IDENT and t.text not in ("and", "or"):
            return Ident(self._adv().text)

        if self._accept(TokKind.LPAREN):
            expr = self.parse_expr()
            self._expect(TokKind.RPAREN, "Expected ')'")
            return expr

        raise ParseError(f"Unexpected token {t.kind.name} {t.text!r} at {t.line}:{t.col}")

    def make_infix(self, lhs, op, rhs):
        return InfixExpr(lhs, op, rhs)

    def make_prefix(self, op, expr):
        return PrefixExpr(op, expr)

    def make_literal(self, value):
        return Literal(value)


def parse_yolol(text: str) -> List[Assign]:
    """Parses a straight-line Yolol program made only of `ident=expr` statements."""
    return YololParser(Lexer(text).tokenize()).parse_program()
