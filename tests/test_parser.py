import pytest
from yolk.ast import (
    ArrayAst,
    Assign,
    CallAst,
    DefineAst,
    ExportAst,
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
)
from yolk.errors import LexError, ParseError
from yolk.number import MAX, MIN, ONE, ZERO, YololNumber
from yolk.parser import Lexer, TokKind, parse, parse_yolol

NUMBERS = ["0", "1", "1.0", "-1", "-1.0", "1.234", "-1.234", "1.2345"]


def let_expr(source):
    program = parse(f"let x = {source};")
    assert len(program) == 1
    return program.stmts[0].expr


def ident(name):
    return IdentAst(name)


def test_import():
    assert parse("import number") == ProgramAst((ImportAst("number"),))


def test_statements():
    program = parse("""
        // comments run to the end of the line
        import a;
        define f(x, y) = x + y;
        let b = f(a, 1);   // trailing comment
        export b;
    """)
    assert program == ProgramAst((
        ImportAst("a"),
        DefineAst("f", ("x", "y"), InfixAst(ident("x"), InfixOp.ADD, ident("y"))),
        LetAst("b", CallAst("f", (ident("a"), LiteralAst(ONE)))),
        ExportAst("b"),
    ))


def test_define_without_params():
    assert parse("define one() = 1;").stmts[0] == DefineAst("one", (), LiteralAst(ONE))


@pytest.mark.parametrize("text", NUMBERS)
def test_let_number(text):
    assert let_expr(text) == LiteralAst(YololNumber.from_str(text))


def test_precision_boundary():
    with pytest.raises(ParseError) as e:
        parse("let x = 1.23456;")
    assert "1:9" in str(e.value)


def test_let_array():
    assert let_expr("[0, number]") == ArrayAst((LiteralAst(ZERO), ident("number")))
    assert let_expr("[]") == ArrayAst(())


def test_folds():
    assert let_expr("sum(a, [b])") == FoldAst(InfixOp.ADD, (ident("a"), ArrayAst((ident("b"),))))
    assert let_expr("product()") == FoldAst(InfixOp.MUL, ())


def test_precedence():
    assert let_expr("a + b * c") == InfixAst(ident("a"), InfixOp.ADD, InfixAst(ident("b"), InfixOp.MUL, ident("c")))
    assert let_expr("a - b - c") == InfixAst(InfixAst(ident("a"), InfixOp.SUB, ident("b")), InfixOp.SUB, ident("c"))
    assert let_expr("a ^ b ^ c") == InfixAst(ident("a"), InfixOp.EXP, InfixAst(ident("b"), InfixOp.EXP, ident("c")))
    assert let_expr("a or b and c") == InfixAst(ident("a"), InfixOp.OR, InfixAst(ident("b"), InfixOp.AND, ident("c")))
    assert let_expr("a > b == c") == InfixAst(InfixAst(ident("a"), InfixOp.GT, ident("b")), InfixOp.EQ, ident("c"))
    assert let_expr("(a + b) * c") == InfixAst(InfixAst(ident("a"), InfixOp.ADD, ident("b")), InfixOp.MUL, ident("c"))


def test_prefix_binds_tightest():
    assert let_expr("not a + b") == InfixAst(PrefixAst(PrefixOp.NOT, ident("a")), InfixOp.ADD, ident("b"))
    assert let_expr("-a ^ 2") == InfixAst(PrefixAst(PrefixOp.NEG, ident("a")), InfixOp.EXP, LiteralAst(YololNumber.from_int(2)))
    assert let_expr("sqrt -a") == PrefixAst(PrefixOp.SQRT, PrefixAst(PrefixOp.NEG, ident("a")))
    assert let_expr("- -1") == PrefixAst(PrefixOp.NEG, LiteralAst(-ONE))


def test_source_text_round_trips():
    source = "import a;\ndefine f(x) = -x + sqrt (x * 2);\nlet b = sum(f(a), [1, 2]) or not a;\nexport b;"
    program = parse(source)
    assert parse(str(program)) == program


def test_lexer_positions():
    toks = Lexer("let x\n  = 1 <= 2").tokenize()
    assert [(t.kind, t.text, t.line, t.col) for t in toks] == [
        (TokKind.IDENT, "let", 1, 1),
        (TokKind.IDENT, "x", 1, 5),
        (TokKind.ASSIGN, "=", 2, 3),
        (TokKind.NUMBER, "1", 2, 5),
        (TokKind.OP, "<=", 2, 7),
        (TokKind.NUMBER, "2", 2, 10),
        (TokKind.EOF, "", 2, 11),
    ]


def test_errors():
    with pytest.raises(LexError):
        parse("let x = 1 $ 2;")
    with pytest.raises(LexError):
        parse("let x = 1 ! 2;")
    with pytest.raises(ParseError) as e:
        parse("let x 1;")
    assert "Expected '=' at 1:7" in str(e.value)
    with pytest.raises(ParseError):
        parse("let x = 1 let y = 2;")
    with pytest.raises(ParseError):
        parse("x = 1;")
    with pytest.raises(ParseError):
        parse("let x = (1;")
    with pytest.raises(ParseError):
        parse("let x = and;")


def test_parse_yolol():
    assert parse_yolol("a=1 b=a+2\nc=not b") == [
        Assign("a", Literal(ONE)),
        Assign("b", InfixExpr(Ident("a"), InfixOp.ADD, Literal(YololNumber.from_int(2)))),
        Assign("c", PrefixExpr(PrefixOp.NOT, Ident("b"))),
    ]


def test_parse_yolol_precedence():
    assert parse_yolol("a=b or c and d") == [
        Assign("a", InfixExpr(InfixExpr(Ident("b"), InfixOp.OR, Ident("c")), InfixOp.AND, Ident("d"))),
    ]
    assert parse_yolol("a=-1^2") == [
        Assign("a", InfixExpr(Literal(-ONE), InfixOp.EXP, Literal(YololNumber.from_int(2)))),
    ]
    assert parse_yolol("a=b- -c") == [
        Assign("a", InfixExpr(Ident("b"), InfixOp.SUB, PrefixExpr(PrefixOp.NEG, Ident("c")))),
    ]


def test_negative_literal_bounds():
    assert parse_yolol("a=-922337203685477.5808") == [Assign("a", Literal(MIN))]
    assert let_expr("-922337203685477.5808") == LiteralAst(MIN)
    assert parse_yolol("a=922337203685477.5807") == [Assign("a", Literal(MAX))]

def test_parse_yolol_errors():
    with pytest.raises(ParseError):
        parse_yolol("a=")
    with pytest.raises(ParseError):
        parse_yolol("a=f(1)")


if __name__ == "__main__":
    pytest.main()
