import pytest
from yolk.ast import Assign, Ident, ImportAst, InfixExpr, InfixOp, LetAst, Literal, PrefixExpr, PrefixOp
from yolk.errors import (
    AssignConflict,
    MismatchedArrays,
    NestedArrays,
    RecursiveCall,
    UndefinedFunction,
    UndefinedVariable,
    WrongNumberOfArgs,
)
from yolk.number import ONE, ZERO, YololNumber
from yolk.parser import parse
from yolk.transpiler import Transpiler, YololProgram, transpile

TWO = YololNumber.from_int(2)


def run(source):
    return transpile(parse(source))


def test_scalar_let_and_export():
    program = run("import a; let b = a + 1; export b;")
    assert program == YololProgram(
        (Assign("b", InfixExpr(Ident("a"), InfixOp.ADD, Literal(ONE))),),
        frozenset({"b"}),
    )


def test_let_refers_to_previous_binding_by_name():
    program = run("let a = 1; let b = -a;")
    assert program.stmts == (
        Assign("a", Literal(ONE)),
        Assign("b", PrefixExpr(PrefixOp.NEG, Ident("a"))),
    )
    assert program.roots == frozenset()


def test_vector_let():
    program = run("let v = [1, 2]; let w = v * 2; export w;")
    assert program.stmts == (
        Assign("v_0", Literal(ONE)),
        Assign("v_1", Literal(TWO)),
        Assign("w_0", InfixExpr(Ident("v_0"), InfixOp.MUL, Literal(TWO))),
        Assign("w_1", InfixExpr(Ident("v_1"), InfixOp.MUL, Literal(TWO))),
    )
    assert program.roots == frozenset({"w_0", "w_1"})


def test_sum_flattens_arguments():
    program = run("import a; let s = sum(a, [1, 2]);")
    expected = InfixExpr(
        InfixExpr(InfixExpr(Literal(ZERO), InfixOp.ADD, Ident("a")), InfixOp.ADD, Literal(ONE)),
        InfixOp.ADD,
        Literal(TWO),
    )
    assert program.stmts == (Assign("s", expected),)


def test_product_starts_from_one():
    program = run("import a; let p = product(a);")
    assert program.stmts == (Assign("p", InfixExpr(Literal(ONE), InfixOp.MUL, Ident("a"))),)


def test_function_inlining():
    program = run("import x; define twice(a) = a * 2; define quad(a) = twice(twice(a)); let y = quad(x);")
    twice_x = InfixExpr(Ident("x"), InfixOp.MUL, Literal(TWO))
    assert program.stmts == (Assign("y", InfixExpr(twice_x, InfixOp.MUL, Literal(TWO))),)


def test_function_over_vectors():
    program = run("define inc(a) = a + 1; let v = inc([0, 1]);")
    assert program.stmts == (
        Assign("v_0", InfixExpr(Literal(ZERO), InfixOp.ADD, Literal(ONE))),
        Assign("v_1", InfixExpr(Literal(ONE), InfixOp.ADD, Literal(ONE))),
    )


def test_nested_arrays_carry_statement():
    with pytest.raises(NestedArrays) as e:
        run("let v = [[1]];")
    assert isinstance(e.value.stmt, LetAst)
    assert "in statement: let v = [[1]];" in str(e.value)


def test_mismatched_arrays():
    with pytest.raises(MismatchedArrays):
        run("let v = [1, 2] + [1, 2, 3];")


def test_undefined_names():
    with pytest.raises(UndefinedVariable):
        run("let a = b;")
    with pytest.raises(UndefinedFunction):
        run("let a = f(1);")


def test_wrong_number_of_args():
    with pytest.raises(WrongNumberOfArgs):
        run("define f(a) = a; let b = f(1, 2);")


def test_mutual_recursion():
    with pytest.raises(RecursiveCall):
        run("define f(x) = g(x); define g(x) = f(x); let a = f(1);")


def test_import_cannot_alias_an_emitted_identifier():
    with pytest.raises(AssignConflict) as e:
        run("let a = 1; import A; let b = A; export b;")
    assert isinstance(e.value.stmt, ImportAst)
    with pytest.raises(AssignConflict):
        run("let v = [1, 2]; import v_0; let b = v_0;")

def test_transpiler_collects_roots():
    t = Transpiler()
    program = t.transpile(parse("import a; export a;"))
    assert program.stmts == ()
    assert program.roots == frozenset({"a"})
    assert t.env.exports == {"a"}


def test_program_helpers():
    program = run("let a = 1 + 1; let b = a * 3; export b;")
    assert program.optimize().stmts == (Assign("b", Literal(YololNumber.from_int(6))),)
    assert program.format() == "a=1+1 b=a*3"


if __name__ == "__main__":
    pytest.main()
