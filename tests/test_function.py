import pytest
from yolk.ast import ArrayAst, CallAst, FoldAst, IdentAst, InfixAst, InfixOp, LiteralAst
from yolk.errors import DuplicateParams, RecursiveCall, UndefinedLocal, WrongNumberOfArgs
from yolk.function import Function
from yolk.number import ONE

ADD_BODY = InfixAst(IdentAst("a"), InfixOp.ADD, IdentAst("b"))


def test_duplicate_params():
    with pytest.raises(DuplicateParams):
        Function("f", ["a", "a"], IdentAst("a"))


def test_undefined_local():
    with pytest.raises(UndefinedLocal) as e:
        Function("f", ["a"], InfixAst(IdentAst("a"), InfixOp.ADD, IdentAst("b")))
    assert e.value.ident == "b"


def test_undefined_local_in_nested_call():
    with pytest.raises(UndefinedLocal):
        Function("f", ["a"], CallAst("g", (ArrayAst((IdentAst("c"),)),)))


def test_recursive_call():
    with pytest.raises(RecursiveCall):
        Function("f", ["a"], FoldAst(InfixOp.ADD, (CallAst("f", (IdentAst("a"),)),)))


def test_wrong_number_of_args():
    f = Function("f", ["a", "b"], ADD_BODY)
    with pytest.raises(WrongNumberOfArgs) as e:
        f.call([LiteralAst(ONE)])
    assert (e.value.expected, e.value.got) == (2, 1)


def test_call_substitutes_params():
    f = Function("f", ["a", "b"], ADD_BODY)
    inlined = f.call([LiteralAst(ONE), IdentAst("x")])
    assert inlined == InfixAst(LiteralAst(ONE), InfixOp.ADD, IdentAst("x"))


def test_call_substitutes_inside_calls():
    f = Function("f", ["a"], CallAst("g", (IdentAst("a"), LiteralAst(ONE))))
    assert f.call([IdentAst("y")]) == CallAst("g", (IdentAst("y"), LiteralAst(ONE)))


def test_substitution_is_simultaneous():
    swap = Function("swap", ["a", "b"], InfixAst(IdentAst("b"), InfixOp.SUB, IdentAst("a")))
    assert swap.call([IdentAst("b"), IdentAst("a")]) == InfixAst(IdentAst("a"), InfixOp.SUB, IdentAst("b"))


if __name__ == "__main__":
    pytest.main()
