from pathlib import Path

import pytest
from yolk.ast import Assign, Literal
from yolk.format import format_program
from yolk.number import MIN, YololNumber
from yolk.optimizer import optimize
from yolk.parser import parse, parse_yolol
from yolk.runtime import Runtime
from yolk.transpiler import transpile

CORPUS = sorted(Path(__file__).parent.glob("test_data/corpus/*.yolk"))
MAX_FOLD_ITERATIONS = 10


def compile_corpus(path):
    return transpile(parse(path.read_text(encoding="utf-8")))


def test_corpus_present():
    assert len(CORPUS) >= 6


@pytest.mark.parametrize("path", CORPUS, ids=lambda p: p.stem)
def test_unoptimized(path):
    program = compile_corpus(path)
    runtime = Runtime()
    runtime.execute(format_program(program.stmts))
    assert runtime.get("n") == runtime.get("e")


@pytest.mark.parametrize("path", CORPUS, ids=lambda p: p.stem)
def test_optimized(path):
    program = compile_corpus(path)
    stmts = optimize(program.stmts, program.roots, max_iterations=MAX_FOLD_ITERATIONS)
    runtime = Runtime()
    runtime.execute(format_program(stmts))
    assert runtime.get("n") == runtime.get("e")
    # every corpus program folds down to its two exported literals
    assert [s.ident for s in stmts] == ["n", "e"]
    assert stmts[0].expr == stmts[1].expr


@pytest.mark.parametrize("path", CORPUS, ids=lambda p: p.stem)
def test_idempotent(path):
    program = compile_corpus(path)
    once = optimize(program.stmts, program.roots, max_iterations=MAX_FOLD_ITERATIONS)
    assert optimize(once, program.roots, max_iterations=MAX_FOLD_ITERATIONS) == once


@pytest.mark.parametrize("path", CORPUS, ids=lambda p: p.stem)
def test_printed_program_matches_tree(path):
    program = compile_corpus(path)
    text = format_program(program.stmts)
    direct = Runtime()
    direct.execute(program.stmts)
    printed = Runtime()
    printed.execute(parse_yolol(text))
    assert printed.variables == direct.variables


def test_source_parentheses_survive_printing():
    program = transpile(parse("import a; import b; import c; let n = a * (b * c); export n;"))
    text = format_program(program.stmts)
    assert text == "n=a*(b*c)"
    inputs = {"a": YololNumber.from_int(3), "b": YololNumber.from_str("0.5"), "c": YololNumber.from_str("0.0001")}
    direct = Runtime(inputs)
    direct.execute(program.stmts)
    printed = Runtime(inputs)
    printed.execute(text)
    assert printed.get("n") == direct.get("n") == YololNumber.from_int(0)


def test_saturated_fold_reparses_exactly():
    program = transpile(parse("let n = -922337203685477 - 1; export n;"))
    stmts = optimize(program.stmts, program.roots)
    assert stmts == [Assign("n", Literal(MIN))]
    assert parse_yolol(format_program(stmts)) == stmts

def test_inputs_flow_through():
    program = transpile(parse("import x; define sq(a) = a * a; let n = sum([x, 1] * [x, 2]); export n;"))
    stmts = optimize(program.stmts, program.roots)
    runtime = Runtime({"X": YololNumber.from_int(3)})
    runtime.execute(format_program(stmts))
    assert str(runtime.get("n")) == "11"


if __name__ == "__main__":
    pytest.main()
