from yolk.number import YololNumber
from yolk.errors import YolkError
from yolk.parser import parse, parse_yolol
from yolk.transpiler import Transpiler, YololProgram, transpile
from yolk.optimizer import optimize
from yolk.format import format_program
from yolk.runtime import Runtime
from yolk.config import CompilerConfig
from yolk.workflow import CompileWorkflow, compile_source
