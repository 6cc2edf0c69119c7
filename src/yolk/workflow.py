import json
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from yolk.config import CompilerConfig, DirectoriesConfig
from yolk.format import format_program
from yolk.optimizer import optimize
from yolk.parser import parse
from yolk.transpiler import transpile
from yolk.util import read_file, compute_hash

# --- Data Schemas ---


class CompileReport(BaseModel):
    model_config = ConfigDict(extra="forbid")
    hash: str = Field(..., description="SHA256 of the emitted Yolol text.")
    source: str = Field(..., description="Name of the compiled Yolk file.")
    source_stmts: int = Field(..., description="Number of Yolk statements.")
    emitted_stmts: int = Field(..., description="Assignments produced by the transpiler.")
    output_stmts: int = Field(..., description="Assignments left after optimization.")
    lines: int = Field(..., description="Lines in the emitted program.")
    roots: List[str] = Field(..., description="Exported Yolol identifiers.")
    optimized: bool = Field(..., description="Whether the optimizer ran.")


class CompileResult(BaseModel):
    model_config = ConfigDict(extra="forbid")
    code: str
    source_stmts: int
    emitted_stmts: int
    output_stmts: int
    roots: List[str]


def compile_program(source: str, config: Optional[CompilerConfig] = None) -> CompileResult:
    config = config or CompilerConfig()
    program = parse(source)
    yolol = transpile(program)
    stmts = list(yolol.stmts)
    if config.optimize:
        stmts = optimize(stmts, yolol.roots, max_iterations=config.max_fold_iterations)
    return CompileResult(
        code=format_program(stmts, line_limit=config.line_limit),
        source_stmts=len(program),
        emitted_stmts=len(yolol.stmts),
        output_stmts=len(stmts),
        roots=sorted(yolol.roots),
    )


def compile_source(source: str, config: Optional[CompilerConfig] = None) -> str:
    """Compiles Yolk source text to Yolol program text."""
    return compile_program(source, config).code


# --- Workflow ---


class CompileWorkflow:
    def __init__(self, config_path: str = "config.json"):
        self.config = CompilerConfig.load(config_path)

        # Setup directories
        dirs = DirectoriesConfig.load(config_path)
        self.input_dir = Path(dirs.input)
        self.output_dir = Path(dirs.output)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self._log(f"[Init] Workflow initialized (line_limit={self.config.line_limit}, "
                  f"optimize={self.config.optimize})")

    def _log(self, msg: str):
        if self.config.verbose:
            print(msg)

    def run(self, source_file: str) -> CompileReport:
        self._log(f"[Load] Reading {self.input_dir / source_file}...")
        source = read_file(self.input_dir / source_file)

        self._log("[Exec] Compiling...")
        result = compile_program(source, self.config)
        if self.config.optimize:
            self._log(f"[Opt] {result.emitted_stmts} -> {result.output_stmts} statements")

        report = CompileReport(
            hash=compute_hash(result.code),
            source=source_file,
            source_stmts=result.source_stmts,
            emitted_stmts=result.emitted_stmts,
            output_stmts=result.output_stmts,
            lines=len(result.code.splitlines()),
            roots=result.roots,
            optimized=self.config.optimize,
        )
        self._save_artifacts(Path(source_file).stem, result.code, report)
        return report

    def _save_artifacts(self, stem: str, code: str, report: CompileReport):
        yolol_path = self.output_dir / f"{stem}.yolol"
        json_path = self.output_dir / f"{stem}.json"

        self._log(f"[Save] Writing {yolol_path.name} and {json_path.name}...")
        yolol_path.write_text(code + "\n" if code else "", encoding='utf-8')
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(report.model_dump(), f, indent=2)

        self._log(f"[Done] Artifacts saved to {self.output_dir}")
