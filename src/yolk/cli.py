import argparse
import sys
from pathlib import Path
from typing import List, Optional

from yolk.config import CompilerConfig
from yolk.errors import YolkError
from yolk.util import read_file
from yolk.workflow import compile_program


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yolkc",
        description="Compile Yolk source to Yolol",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    yolkc program.yolk                   Print the compiled program
    yolkc program.yolk -o program.yolol  Write it to a file
    yolkc program.yolk --no-optimize     Keep every emitted assignment
        """
    )
    parser.add_argument("input", help="Yolk source file")
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", "-c", help="JSON config file with a \"compiler\" section")
    parser.add_argument("--no-optimize", action="store_true", help="Skip constant folding and dead code elimination")
    parser.add_argument("--line-limit", type=int, help="Maximum characters per output line")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print progress to stderr")
    return parser


def resolve_config(args: argparse.Namespace) -> CompilerConfig:
    config = CompilerConfig.load(args.config) if args.config else CompilerConfig()
    overrides = {}
    if args.no_optimize:
        overrides["optimize"] = False
    if args.line_limit is not None:
        overrides["line_limit"] = args.line_limit
    if args.verbose:
        overrides["verbose"] = True
    return CompilerConfig.model_validate({**config.model_dump(), **overrides})


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = resolve_config(args)
        source = read_file(Path(args.input))
        if config.verbose:
            print(f"[Load] {args.input}", file=sys.stderr)
        result = compile_program(source, config)
    except (YolkError, FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if config.verbose:
        print(f"[Done] {result.emitted_stmts} -> {result.output_stmts} statements", file=sys.stderr)
    if args.output:
        Path(args.output).write_text(result.code + "\n", encoding="utf-8")
    else:
        print(result.code)
    return 0
