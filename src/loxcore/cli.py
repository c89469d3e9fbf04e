"""Command-line interface and interactive prompt for Lox expressions."""

from __future__ import annotations

import argparse
import sys
import tomllib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from loxcore.errors import EvalError, LexError, ParseError

DEFAULT_PROMPT = "> "
DEFAULT_HISTORY_FILE = "~/.lox_history"
DEFAULT_HISTORY_LENGTH = 1000
CONFIG_FILENAME = "loxcore.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    command: str | None
    prompt: str
    history_file: Path | None
    history_length: int
    strict: bool
    print_ast: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="loxcore",
        description="Evaluate Lox expressions; starts a prompt when no input is given",
    )
    p.add_argument("input", nargs="?", help="File holding a single expression")
    p.add_argument("-c", "--command", metavar="EXPR", help="Evaluate EXPR and exit")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILENAME})",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Report operator type mismatches instead of producing nil",
    )
    p.add_argument(
        "--print-ast",
        action="store_true",
        help="Print the parsed expression as an S-expression instead of its value",
    )
    p.add_argument(
        "--history-file",
        metavar="FILE",
        help=f"Prompt history file (default: {DEFAULT_HISTORY_FILE})",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens and AST to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir if search_dir is not None else Path("."))

    prompt = DEFAULT_PROMPT
    history = DEFAULT_HISTORY_FILE
    history_length = DEFAULT_HISTORY_LENGTH
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if isinstance(cfg_prompt, str):
            prompt = cfg_prompt
        cfg_history = cfg_repl.get("history_file")
        if isinstance(cfg_history, str):
            history = cfg_history
        cfg_length = cfg_repl.get("history_length")
        if isinstance(cfg_length, int) and not isinstance(cfg_length, bool):
            history_length = cfg_length
    if args.history_file:
        history = args.history_file

    strict = False
    cfg_eval = config.get("eval")
    if isinstance(cfg_eval, dict):
        cfg_strict = cfg_eval.get("strict")
        if isinstance(cfg_strict, bool):
            strict = cfg_strict
    if args.strict is not None:
        strict = args.strict

    # An empty history_file setting disables history
    history_file = Path(history).expanduser() if history else None

    return CliOptions(
        input_file=Path(args.input) if args.input else None,
        command=args.command,
        prompt=prompt,
        history_file=history_file,
        history_length=history_length,
        strict=strict,
        print_ast=args.print_ast,
        debug=args.debug,
    )


def run_source(source: str, options: CliOptions, out: TextIO) -> str:
    """Run one source text through lex → parse → evaluate (or print) and write the result."""
    from loxcore.debug import dump_ast, dump_tokens
    from loxcore.interpreter import evaluate
    from loxcore.lexer import lex
    from loxcore.parser import parse
    from loxcore.printer import print_ast
    from loxcore.values import stringify

    tokens = lex(source)
    if options.debug:
        dump_tokens(tokens, file=sys.stderr)
    expr = parse(tokens, source)
    if options.debug:
        dump_ast(expr, file=sys.stderr)

    if options.print_ast:
        result = print_ast(expr)
    else:
        result = stringify(evaluate(expr, strict=options.strict, source=source))
    out.write(result + "\n")
    return result


def _load_history(options: CliOptions) -> None:
    try:
        import readline
    except ImportError:  # platforms without GNU readline keep no history
        return
    readline.set_history_length(options.history_length)
    if options.history_file is not None and options.history_file.is_file():
        readline.read_history_file(options.history_file)


def _save_history(options: CliOptions) -> None:
    try:
        import readline
    except ImportError:
        return
    if options.history_file is None:
        return
    try:
        readline.write_history_file(options.history_file)
    except OSError as exc:
        print(f"warning: could not save history: {exc}", file=sys.stderr)


def repl(
    options: CliOptions,
    read_line: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> int:
    """Read-evaluate-print loop. Errors are reported and the loop continues.

    Ends on end-of-input or interrupt and returns exit code 0.
    """
    if out is None:
        out = sys.stdout
    if read_line is input:
        _load_history(options)
    try:
        while True:
            try:
                line = read_line(options.prompt)
            except (EOFError, KeyboardInterrupt):
                out.write("\n")
                return 0
            if not line.strip():
                continue
            try:
                run_source(line, options, out)
            except (LexError, ParseError, EvalError) as exc:
                print(exc.format("<stdin>"), file=sys.stderr)
    finally:
        if read_line is input:
            _save_history(options)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.command is not None:
        source, filename = options.command, "<command>"
    elif options.input_file is not None:
        try:
            source = options.input_file.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        filename = str(options.input_file)
    else:
        return repl(options)

    try:
        run_source(source, options, sys.stdout)
    except (LexError, ParseError) as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except EvalError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 2

    return 0


def _entry() -> None:
    sys.exit(main())
