"""Command-line interface for PicoCalc: one-shot evaluation and the REPL."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from picocalc.errors import ParseError

CONFIG_NAME = "picocalc.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    expressions: list[str]
    prompt: str
    quit_command: str
    number_format: str
    strict: bool
    tokens: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="picocalc",
        description="Evaluate arithmetic expressions (+ - * / ** and parentheses)",
    )
    p.add_argument(
        "expression",
        nargs="*",
        help="Expression to evaluate; starts an interactive session when omitted",
    )
    p.add_argument("--prompt", default=None, help="Interactive prompt (default: '> ')")
    p.add_argument(
        "--format",
        default=None,
        metavar="SPEC",
        help="Format spec for results (default: g)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Reject input left over after a complete expression",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--tokens", action="store_true", help="Dump tokens to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name)
    return section if isinstance(section, dict) else {}


def check_format(spec: str) -> str:
    """Return spec if float formatting accepts it, else raise ArgumentTypeError."""
    try:
        format(0.0, spec)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid format spec {spec!r}: {exc}") from None
    return spec


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir if search_dir is not None else Path("."))

    repl_cfg = _section(config, "repl")
    output_cfg = _section(config, "output")
    parser_cfg = _section(config, "parser")

    prompt = "> "
    if isinstance(repl_cfg.get("prompt"), str):
        prompt = repl_cfg["prompt"]
    if args.prompt is not None:
        prompt = args.prompt

    quit_command = ":quit"
    if isinstance(repl_cfg.get("quit"), str):
        quit_command = repl_cfg["quit"]

    number_format = "g"
    if isinstance(output_cfg.get("format"), str):
        number_format = output_cfg["format"]
    if args.format is not None:
        number_format = args.format

    strict = False
    if isinstance(parser_cfg.get("strict"), bool):
        strict = parser_cfg["strict"]
    if args.strict is not None:
        strict = args.strict

    return CliOptions(
        expressions=list(args.expression),
        prompt=prompt,
        quit_command=quit_command,
        number_format=check_format(number_format),
        strict=strict,
        tokens=args.tokens,
    )


def evaluate_line(line: str, options: CliOptions) -> str:
    """Evaluate one line and return the formatted value. Raises ParseError."""
    from picocalc.debug import dump_tokens
    from picocalc.evaluator import evaluate

    if options.tokens:
        dump_tokens(line, file=sys.stderr)

    value = evaluate(line, strict=options.strict)
    return format(value, options.number_format)


def repl(options: CliOptions, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Read lines until EOF or the quit command, printing each result or error."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    while True:
        stdout.write(options.prompt)
        stdout.flush()
        raw = stdin.readline()
        if not raw:
            stdout.write("\n")
            break

        line = raw.rstrip("\r\n")
        if line == options.quit_command:
            break
        if not line.strip():
            continue

        try:
            result = evaluate_line(line, options)
        except ParseError as exc:
            stdout.write(f"{exc}\n")
            continue
        stdout.write(f" = {result}\n")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if not options.expressions:
        try:
            repl(options)
        except KeyboardInterrupt:
            pass
        return 0

    for expression in options.expressions:
        try:
            result = evaluate_line(expression, options)
        except ParseError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        print(result)

    return 0
