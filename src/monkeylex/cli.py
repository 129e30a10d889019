"""Command-line interface for monkeylex."""

from __future__ import annotations

import argparse
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from monkeylex.errors import LexError
from monkeylex.repl import BANNER, PROMPT, QUIT_MARKER, format_token, start
from monkeylex.tokens import Token, TokenType
from monkeylex.wire import encode_tokens

FORMATS = ("text", "json", "wire")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    output_file: Path | None
    format: str
    strict: bool
    debug: bool
    repl: bool
    prompt: str
    quit_marker: str
    banner: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="monkeylex",
        description="Tokenizer for the Monkey programming language",
    )
    p.add_argument(
        "input",
        nargs="?",
        help="Source file ('-' for stdin; omit on a terminal to start the REPL)",
    )
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: text)",
    )
    p.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail on the first illegal character (--no-strict overrides the config)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover monkeylex.toml)",
    )
    p.add_argument("--prompt", default=None, help="REPL prompt")
    p.add_argument(
        "--repl",
        action="store_true",
        help="Start the interactive REPL (not combinable with -o, --format or --debug)",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "monkeylex.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def _typed(section: dict[str, Any], key: str, default: Any, expected: type, where: str) -> Any:
    """Return section[key] if it has the expected type, default if absent."""
    if key not in section:
        return default
    value = section[key]
    if not isinstance(value, expected):
        raise argparse.ArgumentTypeError(
            f"invalid {where}.{key} in config (expected {expected.__name__}): {value!r}"
        )
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    Raises ArgumentTypeError for a config value of the wrong type and for
    output options given together with the REPL.
    """
    input_file = None if args.input in (None, "-") else Path(args.input)
    # monkeylex.toml sits beside the input file, else in the current directory
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)
    cfg_repl = _section(config, "repl")
    cfg_output = _section(config, "output")

    # Output format: default < config < CLI
    fmt = _typed(cfg_output, "format", "text", str, "output")
    if fmt not in FORMATS:
        raise argparse.ArgumentTypeError(
            f"invalid output format in config (expected one of {', '.join(FORMATS)}): {fmt}"
        )
    if args.format is not None:
        fmt = args.format

    strict = _typed(cfg_output, "strict", False, bool, "output")
    if args.strict is not None:
        strict = args.strict

    prompt = _typed(cfg_repl, "prompt", PROMPT, str, "repl")
    if args.prompt is not None:
        prompt = args.prompt

    repl = args.repl or (args.input is None and sys.stdin.isatty())
    if repl:
        conflicts = [
            flag
            for flag, given in (
                ("-o", args.output is not None),
                ("--format", args.format is not None),
                ("--debug", args.debug),
            )
            if given
        ]
        if conflicts:
            raise argparse.ArgumentTypeError(
                f"the REPL cannot be combined with {', '.join(conflicts)}"
            )

    return CliOptions(
        input_file=input_file,
        output_file=Path(args.output) if args.output else None,
        format=fmt,
        strict=strict,
        debug=args.debug,
        repl=repl,
        prompt=prompt,
        quit_marker=_typed(cfg_repl, "quit", QUIT_MARKER, str, "repl"),
        banner=_typed(cfg_repl, "banner", BANNER, str, "repl"),
    )


def read_source(options: CliOptions) -> bytes:
    """Read the raw source bytes from the input file or stdin."""
    if options.input_file is None:
        return sys.stdin.buffer.read()
    return options.input_file.read_bytes()


def render_tokens(tokens: list[Token], fmt: str) -> str | bytes:
    """Render a token stream in the requested output format."""
    if fmt == "wire":
        return encode_tokens(tokens)

    if fmt == "json":
        payload = []
        for tok in tokens:
            entry: dict[str, Any] = {"type": tok.type.name, "literal": tok.literal}
            if tok.span is not None:
                entry["line"] = tok.span.start.line
                entry["column"] = tok.span.start.column
            payload.append(entry)
        return json.dumps(payload, indent=2) + "\n"

    return "".join(format_token(t) + "\n" for t in tokens if t.type is not TokenType.EOF)


def write_output(options: CliOptions, rendered: str | bytes) -> None:
    if options.output_file is not None:
        if isinstance(rendered, bytes):
            options.output_file.write_bytes(rendered)
        else:
            options.output_file.write_text(rendered, encoding="utf-8")
    elif isinstance(rendered, bytes):
        sys.stdout.buffer.write(rendered)
        sys.stdout.buffer.flush()
    else:
        sys.stdout.write(rendered)


def run_repl(options: CliOptions) -> None:
    try:
        start(
            prompt=options.prompt,
            quit_marker=options.quit_marker,
            banner=options.banner,
            strict=options.strict,
        )
    except KeyboardInterrupt:
        print(file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    from monkeylex.debug import dump_tokens
    from monkeylex.lexer import check_tokens, tokenize

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: cannot load config: {exc}", file=sys.stderr)
        return 2

    if options.repl:
        run_repl(options)
        return 0

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    try:
        source = read_source(options)
    except OSError as exc:
        print(f"error: cannot read {filename}: {exc}", file=sys.stderr)
        return 2

    tokens = tokenize(source)

    if options.debug:
        dump_tokens(tokens)

    if options.strict:
        try:
            check_tokens(tokens, source)
        except LexError as exc:
            print(exc.format(filename), file=sys.stderr)
            return 1

    try:
        write_output(options, render_tokens(tokens, options.format))
    except OSError as exc:
        print(f"error: cannot write output: {exc}", file=sys.stderr)
        return 2
    return 0
