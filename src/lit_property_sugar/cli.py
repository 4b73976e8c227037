"""CLI entry point (``lit-property-sugar`` / ``python -m lit_property_sugar.cli``)."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import IO

from .config import ConfigError, find_config, load_rules
from .errors import EnhanceError
from .rules import FULL, Rules, preset
from .typescript import detect_language, transform

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lit-property-sugar",
        description="Infer type, attribute and reflect options for @property decorators",
    )
    parser.add_argument("files", nargs="+", type=Path, help="TypeScript/JavaScript files")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--write", action="store_true", help="Rewrite files in place")
    mode.add_argument("--check", action="store_true", help="Exit 1 if any file would change")
    parser.add_argument("--preset", choices=["full", "minimal"], help="Rule set to start from")
    parser.add_argument("--decorator", metavar="NAME", help="Decorator name (default: property)")
    parser.add_argument("--config", type=Path, help="pyproject.toml to read settings from")
    parser.add_argument(
        "--omit-default-string-type",
        action="store_true",
        default=None,
        help="Do not write `type: String`",
    )
    parser.add_argument("--no-attribute", action="store_true", help="Do not infer `attribute`")
    parser.add_argument("--no-reflect", action="store_true", help="Do not infer `reflect`")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def resolve_rules(args: argparse.Namespace) -> Rules:
    """Preset flag as the base, file settings over it, then the other flags."""
    config_path = args.config if args.config else find_config(Path.cwd())
    base = preset(args.preset) if args.preset else FULL
    rules = load_rules(config_path, base, use_preset=not args.preset)

    overrides: dict[str, object] = {}
    if args.decorator:
        overrides["decorator_name"] = args.decorator
    if args.omit_default_string_type:
        overrides["omit_default_string_type"] = True
    if args.no_attribute:
        overrides["infer_attribute"] = False
    if args.no_reflect:
        overrides["infer_reflect"] = False
    return dataclasses.replace(rules, **overrides)


def process_file(path: Path, rules: Rules, args: argparse.Namespace, out: IO[str]) -> int:
    """Enhance one file. Returns its exit status."""
    language = detect_language(path)
    if language is None:
        print(f"{path}: unsupported file type", file=sys.stderr)
        return 1
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error reading '{path}': {exc}", file=sys.stderr)
        return 1

    try:
        result = transform(source, rules, language)
    except EnhanceError as exc:
        print(exc.code_frame(source, str(path)), file=sys.stderr)
        return 1
    logger.debug("%s: %d decorator(s) rewritten", path, len(result.rewrites))

    if args.check:
        if result.changed:
            print(f"would rewrite {path}", file=out)
            return 1
        return 0
    if args.write:
        if result.changed:
            path.write_text(result.output, encoding="utf-8")
            print(f"rewrote {path}", file=out)
        return 0
    out.write(result.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        rules = resolve_rules(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    logger.debug("Using rules %s", rules)

    status = 0
    for path in args.files:
        status = max(status, process_file(path, rules, args, sys.stdout))
    return status


if __name__ == "__main__":
    sys.exit(main())
