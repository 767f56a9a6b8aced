"""
Command-line entry point for actcodec.

Commands
- encode: JSON action (file or stdin) to canonical hex; `--hash` adds the content hash.
- decode: canonical hex to canonical JSON.
- hash: content hash of a JSON action, or of an encoded one with `--hex`.
- tags: print the discriminant and arity table.

Exit codes: 0 ok, 1 invalid input, 2 usage or configuration error.
Settings come from CodecSettings.load (env > TOML > defaults).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import CodecSettings
from .core.errors import ConfigError, DecodeError
from .core.grammar import ACTION_ARITY, ACTION_TAGS
from .core.hashing import hash_action
from .core.schema import ActionBase
from .core.serde import action_from_json, action_to_json, decode_action, describe_action, encode_action

logger = logging.getLogger("actcodec.cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def _load_settings(config: str | None) -> CodecSettings:
    """Load settings (env > TOML > defaults) and configure logging from them."""
    settings = CodecSettings.load(config).validated()
    logging.basicConfig(
        level=settings.log_level_number,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return settings


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _parse_hex(text: str) -> bytes:
    cleaned = "".join(text.split())
    if cleaned[:2] in ("0x", "0X"):
        cleaned = cleaned[2:]
    return bytes.fromhex(cleaned)


def _fmt_hex(data: bytes, settings: CodecSettings) -> str:
    return ("0x" if settings.hex_prefix else "") + data.hex()


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="TOML settings file (default: ./actcodec.toml or [tool.actcodec] in ./pyproject.toml).",
    )


def _action_from_source(source: str) -> ActionBase | None:
    try:
        return action_from_json(_read_text(source))
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        print(f"[ERROR] invalid action JSON: {exc}", file=sys.stderr)
        return None


def _decode_hex(text: str, settings: CodecSettings) -> ActionBase | None:
    try:
        data = _parse_hex(text)
    except ValueError as exc:
        print(f"[ERROR] input is not hex: {exc}", file=sys.stderr)
        return None
    try:
        return decode_action(
            data, max_depth=settings.max_depth, max_size=settings.max_payload_bytes
        )
    except DecodeError as exc:
        print(f"[ERROR] {type(exc).__name__}: {exc}", file=sys.stderr)
        return None


def _cmd_encode(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="encode", description="Encode a JSON action to canonical hex.")
    p.add_argument("source", nargs="?", default="-", help="JSON file path, or - for stdin.")
    p.add_argument("--hash", action="store_true", help="Also print the content hash.")
    _add_common(p)
    args = p.parse_args(argv)

    settings = _load_settings(args.config)
    action = _action_from_source(args.source)
    if action is None:
        return EXIT_INVALID

    logger.info("encoding %s", describe_action(action))
    print(_fmt_hex(encode_action(action), settings))
    if args.hash:
        print(_fmt_hex(hash_action(action), settings))
    return EXIT_OK


def _cmd_decode(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="decode", description="Decode canonical hex to a JSON action.")
    p.add_argument("hex", help="Hex-encoded action, or - to read hex from stdin.")
    _add_common(p)
    args = p.parse_args(argv)

    settings = _load_settings(args.config)
    text = sys.stdin.read() if args.hex == "-" else args.hex
    action = _decode_hex(text, settings)
    if action is None:
        return EXIT_INVALID

    logger.info("decoded %s", describe_action(action))
    print(action_to_json(action))
    return EXIT_OK


def _cmd_hash(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="hash", description="Print the content hash of an action.")
    p.add_argument("source", nargs="?", default="-", help="JSON file path, or - for stdin.")
    p.add_argument("--hex", dest="hex_input", type=str, default=None, help="Hash an encoded action instead.")
    _add_common(p)
    args = p.parse_args(argv)

    settings = _load_settings(args.config)
    if args.hex_input is not None:
        action = _decode_hex(args.hex_input, settings)
    else:
        action = _action_from_source(args.source)
    if action is None:
        return EXIT_INVALID

    print(_fmt_hex(hash_action(action), settings))
    return EXIT_OK


def _cmd_tags(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="tags", description="Show the discriminant and arity table.")
    args = p.parse_args(argv)
    del args

    for kind, tag in ACTION_TAGS.items():
        print(f"{tag:#04x}  {ACTION_ARITY[kind]}  {kind.value}")
    return EXIT_OK


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="actcodec", description="Canonical ledger action codec CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("encode")
    sub.add_parser("decode")
    sub.add_parser("hash")
    sub.add_parser("tags")
    return p


_COMMANDS = {
    "encode": _cmd_encode,
    "decode": _cmd_decode,
    "hash": _cmd_hash,
    "tags": _cmd_tags,
}


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        raise SystemExit(EXIT_USAGE)
    cmd, rest = argv[0], argv[1:]
    handler = _COMMANDS.get(cmd)
    if handler is None:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        raise SystemExit(EXIT_USAGE)
    try:
        code = handler(rest)
    except ConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        code = EXIT_USAGE
    raise SystemExit(code)


if __name__ == "__main__":
    main()
