from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rooclino.parsing.cbor import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    CborDecodeError,
    DecodeOptions,
    decode,
    keep_tags,
    to_jsonable,
)
from rooclino.parsing.uplink import decode_uplink_hex, extract_reading


def _input_bytes(args) -> bytes:
    if args.file:
        return Path(args.file).read_bytes()
    if not args.payload:
        raise ValueError("either a hex payload or --file is required")
    return decode_uplink_hex(args.payload)


def cmd_decode(args) -> int:
    tagger = keep_tags if args.keep_tags else None
    value = decode(_input_bytes(args), DecodeOptions(max_depth=args.max_depth), tagger=tagger)
    print(json.dumps(to_jsonable(value), indent=args.indent))
    return 0


def cmd_uplink(args) -> int:
    value = decode(_input_bytes(args), DecodeOptions(max_depth=args.max_depth))
    reading = extract_reading(value)
    print(json.dumps(reading.as_dict(), indent=args.indent))
    return 0


def _max_depth(text: str) -> int:
    value = int(text)
    if not 1 <= value <= MAX_DEPTH_LIMIT:
        raise argparse.ArgumentTypeError(f"must be between 1 and {MAX_DEPTH_LIMIT}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rooclino", description="Room climate uplink / CBOR decoding utilities")
    p.add_argument("--max-depth", type=_max_depth, default=DEFAULT_MAX_DEPTH, help="Deepest CBOR nesting accepted")
    p.add_argument("--indent", type=int, default=2, help="JSON indentation")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("decode", help="print a CBOR payload as JSON")
    sp.add_argument("payload", nargs="?", help="hex-encoded payload")
    sp.add_argument("--file", help="read raw CBOR bytes from a file instead")
    sp.add_argument("--keep-tags", action="store_true", help="render tags as {tag, value} objects")
    sp.set_defaults(func=cmd_decode)

    sp = sub.add_parser("uplink", help="print temperature, humidity and CO2 of an uplink")
    sp.add_argument("payload", nargs="?", help="hex-encoded payload")
    sp.add_argument("--file", help="read raw uplink bytes from a file instead")
    sp.set_defaults(func=cmd_uplink)

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    try:
        return ns.func(ns)
    except CborDecodeError as exc:
        print(f"error: {exc.kind.value}: {exc}", file=sys.stderr)
        return 1
    except (ValueError, TypeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
