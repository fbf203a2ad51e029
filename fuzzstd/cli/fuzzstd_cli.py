#!/usr/bin/env python3
import argparse
import sys

import fuzzstd
from fuzzstd.bounds import bound, bound_int
from fuzzstd.convert import parse, to_string
from fuzzstd.exceptions import FuzzStdException
from fuzzstd.identity import derive_identity_and_secret
from fuzzstd.types import SemanticType


def _parse_cli_args():
    return _parse_args(sys.argv[1:])


def _parse_args(argv):
    parser = argparse.ArgumentParser(description="Helpers for fuzz harness authors")
    parser.add_argument(
        "--version",
        action="version",
        version=fuzzstd.__version__,
        help="display the version of fuzzstd",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    addr = subparsers.add_parser("addr", help="derive the address for a label")
    addr.add_argument("label", help="label to derive the address from (e.g. alice)")
    addr.add_argument(
        "--show-secret", help="also print the derived signing secret", action="store_true"
    )

    bnd = subparsers.add_parser("bound", help="fold a value into an inclusive range")
    bnd.add_argument("x", type=_int_arg)
    bnd.add_argument("min", type=_int_arg)
    bnd.add_argument("max", type=_int_arg)
    bnd.add_argument("--signed", help="treat inputs as int256", action="store_true")

    conv = subparsers.add_parser("convert", help="parse a value and print its canonical form")
    conv.add_argument("text")
    conv.add_argument(
        "--type",
        help=f"semantic type of the value; valid options: {', '.join(SemanticType.values())}",
        choices=SemanticType.values(),
        required=True,
        dest="typ",
    )

    args = parser.parse_args(argv)

    try:
        for line in _run(args):
            print(line)
    except FuzzStdException as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _int_arg(s):
    # accepts decimal and 0x-prefixed hex
    return int(s, 0)


def _run(args):
    if args.command == "addr":
        address, secret = derive_identity_and_secret(args.label)
        yield address
        if args.show_secret:
            yield f"0x{secret:064x}"
    elif args.command == "bound":
        fn = bound_int if args.signed else bound
        yield str(fn(args.x, args.min, args.max))
    elif args.command == "convert":
        typ = SemanticType(args.typ)
        yield to_string(parse(args.text, typ), typ)


if __name__ == "__main__":
    _parse_cli_args()
