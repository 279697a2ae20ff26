import argparse
import logging
import sys

from typing import List, Optional, Union
from bitdataview import BitDataView
from errors import BitDataViewError, BitTypeError

#: Field types understood by ``read``/``write`` mapped to their fixed width,
#: or ``None`` when ``--width`` must be given.
FIELD_TYPES = {
    "bit": 1,
    "byte": None,
    "uint": None,
    "int": None,
    "big_uint": None,
    "big_int": None,
    "float32": 32,
    "float64": 64,
}

Value = Union[bool, int, float]


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Inspect and patch bit fields inside binary files"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    dump = subparsers.add_parser(
        "dump", aliases=["d"], help="Print the bits of a file"
    )
    dump.add_argument("file", help="Binary file to dump")
    dump.add_argument(
        "--msb", action="store_true",
        help="Treat the highest bit of each byte as bit 0",
    )

    info = subparsers.add_parser(
        "info", aliases=["i"], help="Print the view status of a file"
    )
    info.add_argument("file", help="Binary file to inspect")

    for name, alias, help_text in (
        ("read", "r", "Print one field of a file"),
        ("write", "w", "Patch one field of a file in place"),
    ):
        sub = subparsers.add_parser(name, aliases=[alias], help=help_text)
        sub.add_argument("file", help="Binary file")
        sub.add_argument(
            "-t", "--type", required=True, choices=sorted(FIELD_TYPES),
            help="Field type",
        )
        sub.add_argument(
            "-w", "--width", type=int,
            help="Field width in bits (byte, uint, int, big_uint, big_int)",
        )
        sub.add_argument(
            "-o", "--offset", type=int, required=True,
            help="Bit offset of the field",
        )
        sub.add_argument(
            "--until", action="store_true",
            help="Count the offset back from the end of the file",
        )
        sub.add_argument(
            "--big-endian", action="store_true",
            help="Use big-endian byte order (default: little-endian)",
        )
        sub.add_argument(
            "--msb", action="store_true",
            help="Treat the highest bit of each byte as bit 0",
        )
        if name == "write":
            sub.add_argument(
                "--value", required=True,
                help="New value (integers accept 0x/0b/0o prefixes)",
            )

    return parser


def _load_view(path: str, msb: bool = False,
               big_endian: bool = False) -> BitDataView:
    """Read a whole file into a fixed-capacity view.

    :param path: File to read.
    :type path: str
    :param msb: Select MSB bit numbering.
    :type msb: bool
    :param big_endian: Select big-endian byte order.
    :type big_endian: bool
    :returns: View storing every bit of the file.
    :rtype: BitDataView
    :raises FileNotFoundError: If ``path`` does not exist.
    """
    with open(path, "rb") as f:
        data = f.read()
    view = BitDataView()
    view.import_bytes(data)
    if msb:
        view.bit_numbering.set_msb()
    if big_endian:
        view.endianness.set_big_endian()
    return view


def _parse_value(field_type: str, text: str) -> Value:
    """Convert a command line value for ``field_type``.

    :param field_type: One of ``FIELD_TYPES``.
    :type field_type: str
    :param text: Raw text from ``--value``.
    :type text: str
    :returns: Parsed value.
    :rtype: Union[bool, int, float]
    :raises BitTypeError: If ``text`` does not parse.
    """
    try:
        if field_type.startswith("float"):
            return float(text)
        return int(text, 0)
    except ValueError:
        raise BitTypeError(
            f"Invalid {field_type} value: {text!r}"
        ) from None


def _field_args(field_type: str, offset: int, width: Optional[int]) -> list:
    if FIELD_TYPES[field_type] is None:
        return [offset, width]
    return [offset]


def read_field(view: BitDataView, field_type: str, offset: int,
               width: Optional[int] = None, until: bool = False) -> Value:
    """Read one field through the matching ``get_at_*``/``get_until_*``.

    :param view: Source view.
    :type view: BitDataView
    :param field_type: One of ``FIELD_TYPES``.
    :type field_type: str
    :param offset: Bit offset.
    :type offset: int
    :param width: Field width for variable-width types.
    :type width: Optional[int]
    :param until: Count ``offset`` from the end instead of the front.
    :type until: bool
    :rtype: Union[bool, int, float]
    """
    method = getattr(view, f"get_{'until' if until else 'at'}_{field_type}")
    return method(*_field_args(field_type, offset, width))


def write_field(view: BitDataView, field_type: str, offset: int,
                value: Value, width: Optional[int] = None,
                until: bool = False) -> None:
    """Write one field through the matching ``set_at_*``/``set_until_*``."""
    method = getattr(view, f"set_{'until' if until else 'at'}_{field_type}")
    method(*_field_args(field_type, offset, width), value)


def _format_value(value: Value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Arguments, ``sys.argv[1:]`` when omitted.
    :type argv: Optional[List[str]]
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd in ["read", "r", "write", "w"]:
        if FIELD_TYPES[args.type] is None and args.width is None:
            parser.error(f"--width is required for --type {args.type}")

    try:
        if args.cmd in ["dump", "d"]:
            view = _load_view(args.file, msb=args.msb)
            print(view.to_binary_string())
        elif args.cmd in ["info", "i"]:
            view = _load_view(args.file)
            print(view)
        elif args.cmd in ["read", "r"]:
            view = _load_view(args.file, args.msb, args.big_endian)
            value = read_field(
                view, args.type, args.offset, args.width, args.until
            )
            print(_format_value(value))
        elif args.cmd in ["write", "w"]:
            view = _load_view(args.file, args.msb, args.big_endian)
            value = _parse_value(args.type, args.value)
            write_field(
                view, args.type, args.offset, value, args.width, args.until
            )
            # raw storage: export_bytes would re-read through --msb
            with open(args.file, "wb") as out:
                out.write(view.storage)
    except FileNotFoundError:
        print(f"[!] File not found: {args.file}", file=sys.stderr)
        return 1
    except BitDataViewError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
