"""
Command line front end: compress FILE into FILE.johnny, decompress
FILE.johnny back into FILE.

How to run:
  huffpack compress input_text.txt
  huffpack decompress input_text.txt.johnny
  huffpack compress photo.png --print-tree -o photo.hp
"""

import argparse
import logging
import os
import sys

from .compression import HuffmanCompressor
from .config_loader import load_config
from .errors import HuffpackError

logger = logging.getLogger(__name__)

ACTIONS = ("compress", "decompress")


def read_whole_file(path) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def write_whole_file(path, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="huffpack",
        description="Compress and decompress files with Huffman codes.",
    )
    parser.add_argument("action", choices=ACTIONS, help="compress or decompress")
    parser.add_argument("filename", help="file to process")
    parser.add_argument("-o", "--output", default=None,
                        help="output file (default: add or strip the configured extension)")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--print-tree", action="store_true",
                        help="log the Huffman code tree while compressing")
    parser.add_argument("--byte-values", action="store_true",
                        help="draw tree symbols as byte values instead of characters")
    return parser


def parse_args(argv=None, extension=None):
    """
    Parses and validates the command line. The file must exist and, for
    decompress, end with ``extension`` when one is given.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if not os.path.isfile(args.filename):
        parser.error(f"Invalid or not existing filename '{args.filename}'")
    if args.action == "decompress" and extension and not has_extension(args.filename, extension):
        parser.error(f"Can't decompress a file without the extension {extension} ... '{args.filename}'")
    return args


def has_extension(filename: str, extension: str) -> bool:
    return filename.lower().endswith(extension.lower())


def output_path(action: str, filename: str, extension: str) -> str:
    if action == "compress":
        return filename + extension
    if extension and has_extension(filename, extension):
        return filename[:-len(extension)]
    return filename + ".out"


def run(args, config) -> str:
    """Performs the requested action and returns the path written."""
    extension = config["compression"]["extension"]
    target = args.output or output_path(args.action, args.filename, extension)
    compressor = HuffmanCompressor(
        print_tree=args.print_tree or config["compression"]["print_tree"],
        print_text_char=not args.byte_values and config["compression"]["print_text_char"],
    )

    data = read_whole_file(args.filename)
    if args.action == "compress":
        logger.info("...start compressing file %s", args.filename)
        result = compressor.compress(data)
        write_whole_file(target, result)
        logger.info("...finish writing compressed file %s", target)
    else:
        logger.info("...start decompressing file %s", args.filename)
        result = compressor.decompress(data)
        write_whole_file(target, result)
        logger.info("...finish writing decompressed file %s", target)

    logger.info("%d bytes -> %d bytes", len(data), len(result))
    return target


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config", default=None)
    known, _ = pre_parser.parse_known_args(argv)

    try:
        config = load_config(known.config)
    except (OSError, ValueError) as e:
        print(f"Cannot load configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config["logging"]["level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("huffpack").setLevel(config["logging"]["level"])
    args = parse_args(argv, extension=config["compression"]["extension"])

    try:
        run(args, config)
    except (HuffpackError, OSError) as e:
        logger.error("Failed to %s %s: %s", args.action, args.filename, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
