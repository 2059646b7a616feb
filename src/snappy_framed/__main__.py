"""
Command line filter for framed Snappy streams.

Usage::

    python -m snappy_framed compress input.txt output.sz
    python -m snappy_framed decompress output.sz restored.txt
    cat input.txt | python -m snappy_framed compress > output.sz
    python -m snappy_framed decompress --ignore-crc < output.sz

Options:
    --ignore-crc   Do not verify chunk checksums when decompressing
    --strict       Reject reserved unskippable chunks when decompressing
    -v, --verbose  Enable debug logging
"""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import ExitStack
from typing import BinaryIO

from .config import FramingConfig
from .constants import MAX_UNCOMPRESSED_CHUNK_SIZE
from .decoder import CrcMode, FramedDecoder
from .encoder import FramedEncoder
from .exceptions import FramingError

logger = logging.getLogger(__name__)

COPY_SIZE = MAX_UNCOMPRESSED_CHUNK_SIZE
"""Bytes moved per read; one full block keeps compressed chunks large."""


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def compress_stream(source: BinaryIO, sink: BinaryIO, config: FramingConfig | None = None) -> int:
    """
    Compress everything readable from `source` into `sink`.

    Returns:
        Number of uncompressed bytes consumed.
    """
    total = 0
    with FramedEncoder(sink, config=config) as encoder:
        while block := source.read(COPY_SIZE):
            encoder.write(block)
            total += len(block)
    return total


def decompress_stream(
    source: BinaryIO,
    sink: BinaryIO,
    mode: CrcMode = CrcMode.VERIFY,
    config: FramingConfig | None = None,
) -> int:
    """
    Decompress a framed stream from `source` into `sink`.

    Returns:
        Number of decompressed bytes written.

    Raises:
        FramingError: If the stream is truncated, corrupted or malformed.
    """
    total = 0
    with FramedDecoder(source, mode, config=config) as decoder:
        while block := decoder.read(COPY_SIZE):
            sink.write(block)
            total += len(block)
    sink.flush()
    return total


def _open(path: str, mode: str, stack: ExitStack) -> BinaryIO:
    if path == "-":
        return sys.stdin.buffer if "r" in mode else sys.stdout.buffer
    return stack.enter_context(open(path, mode))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="snappy_framed",
        description="Compress or decompress Snappy framed streams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("command", choices=["compress", "decompress"])
    parser.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")
    parser.add_argument("output", nargs="?", default="-", help="Output file (default: stdout)")
    parser.add_argument(
        "--ignore-crc",
        action="store_true",
        help="Do not verify chunk checksums when decompressing",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject reserved unskippable chunks when decompressing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_intermixed_args(argv)

    setup_logging(args.verbose)

    config = FramingConfig(reject_unskippable_chunks=args.strict)
    mode = CrcMode.IGNORE if args.ignore_crc else CrcMode.VERIFY

    try:
        with ExitStack() as stack:
            source = _open(args.input, "rb", stack)
            sink = _open(args.output, "wb", stack)
            if args.command == "compress":
                total = compress_stream(source, sink, config)
                logger.debug("Compressed %d bytes", total)
            else:
                total = decompress_stream(source, sink, mode, config)
                logger.debug("Decompressed %d bytes", total)
    except (FramingError, OSError) as exc:
        logger.error("Failed to %s %s: %s", args.command, args.input, exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
