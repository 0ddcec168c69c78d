"""
generator.py

Writes a deterministic sequence of bytes to STDOUT, for use as test input.

Usage:
> generate_input 5
 !"#$
> python -m geninput.generator 0
"""

import argparse
import hashlib
import logging
import os
import sys

from .common import (
    FILLER_PATTERN,
    WRITE_CHUNK,
    GeneratorError,
    UsageError,
    check_argument_count,
    filler,
    parse_length,
)


def generate_data(byte_count, output):
    """
    :param byte_count: Number of bytes
    :param output: A binary file object the data is written to
    :returns: A checksum of the data
    """
    sha = hashlib.sha256()
    for offset in range(0, byte_count, WRITE_CHUNK):
        chunk = filler(min(WRITE_CHUNK, byte_count - offset), offset)
        sha.update(chunk)
        output.write(chunk)
    return sha.hexdigest()


class ArgumentParser(argparse.ArgumentParser):
    """
    Reports problems by raising UsageError, instead of printing usage and
    exiting with status 2.
    """

    def error(self, message):
        raise UsageError(message)


def parse_args(argv):
    """
    Parse and validate the command line. Nothing is written to STDOUT here.

    :param argv: Command-line arguments, excluding the program name
    :returns: An argparse.Namespace with loglevel and length attributes
    :raises GeneratorError: If the arguments are invalid
    """
    # No -h/--help: STDOUT holds the generated bytes and nothing else
    parser = ArgumentParser(
        prog="generate_input",
        description="Write a deterministic sequence of bytes to STDOUT.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--debug",
        help="Print DEBUG logging",
        action="store_const",
        dest="loglevel",
        const=logging.DEBUG,
        default=logging.WARNING,
    )
    parser.add_argument(
        "--verbose",
        help="Print INFO logging",
        action="store_const",
        dest="loglevel",
        const=logging.INFO,
    )
    # Collect every positional argument, so a wrong count can be reported
    # with the number actually given
    parser.add_argument(
        "len",
        help="Number of bytes to generate",
        nargs="*",
    )
    # Unrecognized options count as arguments too
    args, unknown = parser.parse_known_args(argv)
    values = args.len + unknown

    check_argument_count(values)
    args.length = parse_length(values[0])
    return args


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)
    # Don't print the full stack trace for known error types
    except GeneratorError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(level=args.loglevel)
    logging.debug(f"length={args.length}")
    logging.debug(f"WRITE_CHUNK={WRITE_CHUNK}")
    logging.debug(f"len(FILLER_PATTERN)={len(FILLER_PATTERN)}")

    output = sys.stdout.buffer
    try:
        try:
            digest = generate_data(args.length, output)
        finally:
            output.flush()
    except BrokenPipeError:
        # Python flushes STDOUT again at exit. Point it at devnull, so the
        # closed pipe doesn't cause a second error.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
        print(
            f"error: output closed before {args.length} bytes were written",
            file=sys.stderr,
        )
        sys.exit(1)
    logging.info(f"Wrote {args.length} bytes, sha256 {digest}")
    sys.exit(0)


if __name__ == "__main__":
    main()
