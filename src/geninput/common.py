import re

# Bytes written to STDOUT are drawn from this pattern, which repeats as many
# times as needed. It's printable ASCII, so the output is safe to inspect in a
# terminal or a text fixture.
FILLER_PATTERN = bytes(range(ord(" "), ord("~") + 1))

# It's faster to write data in chunks, instead of one byte at a time.
# A multiple of the pattern length, so every chunk starts at the same offset.
WRITE_CHUNK = len(FILLER_PATTERN) * 1024

# Number of positional arguments generate_input accepts
EXPECTED_ARGS = 1

# An optional plus sign, then ASCII digits only
LENGTH_RE = re.compile(r"\+?[0-9]+")


class GeneratorError(ValueError):
    """
    Base class for errors detected before any output is written.
    """


class ArgumentCountError(GeneratorError):
    def __init__(self, expected, given):
        self.expected = expected
        self.given = given
        super().__init__(
            f"only {expected} argument expected ({given} given)"
        )


class UsageError(GeneratorError):
    """
    An invocation argparse can't make sense of.
    """


class LengthParseError(GeneratorError):
    def __init__(self, text):
        self.text = text
        super().__init__(
            f"invalid length {text!r} (expected a non-negative integer)"
        )


def check_argument_count(values, expected=EXPECTED_ARGS):
    """
    :param values: The positional arguments supplied on the command line
    :param expected: How many positional arguments are required
    :raises ArgumentCountError: If the number of arguments doesn't match
    """
    if len(values) != expected:
        raise ArgumentCountError(expected, len(values))


def parse_length(text):
    """
    Parse the requested output length.

    :param text: The command-line argument, as a string
    :returns: A non-negative integer
    :raises LengthParseError: If text isn't a non-negative base-10 integer
    """
    if not LENGTH_RE.fullmatch(text.strip()):
        raise LengthParseError(text)
    return int(text.strip())


def filler(byte_count, offset=0):
    """
    :param byte_count: Number of bytes
    :param offset: Position in the overall output where these bytes start
    :returns: byte_count bytes of the repeating filler pattern
    """
    start = offset % len(FILLER_PATTERN)
    repeats = (start + byte_count) // len(FILLER_PATTERN) + 1
    return (FILLER_PATTERN * repeats)[start : start + byte_count]
