"""Encode command: Base64-encode standard input."""

import logging
import sys
from argparse import Namespace

from propkit.codec import encode


logger = logging.getLogger(__name__)


def encode_stdin(args: Namespace) -> int:
    """Base64-encode standard input."""
    try:
        encoded = encode(sys.stdin.buffer.read(), args.line_length)
    except ValueError as e:
        logger.error(str(e))
        return 2

    sys.stdout.write(encoded)
    if not args.line_length:
        sys.stdout.write('\n')
    return 0
