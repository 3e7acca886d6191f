"""Base64 codec with optional CRLF line wrapping."""

import base64
import binascii
import re

CRLF = '\r\n'

_WHITESPACE = re.compile(r'\s+')


def encode(data: bytes, line_length: int = 0) -> str:
    """
    Encode raw bytes to a Base64 string.

    Args:
        data: Bytes to encode
        line_length: Length of Base64 lines. 0 means no line breaks.
            Otherwise every line ends with CRLF and the output is closed
            by one more CRLF.

    Raises:
        ValueError: If line_length is negative or not a multiple of 4
    """
    if line_length < 0 or line_length % 4 != 0:
        raise ValueError("Length must be a multiple of 4")

    encoded = base64.b64encode(data).decode('ascii')
    if line_length == 0:
        return encoded

    lines = [encoded[i:i + line_length] for i in range(0, len(encoded), line_length)]
    return ''.join(line + CRLF for line in lines) + CRLF


def base64_encode(text: str) -> str:
    """Encode a string's UTF-8 bytes on a single line."""
    return encode(text.encode('utf-8'), 0)


def decode(text: str) -> bytes:
    """
    Decode Base64 text produced by encode().

    Line breaks and other whitespace are ignored.

    Raises:
        ValueError: If the text is not valid Base64
    """
    compact = _WHITESPACE.sub('', text)
    try:
        return base64.b64decode(compact, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid Base64 input: {e}") from e
