from .Exceptions import *

LINE_FEED = 0x0A
MAX_CODE_POINT = 0x10FFFF

class ProcessMode:
    SELF = 1
    SUBS = 2
    BOTH = 3

def is_code_point(value) -> bool:
    """Test whether a value is usable as a single separator code point.

    :param value: Candidate code point
    :type value: int

    :returns: True for an integer strictly between zero and 0x10FFFF that is
            not a UTF-16 surrogate (those have no UTF-8 encoding)
    :rtype: bool
    """

    # bool is an int subclass, but True is never meant as U+0001
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 < value < MAX_CODE_POINT and not 0xD800 <= value <= 0xDFFF

def resolve_separator(separator, default=LINE_FEED):
    """Resolve a separator specification into code points and match bytes.

    :param separator: A string, a single code point, a sequence of code points,
            a byte string, or None for the default
    :type separator: str, int, list, tuple, bytes

    :returns: Tuple of (code point tuple, separator bytes)
    :rtype: tuple

    Code points and code point sequences are matched as raw octets when every
    code point fits in a byte, so `[0xFE]` splits on the byte 0xFE. Sequences
    holding larger code points, and all strings, are matched as their UTF-8
    encoding, the way they appear inside UTF-8 text. Byte strings are taken
    verbatim; for those the returned tuple holds the raw octets, which may
    include zero. Anything else raises InvalidSeparator."""

    if separator is None:
        separator = default

    if isinstance(separator, (bytes, bytearray)):
        if len(separator) == 0:
            raise InvalidSeparator("Bad separator: %r is empty" % (separator,))
        return (tuple(separator), bytes(separator))
    elif isinstance(separator, str):
        if len(separator) == 0:
            raise InvalidSeparator("Bad separator: empty string")
        code_points = tuple(ord(c) for c in separator)
        if not all(is_code_point(cp) for cp in code_points):
            raise InvalidSeparator("Bad separator: %r contains an invalid character" % separator)
        return (code_points, separator.encode("utf-8"))
    elif isinstance(separator, int) and not isinstance(separator, bool):
        if not is_code_point(separator):
            raise InvalidSeparator("Bad separator: %r is not a valid code point" % separator)
        code_points = (separator,)
    elif isinstance(separator, (list, tuple)):
        if len(separator) == 0 or not all(is_code_point(cp) for cp in separator):
            raise InvalidSeparator("Bad separator: %r, every element should be a valid code point" % (separator,))
        code_points = tuple(separator)
    else:
        raise InvalidSeparator("Bad separator: %r" % (separator,))

    if all(cp <= 0xFF for cp in code_points):
        return (code_points, bytes(code_points))
    return (code_points, "".join(chr(cp) for cp in code_points).encode("utf-8"))

def to_bytes(data) -> bytes:
    """Normalize incoming chunk data into a `bytes()` buffer.

    :param data: Single byte value, list of byte values, or bytes-like object
    :type data: int, list, bytes

    :returns: Normalized buffer
    :rtype: bytes
    """

    try:
        if isinstance(data, bool):
            raise TypeError("bool is not a byte value")
        if isinstance(data, int):
            # given a single integer, so convert it to bytes first
            return bytes([data])
        elif isinstance(data, (list, tuple)):
            # given a list, so convert it to bytes first
            return bytes(data)
        elif isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
    except (TypeError, ValueError) as e:
        raise InvalidInput("Cannot use %r as a byte chunk" % (data,)) from e

    raise InvalidInput("Cannot use %r as a byte chunk" % (data,))
