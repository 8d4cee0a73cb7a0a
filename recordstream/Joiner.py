from .common import *
from .Exceptions import *

class Joiner:
    """Stage that terminates every record with a separator.

    This is the outgoing counterpart of SeparatorScanner: records go in as text
    (or raw bytes) and come out as `bytes()` buffers with the separator
    appended, ready to be written to a byte stream. Scanning the joined output
    with the same separator gives back the original records, as long as none
    of them contains the separator."""

    default_separator = LINE_FEED

    def __init__(self, separator=None):
        self.separator, self.separator_bytes = resolve_separator(separator, self.default_separator)

    def __str__(self):
        return "joiner on %r" % self.separator_bytes

    def process(self, record, emit) -> None:
        if isinstance(record, str):
            try:
                record = record.encode("utf-8")
            except UnicodeEncodeError as e:
                raise EncodeError("Record cannot be encoded as UTF-8: %r" % record) from e
        elif isinstance(record, (bytes, bytearray, memoryview)):
            record = bytes(record)
        else:
            raise EncodeError("Cannot join %s item, expected text or bytes" % type(record).__name__)

        emit(record + self.separator_bytes)

    def flush(self, emit) -> None:
        # nothing is ever held back
        pass
