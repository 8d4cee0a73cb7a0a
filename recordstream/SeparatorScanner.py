import logging

from .common import *
from .Exceptions import *

logger = logging.getLogger(__name__)

class SeparatorScanner:
    """Stage that splits a byte stream into separator-delimited text records.

    Incoming data may arrive in chunks of any size, with no relationship
    between chunk boundaries and record boundaries. A single separator may be
    spread across several chunks, and one chunk may hold many separators.
    Bytes that have not yet been confirmed as part of a complete record are
    kept in a carry buffer until the next chunk (or the final flush) arrives.

    Each record is the UTF-8 decoded text between two separators, so a
    separator at the very start of the stream produces an empty first record.
    The separator itself is never part of an emitted record."""

    default_separator = LINE_FEED

    def __init__(self, separator=None):
        """Creates a new scanner instance.

        :param separator: A string, a single code point, a list of code points,
                or a byte string; defaults to a line feed
        :type separator: str, int, list, bytes

        An unusable separator raises InvalidSeparator and no scanner is
        created."""

        self.separator, self.separator_bytes = resolve_separator(separator, self.default_separator)

        # these attributes should only be read externally, not written
        self.is_closed = False
        self.records_emitted = 0

        # these attributes are intended to be private
        self._buffer = bytearray()
        self._scan_start = 0

    def __str__(self):
        return "scanner on %r" % self.separator_bytes

    @property
    def pending(self) -> bytes:
        """Bytes currently held in the carry buffer."""

        return bytes(self._buffer)

    def process(self, chunk, emit) -> None:
        """Scan one chunk of incoming data for complete records.

        :param chunk: New data, as bytes, a list of byte values, or a single
                byte value
        :type chunk: bytes

        :param emit: Callable receiving each completed record
        :type emit: callable

        The chunk is appended to the carry buffer and the combined buffer is
        scanned as one continuous byte sequence, so a separator split across
        any number of chunks is found as soon as its final byte arrives. Every
        complete record is passed to `emit` in stream order; whatever follows
        the last separator stays in the carry buffer.

        If a record is not valid UTF-8, DecodeError is raised after any
        earlier records in the chunk have been emitted. The bad record is
        dropped and the bytes after it stay buffered for the next call."""

        if self.is_closed:
            raise StageClosedError("Cannot process data after %s has been flushed" % self)

        self._buffer += to_bytes(chunk)
        self._scan(emit)

    def flush(self, emit) -> None:
        """Emit the final unterminated record, if there is one.

        :param emit: Callable receiving the final record
        :type emit: callable

        This is the only way a record without a trailing separator is ever
        produced. An empty carry buffer produces nothing. The scanner cannot be
        used again afterwards, so a record that fails here (or further down a
        pipeline) does not stop the rest of the carry buffer from being
        emitted; the first such failure is raised once everything else is out."""

        if self.is_closed:
            raise StageClosedError("%s has already been flushed" % self)
        self.is_closed = True

        error = None
        while True:
            try:
                # only finds anything after a decode failure cut a scan short
                self._scan(emit)
                break
            except ItemError as e:
                # each failure consumed one record, so this terminates
                if error is None:
                    error = e

        if len(self._buffer) > 0:
            record = bytes(self._buffer)
            self._buffer = bytearray()
            self._scan_start = 0
            try:
                self._emit_record(record, emit)
            except ItemError as e:
                if error is None:
                    error = e

        logger.debug("%s flushed after %d records", self, self.records_emitted)

        if error is not None:
            raise error

    def _scan(self, emit) -> None:
        sep = self.separator_bytes
        start = 0
        completed = False
        try:
            while True:
                index = self._buffer.find(sep, max(start, self._scan_start))
                if index == -1:
                    break

                record = bytes(self._buffer[start:index])
                start = index + len(sep)
                self._emit_record(record, emit)
            completed = True
        finally:
            # consumed records are dropped even if emitting one of them failed
            del self._buffer[:start]
            if completed:
                # a separator can only begin in the last len(sep) - 1 bytes
                self._scan_start = max(0, len(self._buffer) - len(sep) + 1)
            else:
                self._scan_start = 0

    def _emit_record(self, record, emit) -> None:
        try:
            text = record.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("Record is not valid UTF-8: %r" % record) from e

        self.records_emitted += 1
        emit(text)
