import logging

from .Stream import *

logger = logging.getLogger(__name__)

class FileStream(Stream):
    """Stream reading fixed-size chunks from a binary file object.

    Any object with a `read(size)` method returning bytes will do, e.g. an open
    file, `io.BytesIO`, or `sys.stdin.buffer`. When the end of the file is
    reached, the attached pipeline is closed so that a final unterminated
    record is still delivered. Writes go to the same file object."""

    chunk_size = 4096

    def __init__(self, fileobj, pipeline=None, chunk_size=None):
        super().__init__(pipeline)
        self.fileobj = fileobj
        if chunk_size is not None:
            self.chunk_size = chunk_size
        if self.chunk_size < 1:
            raise InvalidInput("Chunk size must be at least 1, got %r" % self.chunk_size)

        # these attributes should only be read externally, not written
        self.is_eof = False
        self.bytes_read = 0

    def __str__(self):
        return getattr(self.fileobj, "name", None) or "file stream"

    def open(self) -> bool:
        if not self.is_open and not self.is_eof:
            self.is_open = True
            if self.on_open_stream is not None:
                # trigger application callback
                self.on_open_stream(self)
        return self.is_open

    def close(self) -> bool:
        if not self.is_open:
            return False

        self.is_open = False
        if self.on_close_stream is not None:
            # trigger application callback
            self.on_close_stream(self)
        return True

    def write(self, data) -> int:
        if self.on_tx_data is not None:
            # trigger application callback
            self.on_tx_data(data, self)
        return self.fileobj.write(data)

    def process(self, mode=ProcessMode.BOTH) -> bool:
        """Read and handle one chunk.

        :returns: True while more data may follow, False once the end of the
                file has been reached
        :rtype: bool
        """

        if mode in [ProcessMode.SELF, ProcessMode.BOTH] and self.is_open:
            data = self.fileobj.read(self.chunk_size)
            if data:
                self.bytes_read += len(data)
                self._on_rx_data(data)
            else:
                logger.debug("End of %s after %d bytes", self, self.bytes_read)
                self.is_eof = True
                self.close()
                if self.pipeline is not None:
                    self.pipeline.close()

        if mode in [ProcessMode.BOTH, ProcessMode.SUBS]:
            if self.pipeline is not None and not self.pipeline.is_closed:
                self.pipeline.process()

        return not self.is_eof

    def run(self) -> int:
        """Open the stream and process it until the end of the file.

        :returns: Number of bytes read
        :rtype: int
        """

        self.open()
        while self.process():
            pass
        return self.bytes_read
