from .common import *
from .Exceptions import *

class Stream:
    """Base stream class to manage bidirectional byte streams.

    This class represents a source (and optionally a destination) of raw bytes
    and is optionally associated with a pipeline that turns incoming chunks
    into records. It is fundamentally separate from the pipeline, and
    internally manages only reception and transmission of data.

    This class should not be used directly, but rather used as a base for child
    classes that use specific low-level drivers. As a minimum, a child class
    must implement the `open()`, `close()`, `write()`, and `process()`
    methods."""

    def __init__(self, pipeline=None):
        """Initializes a stream instance.

        :param pipeline: Pipeline which incoming data is fed into, if one exists
        :type pipeline: Pipeline

        A stream does not strictly need a pipeline (the `on_rx_data` callback
        sees every chunk either way), but in most cases you will be using one,
        so it makes sense to provide it for reference later."""

        # these attributes may be updated by the application
        self.pipeline = pipeline
        self.on_open_stream = None
        self.on_close_stream = None
        self.on_open_error = None
        self.on_rx_data = None
        self.on_tx_data = None

        # these attributes should only be read externally, not written
        self.is_open = False

    def __str__(self):
        return "unidentified stream"

    def open(self):
        """Opens the stream.

        Since no driver is inherent in the base class, you *must* override this
        method in child classes so that a suitable action occurs."""

        # child class must implement
        raise RecordStreamHalException("Child class has not implemented open() method, cannot use base class stub")

    def close(self):
        """Closes the stream.

        Since no driver is inherent in the base class, you *must* override this
        method in child classes so that a suitable action occurs."""

        # child class must implement
        raise RecordStreamHalException("Child class has not implemented close() method, cannot use base class stub")

    def write(self, data):
        """Sends outgoing data to the stream.

        :param data: Data buffer to be sent out to the stream
        :type data: bytes

        Since no driver is inherent in the base class, you *must* override this
        method in child classes so that a suitable action occurs."""

        # child class must implement
        raise RecordStreamHalException("Child class has not implemented write() method, cannot use base class stub")

    def process(self, mode=ProcessMode.BOTH):
        """Handle any pending data waiting to be processed.

        :param mode: Processing mode defining whether to run for this object,
            the attached pipeline, or both
        :type mode: int

        This method must be executed inside of an event loop to move data from
        the underlying driver into the pipeline.

        Since no driver is inherent in the base class, you *must* override this
        method in child classes so that a suitable action occurs."""

        # child class must implement
        raise RecordStreamHalException("Child class has not implemented process() method, cannot use base class stub")

    def _on_rx_data(self, data):
        """Handles incoming data.

        :param data: Data buffer that has just been received
        :type data: bytes

        The chunk is passed to the application-level data RX callback first,
        if one is defined. Unless that callback returns False, the chunk is
        then fed into the attached pipeline."""

        run_builtin = True
        if self.on_rx_data:
            run_builtin = self.on_rx_data(data, self)

        if run_builtin != False:
            # feed automatically if we have a pipeline attached
            if self.pipeline is not None:
                self.pipeline.feed(data)
