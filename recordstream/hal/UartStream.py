import logging

import serial

from ..Stream import *

logger = logging.getLogger(__name__)

class UartStream(Stream):
    """Serial stream class providing a bidirectional byte stream to a serial device.

    This class allows reading from and writing to a serial port, using PySerial
    as the low-level driver. Whatever data is waiting on the port is read on
    each `process()` call and fed into the attached pipeline in one chunk, so
    chunk boundaries depend entirely on timing; the separator scanner makes
    that irrelevant to the records that come out."""

    baudrate = 115200
    timeout = 0

    def __init__(self, port, pipeline=None, baudrate=None):
        """Initializes a serial stream instance.

        :param port: PySerial port object, or a port name or URL (anything
            `serial.serial_for_url` accepts, e.g. "/dev/ttyUSB0" or "loop://")
        :type port: serial.Serial, str

        :param pipeline: Pipeline which incoming data is fed into, if one exists
        :type pipeline: Pipeline

        :param baudrate: Baud rate used when opening a port by name
        :type baudrate: int

        Ports given by name are created closed and opened by `open()`."""

        super().__init__(pipeline)
        if baudrate is not None:
            self.baudrate = baudrate

        if isinstance(port, str):
            self.port = serial.serial_for_url(port, baudrate=self.baudrate, timeout=self.timeout, do_not_open=True)
        else:
            self.port = port

        # these attributes are intended to be private
        self._port_open = False

    def __str__(self):
        return self.port.port if self.port.port is not None else "unidentified stream"

    def open(self) -> bool:
        """Opens the serial stream.

        :returns: Status of open attempt
        :rtype: bool

        This opens the serial port if it is not already open. A failure to
        open is passed to the `on_open_error` callback instead of raising."""

        # don't start if we're already running
        if not self.is_open:
            try:
                if not self.port.is_open:
                    self.port.open()
                    self._port_open = True
                if self.on_open_stream is not None:
                    # trigger application callback
                    self.on_open_stream(self)

                self.is_open = True
                logger.debug("Opened %s", self)
            except serial.SerialException as e:
                logger.warning("Could not open %s: %s", self, e)
                if self.on_open_error is not None:
                    # trigger application callback
                    self.on_open_error(self, e)

        return self.is_open

    def close(self) -> bool:
        """Closes the serial stream.

        :returns: Status of close attempt
        :rtype: bool

        The attached pipeline is not closed here, because the same pipeline may
        outlive the port (e.g. when a device is reconnected). Close it
        explicitly once no more data will arrive."""

        # don't close if we're not open
        if self.is_open:
            self._cleanup_port_closure()
            return True

        # already closed if we got here
        return False

    def write(self, data):
        """Writes data to the serial stream.

        :param data: Data buffer to be sent out to the stream
        :type data: bytes

        :returns: Number of bytes written to the stream, or False on failure
        :rtype: int
        """

        if self.on_tx_data is not None:
            # trigger application callback
            self.on_tx_data(data, self)

        try:
            result = self.port.write(data)
        except serial.SerialException as e:
            logger.warning("Write to %s failed: %s", self, e)
            result = False

        return result

    def process(self, mode=ProcessMode.BOTH) -> None:
        """Handle any pending data waiting to be processed.

        :param mode: Processing mode defining whether to run for this object,
            the attached pipeline, or both
        :type mode: int

        This method must be executed inside of an event loop. Calling it also
        lets the attached pipeline work through its queue."""

        try:
            # check for available data
            if mode in [ProcessMode.SELF, ProcessMode.BOTH] \
                    and self.is_open \
                    and self.port.is_open \
                    and self.port.in_waiting != 0:
                # read all available data
                data = self.port.read(self.port.in_waiting)

                # pass data to internal receive callback
                self._on_rx_data(data)

        except (OSError, serial.SerialException) as e:
            # read failed, probably port closed or device removed
            logger.warning("Read from %s failed: %s", self, e)
            self._cleanup_port_closure()

        if mode in [ProcessMode.BOTH, ProcessMode.SUBS]:
            if self.pipeline is not None and not self.pipeline.is_closed:
                self.pipeline.process()

    def _cleanup_port_closure(self) -> None:
        """Handle a closed port cleanly.

        A serial port may close due to device removal (unexpected) or due to
        stream closure (expected). In either case, the public open status is
        updated and the closure callback is triggered."""

        # mark data stream publicly closed
        self.is_open = False

        if self.on_close_stream is not None:
            # trigger port closure callback
            self.on_close_stream(self)

        # close the port now if we opened it
        if self._port_open:
            try:
                # might fail if the underlying port is already gone
                self.port.close()
            except (OSError, serial.SerialException) as e:
                logger.warning("Closing %s failed, device is probably gone: %s", self, e)
            finally:
                # mark port privately closed
                self._port_open = False
