import collections
import functools
import logging

from .common import *
from .Exceptions import *
from .Stage import *

logger = logging.getLogger(__name__)

class Pipeline:
    """Driver that chains transform stages together.

    This class feeds incoming data through an ordered list of stages. Every
    item a stage emits becomes the input of the next stage, and whatever the
    last stage emits is handed to the application through the `on_output`
    callback. This allows the application to remain separated from chunking,
    buffering, and encoding details, and instead react only to complete items
    as they come out the other end.

    A pipeline is itself a sink (it has a `push()` method), so a SinkAdapter
    can inject items into it while it is being fed from elsewhere."""

    def __init__(self, *stages):
        """Creates a new pipeline instance.

        :param stages: Stages to chain, in data flow order
        :type stages: Stage

        Every stage must provide the `process(item, emit)` and `flush(emit)`
        methods; anything else raises InvalidInput. A pipeline with no stages
        simply passes items through to the output callback.

        Feed raw data into the `feed()` method (or arbitrary items into
        `push()`), and call `close()` once all input has been supplied so that
        every stage gets the chance to emit whatever it is still holding."""

        for stage in stages:
            if not isinstance(stage, Stage):
                raise InvalidInput("%r does not implement process() and flush()" % (stage,))

        # these attributes may be updated by the application
        self.stages = list(stages)
        self.on_output = None
        self.on_error = None

        # these attributes should only be read externally, not written
        self.last_output = None
        self.is_closed = False
        self.rx_deque = collections.deque()

        # these attributes are intended to be private
        self._busy = False
        self._close_requested = False
        self._call_output = None

    def __str__(self):
        if len(self.stages) == 0:
            return "empty pipeline"
        return "pipeline of [%s]" % ", ".join(str(stage) for stage in self.stages)

    def feed(self, data):
        """Process one chunk of raw incoming data.

        :param data: Byte buffer, list of byte values, or a single byte value
        :type data: bytes

        :returns: The last output item produced while processing this data,
                or None if nothing came out
        """

        return self.push(to_bytes(data))

    def push(self, item):
        """Process an arbitrary item through all stages immediately.

        :param item: Item to hand to the first stage
        :type item: object

        :returns: The last output item produced while processing this item,
                or None if nothing came out

        Only one item is ever in flight. If this is called again while an item
        is still being processed (for example from inside the `on_output`
        callback), the new item is queued and processed, in order, as soon as
        the current one has been fully handled."""

        if self.is_closed or self._close_requested:
            raise StageClosedError("Cannot push data into closed %s" % self)

        if self._busy:
            self.rx_deque.append(item)
            return None

        self.rx_deque.append(item)
        return self._drain()

    def queue(self, data) -> int:
        """Add raw data to the RX queue for later processing.

        :param data: Byte buffer to append to the queue
        :type data: bytes

        :returns: New size of queue
        :rtype: int

        Any data queued with this method will not be processed until the
        `process()` method is called, either manually from the app or by a
        stream object."""

        if self.is_closed or self._close_requested:
            raise StageClosedError("Cannot queue data into closed %s" % self)

        self.rx_deque.append(to_bytes(data))
        return len(self.rx_deque)

    def process(self):
        """Handle any queued data waiting to be processed.

        :returns: The last output item produced, or None if nothing came out
        """

        if self._busy or len(self.rx_deque) == 0:
            return None
        return self._drain()

    def close(self) -> None:
        """Flush every stage, in order, and mark the pipeline closed.

        The first stage is flushed and anything it emits runs through the rest
        of the pipeline, then the second stage is flushed, and so on. Every
        stage is flushed exactly once: if a flush fails and there is no
        `on_error` callback, the remaining stages are still flushed and the
        first failure is raised afterwards. Closing from inside a callback is
        deferred until the item currently in flight has been handled. Closing
        an already closed pipeline does nothing."""

        if self.is_closed:
            return
        if self._busy:
            self._close_requested = True
            return

        error = None
        self._busy = True
        try:
            # anything queued still counts as input
            while len(self.rx_deque) > 0:
                self._run(0, self.rx_deque.popleft())

            self.is_closed = True
            for index in range(len(self.stages)):
                try:
                    self._invoke(index, None, flushing=True)
                except ItemError as e:
                    if error is None:
                        error = e
        finally:
            self._busy = False
            self._close_requested = False

        logger.debug("Closed %s", self)

        if error is not None:
            raise error

    def _drain(self):
        self._call_output = None
        self._busy = True
        try:
            while len(self.rx_deque) > 0:
                self._run(0, self.rx_deque.popleft())
        finally:
            self._busy = False

        if self._close_requested:
            self.close()

        return self._call_output

    def _run(self, index, item) -> None:
        if index == len(self.stages):
            self._on_output(item)
        else:
            self._invoke(index, item)

    def _invoke(self, index, item, flushing=False) -> None:
        stage = self.stages[index]
        emit = functools.partial(self._run, index + 1)
        try:
            if flushing:
                stage.flush(emit)
            else:
                stage.process(item, emit)
        except ItemError as e:
            self._on_item_error(e, item, stage)

    def _on_item_error(self, e, item, stage) -> None:
        if e.stage is not None:
            # raised further down the pipeline and not handled there
            raise e

        e.item = item
        e.stage = stage
        if self.on_error is None:
            raise e

        logger.warning("%s rejected item in %s: %s", stage, self, e)
        self.on_error(e, item, stage)

    def _on_output(self, item) -> None:
        self.last_output = item
        self._call_output = item

        if self.on_output is not None:
            # pass item to application callback
            self.on_output(item)
