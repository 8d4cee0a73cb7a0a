from .Exceptions import *
from .Stage import *

class SinkAdapter:
    """Stage that injects items into an already running sink.

    The wrapped sink is usually a Pipeline that is fed from somewhere else
    (e.g. a serial port). Items given to `inject()`, or arriving through
    `process()` when the adapter sits at the end of another pipeline, are
    pushed straight into the sink. Flushing the adapter does not flush, close,
    or otherwise signal the end of data to the wrapped sink, so the sink keeps
    running after whatever fed the adapter has finished."""

    def __init__(self, sink):
        if not isinstance(sink, Sink) or not callable(sink.push):
            raise InvalidInput("Given object must be a sink with a push() method, got %r" % (sink,))
        self.sink = sink

    def __str__(self):
        return "adapter into %s" % self.sink

    def inject(self, item):
        return self.sink.push(item)

    def process(self, item, emit) -> None:
        self.sink.push(item)

    def flush(self, emit) -> None:
        # the wrapped sink must never see the end of this adapter's input
        pass
