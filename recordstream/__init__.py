"""
RecordStream is a small collection of streaming transform stages that turn a
raw byte stream into discrete text records and back, and carry structured
values between stages.

The core piece is the SeparatorScanner, which splits an unbounded byte stream
into records delimited by an arbitrary (possibly multi-byte) separator, no
matter how the stream is chunked. The Joiner, JSON, Mapper, and SinkAdapter
stages share its `process(item, emit)` / `flush(emit)` calling convention, and
a Pipeline chains any of them together. Stream classes feed a pipeline from a
file object or, in the `hal` submodule, from a serial port.
"""

# .py files
from .common import *
from .Exceptions import *

from .Stage import *
from .SeparatorScanner import *
from .Joiner import *
from .JsonStages import *
from .Mapper import *
from .SinkAdapter import *
from .Pipeline import *

from .Stream import *
from .FileStream import *

# submodule folders
from . import hal
