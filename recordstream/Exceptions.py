"""RecordStream Exception Definitions

These derived exception classes provide a way for RecordStream code to raise
unique exceptions to be caught (optionally) by application code.
"""

class RecordStreamException(Exception):
    """Base exception class for any RecordStream-related exception

    This type may be used to catch RecordStream exceptions generally within an
    application, but should not be raised directly. Rather, extend the class
    into something more specific (as in the DecodeError) and then raise that
    instead.
    """

    pass

class InvalidSeparator(RecordStreamException):
    """Construction exception for unusable separator specifications

    Raised when a scanner or joiner is given something other than a non-empty
    string, a valid code point, a non-empty sequence of valid code points, or a
    non-empty byte string. No stage is created in this case.
    """

    pass

class InvalidInput(RecordStreamException):
    """Exception for arguments a stage or pipeline cannot work with

    Raised at construction time for things like a non-callable mapping
    function or a sink adapter wrapped around something that is not a sink,
    and at processing time for chunks that cannot be treated as bytes.
    """

    pass

class ItemError(RecordStreamException):
    """Base exception class for failures scoped to a single item

    Per-item failures never corrupt the state carried by a stage, so the
    driver is free to keep feeding it after catching one of these. When the
    failure passes through a Pipeline, `item` and `stage` are filled in with
    the input and the stage that rejected it (`item` is None for failures
    raised while flushing).
    """

    item = None
    stage = None

class DecodeError(ItemError):
    """Item exception for malformed UTF-8 or unparseable structured data"""

    pass

class EncodeError(ItemError):
    """Item exception for values that cannot be serialized"""

    pass

class MappingError(ItemError):
    """Item exception wrapping a failure raised by a mapping function"""

    pass

class StageClosedError(RecordStreamException):
    """Raised when a stage or pipeline is used after it has been flushed"""

    pass

class RecordStreamHalException(RecordStreamException):
    """Exception class for byte stream access functions

    RecordStream code raises this type of exception if a base class method is
    not correctly re-implemented in a child class (e.g. `Stream.open` vs.
    `UartStream.open`).
    """

    pass
