from .Exceptions import *

class Mapper:
    """Stage that applies an application function to every item.

    If the function returns something other than None, that value is
    forwarded in place of the item; otherwise the item itself is forwarded
    (which allows functions that modify the item in place, or that only
    observe it). An exception raised by the function becomes a MappingError
    for that item."""

    def __init__(self, function):
        if not callable(function):
            raise InvalidInput("Mapping function must be callable, got %r" % (function,))
        self.function = function

    def __str__(self):
        return "mapper on %s" % getattr(self.function, "__name__", repr(self.function))

    def process(self, item, emit) -> None:
        try:
            result = self.function(item)
        except Exception as e:
            raise MappingError("%s failed on %r: %s" % (self, item, e)) from e

        emit(item if result is None else result)

    def flush(self, emit) -> None:
        pass
