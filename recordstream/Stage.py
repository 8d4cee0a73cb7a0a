from typing import Any, Callable, Protocol, runtime_checkable

Emit = Callable[[Any], None]

@runtime_checkable
class Stage(Protocol):
    """Calling convention shared by every transform stage.

    Stages do not share a base class, only this shape. Both methods hand their
    results to the `emit` callable supplied by the driver, zero or more times
    per call. A failure is signalled by raising (normally an `ItemError`
    subclass), and returning is the acknowledgement that the item is done and
    the stage can take the next one. Anything already passed to `emit` before
    a failure stays valid.

    `flush()` is called exactly once, after the last `process()` call."""

    def process(self, item: Any, emit: Emit) -> None:
        ...

    def flush(self, emit: Emit) -> None:
        ...

@runtime_checkable
class Sink(Protocol):
    """Anything that accepts items pushed into it from outside its own input."""

    def push(self, item: Any) -> Any:
        ...
