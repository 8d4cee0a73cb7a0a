import json

from .Exceptions import *

class JsonDecoder:
    """Stage that parses each incoming record into a structured value.

    The default decoder is `json.loads`. Any failure raised by the decoder is
    reported as a DecodeError for that record; nothing is skipped silently."""

    def __init__(self, decoder=None):
        if decoder is None:
            decoder = json.loads
        elif not callable(decoder):
            raise InvalidInput("JSON decoder must be callable, got %r" % (decoder,))
        self.decoder = decoder

    def process(self, record, emit) -> None:
        try:
            value = self.decoder(record)
        except Exception as e:
            raise DecodeError("Cannot decode record %r: %s" % (record, e)) from e
        emit(value)

    def flush(self, emit) -> None:
        pass

class JsonEncoder:
    """Stage that serializes each incoming value to its JSON text form.

    The default encoder is `json.dumps`, which fails on cyclic structures and
    on values it has no representation for; those failures are reported as an
    EncodeError for that value."""

    def __init__(self, encoder=None):
        if encoder is None:
            encoder = json.dumps
        elif not callable(encoder):
            raise InvalidInput("JSON encoder must be callable, got %r" % (encoder,))
        self.encoder = encoder

    def process(self, value, emit) -> None:
        try:
            text = self.encoder(value)
        except Exception as e:
            raise EncodeError("Cannot encode %s value: %s" % (type(value).__name__, e)) from e
        emit(text)

    def flush(self, emit) -> None:
        pass
