import pytest

from recordstream import (
    DecodeError,
    InvalidInput,
    JsonDecoder,
    JsonEncoder,
    Joiner,
    Mapper,
    MappingError,
    Pipeline,
    SeparatorScanner,
    Sink,
    StageClosedError,
)


def collecting(*stages):
    pipeline = Pipeline(*stages)
    out = []
    pipeline.on_output = out.append
    return pipeline, out


def test_pipeline_is_a_sink():
    assert isinstance(Pipeline(), Sink)


def test_rejects_objects_that_are_not_stages():
    with pytest.raises(InvalidInput):
        Pipeline(SeparatorScanner(), lambda item: item)


def test_records_flow_through_every_stage_in_order():
    pipeline, out = collecting(SeparatorScanner(), JsonDecoder(), Mapper(lambda value: value["n"] * 10))
    pipeline.feed(b'{"n": 1}\n{"n"')
    pipeline.feed(b': 2}\n{"n": 3}')
    assert out == [10, 20]

    pipeline.close()
    assert out == [10, 20, 30]


def test_full_round_trip_through_both_directions():
    values = [{"id": 1, "tags": ["a", "b"]}, [1, 2, 3], "text with :: inside", None]

    tx, wire = collecting(JsonEncoder(), Joiner("\r\n"))
    for value in values:
        tx.push(value)
    tx.close()

    rx, out = collecting(SeparatorScanner("\r\n"), JsonDecoder())
    data = b"".join(wire)
    for i in range(len(data)):
        rx.feed(data[i:i + 1])
    rx.close()

    assert out == values


def test_feed_returns_last_output_of_the_call():
    pipeline = Pipeline(SeparatorScanner())
    assert pipeline.feed(b"partial") is None
    assert pipeline.feed(b" line\nnext\n") == "next"
    assert pipeline.last_output == "next"
    assert pipeline.feed(b"more") is None
    assert pipeline.last_output == "next"


def test_feed_normalizes_ints_and_lists():
    pipeline, out = collecting(SeparatorScanner(";"))
    pipeline.feed(0x61)
    pipeline.feed([0x3B, 0x62, 0x3B])
    assert out == ["a", "b"]


def test_empty_pipeline_passes_items_through():
    pipeline, out = collecting()
    pipeline.push({"x": 1})
    pipeline.close()
    assert out == [{"x": 1}]


def test_unhandled_item_error_is_raised_with_context():
    decoder = JsonDecoder()
    pipeline, out = collecting(SeparatorScanner(), decoder)

    with pytest.raises(DecodeError) as excinfo:
        pipeline.feed(b"1\nbad\n2\n")
    assert excinfo.value.item == "bad"
    assert excinfo.value.stage is decoder
    assert out == [1]

    # the scanner already moved past the bad record
    pipeline.feed(b"3\n")
    assert out == [1, 2, 3]


def test_on_error_reports_and_continues():
    mapper = Mapper(lambda value: 10 // value)
    pipeline, out = collecting(SeparatorScanner(), JsonDecoder(), mapper)
    errors = []
    pipeline.on_error = lambda e, item, stage: errors.append((type(e), item, stage))

    pipeline.feed(b"5\n0\n{\n2\n")
    pipeline.close()

    assert out == [2, 5]
    assert errors == [
        (MappingError, 0, mapper),
        (DecodeError, "{", pipeline.stages[1]),
    ]


def test_scanner_decode_error_is_scoped_to_one_record():
    pipeline, out = collecting(SeparatorScanner())
    errors = []
    pipeline.on_error = lambda e, item, stage: errors.append(e)

    pipeline.feed(b"ok\n\xff\nstill ok\n")
    pipeline.close()

    assert out == ["ok", "still ok"]
    assert len(errors) == 1
    assert isinstance(errors[0], DecodeError)
    assert errors[0].item == b"ok\n\xff\nstill ok\n"


def test_error_from_record_emitted_at_close_is_reported():
    pipeline, out = collecting(SeparatorScanner(), JsonDecoder())
    errors = []
    pipeline.on_error = lambda e, item, stage: errors.append((item, stage))

    pipeline.feed(b"1\n{")
    pipeline.close()

    assert out == [1]
    assert errors == [("{", pipeline.stages[1])]


def test_close_flushes_stages_in_order():
    calls = []

    class Recorder:
        def __init__(self, name):
            self.name = name

        def process(self, item, emit):
            emit(item)

        def flush(self, emit):
            calls.append(self.name)
            emit("%s-flushed" % self.name)

    pipeline, out = collecting(Recorder("first"), Recorder("second"))
    pipeline.close()

    assert calls == ["first", "second"]
    assert out == ["first-flushed", "second-flushed"]


def test_close_is_idempotent_and_blocks_further_input():
    pipeline, out = collecting(SeparatorScanner())
    pipeline.feed(b"tail")
    pipeline.close()
    pipeline.close()
    assert out == ["tail"]

    with pytest.raises(StageClosedError):
        pipeline.feed(b"more")
    with pytest.raises(StageClosedError):
        pipeline.push("more")
    with pytest.raises(StageClosedError):
        pipeline.queue(b"more")


def test_input_from_callback_waits_for_current_item():
    pipeline = Pipeline(SeparatorScanner())
    out = []

    def on_output(record):
        out.append(record)
        if record == "a":
            # arrives while "a" is still in flight
            assert pipeline.feed(b"c\n") is None
            out.append("fed")

    pipeline.on_output = on_output
    pipeline.feed(b"a\nb\n")

    assert out == ["a", "fed", "b", "c"]


def test_close_from_callback_is_deferred():
    pipeline = Pipeline(SeparatorScanner())
    out = []

    def on_output(record):
        out.append(record)
        pipeline.close()

    pipeline.on_output = on_output
    pipeline.feed(b"a\nb\ntail")

    assert out == ["a", "b", "tail"]
    assert pipeline.is_closed


def test_queue_and_process():
    pipeline, out = collecting(SeparatorScanner())
    assert pipeline.queue(b"one\ntw") == 1
    assert pipeline.queue([0x6F, 0x0A]) == 2
    assert out == []

    assert pipeline.process() == "two"
    assert out == ["one", "two"]
    assert pipeline.process() is None


def test_close_processes_queued_data_first():
    pipeline, out = collecting(SeparatorScanner())
    pipeline.queue(b"queued")
    pipeline.close()
    assert out == ["queued"]


def test_failed_flush_output_does_not_skip_later_stages():
    flushed = []

    class Counter:
        def __init__(self):
            self.count = 0

        def process(self, item, emit):
            self.count += 1

        def flush(self, emit):
            flushed.append(self.count)
            emit(self.count)

    pipeline, out = collecting(SeparatorScanner(), JsonDecoder(), Counter())
    pipeline.feed(b"1\n{")

    with pytest.raises(DecodeError) as excinfo:
        pipeline.close()
    assert excinfo.value.item == "{"

    assert flushed == [1]
    assert out == [1]
    assert pipeline.is_closed


def test_failed_flush_keeps_emitting_the_rest_of_the_carry():
    pipeline, out = collecting(SeparatorScanner(), JsonDecoder())
    pipeline.on_error = lambda e, item, stage: None

    pipeline.feed(b"\xff\n{\n2\n3")
    pipeline.close()

    assert out == [2, 3]
