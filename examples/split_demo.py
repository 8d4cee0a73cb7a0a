# check for local development repo in script path and use it for imports
import os, sys
path_parts = os.path.dirname(os.path.realpath(__file__)).split(os.sep)
if "examples" in path_parts:
    sys.path.insert(0, os.sep.join(path_parts[:-path_parts[::-1].index("examples") - 1]))

import logging
import time
import recordstream

class App():

    def __init__(self):
        # incoming side: bytes -> records -> JSON values -> application
        self.rx = recordstream.Pipeline(
            recordstream.SeparatorScanner("\r\n"),
            recordstream.JsonDecoder(),
            recordstream.Mapper(self.on_value),
        )
        self.rx.on_error = self.on_rx_error

        # outgoing side: values -> JSON text -> terminated records -> bytes
        self.tx = recordstream.Pipeline(
            recordstream.JsonEncoder(),
            recordstream.Joiner("\r\n"),
        )
        self.tx.on_output = self.on_tx_data

    def on_value(self, value):
        print("[%.03f] RXV: %s" % (time.time(), value))
        if isinstance(value, dict) and "ping" in value:
            return { "pong": value["ping"] }

    def on_rx_error(self, e, item, stage):
        print("[%.03f] ERROR: %s (item: %r via %s)" % (time.time(), e, item, stage))

    def on_tx_data(self, data):
        print("[%.03f] TXD: %s" % (time.time(), ' '.join(["%02X" % b for b in data])))

def main():
    logging.basicConfig(level=logging.DEBUG)
    app = App()

    # feed() call technique 1: actual bytes() object, record split mid-separator
    app.rx.feed(b'{"ping": 1}\r')
    app.rx.feed(b'\n{"ping": 2}\r\n{"temp"')

    # feed() call technique 2: list of integers
    app.rx.feed([0x3a, 0x20, 0x32, 0x31, 0x7d, 0x0d, 0x0a])

    # feed() call technique 3: single integers, including a malformed record
    [app.rx.feed(x) for x in b'{oops}\r\n[1, 2, 3]']

    # the last record has no separator, so it only comes out on close
    app.rx.close()

    # outgoing data
    app.tx.push({ "ping": 3 })
    app.tx.push([1, 2, 3])
    app.tx.close()

if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("Ctrl+C detected, terminating script")
        sys.exit(0)
