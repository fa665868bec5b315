import sys
from typing import BinaryIO, Optional


class Output:
    """Byte-oriented sink for decompiled text.

    String literals may carry raw bytes that are not valid in any one text
    encoding, so everything is written to a binary stream. Text passed to
    `print` is encoded one character per byte.
    """

    def __init__(self, stream: Optional[BinaryIO] = None, indent_width: int = 2):
        self.stream = stream if stream is not None else sys.stdout.buffer
        self.indent_width = indent_width
        self.indentation_level = 0
        self.start_of_line = True

    def indent(self):
        self.indentation_level += self.indent_width

    def dedent(self):
        self.indentation_level -= self.indent_width

    def _start(self):
        if self.start_of_line:
            self.start_of_line = False
            self.stream.write(b" " * self.indentation_level)

    def print(self, s: str):
        self._start()
        self.stream.write(s.encode("latin-1"))

    def print_byte(self, b: int):
        self._start()
        self.stream.write(bytes((b & 0xFF,)))

    def println(self, s: str = ""):
        if s:
            self.print(s)
        self.stream.write(b"\n")
        self.start_of_line = True
