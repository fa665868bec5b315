import struct

from undump.number import LNumber
from undump.objects import LBoolean, LNil, LObject, LString
from undump.prototype import Prototype
from undump.reader import LUA51, SIGNATURE, TBOOLEAN, TNIL, TNUMBER, TSTRING


class ChunkWriter:
    """Serializes prototypes into a little-endian Lua 5.1 chunk."""

    def __init__(self):
        self.bytecode = bytearray()

    def write_header(self):
        self.bytecode += SIGNATURE
        self.write_byte(LUA51)  # version
        self.write_byte(0)  # format
        self.write_byte(1)  # endianness
        self.write_byte(4)  # int size
        self.write_byte(8)  # size_t size
        self.write_byte(4)  # instr size
        self.write_byte(8)  # num size
        self.write_byte(0)  # integral flag

    def write_byte(self, val: int):
        self.bytecode.append(val)

    def write_string(self, s: bytes):
        if not s:
            self.write_size_t(0)
            return
        self.write_size_t(len(s) + 1)
        self.bytecode += s
        self.bytecode.append(0)

    def write_size_t(self, val: int):
        self.bytecode += struct.pack("<Q", val)

    def write_int(self, val: int):
        self.bytecode += struct.pack("<I", val)

    def write_number(self, val):
        self.bytecode += struct.pack("<d", val)

    def write_constant(self, const: LObject):
        if isinstance(const, LNil):
            self.write_byte(TNIL)
        elif isinstance(const, LBoolean):
            self.write_byte(TBOOLEAN)
            self.write_byte(int(const.value))
        elif isinstance(const, LNumber):
            self.write_byte(TNUMBER)
            self.write_number(const.value())
        elif isinstance(const, LString):
            self.write_byte(TSTRING)
            # Empty strings still carry their terminator.
            self.write_size_t(len(const.deref()) + 1)
            self.bytecode += const.deref()
            self.bytecode.append(0)
        else:
            raise TypeError(f"cannot dump {const!r}")

    def write_proto(self, proto: Prototype):
        self.write_string(proto.source_name.encode("latin-1"))
        self.write_int(proto.line_defined)
        self.write_int(proto.last_line_defined)
        self.write_byte(proto.num_upvalues)
        self.write_byte(proto.num_parameters)
        self.write_byte(proto.is_vararg)
        self.write_byte(proto.max_stack_size)

        self.write_int(len(proto.instructions))
        for instr in proto.instructions:
            self.write_int(instr)

        self.write_int(len(proto.constants))
        for const in proto.constants:
            self.write_constant(const)

        self.write_int(len(proto.prototypes))
        for p in proto.prototypes:
            self.write_proto(p)

        self.write_int(len(proto.source_line_position_list))
        for line in proto.source_line_position_list:
            self.write_int(line)

        self.write_int(len(proto.locals))
        for local in proto.locals:
            self.write_string(local.name.encode("latin-1"))
            self.write_int(local.start)
            self.write_int(local.end)

        self.write_int(len(proto.upvalues))
        for upval in proto.upvalues:
            self.write_string(upval.encode("latin-1"))


def dump(proto: Prototype) -> bytes:
    writer = ChunkWriter()
    writer.write_header()
    writer.write_proto(proto)
    return bytes(writer.bytecode)
