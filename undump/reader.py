import logging
import struct
from typing import Optional

from decompile.error import BytecodeError, InvalidConstantKind
from undump.number import LNumber
from undump.objects import LFALSE, LNIL, LTRUE, LObject, LString
from undump.prototype import Local, Prototype

SIGNATURE = b"\x1bLua"
LUA51 = 0x51

TNIL = 0
TBOOLEAN = 1
TNUMBER = 3
TSTRING = 4


class ChunkReader:
    def __init__(self, bytecode: bytes, filename: Optional[str] = None):
        self.index = 0

        self.bytecode = bytecode
        self.filename = filename

        if self.read_bytes(4) != SIGNATURE:
            self.error("Not a luac file", 0)

        self.version = self.read_byte()
        self.version_hi = self.version >> 4
        self.version_lo = self.version & 0xF
        if self.version != LUA51:
            self.error(
                f"Unsupported bytecode version {self.version_hi}.{self.version_lo}", 4
            )

        self.format = self.read_byte()
        self.endian = self.read_byte()
        self.int_size = self.read_byte()
        self.size_t_size = self.read_byte()
        self.instr_size = self.read_byte()
        self.num_size = self.read_byte()
        self.integral = self.read_byte()

        if self.num_size not in (4, 8) and not self.integral:
            self.error(f"Unsupported lua_Number size {self.num_size}", 10)

    @property
    def byteorder(self):
        return "little" if self.endian else "big"

    def error(self, message: str, offset: Optional[int] = None):
        raise BytecodeError(
            message,
            offset=self.index if offset is None else offset,
            filename=self.filename,
        )

    def print_header(self):
        logging.info(
            f"lfile: Lua bytecode executable, version {self.version_hi}.{self.version_lo}"
        )
        logging.info(f"   standard             {'yes' if self.format == 0 else 'no'}")
        logging.info(
            f"   endianness           {'little' if self.endian == 1 else 'big' if self.endian == 0 else 'INVALID'}"
        )
        logging.info(f"   sizeof(int)          {self.int_size}")
        logging.info(f"   sizeof(instruction)  {self.instr_size}")
        logging.info(f"   sizeof(size_t)       {self.size_t_size}")
        logging.info(f"   sizeof(lua_Number)   {self.num_size}")
        logging.info(
            f"   typeof(lua_Number)   {'float/double' if self.integral == 0 else 'integral'}"
        )

        def warn(cond, msg):
            if cond:
                logging.warning(msg)

        warn(self.endian not in (0, 1), "Invalid endianness (should be 0 or 1)")
        warn(self.int_size not in (4,), "Unusual int size (Lua expects 4 bytes)")
        warn(
            self.size_t_size not in (4, 8),
            "Unusual size_t size (4 or 8 bytes expected)",
        )
        warn(
            self.instr_size != 4, "Instruction size should be 4 bytes for standard Lua"
        )
        warn(
            self.num_size not in (4, 8),
            "Unusual lua_Number size (4 or 8 bytes expected)",
        )
        warn(self.integral not in (0, 1), "Integral flag must be 0/1")

    def read_bytes(self, size: int) -> bytes:
        if self.index + size > len(self.bytecode):
            raise BytecodeError(
                f"Unexpected end of chunk (wanted {size} bytes)",
                offset=self.index,
                filename=self.filename,
            )
        b = self.bytecode[self.index : self.index + size]
        self.index += size
        return bytes(b)

    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    def read_unsigned(self, size: int) -> int:
        return int.from_bytes(self.read_bytes(size), byteorder=self.byteorder)

    def read_size_t(self) -> int:
        return self.read_unsigned(self.size_t_size)

    def read_int(self) -> int:
        return int.from_bytes(
            self.read_bytes(self.int_size), byteorder=self.byteorder, signed=True
        )

    def read_string(self) -> Optional[bytes]:
        size = self.read_size_t()
        if size == 0:
            return None
        # Stored with its terminating NUL.
        return self.read_bytes(size)[:-1]

    def read_name(self) -> str:
        s = self.read_string()
        return "" if s is None else s.decode("latin-1")

    def read_number(self) -> LNumber:
        raw = self.read_bytes(self.num_size)
        if self.integral:
            return LNumber(int.from_bytes(raw, byteorder=self.byteorder, signed=True))
        fmt = ("<" if self.endian else ">") + ("d" if self.num_size == 8 else "f")
        return LNumber(struct.unpack(fmt, raw)[0])

    def read_constant(self) -> LObject:
        offset = self.index
        kind = self.read_byte()
        if kind == TNIL:
            return LNIL
        elif kind == TBOOLEAN:
            return LTRUE if self.read_byte() != 0 else LFALSE
        elif kind == TNUMBER:
            return self.read_number()
        elif kind == TSTRING:
            s = self.read_string()
            return LString(b"" if s is None else s)
        raise InvalidConstantKind(
            f"Illegal constant type: {kind}", offset=offset, filename=self.filename
        )

    def read_prototype(self, parent_name: str = "") -> Prototype:
        source_name = self.read_name() or parent_name
        proto = Prototype(
            source_name=source_name,
            line_defined=self.read_int(),
            last_line_defined=self.read_int(),
            num_upvalues=self.read_byte(),
            num_parameters=self.read_byte(),
            is_vararg=self.read_byte(),
            max_stack_size=self.read_byte(),
        )

        num_instrs = self.read_int()
        for _ in range(num_instrs):
            proto.instructions.append(self.read_unsigned(self.instr_size))

        num_constants = self.read_int()
        for _ in range(num_constants):
            proto.constants.append(self.read_constant())

        sizep = self.read_int()
        for _ in range(sizep):
            proto.prototypes.append(self.read_prototype(source_name))

        sizelineinfo = self.read_int()
        for _ in range(sizelineinfo):
            proto.source_line_position_list.append(self.read_int())

        sizelocalvars = self.read_int()
        for _ in range(sizelocalvars):
            name = self.read_name()
            start = self.read_int()
            end = self.read_int()
            proto.locals.append(Local(name, start, end))

        for _ in range(self.read_int()):
            proto.upvalues.append(self.read_name())

        logging.debug(f"read {proto!r}")
        return proto

    def read(self) -> Prototype:
        return self.read_prototype()
