from dataclasses import dataclass


class LObject:
    """A constant as decoded from the bytecode stream."""


@dataclass(frozen=True)
class LNil(LObject):
    pass


@dataclass(frozen=True)
class LBoolean(LObject):
    value: bool


@dataclass(frozen=True)
class LString(LObject):
    value: bytes

    def deref(self) -> bytes:
        return self.value


LNIL = LNil()
LTRUE = LBoolean(True)
LFALSE = LBoolean(False)
