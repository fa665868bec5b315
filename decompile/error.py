from dataclasses import dataclass
from typing import Optional

from colorama import Fore, Style


@dataclass
class DecompileError(Exception):
    message: str
    offset: Optional[int] = None
    filename: Optional[str] = None

    def __str__(self):
        loc = ""
        if self.offset is not None:
            loc = f"[offset 0x{self.offset:X}] "
        return f"{loc}{self.message}"


class InvalidConstantKind(DecompileError):
    pass


class NotIntegral(DecompileError):
    pass


class NotString(DecompileError):
    pass


class BytecodeError(DecompileError):
    pass


def format_error(err: DecompileError) -> str:
    red = Fore.RED + Style.BRIGHT
    reset = Style.RESET_ALL
    parts = []
    if err.filename:
        parts.append(f"{Fore.CYAN}In {err.filename}:{reset}")

    parts.append(f"{red}{type(err).__name__}: {str(err)}{reset}")
    return "\n".join(parts)
