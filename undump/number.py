import math
from dataclasses import dataclass
from typing import Union

from undump.objects import LObject

# Integral values beyond this print in exponent form rather than as a long
# run of digits.
_INTEGRAL_PRINT_LIMIT = 2**63


@dataclass(frozen=True)
class LNumber(LObject):
    number: Union[int, float]

    @staticmethod
    def make_integer(n: int) -> "LNumber":
        return LNumber(int(n))

    def value(self) -> Union[int, float]:
        return self.number

    def is_integral(self) -> bool:
        v = self.number
        if isinstance(v, float) and not math.isfinite(v):
            return False
        return v == round(v)

    def __str__(self):
        v = self.number
        if isinstance(v, int):
            return str(v)
        if math.isnan(v):
            return "0/0"
        if math.isinf(v):
            return "1e9999" if v > 0 else "-1e9999"
        if self.is_integral() and abs(v) < _INTEGRAL_PRINT_LIMIT:
            return str(int(v))
        return repr(v)
