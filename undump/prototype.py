import logging
from dataclasses import dataclass, field
from typing import List

from decompile.constant import Constant
from decompile.output import Output
from undump.objects import LObject


@dataclass
class Local:
    name: str
    start: int
    end: int


@dataclass
class Prototype:
    source_name: str
    line_defined: int
    last_line_defined: int
    num_upvalues: int
    num_parameters: int
    is_vararg: int
    max_stack_size: int
    instructions: List[int] = field(default_factory=list)
    constants: List[LObject] = field(default_factory=list)
    locals: List[Local] = field(default_factory=list)
    source_line_position_list: List[int] = field(default_factory=list)
    upvalues: List[str] = field(default_factory=list)
    prototypes: List["Prototype"] = field(default_factory=list)

    def constant(self, index: int) -> Constant:
        return Constant.from_decoded(self.constants[index])

    def dump(self, out: Output, name: str = "main"):
        out.println(
            f"function {name} <{self.source_name or '?'}:{self.line_defined},{self.last_line_defined}> "
            f"({len(self.constants)} constant{'s' if len(self.constants) != 1 else ''}, "
            f"{len(self.prototypes)} function{'s' if len(self.prototypes) != 1 else ''})"
        )
        out.indent()
        for i in range(len(self.constants)):
            const = self.constant(i)
            out.print(f"{i + 1:<7} ")
            const.print(out)
            if const.is_identifier():
                out.print(" [ident]")
            out.println()

        for i, proto in enumerate(self.prototypes):
            logging.debug(f"dumping nested function {name}.{i}")
            proto.dump(out, f"{name}.{i}")
        out.dedent()

    def __repr__(self):
        return (
            f"<Prototype {self.source_name or '<anonymous>'} "
            f"lines {self.line_defined}-{self.last_line_defined}, "
            f"upvalues={self.num_upvalues}, params={self.num_parameters}, "
            f"vararg={self.is_vararg}, max_stack={self.max_stack_size}, "
            f"instructions={len(self.instructions)}, "
            f"constants={len(self.constants)}, locals={len(self.locals)}, "
            f"prototypes={len(self.prototypes)}>"
        )
