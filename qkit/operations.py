"""
Operation log records and the JSON dump document.

The log is write-only from the simulator's point of view: it exists so a
circuit can be rendered or audited after the fact.
"""

import json
from dataclasses import dataclass, asdict, field
from typing import List, Optional

# Operation names as they appear in the dump document
OP_SPACE = "Sp"
OP_READ = "R"
OP_WRITE = "W"
OP_HAD = "H"
OP_PHASE = "P"
OP_ROTATE = "Ro"
OP_NOT = "N"
OP_SWAP = "S"
OP_X = "X"
OP_Y = "Y"
OP_Z = "Z"


@dataclass(frozen=True)
class Operation:
    op_name: str
    register_name: int
    register_name_string: str
    target_qbit: int
    control_qbits: Optional[List[int]]
    swap_qbit: int
    options: Optional[List[float]]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DumpRegister:
    number_of_qbits: int
    qbits: List[int]
    shift: int
    reg_name: str


@dataclass
class DumpDocument:
    message: str
    operations: List[Operation] = field(default_factory=list)
    registers: List[DumpRegister] = field(default_factory=list)
    qbits: List[List[float]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "operations": [op.to_dict() for op in self.operations],
            "registers": [asdict(reg) for reg in self.registers],
            "qbits": self.qbits,
        }

    def to_json(self, indent: int = 4) -> str:
        return json.dumps(self.to_dict(), indent=indent)
