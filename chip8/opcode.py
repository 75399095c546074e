from .errors import UnknownOpcodeError


class OpCode:
    """a 16 bit instruction, built big-endian from two consecutive memory bytes"""

    __slots__ = ('value',)

    def __init__(self, value: int):
        self.value = value & 0xFFFF

    @classmethod
    def from_bytes(cls, hi: int, lo: int) -> 'OpCode':
        return cls((hi & 0xFF) << 8 | (lo & 0xFF))

    def __int__(self):
        return self.value

    def __eq__(self, other):
        if isinstance(other, OpCode):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"OpCode(0x{self.value:04x})"

    @property
    def nibbles(self):
        return (
            (self.value & 0xF000) >> 12,
            (self.value & 0x0F00) >> 8,
            (self.value & 0x00F0) >> 4,
            self.value & 0x000F,
        )

    @property
    def nnn(self) -> int:
        """lowest 12 bits, an address"""
        return self.value & 0x0FFF

    @property
    def kk(self) -> int:
        """lowest 8 bits, an immediate byte"""
        return self.value & 0x00FF

    @property
    def x(self) -> int:
        return (self.value & 0x0F00) >> 8

    @property
    def y(self) -> int:
        return (self.value & 0x00F0) >> 4

    @property
    def n(self) -> int:
        return self.value & 0x000F


# every instruction of the base set, grouped by the mask that isolates its fixed bits
# the groups don't share a leading nibble so a match is always unambiguous
MASKS = (
    (0xFFFF, (0x00E0, 0x00EE)),
    (0xF0FF, (0xE09E, 0xE0A1, 0xF007, 0xF00A, 0xF015, 0xF018, 0xF01E, 0xF029, 0xF033, 0xF055, 0xF065)),
    (0xF00F, (0x5000, 0x8000, 0x8001, 0x8002, 0x8003, 0x8004, 0x8005, 0x8006, 0x8007, 0x800E, 0x9000)),
    (0xF000, (0x1000, 0x2000, 0x3000, 0x4000, 0x6000, 0x7000, 0xA000, 0xB000, 0xC000, 0xD000)),
)


def decode(opcode) -> int:
    """
    return the pattern an opcode belongs to, i.e. the opcode with its operand bits cleared
    (0x8124 -> 0x8004), raise UnknownOpcodeError for anything outside the instruction set
    """
    value = int(opcode)
    for mask, patterns in MASKS:
        if (value & mask) in patterns:
            return value & mask
    raise UnknownOpcodeError(value)
