from .errors import InvariantViolation

MAX_ADDRESS = 0xFFF
STACK_SIZE = 16


class IndexRegister:
    """the I register, only ever loaded with a 12 bit address"""

    def __init__(self):
        self._value = 0

    def load(self, value: int):
        if not 0 <= value <= MAX_ADDRESS:
            raise InvariantViolation(f"Tried to load too-large value 0x{value:x} into the index register")
        self._value = value

    def get(self) -> int:
        return self._value

    def add(self, value: int):
        """used by ADD I, Vx: no range check, the caller keeps the result bounded"""
        self._value = (self._value + (value & 0xFF)) & 0xFFFF

    def __repr__(self):
        return f"IndexRegister(0x{self._value:03x})"


# ********** WRAPS A LIST TO REPRESENT A STACK WITH A LIMITED SIZE OF 16 ADDRESSES
class Stack:
    def __init__(self):
        self.slots = [0] * STACK_SIZE
        self.sp = 0

    def append(self, address):
        if self.sp >= STACK_SIZE:
            raise InvariantViolation(f"The CHIP-8 stack can contain at most {STACK_SIZE} addresses. Limit exceeded")
        self.slots[self.sp] = address
        self.sp += 1

    def pop(self):
        if self.sp == 0:
            raise InvariantViolation("Return with an empty stack")
        self.sp -= 1
        return self.slots[self.sp]

    def __len__(self):
        return self.sp

    def __repr__(self):
        return "[" + ", ".join(f"0x{addr:04x}" for addr in self.slots[:self.sp]) + "]"
