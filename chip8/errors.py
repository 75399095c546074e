class Chip8Error(Exception):
    """base class for every error raised by the interpreter"""


class RomLoadError(Chip8Error):
    """the ROM could not be loaded, nothing has been written to memory"""


class InvariantViolation(Chip8Error):
    """
    the running program (or the caller) broke one of the machine invariants
    this is never retried: the cycle that raised it is lost and the host is expected to stop
    """

    def __init__(self, msg, mem_addr=None, opcode=None):
        super().__init__(msg)
        self.msg = msg
        self.mem_addr = mem_addr
        self.opcode = opcode

    def at(self, mem_addr, opcode):
        """attach the address/opcode of the instruction that was executing"""
        self.mem_addr, self.opcode = mem_addr, opcode
        return self

    def __str__(self):
        where = []
        if self.mem_addr is not None:
            where.append(f"mem_addr: 0x{self.mem_addr:04x}")
        if self.opcode is not None:
            where.append(f"opcode: 0x{self.opcode:04x}")
        if not where:
            return self.msg
        return f"{self.msg} ({', '.join(where)})"


class UnknownOpcodeError(InvariantViolation):
    def __init__(self, opcode):
        super().__init__("Unknown opcode", opcode=opcode)
