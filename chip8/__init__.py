from .cpu import Chip8
from .display import FrameBuffer
from .errors import Chip8Error, InvariantViolation, RomLoadError, UnknownOpcodeError
from .keypad import Keypad
from .memory import C8_FONTS, FONT_START_ADDRESS, MAX_ROM_SIZE, ROM_START_ADDRESS, Memory
from .opcode import OpCode, decode
from .registers import IndexRegister, Stack
from .timer import Timer

__all__ = [
    "Chip8", "FrameBuffer", "Keypad", "Memory", "OpCode", "decode", "IndexRegister", "Stack", "Timer",
    "Chip8Error", "InvariantViolation", "RomLoadError", "UnknownOpcodeError",
    "C8_FONTS", "FONT_START_ADDRESS", "MAX_ROM_SIZE", "ROM_START_ADDRESS",
]
