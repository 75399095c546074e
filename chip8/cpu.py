# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://chip-8.github.io/links/
#
# COMPATIBILITY QUIRKS TABLE
# https://games.gulrak.net/cadmium/chip8-opcode-table.html#quirk6
#
# MASTERING CHIP-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908


import logging
import random
from functools import wraps

from .display import FrameBuffer
from .errors import InvariantViolation
from .keypad import Keypad
from .memory import FONT_SPRITE_SIZE, FONT_START_ADDRESS, ROM_START_ADDRESS, Memory
from .opcode import OpCode, decode
from .registers import IndexRegister, Stack
from .timer import Timer

log = logging.getLogger(__name__)


# ******************** UTILITIES SECTION
def asm(msg):
    """decorator to log the ASM of the instruction being called"""
    def decorator(fn):
        @wraps(fn)
        def wrapper_fn(self, opcode):
            vals = fn(self, opcode)     # use the locals() values of each decorated function in the message
            if log.isEnabledFor(logging.DEBUG):
                vals['mem_addr'] = self.op_addr
                log.debug(msg.format(**vals))
        return wrapper_fn
    return decorator


# ******************** CPU SECTION
class Chip8:
    def __init__(self, screen=None, keypad=None):
        self.mem = Memory()
        self.stack = Stack()
        self.v_regs = [0] * 16
        self.pc = ROM_START_ADDRESS
        self.op_addr = ROM_START_ADDRESS     # address of the instruction being executed
        self.idx = IndexRegister()  # specify where the sprites reside in memory
        self.dt = Timer()           # delay timer, active when non-zero
        self.st = Timer()           # sound timer, active when non-zero
        self.draw = False
        self._rnd = None
        self.instructions = {
            0x00E0: self._clear_screen,
            0x00EE: self._return,
            0x1000: self._jump,
            0x2000: self._call_addr,
            0x3000: self._skip_if_eq,
            0x4000: self._skip_if_not_eq,
            0x5000: self._skip_if_eq_regs,
            0x6000: self._set_vk,
            0x7000: self._add_to_vk,
            0x8000: self._set_vx_to_vy,
            0x8001: self._set_vx_or_vy,
            0x8002: self._set_vx_and_vy,
            0x8003: self._set_vx_xor_vy,
            0x8004: self._add_vx_vy,
            0x8005: self._sub_vx_vy,
            0x8006: self._shr,
            0x8007: self._subn_vx_vy,
            0x800E: self._shl,
            0x9000: self._skip_if_not_eq_regs,
            0xA000: self._set_idx,
            0xB000: self._jump_plus,
            0xC000: self._random_byte_and,
            0xD000: self._to_screen,
            0xE09E: self._skip_if_pressed,
            0xE0A1: self._skip_if_not_pressed,
            0xF007: self._set_vx_dt,
            0xF00A: self._wait_keypress,
            0xF015: self._set_dt_vx,
            0xF018: self._set_st,
            0xF01E: self._add_to_idx,
            0xF029: self._select_char,
            0xF033: self._bcd_repr,
            0xF055: self._store_vregs,
            0xF065: self._load_vregs,
        }
        self.screen = screen if screen is not None else FrameBuffer()
        self.keypad = keypad if keypad is not None else Keypad()

    def __str__(self):
        registers = f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.idx.get():03x} | SP:{self.stack.sp}"
        v_regs = "VARIABLE_REGISTERS:" + " ".join(f"V{i:X}={v:02x}" for i, v in enumerate(self.v_regs))
        timers = f"DT:{self.dt.value()} | ST:{self.st.value()}"
        stack = f"STACK:{self.stack}"
        flags = f"DRAW: {self.draw}"
        return f"{registers}\n{v_regs}\n{timers}\n{stack}\n{flags}"

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SKP V{x}")
    def _skip_if_pressed(self, opcode):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is pressed"""
        x = opcode.x
        key = self.v_regs[x]
        if self.keypad[key]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SKNP V{x}")
    def _skip_if_not_pressed(self, opcode):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is NOT pressed"""
        x = opcode.x
        key = self.v_regs[x]
        if not self.keypad[key]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x}, K")
    def _wait_keypress(self, opcode):
        """wait for a key press and store its value in Vx"""
        x = opcode.x
        key = self.keypad.pressed_key()
        if key is None:
            self.pc -= 0x2      # stay on the same instruction until a key is pressed
        else:
            self.v_regs[x] = key
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x}, DT")
    def _set_vx_dt(self, opcode):
        """set Vx = DT (delay timer) value"""
        x = opcode.x
        self.v_regs[x] = self.dt.value()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD DT, V{x}")
    def _set_dt_vx(self, opcode):
        """set DT (delay timer) = Vx"""
        x = opcode.x
        self.dt.set(self.v_regs[x])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: CLS")
    def _clear_screen(self, opcode):
        self.screen.clear()
        self.draw = True
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: RET")
    def _return(self, opcode):
        """return from a subroutine"""
        self.pc = self.stack.pop()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: JP 0x{address:03x}")
    def _jump(self, opcode):
        address = opcode.nnn
        self.pc = address
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: CALL 0x{address:03x}")
    def _call_addr(self, opcode):
        address = opcode.nnn
        self.stack.append(self.pc)
        self.pc = address
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SE V{x}, {comparison_value}")
    def _skip_if_eq(self, opcode):
        x, comparison_value = opcode.x, opcode.kk
        if self.v_regs[x] == comparison_value:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SNE V{x}, {comparison_value}")
    def _skip_if_not_eq(self, opcode):
        x, comparison_value = opcode.x, opcode.kk
        if self.v_regs[x] != comparison_value:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SE V{x}, V{y}")
    def _skip_if_eq_regs(self, opcode):
        x, y = opcode.x, opcode.y
        if self.v_regs[x] == self.v_regs[y]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SNE V{x}, V{y}")
    def _skip_if_not_eq_regs(self, opcode):
        x, y = opcode.x, opcode.y
        if self.v_regs[x] != self.v_regs[y]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x}, {value}")
    def _set_vk(self, opcode):
        """set the value of one of the 16 variable registers, Vx"""
        x, value = opcode.x, opcode.kk
        self.v_regs[x] = value
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD V{x}, {value}")
    def _add_to_vk(self, opcode):
        """add to the value already present in one of the variable registers, VF is left alone"""
        x, value = opcode.x, opcode.kk
        self.v_regs[x] = (self.v_regs[x] + value) & 0xFF    # keep only the lowest 8 bits from the result and store them in Vx
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x}, V{y}")
    def _set_vx_to_vy(self, opcode):
        """set the value of Vx equal to that of Vy"""
        x, y = opcode.x, opcode.y
        self.v_regs[x] = self.v_regs[y]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: OR V{x}, V{y}")
    def _set_vx_or_vy(self, opcode):
        x, y = opcode.x, opcode.y
        self.v_regs[x] |= self.v_regs[y]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: AND V{x}, V{y}")
    def _set_vx_and_vy(self, opcode):
        x, y = opcode.x, opcode.y
        self.v_regs[x] &= self.v_regs[y]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: XOR V{x}, V{y}")
    def _set_vx_xor_vy(self, opcode):
        x, y = opcode.x, opcode.y
        self.v_regs[x] ^= self.v_regs[y]
        return locals()

    # the flag is always written after Vx, so with x == 0xF the flag wins
    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD V{x}, V{y}")
    def _add_vx_vy(self, opcode):
        """set the value of Vx to Vx + Vy, VF = carry"""
        x, y = opcode.x, opcode.y
        sum = self.v_regs[x] + self.v_regs[y]
        self.v_regs[x] = sum & 0xFF     # keep only the lowest 8 bits from the result and store them in Vx
        self.v_regs[0xF] = 1 if sum > 0xFF else 0
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SUB V{x}, V{y}")
    def _sub_vx_vy(self, opcode):
        """set the value of Vx to Vx - Vy, VF = NOT borrow"""
        x, y = opcode.x, opcode.y
        vx, vy = self.v_regs[x], self.v_regs[y]
        self.v_regs[x] = (vx - vy) & 0xFF
        self.v_regs[0xF] = 1 if vx >= vy else 0
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SHR V{x}")
    def _shr(self, opcode):
        """set Vx equal to Vx SHR 1, VF = the bit shifted out"""
        x = opcode.x
        LSB = self.v_regs[x] & 0x1
        self.v_regs[x] = self.v_regs[x] >> 1
        self.v_regs[0xF] = LSB
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SUBN V{x}, V{y}")
    def _subn_vx_vy(self, opcode):
        """set the value of Vx to Vy - Vx, VF = NOT borrow"""
        x, y = opcode.x, opcode.y
        vx, vy = self.v_regs[x], self.v_regs[y]
        self.v_regs[x] = (vy - vx) & 0xFF
        self.v_regs[0xF] = 1 if vy >= vx else 0
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SHL V{x}")
    def _shl(self, opcode):
        """set Vx equal to Vx SHL 1, VF = the bit shifted out"""
        x = opcode.x
        MSB = (self.v_regs[x] & 0x80) >> 7
        self.v_regs[x] = (self.v_regs[x] << 1) & 0xFF   # multiply by 2 and keep only the lowest 8 bits from the result
        self.v_regs[0xF] = MSB
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD I, 0x{value:03x}")
    def _set_idx(self, opcode):
        """set the value of the I register"""
        value = opcode.nnn
        self.idx.load(value)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: JP V0, 0x{address:03x}")
    def _jump_plus(self, opcode):
        """jump to V0 + the whole 12 bit address"""
        address = opcode.nnn
        v0 = self.v_regs[0x0]
        self.pc = address + v0
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: RND V{x}, 0x{kk:02x}")
    def _random_byte_and(self, opcode):
        x, kk = opcode.x, opcode.kk
        rnd = self._rnd if self._rnd is not None else random.randint(0, 255)
        self.v_regs[x] = rnd & kk
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: DRW V{x}, V{y}, {n_bytes}")
    def _to_screen(self, opcode):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        x, y, n_bytes = opcode.x, opcode.y, opcode.n
        sprite = self.mem.read(self.idx.get(), n_bytes)
        collision = self.screen.draw(sprite, self.v_regs[x], self.v_regs[y])
        self.v_regs[0xF] = 1 if collision else 0
        self.draw = True
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD ST, V{register}")
    def _set_st(self, opcode):
        """set ST = Vx"""
        register = opcode.x
        self.st.set(self.v_regs[register])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD I, V{register}")
    def _add_to_idx(self, opcode):
        """set I = I + Vx"""
        register = opcode.x
        self.idx.add(self.v_regs[register])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD F, V{register}")
    def _select_char(self, opcode):
        """set I to location of sprite for digit Vx"""
        register = opcode.x
        self.idx.load(FONT_START_ADDRESS + self.v_regs[register] * FONT_SPRITE_SIZE)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD B, V{x}")
    def _bcd_repr(self, opcode):
        """store the hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        x = opcode.x
        value = self.v_regs[x]
        hundreds, tens, ones = value // 100, (value // 10) % 10, value % 10
        self.mem.write(self.idx.get(), (hundreds, tens, ones))
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD [I], V{x}")
    def _store_vregs(self, opcode):
        """store registers V0 through Vx (included) in memory starting at location I, I is left unchanged"""
        x = opcode.x
        self.mem.write(self.idx.get(), self.v_regs[:x+1])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x}, [I]")
    def _load_vregs(self, opcode):
        """read registers V0 through Vx (included) from memory starting at location I, I is left unchanged"""
        x = opcode.x
        self.v_regs[:x+1] = self.mem.read(self.idx.get(), x + 1)
        return locals()

    def _goto_next_instruction(self):
        self.pc += 0x2

    def fetch(self):
        """read the two bytes at PC (each instruction is two bytes long) and move PC past them"""
        if self.pc + 1 >= len(self.mem):
            raise InvariantViolation(f"Program counter too large (0x{self.pc:04x})", mem_addr=self.pc)
        opcode = OpCode.from_bytes(self.mem[self.pc], self.mem[self.pc + 1])
        self._goto_next_instruction()
        return opcode

    def cycle(self, rnd=None):
        """
        emulate one machine cycle: fetch opcode, decode opcode, execute opcode, update timers
        `rnd` is the random byte used by RND, drawn from the random module when not given
        a failing instruction leaves PC on itself and raises InvariantViolation
        """
        self.draw = False
        self.op_addr = self.pc
        self._rnd = None if rnd is None else rnd & 0xFF
        opcode = self.fetch()
        try:
            # decode + execute
            instruction = self.instructions[decode(opcode)]
            instruction(opcode)
        except InvariantViolation as iv:
            self.pc = self.op_addr
            raise iv.at(self.op_addr, opcode.value)
        # delay/sound timers (dt/st)
        self.dt.tick()
        self.st.tick()
        return opcode.value
