import logging

from .errors import InvariantViolation, RomLoadError

log = logging.getLogger(__name__)


# ******************** STATIC SECTION
C8_FONTS = [0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
            0x20, 0x60, 0x20, 0x20, 0x70,  # 1
            0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
            0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
            0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
            0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
            0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
            0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
            0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
            0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
            0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
            0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
            0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
            0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
            0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
            0xF0, 0x80, 0xF0, 0x80, 0x80]  # F

FONT_START_ADDRESS = 0x050
FONT_SPRITE_SIZE = 5
MEMORY_SIZE = 4096
ROM_START_ADDRESS = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - ROM_START_ADDRESS


# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    def __init__(self):
        self.inner = bytearray(MEMORY_SIZE)
        self.inner[FONT_START_ADDRESS:FONT_START_ADDRESS+len(C8_FONTS)] = bytes(C8_FONTS)

    def __len__(self):
        return len(self.inner)

    def __getitem__(self, index):
        return self.inner[index]

    def __setitem__(self, key, value):
        self.write(key, [value])

    @staticmethod
    def _check_range(addr, length):
        if addr < 0 or addr + length > MEMORY_SIZE:
            raise InvariantViolation(f"Memory access out of range: 0x{addr:04x} + {length} bytes")

    def read(self, addr, length):
        """return `length` bytes starting at addr"""
        self._check_range(addr, length)
        return bytes(self.inner[addr:addr+length])

    def write(self, addr, values):
        """write all the values starting at addr, nothing is written if any of them would land out of bounds"""
        values = bytes(values)
        self._check_range(addr, len(values))
        if values and addr < ROM_START_ADDRESS:
            raise InvariantViolation(f"Write to reserved memory at 0x{addr:04x}")
        self.inner[addr:addr+len(values)] = values

    def load_rom(self, rom):
        """copy the ROM bytes into the program area, raise RomLoadError without touching memory if the size is wrong"""
        if not 1 <= len(rom) <= MAX_ROM_SIZE:
            raise RomLoadError(
                f"ROM length is invalid. Received {len(rom)} bytes, expected between 1 and {MAX_ROM_SIZE} bytes"
            )
        self.write(ROM_START_ADDRESS, rom)
        log.info("loaded %d bytes into memory", len(rom))

    def load_rom_file(self, path):
        """load ROM file from user specified path, raise RomLoadError if it can't be read"""
        log.info("loading rom from file %s", path)
        try:
            with open(path, mode='rb') as f:
                rom = f.read()
        except OSError as e:
            raise RomLoadError(f"Cannot read ROM at path {path}: {e.strerror}") from e
        self.load_rom(rom)

    def dump(self, show_zero_lines=False):
        """hex dump in rows of 16 bytes, all-zero rows are skipped unless asked for"""
        lines = []
        for addr in range(0, MEMORY_SIZE, 16):
            chunk = self.inner[addr:addr+16]
            if not show_zero_lines and not any(chunk):
                continue
            lines.append(f"{addr:03x}  " + " ".join(f"{b:02x}" for b in chunk))
        return "\n".join(lines)
