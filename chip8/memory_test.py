import os
import tempfile
import unittest

from chip8.errors import InvariantViolation, RomLoadError
from chip8.memory import C8_FONTS, FONT_START_ADDRESS, MAX_ROM_SIZE, MEMORY_SIZE, ROM_START_ADDRESS, Memory


class TestMemory(unittest.TestCase):
    def test_font_set(self):
        mem = Memory()
        self.assertEqual(list(mem.read(FONT_START_ADDRESS, len(C8_FONTS))), C8_FONTS)
        self.assertEqual(len(C8_FONTS), 80)

    def test_acceptable_rom_sizes(self):
        Memory().load_rom(bytes(1))
        Memory().load_rom(bytes(MAX_ROM_SIZE))
        self.assertEqual(MAX_ROM_SIZE, 3584)

    def test_unacceptable_rom_sizes(self):
        for size in (0, MAX_ROM_SIZE + 1):
            mem = Memory()
            with self.assertRaises(RomLoadError):
                mem.load_rom(bytes([8]) * size)
            self.assertFalse(any(mem.read(ROM_START_ADDRESS, MAX_ROM_SIZE)))

    def test_load_rom(self):
        mem = Memory()
        rom = bytes([8]) * (MAX_ROM_SIZE - 10)
        mem.load_rom(rom)
        self.assertEqual(mem.read(ROM_START_ADDRESS, len(rom)), rom)
        self.assertEqual(mem.read(ROM_START_ADDRESS + len(rom), 10), bytes(10))
        self.assertEqual(mem.read(0, FONT_START_ADDRESS), bytes(FONT_START_ADDRESS))

    def test_load_rom_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "test.ch8")
            with open(path, "wb") as f:
                f.write(bytes([0xDE, 0xAD, 0xBE, 0xEF]))
            mem = Memory()
            mem.load_rom_file(path)
        self.assertEqual(mem.read(ROM_START_ADDRESS, 4), bytes([0xDE, 0xAD, 0xBE, 0xEF]))

    def test_load_missing_rom_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(RomLoadError):
                Memory().load_rom_file(os.path.join(tmp, "missing.ch8"))

    def test_write_below_program_area(self):
        mem = Memory()
        with self.assertRaises(InvariantViolation):
            mem[0x1FF] = 1
        with self.assertRaises(InvariantViolation):
            mem.write(0x1FE, [1, 2, 3])
        self.assertEqual(mem[0x200], 0)

    def test_out_of_range_access(self):
        mem = Memory()
        with self.assertRaises(InvariantViolation):
            mem.read(MEMORY_SIZE - 2, 3)
        with self.assertRaises(InvariantViolation):
            mem.write(MEMORY_SIZE - 1, [1, 2])
        self.assertEqual(mem[MEMORY_SIZE - 1], 0)

    def test_dump(self):
        mem = Memory()
        mem.write(0x210, [0xAB])
        lines = mem.dump().splitlines()
        self.assertEqual(lines[0][:3], "050")
        self.assertEqual(lines[-1], "210  ab" + " 00" * 15)
        self.assertEqual(len(mem.dump(show_zero_lines=True).splitlines()), MEMORY_SIZE // 16)


if __name__ == "__main__":
    unittest.main()
