import unittest

from chip8.errors import InvariantViolation
from chip8.keypad import Keypad


class TestKeypad(unittest.TestCase):
    def test_is_pressed(self):
        keypad = Keypad()
        keypad.press(10)
        for key in range(16):
            self.assertEqual(keypad.is_pressed(key), key == 10, f"key {key}")

    def test_is_pressed_out_of_range(self):
        with self.assertRaises(InvariantViolation):
            Keypad().is_pressed(20)

    def test_press_out_of_range(self):
        with self.assertRaises(InvariantViolation):
            Keypad()[16] = True

    def test_pressed_key(self):
        keypad = Keypad()
        self.assertIsNone(keypad.pressed_key())
        keypad[9] = True
        self.assertEqual(keypad.pressed_key(), 9)

    def test_pressed_key_lowest_wins(self):
        keypad = Keypad()
        keypad.press(0xC)
        keypad.press(0x3)
        self.assertEqual(keypad.pressed_key(), 0x3)

    def test_release_and_clear(self):
        keypad = Keypad()
        keypad.press(1)
        keypad.press(2)
        keypad.release(1)
        self.assertFalse(keypad[1])
        self.assertTrue(keypad[2])
        keypad.clear()
        self.assertIsNone(keypad.pressed_key())


if __name__ == "__main__":
    unittest.main()
