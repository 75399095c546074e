import unittest

from chip8.timer import Timer


class TestTimer(unittest.TestCase):
    def test_tick(self):
        timer = Timer(10)
        timer.tick()
        self.assertEqual(timer.value(), 9)

    def test_tick_saturates_at_zero(self):
        timer = Timer(0)
        timer.tick()
        self.assertEqual(timer.value(), 0)

    def test_set(self):
        timer = Timer()
        timer.set(0xFF)
        self.assertEqual(timer.value(), 0xFF)
        for _ in range(300):
            timer.tick()
        self.assertEqual(timer.value(), 0)


if __name__ == "__main__":
    unittest.main()
