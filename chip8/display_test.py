import unittest

from chip8.display import PIXEL_ON, SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer

F_SPRITE = bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])
E_SPRITE = bytes([0xF0, 0x80, 0xF0, 0x80, 0xF0])


def lit(fb):
    """coordinates of every pixel that is ON"""
    return {(x, y) for y, row in enumerate(fb.rows()) for x, p in enumerate(row) if p}


class TestFrameBuffer(unittest.TestCase):
    def test_clear(self):
        fb = FrameBuffer()
        fb.buffer[:] = bytes([99]) * len(fb.buffer)
        fb.clear()
        self.assertFalse(any(fb.buffer))

    def test_draw(self):
        fb = FrameBuffer()
        self.assertFalse(fb.draw(F_SPRITE, 0, 0))
        self.assertEqual(str(fb).splitlines()[:5],
                         ["####" + "." * 60,
                          "#" + "." * 63,
                          "####" + "." * 60,
                          "#" + "." * 63,
                          "#" + "." * 63])
        self.assertEqual(fb.pixel(0, 0), PIXEL_ON)

    def test_draw_with_collision(self):
        fb = FrameBuffer()
        fb.draw(F_SPRITE, 0, 0)
        self.assertTrue(fb.draw(E_SPRITE, 0, 0))
        self.assertEqual(lit(fb), {(1, 4), (2, 4), (3, 4)})

    def test_draw_twice_erases(self):
        fb = FrameBuffer()
        fb.draw(F_SPRITE, 10, 7)
        self.assertTrue(fb.draw(F_SPRITE, 10, 7))
        self.assertFalse(any(fb.buffer))

    def test_disjoint_sprites_do_not_collide(self):
        fb = FrameBuffer()
        self.assertFalse(fb.draw(F_SPRITE, 0, 0))
        self.assertFalse(fb.draw(F_SPRITE, 8, 0))
        self.assertFalse(fb.draw(F_SPRITE, 0, 5))

    def test_anchor_wraps(self):
        fb = FrameBuffer()
        fb.draw(bytes([0x80]), SCREEN_WIDTH + 1, SCREEN_HEIGHT + 1)
        self.assertEqual(lit(fb), {(1, 1)})

    def test_clipped_at_right_edge(self):
        fb = FrameBuffer()
        self.assertFalse(fb.draw(bytes([0xFF]), 60, 0))
        self.assertEqual(lit(fb), {(60, 0), (61, 0), (62, 0), (63, 0)})
        # nothing leaked onto the next row
        self.assertEqual(fb.pixel(0, 1), 0)

    def test_clipped_at_bottom_edge(self):
        fb = FrameBuffer()
        fb.draw(bytes([0x80] * 5), 0, 30)
        self.assertEqual(lit(fb), {(0, 30), (0, 31)})


if __name__ == "__main__":
    unittest.main()
