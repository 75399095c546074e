SCREEN_HEIGHT = 32
SCREEN_WIDTH = 64

PIXEL_OFF = 0x00
PIXEL_ON = 0xFF


class FrameBuffer:
    """64x32 monochrome bitmap, one byte per pixel, row-major"""

    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.buffer = bytearray(w * h)

    def clear(self):
        self.buffer[:] = bytes(len(self.buffer))

    def pixel(self, x, y):
        return self.buffer[y * self.w + x]

    def rows(self):
        for y in range(self.h):
            yield self.buffer[y * self.w:(y + 1) * self.w]

    def draw(self, sprite, x, y) -> bool:
        """
        XOR an 8 pixel wide sprite onto the buffer with its top-left corner at (x, y)
        only the corner wraps around the screen, whatever falls past the right or bottom edge is clipped
        return True when at least one lit pixel got turned off (collision)
        """
        x, y = x % self.w, y % self.h
        collision = False
        for row, sprite_byte in enumerate(sprite):
            y_coordinate = y + row
            if y_coordinate >= self.h:
                break
            for col in range(8):
                if not sprite_byte & (0x80 >> col):
                    continue
                x_coordinate = x + col
                if x_coordinate >= self.w:
                    break
                offset = y_coordinate * self.w + x_coordinate
                # sprites are XORed onto the existing screen, the only way to erase a pixel
                # is to draw over one that is already ON
                if self.buffer[offset] != PIXEL_OFF:
                    collision = True
                self.buffer[offset] ^= PIXEL_ON
        return collision

    def __str__(self):
        return "\n".join("".join("#" if p else "." for p in row) for row in self.rows())
