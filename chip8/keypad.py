from .errors import InvariantViolation

NUM_KEYS = 16


class Keypad:
    """
    state of the 16 keys of the hex keypad (0x0 - 0xF)
    the frontend feeds it through press/release, the CPU only reads it
    """

    def __init__(self):
        self.keys = [False] * NUM_KEYS

    @staticmethod
    def _check(key):
        if not 0 <= key < NUM_KEYS:
            raise InvariantViolation(f"Keypad has no key 0x{key:x}")

    def is_pressed(self, key: int) -> bool:
        self._check(key)
        return self.keys[key]

    def pressed_key(self):
        """lowest index among the keys currently down, None if no key is down"""
        for key, down in enumerate(self.keys):
            if down:
                return key
        return None

    def press(self, key: int):
        self._check(key)
        self.keys[key] = True

    def release(self, key: int):
        self._check(key)
        self.keys[key] = False

    def clear(self):
        self.keys = [False] * NUM_KEYS

    def __getitem__(self, key):
        return self.is_pressed(key)

    def __setitem__(self, key, value):
        self._check(key)
        self.keys[key] = bool(value)

    def __repr__(self):
        return "Keypad(" + "".join("1" if down else "0" for down in self.keys) + ")"
