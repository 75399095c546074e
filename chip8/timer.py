class Timer:
    """8 bit down-counter (delay or sound), active when non-zero"""

    def __init__(self, count=0):
        self.count = count & 0xFF

    def tick(self):
        if self.count > 0:
            self.count -= 1

    def set(self, value: int):
        self.count = value & 0xFF

    def value(self) -> int:
        return self.count

    def __repr__(self):
        return f"Timer({self.count})"
