import argparse
import logging
import sys

import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame
from pygame.locals import (
    K_0, K_1, K_2, K_3,
    K_4, K_5, K_6, K_7,
    K_8, K_9, K_a, K_b,
    K_c, K_d, K_e, K_f,
)

from .cpu import Chip8
from .display import SCREEN_HEIGHT, SCREEN_WIDTH
from .errors import InvariantViolation, RomLoadError

log = logging.getLogger(__name__)


# ******************** STATIC SECTION
KEY_MAPPINGS = {
    K_0: 0x0,
    K_1: 0x1,
    K_2: 0x2,
    K_3: 0x3,
    K_4: 0x4,
    K_5: 0x5,
    K_6: 0x6,
    K_7: 0x7,
    K_8: 0x8,
    K_9: 0x9,
    K_a: 0xA,
    K_b: 0xB,
    K_c: 0xC,
    K_d: 0xD,
    K_e: 0xE,
    K_f: 0xF,
}

DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False
SCALE = 15
CYCLES_PER_SECOND = 300
BLUE = pygame.Color(80,69,155,255)
LIGHT_BLUE = pygame.Color(136,126,203,255)


# ******************** UTILITIES SECTION
def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 interpreter")
    parser.add_argument("-f", "--file", required=True, help="input rom file")
    parser.add_argument("--hz", type=int, default=CYCLES_PER_SECOND, help="instructions executed per second")
    parser.add_argument("--scale", type=int, default=SCALE, help="size in screen pixels of a CHIP-8 pixel")
    return parser.parse_args(argv)


# ******************** I/O SECTION
class Screen:
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, bg_color=BLUE, fg_color=LIGHT_BLUE):
        self.w, self.h, self.scale = w, h, s
        self.background = bg_color
        self.foreground = fg_color
        self.surface = pygame.display.set_mode(
            (w * self.scale, h * self.scale),
        )
        self.surface.fill(self.background)

    def render(self, frame_buffer):
        """
        repaint the whole surface from the frame buffer
        the change won't be immediatly visible because it'll require a call to the static method refresh
        """
        self.surface.fill(self.background)
        for y, row in enumerate(frame_buffer.rows()):
            for x, pixel in enumerate(row):
                if pixel:
                    pygame.draw.rect(
                        self.surface,
                        self.foreground,
                        (x * self.scale, y * self.scale, self.scale, self.scale)
                    )

    @staticmethod
    def refresh():
        pygame.display.flip()


# ******************** EMULATION LOOP SECTION
class Emulator:
    """drive a Chip8 at a fixed number of cycles per second, feeding it the keyboard and painting its frame buffer"""

    NOT_STARTED = 'not started'
    RUNNING = 'running'
    STOPPED = 'stopped'

    def __init__(self, chip, screen=None, hz=CYCLES_PER_SECOND):
        self.chip = chip
        self.screen = screen
        self.hz = hz
        self.clock = pygame.time.Clock()
        self.state = self.NOT_STARTED

    def handle_events(self):
        # loop throught the event queue
        for event in pygame.event.get():
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.stop()
                elif event.key in KEY_MAPPINGS:
                    self.chip.keypad.press(KEY_MAPPINGS[event.key])
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAPPINGS:
                    self.chip.keypad.release(KEY_MAPPINGS[event.key])
            elif event.type == pygame.QUIT:
                self.stop()

    def step(self):
        self.chip.cycle()
        # refresh screen if needed
        if self.chip.draw and self.screen is not None:
            self.screen.render(self.chip.screen)
            self.screen.refresh()

    def start(self):
        if self.state == self.RUNNING:
            log.warning("emulator is already running")
            return
        log.debug("starting emulator at %d Hz", self.hz)
        self.state = self.RUNNING
        while self.state == self.RUNNING:
            # instructions per second, the timers decay at the same pace
            self.clock.tick(self.hz)
            self.handle_events()
            if self.state == self.RUNNING:
                self.step()

    def stop(self):
        log.debug("stopping emulator")
        self.state = self.STOPPED


# ******************** ENTRY POINT SECTION
def main(argv=None):
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = get_args(argv)
    chip = Chip8()
    try:
        chip.mem.load_rom_file(args.file)
    except RomLoadError as rle:
        sys.exit(f"Cannot start the emulator: {rle}")
    # pygame initialization
    pygame.init()
    try:
        pygame.display.set_caption(os.path.basename(args.file))
        emulator = Emulator(chip, Screen(s=args.scale), hz=args.hz)
        emulator.start()
    except InvariantViolation as iv:
        dump = f"\n{chip.mem.dump()}" if DEBUG else ""
        sys.exit(f"********** THE EMULATOR CRASHED WITH THE FOLLOWING STATE\n{iv}\n{chip}{dump}")
    finally:
        pygame.quit()
