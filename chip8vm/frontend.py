# pyglet frontend for the CHIP-8 core.
# The window owns the machine: it paces cycle(), feeds key snapshots to update_input(),
# draws the packed framebuffer and plays the beep when the sound timer runs out.

import sys
from pathlib import Path

import numpy as np
import pyglet
from pyglet.media import synthesis
from pyglet.window import key

from . import log as logger
from .config import (USAGE, beep_duration, beep_frequency, cpu_hz, height,
                     parse_rate, scale, width, window_height, window_width)
from .log import log
from .machine import KEY_COUNT, Chip8

#map binding keys
KEYMAP = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


def load_rom(path):
    log("Loading ROM:", path)
    return Path(path).read_bytes()


def generate_beep(duration=beep_duration, frequency=beep_frequency, sample_rate=44100):
    # Use a Sine waveform from pyglet.media.synthesis
    wave = synthesis.Sine(duration=duration, frequency=frequency, sample_rate=sample_rate)
    return pyglet.media.StaticSource(wave)


class Emulator(pyglet.window.Window):

    def __init__(self, rom, hz=cpu_hz):
        super().__init__(window_width, window_height, caption="CHIP-8 Emulator", resizable=False)

        self.chip = Chip8(on_beep=self._play_beep)
        self.chip.init()
        self.chip.load(rom)

        self.keys = [False] * KEY_COUNT
        self.has_exit = False
        self.beep_sound = generate_beep()

        # Pre-allocated 64x32 RGBA framebuffer, upscaled with numpy.repeat
        self._small_framebuf = np.zeros((height, width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            window_width,
            window_height,
            'RGBA',
            bytes(window_width * window_height * 4)
        )

        pyglet.clock.schedule_interval(self._cpu_tick, 1.0 / hz)

    def _play_beep(self):
        self.beep_sound.play()

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        #@Override
        if symbol == key.ESCAPE:
            self.close()
        if symbol == key.F1:
            log("logsOn:", logger.toggle())
        if symbol in KEYMAP:
            self.keys[KEYMAP[symbol]] = True
            self.chip.update_input(self.keys)

    def on_key_release(self, symbol, modifiers):
        #@Override
        if symbol in KEYMAP:
            self.keys[KEYMAP[symbol]] = False
            self.chip.update_input(self.keys)

    # ---- Drawing ----
    def on_draw(self):
        self.clear()

        pixels = self.chip.display.to_array() * 255
        # pyglet images start at the bottom row
        self._small_framebuf[..., :3] = pixels[::-1, :, None]

        if scale != 1:
            scaled = np.repeat(np.repeat(self._small_framebuf, scale, axis=0), scale, axis=1)
        else:
            scaled = self._small_framebuf

        self.image.set_data('RGBA', window_width * 4, scaled.tobytes())
        self.image.blit(0, 0)

    # ---- CPU cycle ----
    def _cpu_tick(self, dt):
        if not self.has_exit:
            try:
                self.chip.cycle()
            except Exception as e:
                print("Emulation error:", e)
                self.has_exit = True
                self.close()


# ---- Entry point ----
def main(argv=None):
    argv = sys.argv if argv is None else argv
    hz = parse_rate(argv)
    if len(argv) < 2 or hz is None:
        print(USAGE)
        sys.exit(1)
    Emulator(load_rom(argv[1]), hz=hz)
    pyglet.app.run()
