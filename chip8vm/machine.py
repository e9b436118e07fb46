# CHIP8 Virtual Machine:
# Input - 16 key states, updated by the embedder; a key press can resume a Fx0A wait.
# Output - 64x32 framebuffer of packed rows & a beep callback for the sound timer.
# CPU - Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
# Memory - 4096 bytes: font sprites at 0x000, the program from 0x200.
#----------------------------------------------------------------------------------------------
# The machine doesn't pace itself. The embedder calls cycle() once per tick; each call runs
# one instruction and then decrements the delay and sound timers.

from . import log as logger
from .decoder import decode, mnemonic
from .display import Framebuffer
from .errors import AddressOutOfRange, LoadTooLarge
from .instructions import HANDLERS
from .log import log
from .rng import RandomByteSource

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START
STACK_SIZE = 16
KEY_COUNT = 16
FONT_START = 0x000

# set fonts (binary pixel patterns)
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
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
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes


class Chip8:
    """CHIP-8 machine state and the entry points an embedder drives.

    ``rng`` is any object with ``next_byte()`` and ``seed()``. ``on_beep``
    is called with no arguments when the sound timer runs out.
    ``canonical_flags`` makes 8xy4 clear VF when there is no carry and
    8xyE store the shifted-out top bit. By default both keep the legacy
    behaviour.
    """

    def __init__(self, rng=None, on_beep=None, canonical_flags=False):
        self.rng = rng if rng is not None else RandomByteSource()
        self.on_beep = on_beep
        self.canonical_flags = canonical_flags
        self.display = Framebuffer()
        self.reset()

    def reset(self):
        # ---- CPU state ----
        self.memory = bytearray(MEMORY_SIZE)
        self.V = [0] * 16               # registers, VF doubles as the flag
        self.I = 0                      # memory pointer
        self.pc = PROGRAM_START
        self.stack = [0] * STACK_SIZE   # return addresses
        self.sp = 0
        self.dt = 0                     # delay timer
        self.st = 0                     # sound timer
        self.input = [False] * KEY_COUNT
        self.display.clear()
        self.wait = False
        self.store_input_at = 0

    def init(self, seed=None):
        """Install the font sprites and seed the random source."""
        self.memory[FONT_START:FONT_START + len(FONTSET)] = bytes(FONTSET)
        self.rng.seed(seed)

    def load(self, program):
        """Copy program bytes into memory at 0x200."""
        program = bytes(program)
        if len(program) > MAX_PROGRAM_SIZE:
            raise LoadTooLarge(len(program), MAX_PROGRAM_SIZE)
        self.memory[PROGRAM_START:PROGRAM_START + len(program)] = program
        log(f"Loaded {len(program)} bytes at 0x{PROGRAM_START:03X}")

    @property
    def waiting(self):
        return self.wait

    # ---- Memory ----
    def read(self, address):
        if not 0 <= address < MEMORY_SIZE:
            raise AddressOutOfRange(address)
        return self.memory[address]

    def check_range(self, address, count):
        # whole block must fit before any byte of it is touched
        if address < 0 or address + count > MEMORY_SIZE:
            raise AddressOutOfRange(max(address, address + count - 1))

    def write(self, address, value):
        if not 0 <= address < MEMORY_SIZE:
            raise AddressOutOfRange(address)
        self.memory[address] = value & 0xFF

    # ---- Input ----
    def update_input(self, new_input):
        """
        Take a full snapshot of the 16 keys. A key that goes from released
        to pressed while the machine waits on Fx0A is stored in the waiting
        register and execution resumes. Keys already held don't count.
        """
        for key in range(KEY_COUNT):
            pressed = bool(new_input[key])
            if self.input[key] == pressed:
                continue
            self.input[key] = pressed

            if pressed and self.wait:
                self.V[self.store_input_at] = key
                log(f"Key {key:X} pressed, stored in V{self.store_input_at:X}")
                self.store_input_at = 0
                self.wait = False

    # ---- Cycle ----
    def fetch(self):
        return (self.read(self.pc) << 8) | self.read(self.pc + 1)

    def execute(self, opcode):
        """Run one opcode against the machine and move pc on."""
        ins = decode(opcode)
        if logger.logsOn:
            log(f"{self.pc:03X}: {ins.opcode:04X}  {mnemonic(ins)}")
        advance = HANDLERS[ins.name](self, ins)
        # read pc after the handler, jumps and calls set it themselves
        self.pc += advance
        return ins

    def cycle(self):
        # timers stay frozen while waiting for a key
        if self.wait:
            return

        self.execute(self.fetch())

        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            if self.st == 1:
                log("Sound plays!")
                if self.on_beep is not None:
                    self.on_beep()
            self.st -= 1
