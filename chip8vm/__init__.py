from .decoder import Instruction, decode, mnemonic
from .display import Framebuffer
from .errors import AddressOutOfRange, Chip8Error, LoadTooLarge, StackOverflow
from .machine import Chip8
from .rng import RandomByteSource

__version__ = "0.1.0"
