# Exceptions raised by the CHIP-8 core.
# The frontend catches these in its CPU tick and stops emulation.


class Chip8Error(Exception):
    pass


class LoadTooLarge(Chip8Error):
    def __init__(self, size, limit):
        super().__init__(f"Program is {size} bytes, only {limit} fit above 0x200")
        self.size = size
        self.limit = limit


class AddressOutOfRange(Chip8Error, IndexError):
    def __init__(self, address):
        super().__init__("Address out of bounds: 0x%04X" % address)
        self.address = address


class StackOverflow(Chip8Error):
    def __init__(self, pc):
        super().__init__("Stack overflow on CALL at 0x%03X" % pc)
        self.pc = pc
