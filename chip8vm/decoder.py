"""
Opcode decoding for the CHIP-8 instruction set.

Cowgod's CHIP-8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM

An opcode is classified by its high nibble. Groups 0x0, 0xE and 0xF are
further split by their low byte, group 0x8 by its low nibble. Anything
that doesn't match decodes to ``unknown``.
"""

from collections import namedtuple

Instruction = namedtuple("Instruction", "name opcode x y n kk nnn")

UNKNOWN = "unknown"

# high nibble -> handler name, or the sub-table for that group
OPCODE_TABLE = {
    0x1000: "jump",                         # 1nnn - Jump to location nnn
    0x2000: "call",                         # 2nnn - Call subroutine at nnn
    0x3000: "skip_if_reg_equals_byte",      # 3xkk - Skip next instruction if Vx == kk
    0x4000: "skip_if_reg_not_equals_byte",  # 4xkk - Skip next instruction if Vx != kk
    0x5000: "skip_if_reg_equals_reg",       # 5xy0 - Skip next instruction if Vx == Vy
    0x6000: "set_register",                 # 6xkk - Set Vx = kk
    0x7000: "add_to_register",              # 7xkk - Set Vx = Vx + kk
    0x9000: "skip_if_reg_not_equals_reg",   # 9xy0 - Skip next instruction if Vx != Vy
    0xA000: "set_i",                        # Annn - Set I = nnn
    0xB000: "jump_plus_v0",                 # Bnnn - Jump to location nnn + V0
    0xC000: "random",                       # Cxkk - Set Vx = random byte AND kk
    0xD000: "update_display",               # Dxyn - Draw n-byte sprite at (Vx, Vy), VF = collision
}

# 00E0 / 00EE, keyed by the low byte
SYSTEM_TABLE = {
    0xE0: "clear_screen",
    0xEE: "return_from_sub",
}

# 8xy0..8xyE, keyed by the low nibble
ARITHMETIC_TABLE = {
    0x0: "copy_to_register",
    0x1: "or_with_register",
    0x2: "and_with_register",
    0x3: "xor_with_register",
    0x4: "add_registers",
    0x5: "sub",
    0x6: "shift_right",
    0x7: "sub_reverse",
    0xE: "shift_left",
}

# Ex9E / ExA1, keyed by the low byte
KEY_TABLE = {
    0x9E: "skip_if_pressed",
    0xA1: "skip_if_not_pressed",
}

# Fx07..Fx65, keyed by the low byte
MISC_TABLE = {
    0x07: "set_reg_to_dt",
    0x0A: "wait_for_input",
    0x15: "set_dt",
    0x18: "set_st",
    0x1E: "i_plus_reg",
    0x29: "set_i_digit_sprite",
    0x33: "bcd",
    0x55: "store_regs_through",
    0x65: "read_to_regs",
}

MNEMONICS = {
    "clear_screen": "CLS",
    "return_from_sub": "RET",
    "jump": "JP {nnn:#05x}",
    "call": "CALL {nnn:#05x}",
    "skip_if_reg_equals_byte": "SE V{x:X}, {kk:#04x}",
    "skip_if_reg_not_equals_byte": "SNE V{x:X}, {kk:#04x}",
    "skip_if_reg_equals_reg": "SE V{x:X}, V{y:X}",
    "set_register": "LD V{x:X}, {kk:#04x}",
    "add_to_register": "ADD V{x:X}, {kk:#04x}",
    "copy_to_register": "LD V{x:X}, V{y:X}",
    "or_with_register": "OR V{x:X}, V{y:X}",
    "and_with_register": "AND V{x:X}, V{y:X}",
    "xor_with_register": "XOR V{x:X}, V{y:X}",
    "add_registers": "ADD V{x:X}, V{y:X}",
    "sub": "SUB V{x:X}, V{y:X}",
    "shift_right": "SHR V{x:X}",
    "sub_reverse": "SUBN V{x:X}, V{y:X}",
    "shift_left": "SHL V{x:X}",
    "skip_if_reg_not_equals_reg": "SNE V{x:X}, V{y:X}",
    "set_i": "LD I, {nnn:#05x}",
    "jump_plus_v0": "JP V0, {nnn:#05x}",
    "random": "RND V{x:X}, {kk:#04x}",
    "update_display": "DRW V{x:X}, V{y:X}, {n}",
    "skip_if_pressed": "SKP V{x:X}",
    "skip_if_not_pressed": "SKNP V{x:X}",
    "set_reg_to_dt": "LD V{x:X}, DT",
    "wait_for_input": "LD V{x:X}, K",
    "set_dt": "LD DT, V{x:X}",
    "set_st": "LD ST, V{x:X}",
    "i_plus_reg": "ADD I, V{x:X}",
    "set_i_digit_sprite": "LD F, V{x:X}",
    "bcd": "LD B, V{x:X}",
    "store_regs_through": "LD [I], V{x:X}",
    "read_to_regs": "LD V{x:X}, [I]",
    UNKNOWN: "??? {opcode:04X}",
}


def _classify(opcode):
    prefix = opcode & 0xF000

    if prefix == 0x0000:
        # only the low byte is checked, 0nnn SYS calls fall through to unknown
        return SYSTEM_TABLE.get(opcode & 0xFF, UNKNOWN)
    if prefix == 0x8000:
        return ARITHMETIC_TABLE.get(opcode & 0xF, UNKNOWN)
    if prefix == 0xE000:
        return KEY_TABLE.get(opcode & 0xFF, UNKNOWN)
    if prefix == 0xF000:
        return MISC_TABLE.get(opcode & 0xFF, UNKNOWN)
    return OPCODE_TABLE[prefix]


def decode(opcode):
    """Split a 16-bit opcode into its handler name and operand fields."""
    opcode &= 0xFFFF
    return Instruction(
        name=_classify(opcode),
        opcode=opcode,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        kk=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )


def mnemonic(instruction):
    return MNEMONICS[instruction.name].format(**instruction._asdict())
