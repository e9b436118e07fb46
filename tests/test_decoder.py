"""
Decoder: opcode groups, operand fields and mnemonics.
"""

import pytest

from chip8vm import decode, mnemonic
from chip8vm.instructions import HANDLERS


def test_operand_fields():
    """x, y, n, kk and nnn come from the right nibbles."""
    ins = decode(0xD12F)
    assert ins.name == "update_display"
    assert (ins.x, ins.y, ins.n, ins.kk, ins.nnn) == (1, 2, 0xF, 0x2F, 0x12F)
    assert ins.opcode == 0xD12F


@pytest.mark.parametrize("opcode, name", [
    (0x00E0, "clear_screen"),
    (0x00EE, "return_from_sub"),
    (0x1200, "jump"),
    (0x2200, "call"),
    (0x3012, "skip_if_reg_equals_byte"),
    (0x4012, "skip_if_reg_not_equals_byte"),
    (0x5120, "skip_if_reg_equals_reg"),
    (0x6012, "set_register"),
    (0x7012, "add_to_register"),
    (0x8120, "copy_to_register"),
    (0x8121, "or_with_register"),
    (0x8122, "and_with_register"),
    (0x8123, "xor_with_register"),
    (0x8124, "add_registers"),
    (0x8125, "sub"),
    (0x8126, "shift_right"),
    (0x8127, "sub_reverse"),
    (0x812E, "shift_left"),
    (0x9120, "skip_if_reg_not_equals_reg"),
    (0xA123, "set_i"),
    (0xB123, "jump_plus_v0"),
    (0xC1FF, "random"),
    (0xD125, "update_display"),
    (0xE19E, "skip_if_pressed"),
    (0xE1A1, "skip_if_not_pressed"),
    (0xF107, "set_reg_to_dt"),
    (0xF10A, "wait_for_input"),
    (0xF115, "set_dt"),
    (0xF118, "set_st"),
    (0xF11E, "i_plus_reg"),
    (0xF129, "set_i_digit_sprite"),
    (0xF133, "bcd"),
    (0xF155, "store_regs_through"),
    (0xF165, "read_to_regs"),
])
def test_opcode_groups(opcode, name):
    """Each documented opcode decodes to its handler."""
    assert decode(opcode).name == name


@pytest.mark.parametrize("opcode", [0x0000, 0x0123, 0x8128, 0x812F, 0xE19F, 0xF100, 0xF166])
def test_unknown_opcodes(opcode):
    """Opcodes outside the table decode to unknown."""
    assert decode(opcode).name == "unknown"


def test_every_name_has_a_handler():
    """No opcode decodes to a name without a handler."""
    for opcode in range(0, 0x10000, 0x0101):
        assert decode(opcode).name in HANDLERS


def test_mnemonics():
    """Mnemonics follow Cowgod's notation."""
    assert mnemonic(decode(0x7005)) == "ADD V0, 0x05"
    assert mnemonic(decode(0xA2F0)) == "LD I, 0x2f0"
    assert mnemonic(decode(0xD125)) == "DRW V1, V2, 5"
    assert mnemonic(decode(0x00E0)) == "CLS"
    assert mnemonic(decode(0x0123)) == "??? 0123"
