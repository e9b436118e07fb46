"""
Sprite drawing: XOR compositing, wrap-around and collision reporting.
"""

import pytest

from chip8vm import AddressOutOfRange, Framebuffer


def put_sprite(chip, address, data):
    chip.I = address
    chip.memory[address:address + len(data)] = bytes(data)


# =============================================================================
#  FRAMEBUFFER
# =============================================================================

def test_clear_screen(chip):
    """00E0 zeroes every row."""
    chip.display.rows[3] = 0xFFFF
    chip.execute(0x00E0)
    assert list(chip.display) == [0] * 32
    assert chip.pc == 0x202


def test_framebuffer_is_32_rows():
    """A new framebuffer has 32 blank rows."""
    fb = Framebuffer()
    assert len(fb) == 32
    assert fb[31] == 0


def test_pixel_reads_screen_coordinates():
    """Column 0 is the top bit of the row."""
    fb = Framebuffer()
    fb.rows[2] = 1 << 63 | 1
    assert fb.pixel(0, 2) == 1
    assert fb.pixel(63, 2) == 1
    assert fb.pixel(1, 2) == 0


def test_to_array_matches_pixels():
    """to_array puts screen column 0 on the left."""
    fb = Framebuffer()
    fb.draw(60, 5, [0xFF])
    pixels = fb.to_array()
    assert pixels.shape == (32, 64)
    assert pixels[5].tolist() == [1] * 4 + [0] * 56 + [1] * 4
    assert pixels.sum() == 8


def test_to_text():
    """to_text draws one line per row."""
    fb = Framebuffer()
    fb.draw(0, 0, [0xC0])
    lines = fb.to_text(on="#", off=".").splitlines()
    assert len(lines) == 32
    assert lines[0] == "##" + "." * 62


# =============================================================================
#  SPRITES
# =============================================================================

def test_display_digit(chip):
    """The 0 glyph at (0, 0) lands in the top byte of rows 0-4."""
    chip.I = 0
    chip.execute(0xD015)
    assert [chip.display[row] >> 56 for row in range(5)] == [0xF0, 0x90, 0x90, 0x90, 0xF0]
    assert chip.V[0xF] == 0


def test_update_display_at_offset(chip):
    """A sprite at (2, 2) shifts down and right."""
    put_sprite(chip, 2048, [0x0F, 0xF0, 0x0F, 0xF0])
    chip.V[0] = 2
    chip.execute(0xD004)
    assert chip.display[0] == 0
    assert chip.display[1] == 0
    assert chip.display[2] >> 54 == 0x0F
    assert chip.display[3] >> 54 == 0xF0
    assert chip.display[4] >> 54 == 0x0F
    assert chip.display[5] >> 54 == 0xF0
    assert chip.V[0xF] == 0


def test_update_display_wraps(chip):
    """At (60, 30) the sprite splits across the row edges and wraps to row 0."""
    put_sprite(chip, 2048, [0x0F, 0xF0, 0x0F, 0xF0])
    chip.V[0] = 60
    chip.V[1] = 30
    chip.execute(0xD014)
    assert chip.display[0] == 0xF000000000000000
    assert chip.display[1] == 0x000000000000000F
    assert chip.display[30] == 0xF000000000000000
    assert chip.display[31] == 0x000000000000000F
    assert chip.V[0xF] == 0


def test_update_display_splits_full_byte(chip):
    """A full byte at x=62 puts two pixels on the right and six on the left."""
    put_sprite(chip, 2048, [0xFF])
    chip.V[0] = 62
    chip.execute(0xD011)
    assert chip.display[0] == 0xFC00000000000003


def test_update_display_sets_erased(chip):
    """Turning off a lit pixel sets VF."""
    put_sprite(chip, 2048, [0x0F, 0xF0, 0x0F, 0xF0])
    chip.display.rows[0] = 0x0F00000000000000
    chip.execute(0xD004)
    assert chip.display[0] >> 56 == 0x00
    assert chip.display[1] >> 56 == 0xF0
    assert chip.display[2] >> 56 == 0x0F
    assert chip.display[3] >> 56 == 0xF0
    assert chip.V[0xF] == 1


def test_drawing_twice_erases(chip):
    """XOR is self-inverse: the second draw clears and reports a collision."""
    chip.V[0] = 10
    chip.V[1] = 7
    chip.I = 5 * 0xA
    chip.execute(0xD015)
    assert chip.V[0xF] == 0
    assert any(chip.display)

    chip.execute(0xD015)
    assert chip.V[0xF] == 1
    assert list(chip.display) == [0] * 32


def test_no_collision_after_clear(chip):
    """A draw right after 00E0 never collides."""
    chip.display.rows[:] = [(1 << 64) - 1] * 32
    chip.execute(0x00E0)
    chip.I = 5 * 8
    chip.execute(0xD015)
    assert chip.V[0xF] == 0


def test_collision_flag_cleared_on_clean_draw(chip):
    """A clean draw writes 0 into VF."""
    chip.V[0xF] = 1
    chip.I = 0
    chip.execute(0xD015)
    assert chip.V[0xF] == 0


def test_x_beyond_screen_wraps(chip):
    """Vx is taken modulo 64."""
    chip.V[0] = 64 + 2
    chip.I = 0
    chip.execute(0xD011)
    assert chip.display[0] >> 54 == 0xF0


def test_sprite_read_past_memory_raises(chip):
    """A sprite running past 0xFFF fails before drawing."""
    chip.I = 4094
    with pytest.raises(AddressOutOfRange):
        chip.execute(0xD004)
