# CHIP-8 instruction handlers.
#
# Every handler takes the machine and a decoded Instruction, mutates the
# machine and returns how far the program counter moves afterwards:
# NEXT for ordinary instructions, SKIP when a skip condition holds, STAY
# when the handler has set pc itself (or for opcodes it doesn't know).

from .errors import StackOverflow
from .log import log

STAY = 0
NEXT = 2
SKIP = 4

FLAG = 0xF


# ---- Control flow ----

# 00EE - Return from subroutine, a no-op on an empty stack
def return_from_sub(chip, ins):
    if chip.sp > 0:
        chip.sp -= 1
        chip.pc = chip.stack[chip.sp]
        chip.stack[chip.sp] = 0
        log("Return to", hex(chip.pc))
    return STAY


# 1nnn - Jump to location nnn
def jump(chip, ins):
    chip.pc = ins.nnn
    return STAY


# 2nnn - Call subroutine at nnn
def call(chip, ins):
    if chip.sp >= len(chip.stack):
        raise StackOverflow(chip.pc)
    chip.stack[chip.sp] = chip.pc + 2
    chip.sp += 1
    chip.pc = ins.nnn
    log("Call subroutine at", hex(ins.nnn))
    return STAY


# Bnnn - Jump to location nnn + V0
def jump_plus_v0(chip, ins):
    chip.pc = ins.nnn + chip.V[0]
    return STAY


def skip_if(condition):
    return SKIP if condition else NEXT


# 3xkk - Skip next instruction if Vx == kk
def skip_if_reg_equals_byte(chip, ins):
    return skip_if(chip.V[ins.x] == ins.kk)


# 4xkk - Skip next instruction if Vx != kk
def skip_if_reg_not_equals_byte(chip, ins):
    return skip_if(chip.V[ins.x] != ins.kk)


# 5xy0 - Skip next instruction if Vx == Vy
def skip_if_reg_equals_reg(chip, ins):
    return skip_if(chip.V[ins.x] == chip.V[ins.y])


# 9xy0 - Skip next instruction if Vx != Vy
def skip_if_reg_not_equals_reg(chip, ins):
    return skip_if(chip.V[ins.x] != chip.V[ins.y])


# ---- Registers ----

# 6xkk - Set Vx = kk
def set_register(chip, ins):
    chip.V[ins.x] = ins.kk
    return NEXT


# 7xkk - Set Vx = Vx + kk, no carry flag
def add_to_register(chip, ins):
    chip.V[ins.x] = (chip.V[ins.x] + ins.kk) & 0xFF
    return NEXT


# 8xy0 - Set Vx = Vy
def copy_to_register(chip, ins):
    chip.V[ins.x] = chip.V[ins.y]
    return NEXT


# 8xy1 - Set Vx = Vx OR Vy
def or_with_register(chip, ins):
    chip.V[ins.x] |= chip.V[ins.y]
    return NEXT


# 8xy2 - Set Vx = Vx AND Vy
def and_with_register(chip, ins):
    chip.V[ins.x] &= chip.V[ins.y]
    return NEXT


# 8xy3 - Set Vx = Vx XOR Vy
def xor_with_register(chip, ins):
    chip.V[ins.x] ^= chip.V[ins.y]
    return NEXT


# 8xy4 - Set Vx = Vx + Vy, VF = carry
def add_registers(chip, ins):
    s = chip.V[ins.x] + chip.V[ins.y]
    if s > 0xFF:
        chip.V[FLAG] = 1
    elif chip.canonical_flags:
        chip.V[FLAG] = 0
    # the sum is written last so that x == F keeps the sum, not the flag
    chip.V[ins.x] = s & 0xFF
    return NEXT


# 8xy5 - Set Vx = Vx - Vy, VF = NOT borrow
def sub(chip, ins):
    vx, vy = chip.V[ins.x], chip.V[ins.y]
    chip.V[FLAG] = 1 if vx > vy else 0
    chip.V[ins.x] = (vx - vy) & 0xFF
    return NEXT


# 8xy6 - Set Vx = Vx SHR 1, VF = least significant bit
def shift_right(chip, ins):
    vx = chip.V[ins.x]
    chip.V[FLAG] = vx & 0x01
    chip.V[ins.x] = vx >> 1
    return NEXT


# 8xy7 - Set Vx = Vy - Vx, VF = NOT borrow
def sub_reverse(chip, ins):
    vx, vy = chip.V[ins.x], chip.V[ins.y]
    chip.V[FLAG] = 1 if vy > vx else 0
    chip.V[ins.x] = (vy - vx) & 0xFF
    return NEXT


# 8xyE - Set Vx = Vx SHL 1
def shift_left(chip, ins):
    vx = chip.V[ins.x]
    if chip.canonical_flags:
        chip.V[FLAG] = (vx >> 7) & 1
    else:
        # legacy flag: bit 3 as-is (0 or 8), not the bit shifted out
        chip.V[FLAG] = vx & 0x8
    chip.V[ins.x] = (vx << 1) & 0xFF
    return NEXT


# Cxkk - Set Vx = random byte AND kk
def random(chip, ins):
    chip.V[ins.x] = chip.rng.next_byte() & ins.kk
    return NEXT


# Annn - Set I = nnn
def set_i(chip, ins):
    chip.I = ins.nnn
    return NEXT


# Fx1E - Set I = I + Vx
def i_plus_reg(chip, ins):
    chip.I = (chip.I + chip.V[ins.x]) & 0xFFFF
    return NEXT


# Fx29 - Set I = location of the font sprite for digit Vx
def set_i_digit_sprite(chip, ins):
    chip.I = chip.V[ins.x] * 5
    return NEXT


# ---- Memory ----

# Fx33 - Store BCD of Vx at I, I+1, I+2
def bcd(chip, ins):
    value = chip.V[ins.x]
    chip.check_range(chip.I, 3)
    chip.write(chip.I, value // 100)
    chip.write(chip.I + 1, (value // 10) % 10)
    chip.write(chip.I + 2, value % 10)
    return NEXT


# Fx55 - Store V0 through Vx in memory starting at I
def store_regs_through(chip, ins):
    chip.check_range(chip.I, ins.x + 1)
    for r in range(ins.x + 1):
        chip.write(chip.I + r, chip.V[r])
    return NEXT


# Fx65 - Read V0 through Vx from memory starting at I
def read_to_regs(chip, ins):
    chip.check_range(chip.I, ins.x + 1)
    for r in range(ins.x + 1):
        chip.V[r] = chip.read(chip.I + r)
    return NEXT


# ---- Display ----

# 00E0 - Clear the display
def clear_screen(chip, ins):
    chip.display.clear()
    log("Clear the display (all pixels turned off)")
    return NEXT


# Dxyn - Draw n-byte sprite from I at (Vx, Vy), VF = collision
def update_display(chip, ins):
    chip.check_range(chip.I, ins.n)
    sprite = [chip.read(chip.I + offset) for offset in range(ins.n)]
    erased = chip.display.draw(chip.V[ins.x], chip.V[ins.y], sprite)
    chip.V[FLAG] = 1 if erased else 0
    return NEXT


# ---- Timers ----

# Fx07 - Set Vx = delay timer
def set_reg_to_dt(chip, ins):
    chip.V[ins.x] = chip.dt
    return NEXT


# Fx15 - Set delay timer = Vx
def set_dt(chip, ins):
    chip.dt = chip.V[ins.x]
    return NEXT


# Fx18 - Set sound timer = Vx
def set_st(chip, ins):
    chip.st = chip.V[ins.x]
    return NEXT


# ---- Input ----

# Ex9E - Skip next instruction if key Vx is pressed
def skip_if_pressed(chip, ins):
    return skip_if(chip.input[chip.V[ins.x] & 0xF])


# ExA1 - Skip next instruction if key Vx is not pressed
def skip_if_not_pressed(chip, ins):
    return skip_if(not chip.input[chip.V[ins.x] & 0xF])


# Fx0A - Wait for a key press and store it in Vx.
# Doesn't block: cycle() does nothing until update_input sees a new press.
def wait_for_input(chip, ins):
    chip.wait = True
    chip.store_input_at = ins.x
    log(f"Waiting for key press into V{ins.x:X}")
    return NEXT


def unknown(chip, ins):
    log("Unknown opcode: %04X" % ins.opcode)
    return STAY


HANDLERS = {
    "return_from_sub": return_from_sub,
    "jump": jump,
    "call": call,
    "jump_plus_v0": jump_plus_v0,
    "skip_if_reg_equals_byte": skip_if_reg_equals_byte,
    "skip_if_reg_not_equals_byte": skip_if_reg_not_equals_byte,
    "skip_if_reg_equals_reg": skip_if_reg_equals_reg,
    "skip_if_reg_not_equals_reg": skip_if_reg_not_equals_reg,
    "set_register": set_register,
    "add_to_register": add_to_register,
    "copy_to_register": copy_to_register,
    "or_with_register": or_with_register,
    "and_with_register": and_with_register,
    "xor_with_register": xor_with_register,
    "add_registers": add_registers,
    "sub": sub,
    "shift_right": shift_right,
    "sub_reverse": sub_reverse,
    "shift_left": shift_left,
    "random": random,
    "set_i": set_i,
    "i_plus_reg": i_plus_reg,
    "set_i_digit_sprite": set_i_digit_sprite,
    "bcd": bcd,
    "store_regs_through": store_regs_through,
    "read_to_regs": read_to_regs,
    "clear_screen": clear_screen,
    "update_display": update_display,
    "set_reg_to_dt": set_reg_to_dt,
    "set_dt": set_dt,
    "set_st": set_st,
    "skip_if_pressed": skip_if_pressed,
    "skip_if_not_pressed": skip_if_not_pressed,
    "wait_for_input": wait_for_input,
    "unknown": unknown,
}
