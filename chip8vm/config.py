# ---- Configuration ----
scale = 10
width, height = 64, 32
window_width, window_height = width * scale, height * scale

# cycles per second; every cycle also ticks the delay and sound timers
cpu_hz = 120

beep_frequency = 440
beep_duration = 0.2

USAGE = "Usage: chip8vm <rom-file> [cycles-per-second]"


def parse_rate(argv):
    # cycles per second from argv[2], None when it isn't a positive number
    if len(argv) < 3:
        return cpu_hz
    try:
        hz = float(argv[2])
    except ValueError:
        return None
    return hz if hz > 0 else None
