# Switchable log output for the emulator.
# The frontend flips logsOn with F1.

#make it true if you want the logs
logsOn = False


def log(*args):
    if logsOn:
        print(*args)


def toggle():
    global logsOn
    logsOn = not logsOn
    return logsOn
