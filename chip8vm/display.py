import numpy as np

ROWS = 32
COLUMNS = 64
ROW_MASK = (1 << COLUMNS) - 1


class Framebuffer:
    """64x32 monochrome screen stored as 32 packed 64-bit rows.

    Bit 63 of a row is the leftmost screen column and bit 0 the rightmost,
    so screen column ``c`` lives at bit ``63 - c``. Renderers that walk the
    bits of a row draw bit ``x`` at column ``63 - x``.
    """

    def __init__(self):
        self.rows = [0] * ROWS

    def __getitem__(self, index):
        return self.rows[index]

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def clear(self):
        for y in range(ROWS):
            self.rows[y] = 0

    def draw(self, x, y, sprite):
        """
        XOR an 8-pixel-wide sprite onto the screen with its top-left corner
        at (x, y) and return True if any lit pixel was switched off.

        Rows wrap vertically. A sprite that runs past the right edge is
        split and its remaining columns continue at the left edge of the
        same row.
        """
        x %= COLUMNS
        erased = False

        for index, byte in enumerate(sprite):
            target = (y + index) % ROWS
            row = self.rows[target]

            if x + 8 > COLUMNS:
                overflow = (x + 8) - COLUMNS
                mask = ((byte << (COLUMNS - overflow)) & ROW_MASK) | (byte >> overflow)
            else:
                mask = byte << (56 - x)

            if not erased and row & mask:
                erased = True
            self.rows[target] = row ^ mask

        return erased

    def pixel(self, x, y):
        return (self.rows[y] >> (COLUMNS - 1 - x)) & 1

    def to_array(self):
        # (ROWS, COLUMNS) array of 0/1 with column 0 on the left
        bits = np.array(self.rows, dtype=np.uint64)
        shifts = np.arange(COLUMNS - 1, -1, -1, dtype=np.uint64)
        return ((bits[:, None] >> shifts) & np.uint64(1)).astype(np.uint8)

    def to_text(self, on="█", off=" "):
        lines = []
        for row in self.rows:
            lines.append("".join(on if (row >> (COLUMNS - 1 - c)) & 1 else off
                                 for c in range(COLUMNS)))
        return "\n".join(lines)
