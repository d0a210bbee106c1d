"""Dense bit-packed boolean grid.

Bits are stored eight to a byte in a flat ``uint8`` buffer keyed by the
linear index ``y * width + x``. A set bit means the cell is open.
"""

import numpy as np

OPEN_CHAR = "."
BLOCKED_CHAR = "@"


class BitPackedGrid:
    """Boolean ``width x height`` map backed by a packed bitset.

    Parameters
    ----------
    width : int
        Number of columns (x extent)
    height : int
        Number of rows (y extent)
    fill : bool, default=False
        Initial value of every bit

    Examples
    --------
    >>> grid = BitPackedGrid(3, 2)
    >>> grid.set_bit_value(1, 0, True)
    >>> grid.render_text()
    '@.@\\n@@@\\n'
    """

    def __init__(self, width: int, height: int, fill: bool = False):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        n_bytes = (width * height + 7) // 8
        self._bits = np.full(n_bytes, 0xFF if fill else 0x00, dtype=np.uint8)

    def _index(self, x: int, y: int) -> int:
        return y * self.width + x

    def get_bit_value(self, x: int, y: int) -> bool:
        """Return the bit at ``(x, y)``."""
        index = self._index(x, y)
        return bool((self._bits[index >> 3] >> (index & 7)) & 1)

    def set_bit_value(self, x: int, y: int, value: bool) -> None:
        """Set the bit at ``(x, y)``."""
        index = self._index(x, y)
        mask = np.uint8(1 << (index & 7))
        if value:
            self._bits[index >> 3] |= mask
        else:
            self._bits[index >> 3] &= ~mask

    def to_array(self) -> np.ndarray:
        """Unpack into a boolean array of shape ``(width, height)``."""
        flat = np.unpackbits(self._bits, bitorder='little')[:self.width * self.height]
        return flat.reshape(self.height, self.width).T.astype(bool)

    def set_from_array(self, mask: np.ndarray) -> None:
        """Overwrite every bit from a boolean array of shape ``(width, height)``."""
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != (self.width, self.height):
            raise ValueError(
                f"Mask must be ({self.width}, {self.height}), got {mask.shape}"
            )
        self._bits = np.packbits(mask.T.reshape(-1), bitorder='little')

    def set_area_from_array(self, x: int, y: int, mask: np.ndarray) -> None:
        """Overwrite the rectangle starting at ``(x, y)`` with ``mask``."""
        full = self.to_array()
        w, h = mask.shape
        full[x:x + w, y:y + h] = mask
        self.set_from_array(full)

    def count(self) -> int:
        """Number of set bits."""
        return int(self.to_array().sum())

    def render_text(self) -> str:
        """Render one line per row, ``.`` for set bits and ``@`` for cleared bits."""
        cells = self.to_array()
        lines = []
        for y in range(self.height):
            lines.append(''.join(OPEN_CHAR if cells[x, y] else BLOCKED_CHAR
                                 for x in range(self.width)))
        return ''.join(line + '\n' for line in lines)

    def copy(self) -> 'BitPackedGrid':
        clone = BitPackedGrid(self.width, self.height)
        clone._bits = self._bits.copy()
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitPackedGrid):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and np.array_equal(self.to_array(), other.to_array()))

    def __repr__(self) -> str:
        return f"BitPackedGrid(width={self.width}, height={self.height}, set={self.count()})"
