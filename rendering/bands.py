from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Band:
    """Half-open range of image rows [start, stop) rendered as one unit of work."""
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start

    @property
    def rows(self) -> slice:
        return slice(self.start, self.stop)


def partition_rows(height: int, count: int) -> List[Band]:
    """
    Splits rows [0, height) into `count` contiguous bands of height // count rows.
    The last band ends at `height` and so absorbs the remainder; when height < count
    the leading bands are empty.
    """
    if count < 1:
        raise ValueError(f"band count must be at least 1, got {count}")
    if height < 0:
        raise ValueError(f"height must not be negative, got {height}")
    base = height // count
    bands: List[Band] = []
    for i in range(count):
        start = i * base
        stop = height if i == count - 1 else start + base
        bands.append(Band(start, stop))
    return bands
