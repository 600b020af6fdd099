# listing_editor/models/carousel.py

"""Sliding fixed-width window over the ordered image set."""

from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass
class CarouselWindow:
    """Offset into the image set; moves one position at a time.

    Only ``offset`` is stored. Everything else is derived from the
    current image count, so the window can never disagree with the set.
    """

    offset: int = 0
    page_size: int = 4

    def max_offset(self, count: int) -> int:
        """Highest valid page start for *count* images."""
        return max(count - self.page_size, 0)

    def clamp(self, count: int) -> None:
        """Pull the offset back inside ``[0, max_offset(count)]``."""
        self.offset = min(max(self.offset, 0), self.max_offset(count))

    def advance(self, count: int) -> bool:
        """Shift right by one image. Returns whether the offset moved."""
        if self.offset < count - self.page_size:
            self.offset += 1
            return True
        return False

    def retreat(self) -> bool:
        """Shift left by one image. Returns whether the offset moved."""
        if self.offset > 0:
            self.offset -= 1
            return True
        return False

    def show_retreat(self, count: int) -> bool:
        """Whether the retreat control should be rendered."""
        return count > self.page_size and self.offset > 0

    def show_advance(self, count: int) -> bool:
        """Whether the advance control should be rendered."""
        return self.offset < count - self.page_size

    def slice(self, items: list[T]) -> list[T]:
        """The visible items; shorter than a page at the tail."""
        return items[self.offset:self.offset + self.page_size]

    def reset(self) -> None:
        self.offset = 0
