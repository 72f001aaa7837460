from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def area(self) -> int:
        return self.width * self.height

    def intersection(self, other: "Rect") -> "Rect":
        x0 = max(self.x, other.x)
        y0 = max(self.y, other.y)
        x1 = min(self.x + self.width, other.x + other.width)
        y1 = min(self.y + self.height, other.y + other.height)
        if x1 <= x0 or y1 <= y0:
            return Rect(x0, y0, 0, 0)
        return Rect(x0, y0, x1 - x0, y1 - y0)


@dataclass(frozen=True)
class Region:
    """A sub-rectangle of an image, in pixels.

    A view may show only part of its image; the region records where that
    part sits. The ``cell_*`` properties give the same rectangle in terminal
    cells, where one cell row covers two pixel rows.
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self):
        if min(self.x, self.y, self.width, self.height) < 0:
            raise ValueError(f"Region coordinates must be non-negative: {self}")

    @classmethod
    def from_rect(cls, rect: Rect) -> "Region":
        """The pixels covered by a rectangle of cells."""
        return cls(rect.x, rect.y * 2, rect.width, rect.height * 2)

    @property
    def cell_x(self) -> int:
        return self.x

    @property
    def cell_y(self) -> int:
        """Rounded up."""
        return -(-self.y // 2)

    @property
    def cell_width(self) -> int:
        return self.width

    @property
    def cell_height(self) -> int:
        """Rounded up."""
        return -(-self.height // 2)

    def clamped(self, image_width: int, image_height: int) -> "Region":
        """Fit the region inside an image of the given size.

        An origin beyond the image collapses to the empty region at (0, 0);
        otherwise width and height are truncated at the image edges. An
        origin exactly on the edge keeps its position with zero extent.
        """
        if self.x > image_width or self.y > image_height:
            return Region()
        width = min(self.width, image_width - self.x)
        height = min(self.height, image_height - self.y)
        return Region(self.x, self.y, width, height)
