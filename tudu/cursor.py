"""
Bounded selection cursors.

One cursor type backs every list-like surface: the task list, fuzzy
results, the calendar day grid and the time picker fields. The selection
is either None or an index strictly below the upper bound.
"""

from __future__ import annotations

from enum import Enum

from tudu.errors import OutOfBoundsError


class WrapPolicy(Enum):
    """What happens when stepping past either end."""

    WRAP = "wrap"
    CLAMP = "clamp"


class BoundedCursor:
    """Optional selected index within ``[0, upper_bound)``."""

    def __init__(
        self,
        upper_bound: int = 0,
        wrap: WrapPolicy = WrapPolicy.WRAP,
        selected: int | None = None,
    ) -> None:
        self._upper_bound = max(0, upper_bound)
        self.wrap = wrap
        self._selected: int | None = None
        if selected is not None:
            self.select(selected)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(upper_bound={self._upper_bound}, "
            f"wrap={self.wrap.value}, selected={self._selected})"
        )

    @property
    def selected(self) -> int | None:
        return self._selected

    @property
    def upper_bound(self) -> int:
        return self._upper_bound

    def is_empty(self) -> bool:
        return self._upper_bound == 0

    def select(self, index: int) -> None:
        """Select ``index``; raises OutOfBoundsError and leaves state alone if out of range."""
        if index < 0 or index >= self._upper_bound:
            raise OutOfBoundsError(index, self._upper_bound)
        self._selected = index

    def deselect(self) -> None:
        self._selected = None

    def first(self) -> None:
        """Select the first item if there is one."""
        if self._upper_bound:
            self._selected = 0

    def last(self) -> None:
        """Select the last item if there is one."""
        if self._upper_bound:
            self._selected = self._upper_bound - 1

    def next(self) -> None:
        if not self._upper_bound:
            self._selected = None
            return
        if self._selected is None:
            self._selected = 0
        elif self._selected >= self._upper_bound - 1:
            if self.wrap is WrapPolicy.WRAP:
                self._selected = 0
        else:
            self._selected += 1

    def prev(self) -> None:
        if not self._upper_bound:
            self._selected = None
            return
        if self._selected is None:
            self._selected = 0
        elif self._selected == 0:
            if self.wrap is WrapPolicy.WRAP:
                self._selected = self._upper_bound - 1
        else:
            self._selected -= 1

    def update_boundary(self, upper_bound: int) -> None:
        """Re-bound the cursor, clamping or clearing the selection."""
        self._upper_bound = max(0, upper_bound)
        if self._upper_bound == 0:
            self._selected = None
        elif self._selected is not None and self._selected >= self._upper_bound:
            self._selected = self._upper_bound - 1


class GridCursor(BoundedCursor):
    """A cursor laid out row-major over ``columns`` cells.

    ``offset`` empty cells precede index 0, as in a calendar month whose
    first day is not a Monday.
    """

    def __init__(
        self,
        upper_bound: int = 0,
        columns: int = 7,
        offset: int = 0,
        wrap: WrapPolicy = WrapPolicy.WRAP,
        selected: int | None = None,
    ) -> None:
        if columns < 1:
            raise ValueError("columns must be positive")
        super().__init__(upper_bound, wrap, selected)
        self.columns = columns
        self.offset = offset

    @property
    def row(self) -> int | None:
        if self._selected is None:
            return None
        return (self._selected + self.offset) // self.columns

    @property
    def column(self) -> int | None:
        if self._selected is None:
            return None
        return (self._selected + self.offset) % self.columns

    @property
    def rows(self) -> int:
        """Number of rows needed to lay out every cell."""
        cells = self._upper_bound + self.offset
        return -(-cells // self.columns)

    def left(self) -> None:
        self.prev()

    def right(self) -> None:
        self.next()

    def up(self) -> None:
        if self._selected is None or self._selected < self.columns:
            self.first()
        else:
            self._selected -= self.columns

    def down(self) -> None:
        if self._selected is None:
            self.first()
        elif self._selected + self.columns >= self._upper_bound:
            self.last()
        else:
            self._selected += self.columns
