# cutview/navigator.py
# Bounds-checked cursor over the plates of the current solution.
#
# The navigator is the single source of truth for "which plate is shown";
# UI elements subscribe and mirror it. Boundary moves are silent no-ops,
# there is no wraparound.

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from .types import Plate

Listener = Callable[[int, int], None]


class PlateNavigator:
    def __init__(self, plates: Sequence[Plate] = ()) -> None:
        self._plates: Tuple[Plate, ...] = tuple(plates)
        self._index = 0
        self._listeners: List[Listener] = []

    # ----------------------------
    # State
    # ----------------------------

    @property
    def index(self) -> int:
        return self._index

    @property
    def count(self) -> int:
        return len(self._plates)

    def is_empty(self) -> bool:
        return not self._plates

    @property
    def current(self) -> Optional[Plate]:
        if self.is_empty():
            return None
        return self._plates[self._index]

    @property
    def can_prev(self) -> bool:
        return self._index > 0

    @property
    def can_next(self) -> bool:
        return self._index < self.count - 1

    # ----------------------------
    # Observers
    # ----------------------------

    def subscribe(self, fn: Listener) -> None:
        """fn(index, count) is called after every position change."""
        self._listeners.append(fn)

    def unsubscribe(self, fn: Listener) -> None:
        if fn in self._listeners:
            self._listeners.remove(fn)

    def _notify(self) -> None:
        for fn in list(self._listeners):
            fn(self._index, self.count)

    # ----------------------------
    # Transitions
    # ----------------------------

    def reset(self, plates: Sequence[Plate]) -> None:
        """New solution accepted: back to the first plate, unconditionally."""
        self._plates = tuple(plates)
        self._index = 0
        self._notify()

    def next(self) -> bool:
        if self.can_next:
            self._index += 1
            self._notify()
            return True
        return False

    def prev(self) -> bool:
        if not self.is_empty() and self.can_prev:
            self._index -= 1
            self._notify()
            return True
        return False

    def go_to(self, index: int) -> bool:
        if 0 <= index < self.count:
            self._index = index
            self._notify()
            return True
        return False

    # ----------------------------
    # Labels for the navigation bar
    # ----------------------------

    def plate_labels(self) -> List[str]:
        n = self.count
        return [f"Plate {i + 1}/{n}" for i in range(n)]

    def utilization_text(self) -> str:
        plate = self.current
        if plate is None:
            return "Utilization: --"
        return f"Utilization: {plate.utilization * 100:.1f}%"
