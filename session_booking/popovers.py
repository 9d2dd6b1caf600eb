"""
Shared outside-press dismissal for the booking form's overlay widgets.

One ``PopoverCoordinator`` holds the open/closed flag of every popover and
the region each one is bound to.  Every pointer press is fed to
``pointer_press``; each open popover whose region does not contain the
press target is closed.  Popovers are otherwise independent: opening one
never closes another.

In the Streamlit UI a "pointer target" is the key of the widget that
triggered the rerun, and a region is the set of widget keys rendered inside
(or toggling) that popover.
"""

import logging
from typing import Dict, Hashable, Iterable, List, Optional, Protocol


logger = logging.getLogger(__name__)

CALENDAR = "calendar"
START_TIME = "start_time"
END_TIME = "end_time"
STUDENT_SEARCH = "student_search"

FORM_POPOVERS = (CALENDAR, START_TIME, END_TIME, STUDENT_SEARCH)


class Region(Protocol):
    def contains(self, target: Hashable) -> bool:
        ...


class KeyRegion:
    """Region made of every widget key starting with one of ``prefixes``."""

    def __init__(self, *prefixes: str):
        if not prefixes:
            raise ValueError("KeyRegion needs at least one prefix")
        self.prefixes = tuple(prefixes)

    def contains(self, target: Hashable) -> bool:
        return isinstance(target, str) and target.startswith(self.prefixes)

    def __repr__(self) -> str:
        return f"KeyRegion{self.prefixes!r}"


class PopoverCoordinator:
    """
    Open flags and bound regions of a set of popovers.

    Examples:
        >>> popovers = PopoverCoordinator(["calendar"])
        >>> popovers.register("calendar", KeyRegion("calendar:"))
        >>> popovers.toggle("calendar")
        True
        >>> popovers.pointer_press("subject")
        ['calendar']
        >>> popovers.is_open("calendar")
        False
    """

    def __init__(self, names: Iterable[str] = FORM_POPOVERS):
        self._open: Dict[str, bool] = {name: False for name in names}
        self._regions: Dict[str, Region] = {}

    def _check(self, name: str) -> None:
        if name not in self._open:
            raise KeyError(f"Unknown popover: {name!r}")

    @property
    def names(self) -> List[str]:
        return list(self._open)

    def register(self, name: str, region: Region) -> None:
        self._check(name)
        self._regions[name] = region

    def unregister(self, name: str) -> None:
        self._regions.pop(name, None)

    def region(self, name: str) -> Optional[Region]:
        return self._regions.get(name)

    def is_open(self, name: str) -> bool:
        self._check(name)
        return self._open[name]

    def open(self, name: str) -> None:
        self._check(name)
        self._open[name] = True

    def close(self, name: str) -> None:
        self._check(name)
        self._open[name] = False

    def toggle(self, name: str) -> bool:
        """Flip ``name`` from its trigger control; returns the new flag."""
        self._check(name)
        self._open[name] = not self._open[name]
        return self._open[name]

    def open_names(self) -> List[str]:
        return [name for name, is_open in self._open.items() if is_open]

    def close_all(self) -> None:
        for name in self._open:
            self._open[name] = False

    def pointer_press(self, target: Hashable) -> List[str]:
        """
        Apply the outside-press rule for one press on ``target``.

        Popovers without a registered region are skipped.  Returns the
        names closed by this press.
        """
        closed = []
        for name, is_open in self._open.items():
            if not is_open:
                continue
            region = self._regions.get(name)
            if region is None:
                continue
            if not region.contains(target):
                self._open[name] = False
                closed.append(name)
        if closed:
            logger.debug("Press on %r closed popovers %s", target, closed)
        return closed

    def press_and_toggle(self, name: str, target: Hashable) -> bool:
        """
        Handle a press on ``name``'s own trigger: dismiss the other popovers
        the press falls outside of, then toggle ``name``.
        """
        self._check(name)
        region = self._regions.get(name)
        if region is not None and not region.contains(target):
            raise ValueError(f"Trigger {target!r} lies outside popover {name!r}")
        self.pointer_press(target)
        return self.toggle(name)
