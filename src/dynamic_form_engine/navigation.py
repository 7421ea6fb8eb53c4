from __future__ import annotations

from .models.state import Progress


class SectionNavigator:
    """Index arithmetic over an ordered sequence of sections.

    Moving forward is gated on validation by the caller; moving back never
    is. Both directions clamp to ``[0, section_count - 1]``.
    """

    def __init__(self, section_count: int) -> None:
        if section_count < 1:
            raise ValueError("a form needs at least one section")
        self._section_count = section_count

    @property
    def section_count(self) -> int:
        return self._section_count

    @property
    def last_index(self) -> int:
        return self._section_count - 1

    def next_index(self, current: int) -> int:
        return min(current + 1, self.last_index)

    def previous_index(self, current: int) -> int:
        return max(current - 1, 0)

    def is_terminal(self, current: int) -> bool:
        return current == self.last_index

    def progress(self, current: int) -> Progress:
        return Progress(
            section_number=current + 1,
            section_count=self._section_count,
            percent=round((current + 1) / self._section_count * 100, 2),
            is_first_section=current == 0,
            is_last_section=self.is_terminal(current),
        )


__all__ = ["SectionNavigator"]
