"""
Override Store
Per-mark user overrides that survive between comparisons in one session.

Two kinds of override are kept, both keyed by bar mark:
- ignore flags: hide a mark from the mismatch report and highlighting
- section view flags: double the required quantity for a mark
  (only consulted under the double_required adjustment policy)
"""

import logging
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)


class OverrideStore:
    """Mutable per-session state for ignore and section view toggles."""

    def __init__(self):
        self._ignored: Dict[str, bool] = {}
        self._section_view: Dict[str, bool] = {}

    # ========================================
    # Ignore flags
    # ========================================

    def is_ignored(self, mark: str) -> bool:
        """Return True if the mark is ignored. Unseen marks are not."""
        return self._ignored.get(mark, False)

    def toggle_ignore(self, mark: str) -> bool:
        """
        Flip the ignore flag for a mark, creating it if absent.

        Returns:
            The new flag value
        """
        value = not self._ignored.get(mark, False)
        self._ignored[mark] = value
        logger.debug(f"Ignore {mark}: {value}")
        return value

    def set_ignored(self, mark: str, value: bool = True):
        self._ignored[mark] = bool(value)

    def ignored_marks(self) -> List[str]:
        """Marks currently ignored, sorted."""
        return sorted(mark for mark, value in self._ignored.items() if value)

    # ========================================
    # Section view flags
    # ========================================

    def section_view(self, mark: str, global_default: bool) -> bool:
        """
        Return the section view flag for a mark.

        Falls back to global_default for unseen marks without storing it.
        """
        return self._section_view.get(mark, global_default)

    def toggle_section_view(self, mark: str, global_default: bool = False) -> bool:
        """
        Flip the section view flag for a mark.

        An unseen mark starts from its effective value (global_default),
        so the first toggle stores the opposite of the default.

        Returns:
            The new flag value
        """
        value = not self.section_view(mark, global_default)
        self._section_view[mark] = value
        logger.debug(f"Section view {mark}: {value}")
        return value

    def ensure_defaults(self, marks: Iterable[str], global_default: bool) -> int:
        """
        Seed section view entries for marks not yet present.

        Existing entries keep their value. Safe to call on every comparison.

        Returns:
            Number of entries created
        """
        created = 0
        for mark in marks:
            if mark not in self._section_view:
                self._section_view[mark] = bool(global_default)
                created += 1
        if created:
            logger.debug(f"Seeded {created} section view entries (default={global_default})")
        return created

    # ========================================
    # Housekeeping
    # ========================================

    def clear(self):
        """Drop every override."""
        self._ignored.clear()
        self._section_view.clear()

    def __contains__(self, mark: str) -> bool:
        return mark in self._ignored or mark in self._section_view

    def __len__(self) -> int:
        return len(set(self._ignored) | set(self._section_view))

    def __repr__(self):
        return (f"OverrideStore(ignored={self.ignored_marks()}, "
                f"section_view={dict(sorted(self._section_view.items()))})")
