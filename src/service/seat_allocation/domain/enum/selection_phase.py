"""Selection Phase Enum"""

from enum import StrEnum


class SelectionPhase(StrEnum):
    EMPTY = 'empty'
    SELECTING = 'selecting'
    EDITING_EXISTING = 'editing_existing'
