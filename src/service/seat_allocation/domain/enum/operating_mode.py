"""Operating Mode Enum"""

from enum import StrEnum


class OperatingMode(StrEnum):
    """Who is interacting with the seat map"""

    ADMINISTRATOR = 'administrator'  # free assignment, rename, clear, drag-assign
    PASSENGER = 'passenger'  # capped self-service selection of free seats
    VIEWER = 'viewer'  # read-only trip details
