"""Seat Kind Enum"""

from enum import StrEnum


class SeatKind(StrEnum):
    """Kind of a rendered seat map cell"""

    SEAT = 'seat'
    AISLE = 'aisle'
    DRIVER = 'driver'
    GUIDE = 'guide'
    DOOR = 'door'
    RESTROOM = 'restroom'
