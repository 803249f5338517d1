from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_allocation_metrics import metrics
from src.service.seat_allocation.app.dto import FleetPlan
from src.service.seat_allocation.domain.fleet_packer import FleetPacker
from src.service.seat_allocation.domain.seat_count_validator import (
    validate_fleet_size,
    validate_seat_count,
)


class PlanFleetUseCase:
    def __init__(self, fleet_packer: FleetPacker) -> None:
        self.fleet_packer = fleet_packer

    @classmethod
    @inject
    def depends(
        cls,
        fleet_packer: FleetPacker = Depends(Provide[Container.fleet_packer]),
    ) -> Self:
        return cls(fleet_packer=fleet_packer)

    @Logger.io(truncate_content=True)
    def plan(self, *, total_seats: Any) -> FleetPlan:
        """Pack a passenger count into vehicles and expand them into units"""
        total = validate_fleet_size(total_seats, max_seats=settings.MAX_FLEET_SEATS)
        entries = self.fleet_packer.pack(total)
        units = self.fleet_packer.flatten(entries) if entries else []
        metrics.record_fleet_plan(unit_count=len(units))

        return FleetPlan(
            total_seats=total,
            entries=entries,
            units=units,
            total_capacity=self.fleet_packer.total_capacity(entries),
        )

    @Logger.io
    def validate_seat_count(self, *, value: Any, min_booked: int = 0) -> int:
        return validate_seat_count(value, min_booked=min_booked)
