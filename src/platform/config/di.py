"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.seat_allocation.domain.fleet_packer import FleetPacker
from src.service.seat_allocation.domain.layout_generator import LayoutGenerator
from src.service.seat_allocation.domain.selection_controller import SelectionController


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Domain services (stateless, safe to share across requests)
    layout_generator = providers.Singleton(LayoutGenerator)
    fleet_packer = providers.Singleton(FleetPacker)
    selection_controller = providers.Singleton(SelectionController)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
