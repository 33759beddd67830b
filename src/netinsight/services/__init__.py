"""Service layer for composing resolutions."""

from .interfaces import InterfaceInspector, list_local_interfaces
from .network import NetworkService, create_network_service, get_network_service

__all__ = [
    "InterfaceInspector",
    "NetworkService",
    "create_network_service",
    "get_network_service",
    "list_local_interfaces",
]
