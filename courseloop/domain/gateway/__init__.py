"""Backend and collaborator contracts consumed by domain services."""

from courseloop.domain.gateway.auth import AuthGateway, OTPVerification, RemoteSession
from courseloop.domain.gateway.backend import BackendGateway
from courseloop.domain.gateway.college import CollegeLookup
from courseloop.domain.gateway.table import Filters, Order, Row, TableGateway, matches

__all__ = [
    "AuthGateway",
    "BackendGateway",
    "CollegeLookup",
    "Filters",
    "OTPVerification",
    "Order",
    "RemoteSession",
    "Row",
    "TableGateway",
    "matches",
]
