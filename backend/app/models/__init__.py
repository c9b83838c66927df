from .user import User
from .consignee import Consignee, ConsigneeDocument
from .exporter import Exporter
from .shipment import Shipment, ShipmentStage

__all__ = [
    "User",
    "Consignee",
    "ConsigneeDocument",
    "Exporter",
    "Shipment",
    "ShipmentStage",
]
