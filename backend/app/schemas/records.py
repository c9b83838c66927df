"""
Records stored inside a shipment's JSON columns.

Declared fields are validated; the stored copy is the mapping as it was sent,
keys and extras included.
"""
from pydantic import BaseModel, PrivateAttr, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional


class Record(BaseModel):
    _supplied: Optional[Dict[str, Any]] = PrivateAttr(default=None)

    class Config:
        extra = "allow"
        alias_generator = to_camel
        populate_by_name = True

    @model_validator(mode="wrap")
    @classmethod
    def _remember_supplied(cls, data: Any, handler):
        record = handler(data)
        if isinstance(data, dict):
            record._supplied = dict(data)
        return record

    def to_json(self) -> Dict[str, Any]:
        """The record as supplied, under the keys the caller used."""
        if self._supplied is not None:
            return dict(self._supplied)
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ClientSnapshot(Record):
    """Consignee or exporter data as entered on the shipment form."""
    id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    tin: Optional[str] = None
    brn: Optional[str] = None
    registered_name: Optional[str] = None
    contact_person: Optional[str] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None


class TimelineEvent(Record):
    status: str
    timestamp: str
    description: Optional[str] = None
    stage: Optional[str] = None


class DocumentEntry(Record):
    """One line of a shipment's document checklist."""
    name: str
    status: Optional[str] = None
    files: List[str] = []


class Note(Record):
    pass


class CargoItem(Record):
    pass


class StatementOfFactsEntry(Record):
    pass


def dump_records(records: Optional[List[Record]]) -> List[Dict[str, Any]]:
    return [record.to_json() for record in records or []]
