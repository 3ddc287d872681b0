"""System log entry model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SystemLogEntry(BaseModel):
    """One audit record. Immutable once written."""

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime
    action: str
    details: str
    flight_id: str | None = None
    passenger_id: str | None = None
