"""Trip response domain models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StationResponse(BaseModel):
    """A station as exposed to clients."""

    model_config = ConfigDict(frozen=True)

    eva: str
    name: str


class SectionResponse(BaseModel):
    """One leg of a trip as exposed to clients."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    train_id: str
    train_type: str | None = None
    from_station: StationResponse = Field(alias="from")
    to_station: StationResponse = Field(alias="to")
    departure: datetime
    arrival: datetime | None = None


class TripResponse(BaseModel):
    """A complete trip as exposed to clients."""

    model_config = ConfigDict(frozen=True)

    departure_date_time: datetime | None = None
    arrival_date_time: datetime | None = None
    changes: int
    train: str  # distinct train categories joined with "+", e.g. "ICE+IC"
    sections: list[SectionResponse]
