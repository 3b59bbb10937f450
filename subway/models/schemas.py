from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StationRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class StationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class LineRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    color: str = Field(min_length=1, max_length=64)
    up_station_id: int
    down_station_id: int
    distance: int = Field(gt=0)


class LineUpdateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    color: str = Field(min_length=1, max_length=64)


class LineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str
    distance: int
    stations: list[StationResponse]


class StationsResponse(BaseModel):
    stations: list[StationResponse]


class LinesResponse(BaseModel):
    lines: list[LineResponse]
