from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from subway.db.models import Line, Station
from subway.models.schemas import StationResponse
from subway.services.errors import DuplicateName, StationNotFound, SubwayError


def _to_response(station: Station) -> StationResponse:
    return StationResponse.model_validate(station)


def find_station(db: Session, station_id: int) -> Station:
    station = db.get(Station, station_id)
    if station is None:
        raise StationNotFound(f"Station {station_id} not found")
    return station


def create_station(db: Session, name: str) -> StationResponse:
    name = name.strip()
    if not name:
        raise SubwayError("Station name is required")

    existing = db.execute(select(Station).where(Station.name == name)).scalar_one_or_none()
    if existing is not None:
        raise DuplicateName(f"Station '{name}' already exists")

    station = Station(name=name)
    db.add(station)
    db.commit()
    db.refresh(station)
    return _to_response(station)


def list_stations(db: Session) -> list[StationResponse]:
    rows = db.execute(select(Station).order_by(Station.id)).scalars().all()
    return [_to_response(s) for s in rows]


def get_station(db: Session, station_id: int) -> StationResponse:
    return _to_response(find_station(db, station_id))


def delete_station(db: Session, station_id: int) -> None:
    station = find_station(db, station_id)

    in_use = db.execute(
        select(Line.id).where(or_(Line.up_station_id == station_id, Line.down_station_id == station_id))
    ).first()
    if in_use is not None:
        raise SubwayError(f"Station {station_id} is a terminus of line {in_use[0]}")

    db.delete(station)
    db.commit()
