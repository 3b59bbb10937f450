from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from subway.db.models import Line
from subway.models.schemas import LineRequest, LineResponse, LineUpdateRequest, StationResponse
from subway.services.errors import DuplicateName, InvalidSection, LineNotFound
from subway.services.station_service import find_station


def _to_response(line: Line) -> LineResponse:
    return LineResponse(
        id=line.id,
        name=line.name,
        color=line.color,
        distance=line.distance,
        stations=[
            StationResponse.model_validate(line.up_station),
            StationResponse.model_validate(line.down_station),
        ],
    )


def _find_line(db: Session, line_id: int) -> Line:
    line = db.get(Line, line_id)
    if line is None:
        raise LineNotFound(f"Line {line_id} not found")
    return line


def _ensure_unique_name(db: Session, name: str, line_id: int | None = None) -> None:
    existing = db.execute(select(Line).where(Line.name == name)).scalar_one_or_none()
    if existing is not None and existing.id != line_id:
        raise DuplicateName(f"Line '{name}' already exists")


def create_line(db: Session, request: LineRequest) -> LineResponse:
    if request.up_station_id == request.down_station_id:
        raise InvalidSection("Up and down stations must differ")
    if request.distance <= 0:
        raise InvalidSection("Distance must be positive")

    up = find_station(db, request.up_station_id)
    down = find_station(db, request.down_station_id)
    _ensure_unique_name(db, request.name)

    line = Line(
        name=request.name,
        color=request.color,
        up_station=up,
        down_station=down,
        distance=request.distance,
    )
    db.add(line)
    db.commit()
    db.refresh(line)
    return _to_response(line)


def list_lines(db: Session) -> list[LineResponse]:
    rows = db.execute(select(Line).order_by(Line.id)).scalars().all()
    return [_to_response(line) for line in rows]


def get_line(db: Session, line_id: int) -> LineResponse:
    return _to_response(_find_line(db, line_id))


def update_line(db: Session, line_id: int, request: LineUpdateRequest) -> LineResponse:
    line = _find_line(db, line_id)
    _ensure_unique_name(db, request.name, line_id=line_id)

    line.name = request.name
    line.color = request.color
    db.commit()
    db.refresh(line)
    return _to_response(line)


def delete_line(db: Session, line_id: int) -> None:
    line = _find_line(db, line_id)
    db.delete(line)
    db.commit()
