from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from subway.api.errors import to_http_exception
from subway.db.session import get_db
from subway.models.schemas import StationRequest, StationResponse, StationsResponse
from subway.observability.interceptor import logged
from subway.services import station_service
from subway.services.errors import SubwayError

router = APIRouter(tags=["stations"])


@router.post("/stations", status_code=201)
@logged
def create_station(request: StationRequest, db: Session = Depends(get_db)) -> StationResponse | None:
    try:
        return station_service.create_station(db=db, name=request.name)
    except SubwayError as exc:
        raise to_http_exception(exc) from exc


@router.get("/stations", response_model=StationsResponse)
def get_stations(db: Session = Depends(get_db)) -> StationsResponse:
    return StationsResponse(stations=station_service.list_stations(db=db))


@router.get("/stations/{station_id}", response_model=StationResponse)
def get_station(station_id: int, db: Session = Depends(get_db)) -> StationResponse:
    try:
        return station_service.get_station(db=db, station_id=station_id)
    except SubwayError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/stations/{station_id}")
@logged
def delete_station(station_id: int, db: Session = Depends(get_db)) -> dict[str, str] | None:
    try:
        station_service.delete_station(db=db, station_id=station_id)
    except SubwayError as exc:
        raise to_http_exception(exc) from exc
    return {"status": "deleted"}
