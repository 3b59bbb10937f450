from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from subway.api.errors import to_http_exception
from subway.db.session import get_db
from subway.models.schemas import LineRequest, LineResponse, LinesResponse, LineUpdateRequest
from subway.observability.interceptor import logged
from subway.services import line_service
from subway.services.errors import SubwayError

router = APIRouter(tags=["lines"])


@router.post("/lines", status_code=201)
@logged
async def create_line(request: LineRequest, db: Session = Depends(get_db)) -> LineResponse | None:
    try:
        return line_service.create_line(db=db, request=request)
    except SubwayError as exc:
        raise to_http_exception(exc) from exc


@router.get("/lines")
@logged
async def get_lines(db: Session = Depends(get_db)) -> LinesResponse | None:
    return LinesResponse(lines=line_service.list_lines(db=db))


@router.get("/lines/{line_id}")
@logged
async def get_line(line_id: int, db: Session = Depends(get_db)) -> LineResponse | None:
    try:
        return line_service.get_line(db=db, line_id=line_id)
    except SubwayError as exc:
        raise to_http_exception(exc) from exc


@router.put("/lines/{line_id}")
@logged
async def update_line(line_id: int, request: LineUpdateRequest, db: Session = Depends(get_db)) -> LineResponse | None:
    try:
        return line_service.update_line(db=db, line_id=line_id, request=request)
    except SubwayError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/lines/{line_id}")
@logged
async def delete_line(line_id: int, db: Session = Depends(get_db)) -> dict[str, str] | None:
    try:
        line_service.delete_line(db=db, line_id=line_id)
    except SubwayError as exc:
        raise to_http_exception(exc) from exc
    return {"status": "deleted"}
