from fastapi import HTTPException

from subway.services.errors import LineNotFound, StationNotFound, SubwayError


def to_http_exception(exc: SubwayError) -> HTTPException:
    if isinstance(exc, (StationNotFound, LineNotFound)):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))
