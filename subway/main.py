from fastapi import FastAPI

from subway.api.lines import router as lines_router
from subway.api.stations import router as stations_router
from subway.config import get_settings
from subway.db.session import init_db
from subway.observability.logging import configure_logging


app = FastAPI(title="Subway", version="0.1.0")
app.include_router(stations_router)
app.include_router(lines_router)


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level)
    init_db()


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
