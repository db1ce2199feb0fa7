from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from config import Settings, get_settings
from data_store import InMemoryReservationStore, ReservationStore
from database import SqliteReservationStore
from exception_handlers import register_exception_handlers
from exceptions import DomainError, InternalError, NotFoundError
from intake import ReservationService
from logger_config import setup_logging
from models import Reservation, ReservationCreated, ReservationRequest
from notifications import ReservationNotifier


def build_store(settings: Settings) -> ReservationStore:
    if settings.STORE_BACKEND == "sqlite":
        logger.info(f"Using SQLite reservation store at {settings.DB_FILE}")
        return SqliteReservationStore(settings.DB_FILE)
    return InMemoryReservationStore()


# ---------------- Dependencies ----------------
def get_service(request: Request) -> ReservationService:
    return request.app.state.service


def get_notifier(request: Request) -> ReservationNotifier:
    return request.app.state.notifier


# ---------------- App ----------------
def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ReservationStore] = None,
    notifier: Optional[ReservationNotifier] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        base = f"http://localhost:{settings.PORT}"
        logger.info(f"{settings.RESTAURANT_NAME} backend server running on port {settings.PORT}")
        logger.info(f"Frontend: {base}")
        logger.info(f"Admin: {base}/admin")
        logger.info(f"API: {base}/api/reservations")
        yield

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.service = ReservationService(store if store is not None else build_store(settings))
    app.state.notifier = notifier or ReservationNotifier.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    frontend_dir = Path(settings.FRONTEND_DIR)
    if frontend_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(frontend_dir)), name="static")

    def _page(name: str) -> FileResponse:
        path = frontend_dir / name
        if not path.is_file():
            raise NotFoundError("Page not found")
        return FileResponse(str(path))

    # ---------------- Reservation API ----------------
    @app.post("/api/reservations", status_code=201, response_model=ReservationCreated)
    def create_reservation(
        data: ReservationRequest,
        background_tasks: BackgroundTasks,
        service: ReservationService = Depends(get_service),
        notifier: ReservationNotifier = Depends(get_notifier),
    ):
        try:
            reservation = service.submit(data)
        except DomainError:
            raise
        except Exception as e:
            raise InternalError() from e

        if notifier.enabled:
            background_tasks.add_task(notifier.notify, reservation)

        return ReservationCreated(reservationId=reservation.id, reservation=reservation)

    @app.get("/api/reservations", response_model=List[Reservation])
    def list_reservations(service: ReservationService = Depends(get_service)):
        return service.list()

    @app.get("/api/reservations/{reservation_id}", response_model=Reservation)
    def get_reservation(reservation_id: str, service: ReservationService = Depends(get_service)):
        try:
            rid = int(reservation_id)
        except ValueError:
            raise NotFoundError()
        return service.get(rid)

    # ---------------- Admin ----------------
    @app.get("/admin", response_class=HTMLResponse)
    def admin(service: ReservationService = Depends(get_service)):
        return service.render_admin_view(settings.RESTAURANT_NAME)

    # ---------------- Pages ----------------
    @app.get("/")
    def home():
        return _page("index.html")

    @app.get("/menu")
    def menu():
        return _page("menu.html")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = app.state.settings
    uvicorn.run(app, host=_settings.HOST, port=_settings.PORT)
