from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from pathlib import Path

from familyhub import __version__
from familyhub import models  # Import all models to register them with Base
from familyhub.core import config
from familyhub.core.database import Base, SessionLocal, engine
from familyhub.exceptions import FamilyHubException
from familyhub.modules.achievements.service import AchievementService
from familyhub.modules.achievements.routes import router as achievements_router
from familyhub.modules.chores.routes import router as chores_router
from familyhub.modules.families.routes import router as families_router
from familyhub.modules.notifications.routes import router as notifications_router
from familyhub.modules.points.routes import router as points_router
from familyhub.modules.rewards.routes import router as rewards_router
from familyhub.services.scheduler_service import start_scheduler, stop_scheduler


def configure_logging() -> Path:
    """Log to a file in LOG_DIR (falling back to a local directory) and to the console"""
    log_dir = config.LOG_DIR
    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / config.LOG_FILE
    except PermissionError:
        # No permissions for /var/log
        log_dir = config.DEFAULT_LOG_DIRECTORY_DEV
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / config.LOG_FILE

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler()
        ]
    )
    return log_path


log_path = configure_logging()
logger = logging.getLogger("familyhub")

app = FastAPI(
    title="Family Hub API",
    description="Chores, points, streaks, achievements and rewards for families",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FamilyHubException)
async def familyhub_exception_handler(request: Request, exc: FamilyHubException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())},
    )


app.include_router(chores_router)
app.include_router(points_router)
app.include_router(achievements_router)
app.include_router(rewards_router)
app.include_router(notifications_router)
app.include_router(families_router)


@app.on_event("startup")
async def startup_event():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        AchievementService(db).seed_defaults()
    finally:
        db.close()
    logger.info(f"Family Hub API started. Logging to: {log_path}")
    start_scheduler()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Family Hub API")
    stop_scheduler()


# Health check (no auth required)
@app.get("/")
async def root():
    return {"message": "Family Hub API", "status": "active"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("familyhub.main:app", host="0.0.0.0", port=8000, reload=False)
