import logging

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from moovsafe.api import vehicles, inspections, maintenance
from moovsafe.core.config import settings
from moovsafe.core.database import check_database_health, get_db
from moovsafe.core.errors import register_error_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="MoovSafe API",
    description="Vehicle fleet management and inspection API",
    version="1.0.0",
    docs_url="/api-docs",
    redoc_url=None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(vehicles.router, prefix="/api/vehicles", tags=["Vehicles"])
app.include_router(inspections.router, prefix="/api/inspections", tags=["Inspections"])
app.include_router(maintenance.router, prefix="/api/maintenance", tags=["Maintenance"])


@app.get("/")
def root():
    return {"message": "MoovSafe API", "version": "1.0.0", "docs": "/api-docs"}


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    database = check_database_health(db)
    return {"status": database["status"], "database": database}


def run():
    """Console entry point: serve the API with uvicorn."""
    logger.info(f"Starting MoovSafe API on {settings.HOST}:{settings.PORT}")
    uvicorn.run("moovsafe.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
