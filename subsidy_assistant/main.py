import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from subsidy_assistant.config import settings
from subsidy_assistant.routes import diagnosis_router, eligibility_router, subsidies_router
from subsidy_assistant.services.catalog_loader import load_catalog_file
from subsidy_assistant.services.mongo_service import mongo_service

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await mongo_service.connect()
    if settings.seed_catalog_on_startup:
        seeded = await mongo_service.seed_subsidies(load_catalog_file(settings.catalog_path))
        if seeded:
            logger.info(f"Seeded subsidy catalog with {seeded} programs")
    yield
    # Shutdown
    await mongo_service.close()


app = FastAPI(
    title=settings.app_name,
    description="Backend service for government subsidy eligibility matching",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(subsidies_router, prefix=settings.api_prefix)
app.include_router(eligibility_router, prefix=settings.api_prefix)
app.include_router(diagnosis_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} is running", "version": settings.app_version}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "subsidy-assistant-backend"}


@app.get("/health/database")
async def database_health_check():
    """MongoDB connectivity check"""
    connected = await mongo_service.health_check()
    return {
        "status": "healthy" if connected else "unhealthy",
        "database": "connected" if connected else "disconnected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("subsidy_assistant.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
