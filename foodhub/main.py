import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from foodhub.core.db import init_db, close_db
from foodhub.api.v1.orders import router as orders_router
from foodhub.api.v1.restaurants import router as restaurants_router
from foodhub.core.config import PROJECT_NAME, VERSION, LOG_LEVEL, LOG_FORMAT
from foodhub.core.exception_handlers import setup_exception_handlers
from foodhub.events.pubsub import PubSub

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
log = logging.getLogger("uvicorn")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db() # Connect to DB and generate schemas
    yield
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# One fan-out hub per application; handed to the services through Depends(get_pubsub)
app.state.pubsub = PubSub()

# Include routers for modular API structure
app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(restaurants_router, prefix="/api/v1/restaurants", tags=["Restaurants"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
