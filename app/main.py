"""
FastAPI application entry point.

ECA Benefits Tracker - eligibility, registry and dashboard API for the
Expanded Centenarians Act cash-gift programme.
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings, ensure_directories
from app.database import init_db
from app.routers import citizens, dashboard, eca, eligibility, geography
from app.schemas.common import HealthResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    **ECA Benefits Tracker API**

    Tracks senior citizens through the cash-gift workflow of the
    Expanded Centenarians Act.

    ## Key Features

    * **Eligibility**: Calendar year, qualifying age and cash amount for a birth date
    * **Registry**: Encode citizens and move them through the status workflow
    * **Dashboard**: Status, sex, age, birth-month, payment and geography tables
    * **Duplicate Check**: Fuzzy matching of newly encoded citizens
    * **Geography**: Region / province / LGU / barangay reference data
    * **ECA Applications**: Generate milestone cash-gift applications per year and track payment

    ## Caller identity

    Registry and dashboard endpoints require an `X-Staff-Id` header. PDO and
    LGU users only see citizens inside their assigned provinces and LGUs.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    ensure_directories()

    # Create tables if not exist
    try:
        init_db()
        logger.info(f"Database initialized at {settings.database_url}")
    except Exception as e:
        logger.warning(f"Database initialization warning: {e}")


# Include routers with prefixes
app.include_router(
    eligibility.router,
    prefix=f"{settings.API_V1_PREFIX}/eligibility",
    tags=["Eligibility"]
)
app.include_router(
    dashboard.router,
    prefix=f"{settings.API_V1_PREFIX}/dashboard",
    tags=["Dashboard"]
)
app.include_router(
    citizens.router,
    prefix=f"{settings.API_V1_PREFIX}/citizens",
    tags=["Citizens"]
)
app.include_router(
    geography.router,
    prefix=f"{settings.API_V1_PREFIX}/geography",
    tags=["Geography"]
)
app.include_router(
    eca.router,
    prefix=f"{settings.API_V1_PREFIX}/eca",
    tags=["ECA Applications"]
)


@app.get("/", tags=["Root"])
def root():
    """API root endpoint with basic information."""
    return {
        "message": "ECA Benefits Tracker API",
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "calendar_years": settings.DEFAULT_CALENDAR_YEARS,
        "endpoints": {
            "eligibility": f"{settings.API_V1_PREFIX}/eligibility",
            "dashboard": f"{settings.API_V1_PREFIX}/dashboard",
            "citizens": f"{settings.API_V1_PREFIX}/citizens",
            "geography": f"{settings.API_V1_PREFIX}/geography",
            "eca": f"{settings.API_V1_PREFIX}/eca"
        }
    }


@app.get(f"{settings.API_V1_PREFIX}/health", response_model=HealthResponse, tags=["Health"])
def health_check():
    """Health check endpoint."""
    from app.database import engine
    from sqlalchemy import text

    # Check database connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "version": settings.VERSION,
        "database": db_status
    }
