from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import health, portfolio
from .config import settings
from .errors import PortfolioError
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging()
    yield


# Create FastAPI app
app = FastAPI(
    title="Crypto Portfolio Tracker API",
    description="Multi-chain wallet balance aggregation backend",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Dashboard is served from a different origin
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(PortfolioError)
async def portfolio_error_handler(_request: Request, exc: PortfolioError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(portfolio.router, tags=["Portfolio"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": "Crypto Portfolio Tracker API",
        "version": "0.1.0",
        "description": "Multi-chain wallet balance aggregation backend",
        "chains": settings.portfolio_chains,
        "docs": "/docs",
        "health": "/healthz"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
