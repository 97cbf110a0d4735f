"""
StockPro - Main Application
API de stock, vendas, compras, encomendas e dividas para pequenos negocios
"""
import logging
import traceback
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from stockpro.core import settings
from stockpro.core.errors import StockProError
from stockpro.core.error_notifier import notify_error_async
from stockpro.database import init_db
from stockpro.utils.storage import UPLOADS_URL_PREFIX, get_uploads_dir
from stockpro.api import (
    limiter,
    auth_router,
    users_router,
    products_router,
    sales_router,
    purchases_router,
    orders_router,
    debts_router,
    payments_router,
    notes_router,
    reports_router
)

# Rate limiting
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle do aplicativo"""
    # Startup
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # Inicializa banco de dados
    await init_db()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down...")


# Middleware de headers de seguranca
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adiciona headers de seguranca em todas as respostas"""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Cache control para endpoints de autenticacao
        if "/auth" in request.url.path:
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
            response.headers["Pragma"] = "no-cache"
        return response


# Cria aplicacao
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Gestao de stock, vendas, compras, encomendas e dividas",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

# Configura rate limiter na aplicacao
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Headers de seguranca (adicionar ANTES do CORS)
app.add_middleware(SecurityHeadersMiddleware)

# CORS (deve vir DEPOIS dos headers de seguranca)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# ERROS
# ============================================

@app.exception_handler(StockProError)
async def stockpro_error_handler(request: Request, exc: StockProError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors()), "error": "validation_error"}
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}")
    notify_error_async(
        error_type=type(exc).__name__,
        error_message=str(exc),
        error_details=traceback.format_exc(),
        endpoint=f"{request.method} {request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Erro interno", "error": "internal_error"}
    )


# Routers
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(products_router, prefix="/api")
app.include_router(sales_router, prefix="/api")
app.include_router(purchases_router, prefix="/api")
app.include_router(orders_router, prefix="/api")
app.include_router(debts_router, prefix="/api")
app.include_router(payments_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(reports_router, prefix="/api")

# Static files para uploads (fotografias das encomendas)
app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=get_uploads_dir()), name="uploads")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health():
    """Health check"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "stockpro.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
