import logging
import time
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from fitclub.config import settings
from fitclub.core.errors import register_exception_handlers
from fitclub.core.rate_limit import limiter
from fitclub.database.supabase_client import init_supabase
from fitclub.modules.auth import routes as auth_routes
from fitclub.modules.users import routes as users_routes
from fitclub.modules.workouts import routes as workouts_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
# datefmt ends in Z, so timestamps are UTC
logging.Formatter.converter = time.gmtime
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
register_exception_handlers(app)


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"Referrer-Policy", b"no-referrer"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix=settings.api_prefix)
app.include_router(users_routes.router, prefix=settings.api_prefix)
app.include_router(workouts_routes.router, prefix=settings.api_prefix)


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    init_supabase(app)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to fitclub-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: the Supabase clients exist once startup has run."""
    return {"status": "ready" if hasattr(app.state, "supabase") else "starting"}
