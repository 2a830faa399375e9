import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .routers import fires as fires_router
from .services.fire_queries import FireQueryService
from .services.firms_client import FirmsClient
from .services.geo_utils import FlareThresholds
from .services.geocoding import ZipGeocoder
from .services.result_cache import ResultCache

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# httpx logs full request URLs, which carry the FIRMS map key
logging.getLogger("httpx").setLevel(logging.WARNING)


def build_fire_service() -> FireQueryService:
    return FireQueryService(
        client=FirmsClient(),
        cache=ResultCache(
            ttl_seconds=config.FIRES_CACHE_TTL_SECONDS,
            max_entries=config.FIRES_CACHE_MAX_ENTRIES,
        ),
        flare_thresholds=FlareThresholds(
            max_frp=config.FLARE_MAX_FRP,
            max_brightness=config.FLARE_MAX_BRIGHTNESS,
            max_confidence=config.FLARE_MAX_CONFIDENCE,
        ),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="FireWatch Backend")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.fire_service = build_fire_service()
    app.state.geocoder = ZipGeocoder()

    app.include_router(fires_router.router, prefix="/fires", tags=["fires"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
