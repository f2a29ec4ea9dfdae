import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from .routers import analytics, data, filters, maps

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Global Insights API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(data.router)
    app.include_router(filters.router)
    app.include_router(analytics.router)
    app.include_router(maps.router)

    return app


app = create_app()


def main():
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Serving insights on http://%s:%s/data/", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
