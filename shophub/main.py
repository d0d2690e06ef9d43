# shophub/main.py
from fastapi import FastAPI
import uvicorn

from shophub.api.routers import admin, health, store
from shophub.services.session import StorefrontSession
from shophub.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(session: StorefrontSession | None = None) -> FastAPI:
    app = FastAPI(
        title="ShopHub",
        version="1.0.0",
    )

    #jeden proces = jedna sesja, restart czysci koszyk
    app.state.session = session or StorefrontSession()
    logger.info(f"Storefront session bound to backend {app.state.session.api.base_url}")

    # Include routers
    app.include_router(health.router)
    app.include_router(store.router)
    app.include_router(admin.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
