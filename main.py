import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from models.database import Database
from routers import auth_routes
from routers import user_routes
from routers import itinerary_routes
from routers import places_routes
from routers import weather_routes
from services.external_data import ExternalDataGateway
from utils.config import Settings, get_settings
from utils.errors import register_exception_handlers


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None,
               external_data: Optional[ExternalDataGateway] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    database = database or Database(settings.database_url)
    database.create_all()
    external_data = external_data or ExternalDataGateway(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        external_data.close()
        database.dispose()

    app = FastAPI(title="Travel Itinerary API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.external_data = external_data

    app.include_router(auth_routes.router)
    app.include_router(user_routes.router)
    app.include_router(itinerary_routes.router)
    app.include_router(places_routes.router)
    app.include_router(weather_routes.router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    def read_root():
        return {"message": "Travel Itinerary API is running!"}

    return app


app = create_app()
