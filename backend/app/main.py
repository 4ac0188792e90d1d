import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Config
from .database import init_models
from .errors import register_exception_handlers
from .auth_routes import router as auth_router
from .campaign_routes import router as campaign_router
from .donation_routes import router as donation_router

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

init_models()

app = FastAPI(title="DonateHub API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    # credentials cannot be combined with a wildcard origin
    allow_credentials=Config.CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get('/api/health')
def health():
    return {"message": "DonateHub API is running!"}


app.include_router(auth_router)
app.include_router(campaign_router)
app.include_router(donation_router)
