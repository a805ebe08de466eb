from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import config
from src.routes.entitlements import router as entitlements_router
from src.routes.payments import router as payments_router
from src.routes.webhooks import router as webhooks_router
from src.utils.cron import lifespan

app = FastAPI(title="DisBot entitlements", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=([config.DASHBOARD_URL] if config.DASHBOARD_URL else [])
    + (["http://localhost:3000"] if config.IS_DEVELOPMENT else []),
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(webhooks_router)
app.include_router(entitlements_router)
app.include_router(payments_router)
