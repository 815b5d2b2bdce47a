# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.database import init_db
from app.core.errors import register_error_handlers
from app.core.logging_config import setup_logging
from app.dashboard.routes import router as dashboard_router
from app.equipment.routes import router as equipment_router
from app.ticket.routes import router as ticket_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

init_db()

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],          # GET, POST, PUT, DELETE, OPTIONS...
    allow_headers=["*"],
)

register_error_handlers(app)

# Routers
app.include_router(ticket_router)
app.include_router(equipment_router)
app.include_router(dashboard_router)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
