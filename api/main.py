# api/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kushon import config
from kushon.sa.database import db
from api import dependencies
from api.routes import users, titles, publishers

logging.basicConfig(
    level=getattr(logging, config.log_level_name(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize database and verify SMTP on startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    db.init_db()

    email_service = dependencies.get_email_service()
    if email_service.test_connection():
        logger.info(f"SMTP connection verified ({email_service.settings.host}:{email_service.settings.port})")
    else:
        logger.warning("SMTP connection test failed, new-volume emails may not be delivered")
    yield

app = FastAPI(title="Kushon", lifespan=lifespan)

# CORS configuration
origins = [
    "http://localhost:5173",        # Local Vite dev server
    "http://localhost:4173",        # Local Vite preview
    "http://127.0.0.1:5173",
]
if config.frontend_url():
    origins.append(config.frontend_url())

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(titles.router)
app.include_router(publishers.router)

@app.get("/")
async def root():
    return {"message": "Kushon API"}
