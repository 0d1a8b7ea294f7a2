import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file in project root
# backend/churchadmin/main.py -> backend -> project root
env_path = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(env_path)

from churchadmin.api.migration_routes import router as migration_router  # noqa: E402

app = FastAPI(title="Church Admin API", version="0.1.0")

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

LOCALHOST_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def cors_origins(environment: str, extra: str = "") -> list[str]:
    """Allowed origins: localhost outside production, plus FRONTEND_ORIGINS."""
    origins = [] if environment == "production" else list(LOCALHOST_ORIGINS)
    origins.extend(origin.strip() for origin in extra.split(",") if origin.strip())
    return origins


app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(ENVIRONMENT, os.environ.get("FRONTEND_ORIGINS", "")),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(migration_router)
