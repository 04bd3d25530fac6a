"""FastAPI application entrypoint."""

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables from .env file before settings are read
load_dotenv()

from app.adapters.inbound.http.routes import router  # noqa: E402

app = FastAPI(
    title="Lead-Gated Downloads",
    description="OTP-verified lead capture in front of downloadable tools and articles",
    version="0.1.0",
)

app.include_router(router)
