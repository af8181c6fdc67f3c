"""FastAPI application bootstrap and routing setup."""

from fastapi import FastAPI
from termcolor import colored
from fastapi.middleware.cors import CORSMiddleware
from studio.config.settings import get_settings
from studio.utility.logger import AppLogger
from studio.handlers.error_handler import MapExceptions as me
from studio.controller.image_controller import router as image_router

settings = get_settings()

AppLogger.init_from_settings(settings)

app = FastAPI(title="Image Studio Backend", version="1.0.0")
me.register_exception_handlers(app)
logger = AppLogger.get_logger(__name__)

logger.info(
    colored(
        f"OpenAI key {'configured' if settings.openai_configured else 'missing'}, "
        f"Gemini key {'configured' if settings.gemini_configured else 'missing'}",
        "yellow",
    )
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(image_router)


@app.get("/", tags=["Health"])
def root():
    """Health probe indicating API wiring and logger setup succeeded."""
    return {"status": "ok", "message": "Setup Successful"}


@app.get("/health", tags=["Health"])
def health_check():
    """Secondary health endpoint used by deployments and monitoring probes."""
    return {
        "status": "ok",
        "message": "FastAPI server running!",
        "openai_configured": settings.openai_configured,
        "gemini_configured": settings.gemini_configured,
    }
