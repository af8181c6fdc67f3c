"""Error handling helpers for mapping provider failures to API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from google.api_core.exceptions import (
    GoogleAPIError,
    DeadlineExceeded,
    ResourceExhausted,
    InvalidArgument,
    PermissionDenied,
)
from google.genai import errors as genai_errors
from openai import (
    APIError,
    APIStatusError,
    RateLimitError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    APIConnectionError,
)

from studio.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)


@dataclass
class ImageProviderError(Exception):
    """
    Base error for every failure surfaced to API clients.
    This is what FastAPI will ultimately handle and send as JSON.
    """

    provider: str
    message: str
    status_code: int = 500
    error_type: str = "provider_error"
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        """Format a readable representation for logging and responses."""
        return f"[{self.provider}] {self.error_type}: {self.message}"


class OpenAIImageError(ImageProviderError):
    """Errors originating from the OpenAI Images API (generate, edit, variation)."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "openai_error",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            provider="openai",
            message=message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class GeminiImageError(ImageProviderError):
    """Errors raised while asking Gemini to rewrite a prompt."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "gemini_error",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            provider="gemini",
            message=message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class ConfigurationError(ImageProviderError):
    """A required credential is missing or malformed. Never retried."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            provider="server",
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_type="configuration_error",
            details=details,
        )


class InvalidRequestError(ImageProviderError):
    """Request shape is valid JSON/form data but not acceptable for this endpoint."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            provider="server",
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_type="bad_request",
            details=details,
        )


def error_message(exc: BaseException) -> str:
    """Return the human-readable part of an exception for per-item reporting."""
    if isinstance(exc, ImageProviderError):
        return exc.message
    return str(exc) or exc.__class__.__name__


class MapExceptions:
    """Translate SDK exceptions into domain errors.

    Upstream rejections always surface as HTTP 500 carrying the upstream
    message; the classification lives in `error_type` and the upstream
    status code, when known, in `details["upstream_status"]`.
    """

    def _openai_details(self, exc: Exception) -> Dict[str, Any]:
        details: Dict[str, Any] = {"exception_type": exc.__class__.__name__}
        if isinstance(exc, APIStatusError):
            details["upstream_status"] = exc.status_code
        return details

    def map_openai_exception(
        self, exc: Exception, action: str = "generate image"
    ) -> OpenAIImageError:
        """
        Map low-level OpenAI exceptions to a clean domain error
        that the rest of the app (and FastAPI) understands.
        """
        if isinstance(exc, ImageProviderError):
            return exc

        logger.error(f"OpenAI error while trying to {action}", exc_info=exc)

        upstream = getattr(exc, "message", None) or str(exc)
        message = f"Failed to {action}: {upstream}"
        details = self._openai_details(exc)

        if isinstance(exc, RateLimitError):
            error_type = "rate_limit"
        elif isinstance(exc, APITimeoutError):
            error_type = "timeout"
        elif isinstance(exc, AuthenticationError):
            error_type = "auth_error"
        elif isinstance(exc, BadRequestError):
            error_type = "bad_request"
        elif isinstance(exc, APIConnectionError):
            error_type = "connection_error"
        elif isinstance(exc, APIError):
            error_type = "api_error"
        else:
            error_type = "unknown_error"

        return OpenAIImageError(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_type=error_type,
            details=details,
        )

    def map_gemini_exception(
        self, exc: Exception, action: str = "rewrite prompt"
    ) -> GeminiImageError:
        """
        Map low-level Gemini / Google exceptions to a clean domain error.
        """
        if isinstance(exc, ImageProviderError):
            return exc

        logger.error(f"Gemini error while trying to {action}", exc_info=exc)

        upstream = getattr(exc, "message", None) or str(exc)
        message = f"Gemini failed to {action}: {upstream}"
        details: Dict[str, Any] = {"exception_type": exc.__class__.__name__}

        if isinstance(exc, genai_errors.APIError):
            details["upstream_status"] = exc.code
            if exc.code == 429:
                error_type = "rate_limit"
            elif exc.code in (401, 403):
                error_type = "permission_denied"
            elif isinstance(exc, genai_errors.ClientError):
                error_type = "bad_request"
            else:
                error_type = "api_error"
        elif isinstance(exc, ResourceExhausted):
            error_type = "rate_limit"
        elif isinstance(exc, DeadlineExceeded):
            error_type = "timeout"
        elif isinstance(exc, InvalidArgument):
            error_type = "bad_request"
        elif isinstance(exc, PermissionDenied):
            error_type = "permission_denied"
        elif isinstance(exc, GoogleAPIError):
            error_type = "api_error"
        else:
            error_type = "unknown_error"

        return GeminiImageError(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_type=error_type,
            details=details,
        )

    @staticmethod
    def _format_validation_errors(exc: RequestValidationError) -> str:
        parts = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
            msg = err.get("msg", "Invalid value")
            parts.append(f"{loc}: {msg}" if loc else msg)
        return "; ".join(parts) or "Invalid request"

    @staticmethod
    def register_exception_handlers(app: FastAPI) -> None:
        """
        Call this once in the main FastAPI app to register handlers:

            app = FastAPI()
            MapExceptions.register_exception_handlers(app)
        """

        @app.exception_handler(ImageProviderError)
        async def image_provider_error_handler(
            request: Request, exc: ImageProviderError
        ) -> JSONResponse:
            logger.error(
                f"{exc} ({request.method} {request.url.path})",
                extra={"provider": exc.provider, "type": exc.error_type},
            )

            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "status": "error",
                    "provider": exc.provider,
                    "error_type": exc.error_type,
                    "message": exc.message,
                    "details": exc.details,
                },
            )

        @app.exception_handler(RequestValidationError)
        async def validation_error_handler(
            request: Request, exc: RequestValidationError
        ) -> JSONResponse:
            message = MapExceptions._format_validation_errors(exc)
            logger.warning(f"Rejected {request.url.path}: {message}")

            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={
                    "status": "error",
                    "provider": "server",
                    "error_type": "validation_error",
                    "message": message,
                    "details": None,
                },
            )

        @app.exception_handler(Exception)
        async def unhandled_error_handler(
            request: Request, exc: Exception
        ) -> JSONResponse:
            logger.error(
                f"Unhandled error on {request.url.path}: {exc}", exc_info=exc
            )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "status": "error",
                    "provider": "server",
                    "error_type": "unknown_error",
                    "message": str(exc) or "Unexpected server error.",
                    "details": None,
                },
            )
