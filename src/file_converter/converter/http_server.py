"""HTTP server for upload/download conversion."""

from __future__ import annotations

import argparse
import importlib
import logging
from types import ModuleType
from urllib.parse import quote
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from file_converter import formats, rules
from file_converter.adapters.io import BytesInputSource, MemoryOutputSink
from file_converter.application.use_cases import build_conversion_options, convert_source
from file_converter.converter.core import digest_bytes
from file_converter.errors import (
    ConversionError,
    ImageDecodeError,
    InvalidOptionsError,
    MissingFormatDescriptorError,
)
from file_converter.settings import get_settings

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from fastapi import FastAPI

fastapi: ModuleType | None = None
responses: ModuleType | None = None
try:
    fastapi = importlib.import_module("fastapi")
    responses = importlib.import_module("fastapi.responses")
except ModuleNotFoundError:  # pragma: no cover
    pass

try:
    import uvicorn as _uvicorn_imported

    _uvicorn_module: ModuleType | None = _uvicorn_imported
except ModuleNotFoundError:  # pragma: no cover
    _uvicorn_module = None

uvicorn: ModuleType | None = _uvicorn_module


def _require_http_runtime() -> None:
    """Ensure HTTP server runtime dependencies are available."""
    if fastapi is None or responses is None:
        raise RuntimeError(
            "fastapi is required to run file-converter-http. Install with extra: .[server]"
        )


class HealthResponse(BaseModel):
    """Health response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class FormatPayload(BaseModel):
    """One format registry entry."""

    model_config = ConfigDict(extra="forbid")

    extension: str
    mime_type: str
    display_name: str
    description: str


class TargetsResponse(BaseModel):
    """Allowed targets for a source MIME type."""

    model_config = ConfigDict(extra="forbid")

    source_mime: str | None
    targets: list[str]


def _ascii_filename(filename: str) -> str:
    """Return a header-safe ASCII stand-in for ``filename``."""
    cleaned = filename.encode("ascii", "ignore").decode("ascii")
    cleaned = "".join(ch for ch in cleaned if ch.isprintable() and ch not in '"\\')
    return cleaned.strip() or "converted"


def content_disposition(filename: str) -> str:
    """Build an RFC 6266 attachment header with a UTF-8 ``filename*``."""
    return (
        f'attachment; filename="{_ascii_filename(filename)}"; '
        f"filename*=UTF-8''{quote(filename, safe='')}"
    )


def _status_for(exc: ConversionError) -> int:
    """Map a conversion error onto an HTTP status code."""
    if isinstance(exc, (ImageDecodeError, InvalidOptionsError)):
        return 422
    if isinstance(exc, MissingFormatDescriptorError):
        return 415
    return 400


def create_app() -> FastAPI:
    """Create converter HTTP application."""
    _require_http_runtime()
    fastapi_module: Any = fastapi
    responses_module: Any = responses
    settings = get_settings()

    app = fastapi_module.FastAPI(
        title="File Format Converter",
        version="0.1.0",
        description="Upload a file and download it converted to another format.",
    )
    artifact_param = fastapi_module.File(...)
    target_param = fastapi_module.Form(...)
    source_mime_param = fastapi_module.Form(default=None)
    quality_param = fastapi_module.Form(default=None)
    width_param = fastapi_module.Form(default=None)
    height_param = fastapi_module.Form(default=None)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/readyz", response_model=HealthResponse)
    async def readyz() -> HealthResponse:
        return HealthResponse(status="ready")

    @app.get("/v1/formats", response_model=list[FormatPayload])
    async def list_formats() -> list[FormatPayload]:
        return [
            FormatPayload(
                extension=fmt.extension,
                mime_type=fmt.mime_type,
                display_name=fmt.display_name,
                description=fmt.description,
            )
            for fmt in formats.all_formats()
        ]

    @app.get("/v1/targets", response_model=TargetsResponse)
    async def list_targets(
        mime_type: str | None = None,
        filename: str | None = None,
    ) -> TargetsResponse:
        source_mime = mime_type or (formats.mime_type_for_path(filename) if filename else None)
        return TargetsResponse(
            source_mime=source_mime,
            targets=list(rules.get_available_targets(source_mime)),
        )

    @app.post("/v1/convert/upload")
    async def convert_upload(
        artifact: fastapi.UploadFile = artifact_param,
        target: str = target_param,
        source_mime: str | None = source_mime_param,
        quality: int | None = quality_param,
        width: int | None = width_param,
        height: int | None = height_param,
    ) -> responses.Response:
        """Convert uploaded file and return the converted bytes."""
        artifact_name = artifact.filename or ""
        payload = await artifact.read()
        if not payload:
            raise fastapi_module.HTTPException(
                status_code=fastapi_module.status.HTTP_400_BAD_REQUEST,
                detail="uploaded file is empty",
            )
        if len(payload) > settings.max_upload_bytes:
            raise fastapi_module.HTTPException(
                status_code=413,
                detail="uploaded file is too large",
            )
        sink = MemoryOutputSink()
        try:
            options = build_conversion_options(quality=quality, width=width, height=height)
            result = convert_source(
                source=BytesInputSource(name=artifact_name, data=payload),
                target=target,
                options=options,
                sink=sink,
                source_mime=source_mime,
            )
            headers = {
                "X-Input-SHA256": digest_bytes(payload),
                "X-Output-SHA256": digest_bytes(result.output_bytes),
                # Header values are latin-1 on the wire.
                "X-Output-Filename": quote(result.output_filename, safe=""),
                "X-Conversion-Status": result.status.value,
                "Content-Disposition": content_disposition(result.output_filename),
            }
            if result.warning:
                headers["X-Conversion-Warning"] = result.warning
            encoded = formats.by_extension(result.encoded_extension)
            return responses_module.Response(
                content=sink.delivered[result.output_filename],
                media_type=encoded.mime_type if encoded else "application/octet-stream",
                headers=headers,
            )
        except ConversionError as exc:
            raise fastapi_module.HTTPException(
                status_code=_status_for(exc),
                detail=str(exc),
            ) from exc
        except Exception as exc:  # pragma: no cover
            logger.exception("unexpected error during HTTP conversion upload")
            raise fastapi_module.HTTPException(
                status_code=fastapi_module.status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="internal server error",
            ) from exc

    return app


if TYPE_CHECKING:
    app: FastAPI | None

if fastapi is not None:
    app = create_app()
else:  # pragma: no cover
    app = None


def main() -> None:
    """Run converter HTTP entrypoint."""
    _require_http_runtime()
    if uvicorn is None:
        raise RuntimeError("uvicorn is required to run file-converter-http")
    settings = get_settings()
    parser = argparse.ArgumentParser(description="File format converter HTTP server.")
    parser.add_argument("--host", default=settings.http_host)
    parser.add_argument("--port", type=int, default=settings.http_port)
    args = parser.parse_args()
    uvicorn.run(
        "file_converter.converter.http_server:app",
        host=args.host,
        port=args.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
