from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from ytinfo.config import Settings
from ytinfo.cors import get_cors_headers
from ytinfo.extractor import YtDlpExtractor
from ytinfo.handler import VideoInfoHandler
from ytinfo.logging import setup_logging

# Every verb runs the pipeline; OPTIONS is answered as a preflight
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(settings: Optional[Settings] = None, extractor=None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, json_logs=not settings.is_development)

    if extractor is None:
        extractor = YtDlpExtractor(socket_timeout=settings.request_timeout)
    handler = VideoInfoHandler(extractor, settings)

    app = FastAPI(title="YouTube Video Info API")

    @app.get("/health")
    def health():
        return JSONResponse({"ok": True}, headers=get_cors_headers())

    @app.api_route("/api/ytdlp", methods=ROUTE_METHODS)
    async def ytdlp(request: Request, url: Optional[str] = None):
        result = await handler.handle(request.method, url)
        if result.body is None:
            return Response(status_code=result.status_code, headers=result.headers)
        return JSONResponse(
            result.body, status_code=result.status_code, headers=result.headers
        )

    return app


app = create_app()
