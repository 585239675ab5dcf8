from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from photofinder.config import WEB_DIR
from photofinder.exceptions import NotFoundError, RemoteApplicationError, RemoteFetchError
from photofinder.services.gallery_service import (
    ERROR_GALLERY_HTML,
    FAILED_GALLERY_HTML,
    render_gallery,
)
from photofinder.version import __version__


if TYPE_CHECKING:
    from photofinder.core.client import PhotoFinder


logger = logging.getLogger("PhotoFinder")

# Create FastAPI app
app = FastAPI(title="Photo Finder", version=__version__)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Global references (set by __main__.py)
finder: PhotoFinder | None = None


def set_client(client: PhotoFinder | None):
    """Called by __main__.py to set up the client reference"""
    global finder
    finder = client


def _get_client() -> PhotoFinder:
    if finder is None:
        raise HTTPException(status_code=503, detail="Photo Finder not initialized")
    return finder


# Pydantic models for API
class PhotoResponse(BaseModel):
    success: bool = True
    code: str
    downloadUrl: str | None


class GalleryPhoto(BaseModel):
    filename: str
    url: str
    viewUrl: str
    category: str | None = None


class GalleryResponse(BaseModel):
    success: bool = True
    photos: list[GalleryPhoto]


class StatusResponse(BaseModel):
    fetched_at: str | None
    fresh: bool
    photo_count: int


# ==================== Error handlers ====================


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"success": False, "message": str(exc)})


@app.exception_handler(RemoteFetchError)
async def remote_fetch_error_handler(request: Request, exc: RemoteFetchError):
    logger.error(f"Remote fetch failed for {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=502,
        content={"success": False, "message": exc.message, "status": exc.status},
    )


@app.exception_handler(RemoteApplicationError)
async def remote_application_error_handler(request: Request, exc: RemoteApplicationError):
    logger.error(f"Remote endpoint reported a failure for {request.url.path}: {exc.message}")
    return JSONResponse(status_code=502, content={"success": False, "message": exc.message})


# ==================== REST API Endpoints ====================


@app.get("/", response_class=HTMLResponse)
async def serve_index():
    """Serve the web page, and start warming the photo database"""
    if finder is not None:
        finder.preload()
    index_file = WEB_DIR / "index.html"
    if index_file.exists():
        return FileResponse(index_file)
    logger.warning(f"Web files not found: {index_file}")
    return HTMLResponse(
        content="<h1>Photo Finder</h1><p>Web interface files not found. Please check installation.</p>",
        status_code=500,
    )


@app.get("/api/photos/{code}", response_model=PhotoResponse)
async def get_photo(code: str):
    """Look up a photo by its code"""
    record = await _get_client().find_photo(code)
    if record is None:
        raise NotFoundError(code)
    return PhotoResponse(code=record.code, downloadUrl=record.download_url)


@app.get("/api/photos/{code}/download")
async def download_photo(code: str):
    """Redirect to the photo's download link"""
    record = await _get_client().find_photo(code)
    if record is None:
        raise NotFoundError(code)
    if not record.download_url:
        raise HTTPException(status_code=404, detail="Photo URL not found")
    return RedirectResponse(record.download_url)


@app.get("/api/gallery", response_model=GalleryResponse)
async def get_gallery():
    """List the gallery photos"""
    records = await _get_client().fetch_gallery()
    return GalleryResponse(photos=[GalleryPhoto(**record.to_json()) for record in records])


@app.get("/gallery/items", response_class=HTMLResponse)
async def get_gallery_items():
    """Gallery grid contents, rendered as HTML"""
    client = _get_client()
    try:
        records = await client.fetch_gallery()
    except RemoteApplicationError as exc:
        logger.error(f"Gallery load failed: {exc}")
        return HTMLResponse(content=FAILED_GALLERY_HTML, status_code=502)
    except RemoteFetchError as exc:
        logger.error(f"Gallery load error: {exc}")
        return HTMLResponse(content=ERROR_GALLERY_HTML, status_code=502)
    return HTMLResponse(content=render_gallery(records))


@app.get("/api/status", response_model=StatusResponse)
async def get_status():
    """Photo database cache status"""
    return StatusResponse(**_get_client().status())


@app.get("/api/version")
async def get_version():
    """Get current application version"""
    return {"version": __version__}


# Mount static files (CSS, JS, images)
static_dir = WEB_DIR / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


async def run_server(host: str = "0.0.0.0", port: int = 8080):
    """Run the web server until uvicorn is told to exit (SIGINT/SIGTERM)"""
    import uvicorn

    config = uvicorn.Config(app, host=host, port=port, log_level="info", access_log=False)
    server = uvicorn.Server(config)
    await server.serve()
