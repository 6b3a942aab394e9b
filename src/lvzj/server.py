"""FastAPI web service for LvZJ rendering.

Endpoints::

    GET  /                    Web UI (single-page HTML).
    GET  /health              Health check.
    GET  /styles              List available style presets.
    GET  /styles/{preset}.css Stylesheet of one preset.
    GET  /reference           Language reference with rendered examples.
    POST /render              Send LvZJ text, receive HTML.
    POST /render/file         Upload a text file, receive a standalone .html page.
    POST /parse               Send LvZJ text, receive the node tree as JSON.
    POST /preview             Send LvZJ text, receive a plain-text preview.

Run::

    uvicorn lvzj.server:app --host 0.0.0.0 --port 8000

The parser limits are read from the file named by ``LVZJ_CONFIG``, else
from ``./lvzj.toml``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from lvzj import __version__
from lvzj.config import load_config
from lvzj.converter import Converter
from lvzj.errors import InputTooComplex, InputTooLarge
from lvzj.reference import REFERENCE
from lvzj.style_manager import StyleManager

logger = logging.getLogger(__name__)

config = load_config(os.environ.get("LVZJ_CONFIG"))

app = FastAPI(
    title="lvzj",
    description="LvZJ markup rendering service",
    version=__version__,
)

_STATIC_DIR = Path(__file__).parent / "static"
app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")

try:
    _INDEX_HTML = (_STATIC_DIR / "index.html").read_text(encoding="utf-8")
except FileNotFoundError:
    _INDEX_HTML = "<html><body><h1>lvzj</h1><p>Web UI not found.</p></body></html>"


def _content_disposition(filename: str) -> str:
    """Build Content-Disposition header, RFC 5987 for non-ASCII names."""
    try:
        filename.encode("ascii")
        return f'attachment; filename="{filename}"'
    except UnicodeEncodeError:
        encoded = quote(filename)
        return f"attachment; filename*=UTF-8''{encoded}"


def _converter(style: str) -> Converter:
    try:
        return Converter(style_preset=style, options=config.parser)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

@app.exception_handler(InputTooLarge)
async def _too_large(request: Request, exc: InputTooLarge) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=413, content={"detail": str(exc)})


@app.exception_handler(InputTooComplex)
async def _too_complex(request: Request, exc: InputTooComplex) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the web UI."""
    return HTMLResponse(content=_INDEX_HTML)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/styles")
async def list_styles() -> dict[str, list[str]]:
    """List available style presets."""
    return {"presets": StyleManager.PRESETS}


@app.get("/styles/{preset}.css")
async def stylesheet(preset: str) -> Response:
    """Return the stylesheet of *preset*."""
    try:
        css = StyleManager(preset).stylesheet()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return Response(content=css, media_type="text/css")


@app.get("/reference")
async def reference(style: str = "default") -> dict[str, Any]:
    """Return the language reference, each example with its rendered HTML."""
    converter = _converter(style)
    return {
        "categories": [
            {
                "name": category.name,
                "items": [
                    {
                        "code": item.code,
                        "description": item.description,
                        "html": converter.convert_text(item.code),
                    }
                    for item in category.items
                ],
            }
            for category in REFERENCE
        ]
    }


@app.post("/render", response_class=HTMLResponse)
async def render(
    text: str = Form(""),
    style: str = Form("default"),
    standalone: bool = Form(False),
) -> HTMLResponse:
    """Send LvZJ text and receive HTML.

    - **text**: LvZJ source text
    - **style**: Style preset name (default, dark, print, minimal)
    - **standalone**: Return a complete page instead of a fragment
    """
    converter = _converter(style)
    return HTMLResponse(content=converter.convert_text(text, standalone=standalone))


@app.post("/render/file")
async def render_file(
    file: UploadFile = File(...),
    style: str = Form("default"),
    encoding: str = Form("utf-8"),
) -> Response:
    """Upload an LvZJ text file and receive a standalone HTML page back.

    - **file**: LvZJ text file
    - **style**: Style preset name
    - **encoding**: Source file encoding
    """
    raw = await file.read()
    try:
        text = raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise HTTPException(status_code=400, detail=f"cannot decode upload: {exc}") from exc

    stem = (file.filename or "document.txt").rsplit(".", 1)[0]
    html = _converter(style).convert_text(text, standalone=True, title=stem)

    return Response(
        content=html,
        media_type="text/html; charset=utf-8",
        headers={"Content-Disposition": _content_disposition(stem + ".html")},
    )


@app.post("/parse")
async def parse(text: str = Form("")) -> dict[str, Any]:
    """Send LvZJ text and receive the parsed node tree."""
    return _converter("default").to_dict(text)


@app.post("/preview")
async def preview(text: str = Form("")) -> dict[str, str]:
    """Send LvZJ text and receive a plain-text preview."""
    return {"text": _converter("default").to_plain_text(text)}
