"""Static catch-all serving the bundled single-page frontend."""

from fastapi import APIRouter, status
from fastapi.responses import FileResponse, JSONResponse

from hub import config
from hub.schemas.common import ErrorResponse

router = APIRouter(include_in_schema=False)


def _not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(error="Not found", code="NOT_FOUND").model_dump()
    )


@router.get("/{full_path:path}")
async def serve_frontend(full_path: str):
    """
    Serve a file from the dist directory, or index.html for client-side routes.

    Unknown /api paths get a JSON 404 instead of the page.
    """
    if full_path == "api" or full_path.startswith("api/"):
        return _not_found()

    dist_dir = config.DIST_DIR.resolve()

    if full_path:
        candidate = (dist_dir / full_path).resolve()
        if dist_dir in candidate.parents and candidate.is_file():
            return FileResponse(candidate)

    index = dist_dir / "index.html"
    if index.is_file():
        return FileResponse(index)
    return _not_found()
