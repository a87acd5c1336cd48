import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from app.core.settings import Settings
from app.dependencies import get_app_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def resolve_static_file(static_dir: Path, path: str) -> Path | None:
    """Return the file under ``static_dir`` that ``path`` names, if any.

    Paths escaping ``static_dir`` (``..``, absolute paths, symlinks out) and
    paths the filesystem rejects (e.g. embedded NUL bytes) resolve to ``None``.
    """
    try:
        root = static_dir.resolve()
        candidate = (root / path.lstrip("/")).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_file():
            return None
    except (OSError, ValueError):
        logger.info("Ignoring unusable static path %r", path)
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(
    full_path: str,
    settings: Settings = Depends(get_app_settings),
) -> FileResponse:
    """Serve a static asset, or index.html for any other path (SPA routing)."""
    static_dir = Path(settings.static_dir)

    asset = resolve_static_file(static_dir, full_path) if full_path else None
    if asset is not None:
        return FileResponse(asset)

    index = resolve_static_file(static_dir, "index.html")
    if index is None:
        logger.warning("index.html not found in %s", static_dir.resolve())
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(index)
