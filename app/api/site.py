from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, PlainTextResponse
from pathlib import Path

router = APIRouter()


def resolve_static_file(static_dir: Path, path: str):
    """Return the file under static_dir that path names, or None if it escapes, is hidden or is missing"""
    root = static_dir.resolve()
    candidate = (root / path.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    # Dotfiles and dot-directories are never served
    if any(part.startswith(".") for part in candidate.relative_to(root).parts):
        return None
    if candidate.is_dir():
        candidate = candidate / "index.html"
    return candidate if candidate.is_file() else None


@router.get("/{path:path}", include_in_schema=False)
async def serve_site(path: str, request: Request):
    """Serve a static asset, falling back to the landing page"""
    static_dir = Path(request.app.state.settings.static_dir)

    asset = resolve_static_file(static_dir, path)
    if asset is None:
        asset = resolve_static_file(static_dir, "index.html")
    if asset is None:
        return PlainTextResponse("Not found", status_code=404)
    return FileResponse(asset)
