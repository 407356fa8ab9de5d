# storage/blobs.py
import re
from pathlib import Path

UPLOAD_ROUTE = "/uploads"

_UNSAFE = re.compile(r"[^A-Za-z0-9._ ()-]+")


def safe_filename(name: str) -> str:
    base = Path(name.replace("\\", "/")).name
    cleaned = _UNSAFE.sub("-", base).strip(" .")
    if not cleaned:
        raise ValueError("Invalid filename")
    return cleaned


def put_blob(upload_dir: Path, filename: str, data: bytes, base_url: str = "") -> dict:
    """Store ``data`` publicly and return its URL. Existing names are overwritten."""
    name = safe_filename(filename)
    upload_dir.mkdir(parents=True, exist_ok=True)
    (upload_dir / name).write_bytes(data)
    return {"url": f"{base_url}{UPLOAD_ROUTE}/{name}", "filename": name}
