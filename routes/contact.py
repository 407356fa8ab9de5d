# routes/contact.py
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["Contact"])

REQUIRED_FIELDS = ("name", "email", "message")


def save_submission(inbox_dir: Path, entry: dict):
    """Append a submission to the day's JSONL inbox file."""
    inbox_dir.mkdir(parents=True, exist_ok=True)
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    file_path = inbox_dir / f"{date}.jsonl"
    with file_path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(entry, ensure_ascii=False) + "\n")


@router.post("")
async def contact_api(request: Request):
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict) or not all(str(body.get(k) or "").strip() for k in REQUIRED_FIELDS):
        return JSONResponse({"error": "Name, email, and message are required"}, status_code=400)

    entry = {
        "name": body["name"],
        "email": body["email"],
        "phone": body.get("phone") or None,
        "subject": body.get("subject") or "Contact Form Submission",
        "message": body["message"],
        "received_at": datetime.now(timezone.utc).isoformat(),
    }
    try:
        save_submission(request.app.state.config.inbox_dir, entry)
    except OSError:
        logger.exception("contact.save_failed")
        return JSONResponse({"error": "Failed to send message. Please try again later."}, status_code=500)

    logger.info("contact.received subject=%s", entry["subject"])
    return {"success": True}
