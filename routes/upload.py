# routes/upload.py
import logging

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from models.project import now_millis
from storage.blobs import put_blob

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Upload"])


@router.post("")
async def upload_api(
    request: Request,
    file: UploadFile | None = File(None),
    filename: str = Form(""),
):
    config = request.app.state.config
    if file is None or not file.filename:
        return JSONResponse({"error": "No file provided"}, status_code=400)

    # read one byte past the limit so oversize files are detected without buffering them all
    data = await file.read(config.max_upload_bytes + 1)
    if len(data) > config.max_upload_bytes:
        size_mb = len(data) / 1024 / 1024
        logger.warning("upload.too_large name=%s", file.filename)
        return JSONResponse(
            {"error": f"File too large. Maximum size is {config.max_upload_mb:g}MB. Your file is over {size_mb:.2f}MB."},
            status_code=413,
        )

    final_name = filename or f"{now_millis()}-{file.filename}"
    try:
        blob = put_blob(config.upload_dir, final_name, data, base_url=config.public_base_url)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except OSError:
        logger.exception("upload.failed name=%s", final_name)
        return JSONResponse({"error": "Failed to upload file"}, status_code=500)

    logger.info("upload.stored name=%s bytes=%d", blob["filename"], len(data))
    return blob


@router.get("")
async def upload_usage_api():
    return {"message": "Upload endpoint - use POST with multipart/form-data"}
