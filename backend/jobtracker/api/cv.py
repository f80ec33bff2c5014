from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse
from jobtracker.auth import get_optional_user
from jobtracker.config import get_settings
from jobtracker.models import User
from jobtracker.services.storage import CV_CONTENT_TYPE, StorageError, cv_object_key, save_object

router = APIRouter()
settings = get_settings()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/upload-cv")
async def upload_cv(
    file: Optional[UploadFile] = File(None),
    user: Optional[User] = Depends(get_optional_user),
):
    if user is None:
        return _error(status.HTTP_401_UNAUTHORIZED, "Not signed in")
    if file is None:
        return _error(status.HTTP_400_BAD_REQUEST, "No file uploaded")
    if file.content_type != CV_CONTENT_TYPE:
        return _error(status.HTTP_400_BAD_REQUEST, "Only PDF files are allowed")

    # Read one byte past the limit so oversize uploads are detected without buffering them whole
    data = await file.read(settings.max_cv_bytes + 1)
    if len(data) > settings.max_cv_bytes:
        limit_mb = settings.max_cv_bytes // (1024 * 1024)
        return _error(status.HTTP_400_BAD_REQUEST, f"File size exceeds {limit_mb}MB")

    try:
        url = await save_object(cv_object_key(user.id), data)
    except StorageError as e:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return {"url": url}
