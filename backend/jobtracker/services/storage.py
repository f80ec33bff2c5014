"""
Filesystem object store for uploaded CVs.

Objects live under ``Settings.storage_dir`` and are served read-only from the
``/storage`` mount, so the object key doubles as the public path.
"""

import logging
from pathlib import Path
from starlette.concurrency import run_in_threadpool
from jobtracker.config import get_settings

logger = logging.getLogger(__name__)

CV_CONTENT_TYPE = "application/pdf"
STORAGE_MOUNT = "/storage"


class StorageError(Exception):
    """Raised when an object cannot be written."""


def cv_object_key(user_id: str) -> str:
    return f"cv/{user_id}.pdf"


def public_url(key: str) -> str:
    settings = get_settings()
    return f"{settings.public_base_url.rstrip('/')}{STORAGE_MOUNT}/{key}"


def _write_object(root: Path, key: str, data: bytes) -> Path:
    path = (root / key).resolve()
    if root.resolve() not in path.parents:
        raise StorageError(f"Invalid object key: {key}")
    path.parent.mkdir(parents=True, exist_ok=True)
    # Write then rename so readers never see a partial file
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_bytes(data)
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return path


async def save_object(key: str, data: bytes) -> str:
    """
    Store ``data`` under ``key``, replacing any existing object.

    Returns:
        Public URL of the stored object
    """
    root = Path(get_settings().storage_dir)
    try:
        path = await run_in_threadpool(_write_object, root, key, data)
    except OSError as e:
        logger.error(f"Failed to store {key}: {e}")
        raise StorageError(str(e)) from e
    logger.info(f"Stored {len(data)} bytes at {path}")
    return public_url(key)
