# gitaworld/utils/storage.py
"""S3-compatible object storage for verse videos (direct browser uploads)."""
import logging
import os
import re
import uuid

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

VIDEO_PREFIX = "videos"
PRESIGN_EXPIRES = 300

_unsafe_part_re = re.compile(r"[^a-z0-9_-]+")


class StorageNotConfigured(RuntimeError):
    pass


def _settings() -> dict:
    return {
        "bucket": os.getenv("S3_BUCKET", ""),
        "region": os.getenv("S3_REGION", ""),
        "endpoint": os.getenv("S3_ENDPOINT", ""),  # e.g. https://us-southeast-1.linodeobjects.com
        "access_key": os.getenv("S3_ACCESS_KEY", ""),
        "secret_key": os.getenv("S3_SECRET_KEY", ""),
    }


def s3_client():
    s = _settings()
    if not all(s.values()):
        raise StorageNotConfigured(
            "S3 env is missing. Check S3_REGION, S3_ENDPOINT, S3_ACCESS_KEY, S3_SECRET_KEY, S3_BUCKET."
        )
    client = boto3.client(
        "s3",
        region_name=s["region"],
        endpoint_url=s["endpoint"],
        aws_access_key_id=s["access_key"],
        aws_secret_access_key=s["secret_key"],
        config=BotoConfig(s3={"addressing_style": "virtual"}),
    )
    return client, s["bucket"], s["endpoint"]


def public_url_for(key: str, bucket: str, endpoint: str) -> str:
    key = key.lstrip("/")
    assets_base = (os.getenv("ASSETS_BASE_URL") or "").rstrip("/")
    return f"{assets_base}/{key}" if assets_base else f"{endpoint.rstrip('/')}/{bucket}/{key}"


def video_url(path: str) -> str:
    """
    Playable URL for a verse's video_file_path. Full URLs pass through;
    storage keys go through public_url_for. "" when storage is not configured.
    """
    if not path:
        return ""
    p = path.strip()
    if p.startswith("http://") or p.startswith("https://"):
        return p
    s = _settings()
    if not (os.getenv("ASSETS_BASE_URL") or (s["endpoint"] and s["bucket"])):
        return ""
    return public_url_for(p, s["bucket"], s["endpoint"])


def video_key(chapter_number: int, language_code: str, verse_number: int, filename: str) -> str:
    """videos/<lang>/ch<NN>/v<NNN>-<random>.<ext>"""
    ext = ""
    if "." in (filename or ""):
        ext = "." + _unsafe_part_re.sub("", filename.rsplit(".", 1)[1].lower())
    lang = _unsafe_part_re.sub("", (language_code or "xx").lower()) or "xx"
    return f"{VIDEO_PREFIX}/{lang}/ch{chapter_number:02d}/v{verse_number:03d}-{uuid.uuid4().hex[:12]}{ext}"


def presign_put(key: str, content_type: str, client=None, expires: int = PRESIGN_EXPIRES) -> dict:
    """
    Return {'key', 'upload_url', 'public_url'} for a direct PUT upload.
    No ACL in the signature, so the browser PUT needs no extra headers.
    """
    if client is None:
        client, bucket, endpoint = s3_client()
    else:
        s = _settings()
        bucket, endpoint = s["bucket"], s["endpoint"]

    key = key.lstrip("/")
    try:
        upload_url = client.generate_presigned_url(
            ClientMethod="put_object",
            Params={
                "Bucket": bucket,
                "Key": key,
                "ContentType": content_type or "application/octet-stream",
            },
            ExpiresIn=expires,
        )
    except (BotoCoreError, ClientError) as e:
        logger.exception("Presign failed for %s", key)
        raise RuntimeError(f"Presign failed: {e}") from e
    return {"key": key, "upload_url": upload_url, "public_url": public_url_for(key, bucket, endpoint)}
