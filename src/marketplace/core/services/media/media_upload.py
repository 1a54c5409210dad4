"""Media host upload adapter (Cloudinary upload API)."""

import base64
import hashlib
import time
from urllib.parse import urlparse

import httpx
from loguru import logger

from src.marketplace.core.exceptions import UpstreamFailure
from src.marketplace.runtime.config.config_data import MediaConfig


def is_data_uri(value: str) -> bool:
    return value.startswith("data:")


def to_data_uri(content: bytes, content_type: str | None) -> str:
    """Encode raw bytes as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type or 'application/octet-stream'};base64,{encoded}"


def public_id_from_url(secure_url: str) -> str | None:
    """Recover the asset public id from a delivery URL.

    ``.../image/upload/v1699/products/abc.png`` -> ``products/abc``
    """
    path = urlparse(secure_url).path
    _, sep, tail = path.partition("/upload/")
    if not sep or not tail:
        return None
    segments = tail.split("/")
    if segments[0].startswith("v") and segments[0][1:].isdigit():
        segments = segments[1:]
    if not segments:
        return None
    segments[-1] = segments[-1].rsplit(".", 1)[0]
    return "/".join(segments)


class MediaUploadService:
    """Forward image payloads to the media host and return durable URLs.

    Built once at startup from an explicit ``MediaConfig``. Requests are
    signed with the API secret; nothing is retried.
    """

    def __init__(
        self, config: MediaConfig, client: httpx.AsyncClient | None = None
    ) -> None:
        self._config = config
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)

    def _endpoint(self, action: str) -> str:
        base = self._config.upload_base_url.rstrip("/")
        return f"{base}/{self._config.cloud_name}/image/{action}"

    def sign(self, params: dict[str, str]) -> str:
        """SHA-1 signature over the sorted parameters followed by the API secret."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(
            (to_sign + self._config.api_secret).encode("utf-8")
        ).hexdigest()

    def _signed(self, params: dict[str, str]) -> dict[str, str]:
        params = {**params, "timestamp": str(int(time.time()))}
        return {
            **params,
            "api_key": self._config.api_key,
            "signature": self.sign(params),
        }

    async def upload(self, data_uri: str) -> str:
        """Upload a data URI into the configured folder and return its secure URL.

        Raises:
            UpstreamFailure: if the host is unreachable, rejects the upload,
                or answers without a secure URL
        """
        if not self._config.configured:
            raise UpstreamFailure("Media host is not configured")

        form = self._signed({"folder": self._config.folder})
        form["file"] = data_uri

        try:
            response = await self._client.post(self._endpoint("upload"), data=form)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Media upload rejected with status {}: {}",
                e.response.status_code,
                e.response.text[:200],
            )
            raise UpstreamFailure("Image upload failed") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Media upload failed: {}", e)
            raise UpstreamFailure("Image upload failed") from e

        secure_url = payload.get("secure_url")
        if not secure_url:
            logger.error("Media upload response carried no secure_url: {}", payload)
            raise UpstreamFailure("Image upload failed")

        logger.info("Uploaded image to {}", secure_url)
        return secure_url

    async def destroy(self, secure_url: str) -> bool:
        """Delete a previously uploaded asset. Returns whether the host confirmed it."""
        public_id = public_id_from_url(secure_url)
        if public_id is None:
            logger.warning("Cannot derive public id from {}", secure_url)
            return False

        try:
            response = await self._client.post(
                self._endpoint("destroy"), data=self._signed({"public_id": public_id})
            )
            response.raise_for_status()
            result = response.json().get("result")
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Media destroy failed for {}: {}", public_id, e)
            raise UpstreamFailure("Image cleanup failed") from e

        return result == "ok"

    async def aclose(self) -> None:
        await self._client.aclose()
