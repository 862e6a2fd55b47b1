"""Turn a provider output URL into an inline data URI or a bare URL."""

import logging

from ..clients.media import MediaClient
from ..config import LARGE_OUTPUT_WARNING, MB, VIDEO_INLINE_LIMIT
from ..errors import ProviderError
from ..models.generation import MediaOutput
from ..utils import to_data_uri

logger = logging.getLogger(__name__)


class MediaNormalizer:
    """Fetch output media and decide between inline base64 and URL passthrough."""

    def __init__(self, client: MediaClient | None = None, video_inline_limit: int = VIDEO_INLINE_LIMIT):
        self.client = client or MediaClient()
        self.video_inline_limit = video_inline_limit

    def normalize(self, url: str, video_hint: bool = False) -> MediaOutput:
        """
        Fetch url and build a MediaOutput.

        Args:
            url: Definitive output URL from the provider
            video_hint: Provider response already marked the output as video

        Returns:
            MediaOutput; videos over the inline limit carry the URL as data
        """
        logger.info(f"Fetching output from: {url}")
        response = self.client.download(url)
        if not response.ok:
            raise ProviderError(f"Failed to fetch output: {response.status_code}")

        content_type = (response.headers.get("content-type") or "").split(";")[0].strip()
        if not content_type:
            content_type = "video/mp4" if video_hint else "image/png"
        is_video = content_type.startswith("video/") or video_hint

        data = response.content
        size = len(data)
        if size > LARGE_OUTPUT_WARNING:
            logger.warning(f"Large output file: {size / MB:.2f}MB")

        if is_video and size > self.video_inline_limit:
            logger.info(f"Video too large for base64 ({size / MB:.2f}MB), returning URL")
            return MediaOutput(type="video", data=url, url=url)

        return MediaOutput(
            type="video" if is_video else "image",
            data=to_data_uri(data, content_type),
            url=url,
        )
