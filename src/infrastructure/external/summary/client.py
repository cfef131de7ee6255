"""Link preview resolution through the summary service"""
import httpx

from src.application.interfaces.services import IImageProxy
from src.domain.entities import LinkPreview
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class SummaryLinkPreviewService:
    """
    Resolve link previews with the summary microservice.

    ``GET <service_url>?url=<url>`` answers with a JSON object carrying
    title, description and a thumbnail (or icon). Failures never reach the
    caller: the entry is simply rendered without a preview.
    """

    def __init__(self, http: httpx.AsyncClient, service_url: str, image_proxy: IImageProxy):
        self.http = http
        self.service_url = service_url
        self.image_proxy = image_proxy

    async def preview(self, url: str) -> LinkPreview | None:
        if not url:
            return None

        try:
            response = await self.http.get(self.service_url, params={"url": url})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Link preview failed for {url}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Link preview for {url} is not a JSON object")
            return None

        # the service echoes whatever the page declared; keep text fields only
        fields = {key: value for key, value in data.items() if isinstance(value, str) and value}
        thumbnail = fields.get("thumbnail") or fields.get("icon")
        return LinkPreview(
            url=url,
            thumbnail=self.image_proxy.rewrite(thumbnail) or None,
            title=fields.get("title"),
            description=fields.get("description"),
        )
