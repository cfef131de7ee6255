"""Concrnt REST API client"""
import asyncio
import json
from datetime import UTC, datetime
from typing import Any

import httpx

from src.application.interfaces.upstream import (MediaItem, ProfileOverride,
                                                 UpstreamMessage,
                                                 UpstreamProfile,
                                                 UpstreamTimeline)
from src.domain.entities import MessageRef
from src.domain.value_objects import TimelineRef
from src.infrastructure.exceptions import (UpstreamException,
                                           UpstreamNotFoundError,
                                           UpstreamResponseError)
from src.infrastructure.external.concrnt import schemas
from src.infrastructure.external.concrnt.signer import SubkeySigner
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def parse_timestamp(value: str | None) -> datetime:
    """Parse an RFC 3339 timestamp as returned by Concrnt servers"""
    if not value:
        raise ValueError("missing timestamp")
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def parse_document(raw: Any) -> dict[str, Any]:
    """Documents travel as JSON strings inside the resource envelope"""
    if isinstance(raw, dict):
        return raw
    if not raw:
        return {}
    document = json.loads(raw)
    if not isinstance(document, dict):
        raise ValueError("document is not a JSON object")
    return document


class ConcrntClient:
    """
    Concrnt client using the public REST API.

    Reads go to the server that owns the resource: timelines to their own
    host, messages and profiles to their author's home domain. Writes are
    signed with the configured subkey and committed to the home server.
    """

    API_PREFIX = "/api/v1"

    def __init__(self, http: httpx.AsyncClient, signer: SubkeySigner, scheme: str = "https"):
        self.http = http
        self.signer = signer
        self.scheme = scheme

    @property
    def host(self) -> str:
        return self.signer.subkey.domain

    def _url(self, host: str, path: str) -> str:
        return f"{self.scheme}://{host}{self.API_PREFIX}{path}"

    async def _get_content(self, url: str, params: dict[str, str] | None = None) -> Any:
        """GET an API resource and unwrap its content, None on 404"""
        try:
            response = await self.http.get(url, params=params)
        except httpx.HTTPError as e:
            raise UpstreamException(url, str(e) or type(e).__name__) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        if response.is_error:
            raise UpstreamException(url, f"HTTP {response.status_code}", response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamResponseError(url, "response is not JSON") from e
        if not isinstance(payload, dict):
            raise UpstreamResponseError(url, "response is not a JSON object")
        return payload.get("content")

    async def connect(self, attempts: int = 1, retry_delay: float = 1.0) -> None:
        """
        Verify the credential's entity is reachable on its home server.

        Transient failures are retried up to ``attempts`` times in total,
        waiting ``retry_delay`` seconds before the first retry and doubling
        after each one. An unknown entity is not retried.

        Raises:
            UpstreamNotFoundError: If the home server does not know the entity
            UpstreamException: If the home server cannot be reached
        """
        attempts = max(attempts, 1)
        delay = retry_delay
        for attempt in range(1, attempts + 1):
            try:
                domain = await self._entity_domain(self.signer.ccid, host=self.host)
                break
            except UpstreamNotFoundError:
                raise
            except UpstreamException as e:
                if attempt == attempts:
                    raise
                logger.warning(
                    f"Connecting to {self.host} failed, retrying in {delay:g}s "
                    f"(attempt {attempt}/{attempts}): {e.message}"
                )
                await asyncio.sleep(delay)
                delay *= 2
        logger.info(f"Connected to Concrnt as {self.signer.ccid} (home: {domain})")

    async def _entity_domain(self, ccid: str, host: str | None = None) -> str:
        url = self._url(host or self.host, f"/entity/{ccid}")
        content = await self._get_content(url)
        if not content or not content.get("domain"):
            raise UpstreamNotFoundError(url)
        return content["domain"]

    async def get_timeline(self, ref: TimelineRef) -> UpstreamTimeline | None:
        content = await self._get_content(self._url(ref.host, f"/timeline/{ref.id}"))
        if not content:
            return None

        document = parse_document(content.get("document"))
        body = document.get("body") or {}
        return UpstreamTimeline(
            id=content.get("id") or ref.id,
            host=ref.host,
            name=body.get("name") or ref.id,
            schema=content.get("schema") or document.get("schema"),
        )

    async def get_recent_messages(self, refs: list[TimelineRef]) -> list[MessageRef]:
        if not refs:
            return []
        content = await self._get_content(
            self._url(self.host, "/timelines/recent"),
            params={"timelines": ",".join(ref.fqid for ref in refs)},
        )

        message_refs: list[MessageRef] = []
        for item in content or []:
            try:
                message_refs.append(
                    MessageRef(
                        resource_id=item["resourceID"],
                        owner=item["owner"],
                        cdate=parse_timestamp(item.get("cdate")),
                        timeline_id=item.get("timelineID"),
                        author=item.get("author"),
                        schema=item.get("schema"),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Error parsing timeline item {item!r}: {e}")
                continue
        return message_refs

    @staticmethod
    def _profile(content: dict[str, Any]) -> UpstreamProfile:
        document = parse_document(content.get("document"))
        body = document.get("body") or {}
        return UpstreamProfile(
            id=content.get("id"),
            author=content.get("author") or document.get("signer"),
            username=body.get("username"),
            avatar=body.get("avatar"),
        )

    async def get_author_profile(self, owner: str) -> UpstreamProfile | None:
        domain = await self._entity_domain(owner)
        content = await self._get_content(
            self._url(domain, f"/profile/{owner}/{schemas.PROFILE_SEMANTIC_ID}")
        )
        return self._profile(content) if content else None

    async def get_profile(self, profile_id: str, author: str) -> UpstreamProfile | None:
        domain = await self._entity_domain(author)
        content = await self._get_content(self._url(domain, f"/profile/{profile_id}"))
        return self._profile(content) if content else None

    async def get_message(self, message_id: str, author: str) -> UpstreamMessage | None:
        domain = await self._entity_domain(author)
        content = await self._get_content(self._url(domain, f"/message/{message_id}"))
        if not content:
            return None

        document = parse_document(content.get("document"))
        schema = content.get("schema") or document.get("schema") or ""
        body = document.get("body") or {}

        override = None
        raw_override = body.get("profileOverride")
        if isinstance(raw_override, dict):
            override = ProfileOverride(
                username=raw_override.get("username"),
                avatar=raw_override.get("avatar"),
                profile_id=raw_override.get("profileID"),
            )

        medias = [
            MediaItem(url=media.get("mediaURL") or "", media_type=media.get("mediaType") or "")
            for media in body.get("medias") or []
            if isinstance(media, dict)
        ]

        return UpstreamMessage(
            id=content.get("id") or message_id,
            author=content.get("author") or document.get("signer") or author,
            schema=schema,
            kind=schemas.message_kind(schema),
            body=body.get("body") or "",
            profile_override=override,
            medias=medias,
            reroute_message_id=body.get("rerouteMessageId"),
            reroute_message_author=body.get("rerouteMessageAuthor"),
        )

    async def get_reaction_counts(self, message_id: str, author: str) -> dict[str, int]:
        domain = await self._entity_domain(author)
        content = await self._get_content(
            self._url(domain, f"/message/{message_id}/associationcounts"),
            params={"schema": schemas.REACTION_ASSOCIATION},
        )
        if not isinstance(content, dict):
            return {}
        return {str(key): int(count) for key, count in content.items()}

    @staticmethod
    def _override_body(profile_override: ProfileOverride) -> dict[str, str]:
        body = {
            "username": profile_override.username,
            "avatar": profile_override.avatar,
            "profileID": profile_override.profile_id,
        }
        return {key: value for key, value in body.items() if value is not None}

    async def create_markdown_message(
        self, body: str, timelines: list[TimelineRef], profile_override: ProfileOverride
    ) -> None:
        await self._commit_message(
            schemas.MARKDOWN_MESSAGE,
            {"body": body, "profileOverride": self._override_body(profile_override)},
            timelines,
        )

    async def create_media_message(
        self,
        body: str,
        timelines: list[TimelineRef],
        profile_override: ProfileOverride,
        medias: list[MediaItem],
    ) -> None:
        await self._commit_message(
            schemas.MEDIA_MESSAGE,
            {
                "body": body,
                "medias": [
                    {"mediaURL": media.url, "mediaType": media.media_type} for media in medias
                ],
                "profileOverride": self._override_body(profile_override),
            },
            timelines,
        )

    async def _commit_message(
        self, schema: str, body: dict[str, Any], timelines: list[TimelineRef]
    ) -> None:
        document = {
            "signer": self.signer.ccid,
            "keyID": self.signer.ckid,
            "type": "message",
            "schema": schema,
            "body": body,
            "timelines": [timeline.fqid for timeline in timelines],
            "signedAt": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        }
        serialized = json.dumps(document, ensure_ascii=False, separators=(",", ":"))

        url = self._url(self.host, "/commit")
        try:
            response = await self.http.post(
                url,
                json={
                    "document": serialized,
                    "signature": self.signer.sign(serialized),
                    "option": "",
                },
            )
        except httpx.HTTPError as e:
            raise UpstreamException(url, str(e) or type(e).__name__) from e

        if response.is_error:
            raise UpstreamException(url, f"HTTP {response.status_code}", response.status_code)
        logger.debug(f"Committed {schema} to {[t.fqid for t in timelines]}")
