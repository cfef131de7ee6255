"""Schema identifiers used by the Concrnt world"""

from src.domain.enums import MessageKind

MARKDOWN_MESSAGE = "https://schema.concrnt.world/m/markdown.json"
PLAINTEXT_MESSAGE = "https://schema.concrnt.world/m/plaintext.json"
MEDIA_MESSAGE = "https://schema.concrnt.world/m/media.json"
REROUTE_MESSAGE = "https://schema.concrnt.world/m/reroute.json"

REACTION_ASSOCIATION = "https://schema.concrnt.world/a/reaction.json"

PROFILE_SEMANTIC_ID = "world.concrnt.p"

COMMUNITY_TIMELINE = "https://schema.concrnt.world/t/community.json"

MESSAGE_KINDS: dict[str, MessageKind] = {
    MARKDOWN_MESSAGE: MessageKind.MARKDOWN,
    PLAINTEXT_MESSAGE: MessageKind.PLAINTEXT,
    MEDIA_MESSAGE: MessageKind.MEDIA,
    REROUTE_MESSAGE: MessageKind.REROUTE,
}


def message_kind(schema: str | None) -> MessageKind:
    """Classify a message schema, UNKNOWN for anything unrecognized"""
    if not schema:
        return MessageKind.UNKNOWN
    return MESSAGE_KINDS.get(schema, MessageKind.UNKNOWN)
