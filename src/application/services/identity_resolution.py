"""
Display identity resolution.

A message can carry a profile override; otherwise the author's canonical
profile is used; otherwise a literal fallback. Precedence is expressed as
an ordered candidate list so each rule can be tested on its own.
"""

from dataclasses import dataclass

from src.application.interfaces.upstream import ProfileOverride, UpstreamProfile

ANONYMOUS_NAME = "Anonymous"


def first_non_empty(*candidates: str | None, default: str = "") -> str:
    """Return the first candidate that is neither None nor "" """
    for candidate in candidates:
        if candidate:
            return candidate
    return default


@dataclass(frozen=True)
class DisplayIdentity:
    name: str
    avatar: str


def resolve_identity(
    override: ProfileOverride | None,
    canonical: UpstreamProfile | None,
    override_profile: UpstreamProfile | None = None,
) -> DisplayIdentity:
    """
    Resolve name and avatar.

    Precedence: the profile referenced by the override's profile id, then
    the override's literal fields, then the canonical author profile, then
    "Anonymous" / "".
    """
    sources: list[tuple[str | None, str | None]] = []
    if override_profile is not None:
        sources.append((override_profile.username, override_profile.avatar))
    if override is not None:
        sources.append((override.username, override.avatar))
    if canonical is not None:
        sources.append((canonical.username, canonical.avatar))

    return DisplayIdentity(
        name=first_non_empty(*(name for name, _ in sources), default=ANONYMOUS_NAME),
        avatar=first_non_empty(*(avatar for _, avatar in sources)),
    )
