"""
Core value objects.

Immutable objects defined by their attributes rather than identity.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TimelineRef:
    """
    Fully qualified timeline identifier (``id@host``).

    The local id is opaque; the host names the server that owns the
    timeline and is used both for routing reads and for the home-host
    check on posts.
    """

    id: str
    host: str

    def __post_init__(self):
        if not self.id:
            raise ValueError("Timeline id cannot be empty")
        if not self.host:
            raise ValueError("Timeline host cannot be empty")

    @classmethod
    def parse(cls, fqid: str, default_host: str) -> "TimelineRef":
        """Parse ``id@host``; a bare id resolves against ``default_host``"""
        fqid = fqid.strip()
        local_id, sep, host = fqid.partition("@")
        if not sep:
            host = default_host
        return cls(id=local_id, host=host)

    @property
    def fqid(self) -> str:
        return f"{self.id}@{self.host}"

    def __str__(self) -> str:
        return self.fqid
