"""Concrnt subkey credential"""

from dataclasses import dataclass

from src.infrastructure.exceptions import InvalidSubkeyError

SUBKEY_PREFIX = "concrnt-subkey"


@dataclass(frozen=True)
class Subkey:
    """
    Parsed subkey credential.

    Format: ``concrnt-subkey <private-key-hex> <ccid>@<domain> <ckid>``.
    The ckid identifies the subkey to the server; documents signed with
    it carry the ckid as their key id.
    """

    private_key: str
    ccid: str
    domain: str
    ckid: str

    @classmethod
    def parse(cls, secret: str) -> "Subkey":
        parts = secret.split()
        if len(parts) != 4:
            raise InvalidSubkeyError(f"expected 4 fields, got {len(parts)}")
        prefix, private_key, identity, ckid = parts
        if prefix != SUBKEY_PREFIX:
            raise InvalidSubkeyError(f"missing '{SUBKEY_PREFIX}' prefix")

        ccid, sep, domain = identity.rpartition("@")
        if not sep or not ccid or not domain:
            raise InvalidSubkeyError("identity must be <ccid>@<domain>")

        private_key = private_key.removeprefix("0x")
        try:
            bytes.fromhex(private_key)
        except ValueError as e:
            raise InvalidSubkeyError("private key is not hex") from e

        return cls(private_key=private_key, ccid=ccid, domain=domain, ckid=ckid)

    def __repr__(self) -> str:
        # keep the private key out of logs and tracebacks
        return f"Subkey(ccid={self.ccid!r}, domain={self.domain!r}, ckid={self.ckid!r})"
