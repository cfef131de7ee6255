"""Document signing with a Concrnt subkey"""

from coincurve import PrivateKey
from Crypto.Hash import keccak

from src.infrastructure.exceptions import InvalidSubkeyError
from src.infrastructure.external.concrnt.credentials import Subkey


class SubkeySigner:
    """
    Sign documents the way Concrnt servers verify them.

    The signature is secp256k1 over the keccak-256 digest of the exact
    document string, encoded as 65 bytes (r || s || recovery id) in hex.
    """

    def __init__(self, subkey: Subkey) -> None:
        self.subkey = subkey
        try:
            self._key = PrivateKey(bytes.fromhex(subkey.private_key))
        except ValueError as e:
            raise InvalidSubkeyError("private key is not a valid secp256k1 key") from e

    @property
    def ccid(self) -> str:
        return self.subkey.ccid

    @property
    def ckid(self) -> str:
        return self.subkey.ckid

    @staticmethod
    def digest(document: str) -> bytes:
        return keccak.new(digest_bits=256, data=document.encode("utf-8")).digest()

    def sign(self, document: str) -> str:
        signature = self._key.sign_recoverable(self.digest(document), hasher=None)
        return signature.hex()
