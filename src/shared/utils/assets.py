"""Helpers for virtual-world asset references"""

from src.domain.exceptions import InvalidAssetReferenceException

ASSET_SCHEME_SEPARATOR = "///"


def asset_id_from_reference(reference: str) -> str:
    """
    Extract the asset id from a client asset reference.

    ``resdb:///3f2a...9c.webp`` -> ``3f2a...9c``: the text after the first
    ``///`` up to the next ``.``.

    Raises:
        InvalidAssetReferenceException: if the reference has no ``///`` or
            the extracted id is empty
    """
    if not isinstance(reference, str):
        raise InvalidAssetReferenceException(repr(reference))
    parts = reference.split(ASSET_SCHEME_SEPARATOR)
    if len(parts) < 2:
        raise InvalidAssetReferenceException(reference)
    asset_id = parts[1].split(".")[0]
    if not asset_id:
        raise InvalidAssetReferenceException(reference)
    return asset_id


def asset_url_from_reference(reference: str, asset_host_url: str) -> str:
    """Build the public asset URL for a client asset reference"""
    return asset_host_url + asset_id_from_reference(reference)
