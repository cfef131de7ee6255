from src.shared.utils.assets import (asset_id_from_reference,
                                     asset_url_from_reference)
from src.shared.utils.emap import to_emap
from src.shared.utils.relative_time import (ENGLISH_LABELS, JAPANESE_LABELS,
                                            RelativeTimeLabels,
                                            format_relative_time)
from src.shared.utils.url_extraction import extract_first_url

__all__ = [
    "asset_id_from_reference",
    "asset_url_from_reference",
    "to_emap",
    "format_relative_time",
    "RelativeTimeLabels",
    "JAPANESE_LABELS",
    "ENGLISH_LABELS",
    "extract_first_url",
]
