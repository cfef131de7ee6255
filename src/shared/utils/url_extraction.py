"""Pick the URL worth previewing out of a message body"""

import re

# Applied in order; each entry is (pattern, replacement)
_STRIP_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"!\[.*\]\(.*\)"), ""),  # markdown image
    (re.compile(r"```[\s\S]*?```"), ""),  # fenced code block
    (re.compile(r"`[\s\S]*?`"), ""),  # inline code
    (re.compile(r"<img.*?>"), ""),
    (re.compile(r"<social.*?>.*?</social>"), ""),
    (re.compile(r"<emojipack.*?/>"), ""),
    (re.compile(r"\[(.*)\]\((.*)\)"), r"\2"),  # markdown link -> target
    (re.compile(r"<a(.*?)>.*?</a>"), r"\1"),  # anchor -> attribute text
]

_URL_PATTERN = re.compile(r"https?://[\w.\-?=/&%#,@]+", re.ASCII)


def strip_markup(text: str) -> str:
    """Remove markup whose URLs must not be previewed"""
    for pattern, replacement in _STRIP_RULES:
        text = pattern.sub(replacement, text)
    return text


def extract_first_url(text: str | None) -> str:
    """
    Return the first previewable http(s) URL in text, or "" if there is none.

    Images, code and custom tags are dropped first so their URLs never win;
    markdown links contribute their target.
    """
    if not text:
        return ""
    match = _URL_PATTERN.search(strip_markup(text))
    return match.group(0) if match else ""
