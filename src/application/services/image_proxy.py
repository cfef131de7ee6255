"""Image URL rewriting through the transcoding proxy"""


class ImageProxy:
    """
    Prefix image URLs with the image proxy.

    The proxy normalizes format and size for the virtual-world client.
    Deployments that serve raw upstream URLs construct it with
    enabled=False. Empty URLs are returned as "".
    """

    def __init__(self, prefix: str, enabled: bool = True):
        self.prefix = prefix
        self.enabled = enabled

    def rewrite(self, url: str | None) -> str:
        if not url:
            return ""
        if not self.enabled or url.startswith(self.prefix):
            return url
        return self.prefix + url
