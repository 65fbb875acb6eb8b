"""URL helpers shared by image and video handling."""


def normalize_url(url: str | None) -> str:
    """Trim a URL and give protocol-relative URLs (``//images.ctfassets.net``) https."""
    trimmed = (url or "").strip()
    if trimmed.startswith("//"):
        return f"https:{trimmed}"
    return trimmed


def with_params(url: str | None, params: str | None) -> str:
    """Append image transformation parameters (``fm=webp&w=900``) to a URL."""
    if not url:
        return ""
    if not params:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{params}"
