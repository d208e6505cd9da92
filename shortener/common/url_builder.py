"""URL building utilities for URL shortener."""


def build_short_url(
    short_key: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete short URL.

    Args:
        short_key: The short key
        base_url: Base URL (e.g., http://localhost:8080)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_key}"
    return f"{base}/{short_key}"


def escape_non_ascii(url: str) -> str:
    """Percent-encode the UTF-8 bytes of non-ASCII characters in a URL.

    ASCII characters, including spaces and quotes, are left untouched so the
    redirect target matches the stored URL as closely as a header allows.

    Args:
        url: The stored long URL

    Returns:
        URL safe to send in a Location header
    """
    if url.isascii():
        return url

    return "".join(
        ch if ch.isascii() else "".join(f"%{b:02X}" for b in ch.encode("utf-8"))
        for ch in url
    )
