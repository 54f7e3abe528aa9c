"""Utility helper functions"""


def sanitize_url(url: str) -> str:
    """
    Sanitize and normalize a repository URL or shorthand

    Args:
        url: URL to sanitize

    Returns:
        Sanitized URL without surrounding whitespace or trailing slashes
    """
    url = url.strip()

    # Ensure https
    if url.startswith("http://"):
        url = url.replace("http://", "https://", 1)

    return url.rstrip("/")


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate string to maximum length

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
