"""Text normalization helpers.

Used when comparing test data against golden files written on other
platforms.
"""


def normalize_newlines(value: str) -> str:
    """Normalize Windows (CRLF) and classic Mac (CR) newlines to LF.

    Args:
        value: Text to normalize.

    Returns:
        Normalized copy of the text.
    """
    return value.replace("\r\n", "\n").replace("\r", "\n")


def normalize_newlines_bytes(value: bytes) -> bytes:
    """Normalize CRLF and CR newlines in a byte string to LF.

    Raises:
        TypeError: If value is None.
    """
    if value is None:
        msg = "value must not be None"
        raise TypeError(msg)
    return value.replace(b"\r\n", b"\n").replace(b"\r", b"\n")


def printable(value: str) -> str:
    """Return a copy of the text with non-printable characters dropped."""
    return "".join(char for char in value if char.isprintable())
