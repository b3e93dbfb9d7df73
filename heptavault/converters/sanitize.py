"""
File name sanitizing for exported cards.
"""

# Characters that are illegal in file names on at least one major platform
ILLEGAL_FILENAME_CHARS = '/\\:*?"<>|'

# Stand-in that reads like a slash but is legal everywhere
FILENAME_SUBSTITUTE = "÷"

MAX_FILENAME_LENGTH = 200

UNTITLED = "Untitled"

_TRANSLATION = str.maketrans({char: FILENAME_SUBSTITUTE for char in ILLEGAL_FILENAME_CHARS})


def sanitize_filename(title: str) -> str:
    """
    Turn an arbitrary title into a safe, bounded file name (without extension).

    Args:
        title: Card title or any other display string

    Returns:
        The sanitized name, or "Untitled" when nothing usable remains

    Examples:
        sanitize_filename("Hello/World")  # Returns "Hello÷World"
        sanitize_filename("   ")          # Returns "Untitled"
    """
    if title is None:
        return UNTITLED

    name = str(title).translate(_TRANSLATION).strip()
    # Strip again so truncation never leaves trailing whitespace behind
    name = name[:MAX_FILENAME_LENGTH].strip()
    return name or UNTITLED
