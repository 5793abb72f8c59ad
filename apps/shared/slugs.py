"""URL slugs derived from titles."""
import re
import unicodedata

# Letters NFKD does not decompose into an ASCII base character
_TRANSLITERATIONS = str.maketrans({
    "ı": "i",
    "ß": "ss",
    "æ": "ae",
    "Æ": "AE",
    "ø": "o",
    "Ø": "O",
    "đ": "d",
    "Đ": "D",
    "ł": "l",
    "Ł": "L",
    "œ": "oe",
    "Œ": "OE",
    "&": " and ",
})

_STRIP_RE = re.compile(r"[^a-z0-9\s-]")
_SEPARATOR_RE = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """
    Lowercase, ASCII-fold, drop punctuation, join words with hyphens.

    "My Cool App, v2!" -> "my-cool-app-v2"
    """
    text = unicodedata.normalize("NFKD", text.translate(_TRANSLITERATIONS))
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    text = _STRIP_RE.sub("", text)
    return _SEPARATOR_RE.sub("-", text).strip("-")
