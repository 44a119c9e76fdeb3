import re
import unicodedata
from dataclasses import dataclass

import chardet
from emoji import replace_emoji

WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class SpeechOptions:
    lang: str = "en"
    slow: bool = False
    synthesizer: str | None = None
    format: str | None = None
    raw: bool = False


def smart_decode(
    data: bytes,
    charset: str | None,
    errors: str = "replace",
    default_charset: str = "UTF-8",
) -> tuple[str, str]:
    """
    Decode text, falling back to heuristics if the charset is not defined.
    """
    if charset:
        text = data.decode(charset, errors=errors)
        return text, charset

    try:
        text = data.decode(default_charset)
    except UnicodeDecodeError:
        autodetect = chardet.detect(data)

        if autodetect["confidence"] > 0.5:
            detected_charset = autodetect["encoding"]
        else:
            detected_charset = default_charset
        text = data.decode(detected_charset, errors=errors)
    else:
        detected_charset = default_charset

    return text, detected_charset


def strip_emoji(text: str) -> str:
    """
    Remove emojis, otherwise the speech engine will read them out by name.
    """
    return replace_emoji(text, replace="")


def prepare_text(text: str) -> str:
    text = strip_emoji(text)
    # Drop control characters (tabs and newlines are collapsed below)
    text = "".join(c for c in text if c.isspace() or unicodedata.category(c) != "Cc")
    return WHITESPACE_RE.sub(" ", text).strip()


def slugify(text: str, max_length: int = 40) -> str:
    text = unicodedata.normalize("NFKD", text).encode("ascii", errors="ignore").decode()
    slug = re.sub(r"[^\w]+", "-", text.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "speech"
