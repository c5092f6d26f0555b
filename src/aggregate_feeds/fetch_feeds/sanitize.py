"""Strip characters that XML parsers reject from raw feed bodies."""

import codecs
import re

CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
XML_ENCODING = re.compile(rb"""^\s*<\?xml[^>]*?\sencoding\s*=\s*["']([A-Za-z0-9._:-]+)["']""")


def declared_encoding(raw: bytes, default: str = "utf-8") -> str:
    """Charset named in the XML declaration, or ``default``."""
    match = XML_ENCODING.match(raw[:1024])
    if match:
        try:
            return codecs.lookup(match.group(1).decode("ascii")).name
        except LookupError:
            pass
    return default


def sanitize(raw: bytes | str, encoding: str | None = None) -> str:
    """Decode a feed body and drop every C0/C1 control character.

    Bytes are decoded with ``encoding`` if given, else the charset the XML
    declaration names, else UTF-8. Undecodable bytes become U+FFFD rather
    than failing.
    """
    if isinstance(raw, bytes):
        raw = raw.decode(encoding or declared_encoding(raw), errors="replace")
    return CONTROL_CHARS.sub("", raw)
