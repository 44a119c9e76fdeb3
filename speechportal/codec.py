import binascii
import re
from base64 import b64decode, b64encode

DEFAULT_MIMETYPE = "application/octet-stream"

PAYLOAD_RE = re.compile(r"[A-Za-z0-9+/=]*")

DATA_URL_RE = re.compile(r"data:(?P<mimetype>[^;,]*)(?P<params>(?:;[^;,]*)*),(?P<payload>.*)", re.S)


def encode_payload(data: bytes) -> str:
    """
    Convert arbitrary bytes into text that can be safely inserted into a template.

    The base64 alphabet is plain ASCII, so decoding the encoded bytes as UTF-8
    will never fail regardless of what the input bytes were.
    """
    return b64encode(data).decode("utf-8")


def decode_payload(text: str) -> bytes:
    """
    Reverse encode_payload(), rejecting anything outside the base64 alphabet.
    """
    if not is_payload_text(text):
        raise ValueError("Payload contains characters outside of the base64 alphabet")

    try:
        return b64decode(text, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}")


def is_payload_text(text: str) -> bool:
    return PAYLOAD_RE.fullmatch(text) is not None


def build_data_url(data: bytes, mimetype: str | None = None) -> str:
    mimetype = mimetype or DEFAULT_MIMETYPE
    return f"data:{mimetype};base64,{encode_payload(data)}"


def parse_data_url(url: str) -> tuple[str, bytes]:
    """
    Split a base64 data URL back into its mimetype and decoded bytes.
    """
    match = DATA_URL_RE.fullmatch(url.strip())
    if not match:
        raise ValueError("Not a valid data URL")

    params = [p.strip().lower() for p in match.group("params").split(";")]
    if "base64" not in params:
        raise ValueError("Only base64 encoded data URLs are supported")

    mimetype = match.group("mimetype").strip() or DEFAULT_MIMETYPE
    return mimetype, decode_payload(match.group("payload"))


def sniff_audio_mimetype(data: bytes) -> str | None:
    """
    Guess the audio format from the magic bytes at the start of the file.
    """
    if data.startswith(b"ID3"):
        return "audio/mpeg"
    if len(data) >= 2 and data[0] == 0xFF and data[1] & 0xE0 == 0xE0:
        # MPEG audio frame sync, 11 set bits
        return "audio/mpeg"
    if data[:4] == b"RIFF" and data[8:12] == b"WAVE":
        return "audio/wav"
    if data.startswith(b"OggS"):
        return "audio/ogg"
    if data.startswith(b"fLaC"):
        return "audio/flac"

    return None
