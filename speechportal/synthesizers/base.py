from __future__ import annotations

import asyncio
import logging
from typing import ClassVar

from speechportal.codec import build_data_url
from speechportal.utils import slugify

_logger = logging.getLogger(__name__)

# Longer text is split into many requests by some engines and takes far too
# long to render inline, so cap it up front.
MAX_TEXT_LENGTH = 2000

# Time waiting for the engine to return audio before aborting
SYNTHESIS_TIMEOUT = 30

FILE_EXTENSIONS = {
    "audio/mpeg": "mp3",
    "audio/wav": "wav",
    "audio/ogg": "ogg",
    "audio/flac": "flac",
}


class SynthesisError(Exception):
    pass


class Speech:
    """
    Audio returned by a speech engine, along with what was used to make it.
    """

    def __init__(
        self,
        text: str,
        lang: str,
        audio: bytes,
        mimetype: str,
        synthesizer: str,
    ):
        self.text = text
        self.lang = lang
        self.audio = audio
        self.mimetype = mimetype
        self.synthesizer = synthesizer

    def __str__(self) -> str:
        return f'{self.__class__.__name__} {self.mimetype} {len(self.audio)} bytes "{self.lang}"'

    @property
    def data_url(self) -> str:
        return build_data_url(self.audio, self.mimetype)

    @property
    def filename(self) -> str:
        extension = FILE_EXTENSIONS.get(self.mimetype, "bin")
        return f"{slugify(self.text)}.{extension}"


class BaseSynthesizer:
    """
    Encapsulates a request to a text-to-speech engine.
    """

    name: ClassVar[str]
    mimetype: ClassVar[str]
    languages: ClassVar[dict[str, str]]

    def __init__(self, text: str, lang: str = "en", slow: bool = False):
        self.text = text
        self.lang = lang
        self.slow = slow

        self.clean()

    def clean(self):
        if not self.text:
            raise ValueError("There is no text to speak.")
        if len(self.text) > MAX_TEXT_LENGTH:
            raise ValueError(f"Text is limited to {MAX_TEXT_LENGTH} characters.")
        if self.languages and self.lang not in self.languages:
            raise ValueError(f'Unsupported language "{self.lang}" for {self.name}.')

    @property
    def cache_key(self) -> tuple:
        return self.name, self.lang, self.slow, self.text

    async def get_speech(self) -> Speech:
        _logger.info(f"{self.__class__.__name__}: Synthesizing {len(self.text)} chars ({self.lang})")
        try:
            audio = await asyncio.wait_for(self.synthesize(), timeout=SYNTHESIS_TIMEOUT)
        except asyncio.TimeoutError:
            raise SynthesisError("Timeout waiting for the speech engine")
        except OSError as e:
            raise SynthesisError(f"Connection error: {e}")

        if not audio:
            raise SynthesisError("The speech engine returned no audio.")

        speech = Speech(self.text, self.lang, audio, self.mimetype, self.name)
        _logger.info(f"{self.__class__.__name__}: Audio received: {speech}")
        return speech

    async def synthesize(self) -> bytes:
        raise NotImplementedError
