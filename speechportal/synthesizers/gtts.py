import asyncio
import io

from gtts import gTTS, gTTSError
from gtts.lang import tts_langs

from speechportal.synthesizers.base import BaseSynthesizer, SynthesisError


class GTTSSynthesizer(BaseSynthesizer):
    """
    Google Translate's text-to-speech endpoint, by way of the gTTS library.
    """

    name = "gtts"
    mimetype = "audio/mpeg"
    languages = tts_langs()

    def __init__(self, text: str, lang: str = "en", slow: bool = False, tld: str = "com"):
        self.tld = tld
        super().__init__(text, lang, slow)

    @property
    def cache_key(self):
        return *super().cache_key, self.tld

    async def synthesize(self) -> bytes:
        # gTTS only offers a blocking API
        return await asyncio.to_thread(self._synthesize)

    def _synthesize(self) -> bytes:
        tts = gTTS(text=self.text, lang=self.lang, tld=self.tld, slow=self.slow)
        fp = io.BytesIO()
        try:
            tts.write_to_fp(fp)
        except gTTSError as e:
            raise SynthesisError(f"Speech engine error: {e}")
        return fp.getvalue()
