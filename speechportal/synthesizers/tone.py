import asyncio
import io
import math
import wave
from array import array

from speechportal.synthesizers.base import BaseSynthesizer

SAMPLE_RATE = 8000

# Duration of the tone played for each character, in seconds
TONE_LENGTH = 0.06

BASE_FREQUENCY = 220.0


class ToneSynthesizer(BaseSynthesizer):
    """
    Offline engine that "speaks" by playing a short tone for every character.

    The output is deterministic, which makes it useful for development and
    testing without access to the network.
    """

    name = "tone"
    mimetype = "audio/wav"
    # Tones are language agnostic
    languages: dict[str, str] = {}

    async def synthesize(self) -> bytes:
        # Sample generation is CPU bound, keep it off the event loop
        return await asyncio.to_thread(self._synthesize)

    def _synthesize(self) -> bytes:
        length = TONE_LENGTH * (2 if self.slow else 1)
        samples_per_tone = int(SAMPLE_RATE * length)

        # Fade in/out to avoid clicks between tones
        envelope = [math.sin(math.pi * n / samples_per_tone) for n in range(samples_per_tone)]
        silence = array("h", bytes(samples_per_tone * 2))
        tones: dict[str, array] = {}

        frames = array("h")
        for char in self.text:
            if char.isspace():
                frames.extend(silence)
                continue

            if char not in tones:
                # Map each character onto a two octave range above the base
                frequency = BASE_FREQUENCY * 2 ** ((ord(char) % 24) / 12)
                step = 2 * math.pi * frequency / SAMPLE_RATE
                tones[char] = array(
                    "h", (int(e * math.sin(step * n) * 12000) for n, e in enumerate(envelope))
                )
            frames.extend(tones[char])

        fp = io.BytesIO()
        with wave.open(fp, "wb") as wav:
            wav.setnchannels(1)
            wav.setsampwidth(2)
            wav.setframerate(SAMPLE_RATE)
            wav.writeframes(frames.tobytes())
        return fp.getvalue()
