import hashlib
import logging
import os
import shelve
import tempfile
import time
from typing import cast

from speechportal.synthesizers.base import BaseSynthesizer, Speech

_logger = logging.getLogger(__name__)


DB_NAME = os.path.join(tempfile.gettempdir(), "speechportal-speech-db")


class SpeechCache:
    """
    Stash synthesized audio in a temporary directory on the filesystem
    using the shelve module, so repeated requests for the same text don't
    go back to the speech engine.
    """

    EXPIRATION = 60 * 60 * 4

    def __init__(self, db_name: str):
        self.db_name = db_name

    @staticmethod
    def make_key(synthesizer: BaseSynthesizer) -> str:
        raw_key = repr(synthesizer.cache_key).encode()
        return hashlib.sha256(raw_key).hexdigest()

    def check(self, key: str) -> Speech | None:
        with shelve.open(self.db_name) as db:
            if key in db:
                ttl, value = cast(tuple[float, Speech], db[key])
                if time.time() < ttl:
                    return value

        return None

    def store(self, key: str, speech: Speech) -> None:
        with shelve.open(self.db_name) as db:
            ttl = time.time() + self.EXPIRATION
            db[key] = ttl, speech

    def clear(self) -> None:
        with shelve.open(self.db_name) as db:
            db.clear()

    async def get_or_synthesize(self, synthesizer: BaseSynthesizer) -> Speech:
        key = self.make_key(synthesizer)

        speech = self.check(key)
        if speech is not None:
            _logger.info(f"Cache hit for {key[:12]}: {speech}")
            return speech

        _logger.info(f"Cache miss for {key[:12]}")
        speech = await synthesizer.get_speech()
        self.store(key, speech)
        return speech


speech_cache = SpeechCache(DB_NAME)
