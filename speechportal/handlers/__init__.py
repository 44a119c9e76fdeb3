from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from speechportal.synthesizers.base import Speech
    from speechportal.utils import SpeechOptions

from speechportal.handlers.audio import AudioHandler
from speechportal.handlers.base import BaseHandler, StreamHandler
from speechportal.handlers.file import FileDownloadHandler

# Audio larger than this is served directly instead of being stuffed into
# the page, the base64 data URL grows to 4/3 of the file size.
MAX_INLINE_SIZE = 2**22


def get_handler_class(speech: Speech, options: SpeechOptions) -> type[BaseHandler]:
    handler_class: type[BaseHandler]

    if options.raw:
        handler_class = StreamHandler
    elif len(speech.audio) > MAX_INLINE_SIZE:
        handler_class = StreamHandler
    elif options.format == "download":
        handler_class = FileDownloadHandler
    else:
        handler_class = AudioHandler

    return handler_class


def build_handler(speech: Speech, options: SpeechOptions) -> BaseHandler:
    handler_class = get_handler_class(speech, options)
    if handler_class is StreamHandler:
        return StreamHandler(speech, as_attachment=options.format == "download")

    return handler_class.from_speech(speech)
