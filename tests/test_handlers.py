import pytest

from speechportal.handlers import MAX_INLINE_SIZE, build_handler, get_handler_class
from speechportal.handlers.audio import AudioHandler
from speechportal.handlers.base import StreamHandler
from speechportal.handlers.file import FileDownloadHandler
from speechportal.synthesizers.base import Speech
from speechportal.utils import SpeechOptions

speech = Speech("Hello world", "en", b"RIFF\x00\x00\x00\x00WAVE\xff\xfe", "audio/wav", "tone")


@pytest.mark.parametrize(
    "options,handler_class",
    [
        (SpeechOptions(), AudioHandler),
        (SpeechOptions(format="download"), FileDownloadHandler),
        (SpeechOptions(raw=True), StreamHandler),
        (SpeechOptions(raw=True, format="download"), StreamHandler),
    ],
)
def test_get_handler_class(options, handler_class):
    assert get_handler_class(speech, options) is handler_class


def test_get_handler_class_large_audio():
    large = Speech("Hello", "en", bytes(MAX_INLINE_SIZE + 1), "audio/wav", "tone")
    assert get_handler_class(large, SpeechOptions()) is StreamHandler


async def test_audio_handler(app):
    handler = AudioHandler.from_speech(speech)
    async with app.test_request_context("/speak"):
        response = await handler.render()
        body = await response.get_data(as_text=True)

    assert response.mimetype == "text/html"
    assert f'<audio controls src="{speech.data_url}"></audio>' in body
    assert "<figcaption>Hello world</figcaption>" in body


async def test_file_download_handler(app):
    handler = FileDownloadHandler.from_speech(speech)
    async with app.test_request_context("/speak"):
        response = await handler.render()
        body = await response.get_data(as_text=True)

    assert f'href="{speech.data_url}"' in body
    assert 'download="hello-world.wav"' in body


async def test_stream_handler(app):
    handler = build_handler(speech, SpeechOptions(raw=True, format="download"))
    async with app.test_request_context("/speak"):
        response = await handler.render()
        body = await response.get_data()

    assert body == speech.audio
    assert response.mimetype == "audio/wav"
    assert response.headers["Content-Disposition"] == 'attachment; filename="hello-world.wav"'


async def test_stream_handler_inline(app):
    handler = build_handler(speech, SpeechOptions(raw=True))
    async with app.test_request_context("/speak"):
        response = await handler.render()

    assert response.headers["Content-Disposition"].startswith("inline;")
