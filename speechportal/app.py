import logging
import os
from datetime import datetime

from quart import Quart, Response, g, render_template, request, url_for
from quart.logging import default_handler
from werkzeug.wrappers.response import Response as WerkzeugResponse

from speechportal.cache import speech_cache
from speechportal.codec import sniff_audio_mimetype
from speechportal.handlers import build_handler
from speechportal.synthesizers import SYNTHESIZERS, build_synthesizer
from speechportal.synthesizers.base import BaseSynthesizer, Speech, SynthesisError
from speechportal.utils import SpeechOptions, prepare_text, smart_decode

logger = logging.getLogger("speechportal")
logger.setLevel(logging.INFO)
logger.addHandler(default_handler)

app = Quart(__name__)
app.jinja_env.trim_blocks = True
app.jinja_env.lstrip_blocks = True
app.jinja_env.keep_trailing_newline = True
app.config.update(
    SYNTHESIZER="gtts",
    GTTS_TLD="com",
    DEFAULT_LANG="en",
    CACHE_ENABLED=True,
    MAX_CONTENT_LENGTH=2**24,
)
app.config.from_prefixed_env()


def check_config(config) -> None:
    if config["SYNTHESIZER"] not in SYNTHESIZERS:
        raise ValueError(f"Unsupported speech engine in config: {config['SYNTHESIZER']}")


check_config(app.config)


@app.errorhandler(ValueError)
async def handle_value_error(e) -> Response:
    content = await render_template("error.html", error=e)
    return Response(content, status=400)


@app.errorhandler(SynthesisError)
async def handle_synthesis_error(e):
    content = await render_template("error.html", error=e)
    return Response(content, status=500)


@app.context_processor
def inject_context():
    kwargs = {}

    synthesizer_class = SYNTHESIZERS[app.config["SYNTHESIZER"]]
    kwargs["synthesizers"] = sorted(SYNTHESIZERS)
    kwargs["default_synthesizer"] = synthesizer_class.name
    kwargs["default_lang"] = app.config["DEFAULT_LANG"]
    kwargs["languages"] = sorted(synthesizer_class.languages.items())

    if "speech" in g:
        kwargs["speech"] = g.speech

    # Uploaded audio has no engine to replay it through
    if "speech" in g and g.speech.synthesizer in SYNTHESIZERS:
        kwargs["raw_url"] = url_for(
            "speak",
            text=g.speech.text,
            lang=g.speech.lang,
            synthesizer=g.speech.synthesizer,
            raw=1,
        )

    return kwargs


@app.route("/robots.txt")
async def robots() -> Response:
    return await app.send_static_file("robots.txt")


@app.route("/about")
async def about() -> Response:
    now = datetime.now()
    content = await render_template("about.html", year=now.year)
    return Response(content)


@app.route("/")
async def home() -> Response:
    content = await render_template("home.html")
    return Response(content)


def build_options(values) -> SpeechOptions:
    return SpeechOptions(
        lang=values.get("lang") or app.config["DEFAULT_LANG"],
        slow=bool(values.get("slow")),
        synthesizer=values.get("synthesizer") or app.config["SYNTHESIZER"],
        format=values.get("format") or None,
        raw=bool(values.get("raw")),
    )


def make_synthesizer(text: str, options: SpeechOptions) -> BaseSynthesizer:
    kwargs = {}
    if options.synthesizer == "gtts":
        kwargs["tld"] = app.config["GTTS_TLD"]

    return build_synthesizer(options.synthesizer, text, options.lang, options.slow, **kwargs)


async def get_speech(synthesizer: BaseSynthesizer) -> Speech:
    if app.config["CACHE_ENABLED"]:
        return await speech_cache.get_or_synthesize(synthesizer)
    else:
        return await synthesizer.get_speech()


async def render_speech(speech: Speech, options: SpeechOptions) -> Response:
    g.speech = speech
    handler = build_handler(speech, options)
    return await handler.render()


@app.route("/speak", methods=["GET", "POST"])
async def speak() -> Response | WerkzeugResponse:
    """
    Convert the submitted text to speech and embed it in the page.
    """
    values = await request.values
    text = prepare_text(values.get("text", ""))
    if not text:
        return app.redirect(url_for("home"))

    options = build_options(values)
    synthesizer = make_synthesizer(text, options)
    speech = await get_speech(synthesizer)
    return await render_speech(speech, options)


@app.route("/embed", methods=["GET", "POST"])
async def embed() -> Response:
    """
    Embed an uploaded audio file in the page, or speak an uploaded text file.
    """
    if request.method == "GET":
        content = await render_template("embed.html")
        return Response(content)

    form = await request.form
    files = await request.files
    options = build_options(form)

    if files.get("audio"):
        upload = files["audio"]
        data = upload.read()
        mimetype = sniff_audio_mimetype(data)
        if mimetype is None:
            raise ValueError("The uploaded file is not a recognized audio format.")

        logger.info(f"Embedding uploaded audio: {mimetype} {len(data)} bytes")
        title = os.path.splitext(upload.filename or "")[0]
        speech = Speech(title, "", data, mimetype, "upload")

    elif files.get("transcript"):
        upload = files["transcript"]
        charset = form.get("charset") or None
        try:
            text, charset = smart_decode(upload.read(), charset)
        except LookupError:
            raise ValueError(f"Unknown charset: {charset}")
        logger.info(f"Speaking uploaded transcript decoded as {charset}")

        text = prepare_text(text)
        synthesizer = make_synthesizer(text, options)
        speech = await get_speech(synthesizer)

    else:
        raise ValueError("No file was uploaded.")

    return await render_speech(speech, options)


if __name__ == "__main__":
    app.config["DEBUG"] = True
    app.config["SERVER_NAME"] = "localhost:8000"
    app.run()
