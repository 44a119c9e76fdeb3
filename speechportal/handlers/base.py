from __future__ import annotations

from typing import ClassVar

from quart import Response, render_template

from speechportal.synthesizers.base import Speech


class BaseHandler:
    """
    Handler for presenting synthesized speech to the browser.
    """

    async def render(self) -> Response:
        raise NotImplementedError

    @classmethod
    def from_speech(cls, speech: Speech):
        raise NotImplementedError


class StreamHandler(BaseHandler):
    """
    Send the audio bytes straight through the HTTP connection.
    """

    def __init__(self, speech: Speech, as_attachment: bool = False):
        self.speech = speech
        self.as_attachment = as_attachment

    async def render(self) -> Response:
        response = Response(self.speech.audio, content_type=self.speech.mimetype)
        if self.as_attachment:
            disposition = "attachment"
        else:
            disposition = "inline"
        response.headers["Content-Disposition"] = (
            f'{disposition}; filename="{self.speech.filename}"'
        )
        return response

    @classmethod
    def from_speech(cls, speech: Speech) -> StreamHandler:
        return cls(speech)


class TemplateHandler(BaseHandler):
    """
    Render the speech as HTML, with the audio embedded inside the page.
    """

    template: ClassVar[str]

    def __init__(self, speech: Speech):
        self.speech = speech

    async def render(self) -> Response:
        context = self.get_context()
        content = await render_template(self.template, **context)
        return Response(content)

    @classmethod
    def from_speech(cls, speech: Speech) -> TemplateHandler:
        return cls(speech)

    def get_context(self) -> dict:
        return {"speech": self.speech}
