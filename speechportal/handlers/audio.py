from speechportal.handlers.base import TemplateHandler


class AudioHandler(TemplateHandler):
    """
    Render speech using an inline <audio> tag.
    """

    template = "speech/audio.html"

    def get_context(self):
        context = super().get_context()
        context["data_url"] = self.speech.data_url
        context["size"] = len(self.speech.audio)
        return context
