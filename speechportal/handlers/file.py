from speechportal.handlers.base import TemplateHandler


class FileDownloadHandler(TemplateHandler):
    template = "speech/file-download.html"

    def get_context(self):
        context = super().get_context()
        context["mimetype"] = self.speech.mimetype
        context["data_url"] = self.speech.data_url
        context["filename"] = self.speech.filename
        return context
