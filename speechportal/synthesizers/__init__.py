from speechportal.synthesizers.base import BaseSynthesizer
from speechportal.synthesizers.gtts import GTTSSynthesizer
from speechportal.synthesizers.tone import ToneSynthesizer

SYNTHESIZERS: dict[str, type[BaseSynthesizer]] = {
    GTTSSynthesizer.name: GTTSSynthesizer,
    ToneSynthesizer.name: ToneSynthesizer,
}


def build_synthesizer(
    name: str,
    text: str,
    lang: str = "en",
    slow: bool = False,
    **kwargs,
) -> BaseSynthesizer:
    synthesizer_class: type[BaseSynthesizer]

    if name in SYNTHESIZERS:
        synthesizer_class = SYNTHESIZERS[name]
    else:
        raise ValueError(f"Unsupported speech engine: {name}")

    return synthesizer_class(text, lang, slow, **kwargs)
