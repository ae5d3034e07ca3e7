"""Recognizer priming prompt built from the user profile.

The prompt has three layers:

1. A natural sentence exemplar in the recognizer language, covering the
   language's characteristic letters.
2. Phrases from the user's detected subject domain.
3. The user's own frequent words and top bigrams, as space allows.

The result never exceeds ``max_length`` characters.
"""

from __future__ import annotations

from pydantic import BaseModel

from correction_engine.profile.models import Domain
from correction_engine.profile.store import ProfileStore

DEFAULT_MAX_LENGTH = 500

# Layer 3 is only attempted when at least this much room is left
MIN_TERMS_ROOM = 20
MAX_PROMPT_WORDS = 20
MAX_PROMPT_BIGRAMS = 5

FALLBACK_EXEMPLAR = "Hello, how are you?"

LANGUAGE_EXEMPLARS = {
    "tr": (
        "Merhaba, bugün hava çok güzel. Nasılsınız? İstanbul çok kalabalık bir şehir. "
        "Şirketin toplantısında bütçeyi görüştük. Çocuklar okula gidiyor. "
        "Öğretmen ödevleri kontrol etti. Müşteri memnuniyeti çok önemli. Türkiye'de yaşıyorum."
    ),
    "en": "Hello, how are you today? I'm doing well, thank you.",
    "de": "Hallo, wie geht es Ihnen? Mir geht es gut, danke.",
    "fr": "Bonjour, comment allez-vous? Je vais bien, merci.",
    "es": "Hola, ¿cómo estás? Estoy bien, gracias.",
    "it": "Ciao, come stai? Sto bene, grazie.",
    "pt": "Olá, como vai? Estou bem, obrigado.",
    "ru": "Здравствуйте, как дела? У меня всё хорошо.",
    "ja": "こんにちは、お元気ですか？元気です。",
    "zh": "你好，你怎么样？我很好。",
}

DOMAIN_PHRASES = {
    (Domain.TECHNICAL, "tr"): (
        " Meeting'e gidiyorum. Deploy etmemiz lazım. API endpoint düzelt. Sprint planning yapacağız."
    ),
    (Domain.MEDICAL, "tr"): (
        " Hasta muayene edildi. Tedavi planı hazırlandı. Reçete yazıldı. Tansiyon ölçüldü."
    ),
    (Domain.LEGAL, "tr"): (
        " Mahkeme kararı açıklandı. Dava dosyası incelendi. Sözleşme maddeleri düzenlendi."
    ),
    (Domain.BUSINESS, "tr"): (
        " Toplantı raporu hazırlandı. Müşteri görüşmesi yapıldı. Bütçe planlaması tamamlandı."
    ),
    (Domain.TECHNICAL, "en"): " Let's deploy the API. Check the server logs. Push the commit.",
}


class DynamicPromptPreview(BaseModel):
    """The three prompt layers shown separately."""

    base_prompt: str
    domain_addition: str
    user_terms: str
    total_length: int
    max_length: int


def _language_key(language: str) -> str:
    return language.lower().split("-")[0].split("_")[0]


def _append_terms(terms: str, items: list[str], room: int) -> str:
    """Append comma-separated items while each still fits in ``room``."""
    for item in items:
        if len(terms) + len(item) + 2 > room:
            break
        terms = f"{terms}, {item}" if terms else item
    return terms


def truncate_prompt(prompt: str, max_length: int) -> str:
    """Cut ``prompt`` to ``max_length``, preferring a sentence boundary."""
    if len(prompt) <= max_length:
        return prompt
    cut = prompt[:max_length]
    period = cut.rfind(". ")
    if period >= 0:
        return cut[: period + 1]
    return cut


class DynamicPromptBuilder:
    """Builds the priming prompt from a profile store."""

    def __init__(self, profile_store: ProfileStore, max_length: int = DEFAULT_MAX_LENGTH):
        self.profile_store = profile_store
        self.max_length = max_length

    def _layers(self, language: str) -> tuple[str, str, str]:
        key = _language_key(language)
        profile = self.profile_store.snapshot()

        base = LANGUAGE_EXEMPLARS.get(key, FALLBACK_EXEMPLAR)
        addition = DOMAIN_PHRASES.get((profile.domain, key), "")

        room = self.max_length - len(base) - len(addition)
        terms = ""
        if room > MIN_TERMS_ROOM:
            terms = _append_terms(terms, profile.frequent_words[:MAX_PROMPT_WORDS], room)
            terms = _append_terms(terms, profile.bigrams(MAX_PROMPT_BIGRAMS), room)

        return base, addition, terms

    def build(self, language: str) -> str:
        """Build the prompt for a recognizer language code."""
        base, addition, terms = self._layers(language)
        prompt = base + addition
        if terms:
            prompt = f"{prompt} {terms}"
        return truncate_prompt(prompt, self.max_length)

    def preview(self, language: str) -> DynamicPromptPreview:
        """Return the prompt layers separately, for display."""
        base, addition, terms = self._layers(language)
        total = len(base) + len(addition) + (len(terms) + 1 if terms else 0)
        return DynamicPromptPreview(
            base_prompt=base,
            domain_addition=addition,
            user_terms=terms,
            total_length=min(total, self.max_length),
            max_length=self.max_length,
        )
