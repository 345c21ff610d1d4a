"""프롬프트 문화권 모델 (선택지 구분자, 예/아니오 단어)"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PromptCultureModel:
    locale: str
    separator: str
    inline_or: str
    inline_or_more: str
    yes_in_language: str
    no_in_language: str


CHINESE = PromptCultureModel("zh-cn", ", ", " 要么 ", "， 要么 ", "是的", "不")
DUTCH = PromptCultureModel("nl-nl", ", ", " of ", ", of ", "Ja", "Nee")
ENGLISH = PromptCultureModel("en-us", ", ", " or ", ", or ", "Yes", "No")
FRENCH = PromptCultureModel("fr-fr", ", ", " ou ", ", ou ", "Oui", "Non")
GERMAN = PromptCultureModel("de-de", ", ", " oder ", ", oder ", "Ja", "Nein")
ITALIAN = PromptCultureModel("it-it", ", ", " o ", " o ", "Si", "No")
JAPANESE = PromptCultureModel("ja-jp", "、 ", " または ", "、 または ", "はい", "いいえ")
PORTUGUESE = PromptCultureModel("pt-br", ", ", " ou ", ", ou ", "Sim", "Não")
SPANISH = PromptCultureModel("es-es", ", ", " o ", ", o ", "Sí", "No")

SUPPORTED_CULTURES: tuple[PromptCultureModel, ...] = (
    CHINESE,
    DUTCH,
    ENGLISH,
    FRENCH,
    GERMAN,
    ITALIAN,
    JAPANESE,
    PORTUGUESE,
    SPANISH,
)


def get_supported_cultures() -> list[PromptCultureModel]:
    return list(SUPPORTED_CULTURES)


def map_to_nearest_language(culture_code: Optional[str]) -> Optional[str]:
    """en-gb → en-us 처럼 지원 문화권 중 같은 언어로 매핑"""
    if not culture_code:
        return culture_code

    code = culture_code.lower()
    supported = [c.locale for c in SUPPORTED_CULTURES]
    if code in supported:
        return code

    prefix = code.split("-")[0].strip()
    for locale in supported:
        if locale.startswith(prefix):
            return locale
    return code


def get_culture(locale: Optional[str]) -> PromptCultureModel:
    """지원하지 않는 문화권이면 영어"""
    mapped = map_to_nearest_language(locale)
    for culture in SUPPORTED_CULTURES:
        if culture.locale == mapped:
            return culture
    return ENGLISH
