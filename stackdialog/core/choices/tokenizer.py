"""기본 토크나이저

공백/구두점/기호 영역에서 끊고, BMP 밖 코드포인트(이모지 등)는 각각 독립 토큰으로 만든다.
normalized는 소문자 변환 결과.
"""

from typing import Optional

from stackdialog.core.choices.models import Token

# (시작, 끝) 포함 범위. 제어문자/공백, ASCII·Latin-1 구두점, 수식 기호,
# 일반 구두점 ~ 기타 기호(BMP 이모지 포함), 보조 구두점
BREAKING_RANGES: tuple[tuple[int, int], ...] = (
    (0x0000, 0x002F),
    (0x003A, 0x0040),
    (0x005B, 0x0060),
    (0x007B, 0x00BF),
    (0x02B9, 0x036F),
    (0x2000, 0x2BFF),
    (0x2E00, 0x2E7F),
)


def _is_breaking_char(ch: str) -> bool:
    code = ord(ch)
    return any(low <= code <= high for low, high in BREAKING_RANGES)


def _is_astral(ch: str) -> bool:
    return ord(ch) > 0xFFFF


def _append_token(tokens: list[Token], token: Optional[Token], end: int) -> None:
    if token is not None:
        token.end = end
        token.normalized = token.text.lower()
        tokens.append(token)


def default_tokenizer(text: str, locale: Optional[str] = None) -> list[Token]:
    """text를 Token 목록으로 분해. locale은 현재 사용하지 않는다."""
    tokens: list[Token] = []
    token: Optional[Token] = None

    for i, ch in enumerate(text or ""):
        if _is_breaking_char(ch):
            _append_token(tokens, token, i - 1)
            token = None
        elif _is_astral(ch):
            _append_token(tokens, token, i - 1)
            token = None
            tokens.append(Token(start=i, end=i, text=ch, normalized=ch))
        elif token is None:
            token = Token(start=i, end=0, text=ch, normalized="")
        else:
            token.text += ch

    _append_token(tokens, token, len(text or "") - 1)
    return tokens
