"""
Japanese text rules.

Each factory returns a single-argument predicate, usable with
``chain.apply(ja.katakana())`` or ``chain.as_list(ja.zip_code())``.
"""
import re
from typing import Callable

HIRAGANA_PATTERN = r"^[ぁ-んー]*$"
KATAKANA_PATTERN = r"^[ァ-ヶー]*$"
KANA_PATTERN = r"^[ぁ-んァ-ヶー]*$"
HANKAKU_KANA_PATTERN = r"^[｡-ﾟ]*$"
KANJI_PATTERN = r"^[一-龠々]*$"
ZENKAKU_PATTERN = r"^[^ -~｡-ﾟ]*$"
ZIP_CODE_PATTERN = r"^\d{3}-\d{4}$"
TEL_PATTERN = r"^\d{2,5}-\d{1,4}-\d{3,4}$"


def _matcher(pattern: str) -> Callable[[object], bool]:
    compiled = re.compile(pattern)

    def check(value: object) -> bool:
        return isinstance(value, str) and compiled.fullmatch(value) is not None

    return check


def hiragana() -> Callable[[object], bool]:
    return _matcher(HIRAGANA_PATTERN)


def katakana() -> Callable[[object], bool]:
    return _matcher(KATAKANA_PATTERN)


def kana() -> Callable[[object], bool]:
    """Hiragana or katakana."""
    return _matcher(KANA_PATTERN)


def hankaku_kana() -> Callable[[object], bool]:
    """Half-width katakana only."""
    return _matcher(HANKAKU_KANA_PATTERN)


def kanji() -> Callable[[object], bool]:
    return _matcher(KANJI_PATTERN)


def zenkaku() -> Callable[[object], bool]:
    """Full-width characters only (no ASCII, no half-width kana)."""
    return _matcher(ZENKAKU_PATTERN)


def zip_code() -> Callable[[object], bool]:
    """Postal code, 000-0000."""
    return _matcher(ZIP_CODE_PATTERN)


def tel() -> Callable[[object], bool]:
    """Phone number with hyphens, e.g. 03-1234-5678."""
    return _matcher(TEL_PATTERN)
