"""
The Turkish alphabet.

Each letter carries the handful of phonological flags the analyzer needs:
vowel or consonant, front or back, rounded or unrounded, voiceless, and
continuant (so voiceless stops can be told apart from voiceless fricatives).
Upper-case letters resolve to the same records as their lower-case forms.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .errors import UnknownLetterError


@dataclass(frozen=True)
class TurkicLetter:
    """A single letter and its phonological flags."""

    char: str
    vowel: bool = False
    frontal: bool = False
    rounded: bool = False
    voiceless: bool = False
    continuant: bool = False

    @property
    def consonant(self) -> bool:
        return not self.vowel

    @property
    def voiceless_stop(self) -> bool:
        return self.voiceless and not self.continuant


# -----------------------------------------------------------------------------
# --- Letter inventory
# -----------------------------------------------------------------------------

_VOWELS = [
    TurkicLetter("a", vowel=True),
    TurkicLetter("e", vowel=True, frontal=True),
    TurkicLetter("ı", vowel=True),
    TurkicLetter("i", vowel=True, frontal=True),
    TurkicLetter("o", vowel=True, rounded=True),
    TurkicLetter("ö", vowel=True, frontal=True, rounded=True),
    TurkicLetter("u", vowel=True, rounded=True),
    TurkicLetter("ü", vowel=True, frontal=True, rounded=True),
    # circumflexed vowels of loanwords (kâğıt, îmân, mahkûm)
    TurkicLetter("â", vowel=True),
    TurkicLetter("î", vowel=True, frontal=True),
    TurkicLetter("û", vowel=True, rounded=True),
]

_CONSONANTS = [
    TurkicLetter("b"),
    TurkicLetter("c"),
    TurkicLetter("ç", voiceless=True),
    TurkicLetter("d"),
    TurkicLetter("f", voiceless=True, continuant=True),
    TurkicLetter("g"),
    TurkicLetter("ğ", continuant=True),
    TurkicLetter("h", voiceless=True, continuant=True),
    TurkicLetter("j", continuant=True),
    TurkicLetter("k", voiceless=True),
    TurkicLetter("l", continuant=True),
    TurkicLetter("m", continuant=True),
    TurkicLetter("n", continuant=True),
    TurkicLetter("p", voiceless=True),
    TurkicLetter("r", continuant=True),
    TurkicLetter("s", voiceless=True, continuant=True),
    TurkicLetter("ş", voiceless=True, continuant=True),
    TurkicLetter("t", voiceless=True),
    TurkicLetter("v", continuant=True),
    TurkicLetter("y", continuant=True),
    TurkicLetter("z", continuant=True),
]

LETTERS: Dict[str, TurkicLetter] = {letter.char: letter for letter in _VOWELS + _CONSONANTS}

_UPPER_TO_LOWER = {"I": "ı", "İ": "i"}
for _char in list(LETTERS):
    if _char not in ("ı", "i"):
        _UPPER_TO_LOWER[_char.upper()] = _char

VOICING_MAP = {
    "p": "b",
    "ç": "c",
    "t": "d",
    "k": "ğ",
    "g": "ğ",
}

VOWELS = frozenset(letter.char for letter in _VOWELS)


def turkish_lower(text: str) -> str:
    """Lower-case `text` with Turkish dotted/dotless i rules."""
    return "".join(_UPPER_TO_LOWER.get(char, char) for char in text).lower()


def get_letter(char: str, context: str = None) -> TurkicLetter:
    """
    Look up the letter record for a single character.

    Raises:
        UnknownLetterError: if the character is not part of the alphabet.
    """
    letter = LETTERS.get(char)
    if letter is None:
        lowered = _UPPER_TO_LOWER.get(char)
        if lowered is not None:
            letter = LETTERS[lowered]
    if letter is None:
        raise UnknownLetterError(char, context)
    return letter


def is_vowel(char: str) -> bool:
    return get_letter(char).vowel


def voice(char: str) -> Optional[str]:
    """
    Return the voiced counterpart of a voiceless stop, or None.

    Besides p, ç, t and k, a final g also softens to ğ (katalog -> kataloğu).
    """
    return VOICING_MAP.get(turkish_lower(char))


def validate(text: str) -> str:
    """Return `text` unchanged after checking every character is a letter."""
    for char in text:
        get_letter(char, text)
    return text
