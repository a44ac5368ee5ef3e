"""
Phonetic analysis of Turkish character sequences.

Everything here is a pure function of its arguments, so the analyzer can be
shared freely between parser threads.
"""
from __future__ import annotations

from typing import Iterable, Optional

from .alphabet import TurkicLetter, get_letter, voice
from .model import (
    FIRST_LETTER_MASK,
    LAST_VOWEL_MASK,
    LexemeAttribute,
    PhoneticAttribute,
    discard,
)


def _last_letter_attributes(letter: TurkicLetter) -> PhoneticAttribute:
    if letter.vowel:
        return PhoneticAttribute.LastLetterVowel | PhoneticAttribute.LastLetterVoiced

    attrs = PhoneticAttribute.LastLetterConsonant
    if letter.voiceless:
        attrs |= PhoneticAttribute.LastLetterVoiceless
        if letter.voiceless_stop:
            attrs |= PhoneticAttribute.LastLetterVoicelessStop
    else:
        attrs |= PhoneticAttribute.LastLetterVoiced
    return attrs


def _last_vowel_attributes(vowel: Optional[TurkicLetter]) -> PhoneticAttribute:
    if vowel is None:
        return PhoneticAttribute.HasNoVowel

    attrs = PhoneticAttribute.LastVowelFrontal if vowel.frontal else PhoneticAttribute.LastVowelBack
    attrs |= PhoneticAttribute.LastVowelRounded if vowel.rounded else PhoneticAttribute.LastVowelUnrounded
    return attrs


def apply_inverse_harmony(attrs: PhoneticAttribute) -> PhoneticAttribute:
    """Force the last vowel to count as frontal (saat -> saatler)."""
    return discard(attrs, PhoneticAttribute.LastVowelBack) | PhoneticAttribute.LastVowelFrontal


def calculate_phonetic_attributes(
    seq: str,
    lexeme_attributes: Optional[Iterable[LexemeAttribute]] = None,
) -> PhoneticAttribute:
    """
    Derive the phonetic attribute set of a character sequence.

    Args:
        seq: The stem or word to analyze.
        lexeme_attributes: Optional lexeme attributes; InverseHarmony makes the
            last vowel frontal on the resulting set.

    Returns:
        The attribute bitset. The empty string only has HasNoVowel.

    Raises:
        UnknownLetterError: if a character is not a Turkish letter.
    """
    if not seq:
        return PhoneticAttribute.HasNoVowel

    letters = [get_letter(char, seq) for char in seq]

    attrs = PhoneticAttribute.FirstLetterVowel if letters[0].vowel else PhoneticAttribute.FirstLetterConsonant
    attrs |= _last_letter_attributes(letters[-1])
    attrs |= _last_vowel_attributes(next((letter for letter in reversed(letters) if letter.vowel), None))

    if lexeme_attributes and LexemeAttribute.InverseHarmony in lexeme_attributes:
        attrs = apply_inverse_harmony(attrs)

    return attrs


def calculate_new_phonetic_attributes(attrs: PhoneticAttribute, appended: str) -> PhoneticAttribute:
    """
    Attributes of `stem + appended`, given only the stem's attributes.

    First-letter attributes belong to the stem and never change. Last-vowel
    attributes carry over when `appended` contains no vowel.
    """
    if not appended:
        return attrs

    letters = [get_letter(char, appended) for char in appended]

    new_attrs = attrs & FIRST_LETTER_MASK
    new_attrs |= _last_letter_attributes(letters[-1])

    last_vowel = next((letter for letter in reversed(letters) if letter.vowel), None)
    if last_vowel is None:
        new_attrs |= attrs & LAST_VOWEL_MASK
    else:
        new_attrs |= _last_vowel_attributes(last_vowel)

    return new_attrs


def has_vowel(seq: str) -> bool:
    return any(get_letter(char, seq).vowel for char in seq)


def voice_last_letter(seq: str) -> Optional[str]:
    """
    Voice the final letter of `seq` (kitap -> kitab).

    A sequence ending in "nk" voices to "g" (renk -> reng) rather than "ğ".
    Returns None when the last letter has no voiced counterpart.
    """
    if not seq:
        return None
    if seq.endswith("nk"):
        return seq[:-1] + "g"
    voiced = voice(seq[-1])
    if voiced is None:
        return None
    return seq[:-1] + voiced
