"""
Suffix forms (allomorphs) and the selection of one form for a phonetic context.

A suffix is declared with ordered forms written in a small template language:

    A   a / e by last-vowel frontness            (lAr -> lar, ler)
    I   ı / i / u / ü by frontness and rounding   (Im -> ım, im, um, üm)
    D   t after a voiceless letter, else d        (DA -> da, ta, de, te)
    C   ç after a voiceless letter, else c        (CI -> cı, çı, ...)
    +x  optional letter: a consonant is only emitted after a vowel and a
        vowel only after a consonant              (+yI -> yı after a vowel, ı after a consonant)

Any other character is copied as-is. Placeholders are resolved letter by
letter, so harmony follows the letters already emitted by the same form.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .alphabet import get_letter
from .model import NO_EXPECTATIONS, PhoneticAttribute, PhoneticExpectation
from .phonetics import calculate_new_phonetic_attributes

OPTIONAL_MARKER = "+"


# -----------------------------------------------------------------------------
# --- Preconditions
# -----------------------------------------------------------------------------

class Condition:
    """A predicate over the phonetic attributes a suffix form is applied to."""

    def matches(self, phonetic_attributes: PhoneticAttribute) -> bool:
        raise NotImplementedError

    def __and__(self, other: "Condition") -> "Condition":
        return _AllOf(self, other)

    def __or__(self, other: "Condition") -> "Condition":
        return _AnyOf(self, other)

    def __invert__(self) -> "Condition":
        return _Not(self)


class HasPhoneticAttribute(Condition):
    def __init__(self, attribute: PhoneticAttribute):
        self.attribute = attribute

    def matches(self, phonetic_attributes: PhoneticAttribute) -> bool:
        return self.attribute in phonetic_attributes

    def __repr__(self) -> str:
        return f"has({self.attribute.name})"


class _AllOf(Condition):
    def __init__(self, *conditions: Condition):
        self.conditions = conditions

    def matches(self, phonetic_attributes):
        return all(condition.matches(phonetic_attributes) for condition in self.conditions)

    def __repr__(self):
        return "(" + " & ".join(repr(c) for c in self.conditions) + ")"


class _AnyOf(Condition):
    def __init__(self, *conditions: Condition):
        self.conditions = conditions

    def matches(self, phonetic_attributes):
        return any(condition.matches(phonetic_attributes) for condition in self.conditions)

    def __repr__(self):
        return "(" + " | ".join(repr(c) for c in self.conditions) + ")"


class _Not(Condition):
    def __init__(self, condition: Condition):
        self.condition = condition

    def matches(self, phonetic_attributes):
        return not self.condition.matches(phonetic_attributes)

    def __repr__(self):
        return f"~{self.condition!r}"


def has(attribute: PhoneticAttribute) -> Condition:
    return HasPhoneticAttribute(attribute)


def doesnt_have(attribute: PhoneticAttribute) -> Condition:
    return ~HasPhoneticAttribute(attribute)


# -----------------------------------------------------------------------------
# --- Forms and applications
# -----------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class SuffixForm:
    """One allomorph of a suffix: a surface template plus an optional precondition."""

    template: str
    precondition: Optional[Condition] = None

    def is_applicable(self, phonetic_attributes: PhoneticAttribute) -> bool:
        return self.precondition is None or self.precondition.matches(phonetic_attributes)

    @property
    def always_empty(self) -> bool:
        return not self.template

    def __repr__(self) -> str:
        if self.precondition is None:
            return f"SuffixForm({self.template!r})"
        return f"SuffixForm({self.template!r}, {self.precondition!r})"


@dataclass(frozen=True)
class SuffixFormApplication:
    """The outcome of applying a suffix in a phonetic context."""

    suffix: object
    form: SuffixForm
    surface: str
    phonetic_attributes: PhoneticAttribute

    def __repr__(self) -> str:
        return f"{self.suffix.name}[{self.surface}]"


def _resolve_placeholder(char: str, attrs: PhoneticAttribute) -> str:
    if char == "A":
        return "e" if PhoneticAttribute.LastVowelFrontal in attrs else "a"
    if char == "I":
        frontal = PhoneticAttribute.LastVowelFrontal in attrs
        rounded = PhoneticAttribute.LastVowelRounded in attrs
        if frontal:
            return "ü" if rounded else "i"
        return "u" if rounded else "ı"
    if char == "D":
        return "t" if PhoneticAttribute.LastLetterVoiceless in attrs else "d"
    if char == "C":
        return "ç" if PhoneticAttribute.LastLetterVoiceless in attrs else "c"
    return char


def apply_template(template: str, phonetic_attributes: PhoneticAttribute) -> str:
    """Resolve a form template against the attributes of the preceding string."""
    surface = []
    running = phonetic_attributes
    index = 0
    while index < len(template):
        char = template[index]
        optional = char == OPTIONAL_MARKER
        if optional:
            index += 1
            char = template[index]

        letter = _resolve_placeholder(char, running)
        index += 1

        if optional:
            if get_letter(letter).vowel:
                if PhoneticAttribute.LastLetterVowel in running:
                    continue
            elif PhoneticAttribute.LastLetterConsonant in running:
                continue

        surface.append(letter)
        running = calculate_new_phonetic_attributes(running, letter)

    return "".join(surface)


def select_form(suffix, phonetic_attributes: PhoneticAttribute) -> Optional[SuffixFormApplication]:
    """
    Pick the first applicable form of `suffix` for the given attributes.

    Returns None when no form's precondition matches, meaning the suffix
    cannot follow in this phonetic context.
    """
    for form in suffix.forms:
        if not form.is_applicable(phonetic_attributes):
            continue
        surface = apply_template(form.template, phonetic_attributes)
        return SuffixFormApplication(
            suffix=suffix,
            form=form,
            surface=surface,
            phonetic_attributes=calculate_new_phonetic_attributes(phonetic_attributes, surface),
        )
    return None


def satisfies_expectations(surface: str, expectations: PhoneticExpectation) -> bool:
    """
    Check a surface string against pending phonetic expectations.

    An empty surface defers the check to the next non-empty form.
    """
    if expectations == NO_EXPECTATIONS or not surface:
        return True
    first_is_vowel = get_letter(surface[0]).vowel
    if PhoneticExpectation.VowelStart in expectations and not first_is_vowel:
        return False
    if PhoneticExpectation.ConsonantStart in expectations and first_is_vowel:
        return False
    return True
