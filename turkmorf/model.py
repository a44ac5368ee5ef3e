"""
Core value types: phonetic attribute sets, lexemes and roots.

Phonetic attribute sets and expectation sets are IntFlag bitsets, so a whole
set is one small integer. That keeps them cheap to hash and compare, which
matters because suffix-form graph nodes are keyed on them.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntFlag
from typing import FrozenSet, List, Optional


class PhoneticAttribute(IntFlag):
    """Properties of a string's terminal phonology."""

    LastLetterVowel = 1 << 0
    LastLetterConsonant = 1 << 1
    LastLetterVoiced = 1 << 2
    LastLetterVoiceless = 1 << 3
    LastLetterVoicelessStop = 1 << 4
    LastVowelFrontal = 1 << 5
    LastVowelBack = 1 << 6
    LastVowelRounded = 1 << 7
    LastVowelUnrounded = 1 << 8
    FirstLetterVowel = 1 << 9
    FirstLetterConsonant = 1 << 10
    HasNoVowel = 1 << 11


class PhoneticExpectation(IntFlag):
    """Constraint on the first letter of the next non-empty suffix form."""

    VowelStart = 1 << 0
    ConsonantStart = 1 << 1


NO_ATTRIBUTES = PhoneticAttribute(0)
NO_EXPECTATIONS = PhoneticExpectation(0)

LAST_LETTER_MASK = (
    PhoneticAttribute.LastLetterVowel
    | PhoneticAttribute.LastLetterConsonant
    | PhoneticAttribute.LastLetterVoiced
    | PhoneticAttribute.LastLetterVoiceless
    | PhoneticAttribute.LastLetterVoicelessStop
)

LAST_VOWEL_MASK = (
    PhoneticAttribute.LastVowelFrontal
    | PhoneticAttribute.LastVowelBack
    | PhoneticAttribute.LastVowelRounded
    | PhoneticAttribute.LastVowelUnrounded
    | PhoneticAttribute.HasNoVowel
)

FIRST_LETTER_MASK = PhoneticAttribute.FirstLetterVowel | PhoneticAttribute.FirstLetterConsonant


def discard(flags, *members):
    """Return `flags` with `members` removed (works for any IntFlag type)."""
    value = int(flags)
    for member in members:
        value &= ~int(member)
    return type(flags)(value)


def flag_names(flags) -> List[str]:
    """Names of the members set in `flags`, in declaration order."""
    return [member.name for member in type(flags) if member in flags]


class LexemeAttribute(Enum):
    """Morpho-phonological modifiers and grammatical flags of a lexeme."""

    Voicing = "Voicing"
    VoicingOpt = "VoicingOpt"
    NoVoicing = "NoVoicing"
    Doubling = "Doubling"
    LastVowelDrop = "LastVowelDrop"
    ProgressiveVowelDrop = "ProgressiveVowelDrop"
    InverseHarmony = "InverseHarmony"
    Special = "Special"
    EndsWithAyn = "EndsWithAyn"
    CompoundP3sg = "CompoundP3sg"
    NoQuote = "NoQuote"
    Aorist_A = "Aorist_A"
    Aorist_I = "Aorist_I"
    Causative_t = "Causative_t"
    Causative_Ir = "Causative_Ir"
    Causative_It = "Causative_It"
    Causative_Ar = "Causative_Ar"
    Causative_dIr = "Causative_dIr"
    Passive_In = "Passive_In"
    Passive_InIl = "Passive_InIl"
    Reflexive = "Reflexive"
    Reciprocal = "Reciprocal"
    NonTransitive = "NonTransitive"


class PrimaryPos(Enum):
    """Primary part of speech; the value is the short form printed on output."""

    Noun = "Noun"
    Adjective = "Adj"
    Adverb = "Adv"
    Conjunction = "Conj"
    Interjection = "Interj"
    Verb = "Verb"
    Pronoun = "Pron"
    Numeral = "Num"
    Determiner = "Det"
    PostPositive = "Postp"
    Question = "Ques"
    Duplicator = "Dup"
    Punctuation = "Punc"
    Unknown = "Unk"

    @property
    def short_form(self) -> str:
        return self.value

    @classmethod
    def from_short_form(cls, short_form: str) -> "PrimaryPos":
        return cls(short_form)


class SecondaryPos(Enum):
    """Secondary part of speech tags used by the lexicon."""

    Personal = "Pers"
    Demonstrative = "Demons"
    Question = "Ques"
    Reflexive = "Reflex"
    Quantitative = "Quant"
    Time = "Time"
    Proper = "Prop"
    Abbreviation = "Abbr"
    Cardinal = "Card"
    Ordinal = "Ord"
    Distribution = "Dist"
    Range = "Range"
    Ratio = "Ratio"
    Real = "Real"
    Digits = "Digits"

    @property
    def short_form(self) -> str:
        return self.value

    @classmethod
    def from_short_form(cls, short_form: str) -> "SecondaryPos":
        return cls(short_form)


@dataclass(frozen=True)
class Lexeme:
    """A dictionary entry."""

    lemma: str
    lemma_root: str
    primary_pos: PrimaryPos
    secondary_pos: Optional[SecondaryPos] = None
    attributes: FrozenSet[LexemeAttribute] = field(default_factory=frozenset)

    def __post_init__(self):
        # accept any iterable of attributes but always store a frozenset
        object.__setattr__(self, "attributes", frozenset(self.attributes))

    def has_attribute(self, attribute: LexemeAttribute) -> bool:
        return attribute in self.attributes

    def replace_attributes(self, attributes) -> "Lexeme":
        return replace(self, attributes=frozenset(attributes))

    def without_attribute(self, attribute: LexemeAttribute) -> "Lexeme":
        return self.replace_attributes(self.attributes - {attribute})

    def __str__(self) -> str:
        pos = self.primary_pos.short_form
        if self.secondary_pos is not None:
            pos += f",{self.secondary_pos.short_form}"
        attrs = ",".join(sorted(a.value for a in self.attributes))
        return f"{self.lemma}({self.lemma_root}) [{pos}; {attrs}]"


@dataclass(frozen=True)
class Root:
    """A concrete surface root of a lexeme."""

    sequence: str
    lexeme: Lexeme
    phonetic_attributes: PhoneticAttribute = NO_ATTRIBUTES
    phonetic_expectations: PhoneticExpectation = NO_EXPECTATIONS

    def __str__(self) -> str:
        expectations = ",".join(flag_names(self.phonetic_expectations))
        return f"{self.sequence} <{self.lexeme.lemma}> {{{expectations}}}"

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "lemma": self.lexeme.lemma,
            "lemma_root": self.lexeme.lemma_root,
            "primary_pos": self.lexeme.primary_pos.short_form,
            "secondary_pos": self.lexeme.secondary_pos.short_form if self.lexeme.secondary_pos else None,
            "phonetic_attributes": flag_names(self.phonetic_attributes),
            "phonetic_expectations": flag_names(self.phonetic_expectations),
        }
