"""
Loading lexemes from the text dictionary format.

One entry per line, blank lines and `#` comments ignored:

    kitap
    demek [P:Verb; A:Special]
    ben [P:Pron,Pers; A:Special]
    saat [A:NoVoicing,InverseHarmony]
    akıl [A:LastVowelDrop; R:akıl]

`P:` gives the primary and optional secondary part of speech (short forms),
`A:` the lexeme attributes and `R:` an explicit lemma root. Anything left out
is inferred from the lemma.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

from .alphabet import LETTERS, turkish_lower
from .errors import InvalidLexemeError
from .model import Lexeme, LexemeAttribute, PrimaryPos, SecondaryPos

logger = logging.getLogger(__name__)

DEFAULT_LEXICON_PATH = Path(__file__).parent / "resources" / "master_dictionary.txt"

_ENTRY_RE = re.compile(r"^(?P<lemma>[^\s\[\]]+)\s*(?:\[(?P<meta>[^\[\]]*)\])?$")

VERB_ENDINGS = ("mak", "mek")

_VOICING_MODIFIERS = {LexemeAttribute.Voicing, LexemeAttribute.VoicingOpt, LexemeAttribute.NoVoicing}
_AORIST_MODIFIERS = {LexemeAttribute.Aorist_A, LexemeAttribute.Aorist_I}


def syllable_count(text: str) -> int:
    return sum(1 for char in text if char in LETTERS and LETTERS[char].vowel)


def _ends_with_voiceless_stop(text: str) -> bool:
    letter = LETTERS.get(text[-1])
    return letter is not None and letter.voiceless_stop


class LexiconLoader:
    """Parses dictionary lines into Lexeme values."""

    def load_from_lines(self, lines: Iterable[str]) -> List[Lexeme]:
        lexemes = []
        for line_number, line in enumerate(lines, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                lexemes.append(self.parse_entry(line))
            except InvalidLexemeError as e:
                raise InvalidLexemeError(f"Line {line_number}: {e}") from e
        logger.debug(f"Loaded {len(lexemes)} lexemes")
        return lexemes

    def load_from_file(self, path: Union[str, Path]) -> List[Lexeme]:
        path = Path(path)
        logger.info(f"Loading lexicon from {path}")
        with open(path, "r", encoding="utf-8") as f:
            return self.load_from_lines(f)

    def load_default(self) -> List[Lexeme]:
        return self.load_from_file(DEFAULT_LEXICON_PATH)

    def parse_entry(self, line: str) -> Lexeme:
        """
        Parse a single dictionary entry.

        Raises:
            InvalidLexemeError: if the entry is malformed or names an unknown
                part of speech or attribute.
        """
        match = _ENTRY_RE.match(line.strip())
        if match is None:
            raise InvalidLexemeError(f"Malformed entry: {line!r}")

        lemma = turkish_lower(match.group("lemma"))
        primary_pos: Optional[PrimaryPos] = None
        secondary_pos: Optional[SecondaryPos] = None
        attributes: Set[LexemeAttribute] = set()
        lemma_root: Optional[str] = None

        for part in (match.group("meta") or "").split(";"):
            part = part.strip()
            if not part:
                continue
            key, sep, value = part.partition(":")
            key, value = key.strip(), value.strip()
            if not sep or not value:
                raise InvalidLexemeError(f"Malformed entry metadata {part!r} in {line!r}")

            if key == "P":
                primary_pos, secondary_pos = self._parse_pos(value)
            elif key == "A":
                attributes.update(self._parse_attributes(value))
            elif key == "R":
                lemma_root = turkish_lower(value)
            else:
                raise InvalidLexemeError(f"Unknown entry field {key!r} in {line!r}")

        if primary_pos is None:
            primary_pos = PrimaryPos.Verb if self._looks_like_verb(lemma) else PrimaryPos.Noun

        if lemma_root is None:
            lemma_root = lemma
            if primary_pos is PrimaryPos.Verb and self._looks_like_verb(lemma):
                lemma_root = lemma[:-3]

        attributes |= self._infer_attributes(lemma_root, primary_pos, attributes)
        return Lexeme(lemma, lemma_root, primary_pos, secondary_pos, frozenset(attributes))

    @staticmethod
    def _looks_like_verb(lemma: str) -> bool:
        return len(lemma) > 3 and lemma.endswith(VERB_ENDINGS)

    @staticmethod
    def _parse_pos(value: str):
        names = [name.strip() for name in value.split(",")]
        try:
            primary_pos = PrimaryPos.from_short_form(names[0])
            secondary_pos = SecondaryPos.from_short_form(names[1]) if len(names) > 1 else None
        except ValueError as e:
            raise InvalidLexemeError(f"Unknown part of speech {value!r}") from e
        return primary_pos, secondary_pos

    @staticmethod
    def _parse_attributes(value: str) -> Set[LexemeAttribute]:
        attributes = set()
        for name in value.split(","):
            name = name.strip()
            try:
                attributes.add(LexemeAttribute(name))
            except ValueError as e:
                raise InvalidLexemeError(f"Unknown lexeme attribute {name!r}") from e
        return attributes

    @staticmethod
    def _infer_attributes(lemma_root: str, primary_pos: PrimaryPos, given: Set[LexemeAttribute]) -> Set[LexemeAttribute]:
        inferred = set()
        if not lemma_root:
            return inferred

        if primary_pos in (PrimaryPos.Noun, PrimaryPos.Adjective) and not (given & _VOICING_MODIFIERS):
            if lemma_root.endswith("nk") or (
                syllable_count(lemma_root) > 1 and _ends_with_voiceless_stop(lemma_root)
            ):
                inferred.add(LexemeAttribute.Voicing)

        if primary_pos is PrimaryPos.Verb:
            last = LETTERS.get(lemma_root[-1])
            if last is not None and last.vowel:
                inferred.add(LexemeAttribute.ProgressiveVowelDrop)
            if not (given & _AORIST_MODIFIERS):
                if syllable_count(lemma_root) <= 1:
                    inferred.add(LexemeAttribute.Aorist_A)
                else:
                    inferred.add(LexemeAttribute.Aorist_I)

        return inferred
