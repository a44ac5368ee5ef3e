"""
Root generation: expanding a lexeme into the surface roots it can present.

A lexeme such as "kitap [A:Voicing]" shows up in running text as "kitap"
(kitap, kitaplar) and as "kitab" (kitabı, kitabım). Each surface root carries
the phonetic attributes that gate which suffix forms may follow it, and the
phonetic expectations it places on the very next suffix form.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .errors import InvalidLexemeError, UnhandledSpecialRootError
from .model import (
    NO_EXPECTATIONS,
    Lexeme,
    LexemeAttribute,
    PhoneticAttribute,
    PhoneticExpectation,
    PrimaryPos,
    Root,
    discard,
)
from .phonetics import apply_inverse_harmony, calculate_phonetic_attributes, has_vowel, voice_last_letter

logger = logging.getLogger(__name__)

MODIFIERS_TO_WATCH = frozenset({
    LexemeAttribute.Doubling,
    LexemeAttribute.LastVowelDrop,
    LexemeAttribute.ProgressiveVowelDrop,
    LexemeAttribute.InverseHarmony,
    LexemeAttribute.Voicing,
    LexemeAttribute.VoicingOpt,
    LexemeAttribute.Special,
    LexemeAttribute.EndsWithAyn,
})

# Irregular roots of Special lexemes, keyed on (lemma, primary pos).
# A None pos applies to every part of speech of the lemma.
ROOT_CHANGES: Dict[Tuple[str, Optional[PrimaryPos]], str] = {
    ("ben", PrimaryPos.Pronoun): "ban",        # bana
    ("sen", PrimaryPos.Pronoun): "san",        # sana
    ("demek", PrimaryPos.Verb): "di",          # diyor, diyecek
    ("yemek", PrimaryPos.Verb): "yi",          # yiyor, yiyecek
    ("hepsi", PrimaryPos.Pronoun): "hep",      # hepimiz
    ("ora", PrimaryPos.Pronoun): "or",         # orda
    ("bura", PrimaryPos.Pronoun): "bur",       # burda
    ("şura", PrimaryPos.Pronoun): "şur",       # şurda
    ("nere", PrimaryPos.Pronoun): "ner",       # nerde
    ("içeri", None): "içer",                   # içerde
    ("dışarı", None): "dışar",                 # dışarda
    ("birbiri", PrimaryPos.Pronoun): "birbir", # birbirimiz
}


def find_root_change(lexeme: Lexeme) -> Optional[str]:
    """Look up the irregular root, trying the exact pos before the wildcard."""
    changed = ROOT_CHANGES.get((lexeme.lemma, lexeme.primary_pos))
    if not changed:
        changed = ROOT_CHANGES.get((lexeme.lemma, None))
    return changed


class RootGenerator:
    """Turns lexemes into immutable roots."""

    def generate_all(self, lexemes: Iterable[Lexeme]) -> Set[Root]:
        roots: Set[Root] = set()
        count = 0
        for lexeme in lexemes:
            roots.update(self.generate(lexeme))
            count += 1
        logger.info(f"Generated {len(roots)} roots from {count} lexemes")
        return roots

    def generate(self, lexeme: Lexeme) -> Set[Root]:
        """
        Generate every root of a single lexeme.

        Raises:
            UnhandledSpecialRootError: Special lexeme missing from ROOT_CHANGES.
            InvalidLexemeError: a modifier cannot be applied to the lemma root.
            UnknownLetterError: the lemma root has a non-Turkish letter.
        """
        if not lexeme.lemma_root:
            raise InvalidLexemeError(f"Lexeme has an empty root: {lexeme}")

        if lexeme.attributes & MODIFIERS_TO_WATCH:
            return self._generate_modified_roots(lexeme)

        phonetic_attributes = calculate_phonetic_attributes(lexeme.lemma_root, lexeme.attributes)
        return {Root(lexeme.lemma_root, lexeme, phonetic_attributes, NO_EXPECTATIONS)}

    def _generate_modified_roots(self, lexeme: Lexeme) -> Set[Root]:
        attributes = lexeme.attributes

        if LexemeAttribute.Special in attributes:
            return self._handle_special_roots(lexeme)

        if LexemeAttribute.EndsWithAyn in attributes:
            return self._handle_ayn(lexeme)

        lemma_root = lexeme.lemma_root
        modified_seq = lemma_root

        original_attrs = calculate_phonetic_attributes(lemma_root)
        modified_attrs = original_attrs

        original_expectations = NO_EXPECTATIONS
        modified_expectations = NO_EXPECTATIONS

        if LexemeAttribute.Voicing in attributes or LexemeAttribute.VoicingOpt in attributes:
            voiced = voice_last_letter(modified_seq)
            if voiced is None:
                raise InvalidLexemeError(f"Cannot voice the last letter of {lexeme}")
            modified_seq = voiced
            modified_attrs = discard(modified_attrs, PhoneticAttribute.LastLetterVoicelessStop)

            if LexemeAttribute.VoicingOpt not in attributes:
                original_expectations |= PhoneticExpectation.ConsonantStart

            modified_expectations |= PhoneticExpectation.VowelStart

        if LexemeAttribute.Doubling in attributes:
            modified_seq += modified_seq[-1]
            original_expectations |= PhoneticExpectation.ConsonantStart
            modified_expectations |= PhoneticExpectation.VowelStart

        if LexemeAttribute.LastVowelDrop in attributes:
            if len(modified_seq) < 2:
                raise InvalidLexemeError(f"Root too short to drop its last vowel: {lexeme}")
            modified_seq = modified_seq[:-2] + modified_seq[-1]
            if lexeme.primary_pos is not PrimaryPos.Verb:
                original_expectations |= PhoneticExpectation.ConsonantStart

            modified_expectations |= PhoneticExpectation.VowelStart

        if LexemeAttribute.InverseHarmony in attributes:
            original_attrs = apply_inverse_harmony(original_attrs)
            modified_attrs = apply_inverse_harmony(modified_attrs)

        if LexemeAttribute.ProgressiveVowelDrop in attributes:
            modified_seq = modified_seq[:-1]
            if not modified_seq:
                raise InvalidLexemeError(f"Progressive vowel drop empties the root: {lexeme}")
            if has_vowel(modified_seq):
                modified_attrs = calculate_phonetic_attributes(modified_seq)
            modified_expectations |= PhoneticExpectation.VowelStart

        original_root = Root(lemma_root, lexeme, original_attrs, original_expectations)
        modified_root = Root(modified_seq, lexeme, modified_attrs, modified_expectations)

        if original_root == modified_root:
            return {original_root}

        logger.debug(f"Modified root {modified_root} generated for {lexeme}")
        return {original_root, modified_root}

    def _handle_ayn(self, lexeme: Lexeme) -> Set[Root]:
        # Roots are generated once without EndsWithAyn, then each one gets a
        # consonant-final twin that expects a vowel-initial suffix (camii).
        # All emitted roots carry the original lexeme, attribute included.
        roots_without_ayn = self._generate_modified_roots(lexeme.without_attribute(LexemeAttribute.EndsWithAyn))

        roots = set(roots_without_ayn)
        for root in roots_without_ayn:
            ayn_attrs = discard(root.phonetic_attributes, PhoneticAttribute.LastLetterVowel)
            ayn_attrs |= PhoneticAttribute.LastLetterConsonant
            roots.add(Root(root.sequence, root.lexeme, ayn_attrs, PhoneticExpectation.VowelStart))

        return {
            Root(root.sequence, lexeme, root.phonetic_attributes, root.phonetic_expectations)
            for root in roots
        }

    def _handle_special_roots(self, lexeme: Lexeme) -> Set[Root]:
        changed_seq = find_root_change(lexeme)
        if changed_seq is None:
            raise UnhandledSpecialRootError(lexeme)

        modified_lexeme = lexeme.without_attribute(LexemeAttribute.Special)
        unchanged_seq = lexeme.lemma_root

        unchanged_root = Root(
            unchanged_seq,
            modified_lexeme,
            calculate_phonetic_attributes(unchanged_seq, modified_lexeme.attributes),
            NO_EXPECTATIONS,
        )
        changed_root = Root(
            changed_seq,
            modified_lexeme,
            calculate_phonetic_attributes(changed_seq, modified_lexeme.attributes),
            NO_EXPECTATIONS,
        )
        return {unchanged_root, changed_root}


# -----------------------------------------------------------------------------
# --- Root lookup
# -----------------------------------------------------------------------------

def _root_sort_key(root: Root):
    lexeme = root.lexeme
    return (
        root.sequence,
        lexeme.lemma,
        lexeme.primary_pos.value,
        lexeme.secondary_pos.value if lexeme.secondary_pos else "",
        int(root.phonetic_attributes),
        int(root.phonetic_expectations),
        sorted(attr.value for attr in lexeme.attributes),
    )


def build_root_map(roots: Iterable[Root]) -> Dict[str, List[Root]]:
    """Group roots by surface sequence, in a stable order."""
    root_map: Dict[str, List[Root]] = {}
    for root in sorted(roots, key=_root_sort_key):
        root_map.setdefault(root.sequence, []).append(root)
    return root_map


class RootMapRootFinder:
    """Finds every root whose sequence is a prefix of a surface form."""

    def __init__(self, root_map: Dict[str, List[Root]]):
        self._root_map = {sequence: tuple(roots) for sequence, roots in root_map.items()}
        self._max_length = max((len(sequence) for sequence in self._root_map), default=0)

    def find_roots(self, surface: str) -> List[Root]:
        found: List[Root] = []
        for length in range(1, min(len(surface), self._max_length) + 1):
            found.extend(self._root_map.get(surface[:length], ()))
        return found

    def __len__(self) -> int:
        return sum(len(roots) for roots in self._root_map.values())
