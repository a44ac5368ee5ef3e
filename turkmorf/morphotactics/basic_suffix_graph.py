"""
A basic Turkish morphotactic graph.

Covers noun inflection (agreement, possession, case) with a few productive
derivations, adjectives, adverbs, verb polarity, tense and agreement, the
infinitive, causatives, pronouns (including personal pronouns with their
irregular genitives), numerals and the uninflected word classes.

State names follow the convention <POS>_<WHAT HAS BEEN APPLIED>.
"""
from __future__ import annotations

from typing import Dict, Optional, Sequence, Union

from ..model import LexemeAttribute, PhoneticAttribute, PrimaryPos, Root, SecondaryPos
from ..root_generator import find_root_change
from ..suffix_forms import SuffixForm, has
from .suffix_graph import FreeTransitionSuffix, Suffix, SuffixGraph, SuffixGraphState, SuffixGraphStateType

TRANSFER = SuffixGraphStateType.Transfer
DERIVATIONAL = SuffixGraphStateType.Derivational
TERMINAL = SuffixGraphStateType.Terminal


def _suffix(name: str, *forms: Union[str, SuffixForm], pretty_name: str = None) -> Suffix:
    return Suffix(name, [form if isinstance(form, SuffixForm) else SuffixForm(form) for form in forms], pretty_name)


# -----------------------------------------------------------------------------
# --- Case paradigms
# -----------------------------------------------------------------------------
# Plain cases follow bare stems and first/second person possessives; the
# n-buffered set follows third person possessives (kitabını, kitabında).

CASE_TEMPLATES = {
    "standard": [
        ("Nom", ""), ("Acc", "+yI"), ("Dat", "+yA"), ("Loc", "DA"),
        ("Abl", "DAn"), ("Gen", "+nIn"), ("Ins", "+ylA"),
    ],
    "n_buffered": [
        ("Nom", ""), ("Acc", "nI"), ("Dat", "nA"), ("Loc", "nDA"),
        ("Abl", "nDAn"), ("Gen", "nIn"), ("Ins", "+ylA"),
    ],
    # benim, bizim
    "first_person": [
        ("Nom", ""), ("Acc", "+yI"), ("Dat", "+yA"), ("Loc", "DA"),
        ("Abl", "DAn"), ("Gen", "Im"), ("Ins", "+ylA"),
    ],
    # onu, ona, onunla
    "personal_third": [
        ("Nom", ""), ("Acc", "nI"), ("Dat", "nA"), ("Loc", "nDA"),
        ("Abl", "nDAn"), ("Gen", "nIn"), ("Ins", "nInlA"),
    ],
}

POSSESSIVE_TEMPLATES = [
    ("Pnon", ""), ("P1sg", "+Im"), ("P2sg", "+In"), ("P1pl", "+ImIz"), ("P2pl", "+InIz"),
]
THIRD_PERSON_POSSESSIVE_TEMPLATES = [("P3sg", "+sI"), ("P3pl", "lArI")]

# Agreement paradigms of finite verbs
VERB_AGREEMENT_TEMPLATES = {
    "standard": [
        ("A1sg", "+Im"), ("A2sg", "sIn"), ("A3sg", ""),
        ("A1pl", "+Iz"), ("A2pl", "sInIz"), ("A3pl", "lAr"),
    ],
    # geldim, gelsem
    "past": [
        ("A1sg", "m"), ("A2sg", "n"), ("A3sg", ""),
        ("A1pl", "k"), ("A2pl", "nIz"), ("A3pl", "lAr"),
    ],
    # gelecek, geleceksin: consonant-initial agreements keep the final k
    "future_k": [("A2sg", "sIn"), ("A3sg", ""), ("A2pl", "sInIz"), ("A3pl", "lAr")],
    # geleceğim, geleceğiz
    "future_g": [("A1sg", "Im"), ("A1pl", "Iz")],
    "imperative": [("A2sg", ""), ("A3sg", "sIn"), ("A2pl", "+yIn"), ("A3pl", "sInlAr")],
}

PERSONAL_PRONOUNS = {
    "ben": ("A1sg", "first_person"),
    "sen": ("A2sg", "standard"),
    "o": ("A3sg", "personal_third"),
    "biz": ("A1pl", "first_person"),
    "siz": ("A2pl", "standard"),
    "onlar": ("A3pl", "standard"),
}

UNINFLECTED = [
    PrimaryPos.Conjunction,
    PrimaryPos.Interjection,
    PrimaryPos.Determiner,
    PrimaryPos.PostPositive,
    PrimaryPos.Question,
    PrimaryPos.Duplicator,
    PrimaryPos.Punctuation,
]


class BasicSuffixGraph(SuffixGraph):
    """Noun, adjective, adverb, verb, pronoun, numeral and particle morphotactics."""

    def __init__(self):
        super().__init__()
        self._default_states: Dict[PrimaryPos, SuffixGraphState] = {}
        self._personal_pronoun_states: Dict[str, SuffixGraphState] = {}

        self._register_nouns()
        self._register_adjectives()
        self._register_adverbs()
        self._register_verbs()
        self._register_pronouns()
        self._register_numerals()
        self._register_uninflected()

        self._connect_derivations()

    def default_state_for_root(self, root: Root) -> Optional[SuffixGraphState]:
        lexeme = root.lexeme
        if lexeme.primary_pos is PrimaryPos.Pronoun and lexeme.secondary_pos is SecondaryPos.Personal:
            state = self._personal_pronoun_states.get(lexeme.lemma)
            if state is not None:
                return state
        if lexeme.primary_pos is PrimaryPos.Verb:
            if root.sequence == find_root_change(lexeme):
                return self.VERB_DE_YE_ROOT
            if (LexemeAttribute.ProgressiveVowelDrop in lexeme.attributes
                    and root.sequence == lexeme.lemma_root[:-1]):
                return self.VERB_PROGRESSIVE_VOWEL_DROP_ROOT
        return self._default_states.get(lexeme.primary_pos)

    # --- helpers ---

    def _connect_all(self, source, templates: Sequence, target, suffixes: Dict[str, Suffix] = None) -> None:
        for name, template in templates:
            suffix = _suffix(name, template)
            if suffixes is not None:
                suffixes[name] = suffix
            self.add_transition(source, suffix, target)

    def _case_state(self, prefix: str, variant: str, primary_pos: PrimaryPos, with_case) -> SuffixGraphState:
        state = self.register_state(f"{prefix}_WITH_POSSESSION_{variant.upper()}", TRANSFER, primary_pos)
        self._connect_all(state, CASE_TEMPLATES[variant], with_case)
        return state

    # -------------------------------------------------------------------------
    # --- Nouns
    # -------------------------------------------------------------------------

    def _register_nouns(self):
        self.NOUN_ROOT = self.register_state("NOUN_ROOT", TRANSFER, PrimaryPos.Noun)
        self.NOUN_WITH_AGREEMENT = self.register_state("NOUN_WITH_AGREEMENT", TRANSFER, PrimaryPos.Noun)
        self.NOUN_WITH_CASE = self.register_state("NOUN_WITH_CASE", TERMINAL, PrimaryPos.Noun)
        self.NOUN_NOM_DERIV = self.register_state("NOUN_NOM_DERIV", DERIVATIONAL, PrimaryPos.Noun)

        self.NOUN_WITH_POSSESSION = self._case_state("NOUN", "standard", PrimaryPos.Noun, self.NOUN_WITH_CASE)
        self.NOUN_WITH_POSSESSION_3 = self._case_state("NOUN", "n_buffered", PrimaryPos.Noun, self.NOUN_WITH_CASE)

        self.add_transition(self.NOUN_ROOT, _suffix("A3sg", ""), self.NOUN_WITH_AGREEMENT)
        self.add_transition(self.NOUN_ROOT, _suffix("A3pl", "lAr"), self.NOUN_WITH_AGREEMENT)

        self._connect_all(self.NOUN_WITH_AGREEMENT, POSSESSIVE_TEMPLATES, self.NOUN_WITH_POSSESSION)
        self._connect_all(self.NOUN_WITH_AGREEMENT, THIRD_PERSON_POSSESSIVE_TEMPLATES, self.NOUN_WITH_POSSESSION_3)

        # derivations hang off the bare nominative
        self.add_transition(self.NOUN_WITH_POSSESSION, _suffix("Nom", ""), self.NOUN_NOM_DERIV)

        self._default_states[PrimaryPos.Noun] = self.NOUN_ROOT

    # -------------------------------------------------------------------------
    # --- Adjectives and adverbs
    # -------------------------------------------------------------------------

    def _register_adjectives(self):
        self.ADJECTIVE_ROOT = self.register_state("ADJECTIVE_ROOT", TRANSFER, PrimaryPos.Adjective)
        self.ADJECTIVE_TERMINAL = self.register_state("ADJECTIVE_TERMINAL", TERMINAL, PrimaryPos.Adjective)
        self.ADJECTIVE_DERIV = self.register_state("ADJECTIVE_DERIV", DERIVATIONAL, PrimaryPos.Adjective)

        self.add_transition(self.ADJECTIVE_ROOT, FreeTransitionSuffix("Adj_Free_Transition_1"), self.ADJECTIVE_TERMINAL)
        self.add_transition(self.ADJECTIVE_ROOT, FreeTransitionSuffix("Adj_Free_Transition_2"), self.ADJECTIVE_DERIV)

        self._default_states[PrimaryPos.Adjective] = self.ADJECTIVE_ROOT

    def _register_adverbs(self):
        self.ADVERB_ROOT = self.register_state("ADVERB_ROOT", TRANSFER, PrimaryPos.Adverb)
        self.ADVERB_TERMINAL = self.register_state("ADVERB_TERMINAL", TERMINAL, PrimaryPos.Adverb)

        self.add_transition(self.ADVERB_ROOT, FreeTransitionSuffix("Adv_Free_Transition"), self.ADVERB_TERMINAL)

        self._default_states[PrimaryPos.Adverb] = self.ADVERB_ROOT

    # -------------------------------------------------------------------------
    # --- Verbs
    # -------------------------------------------------------------------------

    def _register_verbs(self):
        self.VERB_ROOT = self.register_state("VERB_ROOT", TRANSFER, PrimaryPos.Verb)
        self.VERB_ROOT_DERIV = self.register_state("VERB_ROOT_DERIV", DERIVATIONAL, PrimaryPos.Verb)
        self.VERB_WITH_POLARITY = self.register_state("VERB_WITH_POLARITY", TRANSFER, PrimaryPos.Verb)
        self.VERB_BEFORE_PROG = self.register_state("VERB_BEFORE_PROG", TRANSFER, PrimaryPos.Verb)
        # başl (başlamak), ok (okumak): only the progressive follows
        self.VERB_PROGRESSIVE_VOWEL_DROP_ROOT = self.register_state(
            "VERB_PROGRESSIVE_VOWEL_DROP_ROOT", TRANSFER, PrimaryPos.Verb)
        # di (demek), yi (yemek)
        self.VERB_DE_YE_ROOT = self.register_state("VERB_DE_YE_ROOT", TRANSFER, PrimaryPos.Verb)
        self.VERB_DE_YE_WITH_POLARITY = self.register_state("VERB_DE_YE_WITH_POLARITY", TRANSFER, PrimaryPos.Verb)
        self.VERB_POLARITY_DERIV = self.register_state("VERB_POLARITY_DERIV", DERIVATIONAL, PrimaryPos.Verb)
        self.VERB_TERMINAL = self.register_state("VERB_TERMINAL", TERMINAL, PrimaryPos.Verb)

        tense_states = {}
        for paradigm, templates in VERB_AGREEMENT_TEMPLATES.items():
            state = self.register_state(f"VERB_WITH_TENSE_{paradigm.upper()}", TRANSFER, PrimaryPos.Verb)
            self._connect_all(state, templates, self.VERB_TERMINAL)
            tense_states[paradigm] = state

        self.add_transition(self.VERB_ROOT, FreeTransitionSuffix("Verb_Free_Transition_1"), self.VERB_ROOT_DERIV)
        self.add_transition(self.VERB_ROOT, _suffix("Pos", ""), self.VERB_WITH_POLARITY)
        self.add_transition(self.VERB_ROOT, _suffix("Neg", "mA"), self.VERB_WITH_POLARITY)
        # gelmiyor, başlamıyor: the negative vowel gives way to the progressive one
        self.add_transition(self.VERB_ROOT, _suffix("Neg_Prog", "m", pretty_name="Neg"), self.VERB_BEFORE_PROG)
        self.add_transition(self.VERB_PROGRESSIVE_VOWEL_DROP_ROOT, _suffix("Pos", ""), self.VERB_BEFORE_PROG)

        # vowel-final verbs reach the progressive through their dropped roots
        progressive = Suffix("Prog", [SuffixForm("Iyor", has(PhoneticAttribute.LastLetterConsonant))])
        self.add_transition(self.VERB_WITH_POLARITY, _suffix("Past", "DI"), tense_states["past"])
        self.add_transition(self.VERB_WITH_POLARITY, _suffix("Cond", "sA"), tense_states["past"])
        self.add_transition(self.VERB_WITH_POLARITY, _suffix("Narr", "mIş"), tense_states["standard"])
        self.add_transition(self.VERB_WITH_POLARITY, progressive, tense_states["standard"])
        self.add_transition(self.VERB_WITH_POLARITY, _suffix("Fut_k", "+yAcAk", pretty_name="Fut"), tense_states["future_k"])
        self.add_transition(self.VERB_WITH_POLARITY, _suffix("Fut_g", "+yAcAğ", pretty_name="Fut"), tense_states["future_g"])
        self.add_transition(self.VERB_WITH_POLARITY, _suffix("Imp", ""), tense_states["imperative"])
        self.add_transition(self.VERB_BEFORE_PROG, progressive, tense_states["standard"])

        # diyor, yiyecek
        self.add_transition(self.VERB_DE_YE_ROOT, _suffix("Pos", ""), self.VERB_DE_YE_WITH_POLARITY)
        self.add_transition(self.VERB_DE_YE_WITH_POLARITY, _suffix("Prog", "yor"), tense_states["standard"])
        self.add_transition(
            self.VERB_DE_YE_WITH_POLARITY, _suffix("Fut_k", "yAcAk", pretty_name="Fut"), tense_states["future_k"])
        self.add_transition(
            self.VERB_DE_YE_WITH_POLARITY, _suffix("Fut_g", "yAcAğ", pretty_name="Fut"), tense_states["future_g"])

        self.add_transition(self.VERB_WITH_POLARITY, FreeTransitionSuffix("Verb_Free_Transition_2"), self.VERB_POLARITY_DERIV)

        # yaptırmak, başlatmak: "t" after a vowel, "dIr" elsewhere
        causative = Suffix("Caus", [
            SuffixForm("t", has(PhoneticAttribute.LastLetterVowel)),
            SuffixForm("DIr"),
        ])
        self.add_transition(self.VERB_ROOT_DERIV, causative, self.VERB_ROOT)

        self._default_states[PrimaryPos.Verb] = self.VERB_ROOT

    # -------------------------------------------------------------------------
    # --- Pronouns
    # -------------------------------------------------------------------------

    def _register_pronouns(self):
        self.PRONOUN_ROOT = self.register_state("PRONOUN_ROOT", TRANSFER, PrimaryPos.Pronoun)
        self.PRONOUN_WITH_AGREEMENT = self.register_state("PRONOUN_WITH_AGREEMENT", TRANSFER, PrimaryPos.Pronoun)
        self.PRONOUN_WITH_CASE = self.register_state("PRONOUN_WITH_CASE", TERMINAL, PrimaryPos.Pronoun)

        possession_states = {
            variant: self._case_state("PRONOUN", variant, PrimaryPos.Pronoun, self.PRONOUN_WITH_CASE)
            for variant in CASE_TEMPLATES
        }

        self.add_transition(self.PRONOUN_ROOT, _suffix("A3sg", ""), self.PRONOUN_WITH_AGREEMENT)
        self.add_transition(self.PRONOUN_ROOT, _suffix("A3pl", "lAr"), self.PRONOUN_WITH_AGREEMENT)

        # hepimiz, birbirimiz, burası
        self._connect_all(
            self.PRONOUN_WITH_AGREEMENT,
            [template for template in POSSESSIVE_TEMPLATES if template[0] in ("Pnon", "P1pl", "P2pl")],
            possession_states["standard"],
        )
        self._connect_all(self.PRONOUN_WITH_AGREEMENT, THIRD_PERSON_POSSESSIVE_TEMPLATES, possession_states["n_buffered"])

        for lemma, (agreement, variant) in PERSONAL_PRONOUNS.items():
            tag = agreement.upper()
            root_state = self.register_state(f"PERSONAL_PRONOUN_ROOT_{tag}", TRANSFER, PrimaryPos.Pronoun)
            with_agreement = self.register_state(f"PERSONAL_PRONOUN_WITH_AGREEMENT_{tag}", TRANSFER, PrimaryPos.Pronoun)
            self.add_transition(root_state, _suffix(agreement, ""), with_agreement)
            self.add_transition(with_agreement, _suffix("Pnon", ""), possession_states[variant])
            self._personal_pronoun_states[lemma] = root_state

        self._default_states[PrimaryPos.Pronoun] = self.PRONOUN_ROOT

    # -------------------------------------------------------------------------
    # --- Numerals and uninflected classes
    # -------------------------------------------------------------------------

    def _register_numerals(self):
        self.NUMERAL_ROOT = self.register_state("NUMERAL_ROOT", TRANSFER, PrimaryPos.Numeral)
        self.NUMERAL_TERMINAL = self.register_state("NUMERAL_TERMINAL", TERMINAL, PrimaryPos.Numeral)
        self.NUMERAL_DERIV = self.register_state("NUMERAL_DERIV", DERIVATIONAL, PrimaryPos.Numeral)

        self.add_transition(self.NUMERAL_ROOT, FreeTransitionSuffix("Num_Free_Transition_1"), self.NUMERAL_TERMINAL)
        self.add_transition(self.NUMERAL_ROOT, FreeTransitionSuffix("Num_Free_Transition_2"), self.NUMERAL_DERIV)

        self._default_states[PrimaryPos.Numeral] = self.NUMERAL_ROOT

    def _register_uninflected(self):
        for pos in UNINFLECTED:
            name = pos.name.upper()
            root_state = self.register_state(f"{name}_ROOT", TRANSFER, pos)
            terminal = self.register_state(f"{name}_TERMINAL", TERMINAL, pos)
            self.add_transition(root_state, FreeTransitionSuffix(f"{pos.short_form}_Free_Transition"), terminal)
            self._default_states[pos] = root_state

    # -------------------------------------------------------------------------
    # --- Derivations between parts of speech
    # -------------------------------------------------------------------------

    def _connect_derivations(self):
        # kitaplı, kitapsız, kitaplık, kitapçı
        self.add_transition(self.NOUN_NOM_DERIV, _suffix("With", "lI"), self.ADJECTIVE_ROOT)
        self.add_transition(self.NOUN_NOM_DERIV, _suffix("Without", "sIz"), self.ADJECTIVE_ROOT)
        self.add_transition(self.NOUN_NOM_DERIV, _suffix("Ness", "lIk"), self.NOUN_ROOT)
        self.add_transition(self.NOUN_NOM_DERIV, _suffix("Agt", "CI"), self.NOUN_ROOT)

        # güzel -> güzeli, güzelce
        self.add_transition(self.ADJECTIVE_DERIV, _suffix("Zero", ""), self.NOUN_ROOT)
        self.add_transition(self.ADJECTIVE_DERIV, _suffix("Ly", "CA"), self.ADVERB_ROOT)

        # gelmek
        self.add_transition(self.VERB_POLARITY_DERIV, _suffix("Inf", "mAk"), self.NOUN_ROOT)

        # beşe, beşinci
        self.add_transition(self.NUMERAL_DERIV, _suffix("Zero", ""), self.NOUN_ROOT)
        self.add_transition(self.NUMERAL_DERIV, _suffix("Ord", "+IncI"), self.ADJECTIVE_ROOT)
