"""
The contextless morphological parser for Turkish.

Given a surface word, the parser enumerates every decomposition into a root
and a chain of suffix forms that the morphotactic graph and the phonetic
rules allow. No context is used and no ranking is attempted: "kitapları" has
three analyses and all three are returned.

    >>> parser = create_parser(LexiconLoader().load_default())
    >>> [result.format() for result in parser.parse("kitabıma")]
    ['kitap+Noun+A3sg+P1sg[ım]+Dat[a]']
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .alphabet import turkish_lower, validate
from .errors import NoDefaultStateError
from .logging_config import log_with_context
from .model import NO_EXPECTATIONS, Lexeme, PhoneticExpectation, Root, flag_names
from .morphotactics import BasicSuffixGraph, SuffixGraph
from .root_generator import RootGenerator, RootMapRootFinder, build_root_map
from .suffix_form_graph import SuffixFormGraph, SuffixFormGraphEdge, SuffixFormGraphNode
from .suffix_forms import SuffixFormApplication, satisfies_expectations

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """A root and the ordered suffix-form transitions applied to it."""

    root: Root
    transitions: Tuple[SuffixFormGraphEdge, ...] = ()

    @property
    def applications(self) -> List[SuffixFormApplication]:
        return [edge.application for edge in self.transitions]

    @property
    def suffix_surface(self) -> str:
        return "".join(edge.surface for edge in self.transitions)

    @property
    def surface(self) -> str:
        return self.root.sequence + self.suffix_surface

    def format(self) -> str:
        """
        Render as lemma+Pos[+SecondaryPos](+Suffix[form])*.

        Empty forms are printed without brackets, free transitions are not
        printed, and a derivational suffix is preceded by the part of speech
        it derives (kitap+Noun+A3sg+Pnon+Nom+Adj+With[lı]).
        """
        lexeme = self.root.lexeme
        parts = [lexeme.lemma, lexeme.primary_pos.short_form]
        if lexeme.secondary_pos is not None:
            parts.append(lexeme.secondary_pos.short_form)

        for edge in self.transitions:
            suffix = edge.application.suffix
            if not suffix.rendered:
                continue
            if edge.derivational:
                parts.append(edge.target.state.primary_pos.short_form)
            if edge.surface:
                parts.append(f"{suffix.pretty_name}[{edge.surface}]")
            else:
                parts.append(suffix.pretty_name)

        return "+".join(parts)

    def to_dict(self) -> dict:
        return {
            "analysis": self.format(),
            "root": self.root.to_dict(),
            "suffixes": [
                {"name": edge.application.suffix.pretty_name, "form": edge.surface}
                for edge in self.transitions
                if edge.application.suffix.rendered
            ],
        }

    def __str__(self) -> str:
        return self.format()


@dataclass
class ParseToken:
    """A partial parse on the BFS frontier."""

    root: Root
    node: SuffixFormGraphNode
    remaining: str
    transitions: Tuple[SuffixFormGraphEdge, ...] = ()
    pending_expectations: PhoneticExpectation = field(default=NO_EXPECTATIONS)

    @property
    def accepted(self) -> bool:
        # A root that promised a vowel-initial suffix cannot end the word;
        # a promised consonant start is met by the word boundary.
        return (
            not self.remaining
            and self.node.terminal
            and PhoneticExpectation.VowelStart not in self.pending_expectations
        )


class ContextlessMorphologicalParser:
    """Breadth-first search from roots through the suffix-form graph."""

    def __init__(self, suffix_form_graph: SuffixFormGraph, root_finder: RootMapRootFinder):
        self.suffix_form_graph = suffix_form_graph
        self.root_finder = root_finder

    def parse(self, surface: str, cancel: Optional[threading.Event] = None) -> List[ParseResult]:
        """
        Parse a single word.

        Args:
            surface: The word to analyze; it is lower-cased with Turkish rules.
            cancel: Optional event checked between frontier pops. When set,
                the parses found so far are returned.

        Returns:
            Every analysis in the order its terminal was reached; an empty
            list when the word has none.

        Raises:
            UnknownLetterError: if the word has a non-Turkish character.
        """
        surface = validate(turkish_lower(surface.strip()))
        if not surface:
            return []

        seeds = self._seed(surface)
        frontier = deque(seeds)
        results: List[ParseResult] = []

        while frontier:
            if cancel is not None and cancel.is_set():
                logger.info(f"Parse of '{surface}' cancelled with {len(results)} results")
                break

            token = frontier.popleft()
            if token.accepted:
                results.append(ParseResult(token.root, token.transitions))

            for edge in self.suffix_form_graph.edges(token.node):
                successor = self._advance(token, edge)
                if successor is not None:
                    frontier.append(successor)

        if logger.isEnabledFor(logging.DEBUG):
            log_with_context(
                f"Parsed '{surface}': {len(results)} results",
                {"seeds": [str(token.root) for token in seeds], "results": [result.format() for result in results]},
                logger=logger,
            )
        return results

    def _seed(self, surface: str) -> List[ParseToken]:
        tokens = []
        for root in self.root_finder.find_roots(surface):
            try:
                node = self.suffix_form_graph.node_for_root(root)
            except NoDefaultStateError as e:
                logger.debug(f"Pruning root: {e}")
                continue
            tokens.append(ParseToken(
                root=root,
                node=node,
                remaining=surface[len(root.sequence):],
                pending_expectations=root.phonetic_expectations,
            ))
        return tokens

    @staticmethod
    def _advance(token: ParseToken, edge: SuffixFormGraphEdge) -> Optional[ParseToken]:
        form = edge.surface
        if not token.remaining.startswith(form):
            return None
        if not satisfies_expectations(form, token.pending_expectations):
            return None
        # expectations only ever apply to the first non-empty suffix form
        pending = token.pending_expectations if not form else NO_EXPECTATIONS
        return ParseToken(
            root=token.root,
            node=edge.target,
            remaining=token.remaining[len(form):],
            transitions=token.transitions + (edge,),
            pending_expectations=pending,
        )

    # --- batches ---

    def parse_with_timeout(self, surface: str, timeout: Optional[float] = None) -> List[ParseResult]:
        """Parse with a wall-clock limit; on expiry the partial result is returned."""
        if not timeout:
            return self.parse(surface)

        cancel = threading.Event()
        timer = threading.Timer(timeout, cancel.set)
        timer.daemon = True
        timer.start()
        try:
            return self.parse(surface, cancel)
        finally:
            timer.cancel()

    def parse_many(
        self,
        words: Sequence[str],
        workers: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> List[List[ParseResult]]:
        """Parse words on a thread pool sharing this parser's graph, keeping input order."""
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.parse_with_timeout, word, timeout) for word in words]
            return [future.result() for future in futures]


def create_parser(
    lexemes: Iterable[Lexeme],
    suffix_graph: Optional[SuffixGraph] = None,
    warm_up: bool = False,
) -> ContextlessMorphologicalParser:
    """
    Build a parser from lexemes.

    Root generation and graph validation happen here, so a bad lexicon or a
    broken grammar fails at startup rather than mid-parse.
    """
    roots = RootGenerator().generate_all(lexemes)
    root_finder = RootMapRootFinder(build_root_map(roots))

    suffix_form_graph = SuffixFormGraph(suffix_graph if suffix_graph is not None else BasicSuffixGraph())
    if warm_up:
        suffix_form_graph.warm_up(roots)

    logger.info(f"Parser ready with {len(root_finder)} roots")
    return ContextlessMorphologicalParser(suffix_form_graph, root_finder)


def describe_root(root: Root) -> str:
    """One-line description of a root for listings."""
    attrs = ",".join(flag_names(root.phonetic_attributes))
    expectations = ",".join(flag_names(root.phonetic_expectations)) or "-"
    return f"{root.sequence}\t{root.lexeme.lemma}+{root.lexeme.primary_pos.short_form}\t{attrs}\t{expectations}"
