"""
turkmorf: contextless morphological analysis of Turkish.

Quick start:
    >>> from turkmorf import LexiconLoader, create_parser
    >>> parser = create_parser(LexiconLoader().load_default())
    >>> [result.format() for result in parser.parse("kitabım")]
    ['kitap+Noun+A3sg+P1sg[ım]+Nom']
"""

__version__ = "0.1.0"

from turkmorf.errors import (
    DuplicateNodeError,
    GraphFrozenError,
    InvalidLexemeError,
    MorphologyError,
    NoDefaultStateError,
    SuffixGraphError,
    UnhandledSpecialRootError,
    UnknownLetterError,
)
from turkmorf.model import (
    Lexeme,
    LexemeAttribute,
    PhoneticAttribute,
    PhoneticExpectation,
    PrimaryPos,
    Root,
    SecondaryPos,
)
from turkmorf.phonetics import calculate_phonetic_attributes
from turkmorf.root_generator import RootGenerator, RootMapRootFinder, build_root_map
from turkmorf.suffix_form_graph import SuffixFormGraph
from turkmorf.lexicon import LexiconLoader
from turkmorf.parser import ContextlessMorphologicalParser, ParseResult, create_parser

__all__ = [
    'ContextlessMorphologicalParser',
    'DuplicateNodeError',
    'GraphFrozenError',
    'InvalidLexemeError',
    'Lexeme',
    'LexemeAttribute',
    'LexiconLoader',
    'MorphologyError',
    'NoDefaultStateError',
    'ParseResult',
    'PhoneticAttribute',
    'PhoneticExpectation',
    'PrimaryPos',
    'Root',
    'RootGenerator',
    'RootMapRootFinder',
    'SecondaryPos',
    'SuffixFormGraph',
    'SuffixGraphError',
    'UnhandledSpecialRootError',
    'UnknownLetterError',
    'build_root_map',
    'calculate_phonetic_attributes',
    'create_parser',
]
