"""
Error types raised by the morphology core.

Every error derives from MorphologyError, which is itself a ValueError so
callers that only care about "bad input" can keep catching ValueError.
A word that simply has no analysis is not an error: the parser returns an
empty list for it.
"""


class MorphologyError(ValueError):
    """Base class for all turkmorf errors."""


class UnknownLetterError(MorphologyError):
    """A character outside the Turkish alphabet reached phonetic analysis."""

    def __init__(self, char: str, context: str = None):
        self.char = char
        self.context = context
        message = f"Unknown letter {char!r}"
        if context:
            message += f" in {context!r}"
        super().__init__(message)


class UnhandledSpecialRootError(MorphologyError):
    """A lexeme marked Special has no entry in the irregular root table."""

    def __init__(self, lexeme):
        self.lexeme = lexeme
        super().__init__(f"Unhandled root change for special lexeme: {lexeme}")


class NoDefaultStateError(MorphologyError):
    """The morphotactic graph has no starting state for a root."""

    def __init__(self, root):
        self.root = root
        super().__init__(f"No default state found for root {root}")


class DuplicateNodeError(MorphologyError):
    """A second suffix-form graph node was inserted under an existing key."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Suffix form graph already has a node for key {key}")


class InvalidLexemeError(MorphologyError):
    """A lexicon entry cannot be parsed or its modifiers cannot be realized."""


class SuffixGraphError(MorphologyError):
    """The morphotactic graph declaration is inconsistent."""


class GraphFrozenError(SuffixGraphError):
    """A frozen morphotactic graph was asked to change."""
