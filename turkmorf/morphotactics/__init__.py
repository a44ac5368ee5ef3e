from turkmorf.morphotactics.suffix_graph import (
    FreeTransitionSuffix,
    Suffix,
    SuffixGraph,
    SuffixGraphState,
    SuffixGraphStateType,
)
from turkmorf.morphotactics.basic_suffix_graph import BasicSuffixGraph

__all__ = [
    'BasicSuffixGraph',
    'FreeTransitionSuffix',
    'Suffix',
    'SuffixGraph',
    'SuffixGraphState',
    'SuffixGraphStateType',
]
