"""
The morphotactic graph: which suffixes may follow which, independent of
their surface realization.

States live in an arena owned by the graph and are identified by a stable
integer index, so loops in the grammar never become ownership cycles. The
graph is built once, frozen, and only read afterwards.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..errors import GraphFrozenError, SuffixGraphError
from ..model import PrimaryPos, Root
from ..suffix_forms import SuffixForm

logger = logging.getLogger(__name__)


class SuffixGraphStateType(Enum):
    Transfer = "Transfer"
    Derivational = "Derivational"
    Terminal = "Terminal"


class Suffix:
    """A morpheme with its ordered allomorphs."""

    rendered = True

    def __init__(self, name: str, forms: Sequence[SuffixForm], pretty_name: str = None):
        if not forms:
            raise SuffixGraphError(f"Suffix {name} has no forms")
        self.name = name
        self.forms: Tuple[SuffixForm, ...] = tuple(forms)
        self.pretty_name = pretty_name or name

    @property
    def always_empty(self) -> bool:
        return all(form.always_empty for form in self.forms)

    def __repr__(self) -> str:
        return f"Suffix({self.name})"


class FreeTransitionSuffix(Suffix):
    """An empty, unrendered move between two states."""

    rendered = False

    def __init__(self, name: str):
        super().__init__(name, [SuffixForm("")])


class SuffixGraphState:
    """A node of the morphotactic graph."""

    def __init__(self, name: str, state_type: SuffixGraphStateType, primary_pos: PrimaryPos):
        self.name = name
        self.state_type = state_type
        self.primary_pos = primary_pos
        self.index: Optional[int] = None
        self.outputs: List[Tuple[Suffix, "SuffixGraphState"]] = []

    def __repr__(self) -> str:
        return f"{self.name}({self.state_type.value})"


class SuffixGraph:
    """Arena of states and their suffix transitions."""

    def __init__(self):
        self._states: List[SuffixGraphState] = []
        self._states_by_name: Dict[str, SuffixGraphState] = {}
        self._frozen = False

    # --- construction ---

    def register_state(self, name: str, state_type: SuffixGraphStateType, primary_pos: PrimaryPos) -> SuffixGraphState:
        self._check_not_frozen()
        if name in self._states_by_name:
            raise SuffixGraphError(f"State {name} is already registered")
        state = SuffixGraphState(name, state_type, primary_pos)
        state.index = len(self._states)
        self._states.append(state)
        self._states_by_name[name] = state
        return state

    def add_transition(self, source: SuffixGraphState, suffix: Suffix, target: SuffixGraphState) -> None:
        self._check_not_frozen()
        for state in (source, target):
            if state.index is None or self._states[state.index] is not state:
                raise SuffixGraphError(f"State {state} does not belong to this graph")
        source.outputs.append((suffix, target))

    def freeze(self) -> "SuffixGraph":
        """Validate and lock the graph. Freezing twice is a no-op."""
        if self._frozen:
            return self
        self._check_zero_width_cycles()
        self._frozen = True
        logger.debug(f"Suffix graph frozen with {len(self._states)} states")
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_not_frozen(self) -> None:
        if self._frozen:
            raise GraphFrozenError("Suffix graph is frozen")

    def _check_zero_width_cycles(self) -> None:
        # A loop of always-empty suffixes would let a parse spin forever
        # without consuming input.
        visiting, done = set(), set()

        def visit(state: SuffixGraphState, path: List[str]) -> None:
            visiting.add(state.index)
            for suffix, target in state.outputs:
                if not suffix.always_empty:
                    continue
                if target.index in visiting:
                    cycle = " -> ".join(path + [target.name])
                    raise SuffixGraphError(f"Cycle of empty suffixes: {cycle}")
                if target.index not in done:
                    visit(target, path + [target.name])
            visiting.discard(state.index)
            done.add(state.index)

        for state in self._states:
            if state.index not in done:
                visit(state, [state.name])

    # --- queries ---

    def states(self) -> Iterator[SuffixGraphState]:
        return iter(self._states)

    def state_by_index(self, index: int) -> SuffixGraphState:
        return self._states[index]

    def get_state(self, name: str) -> SuffixGraphState:
        return self._states_by_name[name]

    def outgoing(self, state: SuffixGraphState) -> Sequence[Tuple[Suffix, SuffixGraphState]]:
        return tuple(state.outputs)

    def default_state_for_root(self, root: Root) -> Optional[SuffixGraphState]:
        """Starting state for a root; subclasses decide, None means no placement."""
        return None

    def __len__(self) -> int:
        return len(self._states)
