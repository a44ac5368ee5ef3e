"""
The suffix-form graph: a lazily built automaton over
(morphotactic state, phonetic attribute set) pairs.

Asking "at state S with phonetic context P, which concrete suffix forms can
follow?" is answered once per (S, P) and memoized as a node with outgoing
edges. The graph is shared by every parser thread:

- node lookup is a plain dict read and never blocks;
- node creation is serialized per lock stripe, chosen by the key's hash, so
  a key maps to exactly one node object;
- edge expansion runs at most once per node, under the node's own lock,
  and is published by setting `expanded` after the edge tuple is complete.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, NamedTuple, Optional, Tuple

from .errors import DuplicateNodeError, NoDefaultStateError
from .model import PhoneticAttribute, Root
from .morphotactics.suffix_graph import SuffixGraph, SuffixGraphState, SuffixGraphStateType
from .suffix_forms import SuffixFormApplication, select_form

logger = logging.getLogger(__name__)

LOCK_STRIPES = 64


class SuffixFormGraphNodeKey(NamedTuple):
    state_index: int
    phonetic_attributes: PhoneticAttribute


@dataclass(frozen=True)
class SuffixFormGraphEdge:
    """A concrete suffix form leading to the next node."""

    target: "SuffixFormGraphNode"
    application: SuffixFormApplication
    derivational: bool = False

    @property
    def surface(self) -> str:
        return self.application.surface


class SuffixFormGraphNode:
    """A (state, phonetic attributes) pair with its lazily expanded edges."""

    def __init__(self, key: SuffixFormGraphNodeKey, state: SuffixGraphState, phonetic_attributes: PhoneticAttribute):
        self.key = key
        self.state = state
        self.state_type = state.state_type
        self.phonetic_attributes = phonetic_attributes
        self.edges: Tuple[SuffixFormGraphEdge, ...] = ()
        self.expanded = False
        self._expansion_lock = threading.Lock()

    @property
    def terminal(self) -> bool:
        return self.state_type is SuffixGraphStateType.Terminal

    def __repr__(self) -> str:
        return f"SuffixFormGraphNode({self.state.name}, {int(self.phonetic_attributes)})"


class SuffixFormGraph:
    """Thread-safe, lazily grown map from node keys to nodes."""

    def __init__(self, suffix_graph: SuffixGraph):
        self.suffix_graph = suffix_graph.freeze()
        self._nodes: Dict[SuffixFormGraphNodeKey, SuffixFormGraphNode] = {}
        self._stripes = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _stripe_for(self, key: SuffixFormGraphNodeKey) -> threading.Lock:
        return self._stripes[hash(key) % LOCK_STRIPES]

    # --- nodes ---

    def get_node(self, key: SuffixFormGraphNodeKey) -> Optional[SuffixFormGraphNode]:
        return self._nodes.get(key)

    def add_node(self, key: SuffixFormGraphNodeKey, node: SuffixFormGraphNode) -> SuffixFormGraphNode:
        """
        Insert a node under `key`.

        Raises:
            DuplicateNodeError: if a node already exists for the key.
        """
        with self._stripe_for(key):
            return self._insert(key, node)

    def _insert(self, key, node):
        if key in self._nodes:
            raise DuplicateNodeError(key)
        self._nodes[key] = node
        return node

    def get_or_create_node(self, state: SuffixGraphState, phonetic_attributes: PhoneticAttribute) -> SuffixFormGraphNode:
        key = SuffixFormGraphNodeKey(state.index, phonetic_attributes)
        node = self._nodes.get(key)
        if node is not None:
            return node

        with self._stripe_for(key):
            node = self._nodes.get(key)
            if node is None:
                node = self._insert(key, SuffixFormGraphNode(key, state, phonetic_attributes))
                logger.debug(f"Created suffix form graph node {node}")
        return node

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    # --- edges ---

    def edges(self, node: SuffixFormGraphNode) -> Tuple[SuffixFormGraphEdge, ...]:
        if not node.expanded:
            self.expand(node)
        return node.edges

    def expand(self, node: SuffixFormGraphNode) -> None:
        """Materialize the node's outgoing edges, once."""
        if node.expanded:
            return
        with node._expansion_lock:
            if node.expanded:
                return
            derivational = node.state_type is SuffixGraphStateType.Derivational
            edges = []
            for suffix, target_state in self.suffix_graph.outgoing(node.state):
                application = select_form(suffix, node.phonetic_attributes)
                if application is None:
                    continue
                target = self.get_or_create_node(target_state, application.phonetic_attributes)
                edges.append(SuffixFormGraphEdge(target, application, derivational))
            node.edges = tuple(edges)
            node.expanded = True

    # --- roots ---

    def default_state_for_root(self, root: Root) -> SuffixGraphState:
        state = self.suffix_graph.default_state_for_root(root)
        if state is None:
            raise NoDefaultStateError(root)
        return state

    def node_for_root(self, root: Root) -> SuffixFormGraphNode:
        return self.get_or_create_node(self.default_state_for_root(root), root.phonetic_attributes)

    def warm_up(self, roots: Iterable[Root]) -> int:
        """Pre-create and expand the seed nodes of `roots`; returns the node count."""
        for root in roots:
            try:
                node = self.node_for_root(root)
            except NoDefaultStateError:
                logger.debug(f"Skipping root without a default state: {root}")
                continue
            self.expand(node)
        logger.info(f"Suffix form graph warmed up with {self.node_count} nodes")
        return self.node_count
