"""
Tests for the lazily built suffix-form graph, including concurrent access.
"""
import threading
import unittest

from turkmorf.errors import DuplicateNodeError, NoDefaultStateError
from turkmorf.model import Lexeme, LexemeAttribute, PrimaryPos, Root
from turkmorf.morphotactics import BasicSuffixGraph
from turkmorf.phonetics import calculate_phonetic_attributes
from turkmorf.root_generator import RootGenerator
from turkmorf.suffix_form_graph import SuffixFormGraph, SuffixFormGraphNode, SuffixFormGraphNodeKey


def root_of(lemma, pos=PrimaryPos.Noun):
    return Root(lemma, Lexeme(lemma, lemma, pos), calculate_phonetic_attributes(lemma))


class TestSuffixFormGraph(unittest.TestCase):

    def setUp(self):
        self.graph = SuffixFormGraph(BasicSuffixGraph())
        self.noun_root = self.graph.suffix_graph.get_state("NOUN_ROOT")

    def test_construction_freezes_the_suffix_graph(self):
        self.assertTrue(self.graph.suffix_graph.frozen)

    def test_get_or_create_returns_the_same_node(self):
        attrs = calculate_phonetic_attributes("kitap")
        first = self.graph.get_or_create_node(self.noun_root, attrs)
        second = self.graph.get_or_create_node(self.noun_root, attrs)
        self.assertIs(first, second)
        self.assertEqual(first.key, SuffixFormGraphNodeKey(self.noun_root.index, attrs))
        self.assertIs(self.graph.get_node(first.key), first)
        self.assertEqual(self.graph.node_count, 1)

    def test_different_attributes_make_different_nodes(self):
        a = self.graph.get_or_create_node(self.noun_root, calculate_phonetic_attributes("kitap"))
        b = self.graph.get_or_create_node(self.noun_root, calculate_phonetic_attributes("kalem"))
        self.assertIsNot(a, b)

    def test_add_node_rejects_duplicates(self):
        attrs = calculate_phonetic_attributes("ev")
        key = SuffixFormGraphNodeKey(self.noun_root.index, attrs)
        self.graph.add_node(key, SuffixFormGraphNode(key, self.noun_root, attrs))
        with self.assertRaises(DuplicateNodeError):
            self.graph.add_node(key, SuffixFormGraphNode(key, self.noun_root, attrs))

    def test_expansion_is_lazy_and_one_shot(self):
        node = self.graph.node_for_root(root_of("kitap"))
        self.assertFalse(node.expanded)
        self.assertEqual(self.graph.node_count, 1)

        edges = self.graph.edges(node)
        self.assertTrue(node.expanded)
        self.assertEqual([edge.surface for edge in edges], ["", "lar"])
        self.assertIs(self.graph.edges(node), edges)

    def test_edge_targets_use_post_application_attributes(self):
        node = self.graph.node_for_root(root_of("kitap"))
        plural = [edge for edge in self.graph.edges(node) if edge.surface == "lar"][0]
        self.assertEqual(plural.target.phonetic_attributes, calculate_phonetic_attributes("kitaplar"))
        self.assertEqual(plural.target.state.name, "NOUN_WITH_AGREEMENT")
        self.assertFalse(plural.derivational)

    def test_edges_out_of_derivational_states_are_marked(self):
        deriv = self.graph.suffix_graph.get_state("NOUN_NOM_DERIV")
        node = self.graph.get_or_create_node(deriv, calculate_phonetic_attributes("kitap"))
        edges = self.graph.edges(node)
        self.assertTrue(edges)
        self.assertTrue(all(edge.derivational for edge in edges))

    def test_terminal_nodes(self):
        with_case = self.graph.suffix_graph.get_state("NOUN_WITH_CASE")
        node = self.graph.get_or_create_node(with_case, calculate_phonetic_attributes("kitap"))
        self.assertTrue(node.terminal)
        self.assertEqual(self.graph.edges(node), ())

    def test_no_default_state(self):
        with self.assertRaises(NoDefaultStateError):
            self.graph.node_for_root(root_of("hmm", PrimaryPos.Unknown))

    def test_warm_up(self):
        roots = RootGenerator().generate_all([
            Lexeme("kitap", "kitap", PrimaryPos.Noun, attributes={LexemeAttribute.Voicing}),
            Lexeme("gelmek", "gel", PrimaryPos.Verb),
            Lexeme("hmm", "hmm", PrimaryPos.Unknown),
        ])
        count = self.graph.warm_up(roots)
        self.assertEqual(count, self.graph.node_count)
        self.assertTrue(self.graph.node_for_root(root_of("kitap")).expanded)


class TestSuffixFormGraphConcurrency(unittest.TestCase):

    def test_interleaved_callers_share_nodes(self):
        graph = SuffixFormGraph(BasicSuffixGraph())
        verb_root = graph.suffix_graph.get_state("VERB_ROOT")
        words = ["gel", "git", "yap", "başla", "oku", "gör", "al", "yaz"]
        barrier = threading.Barrier(8)
        seen = [[] for _ in range(8)]

        def worker(slot):
            barrier.wait()
            for word in words:
                node = graph.get_or_create_node(verb_root, calculate_phonetic_attributes(word))
                frontier = [node]
                # walk two levels so expansion races too
                for _ in range(2):
                    frontier = [edge.target for n in frontier for edge in graph.edges(n)]
                seen[slot].append((node, tuple(id(n) for n in frontier)))

        threads = [threading.Thread(target=worker, args=(slot,)) for slot in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for other in seen[1:]:
            for (node_a, targets_a), (node_b, targets_b) in zip(seen[0], other):
                self.assertIs(node_a, node_b)
                self.assertEqual(targets_a, targets_b)

        keys = [node.key for node in graph._nodes.values()]
        self.assertEqual(len(keys), len(set(keys)))


if __name__ == '__main__':
    unittest.main()
