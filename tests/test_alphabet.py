"""
Tests for the Turkish alphabet.
"""
import unittest

from turkmorf.alphabet import LETTERS, VOWELS, get_letter, is_vowel, turkish_lower, validate, voice
from turkmorf.errors import MorphologyError, UnknownLetterError


class TestAlphabet(unittest.TestCase):

    def test_inventory_has_29_letters_plus_circumflex_vowels(self):
        self.assertEqual(len(LETTERS), 32)
        self.assertEqual(len(VOWELS), 11)

    def test_vowel_flags(self):
        self.assertTrue(get_letter("ü").frontal)
        self.assertTrue(get_letter("ü").rounded)
        self.assertFalse(get_letter("ı").frontal)
        self.assertFalse(get_letter("ı").rounded)
        self.assertTrue(is_vowel("â"))

    def test_voiceless_stops(self):
        stops = {char for char, letter in LETTERS.items() if letter.voiceless_stop}
        self.assertEqual(stops, {"ç", "k", "p", "t"})

    def test_turkish_lower_handles_dotted_and_dotless_i(self):
        self.assertEqual(turkish_lower("IĞDIR"), "ığdır")
        self.assertEqual(turkish_lower("İSTANBUL"), "istanbul")
        self.assertEqual(turkish_lower("Kitabım"), "kitabım")

    def test_upper_case_letters_resolve(self):
        self.assertIs(get_letter("Ş"), get_letter("ş"))
        self.assertIs(get_letter("I"), get_letter("ı"))

    def test_unknown_letter_raises(self):
        for char in ("x", "q", "w", "1", "-"):
            with self.assertRaises(UnknownLetterError):
                get_letter(char)

    def test_unknown_letter_is_a_value_error(self):
        with self.assertRaises(ValueError):
            validate("taxi")
        self.assertTrue(issubclass(UnknownLetterError, MorphologyError))

    def test_unknown_letter_reports_context(self):
        with self.assertRaises(UnknownLetterError) as ctx:
            validate("taxi")
        self.assertEqual(ctx.exception.char, "x")
        self.assertEqual(ctx.exception.context, "taxi")

    def test_voice(self):
        self.assertEqual(voice("p"), "b")
        self.assertEqual(voice("ç"), "c")
        self.assertEqual(voice("t"), "d")
        self.assertEqual(voice("k"), "ğ")
        self.assertEqual(voice("g"), "ğ")
        self.assertIsNone(voice("s"))
        self.assertIsNone(voice("a"))


if __name__ == '__main__':
    unittest.main()
