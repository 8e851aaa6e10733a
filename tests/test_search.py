"""
Unit tests for the student search.

Matching contract:
- case, accents and surrounding spaces are ignored
- every typed token must be the prefix of a distinct name token
- ties and zero scores both resolve to None
"""

import unittest

from mycolles.model import Candidate
from mycolles.roster import parse_roster
from mycolles.search import build_index, matching_score, name_of, normalize_name, resolve, tokenize

from tests.helpers import roster_data


class TestNormalizeName(unittest.TestCase):
    def test_accents_and_case_are_removed(self) -> None:
        self.assertEqual(normalize_name("Émilie"), "emilie")
        self.assertEqual(normalize_name("Émilie"), normalize_name("emilie"))
        self.assertEqual(normalize_name("  CHLOÉ Nguyễn "), "chloe nguyen")

    def test_idempotent(self) -> None:
        for s in ["Émilie Durand", "  Zoë  ", "Ångström", "jean-baptiste", ""]:
            once = normalize_name(s)
            self.assertEqual(normalize_name(once), once)

    def test_inner_spaces_are_kept(self) -> None:
        self.assertEqual(normalize_name(" a  b "), "a  b")


class TestTokenize(unittest.TestCase):
    def test_splits_on_separators(self) -> None:
        self.assertEqual(tokenize("jean-baptiste moreau"), ["jean", "baptiste", "moreau"])

    def test_keeps_empty_tokens(self) -> None:
        # every separator character splits, even when repeated
        self.assertEqual(tokenize(" jean"), ["", "jean"])
        self.assertEqual(tokenize("a  b"), ["a", "", "b"])
        self.assertEqual(tokenize("a "), ["a", ""])

    def test_non_ascii_letters_separate_tokens(self) -> None:
        self.assertEqual(tokenize("søren"), ["s", "ren"])

    def test_underscore_and_digits_are_word_characters(self) -> None:
        self.assertEqual(tokenize("a_b 42"), ["a_b", "42"])


class TestMatchingScore(unittest.TestCase):
    def test_longest_token_is_matched_first(self) -> None:
        # "ab" takes "ab", then "a" takes "aaaaaa"
        self.assertEqual(matching_score(["a", "ab"], ["ab", "aaaaaa"]), 3)

    def test_wrong_order_fails(self) -> None:
        # unsorted input: "a" takes "ab" (shortest match) and "ab" is left without a token
        self.assertEqual(matching_score(["ab", "a"], ["ab", "aaaaaa"]), 0)

    def test_unmatched_token_gives_zero(self) -> None:
        self.assertEqual(matching_score(["emilie", "x"], ["emilie", "durand"]), 0)

    def test_prefix_not_substring(self) -> None:
        self.assertEqual(matching_score(["rand"], ["durand"]), 0)
        self.assertEqual(matching_score(["dur"], ["durand"]), 3)

    def test_entry_token_used_once(self) -> None:
        self.assertEqual(matching_score(["jean", "jean"], ["jean", "dupont"]), 0)
        self.assertEqual(matching_score(["jean", "jean"], ["jean", "jeanne"]), 8)

    def test_shortest_candidate_first_occurrence(self) -> None:
        # unsorted on purpose: "ab" goes first and takes the first of two
        # equally short matches, which decides whether "abc" is left for later
        self.assertEqual(matching_score(["abc", "ab"], ["abc", "abd"]), 0)
        self.assertEqual(matching_score(["abc", "ab"], ["abd", "abc"]), 5)

    def test_empty_token_consumes_an_entry_token(self) -> None:
        self.assertEqual(matching_score(["", "jean"], ["jean", "dupont"]), 4)
        self.assertEqual(matching_score(["", "jean"], ["jean"]), 0)

    def test_inputs_are_not_modified(self) -> None:
        input_tokens = ["a", "ab"]
        entry_tokens = ["ab", "aaaaaa"]
        matching_score(input_tokens, entry_tokens)
        self.assertEqual(input_tokens, ["a", "ab"])
        self.assertEqual(entry_tokens, ["ab", "aaaaaa"])


class TestResolve(unittest.TestCase):
    def setUp(self) -> None:
        self.roster = parse_roster(roster_data(), roster_id=3)
        self.index = build_index(self.roster)

    def test_index_order_and_tokens(self) -> None:
        self.assertEqual(len(self.index), 3)
        self.assertEqual(
            [(e.group, e.index) for e in self.index.entries],
            [(0, 0), (0, 1), (1, 0)],
        )
        self.assertEqual(self.index.entries[1].tokens, ("jean", "baptiste", "moreau"))
        self.assertIsInstance(self.index.entries, tuple)

    def test_full_name_any_order(self) -> None:
        expected = Candidate(group=0, index=0, roster_id=3)
        self.assertEqual(resolve(self.index, "Émilie Durand"), expected)
        self.assertEqual(resolve(self.index, "durand EMILIE"), expected)
        self.assertEqual(resolve(self.index, "  emilie  "), expected)

    def test_prefixes(self) -> None:
        self.assertEqual(resolve(self.index, "mor jean"), Candidate(0, 1, 3))
        self.assertEqual(resolve(self.index, "jean d"), Candidate(1, 0, 3))

    def test_ambiguous_returns_none(self) -> None:
        # "jean" scores 4 for both Jean-Baptiste Moreau and Jean Dupont
        self.assertIsNone(resolve(self.index, "jean"))

    def test_identical_names_are_ambiguous(self) -> None:
        index = build_index(parse_roster(roster_data([["Léa Martin"], ["Lea Martin"]])))
        self.assertIsNone(resolve(index, "lea martin"))
        self.assertIsNone(resolve(index, "martin"))

    def test_no_match_returns_none(self) -> None:
        self.assertIsNone(resolve(self.index, "zoe"))
        self.assertIsNone(resolve(self.index, ""))
        self.assertIsNone(resolve(self.index, "   "))

    def test_double_space_needs_a_spare_token(self) -> None:
        # "emilie  durand" has an empty token that needs a third name token
        self.assertIsNone(resolve(self.index, "emilie  durand"))
        self.assertEqual(resolve(self.index, "jean  moreau"), Candidate(0, 1, 3))

    def test_longest_first_regression(self) -> None:
        index = build_index(parse_roster(roster_data([["AB AAAAAA"]])))
        self.assertEqual(resolve(index, "A AB"), Candidate(0, 0, 0))

    def test_name_of_and_entity_id(self) -> None:
        candidate = resolve(self.index, "moreau")
        assert candidate is not None
        self.assertEqual(name_of(self.roster, candidate), "Jean-Baptiste Moreau")
        self.assertEqual(candidate.entity_id, 3_000_001)
        self.assertEqual(Candidate(group=2, index=3, roster_id=1).entity_id, 1_002_003)


if __name__ == "__main__":
    unittest.main()
