import unittest

from ppattach.competition import Action, CompetitionFinder, ScanRule, ScanTable, field_run
from ppattach.graph import sentence_to_graph

from conllx_fixtures import (
    C_FIELD_WITH_VC, C_FIELD_WITHOUT_VC, MF_AFTER_UK, MF_FULL_VERB_IN_LK, MF_SENTENCE,
    MF_SINGLE_CANDIDATE, NF_AFTER_NOUN, NF_SENTENCE, VF_AFTER_NOUN, VF_BOTH_RUNS, VF_SENTENCE,
    parse_sentence,
)


def _summary(candidates):
    return [(c.node.offset, c.is_gold_head) for c in candidates]


class TestScanTable(unittest.TestCase):
    def test_first_matching_rule_wins(self):
        table = ScanTable(
            rules=(
                ScanRule(Action.ACCEPT_VERB, tags=frozenset({"VAFIN"})),
                ScanRule(Action.EMIT, fields=frozenset({"MF"})),
            ),
            default=Action.ABANDON,
            on_missing=Action.STOP,
            on_exhausted=Action.ABANDON,
        )
        self.assertIs(table.action("VAFIN", "MF"), Action.ACCEPT_VERB)
        self.assertIs(table.action("NN", "MF"), Action.EMIT)
        self.assertIs(table.action("NN", "VF"), Action.ABANDON)
        self.assertIs(table.action(None, "MF"), Action.STOP)

    def test_field_run(self):
        table = field_run("VF", "UK")
        self.assertIs(table.action("NN", "UK"), Action.EMIT)
        self.assertIs(table.action("NN", "LK"), Action.STOP)
        self.assertIs(table.action("NN", None), Action.STOP)


class TestMiddleField(unittest.TestCase):
    def setUp(self):
        self.finder = CompetitionFinder()

    def test_nouns_up_to_finite_verb(self):
        graph = sentence_to_graph(parse_sentence(MF_SENTENCE))
        candidates = self.finder.find(graph, pp=6, gold_head=8, field="MF")

        # Buch, Mann, then 'hat' resolved to 'gegeben'
        self.assertEqual(_summary(candidates), [(5, False), (3, False), (8, True)])
        self.assertTrue(all(c.rank is None for c in candidates))

    def test_single_candidate(self):
        graph = sentence_to_graph(parse_sentence(MF_SINGLE_CANDIDATE))
        candidates = self.finder.find(graph, pp=2, gold_head=4, field="MF")
        self.assertEqual(_summary(candidates), [(4, True)])

    def test_unknown_field_counts_as_middle_field(self):
        graph = sentence_to_graph(parse_sentence(MF_AFTER_UK))
        candidates = self.finder.find(graph, pp=3, gold_head=5, field="MF")
        self.assertEqual(_summary(candidates), [(2, False), (5, True)])

    def test_finite_full_verb_is_its_own_head(self):
        graph = sentence_to_graph(parse_sentence(MF_FULL_VERB_IN_LK))
        candidates = self.finder.find(graph, pp=4, gold_head=1, field="MF")
        # 'liest' has no AUX dependent
        self.assertEqual(_summary(candidates), [(3, False), (1, True)])

    def test_c_field_without_vc_head_abandons(self):
        graph = sentence_to_graph(parse_sentence(C_FIELD_WITHOUT_VC))
        self.assertIsNone(self.finder.find(graph, pp=5, gold_head=7, field="MF"))

    def test_c_field_resolves_clause_verb(self):
        graph = sentence_to_graph(parse_sentence(C_FIELD_WITH_VC))
        candidates = self.finder.find(graph, pp=5, gold_head=7, field="MF")
        # 'er' is not a relevant tag, 'dass' leads to 'lacht'
        self.assertEqual(_summary(candidates), [(7, True)])

    def test_sentence_start_abandons(self):
        sentence = parse_sentence("""
1 Bücher Buch NN   NN   tf:MF 0 ROOT
2 mit    mit  APPR APPR tf:MF 1 PP
3 Bildern Bild NN  NN   tf:MF 2 PN
""")
        graph = sentence_to_graph(sentence)
        self.assertIsNone(self.finder.find(graph, pp=1, gold_head=0, field="MF"))

    def test_other_field_abandons(self):
        sentence = parse_sentence("""
1 Gestern gestern ADV  ADV  tf:VF 0 ROOT
2 Bücher  Buch    NN   NN   tf:MF 1 OBJA
3 mit     mit     APPR APPR tf:MF 2 PP
4 Bildern Bild    NN   NN   tf:MF 3 PN
""")
        graph = sentence_to_graph(sentence)
        self.assertIsNone(self.finder.find(graph, pp=2, gold_head=1, field="MF"))

    def test_missing_field_abandons(self):
        sentence = parse_sentence("""
1 hat     haben   VAFIN VAFIN tf:LK 0 ROOT
2 Bücher  Buch    NN    NN    _     1 OBJA
3 mit     mit     APPR  APPR  tf:MF 2 PP
4 Bildern Bild    NN    NN    tf:MF 3 PN
""")
        graph = sentence_to_graph(sentence)
        self.assertIsNone(self.finder.find(graph, pp=2, gold_head=1, field="MF"))


class TestPrefield(unittest.TestCase):
    def setUp(self):
        self.finder = CompetitionFinder()

    def test_bracket_verb_and_middle_field(self):
        graph = sentence_to_graph(parse_sentence(VF_SENTENCE))
        candidates = self.finder.find(graph, pp=0, gold_head=8, field="VF")
        self.assertEqual(_summary(candidates), [(8, True), (5, False), (7, False)])

    def test_noun_before_pp_skips_middle_field(self):
        graph = sentence_to_graph(parse_sentence(VF_AFTER_NOUN))
        candidates = self.finder.find(graph, pp=2, gold_head=1, field="VF")
        self.assertEqual(_summary(candidates), [(5, False), (1, True)])

    def test_gold_head_above_resolved_verb(self):
        graph = sentence_to_graph(parse_sentence(VF_AFTER_NOUN))
        # PP attached to the finite auxiliary 'hat'
        candidates = self.finder.find(graph, pp=2, gold_head=4, field="VF")
        self.assertEqual(_summary(candidates), [(5, True), (1, False)])

    def test_middle_field_and_prefield_runs(self):
        graph = sentence_to_graph(parse_sentence(VF_BOTH_RUNS))
        candidates = self.finder.find(graph, pp=3, gold_head=1, field="VF")
        # gegeben, then Buch from the middle field, then Mann from the prefield
        self.assertEqual(_summary(candidates), [(9, False), (8, False), (1, True)])

    def test_resolved_verb_is_not_repeated(self):
        sentence = parse_sentence("""
1 Mit     mit    APPR  APPR  tf:VF 4 PP
2 Freude  Freude NN    NN    tf:VF 1 PN
3 hat     haben  VAFIN VAFIN tf:LK 0 ROOT
4 gelesen lesen  VVPP  VVPP  tf:MF 3 AUX
5 Buch    Buch   NN    NN    tf:MF 4 OBJA
""")
        graph = sentence_to_graph(sentence)
        candidates = self.finder.find(graph, pp=0, gold_head=3, field="VF")
        self.assertEqual(_summary(candidates), [(3, True), (4, False)])

    def test_no_left_bracket_abandons(self):
        sentence = parse_sentence("""
1 Mit    mit    APPR APPR tf:VF 3 PP
2 Freude Freude NN   NN   tf:VF 1 PN
3 lachen lachen VVINF VVINF tf:VC 0 ROOT
""")
        graph = sentence_to_graph(sentence)
        self.assertIsNone(self.finder.find(graph, pp=0, gold_head=2, field="VF"))


class TestPostfield(unittest.TestCase):
    def setUp(self):
        self.finder = CompetitionFinder()

    def test_bracket_verb_and_middle_field(self):
        graph = sentence_to_graph(parse_sentence(NF_SENTENCE))
        candidates = self.finder.find(graph, pp=6, gold_head=5, field="NF")
        self.assertEqual(_summary(candidates), [(5, True), (3, False), (4, False)])

    def test_noun_before_pp_uses_postfield(self):
        graph = sentence_to_graph(parse_sentence(NF_AFTER_NOUN))
        candidates = self.finder.find(graph, pp=5, gold_head=4, field="NF")
        self.assertEqual(_summary(candidates), [(2, False), (4, True)])

    def test_bracket_must_be_verbal(self):
        sentence = parse_sentence("""
1 dass   dass   KOUS KOUS tf:LK 0 ROOT
2 mit    mit    APPR APPR tf:NF 1 PP
3 Freude Freude NN   NN   tf:NF 2 PN
""")
        graph = sentence_to_graph(sentence)
        self.assertIsNone(self.finder.find(graph, pp=1, gold_head=0, field="NF"))

    def test_unknown_field(self):
        graph = sentence_to_graph(parse_sentence(NF_SENTENCE))
        with self.assertRaises(ValueError):
            self.finder.find(graph, pp=6, gold_head=5, field="LK")


if __name__ == '__main__':
    unittest.main()
