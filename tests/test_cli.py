import tempfile
import unittest
from pathlib import Path

from ppattach.cli import ambiguous_pps_main, bilexical_main, pps_main

from conllx_fixtures import MF_SENTENCE, MF_SINGLE_CANDIDATE, VF_SENTENCE, to_conllx


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.input = self.dir / "input.conll"
        self.input.write_text(
            to_conllx(MF_SENTENCE) + to_conllx(MF_SINGLE_CANDIDATE) + to_conllx(VF_SENTENCE),
            encoding="utf-8"
        )
        self.output = self.dir / "output.txt"

    def tearDown(self):
        self.tmp.cleanup()

    def _output(self) -> str:
        return self.output.read_text(encoding="utf-8")

    def test_ambiguous_pps_default(self):
        code = ambiguous_pps_main(["-q", str(self.input), str(self.output)])

        self.assertEqual(code, 0)
        self.assertEqual(self._output(), "mit APPR Freude NN Buch NN -1 -1 0 Mann NN -3 -2 0 gegeben VVPP 2 1 1\n")

    def test_ambiguous_pps_all(self):
        code = ambiguous_pps_main(["-q", "--all", str(self.input), str(self.output)])

        self.assertEqual(code, 0)
        self.assertEqual(self._output().splitlines(), [
            "mit APPR Freude NN Buch NN -1 -1 0 Mann NN -3 -2 0 gegeben VVPP 2 1 1",
            "mit APPR Freude NN gegeben VVPP 2 1 1",
        ])

    def test_ambiguous_pps_field(self):
        code = ambiguous_pps_main(["-q", "-f", "VF", "-l", str(self.input), str(self.output)])

        self.assertEqual(code, 0)
        self.assertEqual(self._output(), "mit APPR Freude NN geben VVPP 8 3 1 Mann NN 5 1 0 Buch NN 7 2 0\n")

    def test_stats(self):
        code = ambiguous_pps_main(["-q", "--stats", str(self.input), str(self.output)])

        self.assertEqual(code, 0)
        report = self._output()
        self.assertIn("PP instances", report)
        self.assertIn("3.00", report)

    def test_help_exits_zero(self):
        with self.assertRaises(SystemExit) as ctx:
            ambiguous_pps_main(["--help"])
        self.assertEqual(ctx.exception.code, 0)

    def test_unknown_field_is_usage_error(self):
        with self.assertRaises(SystemExit) as ctx:
            ambiguous_pps_main(["-f", "XF", str(self.input)])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_malformed_input(self):
        self.input.write_text("1\tEr\n\n", encoding="utf-8")
        with self.assertLogs("ppattach.cli", level="ERROR"):
            code = ambiguous_pps_main(["-q", str(self.input), str(self.output)])
        self.assertEqual(code, 1)

    def test_missing_input(self):
        with self.assertLogs("ppattach.cli", level="ERROR"):
            code = ambiguous_pps_main(["-q", str(self.dir / "missing.conll"), str(self.output)])
        self.assertEqual(code, 1)

    def test_bad_config(self):
        config = self.dir / "bad.yaml"
        config.write_text("nonsense: 1\n", encoding="utf-8")
        with self.assertLogs("ppattach.cli", level="ERROR"):
            code = ambiguous_pps_main(["-q", "-c", str(config), str(self.input), str(self.output)])
        self.assertEqual(code, 1)

    def test_pps(self):
        code = pps_main(["-q", str(self.input), str(self.output)])

        self.assertEqual(code, 0)
        self.assertEqual(self._output().splitlines(), [
            "gegeben VVPP VC mit APPR MF Freude NN",
            "gegeben VVPP VC mit APPR MF Freude VAFIN",
            "gegeben VVPP VC Mit APPR VF Freude NONE",
        ])

    def test_bilexical(self):
        code = bilexical_main(["-q", "OBJA", str(self.input), str(self.output)])

        self.assertEqual(code, 0)
        self.assertEqual(self._output().splitlines(), ["gegeben VVPP Buch NN", "gegeben VVPP Buch NN"])


if __name__ == '__main__':
    unittest.main()
