# ppattach/cli.py
"""
Command line entry points:

    extract-ambiguous-pps  PPs with their competing heads
    extract-pps            all PP attachments with topological fields
    extract-bilexical      head/dependent pairs of one relation

Each reads CoNLL-X from INPUT_FILE (default stdin) and writes one line per
record to OUTPUT_FILE (default stdout).
"""
import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from tqdm import tqdm

from ppattach.config import DEFAULT_CONFIG, EXTRACTABLE_FIELDS, FIELD_MF, ExtractionConfig, load_config
from ppattach.core.data_structures import Sentence
from ppattach.core.interfaces import BaseExtractor
from ppattach.exceptions import PPAttachError, TreebankError
from ppattach.extraction import AmbiguousPPExtractor, BilexicalExtractor, PPExtractor, count_relevant_tokens
from ppattach.graph import sentence_to_graph
from ppattach.ingestion.loader import read_sentences
from ppattach.ingestion.utils import open_input, open_output
from ppattach.statistics import CompetitionStats

logger = logging.getLogger(__name__)


def run_extraction(
        extractor: BaseExtractor,
        sentences: Iterable[Sentence],
        out: TextIO,
        projective: bool = False,
        stats: Optional[CompetitionStats] = None,
        config: ExtractionConfig = DEFAULT_CONFIG
) -> int:
    """
    Writes the formatted records of all sentences, or only collects totals when
    `stats` is given. Returns the number of records.
    """
    count = 0
    for sentence in sentences:
        graph = sentence_to_graph(sentence, projective)

        if stats is not None:
            stats.add_sentence(count_relevant_tokens(graph, config))

        for record in extractor.extract(graph):
            count += 1
            if stats is not None:
                stats.add_instance(record)
            else:
                out.write(extractor.format(record) + "\n")

    return count


def _setup_logging(args):
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s', stream=sys.stderr)


def _base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("-l", "--lemma", action="store_true", help="use lemmas instead of forms")
    parser.add_argument("-p", "--projective", action="store_true",
                        help="use the projective heads (PHEAD/PDEPREL)")
    parser.add_argument("-c", "--config", help="YAML file overriding relation labels and tag sets")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log skipped PPs")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log warnings and errors")
    return parser


def _add_io_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("input", nargs="?", metavar="INPUT_FILE", help="CoNLL-X treebank (default: stdin)")
    parser.add_argument("output", nargs="?", metavar="OUTPUT_FILE", help="output file (default: stdout)")


def _run(args, build_extractor, stats: Optional[CompetitionStats] = None) -> int:
    """Shared driver: config, I/O and fatal error handling."""
    try:
        config = load_config(args.config)
        extractor = build_extractor(config)

        with open_input(args.input) as inp, open_output(args.output) as out:
            sentences = tqdm(
                read_sentences(inp),
                desc=args.input or "stdin",
                unit=" sent",
                disable=True if args.quiet else None,
            )
            count = run_extraction(extractor, sentences, out, args.projective, stats, config)

            if stats is not None:
                stats.report(out)

    except TreebankError as e:
        logger.error(f"Malformed treebank: {e}")
        return 1
    except PPAttachError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1

    logger.info(f"Extracted {count} records")
    return 0


def ambiguous_pps_main(argv: Optional[List[str]] = None) -> int:
    parser = _base_parser("Extract PPs together with the heads competing for their attachment.")
    parser.add_argument("-a", "--all", action="store_true",
                        help="extract all PPs, including PPs with no head competition")
    parser.add_argument("-f", "--field", default=FIELD_MF, choices=EXTRACTABLE_FIELDS,
                        help="topological field to extract from (default: %(default)s)")
    parser.add_argument("-s", "--stats", action="store_true",
                        help="print average candidate counts instead of instances")
    _add_io_arguments(parser)
    args = parser.parse_args(argv)
    _setup_logging(args)

    def build(config):
        return AmbiguousPPExtractor(field=args.field, lemma=args.lemma, include_all=args.all, config=config)

    return _run(args, build, CompetitionStats() if args.stats else None)


def pps_main(argv: Optional[List[str]] = None) -> int:
    parser = _base_parser("Extract PP attachments with the topological fields of head and PP.")
    _add_io_arguments(parser)
    args = parser.parse_args(argv)
    _setup_logging(args)

    return _run(args, lambda config: PPExtractor(lemma=args.lemma, config=config))


def bilexical_main(argv: Optional[List[str]] = None) -> int:
    parser = _base_parser("Extract head/dependent pairs of a dependency relation.")
    parser.add_argument("relation", metavar="REL", help="relation label, e.g. OBJA")
    _add_io_arguments(parser)
    args = parser.parse_args(argv)
    _setup_logging(args)

    return _run(args, lambda config: BilexicalExtractor(args.relation, lemma=args.lemma))


def extract_ambiguous_pps():
    sys.exit(ambiguous_pps_main())


def extract_pps():
    sys.exit(pps_main())


def extract_bilexical():
    sys.exit(bilexical_main())


if __name__ == "__main__":
    extract_ambiguous_pps()
