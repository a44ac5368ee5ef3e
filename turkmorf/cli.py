"""
Command-line interface for turkmorf.

- Parsing Turkish words into every contextless analysis
- Listing the surface roots generated for lexicon entries
- Batch parsing a word-per-line file on a thread pool
"""
import argparse
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed

from tqdm import tqdm

from turkmorf.config import ParserConfig
from turkmorf.errors import MorphologyError, UnknownLetterError
from turkmorf.lexicon import LexiconLoader
from turkmorf.logging_config import setup_logging
from turkmorf.parser import create_parser, describe_root
from turkmorf.root_generator import RootGenerator

logger = logging.getLogger(__name__)


def _load_lexemes(config):
    loader = LexiconLoader()
    if config.lexicon_path:
        return loader.load_from_file(config.lexicon_path)
    return loader.load_default()


def cmd_parse(args, config):
    """Parse words and print their analyses."""
    parser = create_parser(_load_lexemes(config))

    output = []
    status = 0
    for word in args.words:
        try:
            results = parser.parse_with_timeout(word, config.timeout)
        except UnknownLetterError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            status = 1
            continue

        if args.format == 'json':
            output.append({"word": word, "analyses": [result.to_dict() for result in results]})
            continue

        print(word)
        if not results:
            print("  (no analysis)")
        for result in results:
            print(f"  {result.format()}")

    if args.format == 'json':
        print(json.dumps(output, indent=2, ensure_ascii=False))
    return status


def cmd_roots(args, config):
    """Show the roots generated for lexicon lemmas or inline entries."""
    loader = LexiconLoader()
    lexemes_by_lemma = {}
    for lexeme in _load_lexemes(config):
        lexemes_by_lemma.setdefault(lexeme.lemma, []).append(lexeme)

    generator = RootGenerator()
    status = 0
    for entry in args.entries:
        try:
            lexemes = lexemes_by_lemma.get(entry) or [loader.parse_entry(entry)]
            for lexeme in lexemes:
                print(lexeme)
                roots = sorted(generator.generate(lexeme), key=lambda root: (root.sequence, int(root.phonetic_expectations)))
                for root in roots:
                    print(f"  {describe_root(root)}")
        except MorphologyError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            status = 1
    return status


def cmd_batch(args, config):
    """Parse a word-per-line file, printing one analysis per line."""
    with open(args.file, 'r', encoding='utf-8') as f:
        words = [line.strip() for line in f if line.strip()]

    parser = create_parser(_load_lexemes(config), warm_up=True)
    logger.info(f"Parsing {len(words)} words with {config.workers} workers")

    results = [None] * len(words)
    errors = 0
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures = {
            executor.submit(parser.parse_with_timeout, word, config.timeout): index
            for index, word in enumerate(words)
        }
        for future in tqdm(as_completed(futures), total=len(futures), desc="Parsing", unit=" words", file=sys.stderr):
            index = futures[future]
            try:
                results[index] = future.result()
            except UnknownLetterError as e:
                logger.warning(f"Skipping '{words[index]}': {e}")
                results[index] = e
                errors += 1

    unparsed = 0
    for word, word_results in zip(words, results):
        if isinstance(word_results, Exception):
            print(f"{word}\tERROR: {word_results}")
        elif not word_results:
            unparsed += 1
            print(f"{word}\t-")
        else:
            for result in word_results:
                print(f"{word}\t{result.format()}")

    logger.info(f"Done: {len(words) - unparsed - errors} parsed, {unparsed} without analysis, {errors} errors")
    return 1 if errors else 0


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog='turkmorf',
        description='turkmorf: contextless morphological analysis of Turkish words',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Parse words
  turkmorf parse kitabım diyecek
  turkmorf parse kitapları --format json

  # Show the roots of lexicon entries
  turkmorf roots kitap demek
  turkmorf roots "akıl [A:LastVowelDrop]"

  # Parse a word list with a custom lexicon
  turkmorf --lexicon my_lexicon.txt batch words.txt --workers 8 --timeout 2

Environment:
  TURKMORF_LEXICON, TURKMORF_WORKERS, TURKMORF_TIMEOUT, TURKMORF_LOG_LEVEL
        """
    )
    parser.add_argument('--lexicon', help='Lexicon file (default: bundled lexicon)')
    parser.add_argument('--debug', action='store_true', help='Verbose logging with source locations')
    parser.add_argument('--log-file', help='Also append logs to this file')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # --- parse command ---
    parser_parse = subparsers.add_parser('parse', help='Parse words into analyses')
    parser_parse.add_argument('words', nargs='+', help='Words to parse')
    parser_parse.add_argument('--format', choices=['text', 'json'], default='text',
                              help='Output format (default: text)')
    parser_parse.set_defaults(func=cmd_parse)

    # --- roots command ---
    parser_roots = subparsers.add_parser('roots', help='Show generated roots')
    parser_roots.add_argument('entries', nargs='+', help='Lexicon lemmas or inline entries')
    parser_roots.set_defaults(func=cmd_roots)

    # --- batch command ---
    parser_batch = subparsers.add_parser('batch', help='Parse a word-per-line file')
    parser_batch.add_argument('file', help='Input file, one word per line')
    parser_batch.add_argument('--workers', type=int, help='Worker threads (default: 4)')
    parser_batch.add_argument('--timeout', type=float, help='Per-word timeout in seconds')
    parser_batch.set_defaults(func=cmd_batch)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = ParserConfig.from_env().with_overrides(
            lexicon_path=args.lexicon,
            workers=getattr(args, 'workers', None),
            timeout=getattr(args, 'timeout', None),
        )
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    setup_logging(log_file=args.log_file, level=config.level, debug=args.debug)

    try:
        return args.func(args, config)
    except (MorphologyError, OSError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
