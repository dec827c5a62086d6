"""Command-line interface for training and inspecting a wordtok vocabulary."""

import argparse
import logging
import sys
from pathlib import Path

from ._sanitise import render_token
from .errors import WordTokError
from .tokenizer import WordTokenizer

log = logging.getLogger(__name__)


def read_corpus(paths: list[str]) -> list[str]:
    """Read training texts, one per non-blank line, from each file in order."""
    texts: list[str] = []
    for p in paths:
        with Path(p).open("r", encoding="utf-8") as f:
            texts.extend(line.strip() for line in f if line.strip())
    return texts


def _cmd_train(tok: WordTokenizer, args: argparse.Namespace) -> None:
    texts = read_corpus(args.files)
    vocab = tok.build_vocab(texts)
    print(f"trained on {len(texts)} texts, vocabulary size {len(vocab)}")


def _cmd_tokenize(tok: WordTokenizer, args: argparse.Namespace) -> None:
    print(" ".join(render_token(t) for t in tok.tokenize(args.text)))


def _cmd_encode(tok: WordTokenizer, args: argparse.Namespace) -> None:
    ids = tok.encode(args.text, expand_vocab=not args.no_expand)
    print(" ".join(str(i) for i in ids))


def _cmd_decode(tok: WordTokenizer, args: argparse.Namespace) -> None:
    print(tok.decode(args.ids))


def _cmd_stats(tok: WordTokenizer, args: argparse.Namespace) -> None:
    stats = tok.get_stats()
    print(f"size:              {stats.size}")
    print(f"next token id:     {stats.next_token_id}")
    print(f"has unknown token: {stats.has_unknown_token}")


def _cmd_vocab(tok: WordTokenizer, args: argparse.Namespace) -> None:
    vocab = tok.get_vocabulary()
    rows = sorted(vocab.items(), key=lambda item: item[1])
    if args.limit is not None:
        rows = rows[: args.limit]
    width = len(str(rows[-1][1])) if rows else 1
    for token, tok_id in rows:
        print(f"[{tok_id:>{width}}] {render_token(token)}")


def _cmd_export(tok: WordTokenizer, args: argparse.Namespace) -> None:
    data = tok.export_vocab()
    if args.output:
        Path(args.output).write_text(data + "\n", encoding="utf-8")
        log.info(f"exported vocabulary to {args.output}")
    else:
        print(data)


def _cmd_import(tok: WordTokenizer, args: argparse.Namespace) -> None:
    vocab = tok.import_vocab(Path(args.file).read_text(encoding="utf-8"))
    print(f"imported {len(vocab)} tokens")


def _cmd_reset(tok: WordTokenizer, args: argparse.Namespace) -> None:
    tok.reset_vocab()
    print(f"vocabulary reset at {tok.vocab_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordtok", description="Word-level tokenizer with a persistent vocabulary."
    )
    parser.add_argument(
        "--vocab-file",
        default=None,
        help="vocabulary JSON path (default: $WORDTOK_VOCAB_FILE or data/vocab.json)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("train", help="rebuild the vocabulary from text files")
    p.add_argument("files", nargs="+", help="corpus files, one text per line")
    p.set_defaults(func=_cmd_train)

    p = sub.add_parser("tokenize", help="print the tokens of TEXT")
    p.add_argument("text")
    p.set_defaults(func=_cmd_tokenize)

    p = sub.add_parser("encode", help="print the token ids of TEXT")
    p.add_argument("text")
    p.add_argument(
        "--no-expand", action="store_true", help="map unseen tokens to [UNK] instead of adding them"
    )
    p.set_defaults(func=_cmd_encode)

    p = sub.add_parser("decode", help="print the text for token ids")
    p.add_argument("ids", nargs="+", type=int)
    p.set_defaults(func=_cmd_decode)

    p = sub.add_parser("stats", help="print vocabulary statistics")
    p.set_defaults(func=_cmd_stats)

    p = sub.add_parser("vocab", help="print the vocabulary table ordered by id")
    p.add_argument("--limit", type=int, default=None)
    p.set_defaults(func=_cmd_vocab)

    p = sub.add_parser("export", help="export the vocabulary as JSON")
    p.add_argument("-o", "--output", default=None, help="write to file instead of stdout")
    p.set_defaults(func=_cmd_export)

    p = sub.add_parser("import", help="replace the vocabulary with an exported JSON file")
    p.add_argument("file")
    p.set_defaults(func=_cmd_import)

    p = sub.add_parser("reset", help="reset the vocabulary to [UNK] only")
    p.set_defaults(func=_cmd_reset)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    tok = WordTokenizer(args.vocab_file)
    try:
        args.func(tok, args)
    except (WordTokError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
