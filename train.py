"""Build a wordtok vocabulary from a Hugging Face text dataset."""

import argparse
import logging

from datasets import load_dataset

import wordtok as wtok

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dataset", default="stevez80/Sci-Fi-Books-gutenberg")
    parser.add_argument("--split", default="train")
    parser.add_argument("--column", default="text")
    parser.add_argument("--limit", type=int, default=1000, help="number of rows to train on")
    parser.add_argument("--vocab-file", default="data/vocab.json")
    args = parser.parse_args()

    ds = load_dataset(args.dataset, split=args.split)
    lines = [line for line in ds[: args.limit][args.column] if line and line.strip()]
    print(f"number of lines {len(lines)}")

    tok = wtok.get_tokenizer(args.vocab_file)
    vocab = tok.build_vocab(lines)
    stats = tok.get_stats()
    print(f"vocabulary size {len(vocab)} (next id {stats.next_token_id})")


if __name__ == "__main__":
    main()
