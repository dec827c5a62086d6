import logging

import wordtok as wtok

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def main() -> None:
    """Train a small vocabulary and run a text through the request API."""
    api = wtok.TokenizerAPI("data/demo_vocab.json")

    training_texts = [
        "Hello, world! This is a simple tokenizer.",
        "It can handle punctuation, numbers like 123, and words.",
        "The quick brown fox jumps over the lazy dog.",
    ]
    train_result = api.train(training_texts)
    print(f"training complete: added {train_result['tokensAdded']} new tokens")

    result = api.process_text("Hello, machine learning enthusiasts!")
    print(f"tokens:  {result['tokens']}")
    print(f"encoded: {result['encoded']}")
    print(f"decoded: {result['decoded']!r}")
    print(f"round trip ok: {result['stats']['roundTripSuccess']}")

    # unseen words map to [UNK] when the vocabulary is frozen
    frozen = api.process_text("Completely unseen vocabulary", expand_vocab=False)
    print(f"frozen decode: {frozen['decoded']!r}")


if __name__ == "__main__":
    main()
