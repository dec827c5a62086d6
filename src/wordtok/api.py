"""
Request-level API over :class:`~wordtok.tokenizer.WordTokenizer`.

Results are plain dicts with camelCase keys so a transport layer (HTTP
handler, CLI, notebook widget) can serialize them to JSON unchanged.
"""

import json
import logging
import os
from typing import Any, Final, Sequence

from ._text import clean_text, is_valid_text, is_valid_token_ids, text_stats, timestamp
from .errors import InvalidInputError, WordTokError
from .tokenizer import WordTokenizer

log = logging.getLogger(__name__)

ACTIONS: Final[tuple[str, ...]] = ("tokenize", "encode", "decode", "getVocab")


class TokenizerAPI:
    """High-level operations for request handlers and demos."""

    def __init__(self, vocab_file: str | os.PathLike[str] | None = None) -> None:
        self.tokenizer = WordTokenizer(vocab_file)

    def process_text(
        self,
        text: str,
        expand_vocab: bool = True,
        include_stats: bool = True,
        include_tokens: bool = True,
    ) -> dict[str, Any]:
        """
        Clean, encode and decode ``text`` in one go.

        Whitespace is collapsed before encoding so ``roundTripSuccess``
        compares against the form decode can actually reproduce.

        :raises InvalidInputError: If ``text`` is not a non-blank string.
        """
        if not is_valid_text(text):
            raise InvalidInputError("invalid text input", received=text)

        processed = clean_text(text)
        results: dict[str, Any] = {"original": text, "processed": processed}

        if include_tokens:
            results["tokens"] = self.tokenizer.tokenize(processed)

        results["encoded"] = self.tokenizer.encode(processed, expand_vocab=expand_vocab)
        results["decoded"] = self.tokenizer.decode(results["encoded"])

        if include_stats:
            results["stats"] = {
                **text_stats(text),
                "vocabSize": self.tokenizer.get_vocab_size(),
                "tokenCount": len(results["encoded"]),
                "roundTripSuccess": processed == results["decoded"],
            }

        return results

    def batch_process(self, texts: Sequence[str], **options: Any) -> list[dict[str, Any]]:
        """
        Run :meth:`process_text` on every text, collecting failures per item.

        :raises InvalidInputError: If ``texts`` is not a list.
        """
        if not isinstance(texts, (list, tuple)):
            raise InvalidInputError("texts must be a list", received=texts)

        results: list[dict[str, Any]] = []
        for idx, text in enumerate(texts):
            try:
                results.append(
                    {"index": idx, "success": True, "result": self.process_text(text, **options)}
                )
            except WordTokError as e:
                log.warning(f"batch item {idx} failed: {e}")
                results.append({"index": idx, "success": False, "error": str(e)})
        return results

    def train(self, training_texts: Sequence[str]) -> dict[str, Any]:
        """Rebuild the vocabulary from ``training_texts`` and report the growth."""
        before = self.tokenizer.get_vocab_size()
        vocab = self.tokenizer.build_vocab(training_texts)
        after = len(vocab)
        return {
            "success": True,
            "tokensAdded": after - before,
            "vocabularySize": after,
            "trainedOnTexts": len(training_texts),
        }

    def get_vocabulary_info(self) -> dict[str, Any]:
        vocab = self.tokenizer.get_vocabulary()
        stats = self.tokenizer.get_stats()
        return {
            "vocabulary": vocab,
            "statistics": _stats_payload(stats.to_dict()),
            "size": stats.size,
            "tokens": sorted(vocab, key=vocab.__getitem__),
        }

    def export_state(self) -> dict[str, Any]:
        return {
            "vocabulary": self.tokenizer.export_vocab(),
            "statistics": _stats_payload(self.tokenizer.get_stats().to_dict()),
            "exportedAt": timestamp(),
        }

    def import_state(self, state_json: str) -> None:
        """
        Restore a vocabulary from the JSON form of :meth:`export_state`.

        :raises InvalidInputError: If the state is not valid JSON or lacks a vocabulary.
        """
        try:
            state = json.loads(state_json)
        except (TypeError, ValueError) as e:
            raise InvalidInputError("invalid state data") from e
        if not isinstance(state, dict) or not state.get("vocabulary"):
            raise InvalidInputError("invalid state data")
        self.tokenizer.import_vocab(state["vocabulary"])

    def handle_request(self, action: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Dispatch one request action and wrap the outcome.

        Supported actions are ``tokenize``, ``encode``, ``decode`` and
        ``getVocab``. Successful results carry ``"success": True``; wordtok
        errors become ``{"success": False, "error": message}``.
        """
        if payload is None:
            payload = {}
        try:
            if not isinstance(payload, dict):
                raise InvalidInputError("request payload must be an object", received=payload)
            match action:
                case "tokenize":
                    return {
                        "success": True,
                        "tokens": self.tokenizer.tokenize(payload.get("text")),
                        "vocabSize": self.tokenizer.get_vocab_size(),
                    }
                case "encode":
                    text = payload.get("text")
                    encoded = self.tokenizer.encode(
                        text, expand_vocab=bool(payload.get("expandVocab", True))
                    )
                    return {
                        "success": True,
                        "tokens": self.tokenizer.tokenize(text),
                        "encoded": encoded,
                        "vocabSize": self.tokenizer.get_vocab_size(),
                    }
                case "decode":
                    ids = payload.get("ids")
                    if not is_valid_token_ids(ids):
                        raise InvalidInputError(
                            "token ids must be a list of non-negative integers", received=ids
                        )
                    return {
                        "success": True,
                        "decoded": self.tokenizer.decode(ids),
                        "vocabSize": self.tokenizer.get_vocab_size(),
                    }
                case "getVocab":
                    return {
                        "success": True,
                        "vocabulary": self.tokenizer.get_vocabulary(),
                        "vocabSize": self.tokenizer.get_vocab_size(),
                    }
                case _:
                    return {"success": False, "error": "Invalid action"}
        except WordTokError as e:
            log.warning(f"request {action!r} failed: {e}")
            return {"success": False, "error": str(e)}


def _stats_payload(stats: dict[str, Any]) -> dict[str, Any]:
    # snake_case dataclass fields -> JSON field names
    return {
        "size": stats["size"],
        "nextTokenId": stats["next_token_id"],
        "hasUnknownToken": stats["has_unknown_token"],
    }


__all__ = ["ACTIONS", "TokenizerAPI"]
