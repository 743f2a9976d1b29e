"""Approximate token counting using tiktoken."""

from functools import lru_cache

import tiktoken


@lru_cache()
def _encoding() -> tiktoken.Encoding:
    # cl100k_base is a reasonable approximation for Gemini and Llama tokenizers
    return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str) -> int:
    return len(_encoding().encode(text))
