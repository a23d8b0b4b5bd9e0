"""
Purpose: Split error strings into whitespace tokens and emit word trigrams.
Constraints: Pure helpers only; tokens keep their case and punctuation.
"""

from itertools import chain
from typing import Iterable, Iterator, List


def tokenize(text: str) -> List[str]:
    # str.split() with no argument drops leading/trailing whitespace and collapses runs
    return text.split() if text else []


def trigrams(error_string: str) -> Iterator[str]:
    """Yield each run of three consecutive tokens joined by single spaces."""
    tokens = tokenize(error_string)
    return (" ".join(tokens[i:i + 3]) for i in range(len(tokens) - 2))


def index_corpus(error_strings: Iterable[str]) -> Iterator[str]:
    return chain.from_iterable(trigrams(s) for s in error_strings)
