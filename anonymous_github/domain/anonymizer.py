import re
from typing import List, Sequence, Tuple

PLACEHOLDER_PREFIX = "XXXX-"

# Word characters are ASCII letters, digits and underscore only.
_WORD_CHARS = "A-Za-z0-9_"


def placeholder(index: int) -> str:
    """Returns the stand-in for the term at 1-based position `index`."""
    return f"{PLACEHOLDER_PREFIX}{index}"


def _compile_term(term: str) -> re.Pattern:
    return re.compile(
        rf"(?<![{_WORD_CHARS}]){re.escape(term)}(?![{_WORD_CHARS}])",
        re.IGNORECASE,
    )


class TermAnonymizer:
    """
    Replaces sensitive terms in text with numbered placeholders.

    Term i (1-based, in the given order) is replaced by `XXXX-i` wherever it
    occurs as a whole token, ignoring case. Terms are applied one after the
    other, each pass working on the output of the previous one.
    """

    def __init__(self, terms: Sequence[str]):
        self.terms = list(terms)
        # Empty terms keep their position in the numbering but match nothing.
        self._matchers: List[Tuple[re.Pattern, str]] = [
            (_compile_term(term), placeholder(index))
            for index, term in enumerate(self.terms, start=1)
            if term
        ]

    def anonymize(self, text: str) -> str:
        for matcher, replacement in self._matchers:
            if not text:
                break
            text = matcher.sub(replacement, text)
        return text


def anonymize(text: str, terms: Sequence[str]) -> str:
    """
    Replaces every whole-token, case-insensitive occurrence of `terms[i-1]`
    in `text` with `XXXX-i`.
    """
    if not terms or not text:
        return text
    return TermAnonymizer(terms).anonymize(text)
