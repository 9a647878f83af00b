"""Heuristic personal-name mining from extracted document text.

Processing flow:
1. Split text into lines.
2. Drop lines with digits, e-mail/URL markers, or symbols foreign to names.
3. Single-word lines: capitalized word of 2-20 chars not in the stoplist.
4. Lines of 2-4 words: every word is a capitalized word, a hyphenated or
   apostrophe compound, an initial, or a suffix (Jr, Sr, II, III, IV).
5. "Last, First" lines are reassembled as "First Last".
6. Deduplicate in first-seen order, filter noise words, truncate.

Precision is favoured over recall: valid names are missed and capitalized
common words occasionally slip through.
"""

import re
from typing import ClassVar

from docscan.logging.logger import Log


class NameExtractor:
    """Deterministic line classifier producing ordered, unique name candidates."""

    _LINE_SPLIT_RE: ClassVar[re.Pattern[str]] = re.compile(r"[\n\r]+")
    _WORD_SPLIT_RE: ClassVar[re.Pattern[str]] = re.compile(r"\s+")
    _REJECT_LINE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\d|@|www\.|http|\.com|[#$%^&*+=<>{}\[\]\\|`~]"
    )

    _CAPITALIZED_RE: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z][a-z]+$")
    _COMPOUND_RE: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z][a-z]*[-'][A-Z][a-z]*$")
    _INITIAL_RE: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z]\.?$")
    _SUFFIX_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"^(Jr|Sr|II|III|IV)\.?$", re.IGNORECASE
    )
    _NOISE_WORD_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b(and|or|the|in|on|at|for|with|by|page|line|date|time|total|sum|count)\b",
        re.IGNORECASE,
    )

    SINGLE_WORD_STOPLIST: ClassVar[frozenset[str]] = frozenset(
        {
            "page",
            "line",
            "date",
            "time",
            "chapter",
            "section",
            "note",
            "item",
            "list",
            "part",
            "vol",
            "no",
            "ref",
        }
    )

    MAX_WORDS: ClassVar[int] = 4
    MAX_NAME_LENGTH: ClassVar[int] = 50

    def __init__(self, max_names: int = 50) -> None:
        self._max_names = max_names

    def extract(self, text: str) -> list[str]:
        """Return name candidates found in text, in first-seen order."""
        if not text or not isinstance(text, str):
            return []

        candidates: list[str] = []
        for line in self._LINE_SPLIT_RE.split(text):
            candidates.extend(self._classify_line(line.strip()))

        # a line can satisfy both the word rule and the comma rule
        unique = list(dict.fromkeys(candidates))
        names = [name for name in unique if self._passes_final_filter(name)]
        Log.debug(f"Name heuristic kept {len(names)} of {len(unique)} candidates")
        return names[: self._max_names]

    def _classify_line(self, line: str) -> list[str]:
        if len(line) < 2 or self._REJECT_LINE_RE.search(line):
            return []

        found: list[str] = []
        words = self._WORD_SPLIT_RE.split(line)

        if len(words) == 1:
            if self._is_single_name(words[0]):
                found.append(words[0])
        elif len(words) <= self.MAX_WORDS and all(self._is_name_word(w) for w in words):
            found.append(" ".join(words))

        if "," in line and "." not in line and len(words) <= self.MAX_WORDS:
            reordered = self._reorder_last_first(line)
            if reordered:
                found.append(reordered)
        return found

    def _is_single_name(self, word: str) -> bool:
        return (
            2 <= len(word) <= 20
            and self._CAPITALIZED_RE.match(word) is not None
            and word.lower() not in self.SINGLE_WORD_STOPLIST
        )

    def _is_name_word(self, word: str) -> bool:
        return any(
            pattern.match(word)
            for pattern in (
                self._CAPITALIZED_RE,
                self._COMPOUND_RE,
                self._INITIAL_RE,
                self._SUFFIX_RE,
            )
        )

    def _reorder_last_first(self, line: str) -> str | None:
        parts = [part.strip() for part in line.split(",")]
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return None
        last, first = parts
        last_words = self._WORD_SPLIT_RE.split(last)
        first_words = self._WORD_SPLIT_RE.split(first)

        last_ok = len(last_words) <= 2 and all(
            self._CAPITALIZED_RE.match(w) for w in last_words
        )
        first_ok = len(first_words) <= 3 and all(
            self._CAPITALIZED_RE.match(w) or self._INITIAL_RE.match(w)
            for w in first_words
        )
        if last_ok and first_ok:
            return f"{first} {last}"
        return None

    def _passes_final_filter(self, name: str) -> bool:
        word_count = len(self._WORD_SPLIT_RE.split(name))
        return (
            1 <= word_count <= self.MAX_WORDS
            and 1 < len(name.strip())
            and len(name) <= self.MAX_NAME_LENGTH
            and self._NOISE_WORD_RE.search(name) is None
        )


def extract_names(text: str, max_names: int = 50) -> list[str]:
    return NameExtractor(max_names=max_names).extract(text)
