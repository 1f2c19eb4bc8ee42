import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Tuple, Union

from recipemark.core.errors import InvalidIngredientPattern
from recipemark.core.logging_config import get_logger

logger = get_logger(__name__)

_OPTIONAL_GROUP = re.compile(r"(\[[^\[\]]*\])")
_TAG = re.compile(r"<[^>]*>")
_INGREDIENT_SPAN = re.compile(r'<span class="ingredient">.*?</span>', re.DOTALL)
_UNCLAIMED = re.compile(rb"\x00+")


@dataclass(frozen=True)
class IngredientPattern:
    source: str
    regex: Pattern[str]


def _word(word: str, source: str) -> str:
    if word.endswith("~"):
        stem = word[:-1]
        if not stem:
            raise InvalidIngredientPattern(source, "plural marker without a word")
        return re.escape(stem) + "s?"
    return re.escape(word)


def _words(fragment: str, source: str) -> str:
    return r"\s+".join(_word(word, source) for word in fragment.split())


def compile_ingredient_pattern(source: str) -> IngredientPattern:
    """Compile one database line into a case-insensitive whole-word matcher.

    ``almond~`` matches "almond" and "almonds"; ``gorgonzola [cheese]`` matches
    with or without the bracketed words; spaces match any run of whitespace.
    """
    text = source.strip()
    if not text:
        raise InvalidIngredientPattern(source, "empty pattern")

    pieces: List[Tuple[bool, str]] = []
    for part in _OPTIONAL_GROUP.split(text):
        if part.startswith("[") and part.endswith("]"):
            inner = part[1:-1].strip()
            if not inner:
                raise InvalidIngredientPattern(source, "empty optional group")
            pieces.append((True, _words(inner, source)))
        elif part.strip():
            if "[" in part or "]" in part:
                raise InvalidIngredientPattern(source, "unbalanced brackets")
            pieces.append((False, _words(part, source)))

    if all(optional for optional, _ in pieces):
        raise InvalidIngredientPattern(source, "pattern has no required words")

    expression = ""
    seen_required = False
    for optional, words in pieces:
        if optional:
            expression += rf"(?:\s+{words})?" if seen_required else rf"(?:{words}\s+)?"
        else:
            expression += rf"\s+{words}" if seen_required else words
            seen_required = True

    try:
        regex = re.compile(rf"\b(?:{expression})\b", re.IGNORECASE)
    except re.error as exc:
        raise InvalidIngredientPattern(source, str(exc)) from exc
    return IngredientPattern(source=text, regex=regex)


def load_ingredient_lines(path: Union[str, Path]) -> List[str]:
    """Read a bundled ingredient database; a missing file yields no patterns."""
    database = Path(path)
    if not database.exists():
        logger.warning(f"{database} not found, ingredient highlighting disabled.")
        return []
    return database.read_text(encoding="utf-8").splitlines()


class IngredientMatcher:
    """Highlights ingredient names, longest database entries taking precedence."""

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self.patterns: List[IngredientPattern] = []
        if lines is not None:
            self.load_database(lines)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "IngredientMatcher":
        return cls(load_ingredient_lines(path))

    def load_database(self, lines: Iterable[str]) -> None:
        """Replace the pattern set. Invalid lines fail here, not at match time."""
        entries = [line.strip() for line in lines]
        entries = [line for line in entries if line and not line.startswith("#")]
        entries = list(dict.fromkeys(entries))
        entries.sort(key=len, reverse=True)

        compiled = [compile_ingredient_pattern(entry) for entry in entries]
        self.patterns = compiled
        logger.info(f"Loaded {len(compiled)} ingredient patterns")

    def _spans(self, line: str) -> List[Tuple[int, int]]:
        claimed = bytearray(len(line))
        for protected in (_INGREDIENT_SPAN, _TAG):
            for match in protected.finditer(line):
                claimed[match.start():match.end()] = b"\x01" * (match.end() - match.start())

        spans = []
        for pattern in self.patterns:
            # Optional words back off text a longer pattern already claimed
            free = [segment.span() for segment in _UNCLAIMED.finditer(claimed)]
            for segment_start, segment_end in free:
                for match in pattern.regex.finditer(line, segment_start, segment_end):
                    start, end = match.span()
                    if start == end:
                        continue
                    claimed[start:end] = b"\x01" * (end - start)
                    spans.append((start, end))
        return sorted(spans)

    def find(self, line: str) -> List[str]:
        return [line[start:end] for start, end in self._spans(line)]

    def annotate(self, line: str) -> str:
        """Wrap every ingredient occurrence in an ingredient span, each exactly once."""
        spans = self._spans(line)
        if not spans:
            return line

        parts = []
        cursor = 0
        for start, end in spans:
            parts.append(line[cursor:start])
            parts.append(f'<span class="ingredient">{line[start:end]}</span>')
            cursor = end
        parts.append(line[cursor:])
        return "".join(parts)
