"""Pattern definition types for regex-based extraction from output files.

A ``PatternDefinition`` ties a result field to a compiled regex and a
conversion. Definitions are applied to the full text of an output file, so
patterns may span several lines.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from re import Match, Pattern
from typing import Any, Literal

from comchemkit.exceptions import InternalCodeError
from comchemkit.utils import logger

Occurrence = Literal["first", "last", "all"]


def to_float(match: Match[str]) -> float:
    return float(match.group(1))


def groups_to_floats(match: Match[str]) -> list[float]:
    return [float(g) for g in match.groups() if g is not None]


@dataclass(frozen=True)
class PatternDefinition:
    """Defines a field to extract with a regex pattern.

    Args:
        field_name: The name of the result field this pattern fills.
        pattern: Compiled regex applied to the whole file content.
        occurrence: Which match to use: the first, the last, or all of them
            in document order.
        transform: Converts a match into the field value. Raising ValueError
            marks that occurrence as unparseable.
        description: Human-readable description of what this pattern extracts.
    """

    field_name: str
    pattern: Pattern[str]
    occurrence: Occurrence = "first"
    transform: Callable[[Match[str]], Any] = field(default=to_float)
    description: str = ""

    def _converted(self, content: str) -> Iterator[Any]:
        """Yields the converted value of every match, skipping unparseable ones."""
        for match in self.pattern.finditer(content):
            try:
                yield self.transform(match)
            except (ValueError, IndexError):
                logger.warning(f"Could not parse {self.field_name} from: '{match.group(0).strip()}'")

    def extract(self, content: str, default: Any = None) -> Any:
        """Applies the definition according to its occurrence rule.

        Returns ``default`` when nothing usable was found for single-value
        definitions and a (possibly empty) list for ``occurrence="all"``.
        """
        if self.occurrence == "first":
            return self.extract_first(content, default)
        if self.occurrence == "last":
            value = default
            for value in self._converted(content):
                pass
            return value
        if self.occurrence == "all":
            return self.extract_all(content)
        raise InternalCodeError(f"Unknown occurrence '{self.occurrence}' for field {self.field_name}")

    def extract_first(self, content: str, default: Any = None) -> Any:
        return next(self._converted(content), default)

    def extract_all(self, content: str) -> list[Any]:
        return list(self._converted(content))


def extract_all_values(definition: PatternDefinition, content: str) -> list[float]:
    """Flattens multi-group matches (e.g. three frequencies per line) into one list."""
    values: list[float] = []
    for item in definition.extract(content):
        if isinstance(item, list):
            values.extend(item)
        else:
            values.append(item)
    return values


__all__ = ["Occurrence", "PatternDefinition", "extract_all_values", "groups_to_floats", "to_float"]
