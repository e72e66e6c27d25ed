"""Base classes for output writers.

Separates command control flow from how parse outcomes are shown or stored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from QueryParser.parser import ParseResult


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_result(self, result: ParseResult, canonical: str | None) -> None:
        """Write the outcome of one parse call.

        Args:
            result: Parse outcome (query or error).
            canonical: Canonical text of the query, None when parsing failed.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'parse').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_result(self, result: ParseResult, canonical: str | None) -> None:
        for writer in self.writers:
            writer.write_result(result, canonical)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
