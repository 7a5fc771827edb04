"""Default-name sequences.

Generators ask a NameSequence for the next number whenever a caller did not
supply a name. The counter is the only shared mutable state in the engine, so
increments are serialised behind a lock.

FileNameSequence persists counters to JSON using platformdirs:
  Linux:   ~/.local/share/starforge/name_sequence.json
  macOS:   ~/Library/Application Support/starforge/name_sequence.json
  Windows: C:/Users/.../AppData/Local/starforge/name_sequence.json
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

from ..settings import DATA_DIR
from ..constants import NAME_SEQUENCE_FILE_NAME

SEQUENCE_FILE = DATA_DIR / NAME_SEQUENCE_FILE_NAME

logger = logging.getLogger(__name__)


class NameSequence(Protocol):
    """Anything that hands out increasing numbers per name kind."""

    def next(self, kind: str) -> int: ...


class CounterNameSequence:
    """In-memory counters, one per kind, starting at 1."""

    def __init__(self, start: int = 1) -> None:
        self._start = start
        self._counters: dict[str, int] = {}
        self._lock = threading.Lock()

    def next(self, kind: str) -> int:
        with self._lock:
            value = self._counters.get(kind, self._start)
            self._counters[kind] = value + 1
        return value


class FileNameSequence:
    """Counters stored in a JSON file so numbering survives restarts."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or SEQUENCE_FILE
        self._lock = threading.Lock()

    def _load(self) -> dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError):
            logger.warning("Name sequence file %s unreadable; restarting counters", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Name sequence file %s is not a JSON object; restarting counters", self.path)
            return {}
        try:
            return {str(k): int(v) for k, v in data.items()}
        except (TypeError, ValueError):
            logger.warning("Name sequence file %s holds non-integer counters; restarting", self.path)
            return {}

    def next(self, kind: str) -> int:
        with self._lock:
            counters = self._load()
            value = counters.get(kind, 1)
            counters[kind] = value + 1
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(counters, indent=2))
        logger.debug("Issued %s #%d", kind, value)
        return value

    def reset(self) -> None:
        """Forget every counter."""
        with self._lock:
            if self.path.exists():
                self.path.unlink()


_default_sequence: NameSequence = CounterNameSequence()


def default_sequence() -> NameSequence:
    """The process-wide sequence used when a generator is given none."""
    return _default_sequence


def set_default_sequence(sequence: NameSequence) -> None:
    global _default_sequence
    _default_sequence = sequence


def next_name(pattern: str, kind: str, sequence: NameSequence | None = None) -> str:
    """Format ``pattern`` with the next number of ``kind``."""
    seq = sequence if sequence is not None else _default_sequence
    return pattern.format(n=seq.next(kind))


_ROMAN = [
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
]


def to_roman(number: int) -> str:
    """Roman numeral for orbit positions (1-39)."""
    result = ""
    for value, numeral in _ROMAN:
        while number >= value:
            result += numeral
            number -= value
    return result
