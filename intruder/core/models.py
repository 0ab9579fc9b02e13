"""Shared data models for the intruder toolkit."""

from dataclasses import dataclass, field
from typing import Any, List, Optional, TypedDict, Union


Number = Union[int, float]


@dataclass
class PayloadPosition:
    """A marked substitution point located in a request template."""
    start: int             # offset of the opening marker
    end: int               # offset just past the closing marker
    value: str
    param_name: Optional[str] = None
    index: int = 0

    def __str__(self):
        name = self.param_name or "-"
        return f"#{self.index} [{self.start}:{self.end}] {name} = {self.value!r}"


@dataclass
class IntruderResult:
    """Display-oriented result row."""
    id: Number
    payload: List[str]
    status: Any = None
    length: Any = None
    time_ms: Any = None
    timestamp: str = ""    # ISO 8601
    request: Any = None
    response: Any = None
    color: Optional[str] = None
    selected: Optional[bool] = None


@dataclass
class AttackResult:
    """Execution-oriented result row."""
    id: str
    payload: List[str]
    status: Any = None
    length: Any = None
    time_ms: Any = None
    timestamp: Number = 0  # epoch milliseconds
    request: Any = None
    response: Any = None


class RawResult(TypedDict, total=False):
    """Loosely-typed incoming result record. Every key is optional."""
    id: Any
    payload: Any
    status: Any
    length: Any
    time_ms: Any
    timeMs: Any
    timestamp: Any
    request: Any
    response: Any
    color: Any
    selected: Any


@dataclass
class AttackRequest:
    """One generated request of an attack."""
    id: int
    request: str
    payload: List[str] = field(default_factory=list)

    def __str__(self):
        return f"[{self.id}] payload={self.payload!r}"


@dataclass
class ColorOption:
    id: str
    value: str
    label_key: str
