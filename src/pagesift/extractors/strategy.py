"""
Ordered fallback chains for field extraction.

Each field is resolved by trying strategies in order of reliability: a
vendor-specific direct selector first, then progressively more generic
heuristics. The first strategy that yields a value wins.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from .page_scope import DomScope
from .sanitizer import sanitize


class _Missing:
    """Sentinel returned by a strategy that found nothing."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class Strategy:
    """One attempt at producing a field value from a DOM scope."""

    name: str = "strategy"

    def attempt(self, scope: DomScope) -> Any:
        """Return the found value, or ``MISSING``."""
        raise NotImplementedError


class SelectorTextStrategy(Strategy):
    """Sanitized text of the first non-empty element matched by any selector."""

    def __init__(self, selectors: Sequence[str], transform: Optional[Callable[[str], Any]] = None) -> None:
        self.selectors = list(selectors)
        self.transform = transform
        self.name = ", ".join(self.selectors)

    def attempt(self, scope: DomScope) -> Any:
        for selector in self.selectors:
            for element in scope.select(selector):
                text = sanitize(element)
                value = self.transform(text) if self.transform else text
                if value:
                    return value
        return MISSING


class CallableStrategy(Strategy):
    """Adapts a plain ``func(scope)`` to the strategy interface."""

    def __init__(self, name: str, func: Callable[[DomScope], Any]) -> None:
        self.name = name
        self.func = func

    def attempt(self, scope: DomScope) -> Any:
        value = self.func(scope)
        return MISSING if value is None else value


@dataclass
class ChainOutcome:
    """Result of running a chain: the value and where it came from."""

    value: Any
    strategy_name: Optional[str] = None
    attempted: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.strategy_name is not None


class StrategyChain:
    """Runs strategies in order; the first non-empty result wins."""

    def __init__(self, strategies: Sequence[Strategy], default: Any = "") -> None:
        self.strategies = list(strategies)
        self.default = default

    def run(self, scope: DomScope) -> ChainOutcome:
        attempted: List[str] = []
        for strategy in self.strategies:
            value = strategy.attempt(scope)
            attempted.append(strategy.name)
            if value is MISSING or value == "" or value == []:
                continue
            return ChainOutcome(value=value, strategy_name=strategy.name, attempted=attempted)
        return ChainOutcome(value=self.default, attempted=attempted)


__all__ = [
    "MISSING",
    "Strategy",
    "SelectorTextStrategy",
    "CallableStrategy",
    "ChainOutcome",
    "StrategyChain",
]
