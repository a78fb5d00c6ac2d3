"""Invocation tokens: a result is applied only if its load is still current."""

from dataclasses import dataclass


class TokenSource:
    def __init__(self) -> None:
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def issue(self) -> "InvocationToken":
        """Start a new invocation, making every earlier token stale."""
        self._generation += 1
        return InvocationToken(self, self._generation)

    def invalidate(self) -> None:
        self._generation += 1


@dataclass(frozen=True)
class InvocationToken:
    source: TokenSource
    generation: int

    @property
    def is_current(self) -> bool:
        return self.source.generation == self.generation
