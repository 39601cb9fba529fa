"""
Ordered, read-only set of agents the router can dispatch to.
"""
from typing import Iterator, Protocol, Sequence, Tuple

from .descriptors import AgentDescriptor
from .model_facade import AgentReply


class SpecialistAgent(Protocol):
    """Capability every agent variant implements."""

    descriptor: AgentDescriptor

    @property
    def name(self) -> str:
        ...

    def answer(self, query: str) -> AgentReply:
        ...

    def respond(self, query: str) -> str:
        ...


class AgentRegistry:
    """
    Agents in registration order. Fixed once built.

    Raises:
        ValueError: on an empty agent list or duplicate names.
    """

    def __init__(self, agents: Sequence[SpecialistAgent]):
        if not agents:
            raise ValueError("AgentRegistry: at least one agent is required")
        names = [a.name for a in agents]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"AgentRegistry: duplicate agent names {sorted(duplicates)}")
        self._agents: Tuple[SpecialistAgent, ...] = tuple(agents)
        self._by_name = {a.name: a for a in self._agents}

    def __iter__(self) -> Iterator[SpecialistAgent]:
        return iter(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def get(self, name: str) -> SpecialistAgent:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown agent: {name}") from None

    def names(self) -> list[str]:
        return [a.name for a in self._agents]
