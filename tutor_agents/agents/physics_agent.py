"""
Physics agent with an instant answer for well-known physical constants.
"""
from typing import Mapping, Optional
import logging
import opik

from ..tools.constants import ConstantEntry, PHYSICS_CONSTANTS
from ..tools.fuzzy_matcher import FuzzyMatcher
from .descriptors import AgentDescriptor, Capability, PHYSICS
from .model_facade import AgentReply, ModelFacade

logger = logging.getLogger(__name__)


class PhysicsAgent:
    """
    Looks the query up in the constant table first; falls back to the LLM
    when no constant name matches.
    """

    def __init__(
        self,
        facade: ModelFacade,
        matcher: Optional[FuzzyMatcher] = None,
        constants: Mapping[str, ConstantEntry] = PHYSICS_CONSTANTS,
        descriptor: AgentDescriptor = PHYSICS,
    ):
        self.descriptor = descriptor
        self.facade = facade
        self.matcher = matcher or FuzzyMatcher()
        self.constants = constants

    @property
    def name(self) -> str:
        return self.descriptor.name

    def lookup_constant(self, query: str) -> Optional[str]:
        """Return the formatted constant block, or None if nothing matches."""
        match = self.matcher.best_match(query, self.constants.keys())
        if match is None:
            return None

        logger.debug(f"{self.name}: matched constant {match.key!r} (score={match.score:.2f})")
        return self.format_constant(self.constants[match.key])

    @staticmethod
    def format_constant(entry: ConstantEntry) -> str:
        title = entry.key[:1].upper() + entry.key[1:]
        return (
            f"**{title}**\n"
            f"- Symbol: `{entry.symbol}`\n"
            f"- Value: `{entry.value} {entry.unit}`\n"
            f"- Description: {entry.description}"
        )

    @opik.track
    def answer(self, query: str) -> AgentReply:
        if self.descriptor.capability == Capability.DETERMINISTIC_FASTPATH:
            constant_info = self.lookup_constant(query)
            if constant_info:
                return AgentReply(text=constant_info)
        return self.facade.complete_reply(self.descriptor.instructions, query)

    def respond(self, query: str) -> str:
        return self.answer(query).text
