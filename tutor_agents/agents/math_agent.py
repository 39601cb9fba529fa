"""
Math agent: computes plain arithmetic locally, everything else goes to the LLM.
"""
import logging
import opik

from ..errors import EvaluationError
from ..tools.calculator import evaluate, format_number
from .descriptors import AgentDescriptor, Capability, MATH
from .model_facade import AgentReply, ModelFacade

logger = logging.getLogger(__name__)


class MathAgent:
    """
    Two paths:

    1. **Calculator**: the query is a pure arithmetic expression ("12 * (3 + 4)").
    2. **LLM**: anything else, with a math-tutor preamble.
    """

    def __init__(self, facade: ModelFacade, descriptor: AgentDescriptor = MATH):
        self.descriptor = descriptor
        self.facade = facade

    @property
    def name(self) -> str:
        return self.descriptor.name

    @opik.track
    def answer(self, query: str) -> AgentReply:
        if self.descriptor.capability == Capability.DETERMINISTIC_FASTPATH:
            try:
                result = evaluate(query)
                return AgentReply(text=format_number(result))
            except EvaluationError as e:
                logger.debug(f"{self.name}: not a plain expression ({e.message}), asking the model")

        return self.facade.complete_reply(self.descriptor.instructions, query)

    def respond(self, query: str) -> str:
        return self.answer(query).text
