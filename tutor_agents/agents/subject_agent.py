"""
Generative-only agent: Chemistry, History and the general Tutor.
"""
import opik

from .descriptors import AgentDescriptor
from .model_facade import AgentReply, ModelFacade


class SubjectAgent:
    """Always answers through the model with its subject preamble."""

    def __init__(self, facade: ModelFacade, descriptor: AgentDescriptor):
        self.descriptor = descriptor
        self.facade = facade

    @property
    def name(self) -> str:
        return self.descriptor.name

    @opik.track
    def answer(self, query: str) -> AgentReply:
        return self.facade.complete_reply(self.descriptor.instructions, query)

    def respond(self, query: str) -> str:
        return self.answer(query).text
