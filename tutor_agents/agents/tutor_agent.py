"""
Tutor agent: routes the latest user question to a subject agent and
answers itself when no subject is a good fit.
"""
from typing import Any, Literal, Mapping, Optional, Sequence, Union
from dataclasses import dataclass, replace
import logging
import opik

from ..errors import InvalidInput
from ..services.groq_client import CompletionClient
from ..tools.calculator import contains_expression, is_expression
from ..tools.constants import ConstantEntry, PHYSICS_CONSTANTS
from ..tools.fuzzy_matcher import FuzzyMatcher
from .descriptors import CHEMISTRY, HISTORY, MATH, PHYSICS, TUTOR
from .math_agent import MathAgent
from .model_facade import ModelFacade
from .physics_agent import PhysicsAgent
from .registry import AgentRegistry
from .subject_agent import SubjectAgent

logger = logging.getLogger(__name__)

ROLES = ("user", "assistant")


@dataclass(frozen=True)
class Message:
    """One turn of the conversation."""

    role: Literal["user", "assistant"]
    content: str


@dataclass(frozen=True)
class RouteResult:
    """Result of a routing call."""

    response_text: str
    agent_name: str
    succeeded: bool

    def to_response(self) -> dict:
        return {"response": self.response_text, "agent": self.agent_name}


class TutorAgent:
    """
    Classifies the latest user message and dispatches it.

    Classification strategy:
    - Pure arithmetic goes straight to the arithmetic agent (calculator fast path).
    - Otherwise every agent is scored with the fuzzy matcher against its
      keywords; the best score above the threshold wins, registration
      order breaks ties.
    - Nothing clears the threshold but the text holds arithmetic
      ("what is 2 + 2"): the arithmetic agent, which asks the model.
    - Otherwise the tutor answers itself.
    """

    def __init__(
        self,
        registry: AgentRegistry,
        matcher: Optional[FuzzyMatcher] = None,
        default_agent: str = TUTOR.name,
        arithmetic_agent: Optional[str] = MATH.name,
    ):
        if default_agent not in registry:
            raise ValueError(f"Default agent {default_agent!r} is not registered")
        self.registry = registry
        self.matcher = matcher or FuzzyMatcher()
        self.default_agent = default_agent
        self.arithmetic_agent = arithmetic_agent if arithmetic_agent in registry else None

    @property
    def name(self) -> str:
        return self.default_agent

    def available_agents(self) -> list[str]:
        return self.registry.names()

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    @opik.track
    def route(self, messages: Sequence[Union[Message, Mapping[str, Any]]]) -> RouteResult:
        """
        Route a conversation to one agent.

        Args:
            messages: Conversation history, oldest first

        Returns:
            RouteResult with the answer and the agent that produced it

        Raises:
            InvalidInput: if there is no usable user message
        """
        query = self.latest_user_text(messages)
        agent_name = self.classify(query)
        logger.info(f"Routing to {agent_name}")

        reply = self.registry.get(agent_name).answer(query)
        text = reply.text
        succeeded = reply.succeeded
        if not text or not text.strip():
            text = f"Agent {agent_name} failed: empty response"
            succeeded = False

        return RouteResult(response_text=text, agent_name=agent_name, succeeded=succeeded)

    def respond(self, query: str) -> str:
        """Answer as the general tutor, without routing."""
        return self.registry.get(self.default_agent).respond(query)

    def classify(self, query: str) -> str:
        """Return the name of the agent that should answer *query*."""
        if self.arithmetic_agent and is_expression(query):
            return self.arithmetic_agent

        best_name = None
        best_score = None
        for agent in self.registry:
            score = self._agent_score(query, agent.descriptor.keywords, agent.name)
            if score is None:
                continue
            # strict > keeps the earlier agent on ties
            if best_score is None or score > best_score:
                best_name, best_score = agent.name, score

        if best_name is None:
            if self.arithmetic_agent and contains_expression(query):
                logger.debug(f"Arithmetic in free text, sending to {self.arithmetic_agent}")
                return self.arithmetic_agent
            logger.debug(f"No agent matched, defaulting to {self.default_agent}")
            return self.default_agent

        logger.debug(f"Classified as {best_name} (score={best_score:.2f})")
        return best_name

    def _agent_score(self, query: str, keywords: Sequence[str], name: str) -> Optional[float]:
        best = None
        for keyword in keywords or (name,):
            score = self.matcher.score(query, keyword)
            if self.matcher.accepts(score) and (best is None or score > best):
                best = score
        return best

    @staticmethod
    def latest_user_text(messages: Sequence[Union[Message, Mapping[str, Any]]]) -> str:
        if not messages:
            raise InvalidInput("Missing or invalid messages")

        latest = None
        for raw in messages:
            if isinstance(raw, Message):
                role, content = raw.role, raw.content
            elif isinstance(raw, Mapping):
                role, content = raw.get("role"), raw.get("content")
            else:
                raise InvalidInput(f"Invalid message: {raw!r}")

            if role not in ROLES or not isinstance(content, str):
                raise InvalidInput(f"Invalid message: role={role!r}")
            if role == "user":
                latest = content

        if latest is None:
            raise InvalidInput("No user message to answer")
        if not latest.strip():
            raise InvalidInput("Latest user message is empty")
        return latest


def build_tutor(
    client: CompletionClient,
    matcher: Optional[FuzzyMatcher] = None,
    constants: Mapping[str, ConstantEntry] = PHYSICS_CONSTANTS,
) -> TutorAgent:
    """
    Wire the five agents around one completion client.

    Every constant key is also a Physics routing keyword, so a question the
    constant table can answer always reaches the Physics agent.
    """
    matcher = matcher or FuzzyMatcher()
    physics = replace(PHYSICS, keywords=PHYSICS.keywords + tuple(constants))
    registry = AgentRegistry([
        MathAgent(ModelFacade(client, MATH.name)),
        PhysicsAgent(
            ModelFacade(client, PHYSICS.name),
            matcher=matcher,
            constants=constants,
            descriptor=physics,
        ),
        SubjectAgent(ModelFacade(client, CHEMISTRY.name), CHEMISTRY),
        SubjectAgent(ModelFacade(client, HISTORY.name), HISTORY),
        SubjectAgent(ModelFacade(client, TUTOR.name), TUTOR),
    ])
    return TutorAgent(registry, matcher=matcher)
