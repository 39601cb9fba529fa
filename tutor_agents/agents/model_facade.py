"""
Wraps the generative model call for one agent.

Any failure of the underlying client comes back as readable text,
never as an exception.
"""
from dataclasses import dataclass
import logging

from ..services.groq_client import CompletionClient

logger = logging.getLogger(__name__)

PROMPT_SEPARATOR = "\nUser: "


@dataclass(frozen=True)
class AgentReply:
    """Text produced by an agent and whether it is a real answer."""

    text: str
    succeeded: bool = True


class ModelFacade:
    """
    Builds `<instructions>\\nUser: <query>` and calls the client once.

    On failure returns "Agent <name> failed: <detail>".
    """

    def __init__(self, client: CompletionClient, agent_name: str):
        self.client = client
        self.agent_name = agent_name

    def build_prompt(self, instructions: str, query: str) -> str:
        return f"{instructions}{PROMPT_SEPARATOR}{query}"

    def complete_reply(self, instructions: str, query: str) -> AgentReply:
        prompt = self.build_prompt(instructions, query)
        try:
            text = self.client.complete(prompt)
            if not text or not text.strip():
                raise ValueError("empty response from model")
            return AgentReply(text=text)
        except Exception as e:
            detail = str(e) or type(e).__name__
            logger.warning(f"{self.agent_name}: model call failed: {detail}")
            return AgentReply(
                text=f"Agent {self.agent_name} failed: {detail}",
                succeeded=False,
            )

    def complete(self, instructions: str, query: str) -> str:
        return self.complete_reply(instructions, query).text
