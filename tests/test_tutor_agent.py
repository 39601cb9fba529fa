"""
Routing and dispatch through the TutorAgent.
"""
import re

import pytest

from tutor_agents.agents.descriptors import MATH, AgentDescriptor, Capability
from tutor_agents.agents.model_facade import AgentReply, ModelFacade
from tutor_agents.agents.registry import AgentRegistry
from tutor_agents.agents.subject_agent import SubjectAgent
from tutor_agents.agents.tutor_agent import Message, RouteResult, TutorAgent, build_tutor
from tutor_agents.errors import InvalidInput
from tutor_agents.tools.constants import PHYSICS_CONSTANTS

from .conftest import FailingClient, FakeClient


def _user(text: str) -> dict:
    return {"role": "user", "content": text}


class TestClassification:
    def test_joke_goes_to_tutor(self, tutor) -> None:
        result = tutor.route([_user("tell me a joke")])
        assert result.agent_name == "TutorAgent"
        assert result.response_text == "model answer"
        assert result.succeeded

    def test_planck_goes_to_physics_fast_path(self, tutor, fake_client) -> None:
        result = tutor.route([_user("what is planck's constant")])
        assert result.agent_name == "PhysicsAgent"
        assert result.response_text.startswith("**Planck**")
        assert fake_client.prompts == []

    def test_arithmetic_goes_to_math(self, tutor, fake_client) -> None:
        result = tutor.route([_user("2 + 2")])
        assert result == RouteResult(response_text="4", agent_name="MathAgent", succeeded=True)
        assert fake_client.prompts == []

    @pytest.mark.parametrize(
        "query, agent",
        [
            ("Who won the battle of Hastings?", "HistoryAgent"),
            ("balance this chemical reaction", "ChemistryAgent"),
            ("help me solve for x", "MathAgent"),
            ("what is momentum", "PhysicsAgent"),
        ],
    )
    def test_subject_queries(self, tutor, query, agent) -> None:
        assert tutor.classify(query) == agent

    def test_shared_keyword_tie_prefers_registration_order(self, tutor) -> None:
        # "equation" is a keyword of both Math and Chemistry
        for _ in range(20):
            assert tutor.classify("equation") == "MathAgent"

    def test_tie_break_follows_registry_order(self) -> None:
        client = FakeClient()
        alpha = AgentDescriptor("Alpha", "a", Capability.GENERATIVE_ONLY, ("topic",))
        beta = AgentDescriptor("Beta", "b", Capability.GENERATIVE_ONLY, ("topic",))
        fallback = AgentDescriptor("Fallback", "f", Capability.GENERATIVE_ONLY, ("fallback",))

        def make(*descriptors):
            return AgentRegistry([SubjectAgent(ModelFacade(client, d.name), d) for d in descriptors])

        forward = TutorAgent(make(alpha, beta, fallback), default_agent="Fallback")
        backward = TutorAgent(make(beta, alpha, fallback), default_agent="Fallback")

        for _ in range(10):
            assert forward.classify("a topic question") == "Alpha"
            assert backward.classify("a topic question") == "Beta"

    def test_only_latest_user_message_is_dispatched(self, tutor, fake_client) -> None:
        result = tutor.route([
            _user("2 + 2"),
            {"role": "assistant", "content": "4"},
            _user("tell me a joke"),
        ])
        assert result.agent_name == "TutorAgent"
        assert fake_client.prompts[0].endswith("User: tell me a joke")
        assert "2 + 2" not in fake_client.prompts[0]

    def test_accepts_message_objects(self, tutor) -> None:
        result = tutor.route([Message(role="user", content="5 * 5")])
        assert result.response_text == "25"

    def test_arithmetic_in_a_sentence_goes_to_math(self, tutor, fake_client) -> None:
        assert tutor.classify("what is 2 + 2") == "MathAgent"

        result = tutor.route([_user("what is 2 + 2")])
        assert result.agent_name == "MathAgent"
        assert result.response_text == "model answer"
        assert fake_client.prompts[0].startswith(MATH.instructions)

    def test_subject_keyword_beats_embedded_arithmetic(self, tutor) -> None:
        assert tutor.classify("the world war lasted 1939-1945, why?") == "HistoryAgent"
        assert tutor.classify("tell me a joke about 3 cats") == "TutorAgent"


def _natural(key: str) -> str:
    """'vacuumPermittivity' -> 'what is the vacuum permittivity'"""
    return "what is the " + re.sub(r"([A-Z])", r" \1", key).lower()


class TestConstantRouting:
    @pytest.mark.parametrize("key", list(PHYSICS_CONSTANTS))
    def test_every_constant_reaches_physics(self, tutor, fake_client, key) -> None:
        result = tutor.route([_user(_natural(key))])

        assert result.agent_name == "PhysicsAgent"
        assert result.response_text.startswith(f"**{key[:1].upper() + key[1:]}**")
        assert len(result.response_text.splitlines()) == 4
        assert fake_client.prompts == []

    @pytest.mark.parametrize(
        "query, title",
        [
            ("what is the elementary charge", "**ElementaryCharge**"),
            ("proton mass", "**ProtonMass**"),
            ("vacuum permittivity", "**VacuumPermittivity**"),
            ("vacuum permeability", "**VacuumPermeability**"),
        ],
    )
    def test_constants_missing_from_subject_keywords(self, tutor, query, title) -> None:
        result = tutor.route([_user(query)])
        assert result.agent_name == "PhysicsAgent"
        assert result.response_text.splitlines()[0] == title

    def test_chemistry_still_owns_elements(self, tutor) -> None:
        assert tutor.classify("list the elements in group 1") == "ChemistryAgent"


class TestFailureContainment:
    def test_model_outage_is_readable_text(self) -> None:
        tutor = build_tutor(FailingClient())
        result = tutor.route([_user("tell me a joke")])

        assert result.agent_name == "TutorAgent"
        assert not result.succeeded
        assert result.response_text == "Agent TutorAgent failed: service unavailable"

    @pytest.mark.parametrize(
        "query",
        ["tell me a joke", "what is planck's constant", "2 + 2", "10 / 0", "history of rome", "?"],
    )
    def test_response_never_empty(self, query) -> None:
        for client in (FakeClient(""), FailingClient(), FakeClient("fine")):
            result = build_tutor(client).route([_user(query)])
            assert result.response_text.strip()

    def test_empty_agent_reply_is_replaced(self) -> None:
        class SilentAgent:
            descriptor = AgentDescriptor("Silent", "", Capability.GENERATIVE_ONLY, ("silent",))
            name = "Silent"

            def answer(self, query):
                return AgentReply(text="")

            def respond(self, query):
                return ""

        tutor = TutorAgent(AgentRegistry([SilentAgent()]), default_agent="Silent")
        result = tutor.route([_user("anything")])
        assert result.response_text == "Agent Silent failed: empty response"
        assert not result.succeeded


class TestInvalidInput:
    @pytest.mark.parametrize(
        "messages",
        [
            [],
            [{"role": "assistant", "content": "hello"}],
            [_user("   ")],
            [{"role": "system", "content": "hi"}],
            [{"role": "user", "content": None}],
            ["just a string"],
        ],
    )
    def test_rejected(self, tutor, messages) -> None:
        with pytest.raises(InvalidInput):
            tutor.route(messages)

    def test_unknown_default_agent(self) -> None:
        registry = AgentRegistry([
            SubjectAgent(ModelFacade(FakeClient(), "Only"), AgentDescriptor("Only", "", Capability.GENERATIVE_ONLY)),
        ])
        with pytest.raises(ValueError):
            TutorAgent(registry, default_agent="Missing")


class TestDiscovery:
    def test_available_agents_in_registration_order(self, tutor) -> None:
        assert tutor.available_agents() == [
            "MathAgent", "PhysicsAgent", "ChemistryAgent", "HistoryAgent", "TutorAgent",
        ]

    def test_tutor_responds_as_default_agent(self, tutor, fake_client) -> None:
        assert tutor.name == "TutorAgent"
        assert tutor.respond("what is 2 + 2") == "model answer"
        assert len(fake_client.prompts) == 1

    def test_to_response_shape(self) -> None:
        result = RouteResult("hi", "TutorAgent", True)
        assert result.to_response() == {"response": "hi", "agent": "TutorAgent"}

    def test_registry_rejects_duplicates(self) -> None:
        d = AgentDescriptor("Dup", "", Capability.GENERATIVE_ONLY)
        with pytest.raises(ValueError, match="duplicate"):
            AgentRegistry([
                SubjectAgent(ModelFacade(FakeClient(), "Dup"), d),
                SubjectAgent(ModelFacade(FakeClient(), "Dup"), d),
            ])
