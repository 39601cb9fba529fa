"""
Static descriptions of the available agents.

Registration order matters: it is the router's tie-break order.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class Capability(str, Enum):
    """Whether an agent may answer locally before asking the model."""

    DETERMINISTIC_FASTPATH = "deterministic-fastpath"
    GENERATIVE_ONLY = "generative-only"


@dataclass(frozen=True)
class AgentDescriptor:
    """
    Name, model instructions and routing vocabulary of one agent.

    ``capability`` gates the local fast path of the Math and Physics agents:
    with GENERATIVE_ONLY they send every query to the model.
    """

    name: str
    instructions: str
    capability: Capability
    keywords: Tuple[str, ...] = field(default_factory=tuple)


MATH = AgentDescriptor(
    name="MathAgent",
    instructions="You are a math expert. Help solve math problems and equations.",
    capability=Capability.DETERMINISTIC_FASTPATH,
    keywords=(
        "math", "algebra", "arithmetic", "calculate", "calculus", "derivative",
        "divide", "equation", "fraction", "geometry", "integral", "multiply",
        "percent", "solve", "trigonometry",
    ),
)

PHYSICS = AgentDescriptor(
    name="PhysicsAgent",
    instructions="You are a physics expert. Explain physical constants and physics concepts.",
    capability=Capability.DETERMINISTIC_FASTPATH,
    # build_tutor adds the constant table keys to these
    keywords=(
        "physics", "acceleration", "avogadro", "boltzmann", "constant", "electron",
        "energy", "force", "friction", "gravity", "momentum", "newton", "planck",
        "quantum", "speed of light", "velocity",
    ),
)

CHEMISTRY = AgentDescriptor(
    name="ChemistryAgent",
    instructions="You are a chemistry expert. Help solve chemistry problems and equations.",
    capability=Capability.GENERATIVE_ONLY,
    keywords=(
        "chemistry", "acid", "chemical", "compound", "elements", "equation",
        "molecule", "periodic table", "reaction",
    ),
)

HISTORY = AgentDescriptor(
    name="HistoryAgent",
    instructions=(
        "You are a history expert. Explain historical events, people and periods "
        "clearly and with accurate dates."
    ),
    capability=Capability.GENERATIVE_ONLY,
    keywords=(
        "history", "ancient", "battle", "century", "civilization", "dynasty",
        "emperor", "empire", "historical", "medieval", "revolution", "world war",
    ),
)

TUTOR = AgentDescriptor(
    name="TutorAgent",
    instructions=(
        "You are a friendly general tutor. Answer the student's question clearly "
        "and simply, and suggest how they could learn more."
    ),
    capability=Capability.GENERATIVE_ONLY,
    keywords=("tutor",),
)

DEFAULT_DESCRIPTORS = (MATH, PHYSICS, CHEMISTRY, HISTORY, TUTOR)
