from .descriptors import AgentDescriptor, Capability, DEFAULT_DESCRIPTORS
from .model_facade import AgentReply, ModelFacade
from .math_agent import MathAgent
from .physics_agent import PhysicsAgent
from .subject_agent import SubjectAgent
from .registry import AgentRegistry, SpecialistAgent
from .tutor_agent import Message, RouteResult, TutorAgent, build_tutor

__all__ = [
    "AgentDescriptor",
    "Capability",
    "DEFAULT_DESCRIPTORS",
    "AgentReply",
    "ModelFacade",
    "MathAgent",
    "PhysicsAgent",
    "SubjectAgent",
    "AgentRegistry",
    "SpecialistAgent",
    "Message",
    "RouteResult",
    "TutorAgent",
    "build_tutor",
]
