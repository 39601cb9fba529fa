"""Multi-agent tutor: routes a student's question to a subject agent."""

__version__ = "1.0.0"
