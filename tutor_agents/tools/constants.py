"""
Physical constants used by the Physics agent for instant answers.

Values are CODATA 2018 (exact where the SI defines them).
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Union


@dataclass(frozen=True)
class ConstantEntry:
    """A single physical constant."""

    key: str
    symbol: str
    value: Union[int, float]
    unit: str
    description: str


def build_constant_table(entries: Iterable[ConstantEntry]) -> Mapping[str, ConstantEntry]:
    """
    Build a read-only key -> entry mapping.

    A key that contains another key ("stefanBoltzmann" / "boltzmann") is
    refused too: the matcher scores the shorter key higher for any query
    naming the longer one, so the longer entry could never be returned.

    Raises:
        ValueError: if two entries share a key ignoring case, or one key
            contains another.
    """
    table = {}
    seen = set()
    for entry in entries:
        folded = entry.key.lower()
        if folded in seen:
            raise ValueError(f"Duplicate constant key: {entry.key!r}")
        for other in seen:
            if other in folded or folded in other:
                raise ValueError(f"Constant key {entry.key!r} overlaps {other!r}")
        seen.add(folded)
        table[entry.key] = entry
    return MappingProxyType(table)


PHYSICS_CONSTANTS = build_constant_table([
    ConstantEntry(
        key="speedOfLight",
        symbol="c",
        value=299792458,
        unit="m/s",
        description="Speed of light in vacuum",
    ),
    ConstantEntry(
        key="planck",
        symbol="h",
        value=6.62607015e-34,
        unit="J·s",
        description="Planck constant, relating a photon's energy to its frequency",
    ),
    ConstantEntry(
        key="hBar",
        symbol="ħ",
        value=1.054571817e-34,
        unit="J·s",
        description="Reduced Planck constant (h / 2π)",
    ),
    ConstantEntry(
        key="gravitational",
        symbol="G",
        value=6.6743e-11,
        unit="N·m²/kg²",
        description="Newtonian constant of gravitation",
    ),
    ConstantEntry(
        key="boltzmann",
        symbol="k_B",
        value=1.380649e-23,
        unit="J/K",
        description="Boltzmann constant, relating temperature to particle energy",
    ),
    ConstantEntry(
        key="avogadro",
        symbol="N_A",
        value=6.02214076e23,
        unit="1/mol",
        description="Avogadro constant, the number of particles in one mole",
    ),
    ConstantEntry(
        key="elementaryCharge",
        symbol="e",
        value=1.602176634e-19,
        unit="C",
        description="Electric charge of a single proton",
    ),
    ConstantEntry(
        key="electronMass",
        symbol="m_e",
        value=9.1093837015e-31,
        unit="kg",
        description="Rest mass of the electron",
    ),
    ConstantEntry(
        key="protonMass",
        symbol="m_p",
        value=1.67262192369e-27,
        unit="kg",
        description="Rest mass of the proton",
    ),
    ConstantEntry(
        key="gasConstant",
        symbol="R",
        value=8.314462618,
        unit="J/(mol·K)",
        description="Molar gas constant",
    ),
    ConstantEntry(
        key="vacuumPermittivity",
        symbol="ε₀",
        value=8.8541878128e-12,
        unit="F/m",
        description="Electric constant, permittivity of free space",
    ),
    ConstantEntry(
        key="vacuumPermeability",
        symbol="μ₀",
        value=1.25663706212e-6,
        unit="N/A²",
        description="Magnetic constant, permeability of free space",
    ),
    ConstantEntry(
        key="standardGravity",
        symbol="g",
        value=9.80665,
        unit="m/s²",
        description="Standard acceleration due to gravity at Earth's surface",
    ),
])
