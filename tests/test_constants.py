import pytest

from tutor_agents.tools.constants import ConstantEntry, PHYSICS_CONSTANTS, build_constant_table


def test_planck_entry() -> None:
    planck = PHYSICS_CONSTANTS["planck"]
    assert planck.symbol == "h"
    assert planck.value == 6.62607015e-34
    assert planck.unit == "J·s"


def test_keys_unique_ignoring_case() -> None:
    keys = [k.lower() for k in PHYSICS_CONSTANTS]
    assert len(keys) == len(set(keys))


def test_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        PHYSICS_CONSTANTS["planck"] = None


def test_duplicate_key_rejected() -> None:
    entries = [
        ConstantEntry("planck", "h", 1, "J·s", "a"),
        ConstantEntry("Planck", "h", 2, "J·s", "b"),
    ]
    with pytest.raises(ValueError, match="Duplicate"):
        build_constant_table(entries)


def test_overlapping_keys_rejected() -> None:
    # "boltzmann" would always outscore "stefanBoltzmann" for the longer name
    entries = [
        ConstantEntry("boltzmann", "k_B", 1, "J/K", "a"),
        ConstantEntry("stefanBoltzmann", "σ", 2, "W/(m²·K⁴)", "b"),
    ]
    with pytest.raises(ValueError, match="overlaps"):
        build_constant_table(entries)


def test_no_key_contains_another() -> None:
    keys = [k.lower() for k in PHYSICS_CONSTANTS]
    for key in keys:
        assert [other for other in keys if key in other] == [key]
