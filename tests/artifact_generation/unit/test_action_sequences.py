"""Action sequence generator and check tests."""

from __future__ import annotations

import random

import pytest
from simple_map_fuzzer.artifact_generation import (
    ActionSequence,
    ActionSequenceGenerator,
    ActionSequenceSettings,
    InvalidConfiguration,
    check_action_sequence,
    enumerate_action_sequences,
)


def test_random_sequences_use_alphabet_and_length_bound() -> None:
    generator = ActionSequenceGenerator(ActionSequenceSettings(max_length=6), rng=random.Random(1))

    for _ in range(200):
        sequence = generator.generate_random_action_sequence()
        assert 1 <= len(sequence) <= 6
        assert set(str(sequence)) <= set("EQSWULDR")


def test_valid_sequences_only_use_valid_subset() -> None:
    generator = ActionSequenceGenerator(ActionSequenceSettings(), rng=random.Random(2))

    for _ in range(200):
        assert set(str(generator.generate_valid_action_sequence())) <= set("ULDR")


def test_required_actions_appear_in_every_sequence() -> None:
    settings = ActionSequenceSettings(max_length=4, required_actions="SE")
    generator = ActionSequenceGenerator(settings, rng=random.Random(3))

    for _ in range(200):
        text = str(generator.generate_random_action_sequence())
        assert 2 <= len(text) <= 4
        assert "S" in text
        assert "E" in text


def test_same_seed_reproduces_sequences() -> None:
    first = ActionSequenceGenerator(ActionSequenceSettings(), rng=random.Random(8))
    second = ActionSequenceGenerator(ActionSequenceSettings(), rng=random.Random(8))

    assert [first.generate_random_action_sequence() for _ in range(50)] == [
        second.generate_random_action_sequence() for _ in range(50)
    ]


@pytest.mark.parametrize(
    ("settings", "message"),
    [
        (ActionSequenceSettings(max_length=0), "max_length"),
        (ActionSequenceSettings(alphabet=""), "alphabet must not be empty"),
        (ActionSequenceSettings(valid_subset=""), "valid_subset must not be empty"),
        (ActionSequenceSettings(alphabet="UD", valid_subset="UX"), "valid_subset"),
        (ActionSequenceSettings(required_actions="Z"), "required_actions"),
        (ActionSequenceSettings(max_length=1, required_actions="SE"), "cannot hold"),
    ],
)
def test_contradictory_action_settings_fail_at_construction(
    settings: ActionSequenceSettings, message: str
) -> None:
    with pytest.raises(InvalidConfiguration, match=message):
        ActionSequenceGenerator(settings)


@pytest.mark.parametrize(
    ("sequence", "expected"),
    [
        ("SULE", True),
        ("ULD", False),
        ("SULD", False),
        ("ESUL", False),
        ("SUQE", True),
        ("ESQ", True),
    ],
)
def test_check_action_sequence(sequence: str, expected: bool) -> None:
    assert check_action_sequence(sequence) is expected


def test_check_can_skip_exit_requirement() -> None:
    assert check_action_sequence("SUQ", require_exit=False)
    assert check_action_sequence(ActionSequence(actions=("U", "S")), require_exit=False) is False
    assert check_action_sequence("US", require_exit=False, require_closed_starts=False)


def test_enumeration_yields_every_combination_in_order() -> None:
    sequences = [str(sequence) for sequence in enumerate_action_sequences(2, "AB")]

    assert sequences == ["AA", "AB", "BA", "BB"]


def test_enumeration_applies_checks() -> None:
    sequences = [
        str(sequence)
        for sequence in enumerate_action_sequences(
            2, "SEU", require_exit=True, require_closed_starts=True
        )
    ]

    assert sequences == ["SE", "EE", "EU", "UE"]


def test_enumeration_rejects_negative_length() -> None:
    with pytest.raises(InvalidConfiguration):
        list(enumerate_action_sequences(-1, "UD"))
