"""Random action sequence generation and sequence checks."""

from __future__ import annotations

import itertools
import random
from collections.abc import Iterator

from .artifact_models import ActionSequence, InvalidConfiguration
from .generator_settings import ActionSequenceSettings

EXIT_ACTION = "E"
QUIT_ACTION = "Q"
START_ACTION = "S"


class ActionSequenceGenerator:
    """Generate action sequences of length ``1..max_length``."""

    def __init__(
        self,
        settings: ActionSequenceSettings,
        *,
        rng: random.Random | None = None,
    ) -> None:
        _validate_action_settings(settings)
        self._settings = settings
        self._rng = rng or random.Random()
        self._alphabet = tuple(dict.fromkeys(settings.alphabet))
        self._valid_subset = tuple(dict.fromkeys(settings.valid_subset))
        self._required = tuple(settings.required_actions)

    @property
    def settings(self) -> ActionSequenceSettings:
        return self._settings

    def generate_random_action_sequence(self) -> ActionSequence:
        """Draw every token from the full action alphabet."""
        return self._generate(self._alphabet)

    def generate_valid_action_sequence(self) -> ActionSequence:
        """Draw every token from the valid subset of the alphabet."""
        return self._generate(self._valid_subset)

    def _generate(self, tokens: tuple[str, ...]) -> ActionSequence:
        length = self._rng.randint(max(1, len(self._required)), self._settings.max_length)
        actions = [self._rng.choice(tokens) for _ in range(length)]
        if self._required:
            positions = self._rng.sample(range(length), len(self._required))
            for action, position in zip(self._required, positions, strict=True):
                actions[position] = action
        return ActionSequence(actions=tuple(actions))


def check_action_sequence(
    sequence: ActionSequence | str,
    *,
    require_exit: bool = True,
    require_closed_starts: bool = True,
) -> bool:
    """Return whether ``sequence`` passes the requested structural checks.

    Args:
      sequence: Tokens to check.
      require_exit: The sequence must contain at least one exit action.
      require_closed_starts: Every start action must be followed later by an
        exit or quit action.
    """
    tokens = str(sequence)
    if require_exit and EXIT_ACTION not in tokens:
        return False
    if require_closed_starts:
        last_start = tokens.rfind(START_ACTION)
        if last_start != -1:
            closing = tokens[last_start + 1 :]
            if EXIT_ACTION not in closing and QUIT_ACTION not in closing:
                return False
    return True


def enumerate_action_sequences(
    length: int,
    alphabet: str,
    *,
    require_exit: bool = False,
    require_closed_starts: bool = False,
) -> Iterator[ActionSequence]:
    """Yield every sequence of exactly ``length`` tokens that passes the checks.

    Sequences are produced in lexicographic order of ``alphabet``.
    """
    if length < 0:
        raise InvalidConfiguration(f"Sequence length must not be negative, got {length}.")
    tokens = tuple(dict.fromkeys(alphabet))
    for combination in itertools.product(tokens, repeat=length):
        candidate = ActionSequence(actions=combination)
        if check_action_sequence(
            candidate,
            require_exit=require_exit,
            require_closed_starts=require_closed_starts,
        ):
            yield candidate


def _validate_action_settings(settings: ActionSequenceSettings) -> None:
    if settings.max_length < 1:
        raise InvalidConfiguration(
            f"action_sequence.max_length must be at least 1, got {settings.max_length}."
        )
    if not settings.alphabet:
        raise InvalidConfiguration("action_sequence.alphabet must not be empty.")
    if not settings.valid_subset:
        raise InvalidConfiguration("action_sequence.valid_subset must not be empty.")
    outside = sorted(set(settings.valid_subset) - set(settings.alphabet))
    if outside:
        raise InvalidConfiguration(
            f"action_sequence.valid_subset tokens {outside} are not in the alphabet."
        )
    unknown_required = sorted(set(settings.required_actions) - set(settings.alphabet))
    if unknown_required:
        raise InvalidConfiguration(
            f"action_sequence.required_actions tokens {unknown_required} are not in the alphabet."
        )
    if len(settings.required_actions) > settings.max_length:
        raise InvalidConfiguration(
            f"action_sequence.max_length ({settings.max_length}) cannot hold "
            f"{len(settings.required_actions)} required actions."
        )
