from dataclasses import FrozenInstanceError

import pytest

from arrow_template.config import DEFAULT_CONFIG, IterationConfig


def test_defaults() -> None:
    assert DEFAULT_CONFIG.max_steps is None
    assert DEFAULT_CONFIG.loop_var == "iterator"


@pytest.mark.parametrize("max_steps", [0, -1])
def test_max_steps_must_be_positive(max_steps: int) -> None:
    with pytest.raises(ValueError, match="max_steps"):
        IterationConfig(max_steps=max_steps)


@pytest.mark.parametrize("loop_var", ["", "1st", "loop var", "a-b"])
def test_loop_var_must_be_identifier(loop_var: str) -> None:
    with pytest.raises(ValueError, match="loop_var"):
        IterationConfig(loop_var=loop_var)


def test_config_is_frozen() -> None:
    config = IterationConfig(max_steps=10)
    with pytest.raises(FrozenInstanceError):
        config.max_steps = 20  # type: ignore[misc]
