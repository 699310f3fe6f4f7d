import numpy as np
import pytest

pytest.importorskip("vispy")
pytest.importorskip("PyQt5")

from lifegrid.constants import COLORS  # noqa: E402
from lifegrid.view import animate_world, get_color, update_ages  # noqa: E402
from lifegrid.model import World  # noqa: E402


def test_update_ages_counts_consecutive_generations():
    ages = np.zeros((2, 2), dtype=np.int64)
    ages = update_ages(ages, np.array([[1, 0], [1, 1]]))
    ages = update_ages(ages, np.array([[1, 1], [0, 1]]))
    assert ages.tolist() == [[2, 1], [0, 2]]


@pytest.mark.parametrize("age,name", [
    (0, 'very_young'),
    (19, 'mature'),
    (25, 'middle_aged'),
    (60, 'old'),
    (500, 'ancient'),
])
def test_get_color_by_age(age, name):
    assert get_color(age) == COLORS[name]


@pytest.mark.parametrize("kwargs", [{'frame_skip': 0}, {'interval': 0}])
def test_animate_world_validates_arguments(kwargs):
    with pytest.raises(ValueError):
        animate_world(World(4), **kwargs)
