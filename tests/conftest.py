from __future__ import annotations

import pytest

from samples import sample_actions


@pytest.fixture
def actions() -> list:
    return sample_actions()
