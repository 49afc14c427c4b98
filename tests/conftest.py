from __future__ import annotations

import os
import random

import pytest

# pygame must never need a real display or sound card under test.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
