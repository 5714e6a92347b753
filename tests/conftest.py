"""Pytest configuration for the GlobeTrotter project."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Ensure the project root is on sys.path so that import globetrotter works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class StubGenerator:
    """Text generator double that records prompts and replays a canned answer."""

    def __init__(self, response: str = "", error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator()
