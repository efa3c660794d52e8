"""
Pytest fixtures and configuration for group_validator tests.
Provides recording predicates shared across the unit tests.
"""

import asyncio

import pytest


class PredicateRecorder:
    """Predicate that records every item it is called with."""

    def __init__(self, expected_value: int = 4):
        self.expected_value = expected_value
        self.calls = []

    def __call__(self, item, group):
        self.calls.append(item)
        return {"valid": item["value"] == self.expected_value}


class AsyncPredicateRecorder(PredicateRecorder):
    """Async predicate recording start/end events around a suspension point."""

    def __init__(self, expected_value: int = 4, delay: float = 0.0):
        super().__init__(expected_value)
        self.delay = delay
        self.events = []

    async def __call__(self, item, group):
        self.calls.append(item)
        self.events.append(("start", id(item)))
        await asyncio.sleep(self.delay)
        self.events.append(("end", id(item)))
        return {"valid": item["value"] == self.expected_value}


@pytest.fixture
def recording_predicate():
    """Synchronous predicate that records its calls."""
    return PredicateRecorder()


@pytest.fixture
def async_recording_predicate():
    """Asynchronous predicate that records its calls and suspension events."""
    return AsyncPredicateRecorder()
