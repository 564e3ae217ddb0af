"""Targets a load test can send requests to."""

from search_load_test.targets.base import Target
from search_load_test.targets.http import HttpTarget

__all__ = ["HttpTarget", "Target"]
