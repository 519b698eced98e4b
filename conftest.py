"""
Pytest bridge for LaborantTest classes.

LaborantTest subclasses define an __init__, so pytest's default class
collection skips them. This hook collects each test_* method as an item
and runs it through LaborantTest.run_tests, so class setup, per-test hooks
and async tests behave the same as under ``run_as_main``.
"""

import inspect

import pytest

from shared.tests import LaborantTest


class LaborantTestFailure(Exception):
    """A LaborantTest method reported fail or error."""


class LaborantItem(pytest.Item):
    def __init__(self, *, test_class, **kwargs):
        super().__init__(**kwargs)
        self.test_class = test_class

    def runtest(self):
        result = self.test_class().run_tests([self.name])
        for test in result.tests:
            if not test.passed:
                raise LaborantTestFailure(f"{test.name} [{test.status}]: {test.error}")

    def repr_failure(self, excinfo):
        if isinstance(excinfo.value, LaborantTestFailure):
            return str(excinfo.value)
        return super().repr_failure(excinfo)

    def reportinfo(self):
        return self.path, None, f"{self.test_class.__name__}::{self.name}"


class LaborantClass(pytest.Collector):
    def __init__(self, *, test_class, **kwargs):
        super().__init__(**kwargs)
        self.test_class = test_class

    def collect(self):
        for name in self.test_class.discover_tests():
            yield LaborantItem.from_parent(self, name=name, test_class=self.test_class)


def pytest_pycollect_makeitem(collector, name, obj):
    if (
        inspect.isclass(obj)
        and issubclass(obj, LaborantTest)
        and obj is not LaborantTest
        and name == obj.__name__
        and obj.__module__ == collector.obj.__name__
    ):
        return LaborantClass.from_parent(collector, name=name, test_class=obj)
    return None
