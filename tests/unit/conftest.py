"""Shared fixtures for unit tests."""

from unittest.mock import Mock

import pytest

from core.interfaces.service_facade_interface import IServiceFacade
from core.models.instance import Application, Instance
from tests.unit.fakes import FakeClock


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def application():
    return Application("app-1")


@pytest.fixture
def instance(application):
    return Instance("inst-42", application)


@pytest.fixture
def facade():
    return Mock(spec=IServiceFacade)
