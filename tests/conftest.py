"""Shared fixtures."""

import pytest
from fotoroute_core.controllers.base import Controller, ControllerRegistry
from fotoroute_core.routing.dispatcher import Dispatcher
from fotoroute_core.routing.router import RouteTable


class RecordingController(Controller):
    """Records every action call on the class."""

    calls = []

    def index(self, *params):
        RecordingController.calls.append((type(self).__name__, "index", params))
        self.write("index")

    def show(self, *params):
        RecordingController.calls.append((type(self).__name__, "show", params))
        self.write(f"show {' '.join(params)}")


class Home(RecordingController):
    pass


class Photo(RecordingController):
    pass


@pytest.fixture
def calls():
    RecordingController.calls = []
    yield RecordingController.calls
    RecordingController.calls = []


@pytest.fixture
def registry():
    registry = ControllerRegistry()
    registry.register(Home)
    registry.register(Photo)
    return registry


@pytest.fixture
def routes():
    routes = RouteTable()
    routes.get("/", "Home@index")
    routes.get("/photos", "Photo@index")
    routes.get("/photos/{id}", "Photo@show")
    return routes


@pytest.fixture
def dispatcher(routes, registry):
    return Dispatcher(routes, registry)
