"""Dispatcher tests."""

import pytest
from fotoroute_core.app.request import Request, Response
from fotoroute_core.controllers.base import Controller, ControllerRegistry
from fotoroute_core.routing.dispatcher import Dispatcher, NOT_FOUND_BODY
from fotoroute_core.routing.matcher import HandlerResolutionError, Matched, NotFound
from fotoroute_core.routing.router import RouteTable


class TestDispatchScenario:
    """Test the Home/Photo routing scenario."""

    def test_root_invokes_home_index(self, dispatcher, calls):
        """Test / calls Home.index() with no parameters."""
        response = dispatcher.dispatch("/", "GET")
        assert calls == [("Home", "index", ())]
        assert response.body == b"index"

    def test_photo_show_receives_id(self, dispatcher, calls):
        """Test /photos/42 calls Photo.show("42")."""
        response = dispatcher.dispatch("/photos/42", "GET")
        assert calls == [("Photo", "show", ("42",))]
        assert response.body == b"show 42"

    def test_extra_segment_not_found(self, dispatcher, calls):
        """Test /photos/42/extra is a 404."""
        response = dispatcher.dispatch("/photos/42/extra", "GET")
        assert response.status == 404
        assert calls == []

    def test_unknown_path_not_found(self, dispatcher, calls):
        """Test /nope answers the fixed 404 body."""
        response = dispatcher.dispatch("/nope", "GET")
        assert response.status == 404
        assert response.text() == "404 - Page not found"
        assert response.text() == NOT_FOUND_BODY
        assert calls == []

    def test_unmatched_method_not_found(self, dispatcher, calls):
        """Test POST to a GET-only route is a 404."""
        response = dispatcher.dispatch("/photos", "POST")
        assert response.status == 404
        assert calls == []

    def test_trailing_slash_equivalence(self, dispatcher, calls):
        """Test /photos/ and /photos dispatch identically."""
        first = dispatcher.dispatch("/photos/", "GET")
        second = dispatcher.dispatch("/photos", "GET")
        assert first == second
        assert calls == [("Photo", "index", ()), ("Photo", "index", ())]

    def test_query_string_ignored(self, dispatcher, calls):
        """Test query strings do not affect matching."""
        dispatcher.dispatch("/photos/9?size=large", "GET")
        assert calls == [("Photo", "show", ("9",))]

    def test_success_status_left_to_handler(self, dispatcher, calls):
        """Test the router does not impose a status on success."""
        response = dispatcher.dispatch("/", "GET")
        assert response.status == 200
        assert "Content-Type" not in response.headers


class TestParameterOrder:
    """Test positional parameter passing."""

    def test_params_in_pattern_order(self, registry, calls):
        """Test /a/{x}/b/{y} on /a/1/b/2 yields ("1", "2")."""
        routes = RouteTable()
        routes.get("/a/{x}/b/{y}", "Photo@show")
        Dispatcher(routes, registry).dispatch("/a/1/b/2", "GET")
        assert calls == [("Photo", "show", ("1", "2"))]

    def test_params_passed_positionally(self):
        """Test parameter names do not bind by keyword."""
        received = []

        class Albums(Controller):
            def show(self, first, second):
                received.append((first, second))

        registry = ControllerRegistry()
        registry.register(Albums)
        routes = RouteTable()
        routes.get("/albums/{second}/photos/{first}", "Albums@show")

        Dispatcher(routes, registry).dispatch("/albums/a/photos/b", "GET")
        assert received == [("a", "b")]


class TestFirstMatch:
    """Test first-match semantics."""

    def test_earlier_route_wins(self, registry, calls):
        """Test the earlier overlapping route is invoked."""
        routes = RouteTable()
        routes.get("/photos/{id}", "Photo@show")
        routes.get("/photos/latest", "Home@index")

        Dispatcher(routes, registry).dispatch("/photos/latest", "GET")
        assert calls == [("Photo", "show", ("latest",))]

    def test_later_route_reached_on_method(self, registry, calls):
        """Test scanning continues past routes with another method."""
        routes = RouteTable()
        routes.post("/photos", "Home@index")
        routes.get("/photos", "Photo@index")

        Dispatcher(routes, registry).dispatch("/photos", "GET")
        assert calls == [("Photo", "index", ())]


class TestResolutionErrors:
    """Test handler resolution failures."""

    def test_controller_not_found(self, registry, calls):
        """Test missing controller answers 500."""
        routes = RouteTable()
        routes.get("/videos", "VideoController@index")

        response = Dispatcher(routes, registry).dispatch("/videos", "GET")
        assert response.status == 500
        assert response.text() == "Controller not found: VideoController"

    def test_method_not_found(self, registry, calls):
        """Test missing action answers 500."""
        routes = RouteTable()
        routes.get("/photos", "Photo@destroy")

        response = Dispatcher(routes, registry).dispatch("/photos", "GET")
        assert response.status == 500
        assert response.text() == "Method not found: destroy"
        assert calls == []

    def test_base_helpers_are_not_actions(self, registry):
        """Test Controller helpers cannot be routed to."""
        routes = RouteTable()
        routes.get("/status", "Photo@status")

        response = Dispatcher(routes, registry).dispatch("/status", "GET")
        assert response.status == 500
        assert response.text() == "Method not found: status"

    def test_private_methods_are_not_actions(self):
        """Test underscore methods cannot be routed to."""

        class Secret(Controller):
            def _hidden(self):
                self.write("leak")

        registry = ControllerRegistry()
        registry.register(Secret)
        routes = RouteTable()
        routes.get("/s", "Secret@_hidden")

        response = Dispatcher(routes, registry).dispatch("/s", "GET")
        assert response.status == 500
        assert b"leak" not in response.body

    def test_malformed_handler(self, registry):
        """Test a handler without a separator answers 500."""
        routes = RouteTable()
        routes.get("/broken", "PhotoController")

        response = Dispatcher(routes, registry).dispatch("/broken", "GET")
        assert response.status == 500
        assert response.text() == "Malformed handler: PhotoController"

    def test_resolution_error_not_raised(self, registry):
        """Test resolution errors never escape dispatch."""
        routes = RouteTable()
        routes.get("/x", "Nope@index")
        response = Dispatcher(routes, registry).dispatch("/x", "GET")
        assert response.is_error

    def test_handler_exceptions_propagate(self):
        """Test errors raised by an action are not swallowed."""

        class Faulty(Controller):
            def index(self):
                raise RuntimeError("boom")

        registry = ControllerRegistry()
        registry.register(Faulty)
        routes = RouteTable()
        routes.get("/", "Faulty@index")

        with pytest.raises(RuntimeError):
            Dispatcher(routes, registry).dispatch("/", "GET")


class TestMatch:
    """Test side-effect free matching."""

    def test_match_returns_matched(self, dispatcher, calls):
        """Test match reports the route and params without invoking."""
        result = dispatcher.match("/photos/5", "GET")
        assert isinstance(result, Matched)
        assert result.params == ("5",)
        assert calls == []

    def test_match_not_found(self, dispatcher):
        """Test match reports NotFound."""
        assert isinstance(dispatcher.match("/nope", "GET"), NotFound)

    def test_match_resolution_error(self, registry):
        """Test match reports unresolved handlers."""
        routes = RouteTable()
        routes.get("/videos", "Video@index")
        result = Dispatcher(routes, registry).match("/videos", "GET")
        assert result == HandlerResolutionError(
            HandlerResolutionError.CONTROLLER_NOT_FOUND, "Video"
        )

    def test_match_does_not_construct_controllers(self):
        """Test match never instantiates a controller."""
        created = []

        class Counted(Controller):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                created.append(self)

            def index(self):
                pass

        registry = ControllerRegistry()
        registry.register(Counted)
        routes = RouteTable()
        routes.get("/", "Counted@index")
        dispatcher = Dispatcher(routes, registry)

        dispatcher.match("/", "GET")
        assert created == []
        dispatcher.dispatch("/", "GET")
        assert len(created) == 1


class TestDispatchContext:
    """Test what controllers receive."""

    def test_controller_gets_request_response_and_db(self):
        """Test the request, response and injected db reach the controller."""
        seen = {}

        class Inspect(Controller):
            def index(self):
                seen["request"] = self.request
                seen["response"] = self.response
                seen["db"] = self.db

        db = object()
        registry = ControllerRegistry()
        registry.register(Inspect)
        routes = RouteTable()
        routes.get("/", "Inspect@index")

        request = Request(method="GET", uri="/")
        response = Response()
        result = Dispatcher(routes, registry, db=db).dispatch(
            "/", "GET", request=request, response=response
        )

        assert result is response
        assert seen == {"request": request, "response": response, "db": db}

    def test_handler_sets_status(self):
        """Test handlers control their own status code."""

        class Created(Controller):
            def store(self):
                self.status(201)
                self.write("created")

        registry = ControllerRegistry()
        registry.register(Created)
        routes = RouteTable()
        routes.post("/photos", "Created@store")

        response = Dispatcher(routes, registry).dispatch("/photos", "POST")
        assert response.status == 201
        assert response.body == b"created"

    def test_routes_unchanged_by_dispatch(self, dispatcher, routes):
        """Test dispatch does not mutate the route table."""
        before = routes.all_routes()
        dispatcher.dispatch("/photos/1", "GET")
        dispatcher.dispatch("/nope", "GET")
        assert routes.all_routes() == before
