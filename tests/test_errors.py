"""Tests for routeurl.errors — exception hierarchy and error messages."""

import pytest

from routeurl.errors import InvalidArgument, NoMatch, PatternError, RouteUrlError


class TestHierarchy:
    def test_invalid_argument_is_routeurl_error(self) -> None:
        assert issubclass(InvalidArgument, RouteUrlError)

    def test_invalid_argument_is_type_error(self) -> None:
        assert issubclass(InvalidArgument, TypeError)

    def test_pattern_error_is_value_error(self) -> None:
        assert issubclass(PatternError, RouteUrlError)
        assert issubclass(PatternError, ValueError)

    def test_no_match_is_routeurl_error(self) -> None:
        assert issubclass(NoMatch, RouteUrlError)


class TestNoMatch:
    def test_fields(self) -> None:
        err = NoMatch(route="user.show", path="/nope")
        assert err.route == "user.show"
        assert err.path == "/nope"

    def test_str(self) -> None:
        err = NoMatch(route="user.show", path="/nope")
        assert str(err) == 'The route named "user.show" does not match the path "/nope"'

    def test_frozen(self) -> None:
        err = NoMatch(route="a", path="/b")
        with pytest.raises(AttributeError):
            err.route = "c"  # type: ignore[misc]

    def test_raisable(self) -> None:
        with pytest.raises(RouteUrlError, match="does not match"):
            raise NoMatch(route="a", path="/b")
