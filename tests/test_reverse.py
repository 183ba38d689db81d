"""Reverse routing: action identifier + parameters -> URL."""

import pytest

from routeconf import InsufficientParameters, NoMatchingAction, UnserializableValue


def test_plain_action(router):
    assert router.reverse("app.index") == "/"


def test_first_bindable_variant_wins(router):
    assert router.reverse("demos.index", {"test": "something"}) == "/demos/something"
    assert router.reverse("demos.index", "foo") == "/demos/foo"


def test_falls_back_to_variant_without_placeholders(router):
    assert router.reverse("demos.index") == "/demos"


def test_unknown_action(router):
    with pytest.raises(NoMatchingAction) as excinfo:
        router.reverse("something.fake")
    assert "No matching action was found: something.fake" in str(excinfo.value)


def test_unknown_action_is_a_lookup_error(router):
    with pytest.raises(LookupError):
        router.reverse("something.fake")


def test_last_bind_failure_is_raised(router):
    with pytest.raises(InsufficientParameters) as excinfo:
        router.reverse("demos.required")
    assert excinfo.value.placeholder == ":required"


def test_router_is_callable(router):
    assert router("demos.required", 7) == "/demos/required/7"
    assert router("users.login", {"next": "/home"}) == "/users/login?next=/home"


def test_wildcard_routes_reverse(router):
    assert router.reverse("pages.about") == "/pages/about"
    assert router.reverse("pages.contact", {"ref": "footer"}) == "/pages/contact?ref=footer"


def test_earlier_entry_wins_when_both_bind(make_router):
    router = make_router("GET /a/:id items.show\nGET /b/:id items.show\n")
    assert router.reverse("items.show", 1) == "/a/1"


def test_failure_of_last_candidate_is_reported(make_router):
    router = make_router("GET /a/:id items.show\nGET /b/:id/:slug items.show\n")
    with pytest.raises(InsufficientParameters) as excinfo:
        router.reverse("items.show")
    assert excinfo.value.placeholder == ":id"
    assert excinfo.value.url == "/b/:id/:slug"


def test_static_mounts_are_not_actions(make_router, tmp_path):
    (tmp_path / "public").mkdir()
    router = make_router("GET /public staticDir:public\n")
    with pytest.raises(NoMatchingAction):
        router.reverse("staticDir:public")


def test_list_parameter_is_not_substituted(router):
    with pytest.raises(InsufficientParameters) as excinfo:
        router.reverse("demos.required", ["x", "y"])
    assert excinfo.value.placeholder == ":required"


def test_callable_parameter_falls_back_to_plain_variant(router):
    assert router.reverse("demos.index", len) == "/demos"


def test_strict_router_rejects_non_scalar_parameters(make_router):
    router = make_router("GET /items/:id items.show\n", strict_values=True)
    with pytest.raises(UnserializableValue) as excinfo:
        router.reverse("items.show", ["a", "b"])
    assert excinfo.value.key == "id"
