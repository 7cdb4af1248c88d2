"""Tests for the content path router and the plugin route table."""

from unittest.mock import MagicMock

import pytest

from knative_dashboard.domains.serving.crds import ServingKind
from knative_dashboard.domains.serving.plugin import build_router
from knative_dashboard.linker import Linker, ref
from knative_dashboard.models.common import ResourceIdentity
from knative_dashboard.router import PathSegment, Router, parse_pattern, split_path


class TestParsePattern:
    """Tests for pattern parsing."""

    def test_literal_and_param_segments(self) -> None:
        """Verify ':name' segments become parameters."""
        segments = parse_pattern("/services/:serviceName/revisions")

        assert segments == (
            PathSegment("services"),
            PathSegment(":serviceName", is_param=True),
            PathSegment("revisions"),
        )
        assert segments[1].param_name == "serviceName"

    def test_root_pattern_has_no_segments(self) -> None:
        """Verify '/' parses to an empty segment tuple."""
        assert parse_pattern("/") == ()

    def test_unnamed_parameter_raises(self) -> None:
        """Verify a bare ':' is rejected."""
        with pytest.raises(ValueError, match="Unnamed parameter"):
            parse_pattern("/services/:")

    def test_split_path_normalizes_slashes(self) -> None:
        """Verify leading, trailing and doubled slashes are ignored."""
        assert split_path("services//hello/") == ["services", "hello"]


class TestRouter:
    """Tests for Router registration and resolution."""

    @pytest.fixture
    def router(self) -> Router:
        router = Router()
        router.add("/", "root", name="root")
        router.add("/services", "listing", name="listing")
        router.add("/services/:serviceName", "detail", name="detail")
        router.add("/services/:serviceName/revisions/:revisionName", "revision", name="revision")
        return router

    def test_resolve_literal(self, router: Router) -> None:
        """Verify a literal path resolves with no parameters."""
        match = router.resolve("/services")

        assert match is not None
        assert match.name == "listing"
        assert match.handler == "listing"
        assert match.params == {}

    def test_resolve_params(self, router: Router) -> None:
        """Verify parameters are bound by name."""
        match = router.resolve("/services/hello/revisions/hello-v1")

        assert match is not None
        assert match.params == {"serviceName": "hello", "revisionName": "hello-v1"}

    def test_resolve_root(self, router: Router) -> None:
        """Verify '/' resolves to the root pattern."""
        match = router.resolve("/")

        assert match is not None
        assert match.name == "root"

    def test_resolve_normalizes_path(self, router: Router) -> None:
        """Verify a missing leading slash and a trailing slash are tolerated."""
        match = router.resolve("services/hello/")

        assert match is not None
        assert match.params == {"serviceName": "hello"}

    def test_segment_count_must_match(self, router: Router) -> None:
        """Verify a path longer than every pattern does not match."""
        assert router.resolve("/services/hello/revisions") is None

    def test_empty_path_is_not_found(self, router: Router) -> None:
        """Verify the empty string never matches at the router level."""
        assert router.resolve("") is None

    def test_bogus_path_is_not_found(self, router: Router) -> None:
        """Verify unknown literals do not match."""
        assert router.resolve("/bogus/path") is None

    def test_first_registered_wins(self) -> None:
        """Verify overlapping patterns resolve to the one added first."""
        router = Router()
        router.add("/services/:serviceName", "detail", name="detail")
        router.add("/services/_new", "form", name="form")

        match = router.resolve("/services/_new")

        assert match is not None
        assert match.name == "detail"
        assert match.params == {"serviceName": "_new"}

    def test_duplicate_pattern_raises(self, router: Router) -> None:
        """Verify the same pattern cannot be registered twice."""
        with pytest.raises(ValueError, match="already registered"):
            router.add("/services/:otherName", "again")

    def test_add_after_freeze_raises(self, router: Router) -> None:
        """Verify the table is immutable once frozen."""
        router.freeze()

        with pytest.raises(RuntimeError):
            router.add("/routes", "routes")

    def test_routes_returns_copy(self, router: Router) -> None:
        """Verify callers cannot change the table through routes."""
        router.routes.clear()

        assert len(router.routes) == 4

    def test_default_name_is_pattern(self) -> None:
        """Verify unnamed routes are named after their pattern."""
        router = Router()
        entry = router.add("/routes", "routes")

        assert entry.name == "/routes"


class TestRouteTable:
    """Tests for the plugin route table."""

    @pytest.fixture
    def views(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def router(self, views: MagicMock) -> Router:
        return build_router(views)

    def test_registration_order(self, router: Router) -> None:
        """Verify the table lists every page in a fixed order."""
        assert [entry.pattern for entry in router.routes] == [
            "/",
            "/services",
            "/services/_new",
            "/services/:serviceName",
            "/services/:serviceName/revisions",
            "/services/:serviceName/revisions/:revisionName",
            "/configurations",
            "/configurations/:configurationName",
            "/configurations/:configurationName/revisions",
            "/configurations/:configurationName/revisions/:revisionName",
            "/routes",
            "/routes/:routeName",
        ]

    def test_router_is_frozen(self, router: Router) -> None:
        """Verify the table cannot be extended after construction."""
        with pytest.raises(RuntimeError):
            router.add("/extra", MagicMock())

    def test_new_service_form_wins_over_detail(self, router: Router, views: MagicMock) -> None:
        """Verify '/services/_new' shows the form rather than a Service called '_new'."""
        match = router.resolve("/services/_new")

        assert match is not None
        assert match.handler is views.new_service_form

    @pytest.mark.parametrize("root_path", ["", "/knative"])
    @pytest.mark.parametrize(
        ("reference", "context", "name", "params"),
        [
            (ref(), None, "overview", {}),
            (ref(ServingKind.SERVICE), None, "service-listing", {}),
            (ref(ServingKind.SERVICE, "_new"), None, "new-service-form", {}),
            (ref(ServingKind.SERVICE, "hello"), None, "service-detail", {"serviceName": "hello"}),
            (
                ref(ServingKind.REVISION),
                ref(ServingKind.SERVICE, "hello"),
                "redirect-to-service",
                {"serviceName": "hello"},
            ),
            (
                ref(ServingKind.REVISION, "hello-v1"),
                ref(ServingKind.SERVICE, "hello"),
                "revision-detail",
                {"serviceName": "hello", "revisionName": "hello-v1"},
            ),
            (ref(ServingKind.CONFIGURATION), None, "configuration-listing", {}),
            (
                ref(ServingKind.CONFIGURATION, "hello"),
                None,
                "configuration-detail",
                {"configurationName": "hello"},
            ),
            (
                ref(ServingKind.REVISION),
                ref(ServingKind.CONFIGURATION, "hello"),
                "redirect-to-configuration",
                {"configurationName": "hello"},
            ),
            (
                ref(ServingKind.REVISION, "hello-v1"),
                ref(ServingKind.CONFIGURATION, "hello"),
                "revision-detail",
                {"configurationName": "hello", "revisionName": "hello-v1"},
            ),
            (ref(ServingKind.ROUTE), None, "route-listing", {}),
            (ref(ServingKind.ROUTE, "hello"), None, "route-detail", {"routeName": "hello"}),
        ],
    )
    def test_links_resolve_back(
        self,
        router: Router,
        root_path: str,
        reference: ResourceIdentity,
        context: ResourceIdentity | None,
        name: str,
        params: dict[str, str],
    ) -> None:
        """Verify every linked path resolves to the page describing the same resource."""
        linker = Linker(root_path)

        match = router.resolve(linker.relative(linker.link(reference, context)))

        assert match is not None
        assert match.name == name
        assert match.params == params
