"""Tests for plugin configuration."""

import pytest

from knative_dashboard.config import KnativeDashboardConfig, LogLevel, get_config


class TestKnativeDashboardConfig:
    """Tests for KnativeDashboardConfig."""

    def test_defaults(self) -> None:
        """Verify the defaults when nothing is configured."""
        config = KnativeDashboardConfig(_env_file=None)

        assert config.plugin_name == "knative"
        assert config.default_namespace == "default"
        assert config.root_path == ""
        assert config.kubeconfig_path is None
        assert config.field_manager == "knative-dashboard"
        assert config.read_only_mode is False
        assert config.log_level == LogLevel.INFO

    def test_environment_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify settings are read from KNATIVE_DASHBOARD_ variables."""
        monkeypatch.setenv("KNATIVE_DASHBOARD_DEFAULT_NAMESPACE", "demo")
        monkeypatch.setenv("KNATIVE_DASHBOARD_READ_ONLY_MODE", "true")

        config = KnativeDashboardConfig(_env_file=None)

        assert config.default_namespace == "demo"
        assert config.read_only_mode is True

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("", ""),
            ("/", ""),
            ("knative", "/knative"),
            ("/knative/", "/knative"),
            (" /plugins/knative ", "/plugins/knative"),
        ],
    )
    def test_root_path_normalized(self, value: str, expected: str) -> None:
        """Verify the root path gets a leading slash and no trailing slash."""
        assert KnativeDashboardConfig(_env_file=None, root_path=value).root_path == expected

    def test_all_operations_allowed_by_default(self) -> None:
        """Verify nothing is refused outside read-only mode."""
        config = KnativeDashboardConfig(_env_file=None)

        for operation in ("read", "create", "update", "delete"):
            assert config.is_operation_allowed(operation) == (True, None)

    def test_read_only_mode_refuses_mutations(self) -> None:
        """Verify read-only mode refuses create, update and delete but allows reads."""
        config = KnativeDashboardConfig(_env_file=None, read_only_mode=True)

        allowed, reason = config.is_operation_allowed("update")
        assert allowed is False
        assert reason is not None and "read-only" in reason
        assert config.is_operation_allowed("create")[0] is False
        assert config.is_operation_allowed("read") == (True, None)


class TestGetConfig:
    """Tests for the cached config accessor."""

    def test_get_config_is_cached(self) -> None:
        """Verify get_config returns the same instance until cleared."""
        get_config.cache_clear()
        try:
            assert get_config() is get_config()
        finally:
            get_config.cache_clear()
