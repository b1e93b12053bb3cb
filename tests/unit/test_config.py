"""Unit tests for DashboardConfig and model validation."""

import pytest

from infrawatch import DashboardConfig, MetricsModel
from infrawatch.dashboard import TIME_RANGES, TimeRange, time_range_for
from infrawatch.nodes import DEFAULT_REGIONS, STATUS_COLORS, HealthStatus


class TestDefaults:

    def test_recognized_options_have_documented_defaults(self):
        config = DashboardConfig()

        assert config.population_size == 24
        assert config.regions == DEFAULT_REGIONS
        assert len(config.regions) == 4
        assert config.metric_interval_ms == 2000
        assert config.node_interval_ms == 3000
        assert config.time_range == TimeRange("5m", 5)
        assert config.error_rate_threshold == 1.0
        assert config.max_samples == 150

    def test_status_colors_are_overridable_copies(self):
        config = DashboardConfig()
        assert config.color_for(HealthStatus.DOWN) == "#ef4444"

        custom = DashboardConfig(status_colors={**STATUS_COLORS, HealthStatus.DOWN: "black"})
        assert custom.color_for(HealthStatus.DOWN) == "black"
        assert STATUS_COLORS[HealthStatus.DOWN] == "#ef4444"

    @pytest.mark.parametrize(
        "label,minutes,samples",
        [("5m", 5, 150), ("15m", 15, 450), ("30m", 30, 900), ("1h", 60, 1800)],
    )
    def test_time_ranges(self, label, minutes, samples):
        time_range = time_range_for(label)
        assert time_range.minutes == minutes
        assert time_range.max_samples(2000) == samples

    def test_unknown_time_range(self):
        with pytest.raises(ValueError, match="Unknown time range"):
            time_range_for("2h")

    def test_time_ranges_are_ordered(self):
        assert [r.minutes for r in TIME_RANGES] == sorted(r.minutes for r in TIME_RANGES)


class TestFromEnv:

    def test_empty_environment_keeps_defaults(self):
        assert DashboardConfig.from_env({}) == DashboardConfig()

    def test_reads_all_variables(self):
        config = DashboardConfig.from_env({
            "IW_POPULATION_SIZE": "12",
            "IW_REGIONS": "eu-west, eu-north ,,",
            "IW_METRIC_INTERVAL_MS": "1000",
            "IW_NODE_INTERVAL_MS": "5000",
            "IW_TIME_RANGE": "30m",
            "IW_ERROR_THRESHOLD": "2.5",
            "IW_SEED": "7",
        })

        assert config.population_size == 12
        assert config.regions == ("eu-west", "eu-north")
        assert config.metric_interval_ms == 1000
        assert config.node_interval_ms == 5000
        assert config.time_range.label == "30m"
        assert config.error_rate_threshold == 2.5
        assert config.seed == 7
        assert config.max_samples == 1800

    def test_blank_values_are_ignored(self):
        assert DashboardConfig.from_env({"IW_POPULATION_SIZE": ""}).population_size == 24

    def test_invalid_value_names_the_variable(self):
        with pytest.raises(ValueError, match="IW_POPULATION_SIZE"):
            DashboardConfig.from_env({"IW_POPULATION_SIZE": "many"})

    def test_invalid_time_range(self):
        with pytest.raises(ValueError, match="IW_TIME_RANGE"):
            DashboardConfig.from_env({"IW_TIME_RANGE": "1d"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("IW_SEED", "99")
        assert DashboardConfig.from_env().seed == 99


class TestMetricsModelValidation:

    def test_defaults_are_valid(self):
        model = MetricsModel()
        assert model.spike_probability == 0.02
        assert model.spike_cooldown == 15
        assert model.plateau_below == 5

    def test_rejects_inverted_range(self):
        with pytest.raises(ValueError, match="spike_range"):
            MetricsModel(spike_range=(5.0, 2.0))

    def test_rejects_shrinking_latency_factor(self):
        with pytest.raises(ValueError, match="latency factors"):
            MetricsModel(p95_factor=(0.5, 2.0))

    def test_rejects_bad_probability(self):
        with pytest.raises(ValueError, match="spike_probability"):
            MetricsModel(spike_probability=-0.1)
