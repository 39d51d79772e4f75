import numpy as np
import pytest

from sirsim.config import DefaultConfig, InterventionConfig, get_config, list_configs
from sirsim.simulation import Simulation, SimulationResult
from sirsim.sir import Intervention, InvalidParameterError


@pytest.fixture
def default_result() -> SimulationResult:
    return Simulation(DefaultConfig()).run()


@pytest.fixture
def intervention_result() -> SimulationResult:
    return Simulation(InterventionConfig()).run()


class TestConfig:
    """Tests for configuration objects."""

    def test_default_config_values(self):
        config = DefaultConfig()
        assert config.N == 100010
        assert config.beta == pytest.approx(1.6667e-6, rel=1e-4)
        assert config.days == 200
        assert config.intervention() is None

    def test_intervention_config_keeps_p(self):
        config = InterventionConfig()
        intervention = config.intervention()
        assert intervention == Intervention(day=60, new_alpha=30, new_p=config.p)
        assert intervention.beta == pytest.approx(1.0e-6)

    def test_get_config(self):
        assert isinstance(get_config("default"), DefaultConfig)
        assert isinstance(get_config("intervention"), InterventionConfig)
        assert list_configs() == ["default", "intervention"]

    def test_get_config_unknown(self):
        with pytest.raises(ValueError, match="Unknown config"):
            get_config("lockdown")

    def test_to_dict(self):
        data = InterventionConfig().to_dict()
        assert data["name"] == "intervention"
        assert data["intervention_day"] == 60
        assert data["intervention_p"] is None


class TestSimulation:
    """Tests for Simulation and SimulationResult."""

    def test_simulation_basic(self, default_result):
        expected_length = DefaultConfig().days + 1
        assert len(default_result.t) == expected_length
        assert len(default_result.S) == expected_length
        assert len(default_result.I) == expected_length
        assert len(default_result.R) == expected_length
        assert default_result.name == "default"

    def test_invalid_config(self):
        config = DefaultConfig()
        config.gamma = 0
        with pytest.raises(InvalidParameterError):
            Simulation(config).run()

    def test_result_properties(self, default_result):
        assert default_result.peak_infected == np.max(default_result.I)
        assert default_result.peak_day == np.argmax(default_result.I)
        assert default_result.total_infected == default_result.R[-1] + default_result.I[-1]
        assert default_result.final_size == pytest.approx(
            (default_result.S[0] - default_result.S[-1]) / 100010
        )
        assert default_result.epidemic_duration == 200

    def test_reproduction_numbers(self, default_result, intervention_result):
        assert default_result.basic_reproduction_number == pytest.approx(2.3335, rel=1e-3)
        assert default_result.final_reproduction_number == pytest.approx(
            default_result.basic_reproduction_number
        )
        assert intervention_result.basic_reproduction_number == pytest.approx(
            default_result.basic_reproduction_number
        )
        assert intervention_result.final_reproduction_number == pytest.approx(1.4001, rel=1e-3)

    def test_effective_reproduction_number(self, default_result):
        r_eff = default_result.effective_reproduction_number
        assert r_eff[0] == pytest.approx(100000 * (50 / 30000000) * 14)
        assert np.all(np.diff(r_eff) <= 0)

    def test_new_infections(self, default_result):
        assert len(default_result.new_infections) == 200
        assert np.allclose(
            default_result.new_infections_fraction * default_result.N,
            default_result.new_infections,
        )

    def test_intervention_day(self, default_result, intervention_result):
        assert default_result.intervention_day is None
        assert intervention_result.intervention_day == 60

    def test_intervention_beyond_run_is_not_reported(self):
        config = InterventionConfig()
        config.days = 50
        result = Simulation(config).run()
        assert result.intervention_day is None
        assert np.all(result.beta == result.beta[0])

    def test_intervention_reduces_infections(self, default_result, intervention_result):
        assert intervention_result.peak_infected < default_result.peak_infected
        assert intervention_result.peak_day >= default_result.peak_day
        assert intervention_result.final_size < default_result.final_size
