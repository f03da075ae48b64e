"""
Runtime Configuration Unit Tests
Tests for beacon_core/config/runtime.py

Tests:
- Defaults and validation
- YAML / dict / environment loading and precedence
"""
import pytest
import yaml

from beacon_core.chain.verifier import BEACON_ROOTS_ADDRESS
from beacon_core.config import RuntimeConfig, get_default_config_template, load_config
from beacon_core.schemas.errors import ConfigurationException
from beacon_core.schemas.header import HEADER_FIELDS


class TestDefaults:
    """Tests for default configuration."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.beacon_endpoint == "http://localhost:5052"
        assert config.beacon_api.retry_attempts == 5
        assert config.beacon_api.timeout == 5.0
        assert config.verification.fields_to_verify == list(HEADER_FIELDS)
        assert config.verification.oracle_address == BEACON_ROOTS_ADDRESS
        assert config.slot is None

    def test_eth_endpoint_falls_back_to_beacon(self):
        config = RuntimeConfig()

        assert config.eth_endpoint == config.beacon_endpoint

    def test_eth_endpoint_explicit(self):
        config = RuntimeConfig.from_dict({"ethereum_node": {"endpoint": "http://eth.test"}})

        assert config.eth_endpoint == "http://eth.test"


class TestValidation:
    """Tests for RuntimeConfig.validate()."""

    def test_unknown_field(self):
        with pytest.raises(ConfigurationException, match="unknown fields"):
            RuntimeConfig.from_dict({"verification": {"fields_to_verify": ["slot", "graffiti"]}})

    def test_zero_retries(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"beacon_api": {"retry_attempts": 0}})

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"beacon_api": {"request_timeout_ms": 0}})

    def test_non_decimal_slot(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"slot": "head"})

    def test_unknown_key_in_section(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"beacon_api": {"endpoint": "http://x"}})

    def test_non_integer_retries(self):
        with pytest.raises(ConfigurationException, match="retry_attempts must be an integer"):
            RuntimeConfig.from_dict({"beacon_api": {"retry_attempts": "five"}})

    def test_bool_timeout_rejected(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"beacon_api": {"request_timeout_ms": True}})

    def test_fields_not_a_list(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"verification": {"fields_to_verify": "slot"}})

    def test_endpoints_not_a_list(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"beacon_api": {"endpoints": "http://x"}})

    def test_with_overrides_type_checked(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig().with_overrides({"ethereum_node": {"chain_id": "0x4268"}})

    def test_no_endpoints(self):
        config = RuntimeConfig.from_dict({"beacon_api": {"endpoints": []}})

        with pytest.raises(ConfigurationException):
            config.beacon_endpoint


class TestLoading:
    """Tests for YAML, dict and environment loading."""

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({
            "beacon_api": {"endpoints": ["http://beacon.test"]},
            "slot": 123456,
        })

        assert config.beacon_endpoint == "http://beacon.test"
        assert config.beacon_api.retry_attempts == 5
        assert config.slot == "123456"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "verification": {"fields_to_verify": ["state_root"]},
            "log_level": "DEBUG",
        }))

        config = RuntimeConfig.from_yaml(path)

        assert config.verification.fields_to_verify == ["state_root"]
        assert config.log_level == "DEBUG"

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")

    def test_from_yaml_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_yaml(path)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BEACON_PROOF_BEACON_ENDPOINT", "http://env-beacon")
        monkeypatch.setenv("BEACON_PROOF_RETRIES", "7")
        monkeypatch.setenv("BEACON_PROOF_FIELDS", "slot, body_root")
        monkeypatch.setenv("BEACON_PROOF_SLOT", "99")

        config = RuntimeConfig.from_env()

        assert config.beacon_endpoint == "http://env-beacon"
        assert config.beacon_api.retry_attempts == 7
        assert config.verification.fields_to_verify == ["slot", "body_root"]
        assert config.slot == "99"

    @pytest.mark.parametrize("name", ["RETRIES", "TIMEOUT_MS"])
    def test_non_numeric_env(self, monkeypatch, name):
        monkeypatch.setenv(f"BEACON_PROOF_{name}", "abc")

        with pytest.raises(ConfigurationException, match=f"BEACON_PROOF_{name}"):
            RuntimeConfig.from_env()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("beacon_api: [unclosed\n")

        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_yaml(path)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "beacon_api": {"endpoints": ["http://file-beacon"], "retry_attempts": 3},
        }))
        monkeypatch.setenv("BEACON_PROOF_BEACON_ENDPOINT", "http://env-beacon")

        config = load_config(path)

        assert config.beacon_endpoint == "http://env-beacon"
        assert config.beacon_api.retry_attempts == 3

    def test_load_config_without_file(self):
        assert load_config().to_dict() == RuntimeConfig().to_dict()

    def test_with_overrides_returns_copy(self):
        config = RuntimeConfig()

        updated = config.with_overrides({"verification": {"fields_to_verify": ["slot"]}})

        assert updated.verification.fields_to_verify == ["slot"]
        assert config.verification.fields_to_verify == list(HEADER_FIELDS)

    def test_with_overrides_validates(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig().with_overrides({"beacon_api": {"retry_attempts": 0}})

    def test_template_round_trips(self):
        data = yaml.safe_load(get_default_config_template())

        assert RuntimeConfig.from_dict(data).to_dict() == RuntimeConfig().to_dict()
