"""Property-based tests for configuration service."""

import json
import tempfile
from pathlib import Path

from hypothesis import given, strategies as st

from crackwatch.models import ClientConfig, DEFAULT_ENDPOINT
from crackwatch.services import ConfigurationService


valid_endpoints = st.builds(
    lambda scheme, host, a, b: f"{scheme}://{host}/sockjs/{a}/{b}/websocket",
    st.sampled_from(["ws", "wss"]),
    st.sampled_from(["crackwatch.com", "localhost:8080", "127.0.0.1:3000"]),
    st.text(min_size=1, max_size=12, alphabet=st.characters(whitelist_categories=("Ll", "Nd"))),
    st.text(min_size=1, max_size=12, alphabet=st.characters(whitelist_categories=("Ll", "Nd"))),
)
valid_timeouts = st.floats(min_value=0.01, max_value=300.0, allow_nan=False, allow_infinity=False)
valid_log_levels = st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
valid_prefixes = st.text(min_size=1, max_size=10, alphabet=st.characters(whitelist_categories=("Ll", "Po")))

valid_config_strategy = st.builds(
    ClientConfig,
    endpoint=valid_endpoints,
    connect_timeout=valid_timeouts,
    receive_timeout=valid_timeouts,
    log_level=valid_log_levels,
    command_prefix=valid_prefixes,
    max_message_length=st.integers(min_value=200, max_value=10000),
    page_size=st.integers(min_value=1, max_value=500),
)


@given(valid_config_strategy)
def test_configuration_round_trip(config: ClientConfig) -> None:
    """For any valid configuration, saving it and then reloading preserves all values."""
    with tempfile.TemporaryDirectory() as temp_dir:
        service = ConfigurationService(Path(temp_dir) / "config.json")

        service.save_config(config)

        assert service.load_config() == config


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    service = ConfigurationService(tmp_path / "absent.json")

    config = service.load_config()

    assert config == ClientConfig()
    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.receive_timeout == 30.0


def test_partial_file_fills_in_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"receive_timeout": 5, "log_level": "debug"}), encoding="utf-8")

    config = ConfigurationService(config_path).load_config()

    assert config.receive_timeout == 5.0
    assert config.log_level == "DEBUG"
    assert config.endpoint == DEFAULT_ENDPOINT


def test_corrupt_file_gives_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")

    assert ConfigurationService(config_path).load_config() == ClientConfig()


def test_non_object_file_gives_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("[1, 2, 3]", encoding="utf-8")

    assert ConfigurationService(config_path).load_config() == ClientConfig()


def test_invalid_values_give_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"endpoint": "https://crackwatch.com/"}), encoding="utf-8")

    assert ConfigurationService(config_path).load_config() == ClientConfig()


def create_invalid_config_strategy():
    """Create strategy for invalid but constructible configs."""
    return st.one_of(
        st.builds(ClientConfig, endpoint=st.sampled_from([
            "https://crackwatch.com/sockjs/a/b/websocket",
            "wss://crackwatch.com/sockjs/a/b",
            "",
        ])),
        st.builds(ClientConfig, connect_timeout=st.floats(max_value=0.0, allow_nan=False)),
        st.builds(ClientConfig, receive_timeout=st.floats(min_value=300.5, allow_nan=False)),
        st.builds(ClientConfig, log_level=st.text(min_size=1).filter(
            lambda x: x not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])),
        st.builds(ClientConfig, command_prefix=st.sampled_from(["", "!crack me", "\t!c"])),
        st.builds(ClientConfig, max_message_length=st.one_of(
            st.integers(max_value=199), st.integers(min_value=10001))),
        st.builds(ClientConfig, page_size=st.integers(max_value=0)),
    )


@given(create_invalid_config_strategy())
def test_configuration_validation_rejects_invalid(config: ClientConfig) -> None:
    result = ConfigurationService().validate_config(config)

    assert not result.is_valid
    assert len(result.errors) > 0
    assert all(isinstance(error, str) for error in result.errors)


@given(valid_config_strategy)
def test_configuration_validation_accepts_valid(config: ClientConfig) -> None:
    result = ConfigurationService().validate_config(config)

    assert result.is_valid
    assert result.errors == []


def test_save_rejects_invalid_config(tmp_path: Path) -> None:
    service = ConfigurationService(tmp_path / "config.json")

    try:
        service.save_config(ClientConfig(page_size=0))
    except ValueError as e:
        assert "page_size must be a positive integer" in str(e)
    else:
        raise AssertionError("save_config should reject an invalid configuration")

    assert not (tmp_path / "config.json").exists()
