# ============================================================================
# CONFIGURATION & DIAGNOSTICS TESTS
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Tests - Environment configuration, masking, startup checks
# PURPOSE: Verify RelayConfig loading, secret masking and readiness checks
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration & Diagnostics Tests

Run with:
    pytest tests/test_config.py -v
"""

import pytest

from __version__ import __version__
from relay.config import RelayConfig, load_config
from relay.diagnostics import mask_secret, new_trace_id, preview
from relay.startup import StartupState, validate_startup


ENV_VARS = [
    "AIRTABLE_API_KEY",
    "AIRTABLE_BASE_ID",
    "AIRTABLE_TABLE",
    "AIRTABLE_API_URL",
    "AIRTABLE_TIMEOUT_SECONDS",
    "CORS_ALLOW_ORIGIN",
    "SERVICE_NAME",
    "APP_VERSION",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ============================================================================
# CONFIG
# ============================================================================

class TestRelayConfig:

    def test_defaults(self, clean_env):
        config = load_config()

        assert config.airtable_api_key is None
        assert config.airtable_base_id is None
        assert config.airtable_table == "Submissions"
        assert config.airtable_api_url == "https://api.airtable.com"
        assert config.airtable_timeout_seconds == 10.0
        assert config.cors_allow_origin == "*"
        assert config.version == __version__
        assert config.log_json is False
        assert not config.has_credential
        assert not config.has_store_config

    def test_reads_environment(self, clean_env):
        clean_env.setenv("AIRTABLE_API_KEY", "pat_abc.def")
        clean_env.setenv("AIRTABLE_BASE_ID", "appXYZ")
        clean_env.setenv("AIRTABLE_TABLE", "Leads")
        clean_env.setenv("CORS_ALLOW_ORIGIN", "https://example.com")
        clean_env.setenv("AIRTABLE_API_URL", "http://localhost:9000/")
        clean_env.setenv("AIRTABLE_TIMEOUT_SECONDS", "2.5")
        clean_env.setenv("LOG_FORMAT", "JSON")

        config = load_config()

        assert config.airtable_api_key == "pat_abc.def"
        assert config.airtable_base_id == "appXYZ"
        assert config.airtable_table == "Leads"
        assert config.cors_allow_origin == "https://example.com"
        assert config.airtable_api_url == "http://localhost:9000"
        assert config.airtable_timeout_seconds == 2.5
        assert config.log_json is True
        assert config.has_valid_credential
        assert config.has_store_config

    def test_read_fresh_each_call(self, clean_env):
        assert load_config().airtable_base_id is None
        clean_env.setenv("AIRTABLE_BASE_ID", "appNEW")
        assert load_config().airtable_base_id == "appNEW"

    def test_blank_table_uses_default(self, clean_env):
        clean_env.setenv("AIRTABLE_TABLE", "   ")
        assert load_config().airtable_table == "Submissions"

    def test_blank_credential_is_unset(self, clean_env):
        clean_env.setenv("AIRTABLE_API_KEY", "  ")
        assert not load_config().has_credential

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_bad_timeout_falls_back(self, clean_env, raw):
        clean_env.setenv("AIRTABLE_TIMEOUT_SECONDS", raw)
        assert load_config().airtable_timeout_seconds == 10.0

    def test_credential_prefix(self):
        assert RelayConfig(airtable_api_key="pat123").has_valid_credential
        assert not RelayConfig(airtable_api_key="key123").has_valid_credential
        assert not RelayConfig().has_valid_credential

    def test_from_explicit_mapping(self):
        config = RelayConfig.from_env({"AIRTABLE_BASE_ID": "appA"})
        assert config.airtable_base_id == "appA"
        assert config.airtable_api_key is None


# ============================================================================
# DIAGNOSTICS
# ============================================================================

class TestMaskSecret:

    def test_masks_middle(self):
        assert mask_secret("pat_1234567890") == "pat_...7890"

    def test_never_contains_full_value(self):
        secret = "pat_1234567890"
        assert secret not in mask_secret(secret)

    def test_short_secret_fully_masked(self):
        assert mask_secret("pat12345") == "********"

    def test_unset(self):
        assert mask_secret(None) == "<unset>"
        assert mask_secret("") == "<unset>"


class TestPreview:

    def test_short_text_unchanged(self):
        assert preview("hello") == "hello"

    def test_truncates(self):
        text = preview("x" * 500, limit=10)
        assert text.startswith("x" * 10 + "...")
        assert "(500 chars)" in text

    def test_bytes_and_none(self):
        assert preview(b"abc") == "abc"
        assert preview(None) == ""


def test_trace_ids_are_hex_and_unique():
    ids = [new_trace_id() for _ in range(100)]
    assert len(set(ids)) == 100
    assert all(len(t) == 32 and int(t, 16) >= 0 for t in ids)


# ============================================================================
# STARTUP
# ============================================================================

class TestStartupValidation:

    def test_all_pass(self):
        state = validate_startup(RelayConfig(airtable_api_key="pat_x", airtable_base_id="appA"))
        assert state.all_passed
        assert state.failed_check_names() == []

    def test_missing_everything(self):
        state = validate_startup(RelayConfig())
        assert not state.all_passed
        assert state.failed_check_names() == ["credential", "store"]

    def test_malformed_credential_is_masked(self):
        state = validate_startup(RelayConfig(airtable_api_key="key_abcdefghijkl", airtable_base_id="appA"))
        assert state.failed_check_names() == ["credential"]
        assert "key_abcdefghijkl" not in state.credential.error_message
        assert "'pat'" in state.credential.error_message

    def test_default_state_not_run(self):
        state = StartupState()
        assert not state.all_passed
        assert state.failed_check_names() == ["credential", "store"]
        assert state.credential.error_message == "Validation not yet run"

    def test_credential_only(self):
        state = validate_startup(RelayConfig(airtable_api_key="pat_x"))
        assert not state.all_passed
        assert state.credential.passed
        assert [c.name for c in state.failed_checks()] == ["store"]
