"""
Unit tests for session configuration.
"""

import logging

import pytest
from csaftree.config import SessionConfig, configure_logging


class TestSessionConfig:
    """Tests for SessionConfig loading."""

    def test_defaults(self):
        """Test default values."""
        config = SessionConfig()

        assert config.full_name_separator == " "
        assert config.family_chain_separator == " / "
        assert config.relationship_id_prefix == "CSAFRID"
        assert config.wire_id_padding == 4

    def test_from_dict_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ValueError, match="separatr"):
            SessionConfig.from_dict({"separatr": "-"})

    def test_from_yaml_session_key(self, tmp_path):
        """Test settings under a session key."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "session:\n"
            "  family_chain_separator: ' > '\n"
            "  wire_id_padding: 6\n"
        )

        config = SessionConfig.from_yaml(str(path))

        assert config.family_chain_separator == " > "
        assert config.wire_id_padding == 6
        assert config.full_name_separator == " "

    def test_from_yaml_top_level(self, tmp_path):
        """Test settings at the top level of the file."""
        path = tmp_path / "config.yaml"
        path.write_text("log_level: DEBUG\n")

        assert SessionConfig.from_yaml(str(path)).log_level == "DEBUG"

    def test_from_yaml_not_a_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            SessionConfig.from_yaml(str(path))

    def test_from_env(self, tmp_path, monkeypatch):
        """Test CSAFTREE_ variables, with int conversion."""
        monkeypatch.setenv("CSAFTREE_RELATIONSHIP_ID_PREFIX", "REL")
        monkeypatch.setenv("CSAFTREE_WIRE_ID_PADDING", "2")

        config = SessionConfig.from_env(str(tmp_path / ".env"))

        assert config.relationship_id_prefix == "REL"
        assert config.wire_id_padding == 2
        assert config.family_chain_separator == " / "

    def test_from_env_dotenv_file(self, tmp_path, monkeypatch):
        """Test values from a .env file."""
        monkeypatch.delenv("CSAFTREE_LOG_LEVEL", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("CSAFTREE_LOG_LEVEL=WARNING\n")

        config = SessionConfig.from_env(str(env_file))

        assert config.log_level == "WARNING"
        monkeypatch.delenv("CSAFTREE_LOG_LEVEL", raising=False)

    def test_to_dict(self):
        """Test to_dict round-trips through from_dict."""
        config = SessionConfig(untitled_version_name="(unnamed)")
        assert SessionConfig.from_dict(config.to_dict()) == config


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_and_single_handler(self):
        """Test the level is applied and handlers are not duplicated."""
        logger = logging.getLogger("csaftree")
        saved = list(logger.handlers)

        try:
            configure_logging(SessionConfig(log_level="debug"))
            configure_logging(SessionConfig(log_level="debug"))

            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == max(len(saved), 1)
        finally:
            logger.handlers = saved
            logger.setLevel(logging.NOTSET)
