"""Unit tests for logging configuration."""

from unittest.mock import patch

from blob_gateway.core.config import Settings
from blob_gateway.core.logging_config import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_creates_log_directory(self, tmp_path):
        """Test that a nested log directory is created."""
        log_dir = tmp_path / "nested" / "logs"

        with patch("blob_gateway.core.logging_config.logger"):
            configure_logging(Settings(log_dir=str(log_dir)))

        assert log_dir.is_dir()

    def test_sinks_use_configured_level_and_retention(self, tmp_path):
        """Test that the file sinks follow the retention settings."""
        settings = Settings(
            log_dir=str(tmp_path),
            log_level="INFO",
            log_retention_days=7,
            error_log_retention_days=45,
        )

        with patch("blob_gateway.core.logging_config.logger") as mock_logger:
            configure_logging(settings)

        mock_logger.remove.assert_called_once_with()
        console, general, errors = (c.kwargs for c in mock_logger.add.call_args_list)
        assert console["level"] == "INFO"
        assert general["level"] == "INFO"
        assert general["retention"] == "7 days"
        assert errors["level"] == "ERROR"
        assert errors["retention"] == "45 days"
        assert str(errors["sink"]).startswith(str(tmp_path / "gateway_errors_"))
