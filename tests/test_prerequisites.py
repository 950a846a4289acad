"""Test prerequisite checks."""

from unittest.mock import MagicMock, patch

import pytest
from conftest import FakeRunner

from minideploy.core.exceptions import PrerequisiteError
from minideploy.core.prerequisites import Prerequisite, check_prerequisites, required_tools


def _which_without(missing):
    return lambda name: None if name == missing else f"/usr/local/bin/{name}"


class TestCheckPrerequisites:
    @patch("subprocess.run")
    @patch("shutil.which")
    def test_all_found(self, mock_which, mock_run):
        """Test versions are collected for every tool."""
        mock_which.side_effect = _which_without(None)
        mock_run.side_effect = FakeRunner()

        versions = check_prerequisites(required_tools())

        assert list(versions) == ["minikube", "kubectl", "docker"]
        assert versions["minikube"] == "v1.32.0"
        assert versions["kubectl"] == "v1.28.4"
        assert versions["docker"].startswith("Docker version 24.0.7")

    @pytest.mark.parametrize(
        "missing, url",
        [
            ("minikube", "https://minikube.sigs.k8s.io/docs/start/"),
            ("kubectl", "https://kubernetes.io/docs/tasks/tools/"),
            ("docker", "https://docs.docker.com/get-docker/"),
        ],
    )
    @patch("subprocess.run")
    @patch("shutil.which")
    def test_missing_binary(self, mock_which, mock_run, missing, url):
        """Test a missing binary raises with its install URL."""
        mock_which.side_effect = _which_without(missing)
        mock_run.side_effect = FakeRunner()

        with pytest.raises(PrerequisiteError, match=f"{missing} is not installed") as exc_info:
            check_prerequisites(required_tools())

        assert exc_info.value.binary == missing
        assert exc_info.value.install_url == url

    @patch("shutil.which")
    def test_stops_at_first_missing(self, mock_which):
        """Test tools after the missing one are not looked at."""
        mock_which.side_effect = _which_without("minikube")
        later = MagicMock(return_value="v1")

        with pytest.raises(PrerequisiteError):
            check_prerequisites(
                [
                    Prerequisite("minikube", "https://example.invalid", MagicMock()),
                    Prerequisite("kubectl", "https://example.invalid", later),
                ]
            )

        assert mock_which.call_count == 1
        later.assert_not_called()

    @patch("shutil.which")
    def test_unknown_version_is_not_fatal(self, mock_which):
        """Test a failed version query only warns."""
        mock_which.return_value = "/usr/bin/docker"

        versions = check_prerequisites([Prerequisite("docker", "https://example.invalid", lambda: None)])

        assert versions == {"docker": "unknown"}
