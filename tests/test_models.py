"""Test data models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from minideploy.model.plan import ApplyStep, ClusterSettings, DeploymentConfig, ImageSpec, WaitStep
from minideploy.model.result import AccessInfo, DeploymentResult, Phase, StepResult


class TestImageSpec:
    def test_reference(self):
        """Test image reference is name:tag."""
        image = ImageSpec(name="react-mysql-backend", dockerfile="Dockerfile.backend")

        assert image.reference == "react-mysql-backend:latest"
        assert image.context == "."

    def test_unknown_field_rejected(self):
        """Test unknown keys are not silently accepted."""
        with pytest.raises(ValidationError):
            ImageSpec(name="api", dockerfile="Dockerfile", platform="arm64")


class TestDefaultPlan:
    def test_eleven_applies_and_three_waits(self):
        """Test the default plan shape."""
        config = DeploymentConfig()

        assert len(config.apply_steps) == 11
        assert len(config.wait_steps) == 3
        assert [w.selector for w in config.wait_steps] == ["app=mysql", "app=backend", "app=frontend"]
        assert all(w.timeout == 120 and w.condition == "ready" for w in config.wait_steps)

    def test_database_is_ready_before_backend_is_applied(self):
        """Test the mysql wait sits between the database and backend manifests."""
        steps = DeploymentConfig().steps
        mysql_wait = next(i for i, s in enumerate(steps) if isinstance(s, WaitStep))

        assert steps[mysql_wait - 1].manifest == "k8s/4-mysql-service.yaml"
        assert steps[mysql_wait + 1].manifest == "k8s/5-backend-configmap.yaml"
        assert steps[-3].manifest == "k8s/10-ingress.yaml"

    def test_default_cluster_settings(self):
        """Test minikube start parameters."""
        cluster = ClusterSettings()

        assert cluster.cpus == 2
        assert cluster.memory == 4096
        assert cluster.addons == ["ingress"]

    def test_steps_parse_from_dicts(self):
        """Test apply and wait steps are told apart by their action."""
        config = DeploymentConfig(
            steps=[
                {"action": "apply", "manifest": "k8s/db.yaml"},
                {"action": "wait", "selector": "app=db", "timeout": 60},
            ]
        )

        assert isinstance(config.steps[0], ApplyStep)
        assert isinstance(config.steps[1], WaitStep)
        assert config.steps[1].timeout == 60

    def test_resolve_relative_and_absolute(self, tmp_path):
        """Test plan paths resolve against the project directory."""
        config = DeploymentConfig(project_dir=tmp_path)

        assert config.resolve("k8s/a.yaml") == tmp_path / "k8s" / "a.yaml"
        assert config.resolve("/opt/b.yaml") == Path("/opt/b.yaml")


class TestResults:
    def test_access_info(self):
        """Test access instructions derived from the cluster IP."""
        access = AccessInfo(ip="192.168.49.2", hostname="myapp.local")

        assert access.url == "http://myapp.local"
        assert access.hosts_line == "192.168.49.2 myapp.local"
        assert access.tee_command == "echo '192.168.49.2 myapp.local' | sudo tee -a /etc/hosts"

    def test_steps_for_phase(self):
        """Test filtering recorded steps by phase."""
        result = DeploymentResult(
            steps=[
                StepResult(phase=Phase.BUILD, description="built"),
                StepResult(phase=Phase.APPLY, description="applied"),
            ]
        )

        assert [s.description for s in result.steps_for(Phase.APPLY)] == ["applied"]

    def test_phase_enum(self):
        """Test phase values."""
        assert Phase.DOCKER_ENV == "docker-env"
        assert Phase.WAIT == "wait"
