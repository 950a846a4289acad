"""Deploy pipeline: prerequisites, cluster, images, manifests, access."""

from typing import Callable, Dict, List, Optional, Tuple

from ..k8s import K8sClient, MinikubeClient
from ..model.plan import ApplyStep, DeploymentConfig, WaitStep
from ..model.result import DeploymentResult, Phase, StepResult
from ..utils.logger import get_logger
from .access import build_access_info
from .config import validate_config
from .docker import DockerClient
from .exceptions import CommandError
from .prerequisites import check_prerequisites, required_tools

logger = get_logger(__name__)

StepCallback = Callable[[StepResult], None]


class Deployer:
    """Runs the deployment steps strictly in order.

    The first failing command raises CommandError and nothing after it runs.
    There are no retries and nothing is rolled back.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        kubectl: Optional[K8sClient] = None,
        minikube: Optional[MinikubeClient] = None,
        docker: Optional[DockerClient] = None,
        dry_run: bool = False,
        on_step: Optional[StepCallback] = None,
    ):
        self.config = config
        # minikube names the kubectl context after its profile
        self.kubectl = kubectl or K8sClient(context=config.cluster.profile)
        self.minikube = minikube or MinikubeClient(profile=config.cluster.profile)
        self.docker = docker or DockerClient(project_dir=config.project_dir)
        self.dry_run = dry_run
        self.on_step = on_step
        self.result = DeploymentResult(dry_run=dry_run)

    def run(self) -> DeploymentResult:
        """Execute the whole pipeline."""
        logger.info("Starting deployment" + (" (dry run)" if self.dry_run else ""))

        if not self.dry_run:
            self.result.tool_versions = check_prerequisites(
                required_tools(self.minikube, self.kubectl, self.docker)
            )
            self._record(Phase.PREREQUISITES, "Prerequisites found", [])

        validate_config(self.config)

        self.ensure_cluster()
        env = self.docker_env()
        self.build_images(env)
        self.apply_steps()
        self.collect_access_info()

        logger.info("Deployment complete")
        return self.result

    def ensure_cluster(self) -> None:
        """Start the cluster unless it is running, then enable addons."""
        cluster = self.config.cluster
        start_cmd = self.minikube.build_command(self.minikube.start_args(cluster.cpus, cluster.memory))

        if self.dry_run:
            self._record(Phase.CLUSTER, "Start minikube (if not running)", start_cmd, executed=False)
        elif self.minikube.is_running():
            self._record(Phase.CLUSTER, "Minikube is already running", [])
        else:
            self._run(
                Phase.CLUSTER,
                "Minikube started",
                start_cmd,
                lambda: self.minikube.start(cluster.cpus, cluster.memory),
            )

        for addon in cluster.addons:
            self._run(
                Phase.CLUSTER,
                f"{addon.capitalize()} addon enabled",
                self.minikube.build_command(self.minikube.addon_args(addon)),
                lambda addon=addon: self.minikube.enable_addon(addon),
            )

    def docker_env(self) -> Dict[str, str]:
        """Environment overlay pointing docker builds at the cluster daemon."""
        cmd = self.minikube.build_command(self.minikube.DOCKER_ENV_ARGS)

        if self.dry_run:
            self._record(Phase.DOCKER_ENV, "Configure docker to use minikube's daemon", cmd, executed=False)
            return {}

        env = self.minikube.docker_env()
        if env is None:
            raise CommandError(cmd, "could not read minikube docker-env")

        self._record(Phase.DOCKER_ENV, "Docker configured to use minikube", cmd)
        return env

    def build_images(self, env: Dict[str, str]) -> None:
        """Build every configured image against the cluster daemon."""
        for image in self.config.images:
            self._run(
                Phase.BUILD,
                f"Image {image.reference} built",
                self.docker.build_command(self.docker.build_args(image)),
                lambda image=image: self.docker.build(image, env=env),
            )

    def apply_steps(self) -> None:
        """Apply manifests and block on readiness waits in plan order."""
        for step in self.config.steps:
            if isinstance(step, ApplyStep):
                manifest = self.config.resolve(step.manifest)
                self._run(
                    Phase.APPLY,
                    step.message or step.description,
                    self.kubectl.build_command(self.kubectl.apply_args(manifest)),
                    lambda manifest=manifest: self.kubectl.apply(manifest),
                )
            elif isinstance(step, WaitStep):
                self._run(
                    Phase.WAIT,
                    step.message or step.description,
                    self.kubectl.build_command(
                        self.kubectl.wait_args(step.selector, step.resource, step.condition, step.timeout)
                    ),
                    lambda step=step: self.kubectl.wait(
                        step.selector, step.resource, step.condition, step.timeout
                    ),
                )

    def collect_access_info(self) -> None:
        """Query the cluster IP for the access instructions."""
        cmd = self.minikube.build_command(self.minikube.IP_ARGS)

        if self.dry_run:
            self._record(Phase.ACCESS, "Query cluster IP", cmd, executed=False)
            return

        ip = self.minikube.ip()
        if ip is None:
            raise CommandError(cmd, "could not determine the minikube IP")

        self.result.access = build_access_info(ip, self.config.hostname)
        self._record(Phase.ACCESS, f"Cluster IP is {ip}", cmd)

    def _run(
        self,
        phase: Phase,
        description: str,
        command: List[str],
        action: Callable[[], Tuple[bool, str]],
    ) -> None:
        if self.dry_run:
            self._record(phase, description, command, executed=False)
            return

        success, output = action()
        if not success:
            self._record(phase, description, command, success=False, output=output)
            raise CommandError(command, output)

        self._record(phase, description, command, output=output)

    def _record(
        self,
        phase: Phase,
        description: str,
        command: List[str],
        executed: bool = True,
        success: bool = True,
        output: str = "",
    ) -> None:
        step = StepResult(
            phase=phase,
            description=description,
            command=command,
            executed=executed,
            success=success,
            output=output,
        )
        self.result.steps.append(step)

        if success:
            logger.debug(f"[{phase.value}] {description}")
        if self.on_step:
            self.on_step(step)
