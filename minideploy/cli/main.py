"""Main CLI interface using Typer."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..api import ApiClientConfig, check_backend, create_client
from ..core import (
    ConfigError,
    Deployer,
    DeployError,
    HostsFile,
    PrerequisiteError,
    load_config,
    useful_commands,
)
from ..k8s import K8sClient, MinikubeClient
from ..model.plan import ApplyStep, DeploymentConfig
from ..model.result import AccessInfo, StepResult
from ..utils.logger import get_logger, set_debug

# Create CLI app
app = typer.Typer(
    name="minideploy",
    help="Deploy the React + Express + MySQL stack to a local minikube cluster",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

TIERS = ("mysql", "backend", "frontend")


def _project_dir_option():
    return typer.Option(Path("."), "--project-dir", "-d", help="Project root holding Dockerfiles and k8s/")


def _config_option():
    return typer.Option(
        None,
        "--config",
        "-c",
        envvar="MINIDEPLOY_CONFIG",
        help="YAML file overriding the default plan (default: <project-dir>/minideploy.yaml)",
    )


def _load(project_dir: Path, config: Optional[Path]) -> DeploymentConfig:
    try:
        return load_config(config, project_dir.resolve())
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {str(e)}")
        raise typer.Exit(1)


def _kubectl(deployment: DeploymentConfig) -> K8sClient:
    # minikube names the kubectl context after its profile
    return K8sClient(context=deployment.cluster.profile)


def _print_step(step: StepResult) -> None:
    if not step.executed:
        console.print(f"[blue]==>[/blue] {step.description}: [dim]{' '.join(step.command)}[/dim]")
    elif step.success:
        console.print(f"[green]✓[/green] {step.description}")
    else:
        console.print(f"[red]✗[/red] {step.description}")


def _print_access_instructions(access: AccessInfo, manifest_dir: str) -> None:
    console.print(Panel.fit("[bold green]Deployment Complete![/bold green]"))

    console.print("\nAdd the following line to your /etc/hosts file:")
    console.print(f"  [yellow]{access.hosts_line}[/yellow]")
    console.print("\nYou can do this by running:")
    console.print(f"  [blue]{access.tee_command}[/blue]", soft_wrap=True)
    console.print("\nThen access the application at:")
    console.print(f"  [green]{access.url}[/green]\n")

    table = Table(title="Useful Commands", show_header=False)
    table.add_column("Action", style="cyan", no_wrap=True)
    table.add_column("Command", style="white")
    for label, command in useful_commands(manifest_dir):
        table.add_row(label, command)
    console.print(table)


@app.command()
def deploy(
    project_dir: Path = _project_dir_option(),
    config: Optional[Path] = _config_option(),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show the commands that would run without executing them"
    ),
    write_hosts: bool = typer.Option(
        False, "--write-hosts", help="Add the hostname mapping to the hosts file after deploying"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Build the images and deploy the whole stack to minikube."""
    set_debug(debug)
    deployment = _load(project_dir, config)

    try:
        deployer = Deployer(deployment, dry_run=dry_run, on_step=_print_step)
        with console.status("[bold green]Deploying to minikube..."):
            result = deployer.run()
    except PrerequisiteError as e:
        console.print(f"[red]✗[/red] {e.binary} is not installed. Please install it first.")
        console.print(f"  Visit: {e.install_url}")
        raise typer.Exit(1)
    except DeployError as e:
        console.print(f"[red]Error:[/red] {str(e)}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("[red]Deployment cancelled[/red]")
        raise typer.Exit(130)

    if dry_run:
        console.print("\n[yellow]Dry run: no commands were executed[/yellow]")
        return

    for binary, found in result.tool_versions.items():
        logger.debug(f"{binary}: {found}")

    _print_access_instructions(result.access, deployment.manifest_dir)

    if write_hosts:
        _write_hosts_entry(HostsFile(deployment.hosts_file), result.access)


def _write_hosts_entry(hosts: HostsFile, access: AccessInfo) -> None:
    try:
        added = hosts.add_entry(access.ip, access.hostname)
    except PermissionError:
        console.print(f"[yellow]⚠[/yellow] No permission to write {hosts.path}, run:")
        console.print(f"  [blue]{access.tee_command}[/blue]", soft_wrap=True)
        raise typer.Exit(1)

    if added:
        console.print(f"[green]✓[/green] Added [cyan]{access.hosts_line}[/cyan] to {hosts.path}")
    else:
        console.print(f"[green]✓[/green] {hosts.path} already maps {access.hostname} to {access.ip}")


@app.command()
def plan(
    project_dir: Path = _project_dir_option(),
    config: Optional[Path] = _config_option(),
):
    """Show the images and the ordered apply/wait steps."""
    deployment = _load(project_dir, config)

    images = Table(title="Images", show_header=True, header_style="bold magenta")
    images.add_column("Image", style="green")
    images.add_column("Dockerfile", style="cyan")
    images.add_column("Context", style="white")
    for image in deployment.images:
        images.add_row(image.reference, image.dockerfile, image.context)
    console.print(images)

    steps = Table(title="Steps", show_header=True, header_style="bold magenta")
    steps.add_column("#", style="dim", justify="right")
    steps.add_column("Action", style="cyan")
    steps.add_column("Target", style="green")
    steps.add_column("Timeout", style="white")
    for i, step in enumerate(deployment.steps, 1):
        if isinstance(step, ApplyStep):
            steps.add_row(str(i), "apply", step.manifest, "")
        else:
            steps.add_row(
                str(i), f"wait ({step.condition})", f"{step.resource} -l {step.selector}", f"{step.timeout}s"
            )
    console.print(steps)


@app.command()
def delete(
    project_dir: Path = _project_dir_option(),
    config: Optional[Path] = _config_option(),
):
    """Delete every resource described in the manifest directory."""
    deployment = _load(project_dir, config)
    manifest_dir = deployment.resolve(deployment.manifest_dir)

    success, output = _kubectl(deployment).delete(manifest_dir)
    if not success:
        console.print(f"[red]Error:[/red] {output.strip()}")
        raise typer.Exit(1)

    console.print(output.rstrip())
    console.print(f"[green]✓[/green] Resources from [cyan]{manifest_dir}[/cyan] deleted")


@app.command()
def status(
    project_dir: Path = _project_dir_option(),
    config: Optional[Path] = _config_option(),
):
    """Show pods, services and ingress of the deployment."""
    deployment = _load(project_dir, config)

    success, output = _kubectl(deployment).get(["pods", "services", "ingress"])
    if not success:
        console.print(f"[red]Error:[/red] {output.strip()}")
        raise typer.Exit(1)
    console.print(output.rstrip())


@app.command()
def logs(
    tier: str = typer.Argument(..., help="Tier to show logs for: mysql, backend or frontend"),
    tail: Optional[int] = typer.Option(None, "--tail", help="Number of recent lines to show"),
    project_dir: Path = _project_dir_option(),
    config: Optional[Path] = _config_option(),
):
    """Show logs of one tier's pods."""
    if tier not in TIERS:
        console.print(f"[red]Error:[/red] unknown tier '{tier}', expected one of: {', '.join(TIERS)}")
        raise typer.Exit(1)

    deployment = _load(project_dir, config)
    success, output = _kubectl(deployment).logs(f"app={tier}", tail=tail)
    if not success:
        console.print(f"[red]Error:[/red] {output.strip()}")
        raise typer.Exit(1)
    console.print(output.rstrip(), markup=False, highlight=False)


@app.command()
def hosts(
    project_dir: Path = _project_dir_option(),
    config: Optional[Path] = _config_option(),
    hosts_file: Optional[Path] = typer.Option(
        None, "--hosts-file", help="Hosts file to edit (default: /etc/hosts)"
    ),
):
    """Map the ingress hostname to the minikube IP in the hosts file."""
    deployment = _load(project_dir, config)

    ip = MinikubeClient(profile=deployment.cluster.profile).ip()
    if ip is None:
        console.print("[red]Error:[/red] could not determine the minikube IP, is the cluster running?")
        raise typer.Exit(1)

    access = AccessInfo(ip=ip, hostname=deployment.hostname)
    _write_hosts_entry(HostsFile(hosts_file or deployment.hosts_file), access)


@app.command()
def check(
    project_dir: Path = _project_dir_option(),
    config: Optional[Path] = _config_option(),
    path: str = typer.Option("", "--path", "-p", help="Backend path below the API base URL"),
):
    """Send a request to the backend through the ingress."""
    deployment = _load(project_dir, config)
    api_config = ApiClientConfig.from_env()
    origin = f"http://{deployment.hostname}"

    with create_client(api_config, origin) as client:
        reachable, detail = check_backend(client, path)

    if not reachable:
        console.print(f"[red]✗[/red] Backend not reachable: {detail}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Backend reachable: {detail}")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]minideploy[/bold] version {__version__}")
    console.print("Deploys the React + Express + MySQL stack to a local minikube cluster")


if __name__ == "__main__":
    app()
