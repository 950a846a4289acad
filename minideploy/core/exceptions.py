"""Exceptions raised by the deploy pipeline."""

from typing import List


class DeployError(Exception):
    """Base exception for minideploy errors."""


class PrerequisiteError(DeployError):
    """A required binary is not installed."""

    def __init__(self, binary: str, install_url: str):
        self.binary = binary
        self.install_url = install_url
        super().__init__(f"{binary} is not installed. Please install it first. Visit: {install_url}")


class CommandError(DeployError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: List[str], output: str):
        self.command = command
        self.output = output.strip()
        message = f"Command failed: {' '.join(command)}"
        if self.output:
            message += f"\n{self.output}"
        super().__init__(message)


class ConfigError(DeployError):
    """The deployment configuration is invalid or refers to missing files."""
