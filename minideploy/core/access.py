"""Access instructions and the local hosts-file mapping."""

from pathlib import Path
from typing import List, Optional

from ..model.result import AccessInfo
from ..utils.logger import get_logger

logger = get_logger(__name__)


def build_access_info(ip: str, hostname: str) -> AccessInfo:
    """Combine the cluster IP and ingress hostname."""
    return AccessInfo(ip=ip, hostname=hostname)


def useful_commands(manifest_dir: str = "k8s") -> List[tuple]:
    """Commands worth knowing once the stack is up, as (label, command) pairs."""
    return [
        ("View pods", "kubectl get pods"),
        ("View services", "kubectl get services"),
        ("View ingress", "kubectl get ingress"),
        ("View backend logs", "kubectl logs -l app=backend"),
        ("View frontend logs", "kubectl logs -l app=frontend"),
        ("View MySQL logs", "kubectl logs -l app=mysql"),
        ("Delete all resources", f"kubectl delete -f {manifest_dir.rstrip('/')}/"),
    ]


class HostsFile:
    """Minimal editor for an /etc/hosts style file."""

    def __init__(self, path: Path = Path("/etc/hosts")):
        self.path = Path(path)

    def _read_lines(self) -> List[str]:
        if not self.path.exists():
            return []
        return self.path.read_text().splitlines()

    @staticmethod
    def _hostnames(line: str) -> List[str]:
        content = line.split("#", 1)[0].split()
        return content[1:] if len(content) > 1 else []

    def lookup(self, hostname: str) -> Optional[str]:
        """Return the first address mapped to hostname, if any."""
        addresses = self.addresses(hostname)
        return addresses[0] if addresses else None

    def addresses(self, hostname: str) -> List[str]:
        """Return every address mapped to hostname, in file order."""
        return [line.split()[0] for line in self._read_lines() if hostname in self._hostnames(line)]

    def has_entry(self, hostname: str, ip: Optional[str] = None) -> bool:
        """Check whether hostname is mapped (to ip, when given)."""
        addresses = self.addresses(hostname)
        if not addresses:
            return False
        return ip is None or ip in addresses

    @staticmethod
    def _without(line: str, hostname: str) -> Optional[str]:
        """Drop hostname from a line, keeping its comment; None when no name is left."""
        content, sep, comment = line.partition("#")
        fields = content.split()
        remaining = [name for name in fields[1:] if name != hostname]
        if not remaining:
            return None
        rewritten = " ".join([fields[0]] + remaining)
        return f"{rewritten} {sep}{comment}" if sep else rewritten

    def add_entry(self, ip: str, hostname: str) -> bool:
        """Map hostname to ip.

        Returns False when ip is the only address mapped to hostname. Every
        stale mapping of the hostname to another address is removed, other
        names and comments on those lines are kept.
        """
        addresses = self.addresses(hostname)
        if addresses and all(address == ip for address in addresses):
            logger.info(f"{self.path} already maps {hostname} to {ip}")
            return False

        lines = []
        for line in self._read_lines():
            if hostname not in self._hostnames(line) or line.split()[0] == ip:
                lines.append(line)
                continue
            rewritten = self._without(line, hostname)
            if rewritten is not None:
                lines.append(rewritten)

        if ip not in addresses:
            lines.append(f"{ip} {hostname}")
        self.path.write_text("\n".join(lines) + "\n")

        logger.info(f"Mapped {hostname} to {ip} in {self.path}")
        return True
