"""gcloud wrapper: cluster credentials and static IP address reservations."""

import logging
import subprocess

from ..errors import CommandError, GcloudError
from .commands import CommandRunner

logger = logging.getLogger(__name__)


class GcloudClient:
    """Thin wrapper around the gcloud CLI."""

    def __init__(self, runner: CommandRunner | None = None):
        self.runner = runner or CommandRunner()

    def _run(self, *args: str, **kwargs) -> subprocess.CompletedProcess:
        try:
            return self.runner.run(["gcloud", *args], **kwargs)
        except FileNotFoundError:
            raise GcloudError("gcloud not found in PATH")

    @staticmethod
    def _scope_flags(region: str | None) -> list[str]:
        # Regional addresses take --region, global ones --global
        return [f"--region={region}"] if region else ["--global"]

    def is_installed(self) -> bool:
        """Check whether gcloud is on PATH."""
        return self.runner.which("gcloud") is not None

    def get_credentials(self, cluster: str, zone: str) -> None:
        """
        Write kubeconfig credentials for a GKE cluster.

        Raises:
            GcloudError: If the cluster cannot be reached or does not exist
        """
        try:
            result = self._run(
                "container", "clusters", "get-credentials", cluster, "--zone", zone,
                timeout=120,
            )
        except CommandError as e:
            raise GcloudError(f"Timed out fetching credentials for cluster {cluster}") from e

        if result.returncode != 0:
            raise GcloudError(
                f"Failed to connect to cluster {cluster} in {zone}. "
                f"Please check if the cluster exists. {(result.stderr or '').strip()}"
            )
        logger.info(f"Successfully connected to cluster {cluster} ✓")

    def create_address(self, name: str, region: str | None = None) -> bool:
        """
        Reserve a static IP address.

        Args:
            name: Address resource name
            region: Region for a regional address; None reserves a global address

        Returns:
            True if created, False if creation failed (usually because it already exists)
        """
        scope = f"Regional ({region})" if region else "Global"
        try:
            result = self._run("compute", "addresses", "create", name, *self._scope_flags(region), timeout=120)
        except CommandError:
            result = None

        if result is not None and result.returncode == 0:
            logger.info(f"{scope} static IP '{name}' created ✓")
            return True

        logger.warning(f"{scope} static IP '{name}' may already exist")
        return False

    def describe_address(self, name: str, region: str | None = None) -> str:
        """
        Look up the IP literal of a reserved address.

        Returns:
            The address, or '' if gcloud returned nothing

        Raises:
            GcloudError: If the lookup command fails
        """
        try:
            result = self._run(
                "compute", "addresses", "describe", name, *self._scope_flags(region),
                "--format=value(address)",
            )
        except CommandError as e:
            raise GcloudError(f"Timed out describing static IP '{name}'") from e

        if result.returncode != 0:
            raise GcloudError(
                f"Could not retrieve {name} static IP address: {(result.stderr or '').strip()}"
            )
        return (result.stdout or "").strip()

    def list_addresses(self, address_filter: str) -> bool:
        """Print the static addresses matching a filter to the terminal."""
        try:
            result = self._run(
                "compute", "addresses", "list", f"--filter={address_filter}",
                capture_output=False,
            )
        except CommandError:
            logger.warning("Timed out listing static IP addresses")
            return False
        return result.returncode == 0

    def delete_address(self, name: str, region: str | None = None) -> bool:
        """Release a reserved address. Returns False (with a warning) on failure."""
        try:
            result = self._run(
                "compute", "addresses", "delete", name, *self._scope_flags(region), "--quiet",
                timeout=120,
            )
        except CommandError:
            result = None

        if result is not None and result.returncode == 0:
            logger.info(f"Static IP '{name}' released ✓")
            return True

        logger.warning(f"Could not release static IP '{name}' (it may not exist)")
        return False
