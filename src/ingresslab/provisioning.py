"""Setup workflow: prerequisites, cluster credentials, static IPs, manifests."""

import logging
from typing import Callable

from .cluster.gcloud import GcloudClient
from .cluster.kubectl import KubectlClient
from .config import LabSettings
from .deployment.manifests import ManifestSet
from .errors import SetupError

logger = logging.getLogger(__name__)

ZONE_PROMPT = "Enter your GCP zone (e.g., us-central1-a): "


class LabProvisioner:
    """Prepare a GKE cluster and the GCP project for the lab."""

    def __init__(
        self,
        settings: LabSettings,
        kubectl: KubectlClient | None = None,
        gcloud: GcloudClient | None = None,
        prompt: Callable[[str], str] | None = None,
    ):
        self.settings = settings
        self.kubectl = kubectl or KubectlClient()
        self.gcloud = gcloud or GcloudClient()
        self.prompt = prompt or input

    def check_prerequisites(self) -> None:
        logger.info("[STEP] Checking prerequisites...")
        if not self.kubectl.is_installed():
            raise SetupError("kubectl is not installed or not in PATH")
        if not self.gcloud.is_installed():
            raise SetupError("gcloud is not installed or not in PATH")
        logger.info("Prerequisites check passed ✓")

    def setup_environment(self) -> LabSettings:
        """Prompt for the zone when it is not already set."""
        logger.info("[STEP] Setting up environment variables...")

        if not self.settings.zone:
            try:
                zone = self.prompt(ZONE_PROMPT).strip()
            except EOFError:
                raise SetupError("A GCP zone is required")
            if not zone:
                raise SetupError("A GCP zone is required")
            self.settings = self.settings.model_copy(update={"zone": zone})

        logger.info(f"Zone: {self.settings.zone}")
        logger.info(f"Cluster: {self.settings.cluster}")
        return self.settings

    def connect_to_cluster(self) -> None:
        logger.info("[STEP] Connecting to GKE cluster...")
        self.gcloud.get_credentials(self.settings.cluster, self.settings.zone)
        self.kubectl.verify_cluster_access()

    def create_static_ips(self) -> dict[str, bool]:
        """
        Reserve the regional and global static IPs.

        Returns:
            Dict mapping address name to whether it was newly created
        """
        logger.info("[STEP] Creating static IP addresses...")

        logger.info("Creating regional static IP address...")
        regional = self.gcloud.create_address(
            self.settings.regional_address_name, region=self.settings.region
        )

        logger.info("Creating global static IP address...")
        global_ = self.gcloud.create_address(self.settings.global_address_name)

        logger.info("Static IP addresses:")
        self.gcloud.list_addresses(self.settings.address_filter)

        return {
            self.settings.regional_address_name: regional,
            self.settings.global_address_name: global_,
        }

    def verify_manifests(self) -> None:
        logger.info("[STEP] Verifying manifest files...")
        ManifestSet(self.settings.manifest_dir).verify_all()

    def run(self) -> LabSettings:
        """
        Run every setup step in order.

        Returns:
            The settings, including a zone entered at the prompt

        Raises:
            SetupError, GcloudError, KubernetesDeploymentError, ManifestError
        """
        self.check_prerequisites()
        self.setup_environment()
        self.connect_to_cluster()
        self.create_static_ips()
        self.verify_manifests()

        logger.info("Setup completed successfully! 🎉")
        return self.settings
