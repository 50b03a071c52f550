"""Cleanup workflow: delete lab objects and release the static IPs."""

import logging

from .cluster.gcloud import GcloudClient
from .cluster.kubectl import KubectlClient
from .config import LabSettings
from .deployment import manifests
from .deployment.manifests import ManifestSet

logger = logging.getLogger(__name__)

# Reverse of the deploy order. hello-nodeport-svc.yaml declares the same
# hello-svc object as hello-svc.yaml, so one delete covers both.
DELETE_ORDER = [
    manifests.HELLO_INGRESS,
    manifests.HELLO_LB_SVC,
    manifests.HELLO_SVC,
    manifests.HELLO_V2,
    manifests.HELLO_V1,
    manifests.DNS_DEMO,
]


class LabCleaner:
    """Remove everything the setup and deploy workflows created."""

    def __init__(
        self,
        settings: LabSettings,
        kubectl: KubectlClient | None = None,
        gcloud: GcloudClient | None = None,
    ):
        self.settings = settings
        self.kubectl = kubectl or KubectlClient()
        self.gcloud = gcloud or GcloudClient()
        self.manifests = ManifestSet(settings.manifest_dir)

    def delete_resources(self) -> dict[str, bool]:
        logger.info("[STEP] Deleting Kubernetes resources...")
        return {
            file_name: self.kubectl.delete_file(self.manifests.path(file_name))
            for file_name in DELETE_ORDER
        }

    def release_static_ips(self) -> dict[str, bool]:
        logger.info("[STEP] Releasing static IP addresses...")
        return {
            self.settings.regional_address_name: self.gcloud.delete_address(
                self.settings.regional_address_name, region=self.settings.region
            ),
            self.settings.global_address_name: self.gcloud.delete_address(
                self.settings.global_address_name
            ),
        }

    def run(self) -> dict[str, dict[str, bool]]:
        """
        Delete resources, then release addresses. Individual failures are warnings.

        Raises:
            SetupError: If the zone is not set
        """
        self.settings.require_environment()

        results = {
            "resources": self.delete_resources(),
            "addresses": self.release_static_ips(),
        }

        failures = [
            name
            for group in results.values()
            for name, ok in group.items()
            if not ok
        ]
        if failures:
            logger.warning(f"Cleanup finished with {len(failures)} warning(s): {', '.join(failures)}")
        else:
            logger.info("Cleanup completed successfully ✓")
        return results
