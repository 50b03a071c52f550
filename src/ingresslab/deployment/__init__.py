"""Lab deployment: manifests, polling, apply steps and connectivity checks."""

from .connectivity import ConnectivityTester
from .deployer import LabDeployer
from .manifests import MANIFEST_FILES, PLACEHOLDER_IP, ManifestSet, substitute_placeholder
from .polling import wait_for_external_ip

__all__ = [
    "ConnectivityTester",
    "LabDeployer",
    "MANIFEST_FILES",
    "PLACEHOLDER_IP",
    "ManifestSet",
    "substitute_placeholder",
    "wait_for_external_ip",
]
