"""Lab manifest set: file names, checks, and the static IP placeholder."""

import logging
from pathlib import Path

import yaml

from ..errors import ManifestError

logger = logging.getLogger(__name__)

# Placeholder loadBalancerIP in hello-lb-svc.yaml, replaced with the reserved regional IP
PLACEHOLDER_IP = "10.10.10.10"

DNS_DEMO = "dns-demo.yaml"
HELLO_V1 = "hello-v1.yaml"
HELLO_V2 = "hello-v2.yaml"
HELLO_SVC = "hello-svc.yaml"
HELLO_NODEPORT_SVC = "hello-nodeport-svc.yaml"
HELLO_LB_SVC = "hello-lb-svc.yaml"
HELLO_INGRESS = "hello-ingress.yaml"

MANIFEST_FILES = [
    DNS_DEMO,
    HELLO_V1,
    HELLO_V2,
    HELLO_SVC,
    HELLO_NODEPORT_SVC,
    HELLO_LB_SVC,
    HELLO_INGRESS,
]


def substitute_placeholder(text: str, address: str, placeholder: str = PLACEHOLDER_IP) -> str:
    """
    Replace the placeholder IP literal with a real address.

    Text without the placeholder is returned unchanged.
    """
    return text.replace(placeholder, address)


class ManifestSet:
    """The seven lab manifests in one directory."""

    def __init__(self, manifest_dir: Path):
        self.manifest_dir = Path(manifest_dir)

    def path(self, file_name: str) -> Path:
        """Absolute path of a manifest in the set."""
        return self.manifest_dir / file_name

    def read(self, file_name: str) -> str:
        """Read a manifest as text."""
        path = self.path(file_name)
        try:
            return path.read_text()
        except FileNotFoundError:
            raise ManifestError(f"{path} not found")

    def validate_yaml_syntax(self, file_name: str) -> int:
        """
        Validate YAML syntax by parsing every document in the file.

        Args:
            file_name: Manifest file name

        Returns:
            Number of non-empty documents

        Raises:
            ManifestError: If the file is missing, unparsable, or empty
        """
        path = self.path(file_name)
        try:
            with open(path, "r") as f:
                docs = [doc for doc in yaml.safe_load_all(f) if doc is not None]
        except FileNotFoundError:
            raise ManifestError(f"{path} not found")
        except yaml.YAMLError as e:
            raise ManifestError(f"Invalid YAML syntax in {path}: {e}")

        if not docs:
            raise ManifestError(f"No valid YAML documents found in {path}")
        return len(docs)

    def verify_all(self) -> list[Path]:
        """
        Check that every lab manifest exists and parses.

        Returns:
            Paths of the verified manifests

        Raises:
            ManifestError: On the first missing or invalid manifest
        """
        verified = []
        for file_name in MANIFEST_FILES:
            path = self.path(file_name)
            if not path.is_file():
                raise ManifestError(f"{path} not found")
            count = self.validate_yaml_syntax(file_name)
            logger.info(f"{file_name} exists ✓ ({count} document(s))")
            verified.append(path)
        return verified
