"""Lab settings: target zone, cluster and tuning knobs.

Settings come from the same environment variables the lab instructions export
(``my_zone`` and ``my_cluster``) plus a few optional ``INGRESSLAB_*`` overrides.
"""

import logging
import os
import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .errors import SetupError

logger = logging.getLogger(__name__)

DEFAULT_CLUSTER = "standard-cluster-1"
DEFAULT_MANIFEST_DIR = Path(__file__).parent / "manifests"

REGIONAL_ADDRESS_NAME = "regional-loadbalancer"
GLOBAL_ADDRESS_NAME = "global-ingress"

ZONE_ENV = "my_zone"
CLUSTER_ENV = "my_cluster"


def region_from_zone(zone: str) -> str:
    """Strip the zone letter suffix: ``us-central1-a`` -> ``us-central1``."""
    return re.sub(r"-[a-z]$", "", zone)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise SetupError(f"{name} must be an integer, got '{value}'")


class LabSettings(BaseModel):
    """Settings for one setup/deploy/cleanup invocation."""

    zone: str | None = Field(None, description="GCP zone of the cluster (e.g. us-central1-a)")
    cluster: str = Field(DEFAULT_CLUSTER, description="GKE cluster name")
    manifest_dir: Path = Field(DEFAULT_MANIFEST_DIR, description="Directory holding the lab manifests")

    regional_address_name: str = Field(
        REGIONAL_ADDRESS_NAME, description="Regional static IP used by the LoadBalancer service"
    )
    global_address_name: str = Field(
        GLOBAL_ADDRESS_NAME, description="Global static IP used by the Ingress"
    )

    pod_ready_timeout: int = Field(300, gt=0, description="Seconds to wait for pod readiness")
    external_ip_timeout: int = Field(300, gt=0, description="Seconds to poll for an external IP")
    poll_interval: int = Field(10, gt=0, description="Seconds between external IP queries")

    debug: bool = Field(False, description="Enable DEBUG logging")

    @field_validator("zone")
    @classmethod
    def _normalize_zone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("cluster")
    @classmethod
    def _require_cluster(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("cluster name must not be empty")
        return value

    @property
    def region(self) -> str:
        """Region derived from the zone."""
        if not self.zone:
            raise SetupError("Zone is not set; cannot derive region")
        return region_from_zone(self.zone)

    @property
    def address_filter(self) -> str:
        """gcloud ``--filter`` expression matching both lab static addresses."""
        return f"name:({self.regional_address_name} OR {self.global_address_name})"

    def require_environment(self) -> None:
        """Raise SetupError unless both zone and cluster are set."""
        if not self.zone or not self.cluster:
            raise SetupError(
                "Environment not set up. Please run 'ingresslab setup' first "
                f"and export {ZONE_ENV} and {CLUSTER_ENV}."
            )

    def export_lines(self) -> list[str]:
        """Shell export lines for carrying the settings into another shell."""
        return [
            f"export {ZONE_ENV}={self.zone or ''}",
            f"export {CLUSTER_ENV}={self.cluster}",
        ]

    @classmethod
    def from_env(cls) -> "LabSettings":
        """Build settings from the process environment."""
        kwargs = {
            "zone": os.getenv(ZONE_ENV),
            "cluster": os.getenv(CLUSTER_ENV) or DEFAULT_CLUSTER,
            "pod_ready_timeout": _env_int("INGRESSLAB_POD_TIMEOUT", 300),
            "external_ip_timeout": _env_int("INGRESSLAB_EXTERNAL_IP_TIMEOUT", 300),
            "poll_interval": _env_int("INGRESSLAB_POLL_INTERVAL", 10),
            "debug": os.getenv("INGRESSLAB_DEBUG", "false").lower() == "true",
        }
        manifest_dir = os.getenv("INGRESSLAB_MANIFEST_DIR")
        if manifest_dir:
            kwargs["manifest_dir"] = Path(manifest_dir)

        settings = cls(**kwargs)
        logger.debug(f"Loaded settings: zone={settings.zone} cluster={settings.cluster}")
        return settings
