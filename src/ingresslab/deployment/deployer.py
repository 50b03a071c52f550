"""Deployment workflow for the Services and Ingress lab.

Applies the lab manifests in a fixed order:

1. DNS demo pods and headless service
2. hello-v1 Deployment
3. hello-svc as a ClusterIP service
4. hello-svc converted to a NodePort service
5. hello-v2 Deployment
6. hello-lb-svc LoadBalancer service on the reserved regional static IP
7. hello-ingress on the reserved global static IP

A failed ``kubectl apply`` aborts the run and leaves earlier objects in
place. Slow pods and slow external IPs only produce warnings.
"""

import ipaddress
import logging
import time
from typing import Any, Callable

from ..cluster.gcloud import GcloudClient
from ..cluster.kubectl import KubectlClient
from ..config import LabSettings
from ..errors import GcloudError, KubernetesDeploymentError
from . import manifests
from .connectivity import ConnectivityTester
from .manifests import ManifestSet, substitute_placeholder
from .polling import wait_for_external_ip

logger = logging.getLogger(__name__)


class LabDeployer:
    """Deploy every lab resource, step by step."""

    def __init__(
        self,
        settings: LabSettings,
        kubectl: KubectlClient | None = None,
        gcloud: GcloudClient | None = None,
        tester: ConnectivityTester | None = None,
        sleep: Callable[[float], None] | None = None,
    ):
        self.settings = settings
        self.kubectl = kubectl or KubectlClient()
        self.gcloud = gcloud or GcloudClient()
        self.tester = tester or ConnectivityTester(self.kubectl)
        self.manifests = ManifestSet(settings.manifest_dir)
        self.sleep = sleep or time.sleep

    def preflight(self) -> None:
        """Fail fast unless setup has been run and the cluster answers."""
        self.settings.require_environment()
        if not self.kubectl.cluster_reachable():
            raise KubernetesDeploymentError(
                "Cannot connect to Kubernetes cluster. Please run 'ingresslab setup' first."
            )

    def deploy_dns_demo(self) -> None:
        logger.info("[STEP] Deploying DNS demo pods and service...")
        self.kubectl.apply_file(self.manifests.path(manifests.DNS_DEMO))
        self.kubectl.wait_for_pods("name=dns-demo", timeout=self.settings.pod_ready_timeout)
        logger.info("DNS demo deployed successfully ✓")

    def deploy_hello_v1(self) -> None:
        logger.info("[STEP] Deploying hello-v1 application...")
        self.kubectl.apply_file(self.manifests.path(manifests.HELLO_V1))
        self.kubectl.wait_for_pods("run=hello-v1", timeout=self.settings.pod_ready_timeout)
        logger.info("hello-v1 application deployed successfully ✓")

    def deploy_clusterip_service(self) -> None:
        logger.info("[STEP] Deploying ClusterIP service...")
        self.kubectl.apply_file(self.manifests.path(manifests.HELLO_SVC))
        self.kubectl.show("service", "hello-svc")
        logger.info("ClusterIP service deployed successfully ✓")

    def deploy_nodeport_service(self) -> None:
        logger.info("[STEP] Converting to NodePort service...")
        self.kubectl.apply_file(self.manifests.path(manifests.HELLO_NODEPORT_SVC))
        self.kubectl.show("service", "hello-svc")
        logger.info("NodePort service deployed successfully ✓")

    def deploy_hello_v2(self) -> None:
        logger.info("[STEP] Deploying hello-v2 application...")
        self.kubectl.apply_file(self.manifests.path(manifests.HELLO_V2))
        self.kubectl.wait_for_pods("run=hello-v2", timeout=self.settings.pod_ready_timeout)
        logger.info("hello-v2 application deployed successfully ✓")

    def resolve_static_lb_ip(self) -> str:
        """
        Look up the reserved regional static IP.

        Raises:
            GcloudError: If the address is missing or is not a valid IP literal
        """
        name = self.settings.regional_address_name
        static_ip = self.gcloud.describe_address(name, region=self.settings.region)
        if not static_ip:
            raise GcloudError(f"Could not retrieve {name} static IP address")

        try:
            ipaddress.ip_address(static_ip)
        except ValueError:
            raise GcloudError(f"Static IP for {name} is not a valid address: '{static_ip}'")
        return static_ip

    def deploy_loadbalancer_service(self) -> str | None:
        """
        Apply hello-lb-svc on the reserved static IP and wait for its external IP.

        Returns:
            The external IP, or None if it was not assigned within the timeout
        """
        logger.info("[STEP] Deploying LoadBalancer service...")

        static_ip = self.resolve_static_lb_ip()
        logger.info(f"Using static IP: {static_ip}")

        template = self.manifests.read(manifests.HELLO_LB_SVC)
        if manifests.PLACEHOLDER_IP not in template:
            logger.warning(
                f"{manifests.HELLO_LB_SVC} has no {manifests.PLACEHOLDER_IP} placeholder; "
                "applying it unchanged"
            )
        self.kubectl.apply_content(
            substitute_placeholder(template, static_ip), source=manifests.HELLO_LB_SVC
        )

        external_ip = wait_for_external_ip(
            lambda: self.kubectl.get_external_ip("service", "hello-lb-svc"),
            "hello-lb-svc",
            timeout=self.settings.external_ip_timeout,
            interval=self.settings.poll_interval,
            sleep=self.sleep,
        )

        logger.info("LoadBalancer service deployed successfully ✓")
        return external_ip

    def deploy_ingress(self) -> None:
        logger.info("[STEP] Deploying Ingress resource...")
        self.kubectl.apply_file(self.manifests.path(manifests.HELLO_INGRESS))
        logger.info("Ingress resource deployed ✓")
        logger.warning("Note: It may take 5-10 minutes for the Global Load Balancer to be fully ready")

    def show_status(self) -> None:
        """Print pods, services, ingress and the static IPs."""
        logger.info("[STEP] Deployment Status Summary")

        print("\nPods:")
        self.kubectl.show("pods", "-o", "wide")

        print("\nServices:")
        self.kubectl.show("services")

        print("\nIngress:")
        self.kubectl.show("ingress")

        print("\nStatic IP Addresses:")
        self.gcloud.list_addresses(self.settings.address_filter)

    def test_connectivity(self) -> dict[str, Any]:
        logger.info("[STEP] Testing connectivity...")
        return self.tester.run_all()

    def deploy_all(self) -> dict[str, Any]:
        """
        Run the full deployment.

        Returns:
            Dict with the LoadBalancer external IP and connectivity results

        Raises:
            SetupError, KubernetesDeploymentError, GcloudError, ManifestError
        """
        self.preflight()

        self.deploy_dns_demo()
        self.deploy_hello_v1()
        self.deploy_clusterip_service()
        self.deploy_nodeport_service()
        self.deploy_hello_v2()
        external_ip = self.deploy_loadbalancer_service()
        self.deploy_ingress()

        self.show_status()
        connectivity = self.test_connectivity()

        logger.info("Deployment completed! 🎉")
        return {
            "load_balancer_ip": external_ip,
            "connectivity": connectivity,
        }
