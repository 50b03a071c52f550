"""Post-deployment connectivity checks.

All checks are soft: a failure is logged as a warning and reported in the
returned dict, never raised.
"""

import logging
from typing import Any

import requests

from ..cluster.kubectl import KubectlClient
from ..errors import CommandError, KubernetesDeploymentError
from .polling import is_assigned

logger = logging.getLogger(__name__)

DNS_DEMO_POD = "dns-demo-1"
CLUSTER_SERVICE_HOST = "hello-svc.default.svc.cluster.local"
LB_SERVICE = "hello-lb-svc"
INGRESS = "hello-ingress"


class ConnectivityTester:
    """Probe the ClusterIP service, the LoadBalancer service and the Ingress."""

    def __init__(self, kubectl: KubectlClient, http=None):
        self.kubectl = kubectl
        # Anything with a requests-style get(url, timeout=...)
        self.http = http or requests

    def test_cluster_ip(self) -> bool:
        """curl the ClusterIP service from inside the dns-demo-1 pod."""
        logger.info("Testing ClusterIP service from inside cluster...")

        # The pod image ships without curl; failure here is ignored
        try:
            self.kubectl.exec_in_pod(
                DNS_DEMO_POD,
                ["sh", "-c", "apt-get update -qq && apt-get install -y -qq curl"],
                timeout=300,
            )
        except (CommandError, KubernetesDeploymentError) as e:
            logger.debug(f"curl install in {DNS_DEMO_POD} failed: {e}")

        try:
            result = self.kubectl.exec_in_pod(
                DNS_DEMO_POD,
                ["curl", "-s", "--connect-timeout", "5", CLUSTER_SERVICE_HOST],
                timeout=30,
            )
            passed = result.returncode == 0
        except (CommandError, KubernetesDeploymentError):
            passed = False

        if passed:
            logger.info("ClusterIP service test: PASS ✓")
        else:
            logger.warning("ClusterIP service test: FAIL")
        return passed

    def test_load_balancer(self) -> tuple[str | None, bool]:
        """HTTP GET the LoadBalancer service's external IP."""
        logger.info("Testing LoadBalancer service externally...")

        lb_ip = self.kubectl.get_external_ip("service", LB_SERVICE)
        if not is_assigned(lb_ip):
            logger.warning("LoadBalancer service: External IP not ready yet")
            return None, False

        try:
            self.http.get(f"http://{lb_ip}", timeout=10)
            logger.info("LoadBalancer service test: PASS ✓")
            return lb_ip, True
        except requests.RequestException as e:
            logger.debug(f"Request to {lb_ip} failed: {e}")
            logger.warning("LoadBalancer service test: FAIL (may need more time)")
            return lb_ip, False

    def test_ingress(self) -> str | None:
        """Report the Ingress external IP if one is assigned."""
        logger.info("Testing Ingress resource...")

        ingress_ip = self.kubectl.get_external_ip("ingress", INGRESS)
        if not is_assigned(ingress_ip):
            logger.warning("Ingress: External IP not assigned yet")
            return None

        logger.info(f"Ingress external IP: {ingress_ip}")
        logger.warning("Global Load Balancer may take 5-10 minutes to be fully functional")
        return ingress_ip

    def run_all(self) -> dict[str, Any]:
        """Run every check and summarize the outcome."""
        cluster_ip_ok = self.test_cluster_ip()
        lb_ip, lb_ok = self.test_load_balancer()
        ingress_ip = self.test_ingress()

        return {
            "cluster_ip": cluster_ip_ok,
            "load_balancer": lb_ok,
            "load_balancer_ip": lb_ip,
            "ingress_ip": ingress_ip,
        }
