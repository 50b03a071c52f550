"""kubectl wrapper for the lab workflows.

Every cluster interaction goes through ``kubectl`` so the lab behaves exactly
like the commands an operator would type by hand.
"""

import logging
import subprocess
from pathlib import Path

from ..errors import CommandError, KubernetesDeploymentError
from .commands import CommandRunner

logger = logging.getLogger(__name__)

EXTERNAL_IP_JSONPATH = "{.status.loadBalancer.ingress[0].ip}"


class KubectlClient:
    """Thin wrapper around the kubectl CLI."""

    def __init__(self, runner: CommandRunner | None = None, namespace: str = "default"):
        """
        Initialize the kubectl client.

        Args:
            runner: Command runner (defaults to a subprocess-backed runner)
            namespace: Namespace for all namespaced commands
        """
        self.runner = runner or CommandRunner()
        self.namespace = namespace

    def _run(self, *args: str, **kwargs) -> subprocess.CompletedProcess:
        try:
            return self.runner.run(["kubectl", *args], **kwargs)
        except FileNotFoundError:
            raise KubernetesDeploymentError("kubectl not found in PATH")

    def is_installed(self) -> bool:
        """Check whether kubectl is on PATH."""
        return self.runner.which("kubectl") is not None

    def cluster_reachable(self) -> bool:
        """Return True if ``kubectl cluster-info`` succeeds."""
        try:
            result = self._run("cluster-info", timeout=30)
        except CommandError:
            logger.debug("kubectl cluster-info timed out")
            return False
        return result.returncode == 0

    def verify_cluster_access(self) -> None:
        """Verify we can access the Kubernetes cluster."""
        if not self.cluster_reachable():
            raise KubernetesDeploymentError("Unable to communicate with cluster")
        logger.info("Kubernetes cluster access verified")

    def apply_file(self, manifest_path: Path) -> str:
        """
        Apply a manifest file to the cluster.

        Args:
            manifest_path: Path to the YAML manifest

        Returns:
            kubectl output (e.g. "service/hello-svc created")

        Raises:
            KubernetesDeploymentError: If the file is missing or kubectl apply fails
        """
        manifest_path = Path(manifest_path)
        if not manifest_path.exists():
            raise KubernetesDeploymentError(f"Manifest not found: {manifest_path}")

        try:
            result = self._run("apply", "-f", str(manifest_path), "-n", self.namespace)
        except CommandError as e:
            raise KubernetesDeploymentError(f"Timeout applying {manifest_path.name}") from e

        if result.returncode != 0:
            raise KubernetesDeploymentError(
                f"Failed to apply {manifest_path.name}: {(result.stderr or '').strip()}"
            )

        output = (result.stdout or "").strip()
        logger.info(f"Applied {manifest_path.name}: {output}")
        return output

    def apply_content(self, content: str, source: str = "-") -> str:
        """
        Apply manifest text by piping it to ``kubectl apply -f -``.

        Args:
            content: Manifest YAML text
            source: Name used in log and error messages

        Returns:
            kubectl output
        """
        try:
            result = self._run("apply", "-f", "-", "-n", self.namespace, input=content)
        except CommandError as e:
            raise KubernetesDeploymentError(f"Timeout applying {source}") from e

        if result.returncode != 0:
            raise KubernetesDeploymentError(
                f"Failed to apply {source}: {(result.stderr or '').strip()}"
            )

        output = (result.stdout or "").strip()
        logger.info(f"Applied {source}: {output}")
        return output

    def delete_file(self, manifest_path: Path) -> bool:
        """
        Delete the objects declared in a manifest, ignoring ones already gone.

        Returns:
            True if kubectl delete succeeded
        """
        try:
            result = self._run(
                "delete", "-f", str(manifest_path), "-n", self.namespace,
                "--ignore-not-found=true",
                timeout=120,
            )
        except CommandError:
            logger.warning(f"Timeout deleting {Path(manifest_path).name}")
            return False

        if result.returncode != 0:
            logger.warning(f"Failed to delete {Path(manifest_path).name}: {(result.stderr or '').strip()}")
            return False

        logger.info(f"Deleted {Path(manifest_path).name}")
        return True

    def wait_for_pods(self, label_selector: str, timeout: int = 300) -> bool:
        """
        Block until pods matching a selector are Ready.

        Args:
            label_selector: Pod label selector (e.g. "run=hello-v1")
            timeout: Seconds passed to ``kubectl wait --timeout``

        Returns:
            True if the pods became ready, False on timeout or error
        """
        logger.info(f"Waiting for pods with selector '{label_selector}' to be ready...")
        try:
            result = self._run(
                "wait", "--for=condition=ready", "pod",
                "-l", label_selector,
                "-n", self.namespace,
                f"--timeout={timeout}s",
                timeout=timeout + 30,
            )
        except CommandError:
            result = None

        if result is not None and result.returncode == 0:
            logger.info("Pods are ready ✓")
            return True

        logger.warning("Some pods may not be ready yet")
        return False

    def get_jsonpath(self, kind: str, name: str, jsonpath: str) -> str:
        """
        Read a single field of a resource.

        A failing query (resource missing, API error, timeout) yields an empty
        string rather than an exception.
        """
        try:
            result = self._run(
                "get", kind, name, "-n", self.namespace, "-o", f"jsonpath={jsonpath}",
                timeout=30,
            )
        except (CommandError, KubernetesDeploymentError) as e:
            logger.debug(f"Query of {kind}/{name} failed: {e}")
            return ""

        if result.returncode != 0:
            logger.debug(f"Query of {kind}/{name} failed: {(result.stderr or '').strip()}")
            return ""
        return (result.stdout or "").strip()

    def get_external_ip(self, kind: str, name: str) -> str:
        """Return the first load-balancer ingress IP of a Service or Ingress, or ''."""
        return self.get_jsonpath(kind, name, EXTERNAL_IP_JSONPATH)

    def show(self, *args: str) -> bool:
        """Run a ``kubectl get ...`` with output going straight to the terminal."""
        try:
            result = self._run("get", *args, "-n", self.namespace, capture_output=False, timeout=30)
        except CommandError:
            logger.warning(f"Timeout running kubectl get {' '.join(args)}")
            return False
        return result.returncode == 0

    def exec_in_pod(self, pod: str, command: list[str], timeout: int = 120) -> subprocess.CompletedProcess:
        """Run a command inside a pod (``kubectl exec <pod> -- ...``)."""
        return self._run("exec", pod, "-n", self.namespace, "--", *command, timeout=timeout)
