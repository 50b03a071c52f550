"""Exceptions raised by the lab workflows."""


class LabError(Exception):
    """Base class for fatal lab errors."""
    pass


class CommandError(LabError):
    """Raised when an external command exits non-zero or times out."""

    def __init__(self, args: list[str], returncode: int | None, stderr: str = ""):
        self.command = list(args)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        if returncode is None:
            message = f"Command timed out: {' '.join(self.command)}"
        else:
            message = f"Command failed with exit code {returncode}: {' '.join(self.command)}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class KubernetesDeploymentError(LabError):
    """Raised when kubectl is unavailable or a cluster operation fails."""
    pass


class GcloudError(LabError):
    """Raised when gcloud is unavailable or a cloud operation fails."""
    pass


class ManifestError(LabError):
    """Raised when a lab manifest is missing or is not valid YAML."""
    pass


class SetupError(LabError):
    """Raised when the lab environment is not ready for the requested command."""
    pass
