"""CLI wrappers for kubectl and gcloud."""

from .commands import CommandRunner
from .gcloud import GcloudClient
from .kubectl import KubectlClient

__all__ = [
    "CommandRunner",
    "GcloudClient",
    "KubectlClient",
]
