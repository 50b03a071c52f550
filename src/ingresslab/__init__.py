"""GKE Services and Ingress lab provisioning."""

__version__ = "0.1.0"
