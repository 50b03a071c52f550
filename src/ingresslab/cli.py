"""Command-line entry point: ``ingresslab setup|deploy|status|test|cleanup``."""

import argparse
import sys

from .cleanup import LabCleaner
from .cluster.commands import CommandRunner
from .cluster.gcloud import GcloudClient
from .cluster.kubectl import KubectlClient
from .config import LabSettings
from .deployment.deployer import LabDeployer
from .errors import LabError
from .logging_config import get_logger, setup_logging
from .provisioning import LabProvisioner

logger = get_logger(__name__)

BANNER_WIDTH = 42


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="ingresslab",
        description="Provision the GKE Services and Ingress lab with kubectl and gcloud",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable DEBUG logging (also INGRESSLAB_DEBUG=true)",
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup", help="Connect to the cluster, reserve static IPs, verify manifests")
    subparsers.add_parser("deploy", help="Deploy all lab resources in order")
    subparsers.add_parser("status", help="Show pods, services, ingress and static IPs")
    subparsers.add_parser("test", help="Run the connectivity checks")
    subparsers.add_parser("cleanup", help="Delete lab resources and release static IPs")
    return parser.parse_args(argv)


def banner(title: str) -> None:
    print("=" * BANNER_WIDTH)
    print(title)
    print("=" * BANNER_WIDTH)
    print()


def run_setup(settings: LabSettings, kubectl: KubectlClient, gcloud: GcloudClient) -> int:
    banner("GKE Services and Ingress Lab Setup")
    settings = LabProvisioner(settings, kubectl=kubectl, gcloud=gcloud).run()

    print()
    print("Next steps:")
    print("1. Export the environment variables below in your shell")
    print("2. Run 'ingresslab deploy' to deploy all resources")
    print()
    print("Environment variables set:")
    for line in settings.export_lines():
        print(f"  {line}")
    print()
    return 0


def run_deploy(settings: LabSettings, kubectl: KubectlClient, gcloud: GcloudClient) -> int:
    banner("GKE Services and Ingress Lab Deployment")
    LabDeployer(settings, kubectl=kubectl, gcloud=gcloud).deploy_all()
    return 0


def run_status(settings: LabSettings, kubectl: KubectlClient, gcloud: GcloudClient) -> int:
    settings.require_environment()
    LabDeployer(settings, kubectl=kubectl, gcloud=gcloud).show_status()
    return 0


def run_test(settings: LabSettings, kubectl: KubectlClient, gcloud: GcloudClient) -> int:
    LabDeployer(settings, kubectl=kubectl, gcloud=gcloud).test_connectivity()
    return 0


def run_cleanup(settings: LabSettings, kubectl: KubectlClient, gcloud: GcloudClient) -> int:
    banner("GKE Services and Ingress Lab Cleanup")
    LabCleaner(settings, kubectl=kubectl, gcloud=gcloud).run()
    return 0


COMMANDS = {
    "setup": run_setup,
    "deploy": run_deploy,
    "status": run_status,
    "test": run_test,
    "cleanup": run_cleanup,
}


def main(argv: list[str] | None = None, runner: CommandRunner | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = LabSettings.from_env()
    except (LabError, ValueError) as e:
        setup_logging(log_file=args.log_file, debug=args.debug)
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(log_file=args.log_file, debug=args.debug or settings.debug)

    runner = runner or CommandRunner()
    kubectl = KubectlClient(runner=runner)
    gcloud = GcloudClient(runner=runner)

    try:
        return COMMANDS[args.command](settings, kubectl, gcloud)
    except LabError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
