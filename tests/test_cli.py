"""Tests for the ingresslab command-line entry point."""

import pytest
import requests

from conftest import FakeRunner, completed
from ingresslab import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # Keep main() from replacing the root handlers pytest captures with
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)


@pytest.fixture
def configured_env(lab_env):
    lab_env.setenv("my_zone", "us-central1-a")
    lab_env.setenv("my_cluster", "standard-cluster-1")
    lab_env.setenv("INGRESSLAB_EXTERNAL_IP_TIMEOUT", "10")
    lab_env.setenv("INGRESSLAB_POLL_INTERVAL", "10")
    return lab_env


def test_parse_args_requires_command():
    with pytest.raises(SystemExit):
        cli.parse_args([])


def test_parse_args_global_options():
    args = cli.parse_args(["--debug", "--log-file", "lab.log", "deploy"])

    assert args.debug is True
    assert args.log_file == "lab.log"
    assert args.command == "deploy"


def test_deploy_without_environment_exits_1(lab_env):
    runner = FakeRunner()

    assert cli.main(["deploy"], runner=runner) == 1
    assert runner.calls == []


def test_deploy_succeeds(configured_env, monkeypatch):
    runner = FakeRunner()
    runner.respond(["gcloud", "compute", "addresses", "describe"], completed(stdout="35.226.1.2"))
    runner.respond(["kubectl", "get", "service", "hello-lb-svc"], completed(stdout="35.226.1.2"))
    monkeypatch.setattr("requests.get", lambda url, timeout=None: None)

    assert cli.main(["deploy"], runner=runner) == 0
    assert len(runner.calls_matching("kubectl", "apply")) == 7


def test_deploy_with_lb_timeout_exits_0(configured_env, monkeypatch):
    runner = FakeRunner()
    runner.respond(["gcloud", "compute", "addresses", "describe"], completed(stdout="35.226.1.2"))
    monkeypatch.setattr("time.sleep", lambda _: None)

    assert cli.main(["deploy"], runner=runner) == 0


def test_apply_failure_exits_1(configured_env):
    runner = FakeRunner()
    runner.respond(["kubectl", "apply"], completed(returncode=1, stderr="denied"))

    assert cli.main(["deploy"], runner=runner) == 1


def test_setup_prints_exports(configured_env, capsys):
    runner = FakeRunner()

    assert cli.main(["setup"], runner=runner) == 0

    out = capsys.readouterr().out
    assert "export my_zone=us-central1-a" in out
    assert "export my_cluster=standard-cluster-1" in out


def test_setup_missing_tools_exits_1(configured_env):
    assert cli.main(["setup"], runner=FakeRunner(installed=())) == 1


def test_invalid_config_exits_1(lab_env):
    lab_env.setenv("INGRESSLAB_POLL_INTERVAL", "0")

    assert cli.main(["status"], runner=FakeRunner()) == 1


def test_status_and_cleanup(configured_env):
    runner = FakeRunner()

    assert cli.main(["status"], runner=runner) == 0
    assert cli.main(["cleanup"], runner=runner) == 0
    assert len(runner.calls_matching("kubectl", "delete")) == 6


def test_setup_without_zone_and_closed_stdin_exits_1(lab_env, monkeypatch):
    def no_input(prompt=""):
        raise EOFError("EOF when reading a line")

    monkeypatch.setattr("builtins.input", no_input)

    assert cli.main(["setup"], runner=FakeRunner()) == 1


def test_keyboard_interrupt_exits_130(configured_env):
    runner = FakeRunner()
    runner.respond(["kubectl"], KeyboardInterrupt())

    assert cli.main(["deploy"], runner=runner) == 130


def test_connectivity_command_exits_0_when_checks_fail(configured_env, monkeypatch):
    runner = FakeRunner()
    runner.respond(["kubectl", "exec"], completed(returncode=7))
    runner.respond(["kubectl", "get", "service"], completed(stdout="35.226.1.2"))
    runner.respond(["kubectl", "get", "ingress"], completed(stdout=""))

    def refuse(url, timeout=None):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr("requests.get", refuse)

    assert cli.main(["test"], runner=runner) == 0
    assert len(runner.calls_matching("kubectl", "exec")) == 2
