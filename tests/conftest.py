"""Shared fixtures: a fake command runner standing in for kubectl and gcloud."""

import os
import subprocess

import pytest

from ingresslab.cluster.gcloud import GcloudClient
from ingresslab.cluster.kubectl import KubectlClient
from ingresslab.config import LabSettings


def completed(args=None, returncode=0, stdout="", stderr=""):
    """Build a CompletedProcess for canned responses."""
    return subprocess.CompletedProcess(args or [], returncode, stdout=stdout, stderr=stderr)


class FakeRunner:
    """Records every command and answers with canned results.

    Responses are registered per argv prefix. A list of results is consumed
    one per call (the last one repeats); anything else is returned as-is.
    Unmatched commands succeed with empty output.
    """

    def __init__(self, installed=("kubectl", "gcloud")):
        self.installed = set(installed)
        self.calls = []
        self._responses = []

    def respond(self, prefix, result):
        self._responses.append((list(prefix), result))
        return self

    def which(self, program):
        return f"/usr/bin/{program}" if program in self.installed else None

    def run(self, args, input=None, capture_output=True, timeout=60):
        self.calls.append({
            "args": list(args),
            "input": input,
            "capture_output": capture_output,
            "timeout": timeout,
        })
        for prefix, result in self._responses:
            if args[:len(prefix)] == prefix:
                if isinstance(result, list):
                    value = result.pop(0) if len(result) > 1 else result[0]
                else:
                    value = result
                if isinstance(value, BaseException):
                    raise value
                return value
        return completed(args)

    def commands(self):
        """All recorded argv lists joined to strings."""
        return [" ".join(call["args"]) for call in self.calls]

    def calls_matching(self, *prefix):
        return [call for call in self.calls if call["args"][:len(prefix)] == list(prefix)]


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def kubectl(runner):
    return KubectlClient(runner=runner)


@pytest.fixture
def gcloud(runner):
    return GcloudClient(runner=runner)


@pytest.fixture
def settings():
    return LabSettings(
        zone="us-central1-a",
        cluster="standard-cluster-1",
        pod_ready_timeout=60,
        external_ip_timeout=30,
        poll_interval=10,
    )


@pytest.fixture
def lab_env(monkeypatch):
    """Clear every environment variable the lab reads."""
    for name in list(os.environ):
        if name in ("my_zone", "my_cluster") or name.startswith("INGRESSLAB_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
