import functools

from click.testing import CliRunner

import cli
from conftest import FakeProber, UnreachableSession
from jitterpy.jitterer import Jitterer
from jitterpy.pinger import Pinger


def patch_jitterer(monkeypatch, **prober_options):
    factory = functools.partial(FakeProber, **prober_options)
    monkeypatch.setattr(cli, "Jitterer", functools.partial(Jitterer, prober_factory=factory))


def test_measure_prints_jitter(monkeypatch):
    patch_jitterer(monkeypatch)

    result = CliRunner().invoke(cli.cli, ["measure", "example.org", "-c", "3", "-t", "10", "--privileged"])

    assert result.exit_code == 0, result.output
    assert "Jitter test to example.org  (3 samples)" in result.output
    assert "10.000ms, 20.000ms, 30.000ms" in result.output
    seen = FakeProber.instances[0].seen
    assert seen["count"] == 3
    assert seen["timeout"] == 10.0
    assert seen["privileged"] is True
    assert seen["interval"] == 0.1


def test_measure_command_alias(monkeypatch):
    patch_jitterer(monkeypatch)

    result = CliRunner().invoke(cli.cli, ["m", "example.org"])

    assert result.exit_code == 0, result.output


def test_measure_total_loss(monkeypatch):
    patch_jitterer(monkeypatch, rtts=[])

    result = CliRunner().invoke(cli.cli, ["measure", "example.org"])

    assert result.exit_code == 0
    assert "NO STATS AVAILABLE" in result.output


def test_measure_invalid_host(monkeypatch):
    patch_jitterer(monkeypatch, fail=True)

    result = CliRunner().invoke(cli.cli, ["measure", "nowhere.invalid"])

    assert result.exit_code == 1
    assert "nowhere.invalid" in result.output


def test_measure_rejects_zero_timeout():
    result = CliRunner().invoke(cli.cli, ["measure", "example.org", "-t", "0"])

    assert result.exit_code == 2


def test_compute_from_arguments():
    result = CliRunner().invoke(cli.cli, ["compute", "10", "20", "30"])

    assert result.exit_code == 0, result.output
    assert "range    20.00ms" in result.output
    assert "corrected sd    10.00ms" in result.output


def test_compute_from_stdin():
    result = CliRunner().invoke(cli.cli, ["compute"], input="15\n")

    assert result.exit_code == 0, result.output
    assert "(1 samples)" in result.output


def test_compute_rejects_garbage():
    result = CliRunner().invoke(cli.cli, ["compute"], input="fast\n")

    assert result.exit_code == 2


def test_measure_unreachable_network(monkeypatch):
    factory = functools.partial(Pinger, session_factory=UnreachableSession)
    monkeypatch.setattr(cli, "Jitterer", functools.partial(Jitterer, prober_factory=factory))

    result = CliRunner().invoke(cli.cli, ["measure", "127.0.0.1", "-c", "2", "-t", "0.2", "-i", "10"])

    assert result.exit_code == 0, result.output
    assert "NO STATS AVAILABLE" in result.output
    assert "Loss:       100.0%" in result.output
