# test_cli_main.py
# SPDX-License-Identifier: MIT
from pathlib import Path

import pytest

from conftest import FakeEnumerator, make_package
from listlicenses.cli import runner as runner_mod
from listlicenses.cli.main import main
from listlicenses.core.config import ReportConfig
from listlicenses.core.errors import MissingPackageError


@pytest.fixture
def shared_license(gopath, mit_text, monkeypatch):
    make_package(gopath, "foo", {"LICENSE": mit_text})
    make_package(gopath, "foo/bar")
    make_package(gopath, "foo/baz")
    enumerator = FakeEnumerator(gopath, ["foo/bar", "foo/baz"])
    monkeypatch.setattr(runner_mod, "make_enumerator", lambda cfg: enumerator)
    return enumerator


def test_cli_groups_packages_sharing_a_license(shared_license, capsys):
    rc = main(["foo/..."])
    assert rc == 0
    assert capsys.readouterr().out == "foo  MIT License\n"
    assert shared_license.calls == [("deps", ("foo/...",))]


def test_cli_all_lists_every_package(shared_license, capsys):
    rc = main(["-a", "--csv", "foo/..."])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [
        "foo/bar,foo/LICENSE,MIT License",
        "foo/baz,foo/LICENSE,MIT License",
    ]


def test_cli_writes_consolidated_license_file(shared_license, mit_text, tmp_path: Path, capsys):
    target = tmp_path / "LICENSES.txt"
    rc = main(["--consolidated-license-file", str(target), "foo/..."])
    assert rc == 0
    capsys.readouterr()
    expected = b"---\nIndex: 0\nPackage: foo\nLicense:\n" + mit_text.encode("utf-8")
    assert target.read_bytes() == expected


def test_cli_reads_config_file(shared_license, tmp_path: Path, capsys):
    cfg = ReportConfig(packages=("foo/...",))
    cfg.output.format = "markdown"
    config_path = tmp_path / "config.json"
    cfg.to_json(config_path)

    rc = main(["-c", str(config_path)])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [
        "Package|License File|License",
        "---|---|---",
        "foo|foo/LICENSE|MIT License",
    ]


def test_cli_without_packages_fails(capsys):
    rc = main([])
    assert rc == 1
    assert "expect at least one package argument" in capsys.readouterr().err


def test_cli_reports_missing_package(gopath, monkeypatch, capsys):
    class Missing(FakeEnumerator):
        def list_packages_and_deps(self, pkgs):
            raise MissingPackageError('cannot find package "nope"')

    monkeypatch.setattr(runner_mod, "make_enumerator", lambda cfg: Missing(gopath, []))
    rc = main(["nope"])
    assert rc == 1
    assert 'cannot find package "nope"' in capsys.readouterr().err


def test_cli_rejects_unknown_log_level(shared_license, capsys):
    rc = main(["--log-level", "chatty", "foo/..."])
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Unknown log level: 'chatty'" in captured.err
