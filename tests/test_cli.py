"""Tests for the latest command line interface."""

import json
from unittest.mock import patch

import pytest

import latest
from args import parse_args
from cli_config import Config
from constants import Constants
from install_hints import install_commands
from versioning.models import LookupMode, PackageResult, Status, VersionInfo

INSTALLED = VersionInfo(version="24.0.0", source="path", local=True)
LATEST = VersionInfo(version="25.0.0", source="brew")


class FakeService:
    """Stands in for LookupService; answers from a table keyed by package."""

    results = {}
    last = None

    def __init__(self, cache=None, use_cache=True, max_workers=None, max_packages=None):
        self.use_cache = use_cache
        self.max_packages = max_packages
        self.requests = []
        FakeService.last = self

    def lookup_many(self, requests):
        self.requests = list(requests)
        return [self.results.get(r.package, PackageResult.not_found(r.package)) for r in self.requests]


@pytest.fixture
def fake_service(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(latest, "LookupService", FakeService)
    monkeypatch.setattr(latest, "configure_logging", lambda level=None, log_file=None: None)
    monkeypatch.setattr(latest, "load_config", lambda path=None: Config(precedence=["path", "brew", "npm"]))
    FakeService.results = {}
    FakeService.last = None
    return FakeService


def run_cli(argv):
    with pytest.raises(SystemExit) as exc:
        latest.main(argv)
    return exc.value.code


class TestParseArgs:
    """Flag parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.packages == []
        assert args.SOURCE is None
        assert not (args.ALL or args.JSON or args.QUIET or args.NO_CACHE)
        assert args.LOG_LEVEL is None

    def test_flags(self):
        args = parse_args(["node", "git", "-s", "brew", "-a", "-j", "-q", "--no-cache",
                           "-c", "cfg.yml", "--loglevel", "debug", "--logfile", "x.log"])
        assert args.packages == ["node", "git"]
        assert args.SOURCE == "brew"
        assert args.ALL and args.JSON and args.QUIET and args.NO_CACHE
        assert args.CONFIG == "cfg.yml"
        assert args.LOG_LEVEL == "DEBUG"
        assert args.LOG_FILE == "x.log"


class TestBuildRequests:
    """Source and mode selection per package."""

    def test_prefix_pins_source(self, fake_service):
        reqs = latest.build_requests(parse_args(["npm:react", "node"]), ["npm:react", "node"])

        assert reqs[0].package == "react"
        assert reqs[0].mode == LookupMode.EXPLICIT
        assert [s.name for s in reqs[0].sources] == ["npm"]
        assert reqs[1].mode == LookupMode.DEFAULT
        assert [s.name for s in reqs[1].sources] == ["path", "brew", "npm"]

    def test_source_flag_overrides_prefix(self, fake_service):
        reqs = latest.build_requests(parse_args(["-s", "cargo", "npm:serde"]), ["npm:serde"])
        assert [s.name for s in reqs[0].sources] == ["cargo"]
        assert reqs[0].package == "serde"

    def test_all_flag(self, fake_service):
        reqs = latest.build_requests(parse_args(["-a", "node"]), ["node"])
        assert reqs[0].mode == LookupMode.ALL

    def test_unknown_source(self, fake_service):
        with pytest.raises(latest.UsageError):
            latest.build_requests(parse_args(["-s", "bogus", "x"]), ["x"])


class TestMain:
    """End-to-end runs with lookups faked."""

    def test_up_to_date_text(self, fake_service, capsys):
        fake_service.results = {"node": PackageResult.up_to_date("node", LATEST)}

        assert run_cli(["node"]) == 0
        assert capsys.readouterr().out == "25.0.0  ✓\n"

    def test_outdated_text_and_exit_code(self, fake_service, capsys):
        fake_service.results = {"node": PackageResult.outdated("node", INSTALLED, LATEST)}

        assert run_cli(["node"]) == 2
        assert capsys.readouterr().out == "24.0.0 → 25.0.0 available\n"

    def test_multiple_packages_prefixed(self, fake_service, capsys):
        fake_service.results = {
            "node": PackageResult.up_to_date("node", LATEST),
            "git": PackageResult.outdated("git", INSTALLED, LATEST),
        }

        assert run_cli(["node", "git", "ghost"]) == 1
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["node: 25.0.0  ✓", "git: 24.0.0 → 25.0.0 available"]
        assert "ghost: not found" in captured.err

    def test_not_installed_lists_install_commands(self, fake_service, capsys):
        npm = VersionInfo(version="5.0.0", source="npm")
        fake_service.results = {"express": PackageResult.not_installed("express", [npm])}

        assert run_cli(["express"]) == 1
        err = capsys.readouterr().err
        assert "not installed (available: 5.0.0 in npm)" in err
        assert "  npm install -g express" in err

    def test_json_single_object(self, fake_service, capsys):
        fake_service.results = {"node": PackageResult.outdated("node", INSTALLED, LATEST)}

        assert run_cli(["node", "--json"]) == 2
        data = json.loads(capsys.readouterr().out)
        assert data == {
            "package": "node",
            "status": "outdated",
            "installed": {"version": "24.0.0", "source": "path", "local": True},
            "latest": {"version": "25.0.0", "source": "brew"},
        }

    def test_json_array_with_install_commands(self, fake_service, capsys):
        npm = VersionInfo(version="5.0.0", source="npm")
        fake_service.results = {
            "node": PackageResult.up_to_date("node", LATEST),
            "express": PackageResult.not_installed("express", [npm]),
        }

        run_cli(["node", "express", "-j"])
        data = json.loads(capsys.readouterr().out)
        assert [d["status"] for d in data] == ["up_to_date", "not_installed"]
        assert data[1]["install_commands"] == ["npm install -g express"]
        assert "install_commands" not in data[0]

    def test_quiet(self, fake_service, capsys):
        fake_service.results = {"node": PackageResult.outdated("node", INSTALLED, LATEST)}

        run_cli(["node", "-q"])
        assert capsys.readouterr().out == "24.0.0\n"

    def test_quiet_multiple(self, fake_service, capsys):
        fake_service.results = {"node": PackageResult.up_to_date("node", LATEST)}

        run_cli(["node", "ghost", "-q"])
        captured = capsys.readouterr()
        assert captured.out == "node: 25.0.0\n"
        assert captured.err == "not found: ghost\n"

    def test_quiet_all_uses_first_available(self, fake_service, capsys):
        fake_service.results = {"node": PackageResult.found("node", [INSTALLED, LATEST])}

        assert run_cli(["node", "-q", "-a"]) == 0
        captured = capsys.readouterr()
        assert captured.out == "24.0.0\n"
        assert captured.err == ""

    def test_all_listing(self, fake_service, capsys):
        fake_service.results = {"node": PackageResult.found("node", [INSTALLED, LATEST])}

        assert run_cli(["node", "--all"]) == 0
        assert capsys.readouterr().out.splitlines() == ["path: 24.0.0 (installed)", "brew: 25.0.0"]
        assert fake_service.last.requests[0].mode == LookupMode.ALL

    def test_unknown_source_exits_1(self, fake_service, capsys):
        assert run_cli(["x", "--source", "bogus"]) == 1
        assert capsys.readouterr().err.strip() == "Unknown source: bogus"
        assert fake_service.last is None

    def test_no_cache_flag(self, fake_service):
        fake_service.results = {"node": PackageResult.up_to_date("node", LATEST)}
        run_cli(["node", "--no-cache"])
        assert fake_service.last.use_cache is False

    def test_package_parallelism_bounded(self, fake_service):
        fake_service.results = {"node": PackageResult.up_to_date("node", LATEST)}
        run_cli(["node"])
        assert fake_service.last.max_packages == Constants.MAX_PARALLEL_PACKAGES

    def test_no_project_file(self, fake_service, capsys):
        assert run_cli([]) == 1
        assert "No project file found" in capsys.readouterr().err

    def test_scans_project(self, fake_service, tmp_path, capsys):
        (tmp_path / "package.json").write_text(json.dumps({"dependencies": {"react": "19"}}))
        fake_service.results = {"react": PackageResult.up_to_date("react", VersionInfo("19.0.0", "npm"))}

        assert run_cli([]) == 0
        captured = capsys.readouterr()
        assert "Scanning package.json..." in captured.err
        req = fake_service.last.requests[0]
        assert req.mode == LookupMode.EXPLICIT
        assert [s.name for s in req.sources] == ["npm"]

    def test_scan_announcement_suppressed_for_json(self, fake_service, tmp_path, capsys):
        (tmp_path / "package.json").write_text(json.dumps({"dependencies": {"react": "19"}}))
        run_cli(["--json"])
        assert "Scanning" not in capsys.readouterr().err


class TestExitCode:
    """Exit code precedence."""

    def test_codes(self):
        up = PackageResult.up_to_date("a", LATEST)
        old = PackageResult.outdated("b", INSTALLED, LATEST)
        gone = PackageResult.not_found("c")
        assert latest.exit_code([up]) == 0
        assert latest.exit_code([up, old]) == 2
        assert latest.exit_code([old, gone]) == 1
        assert latest.exit_code([]) == 0

    def test_status_values(self):
        assert {s.value for s in Status} == {"up_to_date", "outdated", "not_installed", "not_found"}


class TestInstallCommands:
    """Suggestions depend on project markers."""

    AVAILABLE = [
        VersionInfo("1.0", "brew"),
        VersionInfo("1.0", "npm"),
        VersionInfo("1.0", "pip"),
        VersionInfo("1.0", "cargo"),
        VersionInfo("1.0", "go"),
        VersionInfo("1.0", "gem"),
    ]

    def test_global_forms(self, tmp_path):
        assert install_commands("tool", self.AVAILABLE, str(tmp_path)) == [
            "brew install tool",
            "npm install -g tool",
            "pip install tool",
            "cargo install tool",
            "go install tool",
        ]

    def test_project_forms(self, tmp_path):
        for marker in ("package.json", "uv.lock", "Cargo.toml", "go.mod"):
            (tmp_path / marker).write_text("")
        assert install_commands("tool", self.AVAILABLE, str(tmp_path))[1:] == [
            "npm install tool",
            "uv add tool",
            "cargo add tool",
            "go get tool",
        ]


@patch("latest.configure_logging")
def test_main_configures_logging(mock_configure, fake_service):
    fake_service.results = {"node": PackageResult.up_to_date("node", LATEST)}
    run_cli(["node", "--loglevel", "INFO", "--logfile", "out.log"])
    mock_configure.assert_called_once_with("INFO", "out.log")
