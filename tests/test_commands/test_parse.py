from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner

from depflat.cli import cli
from depflat.utils import logger as logger_module

NPM_OUTPUT = """demo@1.0.0 /srv/demo
├─┬ express@4.18.2
│ └── debug@2.6.9
├── debug@2.6.9 deduped
└── UNMET DEPENDENCY left-pad@^1.3.0
"""


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    yield
    root_logger = logging.getLogger("depflat")
    root_logger.handlers.clear()
    root_logger.propagate = True
    logger_module._logging_configured = False


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DEPFLAT_CONFIG", raising=False)
    monkeypatch.setenv("NO_COLOR", "")
    return CliRunner()


@pytest.mark.integration
class TestParseCommand:
    def test_flat_listing_from_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["parse", "-m", "package-lock.json", "-f", "simple"],
            input=NPM_OUTPUT,
        )

        assert result.exit_code == 0, result.output
        assert result.output.strip().splitlines() == [
            "debug@2.6.9 transitive dependency",
            "express@4.18.2 transitive dependency",
        ]

    def test_tree_listing_from_file(self, runner: CliRunner, tmp_path: Path) -> None:
        listing = tmp_path / "yarn.txt"
        listing.write_text(
            "yarn list v1.22.19\n├─ @scope/pkg@1.0.0\n└─ chalk@~4.1.0\n",
            encoding="utf-8",
        )

        result = runner.invoke(
            cli,
            ["parse", "-m", "yarn.lock", "--listing", str(listing), "-f", "json"],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert len(payload) == 1
        assert payload[0]["name"] == "@scope/pkg"
        assert payload[0]["purl"] == "pkg:npm/%40scope/pkg@1.0.0"

    def test_header_only_listing_is_empty(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["parse", "-m", "yarn.lock", "-f", "json"], input="yarn list v1\n"
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == []

    def test_shrinkwrap_uses_sibling_manifest(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        lockfile = tmp_path / "npm-shrinkwrap.json"
        lockfile.write_text(
            json.dumps(
                {
                    "dependencies": {
                        "a": {"version": "1.0.0"},
                        "b": {"version": "2.0.0", "dev": True},
                    }
                }
            ),
            encoding="utf-8",
        )
        (tmp_path / "package.json").write_text(
            json.dumps({"devDependencies": {"b": "2.0.0"}}), encoding="utf-8"
        )

        result = runner.invoke(
            cli,
            [
                "parse",
                "-m",
                "npm-shrinkwrap.json",
                "--lockfile",
                str(lockfile),
                "-f",
                "simple",
            ],
        )

        assert result.exit_code == 0, result.output
        assert result.output.strip().splitlines() == [
            "a@1.0.0 transitive dependency",
            "b@2.0.0 direct devDependency",
        ]

    def test_shrinkwrap_requires_lockfile(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "-m", "npm-shrinkwrap.json"])

        assert result.exit_code == 2
        assert "--lockfile is required" in result.output

    def test_invalid_lockfile_exits_one(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        lockfile = tmp_path / "npm-shrinkwrap.json"
        lockfile.write_text("{not json", encoding="utf-8")

        result = runner.invoke(
            cli, ["parse", "-m", "npm-shrinkwrap.json", "--lockfile", str(lockfile)]
        )

        assert result.exit_code == 1

    def test_malformed_lockfile_sections_are_ignored(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        lockfile = tmp_path / "npm-shrinkwrap.json"
        lockfile.write_text(json.dumps({"dependencies": ["a", "b"]}), encoding="utf-8")
        manifest = tmp_path / "package.json"
        manifest.write_text(json.dumps({"dependencies": ["a"]}), encoding="utf-8")

        result = runner.invoke(
            cli,
            [
                "parse",
                "-m",
                "npm-shrinkwrap.json",
                "--lockfile",
                str(lockfile),
                "-f",
                "json",
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == []

    def test_unknown_manifest_type_is_usage_error(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "-m", "pnpm-lock.yaml"], input="")

        assert result.exit_code == 2
