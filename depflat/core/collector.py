"""Collection of dependency data from a project workspace.

:class:`DependencyCollector` is the I/O side of depflat: it runs the
package manager that owns the workspace, reads the lockfile and manifest
it needs from disk, and hands everything to
:class:`~depflat.core.resolver.DependencyResolver`.

Success rules per manifest type:

- ``yarn.lock`` / ``package-lock.json``: ``yarn list`` / ``npm list`` must
  print something on stdout and nothing on stderr.
- ``npm-shrinkwrap.json``: ``npm shrinkwrap`` must print on stdout, or
  mention the shrinkwrap file on stderr (npm reports the file it wrote
  there); the written lockfile and ``package.json`` are then read.

Each command is executed exactly once; there is no retry.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from depflat.models import PackageRecord
from depflat.core.resolver import DependencyResolver
from depflat.utils.logger import get_logger
from depflat.utils.filesystem import read_json_file
from depflat.utils.shell import CommandRunner, run_command
from depflat.exceptions import CommandError, UnsupportedManifestError
from depflat.constants import (
    MANIFEST_COMMANDS,
    NPM_SHRINKWRAP_JSON,
    PACKAGE_JSON,
    PACKAGE_LOCK_JSON,
    SUPPORTED_MANIFEST_TYPES,
    YARN_LOCK,
)

logger = get_logger("collector")


def detect_manifest_type(workspace_root: Union[str, Path]) -> Optional[str]:
    """Return the first supported lockfile found in ``workspace_root``.

    Detection order is ``yarn.lock``, ``npm-shrinkwrap.json``,
    ``package-lock.json``.
    """
    root = Path(workspace_root)
    for manifest_type in SUPPORTED_MANIFEST_TYPES:
        if (root / manifest_type).is_file():
            logger.debug("Detected %s in %s", manifest_type, root)
            return manifest_type
    return None


class DependencyCollector:
    """Runs package-manager tooling in a workspace and resolves its output.

    Args:
        workspace_root: Project directory holding ``package.json``.
        runner: Command runner; defaults to :func:`run_command`.
        resolver: Resolver used for parsing; a default one is created if
            omitted.
        timeout: Per-command timeout in seconds, or ``None``.
    """

    def __init__(
        self,
        workspace_root: Union[str, Path],
        *,
        runner: CommandRunner = run_command,
        resolver: Optional[DependencyResolver] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.workspace_root = Path(workspace_root)
        self.runner = runner
        self.resolver = resolver or DependencyResolver()
        self.timeout = timeout

    def collect(self, manifest_type: str) -> List[PackageRecord]:
        """Collect the normalized dependency list for ``manifest_type``.

        Raises:
            UnsupportedManifestError: No command exists for the selector.
            CommandError: The package manager failed.
            FileOperationError: The lockfile or manifest could not be read.
        """
        if manifest_type in (YARN_LOCK, PACKAGE_LOCK_JSON):
            output = self._run_listing(MANIFEST_COMMANDS[manifest_type])
            return self.resolver.resolve(manifest_type, output=output)

        if manifest_type == NPM_SHRINKWRAP_JSON:
            self._run_shrinkwrap()
            tree = read_json_file(self.workspace_root / NPM_SHRINKWRAP_JSON)
            manifest = read_json_file(self.workspace_root / PACKAGE_JSON)
            return self.resolver.resolve(
                manifest_type, tree=tree, manifest=manifest
            )

        raise UnsupportedManifestError(manifest_type)

    # ------------------------------------------------------------------
    # Command handling (private)
    # ------------------------------------------------------------------

    def _run(self, command: str):
        logger.info("Running %s in %s", command, self.workspace_root)
        return self.runner(command, cwd=self.workspace_root, timeout=self.timeout)

    def _run_listing(self, command: str) -> str:
        result = self._run(command)

        if result.stdout != "" and result.stderr == "":
            return result.stdout

        raise CommandError(
            f"Error running {command}",
            command=command,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    def _run_shrinkwrap(self) -> None:
        command = MANIFEST_COMMANDS[NPM_SHRINKWRAP_JSON]
        result = self._run(command)

        if result.stdout or NPM_SHRINKWRAP_JSON in result.stderr:
            return

        raise CommandError(
            f"Unable to run {command}",
            command=command,
            returncode=result.returncode,
            stderr=result.stderr,
        )
