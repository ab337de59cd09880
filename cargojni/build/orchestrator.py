"""
Multi-target build orchestration.

For every requested platform the orchestrator synthesizes a cargo command
and environment, runs ``cargo build``, and stages the resulting library from
cargo's target directory into ``<build_dir>/rustJniLibs/<folder>``.

Per target the state moves ``PENDING -> RUNNING -> SUCCEEDED | FAILED``.
A failing target never stops its siblings; the overall report fails if any
target failed.

Usage:
    from cargojni.build.orchestrator import BuildOrchestrator
    from cargojni.config import parse_config

    config = parse_config(Path("cargojni.yaml"))
    report = BuildOrchestrator(config).build_all(jobs=2)
    if not report.succeeded:
        print(report.summary())
"""

import logging
import os
import shlex
import subprocess
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from cargojni.build.command import CommandSynthesizer, needs_target_flag
from cargojni.build.environment import EnvironmentSynthesizer
from cargojni.build.linker_wrapper import LinkerWrapper
from cargojni.build.request import TargetBuildRequest
from cargojni.config.features import profile_dir_name
from cargojni.config.parser import CargoConfig
from cargojni.core.exceptions import (
    ArtifactStagingError,
    BuildError,
    MissingConfigurationError,
    SubprocessFailure,
)
from cargojni.core.filesystem import atomic_copy, ensure_directory, glob_files
from cargojni.core.platform import HostPlatform, detect_host_platform
from cargojni.toolchain.host import HostTripleDetector
from cargojni.toolchain.layout import ToolchainLayoutResolver
from cargojni.toolchain.ndk import NdkInfo, locate_ndk
from cargojni.toolchain.registry import TargetRegistry, default_registry

logger = logging.getLogger(__name__)

STAGING_DIRNAME = "rustJniLibs"


class BuildState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class BuildResult:
    """
    Outcome of one target's build.

    Attributes:
        request: The request that was built
        state: Current state
        exit_status: cargo's exit code (None if it never ran)
        staged_dir: Output folder the artifacts were copied into
        staged_files: Copied files
        output: Captured cargo output (only when output is captured)
        error: Failure reason for FAILED results
    """

    request: TargetBuildRequest
    state: BuildState = BuildState.PENDING
    exit_status: Optional[int] = None
    staged_dir: Optional[Path] = None
    staged_files: List[Path] = field(default_factory=list)
    output: str = ""
    error: Optional[BuildError] = None

    @property
    def platform(self) -> str:
        return self.request.platform

    @property
    def succeeded(self) -> bool:
        return self.state is BuildState.SUCCEEDED

    def fail(self, error: BuildError) -> "BuildResult":
        self.state = BuildState.FAILED
        self.error = error
        return self


@dataclass
class BuildReport:
    """Results of a multi-target build, in request order."""

    results: List[BuildResult] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(result.succeeded for result in self.results)

    @property
    def failed(self) -> List[BuildResult]:
        return [result for result in self.results if not result.succeeded]

    def summary(self) -> str:
        lines = []
        for result in self.results:
            if result.succeeded:
                lines.append(
                    f"  ✓ {result.platform}: {len(result.staged_files)} artifact(s) "
                    f"in {result.staged_dir}"
                )
            else:
                lines.append(f"  ✗ {result.platform}: {result.error}")
        ok = len(self.results) - len(self.failed)
        lines.insert(0, f"Built {ok}/{len(self.results)} target(s)")
        return "\n".join(lines)


@dataclass(frozen=True)
class PlannedCommand:
    """What would be run for a target (see BuildOrchestrator.dry_run)."""

    request: TargetBuildRequest
    command: List[str]
    environment: Dict[str, str]
    working_directory: Path


class BuildOrchestrator:
    """
    Build a configured crate for several platforms.

    The linker wrapper location is fixed when the orchestrator is created
    and shared by every target it builds.

    Args:
        config: Validated build description
        registry: Target registry (default: built-in platforms)
        host: Build host (default: detected)
    """

    def __init__(
        self,
        config: CargoConfig,
        registry: Optional[TargetRegistry] = None,
        host: Optional[HostPlatform] = None,
    ):
        self.config = config
        self.registry = registry or default_registry()
        self.host = host or detect_host_platform()
        self.linker_wrapper = LinkerWrapper.for_build_dir(config.build_dir, self.host)
        self.layout = ToolchainLayoutResolver(self.host)
        self.commands = CommandSynthesizer()
        self.environments = EnvironmentSynthesizer(self.layout, self.linker_wrapper)

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def plan(self, platforms: Optional[Iterable[str]] = None) -> List[TargetBuildRequest]:
        """
        Validate and create one request per platform.

        Nothing is written and no subprocess is started here, so a bad
        identifier or missing setting fails before any work.

        Args:
            platforms: Identifiers to build (default: configured targets)

        Raises:
            UnknownPlatformError: If an identifier is not registered
            MissingConfigurationError: If an API level or the NDK is missing
        """
        identifiers = list(platforms) if platforms else list(self.config.targets)
        entries = [self.registry.lookup(identifier) for identifier in identifiers]

        for entry in entries:
            if entry.platform not in self.config.api_levels:
                raise MissingConfigurationError(
                    "api_levels", f"missing entries for: {entry.platform}"
                )

        ndk: Optional[NdkInfo] = None
        if any(not entry.is_desktop for entry in entries):
            ndk = locate_ndk(
                self.config.properties,
                explicit_path=self.config.ndk_path,
                explicit_version=self.config.ndk_version,
                project_dir=self.config.project_dir,
            )
            if ndk is None:
                raise MissingConfigurationError(
                    "ndk",
                    "set ndk.path, ndk.dir in local.properties or ANDROID_NDK_HOME",
                )
            logger.debug(f"Using NDK {ndk.version} at {ndk.path}")

        config = self.config
        return [
            TargetBuildRequest(
                entry=entry,
                api_level=config.api_levels[entry.platform],
                libname=config.libname,
                module=config.module,
                project_dir=config.project_dir,
                build_dir=config.build_dir,
                cargo_target_dir=config.cargo_target_dir,
                ndk=ndk,
                profile=config.profile,
                features=config.features,
                rustup_channel=config.rustup_channel,
                extra_args=tuple(config.extra_cargo_build_arguments),
                environment=dict(config.environment),
                verbose=config.verbose,
                auto_configure_clang_sys=config.auto_configure_clang_sys,
                generate_build_id=config.generate_build_id,
                target_includes=(
                    tuple(config.target_includes)
                    if config.target_includes is not None
                    else None
                ),
                export_target_dir=config.cargo_target_dir_explicit,
                cargo_command=config.cargo_command,
                rustc_command=config.rustc_command,
                python_command=config.python_command,
            )
            for entry in entries
        ]

    def detect_host_triple(self) -> Optional[str]:
        return HostTripleDetector(self.config.rustc_command).detect()

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def cargo_output_dir(
        self, request: TargetBuildRequest, host_triple: Optional[str]
    ) -> Path:
        """
        Where cargo writes the target's artifacts.

        ``<target_dir>/<profile>`` for host builds, otherwise
        ``<target_dir>/<triple>/<profile>``, mirroring cargo's own layout.
        """
        target_dir = Path(request.cargo_target_dir)
        profile_dir = profile_dir_name(request.profile)
        if needs_target_flag(request.entry.target, host_triple):
            output = target_dir / request.entry.target / profile_dir
        else:
            output = target_dir / profile_dir
        if not output.is_absolute():
            output = Path(request.project_dir) / output
        return output.resolve()

    def output_dir(self, request: TargetBuildRequest) -> Path:
        """Public staging folder for the target."""
        return Path(request.build_dir) / STAGING_DIRNAME / request.entry.folder

    def build_environment(self, request: TargetBuildRequest) -> Dict[str, str]:
        """
        Variables cargojni sets for the target, without the inherited ones.

        ``CARGO_TARGET_DIR`` is only exported when the target directory was
        configured explicitly.
        """
        env = {}
        if request.export_target_dir:
            target_dir = Path(request.cargo_target_dir)
            if not target_dir.is_absolute():
                target_dir = Path(request.project_dir) / target_dir
            env["CARGO_TARGET_DIR"] = str(target_dir.resolve())
        env.update(self.environments.synthesize(request))
        return env

    def process_environment(self, request: TargetBuildRequest) -> Dict[str, str]:
        """Full environment for the cargo subprocess."""
        env = dict(os.environ)
        env.update(self.build_environment(request))
        return env

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build_target(
        self,
        request: TargetBuildRequest,
        host_triple: Optional[str],
        capture_output: bool = False,
    ) -> BuildResult:
        """
        Build and stage one target.

        Failures are recorded on the returned result, not raised.

        Args:
            request: Target to build
            host_triple: Host triple (None if unknown)
            capture_output: Capture cargo's output instead of streaming it
        """
        result = BuildResult(request=request, state=BuildState.RUNNING)
        platform = request.platform

        command = self.commands.synthesize(request, host_triple)
        cwd = self.commands.working_directory(request.module, request.project_dir)
        env = self.process_environment(request)

        logger.info(f"[{platform}] Building {request.entry.target} ({request.profile})")
        logger.debug(f"[{platform}] Running {shlex.join(command)} in {cwd}")

        try:
            completed = subprocess.run(
                command,
                cwd=cwd,
                env=env,
                check=False,
                capture_output=capture_output,
                text=True,
            )
        except OSError as e:
            logger.error(f"[{platform}] Failed to start {command[0]}: {e}")
            return result.fail(
                SubprocessFailure(
                    platform, 127, command, detail=f"failed to start {command[0]}: {e}"
                )
            )

        result.exit_status = completed.returncode
        if capture_output:
            result.output = (completed.stdout or "") + (completed.stderr or "")

        if completed.returncode != 0:
            logger.error(
                f"[{platform}] cargo build failed with exit code {completed.returncode}"
            )
            if result.output:
                logger.error(result.output.rstrip())
            return result.fail(SubprocessFailure(platform, completed.returncode, command))

        try:
            result.staged_files = self.stage(request, host_triple)
        except BuildError as e:
            logger.error(str(e))
            return result.fail(e)
        except Exception as e:
            logger.error(f"[{platform}] Failed to stage artifacts: {e}")
            return result.fail(BuildError(platform, f"failed to stage artifacts: {e}"))

        result.staged_dir = self.output_dir(request)
        result.state = BuildState.SUCCEEDED
        logger.info(
            f"[{platform}] Staged {len(result.staged_files)} artifact(s) "
            f"into {result.staged_dir}"
        )
        return result

    def stage(self, request: TargetBuildRequest, host_triple: Optional[str]) -> List[Path]:
        """
        Copy the target's libraries into its public output folder.

        Every file is fully copied (temp file + rename) before this returns.

        Returns:
            Staged file paths

        Raises:
            ArtifactStagingError: If cargo's output folder is missing or
                holds nothing matching the include patterns
            BuildError: If a pattern resolves outside the output folder
        """
        source = self.cargo_output_dir(request, host_triple)
        destination = self.output_dir(request)
        patterns = request.include_patterns()

        if not source.is_dir():
            raise ArtifactStagingError(request.platform, source, patterns)

        matches = glob_files(source, patterns)
        if not matches:
            raise ArtifactStagingError(request.platform, source, patterns)

        root = destination.resolve()
        copies = []
        for match in matches:
            target = destination / match.relative_to(source)
            if root not in target.resolve().parents:
                raise BuildError(
                    request.platform,
                    f"refusing to stage {match} outside {destination}",
                )
            copies.append((match, target))

        ensure_directory(destination)
        staged = []
        for match, target in copies:
            atomic_copy(match, target)
            logger.debug(f"[{request.platform}] {match} -> {target}")
            staged.append(target)
        return staged

    def build_all(
        self, platforms: Optional[Iterable[str]] = None, jobs: int = 1
    ) -> BuildReport:
        """
        Build every requested platform.

        Args:
            platforms: Identifiers to build (default: configured targets)
            jobs: Number of targets built in parallel

        Returns:
            BuildReport with one result per platform, in request order

        Raises:
            ConfigurationError: Before any build starts, for invalid input
        """
        requests = self.plan(platforms)

        if any(not request.entry.is_desktop for request in requests):
            self.linker_wrapper.install()

        host_triple = self.detect_host_triple()

        if jobs <= 1 or len(requests) <= 1:
            results = [self.build_target(request, host_triple) for request in requests]
        else:
            results = self._build_parallel(requests, host_triple, jobs)

        report = BuildReport(results)
        if report.succeeded:
            logger.info(report.summary())
        else:
            logger.error(report.summary())
        return report

    def _build_parallel(
        self, requests: List[TargetBuildRequest], host_triple: Optional[str], jobs: int
    ) -> List[BuildResult]:
        results: Dict[int, BuildResult] = {}

        with ThreadPoolExecutor(max_workers=min(jobs, len(requests))) as pool:
            futures = {
                pool.submit(self.build_target, request, host_triple, True): index
                for index, request in enumerate(requests)
            }
            for future in as_completed(futures):
                index = futures[future]
                request = requests[index]
                try:
                    results[index] = future.result()
                except Exception as e:
                    logger.error(f"[{request.platform}] build error: {e}")
                    results[index] = BuildResult(request=request).fail(
                        BuildError(request.platform, str(e))
                    )

        return [results[index] for index in range(len(requests))]

    def dry_run(self, platforms: Optional[Iterable[str]] = None) -> List[PlannedCommand]:
        """
        Plan every platform without running or installing anything.
        """
        requests = self.plan(platforms)
        host_triple = self.detect_host_triple()
        planned = []
        for request in requests:
            planned.append(
                PlannedCommand(
                    request=request,
                    command=self.commands.synthesize(request, host_triple),
                    environment=self.build_environment(request),
                    working_directory=self.commands.working_directory(
                        request.module, request.project_dir
                    ),
                )
            )
        return planned


__all__ = [
    "BuildState",
    "BuildResult",
    "BuildReport",
    "PlannedCommand",
    "BuildOrchestrator",
    "STAGING_DIRNAME",
]
