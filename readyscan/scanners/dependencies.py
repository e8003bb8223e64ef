"""Dependency risk scanner: hallucinated, compromised and unpinned packages."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from readyscan.models import Category, DetectorResult, Issue, Severity, make_snippet
from readyscan.rules.dependencies import (
    DEPENDENCY_REGISTRY,
    NPM,
    PYPI,
    RISKY_CODE_EXTENSIONS,
    UNPINNED_VERSIONS,
    DependencyRegistry,
)
from readyscan.scanners.base import BaseScanner, match_lines
from readyscan.walker import (
    SKIP_DIRS,
    extension_filter,
    filename_filter,
    read_lines,
    relative_path,
    walk_files,
)

logger = logging.getLogger(__name__)

REGISTRY_SITES = {NPM: "npmjs.com", PYPI: "pypi.org"}
PIN_EXAMPLES = {NPM: '"^1.2.3"', PYPI: '"==1.2.3"'}
_PERSONAS = ("dev", "security")


@dataclass(frozen=True)
class Dependency:
    name: str
    version: str
    snippet: str


def _parse_package_json(path: Path) -> list[Dependency]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("package.json must contain a JSON object")
    merged: dict = {}
    for group in ("dependencies", "devDependencies", "peerDependencies"):
        deps = data.get(group)
        if isinstance(deps, dict):
            merged.update(deps)
    return [Dependency(name, str(version), f'"{name}": "{version}"') for name, version in merged.items()]


def _normalize_pypi(name: str) -> str:
    return re.sub(r"[-_.]+", "-", name).lower()


def _parse_requirements_txt(path: Path) -> list[Dependency]:
    packages = []
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or line.startswith("-") or "://" in line:
            continue
        match = re.match(r"([A-Za-z0-9][A-Za-z0-9_.\-]*)\s*(?:\[[^\]]*\])?\s*([^;]*)", line)
        if not match:
            continue
        version = match.group(2).strip() or "*"
        packages.append(Dependency(_normalize_pypi(match.group(1)), version, line))
    return packages


MANIFEST_PARSERS = {
    "package.json": (NPM, _parse_package_json),
    "requirements.txt": (PYPI, _parse_requirements_txt),
}


class DependencyScanner(BaseScanner):
    name = "dependencies"
    category = Category.DEPENDENCIES

    def __init__(self, registry: DependencyRegistry = DEPENDENCY_REGISTRY, skip_dirs: frozenset[str] = SKIP_DIRS):
        super().__init__(skip_dirs)
        self.registry = registry

    def scan(self, target: str) -> DetectorResult:
        result = DetectorResult(category=self.category, target=target)
        root = Path(target)
        if not root.exists():
            return result

        for manifest in walk_files(root, filename_filter(MANIFEST_PARSERS), self.skip_dirs):
            self._scan_manifest(manifest, root, result)

        accept = extension_filter(RISKY_CODE_EXTENSIONS)
        for filepath in walk_files(root, accept, self.skip_dirs):
            lines = read_lines(filepath)
            if lines is None:
                continue
            result.issues.extend(
                match_lines(lines, self.registry.risky_code, relative_path(filepath, root))
            )

        return result

    def _scan_manifest(self, manifest: Path, root: Path, result: DetectorResult) -> None:
        ecosystem, parser = MANIFEST_PARSERS[manifest.name]
        try:
            dependencies = parser(manifest)
        except (OSError, ValueError) as exc:
            # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors.
            logger.debug("Skipping malformed manifest %s: %s", manifest, exc)
            return

        relpath = relative_path(manifest, root)
        hallucinated = self.registry.hallucinated.get(ecosystem, frozenset())
        deprecated = self.registry.deprecated.get(ecosystem, {})

        for dep in dependencies:
            if dep.name in hallucinated:
                result.issues.append(self._issue(
                    f"Hallucinated Package: {dep.name}",
                    Severity.HIGH,
                    relpath,
                    dep,
                    f'Package "{dep.name}" appears to be a hallucinated/non-existent package. '
                    f"Verify it exists on {REGISTRY_SITES[ecosystem]} and replace with the correct package.",
                ))

            info = deprecated.get(dep.name)
            if info is not None:
                result.issues.append(
                    self._issue(f"Risky Package: {dep.name}", info.severity, relpath, dep, info.reason)
                )

            # Stacks with the findings above for the same package.
            if dep.version.strip() in UNPINNED_VERSIONS:
                result.issues.append(self._issue(
                    f"Unpinned Version: {dep.name}",
                    Severity.MEDIUM,
                    relpath,
                    dep,
                    f'Pin dependency "{dep.name}" to a specific version (e.g. {PIN_EXAMPLES[ecosystem]}) '
                    "to avoid supply chain attacks.",
                ))

    def _issue(self, name: str, severity: Severity, relpath: str, dep: Dependency, remediation: str) -> Issue:
        return Issue(
            type="dependency",
            category=self.category,
            name=name,
            severity=severity,
            file=relpath,
            line=None,
            snippet=make_snippet(dep.snippet),
            remediation=remediation,
            persona=_PERSONAS,
        )
