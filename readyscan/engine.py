"""Scan orchestration: run detectors, aggregate, score, build the report."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from readyscan.aggregator import aggregate
from readyscan.config import Config
from readyscan.exceptions import ScanInputError
from readyscan.models import CATEGORY_ORDER, Category, DetectorResult, ScanReport
from readyscan.rules import SECRET_RULES, build_custom_rules
from readyscan.scanners import SCANNERS, BaseScanner, SecretScanner
from readyscan.scoring import calculate_score
from readyscan.walker import SKIP_DIRS

logger = logging.getLogger(__name__)


def validate_root(target: str) -> Path:
    root = Path(target)
    if not root.exists():
        raise ScanInputError(target, "path does not exist")
    if not root.is_dir():
        raise ScanInputError(target, "not a directory")
    if not os.access(root, os.R_OK | os.X_OK):
        raise ScanInputError(target, "directory is not readable")
    return root


def build_scanners(config: Config) -> dict[Category, BaseScanner]:
    """Instantiate the enabled detectors, keyed by the category they report."""
    skip_dirs = SKIP_DIRS | frozenset(config.exclude_dirs)
    scanners: dict[Category, BaseScanner] = {}
    for name in config.enabled_scanners:
        scanner_cls = SCANNERS[name]
        if scanner_cls is SecretScanner:
            rules = SECRET_RULES + build_custom_rules(config.custom_secret_patterns)
            scanner = SecretScanner(rules=rules, skip_dirs=skip_dirs)
        else:
            scanner = scanner_cls(skip_dirs=skip_dirs)
        scanners[scanner.category] = scanner
    return scanners


def run_scan(target: str, config: Config | None = None) -> ScanReport:
    """Scan ``target`` and return the full readiness report.

    Raises ScanInputError when the root cannot be scanned. Anything that goes
    wrong with individual files is absorbed by the detectors.
    """
    config = config or Config()
    validate_root(target)
    scanners = build_scanners(config)

    # Detectors share no state; the pool is joined before aggregation.
    with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
        futures = {
            category: pool.submit(scanner._timed_scan, target)
            for category, scanner in scanners.items()
        }
        results = {category: future.result() for category, future in futures.items()}

    for category in CATEGORY_ORDER:
        if category not in results:
            results[category] = DetectorResult(category=category, target=target)
            continue
        result = results[category]
        logger.info(
            "%s: %d issue(s) in %.2fs", scanners[category].name, result.count, result.duration_seconds
        )

    aggregation = aggregate(
        results[Category.SECRETS],
        results[Category.DEPENDENCIES],
        results[Category.PII],
        results[Category.PROMPT_INJECTION],
        target,
        skip_dirs=SKIP_DIRS | frozenset(config.exclude_dirs),
    )
    score = calculate_score(aggregation.all_issues)
    logger.info("Readiness score for %s: %d (%s)", target, score.score, score.label)

    return ScanReport(
        target=target,
        total_files=aggregation.total_files,
        all_issues=aggregation.all_issues,
        file_breakdown=aggregation.file_breakdown,
        categories=aggregation.categories,
        score=score,
    )
