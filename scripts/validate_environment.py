#!/usr/bin/env python3
"""Validate local SmartServe environment readiness."""

from __future__ import annotations

import importlib
import shutil
import sys
import tempfile
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.repository.data_repository import SAMPLE_HISTORY, DataRepository
from backend.services.forecast_service import FoodForecastService
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True
    temp_dir = tempfile.mkdtemp(prefix="smartserve-env-")

    # CHECK 1: Python version >= 3.11
    if sys.version_info >= (3, 11):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.11",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("numpy", "numpy"),
        ("pandas", "pandas"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    from importlib.metadata import PackageNotFoundError, version

    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            version(dist_name)
        except (ImportError, PackageNotFoundError) as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    try:
        validation_settings = replace(
            get_settings(),
            database_path=Path(temp_dir) / "smartserve_validation.db",
        )
        repository = DataRepository(validation_settings)

        # CHECK 3: Database initialization
        try:
            repository.initialize_database()
            ok, line = _print_result("Database initialization", True)
        except RuntimeError as exc:
            ok, line = _print_result("Database initialization", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 4: Sample history seeding
        try:
            seeded = repository.seed_sample_history_if_empty()
            if seeded != len(SAMPLE_HISTORY):
                raise RuntimeError(f"expected {len(SAMPLE_HISTORY)} rows, got {seeded}")
            ok, line = _print_result("Sample history", True, f": {seeded} rows")
        except RuntimeError as exc:
            ok, line = _print_result("Sample history", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 5: Reference forecast (100 guests, Holiday Party, Families, no history)
        try:
            service = FoodForecastService(repository=repository, settings=validation_settings)
            result = service.predict_food_preparation(
                [],
                "Holiday Party",
                "Families",
                100,
                persist=False,
            )
            if (result.predicted_quantity, result.waste_reduction_potential) != (148, 52):
                raise RuntimeError(f"expected (148, 52), got {result.to_dict()}")
            ok, line = _print_result(
                "Reference forecast",
                True,
                f": predicted={result.predicted_quantity} "
                f"waste_reduction={result.waste_reduction_potential}",
            )
        except (RuntimeError, ValueError) as exc:
            ok, line = _print_result("Reference forecast", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    print(SEPARATOR_LINE)
    print(" SmartServe Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
