#!/usr/bin/env python3
"""
RPS-Cam Test Suite Runner

Runs the pytest suite by category:
- Unit tests for the camera side (rps_cam) and the deep learning side (rps_dl)
- Integration tests wiring the live loop, predictor and sample buffer together
"""

import os
import subprocess
import sys
from pathlib import Path

# Get project paths
project_root = Path(__file__).parent
src_path = project_root / "src"

TEST_CATEGORIES = {
    "Preprocessing": "tests/test_preprocess.py",
    "RPS Camera": "tests/unit/rps_cam/",
    "RPS DL": "tests/unit/rps_dl/",
    "Camera-DL Integration": "tests/integration/",
}


def run_category(name: str, test_path: str) -> str:
    target = project_root / test_path
    if not target.exists():
        print(f"⚠️  Test category not found: {name}")
        return "MISSING"

    print(f"\n📋 Running {name}...")

    # Set environment variables
    env = os.environ.copy()
    env['PYTHONPATH'] = str(src_path)

    cmd = [sys.executable, "-m", "pytest", str(target), "-v", "--tb=short"]
    result = subprocess.run(cmd, env=env, cwd=project_root, capture_output=True, text=True)

    if result.returncode == 0:
        print(f"✅ {name} - PASSED")
        return "PASSED"

    print(f"❌ {name} - FAILED")
    print("Error output:")
    print(result.stdout)
    if result.stderr:
        print(result.stderr)
    return "FAILED"


def create_test_report(results) -> bool:
    """Print a summary and report whether everything passed."""
    print("\n" + "=" * 80)
    print("🎯 TEST REPORT")
    print("=" * 80)

    for name, result in results.items():
        status_icon = "✅" if result == "PASSED" else "❌" if result == "FAILED" else "⚠️"
        print(f"  {status_icon} {name}: {result}")

    passed = sum(1 for result in results.values() if result == "PASSED")
    print(f"\n📈 {passed}/{len(results)} categories passed")
    return passed == len(results)


def main():
    """Main test runner function."""
    print("🚀 RPS-Cam Test Suite")
    print("=" * 80)

    results = {name: run_category(name, path) for name, path in TEST_CATEGORIES.items()}
    sys.exit(0 if create_test_report(results) else 1)


if __name__ == "__main__":
    main()
