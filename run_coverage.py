"""
Coverage runner for node_launch.
Runs the test suite and writes terminal, HTML and XML coverage reports.
"""

import subprocess
import sys
from pathlib import Path


def run_coverage():
    """Run tests with coverage and generate reports."""
    cmd = [
        sys.executable,
        "-m",
        "pytest",
        "tests",
        "--cov=node_launch",
        "--cov-report=term-missing",
        "--cov-report=html",
        "--cov-report=xml",
    ]

    project_dir = Path(__file__).resolve().parent
    result = subprocess.run(cmd, check=False, cwd=str(project_dir))
    if result.returncode != 0:
        sys.exit(result.returncode)

    html_path = project_dir / "htmlcov" / "index.html"
    if html_path.exists():
        print(f"HTML report: {html_path}")


if __name__ == "__main__":
    run_coverage()
