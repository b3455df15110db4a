"""Prepare a machine to run the blog search checks.

- Installs the package with its test extra (optional).
- Downloads only the browser the configured launch settings use
  (bundled Chromium, or ``BLOGQA_CHROMIUM_CHANNEL`` such as ``chrome``).
- Creates the report and log directories.
"""
from __future__ import annotations

import argparse
import subprocess
import sys


def run(cmd: list[str]) -> None:
    """Run a command and stream output."""
    print(f"$ {' '.join(cmd)}")
    subprocess.run(cmd, check=True)


def install_browsers(targets: list[str], with_deps: bool = False) -> None:
    cmd = [sys.executable, "-m", "patchright", "install", *targets]
    if with_deps:
        cmd.append("--with-deps")
    run(cmd)


def main() -> None:
    parser = argparse.ArgumentParser(description="Prepare the blog search checks")
    parser.add_argument(
        "--with-deps",
        action="store_true",
        help="Also install the browser's system libraries (Linux CI)",
    )
    parser.add_argument(
        "--skip-deps",
        action="store_true",
        help="Skip pip install -e .[dev] if the package is already installed",
    )
    parser.add_argument(
        "--browser",
        action="append",
        default=[],
        metavar="NAME",
        help="Extra browser to install next to the configured one (repeatable)",
    )
    args = parser.parse_args()

    if not args.skip_deps:
        run([sys.executable, "-m", "pip", "install", "-e", ".[dev]"])

    # Imported late: the package may only have been installed by the step above.
    from blog_search_qa.config.settings import Settings

    settings = Settings()
    targets = [settings.browser_install_target()]
    targets += [name for name in args.browser if name not in targets]
    install_browsers(targets, with_deps=args.with_deps)

    settings.ensure_directories()
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    print(f"Ready: browsers={', '.join(targets)} reports={settings.report_dir} logs={settings.log_dir}")


if __name__ == "__main__":
    main()
