#!/usr/bin/env python3
"""Local CLI entrypoint to scan a checkout.

Usage:
  python scripts/scan.py --root . [--summary] [--verbose] [--trace]
"""

from __future__ import annotations

from pnpm_workspace.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
