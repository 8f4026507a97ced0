#!/usr/bin/env python3
"""Thin compatibility entrypoint for the touchbar toolbar."""

from __future__ import annotations

from touchbar_core.app import main


if __name__ == "__main__":
    raise SystemExit(main())
