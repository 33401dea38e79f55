#!/usr/bin/env python3
"""
Source-checkout entrypoint.

Allows running the tool without installing it:
  python3 xcode_capabilities.py -p <exported-xcode-dir>
"""

import os
import sys

# Support running from a source checkout without installation by adding `src/`
# to sys.path.
_HERE = os.path.dirname(os.path.abspath(__file__))
_SRC = os.path.join(_HERE, "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

# Behave like a package shim when imported as `xcode_capabilities`, so the
# real package under `src/xcode_capabilities/` is not shadowed.
__path__ = [os.path.join(_SRC, "xcode_capabilities")]


def main(argv: list[str] | None = None) -> int:
    from xcode_capabilities.cli import main as _main

    return _main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
