"""
`python -m xcode_capabilities` entrypoint.

This is mainly for convenience; the installed console script
`unity-xcode-capabilities` calls the same `xcode_capabilities.cli:main`.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
