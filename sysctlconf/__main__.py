"""Module entrypoint for running sysctlconf as ``python -m sysctlconf``."""

from __future__ import annotations

from sysctlconf.cli import main


if __name__ == "__main__":
    main()
