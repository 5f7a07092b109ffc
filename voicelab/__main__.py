"""Module entrypoint for running voicelab as ``python -m voicelab``."""

from __future__ import annotations

from voicelab.cli import main


if __name__ == "__main__":
    main()
