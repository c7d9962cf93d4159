"""Entry point for the PeerTube to NIP-71 converter."""

from __future__ import annotations

import sys

from peertube_nip71.cli import main

if __name__ == "__main__":
    sys.exit(main())
