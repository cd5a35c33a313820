#!/usr/bin/env python3
"""
CodeDNA - Dependency Analytics Entry Point

Builds the internal dependency graph of a codebase and reports cycles,
centrality, clusters and risk hotspots.
"""

import sys

from codedna.main import main


if __name__ == "__main__":
    sys.exit(main())
