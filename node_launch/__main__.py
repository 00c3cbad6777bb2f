"""Launch configuration resolver, ``python -m node_launch``.

Reads a configuration from a JSON file (or stdin), resolves it the way an
editor would before starting a Node.js debug session and prints the result.
"""

import sys

from node_launch.cli import main

if __name__ == "__main__":
    sys.exit(main())
