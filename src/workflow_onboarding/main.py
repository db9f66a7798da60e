from __future__ import annotations

import sys

from workflow_onboarding.interface.cli import main as cli_main


def main() -> None:
    """Run the onboarding audit and exit with its status."""
    sys.exit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
