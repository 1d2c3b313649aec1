"""Console script entry point with production wiring.

Lives at package level so the composition root is wired into the CLI
adapter without the adapter importing composition itself.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the ``poodle`` console script with production services."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
