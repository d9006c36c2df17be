"""Protean Engine runner for the Shipping domain.

Starts an Engine worker that processes events asynchronously, invoking the
cargo tracking projector and the cargo-side event handlers (delivery
progress and inspection) outside the request cycle. Only meaningful when
the active environment processes events asynchronously (``production``).

Usage:
    python src/server.py                  # Run with the current PROTEAN_ENV
    python src/server.py --env production # Select the config overlay
"""

import argparse
import os

from protean.server.engine import Engine


def _get_domain():
    """Import and initialize the shipping domain, seeding reference data."""
    from shipping.domain import shipping
    from shipping.reference_data import seed_reference_data
    from shipping.utils.logging import configure_logging

    configure_logging()
    shipping.init()
    with shipping.domain_context():
        seed_reference_data()
    return shipping


def run():
    engine = Engine(_get_domain())
    engine.run()


def main():
    parser = argparse.ArgumentParser(description="Shipping Engine runner")
    parser.add_argument(
        "--env",
        help="Config environment to run with (sets PROTEAN_ENV)",
    )
    args = parser.parse_args()

    if args.env:
        os.environ["PROTEAN_ENV"] = args.env

    run()


if __name__ == "__main__":
    main()
