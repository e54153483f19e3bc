"""
Database initialization and seeding.

This script:
- Creates the parcel table
- Can reset the database (drop and recreate)
- Optionally adds random sample parcels for development/testing

Usage:
    # Create tables
    python -m parceltrack.database.init_db

    # Reset database (drops all tables and recreates)
    python -m parceltrack.database.init_db --reset

    # Add 20 sample parcels, reproducibly
    python -m parceltrack.database.init_db --sample-data 20 --seed 42
"""

import argparse
import random
from typing import Optional

from sqlalchemy import func

from parceltrack.config import settings
from parceltrack.core.constants import LIFECYCLE_ORDER
from parceltrack.core.logging import configure_logging, logger
from parceltrack.database.session import create_all_tables, drop_all_tables, engine, get_db_context
from parceltrack.models import Parcel
from parceltrack.repositories import ParcelRepository

SAMPLE_STREETS = (
    "Baker st.",
    "Abbey Road",
    "Nevsky prospekt",
    "Rue de Rivoli",
    "Main st.",
)


def create_tables(reset: bool = False) -> None:
    """
    Create all database tables.

    Args:
        reset: If True, drop existing tables first
    """
    if reset:
        print("Dropping existing tables...")
        drop_all_tables(engine)
        logger.warning("tables_dropped", database_url=settings.database_url)

    print("Creating database tables...")
    create_all_tables(engine)
    logger.info("tables_created", database_url=settings.database_url)


def make_sample_parcel(rng: random.Random, clients: int = 5) -> Parcel:
    """Build one random parcel from an explicit generator."""
    return Parcel(
        client=rng.randint(1, clients),
        status=rng.choice(LIFECYCLE_ORDER),
        address=f"{rng.choice(SAMPLE_STREETS)} {rng.randint(1, 300)}",
    )


def seed_sample_data(count: int, rng: random.Random) -> None:
    """
    Seed random parcels for development and testing.

    Args:
        count: Number of parcels to insert
        rng: Generator used for every random choice
    """
    print(f"\nSeeding {count} sample parcels...")

    with get_db_context() as db:
        repo = ParcelRepository(db)
        for _ in range(count):
            number = repo.add(make_sample_parcel(rng))
            print(f"  {repo.get(number)}")

    print("Sample data seeded")


def print_database_status() -> None:
    """Print parcel counts per status."""
    print("\n" + "=" * 60)
    print("Database Status")
    print("=" * 60)

    with get_db_context() as db:
        rows = (
            db.query(Parcel.status, func.count(Parcel.number))
            .group_by(Parcel.status)
            .order_by(Parcel.status)
            .all()
        )
        total = sum(count for _, count in rows)
        print(f"  Parcels: {total}")
        for status, count in rows:
            print(f"    {status:<12} {count}")

    print("=" * 60)


def initialize_database(reset: bool = False, sample_data: int = 0, seed: Optional[int] = None) -> None:
    """
    Initialize the database.

    Args:
        reset: Drop existing tables before creating
        sample_data: Number of random parcels to add
        seed: Seed for the sample data generator
    """
    create_tables(reset=reset)

    if sample_data:
        seed_sample_data(sample_data, random.Random(seed))

    print_database_status()


def main(argv=None):
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the parcel database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m parceltrack.database.init_db
  python -m parceltrack.database.init_db --reset
  python -m parceltrack.database.init_db --sample-data 20 --seed 42
        """
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--sample-data",
        type=int,
        default=0,
        metavar="N",
        help="Add N random parcels for development/testing"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the sample data generator"
    )

    parser.add_argument(
        "--yes",
        action="store_true",
        help="Do not ask for confirmation on --reset"
    )

    args = parser.parse_args(argv)
    configure_logging()

    if args.reset and not args.yes:
        print("WARNING: This will DELETE ALL DATA in the database!")
        response = input("Are you sure? Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("Aborted")
            return

    initialize_database(reset=args.reset, sample_data=args.sample_data, seed=args.seed)


if __name__ == "__main__":
    main()
