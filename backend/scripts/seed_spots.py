#!/usr/bin/env python3
"""
Command-line script for seeding surf spot data.

Usage:
    python scripts/seed_spots.py [--dry-run] [--summary] [--region REGION]

Options:
    --dry-run     Show what would be created without actually creating
    --summary     Show summary of current spot data
    --region      Only seed spots in this region
"""

import argparse
import logging
import os
import sys

import boto3
from botocore.exceptions import ClientError

# Add the src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from services.spot_service import SpotService
from utils.config import SPOTS_TABLE
from utils.spot_loader import SpotLoader
from utils.spot_seeder import SpotSeeder

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_seeder() -> SpotSeeder:
    """Setup AWS services and spot seeder."""
    try:
        dynamodb = boto3.resource("dynamodb")
        logger.info(f"Using DynamoDB table: {SPOTS_TABLE}")
        return SpotSeeder(SpotService(dynamodb.Table(SPOTS_TABLE)))
    except ClientError as e:
        logger.error(f"AWS error: {e.response['Error']['Message']}")
        sys.exit(1)


def dry_run(region: str | None = None):
    """List the catalog spots that would be seeded."""
    logger.info("DRY RUN: Would create the following spots:")
    for spot in SpotLoader().get_spots(region):
        print(f"  - {spot.name} ({spot.spot_id})")
        print(
            f"    Region: {spot.region}, Break: {spot.break_type.value}, "
            f"Difficulty: {spot.difficulty.value}"
        )
        print(f"    Location: {spot.latitude}, {spot.longitude}")
        print()


def seed_spots(seeder: SpotSeeder, region: str | None = None):
    """Seed the spot data."""
    try:
        results = seeder.seed_spots(region)
    except Exception as e:
        logger.error(f"Failed to seed spots: {str(e)}")
        sys.exit(1)

    print("\n" + "=" * 50)
    print("SPOT SEEDING RESULTS")
    print("=" * 50)
    print(f"Spots created: {results['spots_created']}")
    print(f"Spots skipped: {results['spots_skipped']}")
    print(f"Errors: {len(results['errors'])}")

    if results["created_spots"]:
        print("\nCreated spots:")
        for spot_id in results["created_spots"]:
            print(f"  ✅ {spot_id}")

    if results["errors"]:
        print("\nErrors:")
        for error in results["errors"]:
            print(f"  ❌ {error}")

    print("\n" + "=" * 50)


def show_summary(seeder: SpotSeeder):
    """Show summary of current spot data."""
    try:
        summary = seeder.get_spot_summary()
    except Exception as e:
        logger.error(f"Failed to generate summary: {str(e)}")
        sys.exit(1)

    print("\n" + "=" * 50)
    print("SPOT DATA SUMMARY")
    print("=" * 50)
    print(f"Total spots: {summary['total_spots']}")

    if summary["spots_by_region"]:
        print("\nBy Region:")
        for region, count in sorted(summary["spots_by_region"].items()):
            print(f"  {region}: {count} spot{'s' if count != 1 else ''}")

    if summary["spots_by_difficulty"]:
        print("\nBy Difficulty:")
        for difficulty, count in sorted(summary["spots_by_difficulty"].items()):
            print(f"  {difficulty}: {count} spot{'s' if count != 1 else ''}")

    print("\n" + "=" * 50)


def main():
    parser = argparse.ArgumentParser(description="Seed surf spot data")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be created without actually creating",
    )
    parser.add_argument(
        "--summary", action="store_true", help="Show summary of current spot data"
    )
    parser.add_argument("--region", help="Only seed spots in this region")
    args = parser.parse_args()

    if args.dry_run:
        dry_run(args.region)
        return

    seeder = setup_seeder()
    if args.summary:
        show_summary(seeder)
    else:
        seed_spots(seeder, args.region)


if __name__ == "__main__":
    main()
