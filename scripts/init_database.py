"""
Database initialization script.

Loads geography reference data, staff and citizens from CSV files into the
database. Run this once before starting the API server.

Expected files:
    GEOGRAPHY_CSV_DIR/regions.csv     code,name
    GEOGRAPHY_CSV_DIR/provinces.csv   code,name,region_code
    GEOGRAPHY_CSV_DIR/lgus.csv        code,name,province_code
    GEOGRAPHY_CSV_DIR/barangays.csv   code,name,province_code,lgu_code
    STAFF_CSV_PATH                    id,username,first_name,last_name,position,status,
                                      province_code,lgu_code (one row per assignment)
    CITIZENS_CSV_PATH                 last_name,first_name,middle_name,extension_name,
                                      birth_date,sex,province_code,lgu_code,barangay_code,
                                      status,payment_date,osca_id,rrn,remarks
"""
import os
import sys
import argparse
import pandas as pd
from tqdm import tqdm
import logging

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from app.database import SessionLocal, init_db
from app.models import Citizen, Region, Province, Lgu, Barangay, Staff, StaffAssignment, AuditLog, EcaApplication
from app.services.audit import log_audit
from app.utils.constants import CITIZEN_STATUSES, SEXES, STAFF_POSITIONS, STAFF_STATUSES
from app.utils.date_utils import parse_date_string, validate_birth_date

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

GEOGRAPHY_FILES = [
    ("regions.csv", Region, ["code", "name"]),
    ("provinces.csv", Province, ["code", "name", "region_code"]),
    ("lgus.csv", Lgu, ["code", "name", "province_code"]),
    ("barangays.csv", Barangay, ["code", "name", "province_code", "lgu_code"]),
]


def clean_string(value) -> str:
    """Clean string values."""
    if pd.isna(value):
        return None
    value = str(value).strip()
    return value or None


def clean_date(value):
    """Parse a CSV date cell; blank cells are None."""
    if pd.isna(value) or str(value).strip() == "":
        return None
    parsed = parse_date_string(value)
    if parsed is None:
        logger.warning(f"Could not parse date: {value}")
    return parsed


def read_csv(path: str) -> pd.DataFrame:
    # Codes keep their leading zeros
    return pd.read_csv(path, dtype=str, keep_default_na=True)


def load_geography(db, csv_dir: str, batch_size: int = 5000) -> dict:
    """Load regions, provinces, LGUs and barangays."""
    counts = {}

    for filename, model, columns in GEOGRAPHY_FILES:
        path = os.path.join(csv_dir, filename)
        if not os.path.exists(path):
            logger.warning(f"  {filename} not found in {csv_dir}, skipping")
            counts[model.__tablename__] = 0
            continue

        logger.info(f"  Processing: {filename}")
        df = read_csv(path)
        missing = [c for c in columns if c not in df.columns]
        if missing:
            logger.error(f"  {filename} is missing columns: {missing}")
            counts[model.__tablename__] = 0
            continue

        df = df.dropna(subset=["code", "name"]).drop_duplicates(subset=["code"])

        records = []
        total = 0
        for _, row in tqdm(df.iterrows(), total=len(df), desc=f"    {model.__tablename__}"):
            records.append(model(**{c: clean_string(row.get(c)) for c in columns}))

            if len(records) >= batch_size:
                db.bulk_save_objects(records)
                db.commit()
                total += len(records)
                records = []

        if records:
            db.bulk_save_objects(records)
            db.commit()
            total += len(records)

        counts[model.__tablename__] = total
        logger.info(f"  Loaded {total} {model.__tablename__}")

    return counts


def load_staff(db, csv_path: str) -> int:
    """Load staff members and their province/LGU assignments."""
    if not os.path.exists(csv_path):
        logger.warning(f"Staff file not found: {csv_path}")
        return 0

    logger.info("Loading staff...")
    df = read_csv(csv_path)
    staff_by_id = {}

    for _, row in tqdm(df.iterrows(), total=len(df), desc="    Staff"):
        staff_id = clean_string(row.get("id"))
        position = clean_string(row.get("position"))
        if staff_id is None or position not in STAFF_POSITIONS:
            logger.warning(f"  Skipping staff row {staff_id}: invalid position {position}")
            continue

        staff_status = clean_string(row.get("status")) or "Active"
        if staff_status not in STAFF_STATUSES:
            staff_status = "Inactive"

        staff = staff_by_id.get(staff_id)
        if staff is None:
            staff = Staff(
                id=staff_id,
                username=clean_string(row.get("username")) or staff_id,
                first_name=clean_string(row.get("first_name")) or "",
                last_name=clean_string(row.get("last_name")) or "",
                position=position,
                status=staff_status,
            )
            staff_by_id[staff_id] = staff
            db.add(staff)

        province_code = clean_string(row.get("province_code"))
        if province_code:
            staff.assignments.append(StaffAssignment(
                province_code=province_code,
                lgu_code=clean_string(row.get("lgu_code")),
            ))

    db.commit()
    logger.info(f"Loaded {len(staff_by_id)} staff members")
    return len(staff_by_id)


def citizen_from_row(row):
    """Build a Citizen from a CSV row, or None if the row is unusable."""
    birth_date = clean_date(row.get("birth_date"))
    if birth_date is None:
        return None
    is_valid, error_msg = validate_birth_date(birth_date)
    if not is_valid:
        logger.warning(f"  Skipping {row.get('last_name')}: {error_msg}")
        return None

    sex = clean_string(row.get("sex"))
    if sex not in SEXES:
        return None

    status = clean_string(row.get("status")) or "Encoded"
    if status not in CITIZEN_STATUSES:
        logger.warning(f"  Unknown status {status}, using Encoded")
        status = "Encoded"

    last_name = clean_string(row.get("last_name"))
    first_name = clean_string(row.get("first_name"))
    province_code = clean_string(row.get("province_code"))
    lgu_code = clean_string(row.get("lgu_code"))
    barangay_code = clean_string(row.get("barangay_code"))
    if not all([last_name, first_name, province_code, lgu_code, barangay_code]):
        return None

    return Citizen(
        last_name=last_name,
        first_name=first_name,
        middle_name=clean_string(row.get("middle_name")),
        extension_name=clean_string(row.get("extension_name")),
        birth_date=birth_date,
        sex=sex,
        province_code=province_code,
        lgu_code=lgu_code,
        barangay_code=barangay_code,
        status=status,
        payment_date=clean_date(row.get("payment_date")),
        osca_id=clean_string(row.get("osca_id")),
        rrn=clean_string(row.get("rrn")),
        remarks=clean_string(row.get("remarks")),
        encoded_by="init_database",
    )


def load_citizens(db, csv_path: str, batch_size: int = 5000) -> int:
    """Load citizen registrations."""
    if not os.path.exists(csv_path):
        logger.warning(f"Citizens file not found: {csv_path}")
        return 0

    logger.info("Loading citizens...")
    df = read_csv(csv_path)

    records = []
    total_records = 0
    skipped = 0
    for _, row in tqdm(df.iterrows(), total=len(df), desc="    Rows"):
        citizen = citizen_from_row(row)
        if citizen is None:
            skipped += 1
            continue
        records.append(citizen)

        if len(records) >= batch_size:
            db.bulk_save_objects(records)
            db.commit()
            total_records += len(records)
            records = []

    if records:
        db.bulk_save_objects(records)
        db.commit()
        total_records += len(records)

    log_audit(db, action="bulk_import", table_name="citizens",
              details={"source": os.path.basename(csv_path), "loaded": total_records, "skipped": skipped})
    db.commit()

    logger.info(f"Loaded {total_records} citizens ({skipped} skipped)")
    return total_records


def clear_data(db):
    for model in [AuditLog, EcaApplication, Citizen, StaffAssignment, Staff, Barangay, Lgu, Province, Region]:
        db.query(model).delete()
    db.commit()


def main():
    """Main initialization function."""
    parser = argparse.ArgumentParser(description="Load ECA tracker data from CSV files")
    parser.add_argument("--reset", action="store_true", help="Clear existing data before loading")
    args = parser.parse_args()

    print("=" * 60)
    print(f"{settings.PROJECT_NAME} - Database Initialization")
    print("=" * 60)

    print("\nInitializing database...")
    init_db()
    print(f"  Database: {settings.database_url}")

    db = SessionLocal()

    try:
        existing = db.query(Citizen).count()
        if existing > 0 and not args.reset:
            print(f"\nDatabase already contains {existing} citizens. Use --reset to reload.")
            return
        if args.reset:
            print("  Clearing existing data...")
            clear_data(db)

        print("\nLoading data from CSV files...")
        print("-" * 40)

        geography_counts = load_geography(db, settings.GEOGRAPHY_CSV_DIR)
        staff_count = load_staff(db, settings.STAFF_CSV_PATH)
        citizen_count = load_citizens(db, settings.CITIZENS_CSV_PATH)

        print("\n" + "=" * 60)
        print("Database initialization complete!")
        print("-" * 40)
        for table, count in geography_counts.items():
            print(f"  {table}: {count:,}")
        print(f"  staff: {staff_count:,}")
        print(f"  citizens: {citizen_count:,}")
        print("=" * 60)
        print("\nYou can now start the API server with: python run.py")

    except Exception as e:
        logger.error(f"Error during initialization: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
