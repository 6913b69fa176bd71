"""
Seed script to populate Firestore with the example treatment guides and conditions.
Run: python scripts/seed_data.py

Writes with Admin SDK credentials, so store rules do not apply. Without
credentials the documents are written as JSON files for manual import.
"""

import json
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.config import get_settings  # noqa: E402
from app.services.seed import CONDITIONS, TREATMENT_GUIDES, seed_example_data  # noqa: E402
from app.store.events import PERMISSION_ERROR, ErrorBus  # noqa: E402
from app.store.policy import AuthContext  # noqa: E402
from app.store.writes import WritePipeline  # noqa: E402
from app.utils.logger import configure_logging  # noqa: E402

SEED_USER = AuthContext(uid="seed-script", is_admin=True)


def seed_firestore() -> bool:
    """
    Seed Firestore with the example documents.

    Returns:
        False if no credentials are available
    """
    from app.services.firebase.auth_service import get_firebase_service

    cred_path = get_settings().firebase_credentials_path
    if not cred_path or not os.path.exists(cred_path):
        print(f"Firebase credentials not found at {cred_path or '(unset)'}")
        return False

    db = get_firebase_service(cred_path).firestore_client()
    bus = ErrorBus()
    bus.on(PERMISSION_ERROR, lambda error: print(f"  ! {error.operation.value} {error.path} failed"))

    counts = seed_example_data(WritePipeline(db, bus), SEED_USER)
    print(f"\nSuccessfully added {counts['successCount']} of {counts['totalDocs']} documents.")
    return True


def seed_to_json() -> None:
    """Fallback: output seed data as JSON files for manual import."""
    output_dir = os.path.join(os.path.dirname(__file__), "..", "seed_output")
    os.makedirs(output_dir, exist_ok=True)

    for name, items in (("treatmentGuides", TREATMENT_GUIDES), ("conditions", CONDITIONS)):
        with open(os.path.join(output_dir, f"{name}.json"), "w") as f:
            json.dump(items, f, indent=2)
        print(f"Wrote {len(items)} docs to seed_output/{name}.json")

    print(f"\nJSON seed files saved to: {output_dir}/")
    print("Import these into Firestore using the Firebase Console or CLI.")


if __name__ == "__main__":
    configure_logging(debug=False)
    print("=" * 50)
    print("PhysioCare Seed Data")
    print("=" * 50)
    print()
    if not seed_firestore():
        print("Falling back to JSON output mode...")
        seed_to_json()
