# CareerCoach/explore_consultations.py

import argparse
import os
import sys

from utils.database import DB_PATH, SQLiteStore
from utils.consultation import COLLECTION

def get_consultations(store, owner_id=None):
    filters = {'owner_id': owner_id} if owner_id else None
    return store.find(COLLECTION, filters, order_by=('created_at', 'desc'))

def format_consultation(consultation):
    lines = [
        f"--- Consultation ID: {consultation['id']} ---",
        f"Owner: {consultation['owner_id']}",
        f"Topic: {consultation['topic']}",
        f"Status: {consultation['status']}",
        f"Created: {consultation['created_at']}, Updated: {consultation['updated_at']}",
        "Transcript:",
    ]
    for msg in consultation['messages']:
        lines.append(f"  {msg.get('role', '?').capitalize()}: {msg.get('content', '')}")
    return "\n".join(lines)

def main(argv=None):
    parser = argparse.ArgumentParser(description='Print stored consultations and their transcripts')
    parser.add_argument('--db', default=DB_PATH, help=f'SQLite database path (default: {DB_PATH})')
    parser.add_argument('--owner', help='Only show consultations for this owner id')
    args = parser.parse_args(argv)

    if not os.path.exists(args.db):
        print(f"Database not found at {args.db}")
        return 1

    store = SQLiteStore(args.db)
    consultations = get_consultations(store, args.owner)
    print(f"=== {len(consultations)} Consultations ===")
    for consultation in consultations:
        print()
        print(format_consultation(consultation))
    return 0

if __name__ == "__main__":
    sys.exit(main())
