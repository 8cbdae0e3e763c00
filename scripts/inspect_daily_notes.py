#!/usr/bin/env python3
"""
Print how daily note payloads are interpreted for display.

Usage:
    python3 scripts/inspect_daily_notes.py                       # built-in samples
    python3 scripts/inspect_daily_notes.py path/to/export.json   # rows exported from daily_notes
"""

import sys
import os
import json
from pathlib import Path

# Add the parent directory to the sys.path to import app modules
sys.path.append(str(Path(__file__).parent.parent))

from app.services.note_interpreter import decode, interpret, summarize, StructuredPayload

SAMPLE_PAYLOADS = [
    json.dumps({
        "category": "behavior",
        "overallMood": "happy",
        "generalNotes": "Participated actively in morning circle time and helped a peer.",
        "priority": "low",
        "tags": ["positive behavior", "peer interaction"],
    }),
    json.dumps({
        "category": "social",
        "concernsChallenges": "Difficulty during transitions; visual schedule helped.",
        "parentContacted": True,
        "parentContactNotes": "Called mother after lunch.",
        "followUpNeeded": True,
        "followUpAssignee": "coordinator",
    }),
    "Speech therapy session focused on articulation exercises.",
    '{"category": "academic", "generalNotes": ',
    "",
]


def print_note(raw, fallback_category=None):
    payload = decode(raw)
    note = interpret(raw, fallback_category)

    kind = "structured" if isinstance(payload, StructuredPayload) else "plain text"
    print(f"\nPayload ({kind}): {raw[:80]!r}")
    print(f"  Preview: {summarize(note)}")
    for key, value in note.model_dump(by_alias=True).items():
        if value not in ("", [], False):
            print(f"  {key}: {value}")


def print_export(path):
    with open(path, "r") as f:
        rows = json.load(f)

    print(f"Interpreting {len(rows)} daily notes from {path}")
    for row in rows:
        print(f"\n=== Note {row.get('id')} | {row.get('student_name')} | {row.get('created_at')} ===")
        print_note(row.get("notes") or "", row.get("category"))


if __name__ == "__main__":
    if len(sys.argv) > 1:
        export_path = sys.argv[1]
        if os.path.exists(export_path):
            print_export(export_path)
        else:
            print(f"Error: File '{export_path}' not found.")
            sys.exit(1)
    else:
        print("=== Sample payloads ===")
        for raw in SAMPLE_PAYLOADS:
            print_note(raw, fallback_category="therapy")
