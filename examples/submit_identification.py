#!/usr/bin/env python3
"""
Identification form example - end-to-end against the configured sink.

Fills the identification form, shows the per-field errors as they
change, then submits and prints the outcome notification.

Usage:
    python examples/submit_identification.py

    IDFORM_SUBMIT_URL=http://localhost:8000/post python examples/submit_identification.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from idform import FormEngine, HttpSubmissionSink, SubmissionLifecycle, TableStore, fetch_users

EDITS = [
    ("userInfo.firstName", "Juan"),
    ("userInfo.middleName", "Perez"),
    ("userInfo.curp", "XXXX"),
    ("userInfo.curp", "GOMC800101HDFRRRA9"),
    ("userInfo.rfc", "GOMC800101ABC"),
    ("address.street", "Av. Reforma 100"),
    ("address.zipCode", "123456"),
    ("address.zipCode", "64000"),
    ("address.externalNumber", "123"),
    ("address.state", "NL"),
    ("address.province", "Monterrey"),
    ("address.neighborhood", "Centro"),
]


async def main():
    logging.basicConfig(level=logging.INFO)

    table = TableStore()
    await table.refresh(fetch_users)
    print(f"Loaded {len(table)} users")
    for row in table.toggle_sort("id")[:3]:
        print(f"   {row.id:>3}  {row.name:<25} {row.email}")

    lifecycle = SubmissionLifecycle(HttpSubmissionSink(), display_duration_ms=500)
    lifecycle.add_listener(lambda state: print(f"[{state.phase.value}] {state.message}"))
    engine = FormEngine(lifecycle=lifecycle)

    for path, value in EDITS:
        engine.set_field(path, value)
        error = engine.get_error(path) or "ok"
        print(f"{path:<25} {value!r:<22} -> {error}  (submittable: {engine.is_submittable()})")

    await engine.submit()
    # Let the notification auto-dismiss
    await asyncio.sleep(0.6)


if __name__ == "__main__":
    asyncio.run(main())
