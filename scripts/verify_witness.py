#!/usr/bin/env python3
"""Standalone witness proof verifier.

Usage:
    python verify_witness.py --api-url https://... --witness-event-id WIT_xxx --hash <digest>

Walks the Merkle proof of a page or file verification hash depth by depth,
recomputing every successor locally, and checks that the walk ends at the
witness event's recorded root.

Dependencies: requests (pip install requests)
"""
from __future__ import annotations

import argparse
import hashlib
import sys

import requests


def combine(left: str, right: str) -> str:
    return hashlib.sha3_512((left + right).encode("utf-8")).hexdigest()


def fetch_event(base: str, witness_event_id: str) -> dict:
    resp = requests.get(f"{base}/data_accounting/v1/witness/{witness_event_id}", timeout=30)
    if resp.status_code != 200:
        print(f"FAIL: Could not fetch witness event (HTTP {resp.status_code}): {resp.text}")
        sys.exit(1)
    return resp.json()


def fetch_node(base: str, witness_event_id: str, digest: str, depth: int) -> dict | None:
    resp = requests.get(
        f"{base}/data_accounting/v1/standard/request_merkle_proof",
        params={"var1": witness_event_id, "var2": digest, "var3": str(depth)},
        timeout=30,
    )
    if resp.status_code == 404:
        return None
    if resp.status_code != 200:
        print(f"FAIL: Proof request failed (HTTP {resp.status_code}): {resp.text}")
        sys.exit(1)
    nodes = resp.json()["nodes"]
    return nodes[0] if nodes else None


def main() -> None:
    parser = argparse.ArgumentParser(description="Verify a Merkle proof against a witness event")
    parser.add_argument("--api-url", required=True, help="Verification API base URL")
    parser.add_argument("--witness-event-id", required=True)
    parser.add_argument("--hash", required=True, help="Page or file verification hash")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed output")
    args = parser.parse_args()

    base = args.api_url.rstrip("/")

    event = fetch_event(base, args.witness_event_id)
    recorded_root = event["recorded_root"]
    if args.verbose:
        print(f"  recorded_root: {recorded_root}")
        print(f"  max_depth:     {event['max_depth']}")

    current = args.hash
    depth = 0
    while True:
        node = fetch_node(base, args.witness_event_id, current, depth)
        if node is None:
            print(f"FAIL: No proof node for {current[:16]}.. at depth {depth}")
            sys.exit(1)

        successor = combine(node["left_leaf"], node["right_leaf"])
        if args.verbose:
            print(f"  depth {depth}: {node['left_leaf'][:16]}.. + {node['right_leaf'][:16]}.. -> {successor[:16]}..")
        if successor != node["successor"]:
            print(f"FAIL: Stored successor at depth {depth} does not match its leaves")
            sys.exit(1)

        current = successor
        if current == recorded_root:
            break
        depth += 1

    print("✓ Merkle path valid, recomputed root matches the recorded root")
    print()
    print("PASS: Hash is verifiably included in the witness event.")


if __name__ == "__main__":
    main()
