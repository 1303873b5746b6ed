#!/usr/bin/env python3
"""
End-to-end smoke test for the Image Storage API.

Prerequisites:
    1. API running with R2 (or MinIO) credentials configured
    2. AUTH_USERNAME / AUTH_PASSWORD exported if Basic Auth is enabled

Usage:
    python scripts/e2e_demo.py

    # Against another host, with a custom image:
    python scripts/e2e_demo.py --base-url http://localhost:9000 --file cat.png

    # Keep the uploaded object instead of deleting it:
    python scripts/e2e_demo.py --keep
"""

import argparse
import json
import os
import sys
from pathlib import Path

import httpx

# Configuration
API_BASE = os.getenv("API_BASE", "http://localhost:8080")
# 1x1 transparent PNG
SAMPLE_PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c63f8cfc0f01f0005000201e221bc33"
    "0000000049454e44ae426082"
)


def check_health(client: httpx.Client, base: str) -> bool:
    """Check if API is running."""
    try:
        resp = client.get(f"{base}/")
        return resp.status_code == 200
    except httpx.RequestError:
        return False


def check_readiness(client: httpx.Client, base: str) -> dict:
    """Check readiness of the storage backend."""
    try:
        resp = client.get(f"{base}/health/ready")
        return resp.json()
    except httpx.RequestError as e:
        return {"error": str(e)}


def upload_image(client: httpx.Client, base: str, name: str, content: bytes) -> dict:
    files = {"image": (name, content, "image/png")}
    resp = client.post(f"{base}/api/images/upload", files=files)
    resp.raise_for_status()
    return resp.json()


def list_all_pages(client: httpx.Client, base: str, page_size: int = 100) -> list[str]:
    """Walk GET /api/images with limit/cursor until has_more is false."""
    keys: list[str] = []
    cursor = ""
    while True:
        resp = client.get(f"{base}/api/images", params={"limit": page_size, "cursor": cursor})
        resp.raise_for_status()
        page = resp.json()
        keys.extend(page["images"])
        if not page["has_more"]:
            return keys
        cursor = page["next_cursor"]


def main():
    parser = argparse.ArgumentParser(description="E2E smoke test for the Image Storage API")
    parser.add_argument("--base-url", default=API_BASE, help="API base URL")
    parser.add_argument("--file", "-f", type=Path, help="Path to an image file")
    parser.add_argument("--keep", action="store_true", help="Do not delete the uploaded image")
    parser.add_argument("--json", action="store_true", help="Output raw JSON of the upload")
    args = parser.parse_args()

    base = args.base_url.rstrip("/")
    if args.file:
        if not args.file.exists():
            print(f"Error: image not found: {args.file}")
            sys.exit(1)
        name, content = args.file.name, args.file.read_bytes()
    else:
        name, content = "e2e-pixel.png", SAMPLE_PNG

    auth = None
    if os.getenv("AUTH_USERNAME") and os.getenv("AUTH_PASSWORD"):
        auth = (os.environ["AUTH_USERNAME"], os.environ["AUTH_PASSWORD"])

    print("=" * 60)
    print("IMAGE STORAGE API - E2E SMOKE TEST")
    print("=" * 60)

    with httpx.Client(timeout=30.0, auth=auth) as client:
        print("\n[1/6] Checking API health...")
        if not check_health(client, base):
            print("  Error: API is not responding.")
            sys.exit(1)
        print("  API is running")

        print("\n[2/6] Checking storage readiness...")
        readiness = check_readiness(client, base)
        if readiness.get("status") != "ok":
            print(f"  Error: storage not ready: {readiness}")
            sys.exit(1)
        print("  storage: OK")

        print(f"\n[3/6] Uploading {name} ({len(content)} bytes)")
        try:
            uploaded = upload_image(client, base, name, content)
        except httpx.HTTPStatusError as e:
            print(f"  Error uploading: {e.response.text}")
            sys.exit(1)
        key = uploaded["key"]
        print(f"  Key: {key}")
        print(f"  Presigned URL: {'yes' if uploaded.get('url') else 'no'}")

        print("\n[4/6] Downloading and comparing bytes...")
        resp = client.get(f"{base}/api/images/{key}")
        if resp.status_code != 200 or resp.content != content:
            print(f"  Error: download mismatch (status {resp.status_code})")
            sys.exit(1)
        print(f"  Identical, content-type {resp.headers.get('content-type')}")

        print("\n[5/6] Listing images (paginated)...")
        keys = list_all_pages(client, base)
        print(f"  {len(keys)} images, ours {'found' if key in keys else 'MISSING'}")
        if key not in keys:
            sys.exit(1)

        if args.keep:
            print("\n[6/6] Skipping delete (--keep)")
        else:
            print("\n[6/6] Deleting and confirming 404...")
            client.delete(f"{base}/api/images/{key}").raise_for_status()
            status = client.get(f"{base}/api/images/{key}").status_code
            if status != 404:
                print(f"  Error: expected 404 after delete, got {status}")
                sys.exit(1)
            print("  Deleted")

    print("\n" + "=" * 60)
    print("ALL ENDPOINTS TESTED SUCCESSFULLY!")
    print("=" * 60)

    if args.json:
        print(json.dumps(uploaded, indent=2))

    sys.exit(0)


if __name__ == "__main__":
    main()
