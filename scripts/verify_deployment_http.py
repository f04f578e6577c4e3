#!/usr/bin/env python3
"""
Black Box Verification Script for a Live Deployment.

This script sends real HTTP requests to a running Transcript Cleaner API and
checks the health probe, CORS preflight, a cleaning round trip and the
missing-transcript error.

Usage:
    python scripts/verify_deployment_http.py <BASE_URL>

Example:
    python scripts/verify_deployment_http.py http://localhost:8000
"""
import sys
from datetime import datetime

import httpx

SAMPLE_TRANSCRIPT = (
    "# Kind: captions\n"
    "https://www.youtube.com/watch?v=example\n"
    "00:00:01.000 Hello everyone\n"
    "00:00:02.500 [Music]\n"
    "00:00:04.000 welcome back to the channel\n"
)
EXPECTED_TEXT = "Hello everyone welcome back to the channel"


def log(message: str):
    """Log with timestamp."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[{timestamp}] {message}")


def check(condition: bool, description: str) -> bool:
    log(f"  {'PASS' if condition else 'FAIL'}: {description}")
    return condition


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/verify_deployment_http.py <BASE_URL>")
        print("Example: python scripts/verify_deployment_http.py http://localhost:8000")
        sys.exit(1)

    base_url = sys.argv[1].rstrip("/")

    log("=" * 60)
    log("BLACK BOX VERIFICATION - Transcript Cleaner API")
    log("=" * 60)
    log(f"Target URL: {base_url}")

    results = []
    try:
        with httpx.Client(base_url=base_url, timeout=30.0) as client:
            log("\n--- Step 1: Health Check ---")
            response = client.get("/health")
            results.append(check(response.status_code == 200, f"GET /health -> {response.status_code}"))
            results.append(check(response.json().get("status") == "healthy", "status is healthy"))

            log("\n--- Step 2: CORS Preflight ---")
            response = client.options("/")
            results.append(check(response.status_code == 200, f"OPTIONS / -> {response.status_code}"))
            results.append(check(
                response.headers.get("Access-Control-Allow-Origin") == "*",
                "Access-Control-Allow-Origin is *"
            ))

            log("\n--- Step 3: Clean Transcript ---")
            response = client.post("/", json={"transcript": SAMPLE_TRANSCRIPT})
            results.append(check(response.status_code == 200, f"POST / -> {response.status_code}"))
            data = response.json()
            log(f"  Response: {data}")
            results.append(check(data.get("cleaned_text") == EXPECTED_TEXT, "cleaned_text matches"))
            results.append(check(data.get("original_length") == len(SAMPLE_TRANSCRIPT), "original_length matches"))

            log("\n--- Step 4: Missing Transcript ---")
            response = client.post("/", json={"video_url": "https://example.com/video"})
            results.append(check(response.status_code == 400, f"POST / without transcript -> {response.status_code}"))
            results.append(check(
                response.json() == {"error": "Transcript is required"},
                "error body matches"
            ))
    except httpx.HTTPError as e:
        log(f"ERROR: request failed: {type(e).__name__}: {e}")
        sys.exit(1)

    log("\n" + "=" * 60)
    if all(results):
        log(f"VERIFICATION PASSED ({len(results)} checks)")
        sys.exit(0)
    log(f"VERIFICATION FAILED ({results.count(False)} of {len(results)} checks failed)")
    sys.exit(1)


if __name__ == "__main__":
    main()
