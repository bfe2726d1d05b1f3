# scripts/test_api.py
import json
import os
import time

import requests

BASE_URL = os.environ.get("TELEMETRY_API_URL", "http://localhost:8787")
INGEST_TOKEN = os.environ.get("INGEST_TOKEN", "")
MINER_ID = "smoke-test-miner"


def test_endpoint(method, url, params=None, data=None, headers=None):
    try:
        if method == "GET":
            response = requests.get(f"{BASE_URL}{url}", params=params, headers=headers)
        elif method == "POST":
            response = requests.post(f"{BASE_URL}{url}", params=params, json=data, headers=headers)
        else:
            response = requests.request(method, f"{BASE_URL}{url}", params=params, headers=headers)

        print(f"\n{method} {url}")
        print(f"Status: {response.status_code}")
        if response.status_code < 400:
            print(f"Response: {json.dumps(response.json(), indent=2)[:300] if response.content else '<empty>'}")
        else:
            print(f"Error: {response.text[:200]}")
        return response.status_code < 400
    except Exception as e:
        print(f"Exception: {e}")
        return False


if __name__ == "__main__":
    print("=== Тестирование API телеметрии ===")

    auth = {"Authorization": f"Bearer {INGEST_TOKEN}"}
    sample = {
        "miner_id": MINER_ID,
        "ts": int(time.time()),
        "temp": 55.2,
        "hashRate": 512.3,
        "hashRate_1m": 505.1,
        "fanrpm": 3850,
        "version": "smoke",
    }

    checks = [
        ("OPTIONS", "/ingest", None, None, None),
        ("GET", "/health", None, None, None),
        ("POST", "/ingest", None, sample, auth),
        ("GET", "/latest", {"miner_id": MINER_ID}, None, None),
        ("GET", "/range", {"miner_id": MINER_ID, "hours": 1}, None, None),
    ]

    all_ok = True
    for method, url, params, data, headers in checks:
        if not test_endpoint(method, url, params=params, data=data, headers=headers):
            all_ok = False

    if all_ok:
        print("\nВсе эндпоинты работают!")
    else:
        print("\nНекоторые эндпоинты не работают")
