"""
Manual smoke runner for the guest stay Django endpoints.

Usage:
    python manage.py migrate && python manage.py runserver
    python scripts/smoke_http_api.py
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000
"""

from __future__ import annotations

import argparse
import json
import uuid
from urllib import error, request


def _call(
    *,
    method: str,
    url: str,
    body: dict | None = None,
) -> tuple[int, dict, dict]:
    encoded = None
    req_headers = {}
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=req_headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            raw = response.read().decode("utf-8")
            return response.status, dict(response.headers), json.loads(raw) if raw else {}
    except error.HTTPError as exc:
        raw = exc.read().decode("utf-8")
        return exc.code, dict(exc.headers), json.loads(raw) if raw else {}


def _print_case(label: str, status: int, headers: dict, payload: dict) -> None:
    print(f"\n[{label}] status={status}")
    for name in ("Location", "ETag"):
        if name in headers:
            print(f"{name}: {headers[name]}")
    if payload:
        print(json.dumps(payload, indent=2, sort_keys=True))


def run(base_url: str) -> None:
    root = base_url.rstrip("/")
    guest_id = f"guest-{uuid.uuid4().hex[:8]}"
    room_id = "room-101"

    status, headers, payload = _call(
        method="POST",
        url=f"{root}/v1/guests/{guest_id}/stays/{room_id}",
    )
    _print_case("check-in", status, headers, payload)
    period = root + headers["Location"]

    status, headers, payload = _call(
        method="POST", url=f"{period}/charges", body={"amount": 50}
    )
    _print_case("charge", status, headers, payload)

    status, headers, payload = _call(method="DELETE", url=period)
    _print_case("checkout-unsettled", status, headers, payload)

    status, headers, payload = _call(
        method="POST", url=f"{period}/payments", body={"amount": 50}
    )
    _print_case("payment", status, headers, payload)

    status, headers, payload = _call(method="GET", url=period)
    _print_case("details", status, headers, payload)

    status, headers, payload = _call(method="DELETE", url=period)
    _print_case("checkout", status, headers, payload)

    status, headers, payload = _call(method="GET", url=period)
    _print_case("details-after-checkout", status, headers, payload)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    args = parser.parse_args()
    run(args.base_url)


if __name__ == "__main__":
    main()
