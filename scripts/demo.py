#!/usr/bin/env python3
"""
Demo script for the OKED assistant API.

Sends sample queries in Russian and English to a running instance and shows
which path answered each one (enhanced, basic, offline fallback or cache).

Usage:
    python -m oked_assistant.api.app   # in another terminal
    python scripts/demo.py [base_url]
"""

import json
import sys
import time

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def describe(payload: dict) -> str:
    if payload.get("fallback"):
        return "offline fallback"
    if payload.get("enhanced"):
        return "enhanced (OKED context)"
    return "basic"


def demo_health(client: httpx.Client) -> None:
    print_section("Health")
    data = client.get("/health").json()
    print(f"  Status: {data['status']}")
    print(f"  Provider configured: {data['anthropic_configured']}")
    print(f"  Cache entries: {data['cache_keys']}")


def demo_chat(client: httpx.Client) -> None:
    print_section("Chat queries")
    queries = [
        "Какой код ОКЭД у ресторана?",
        "Открываю продуктовый магазин",
        "Разработка мобильных приложений - программирование",
        "How many businesses are registered in Kazakhstan?",
    ]

    for query in queries:
        body = {"messages": [{"role": "user", "content": query}]}
        start = time.time()
        response = client.post("/api/claude", json=body)
        elapsed_ms = (time.time() - start) * 1000
        print(f"\n  Query: {query}")
        if response.status_code != 200:
            print(f"  ✗ {response.status_code}: {response.json()['error']}")
            continue
        payload = response.json()
        print(f"  ✓ {describe(payload)} in {elapsed_ms:.1f}ms")
        if payload.get("fallback"):
            content = json.loads(payload["content"])
            codes = ", ".join(c["code"] for c in content["codes"]) or "-"
            print(f"  Codes: {codes}")
        else:
            print(f"  Response: {payload['content'][:100]}...")

    print("\n🔍 Repeating the first query (should come from cache):")
    body = {"messages": [{"role": "user", "content": queries[0]}]}
    start = time.time()
    client.post("/api/claude", json=body)
    print(f"  ✓ answered in {(time.time() - start) * 1000:.1f}ms")


def demo_validation(client: httpx.Client) -> None:
    print_section("Validation")
    bodies = [
        {"messages": []},
        {"messages": [{"role": "moderator", "content": "hi"}]},
        {"messages": [{"role": "user", "content": "hi"}], "model": "gpt-4"},
    ]
    for body in bodies:
        response = client.post("/api/claude", json=body)
        print(f"  {response.status_code}: {response.json()['error']}")


def demo_catalogue(client: httpx.Client) -> None:
    print_section("OKED catalogue")
    sections = client.get("/api/oked/sections").json()["data"]
    for section in sections:
        print(f"  {section['code']}  {section['name']}")

    for code in ("A", "ZZ"):
        response = client.get(f"/api/statistics/{code}")
        print(f"\n  /api/statistics/{code} -> {response.status_code}: {response.json()['error']}")


def main() -> None:
    with httpx.Client(base_url=BASE_URL, timeout=60.0) as client:
        demo_health(client)
        demo_chat(client)
        demo_validation(client)
        demo_catalogue(client)


if __name__ == "__main__":
    main()
