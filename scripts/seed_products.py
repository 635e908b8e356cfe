"""Seed demo products by calling the HTTP API.

Best-effort: every product is posted once per run, failures are printed and
skipped. Run it against a live server:

    python scripts/seed_products.py
    python scripts/seed_products.py http://localhost:4000

The default base URL honours PORT the same way the server does.
"""
import os
import sys

import httpx

DEFAULT_URL = f"http://localhost:{os.getenv('PORT', '4000')}"

DEMO_PRODUCTS = [
    {"name": "Monitor de 49 pulgadas", "price": 300},
    {"name": "Teclado mecanico", "price": 89.9},
    {"name": "Mouse inalambrico", "price": 25.5},
    {"name": "Audifonos", "price": 120, "availability": False},
]


def create_product(client: httpx.Client, payload: dict):
    try:
        r = client.post("/api/products", json=payload)
    except httpx.HTTPError as e:
        print(f"Products API unavailable: {e}")
        return None

    if r.status_code == 201:
        product = r.json()["data"]
        print(f"Created product {product['id']}: {product['name']} ({product['price']})")
        return product

    print(f"Create returned {r.status_code}: {r.text}")
    return None


def main(base_url: str = DEFAULT_URL):
    print(f"Seeding demo products into {base_url}")
    with httpx.Client(base_url=base_url, timeout=5.0) as client:
        created = [p for p in (create_product(client, payload) for payload in DEMO_PRODUCTS) if p]

        try:
            listing = client.get("/api/products").json()["data"]
        except httpx.HTTPError as e:
            print(f"Could not list products: {e}")
            return

    print(f"\nCreated {len(created)} of {len(DEMO_PRODUCTS)} products; {len(listing)} in the catalogue.")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_URL)
