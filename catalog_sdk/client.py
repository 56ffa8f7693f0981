# catalog_sdk/client.py
from typing import Any, Dict, List, Optional

import httpx


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:3000", timeout: float = 10, http_client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = http_client if http_client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/products{path}"

    # Products
    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.get(self._url(""))
        r.raise_for_status()
        return r.json()

    def search_products(self, title: str) -> List[Dict[str, Any]]:
        r = self.session.get(self._url(""), params={"title": title})
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        r = self.session.get(self._url(f"/{product_id}"))
        # a missing product is an answer, not an error
        if r.status_code == 404:
            return None
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, description: str, price: float, quantity: float, category: str) -> Dict[str, Any]:
        r = self.session.post(self._url(""), json={
            "name": name,
            "description": description,
            "price": price,
            "quantity": quantity,
            "category": category,
        })
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, **changes: Any) -> Dict[str, Any]:
        r = self.session.put(self._url(f"/{product_id}"), json=changes)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> str:
        r = self.session.delete(self._url(f"/{product_id}"))
        r.raise_for_status()
        return r.json()["message"]
