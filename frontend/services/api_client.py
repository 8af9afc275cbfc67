import requests
import streamlit as st
from typing import Any, Dict, Optional, Tuple
from loguru import logger
import os


class APIClient:
    def __init__(self):
        # Use environment variable for backend URL, fallback to localhost
        self.base_url = os.getenv("BACKEND_URL", "http://localhost:8000")
        self.bill_url = f"{self.base_url}/api/v1/bill"
        self.session = requests.Session()

    def health_check(self) -> bool:
        """Check if backend API is healthy"""
        try:
            response = self.session.get(f"{self.bill_url}/health", timeout=5)
            return response.status_code == 200
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Tuple[bool, Dict[str, Any]]:
        """
        Send a request to the bill endpoints

        Returns:
            Tuple of (success, response_data)
        """
        try:
            response = self.session.request(method, f"{self.bill_url}{path}", json=payload, timeout=10)

            if response.status_code == 200:
                return True, response.json()

            detail = response.json().get("detail", response.text) if response.content else ""
            logger.error(f"API request {method} {path} failed: {response.status_code} {detail}")
            return False, {"error": f"Request failed with status {response.status_code}: {detail}"}

        except Exception as e:
            logger.error(f"Error calling {method} {path}: {e}")
            return False, {"error": str(e)}

    def get_bill(self) -> Tuple[bool, Dict[str, Any]]:
        return self._request("GET", "/")

    def reset_bill(self) -> Tuple[bool, Dict[str, Any]]:
        return self._request("DELETE", "/")

    # --- People ---
    def add_person(self, name: str) -> Tuple[bool, Dict[str, Any]]:
        return self._request("POST", "/people", {"name": name})

    def rename_person(self, person_id: str, name: str) -> Tuple[bool, Dict[str, Any]]:
        return self._request("PATCH", f"/people/{person_id}", {"name": name})

    def delete_person(self, person_id: str) -> Tuple[bool, Dict[str, Any]]:
        return self._request("DELETE", f"/people/{person_id}")

    # --- Dishes ---
    def add_dish(self, name: str, price: str) -> Tuple[bool, Dict[str, Any]]:
        return self._request("POST", "/dishes", {"name": name, "price": price})

    def edit_dish(self, dish_id: str, name: Optional[str] = None, price: Optional[str] = None) -> Tuple[bool, Dict[str, Any]]:
        payload = {}
        if name is not None:
            payload["name"] = name
        if price is not None:
            payload["price"] = price
        return self._request("PATCH", f"/dishes/{dish_id}", payload)

    def toggle_dish_person(self, dish_id: str, person_id: str) -> Tuple[bool, Dict[str, Any]]:
        return self._request("POST", f"/dishes/{dish_id}/sharers/{person_id}")

    def delete_dish(self, dish_id: str) -> Tuple[bool, Dict[str, Any]]:
        return self._request("DELETE", f"/dishes/{dish_id}")

    # --- Taxes ---
    def add_tax(self, name: str, kind: str, value: str) -> Tuple[bool, Dict[str, Any]]:
        return self._request("POST", "/taxes", {"name": name, "kind": kind, "value": value})

    def edit_tax(
        self,
        tax_id: str,
        name: Optional[str] = None,
        kind: Optional[str] = None,
        value: Optional[str] = None
    ) -> Tuple[bool, Dict[str, Any]]:
        payload = {key: val for key, val in (("name", name), ("kind", kind), ("value", value)) if val is not None}
        return self._request("PATCH", f"/taxes/{tax_id}", payload)

    def delete_tax(self, tax_id: str) -> Tuple[bool, Dict[str, Any]]:
        return self._request("DELETE", f"/taxes/{tax_id}")


# Global API client instance
@st.cache_resource
def get_api_client():
    return APIClient()
