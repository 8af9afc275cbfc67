import pytest

BILL_URL = "/api/v1/bill"


def _add(client, path, payload):
    response = client.post(f"{BILL_URL}{path}", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def _last(data, collection):
    return data["bill"][collection][-1]


def test_health(client):
    response = client.get(f"{BILL_URL}/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "docs_url" in response.json()


def test_empty_bill(client):
    data = client.get(f"{BILL_URL}/").json()

    assert data["bill"] == {"people": [], "dishes": [], "taxes": []}
    assert data["summary"]["grand_total"] == 0.0
    assert data["summary"]["split"] == {}


def test_pizza_split_through_the_api(client):
    alice = _last(_add(client, "/people", {"name": "Alice"}), "people")
    bob = _last(_add(client, "/people", {"name": "  Bob "}), "people")
    pizza = _last(_add(client, "/dishes", {"name": "Pizza", "price": "20"}), "dishes")
    _add(client, "/taxes", {"name": "VAT", "kind": "percentage", "value": 10})

    client.post(f"{BILL_URL}/dishes/{pizza['id']}/sharers/{alice['id']}")
    data = client.post(f"{BILL_URL}/dishes/{pizza['id']}/sharers/{bob['id']}").json()

    assert bob["name"] == "Bob"
    assert data["bill"]["dishes"][0]["shared_by"] == [alice["id"], bob["id"]]
    summary = data["summary"]
    assert summary["grand_total"] == pytest.approx(22.0)
    assert summary["split"][alice["id"]] == {"name": "Alice", "amount": pytest.approx(11.0)}
    assert summary["split"][bob["id"]]["amount"] == pytest.approx(11.0)


@pytest.mark.parametrize("path, payload", [
    ("/people", {"name": "   "}),
    ("/dishes", {"name": "Soup", "price": "-3"}),
    ("/dishes", {"name": "Soup", "price": "abc"}),
    ("/dishes", {"name": "Soup", "price": ""}),
    ("/dishes", {"name": "", "price": "3"}),
    ("/taxes", {"name": "VAT", "kind": "percentage", "value": "nan"}),
    ("/taxes", {"name": "VAT", "kind": "other", "value": 5}),
])
def test_invalid_input_is_rejected(client, path, payload):
    response = client.post(f"{BILL_URL}{path}", json=payload)

    assert response.status_code == 422
    assert client.get(f"{BILL_URL}/").json()["bill"] == {"people": [], "dishes": [], "taxes": []}


def test_price_text_keeps_leading_number(client):
    dish = _last(_add(client, "/dishes", {"name": "Wine", "price": "12.5 €"}), "dishes")

    assert dish["price"] == 12.5


def test_edit_dish(client):
    dish = _last(_add(client, "/dishes", {"name": "Wine", "price": 12}), "dishes")

    data = client.patch(f"{BILL_URL}/dishes/{dish['id']}", json={"name": "Red wine", "price": "15"}).json()
    assert data["bill"]["dishes"][0]["name"] == "Red wine"
    assert data["summary"]["subtotal"] == pytest.approx(15.0)

    # A cleared price field sets the price to 0
    data = client.patch(f"{BILL_URL}/dishes/{dish['id']}", json={"price": ""}).json()
    assert data["bill"]["dishes"][0]["price"] == 0.0
    assert data["bill"]["dishes"][0]["name"] == "Red wine"


def test_edit_tax(client):
    tax = _last(_add(client, "/taxes", {"name": "Service", "kind": "percentage", "value": 10}), "taxes")
    _add(client, "/dishes", {"name": "Wine", "price": 50})

    data = client.patch(f"{BILL_URL}/taxes/{tax['id']}", json={"kind": "fixed", "value": "3"}).json()

    assert data["bill"]["taxes"][0]["kind"] == "fixed"
    assert data["summary"]["per_tax"][tax["id"]] == pytest.approx(3.0)


def test_rename_to_blank_is_rejected(client):
    person = _last(_add(client, "/people", {"name": "Alice"}), "people")

    response = client.patch(f"{BILL_URL}/people/{person['id']}", json={"name": " "})

    assert response.status_code == 422


def test_delete_person_cascades(client):
    alice = _last(_add(client, "/people", {"name": "Alice"}), "people")
    bob = _last(_add(client, "/people", {"name": "Bob"}), "people")
    dish = _last(_add(client, "/dishes", {"name": "Fries", "price": 6}), "dishes")
    client.post(f"{BILL_URL}/dishes/{dish['id']}/sharers/{alice['id']}")
    client.post(f"{BILL_URL}/dishes/{dish['id']}/sharers/{bob['id']}")

    data = client.delete(f"{BILL_URL}/people/{bob['id']}").json()

    assert data["bill"]["dishes"][0]["shared_by"] == [alice["id"]]
    assert list(data["summary"]["split"]) == [alice["id"]]
    assert data["summary"]["split"][alice["id"]]["amount"] == pytest.approx(6.0)


@pytest.mark.parametrize("method, path", [
    ("patch", "/people/missing"),
    ("delete", "/people/missing"),
    ("patch", "/dishes/missing"),
    ("delete", "/dishes/missing"),
    ("post", "/dishes/missing/sharers/missing"),
    ("patch", "/taxes/missing"),
    ("delete", "/taxes/missing"),
])
def test_unknown_ids_are_not_found(client, method, path):
    kwargs = {"json": {"name": "x"}} if method == "patch" else {}

    response = getattr(client, method)(f"{BILL_URL}{path}", **kwargs)

    assert response.status_code == 404


def test_toggle_unknown_person_is_not_found(client):
    dish = _last(_add(client, "/dishes", {"name": "Fries", "price": 6}), "dishes")

    response = client.post(f"{BILL_URL}/dishes/{dish['id']}/sharers/ghost")

    assert response.status_code == 404
    assert "Person" in response.json()["detail"]


def test_reset(client):
    _add(client, "/people", {"name": "Alice"})

    data = client.delete(f"{BILL_URL}/").json()

    assert data["bill"]["people"] == []


class TestCalculateSplit:
    def test_coffee_example(self, client):
        payload = {
            "people": [{"id": "a", "name": "A"}, {"id": "b", "name": "B"}, {"id": "c", "name": "C"}],
            "dishes": [{"id": "coffee", "name": "Coffee", "price": 0, "shared_by": []}],
            "taxes": [{"id": "service", "name": "Service", "kind": "fixed", "value": 6}],
        }

        data = client.post(f"{BILL_URL}/calculate-split", json=payload).json()

        assert data["success"] is True
        split = data["summary"]["split"]
        assert {pid: share["amount"] for pid, share in split.items()} == {
            "a": pytest.approx(2.0), "b": pytest.approx(2.0), "c": pytest.approx(2.0)
        }

    def test_unknown_sharer_is_rejected(self, client):
        payload = {
            "people": [{"id": "a", "name": "A"}],
            "dishes": [{"id": "d", "name": "Pizza", "price": 20, "shared_by": ["a", "z"]}],
            "taxes": [],
        }

        response = client.post(f"{BILL_URL}/calculate-split", json=payload)

        assert response.status_code == 422

    def test_duplicate_ids_are_rejected(self, client):
        payload = {
            "people": [{"id": "a", "name": "A"}, {"id": "a", "name": "B"}],
            "dishes": [],
            "taxes": [],
        }

        assert client.post(f"{BILL_URL}/calculate-split", json=payload).status_code == 422

    def test_negative_price_is_rejected(self, client):
        payload = {
            "people": [{"id": "a", "name": "A"}],
            "dishes": [{"id": "d", "name": "Pizza", "price": -20, "shared_by": ["a"]}],
            "taxes": [],
        }

        assert client.post(f"{BILL_URL}/calculate-split", json=payload).status_code == 422
