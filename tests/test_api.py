"""
HTTP tests for the routers in `storefront/api/endpoints/`.
"""


async def create_product(client, name="P1", price=10.0, region="North", description="First"):
    response = await client.post(
        "/products",
        json={"name": name, "price": price, "region": region, "description": description},
    )
    assert response.status_code == 201
    return response.json()


async def create_customer(client, email="alice@example.com", name="Alice", region="North"):
    response = await client.post("/customers", json={"email": email, "name": name, "region": region})
    assert response.status_code == 201
    return response.json()


async def test_health(client) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_purchase_and_report_flow(client) -> None:
    product = await create_product(client)
    customer = await create_customer(client)

    response = await client.post(
        "/purchases",
        json={"productId": product["id"], "customerId": "alice@example.com", "quantity": 3},
    )
    assert response.status_code == 201
    purchase = response.json()
    assert purchase["totalPrice"] == 30.0
    assert purchase["quantity"] == 3
    assert purchase["productId"] == product["id"]
    assert purchase["customerId"] == customer["id"]
    assert purchase["product"] == {
        "id": product["id"],
        "name": "P1",
        "price": 10.0,
        "description": "First",
    }
    assert "createdAt" in purchase

    response = await client.get("/purchases/report")
    assert response.status_code == 200
    assert response.json() == {
        "salesByProduct": [
            {
                "productId": product["id"],
                "total_sales": 3,
                "total_revenue": 30.0,
                "product": {"id": product["id"], "name": "P1", "price": 10.0, "region": "North"},
            }
        ],
        "averageTicket": 30.0,
        "totalPurchases": 1,
        "totalRevenue": 30.0,
    }


async def test_empty_report(client) -> None:
    response = await client.get("/purchases/report")
    assert response.status_code == 200
    assert response.json() == {
        "salesByProduct": [],
        "averageTicket": 0.0,
        "totalPurchases": 0,
        "totalRevenue": 0.0,
    }


async def test_purchase_unknown_product_is_404(client) -> None:
    await create_customer(client)

    response = await client.post(
        "/purchases", json={"productId": 123, "customerId": "alice@example.com", "quantity": 1}
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"

    response = await client.get("/purchases")
    assert response.json() == []


async def test_purchase_unknown_customer_is_404(client) -> None:
    product = await create_product(client)

    response = await client.post(
        "/purchases", json={"productId": product["id"], "customerId": "ghost@example.com"}
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Customer not found"


async def test_purchase_validation_errors_are_400(client) -> None:
    product = await create_product(client)
    await create_customer(client)

    missing_product = await client.post("/purchases", json={"customerId": "alice@example.com"})
    zero_quantity = await client.post(
        "/purchases", json={"productId": product["id"], "customerId": "alice@example.com", "quantity": 0}
    )
    bad_email = await client.post("/purchases", json={"productId": product["id"], "customerId": "alice"})

    assert missing_product.status_code == 400
    assert "productId" in missing_product.json()["detail"]
    assert zero_quantity.status_code == 400
    assert bad_email.status_code == 400


async def test_customer_history(client) -> None:
    first = await create_product(client, name="P1")
    second = await create_product(client, name="P2", price=2.5)
    await create_customer(client)
    await create_customer(client, email="bob@example.com", name="Bob")

    await client.post("/purchases", json={"productId": first["id"], "customerId": "alice@example.com"})
    await client.post("/purchases", json={"productId": second["id"], "customerId": "alice@example.com"})
    await client.post("/purchases", json={"productId": second["id"], "customerId": "bob@example.com"})

    response = await client.get("/purchases/customer/alice@example.com")
    assert response.status_code == 200
    names = [purchase["product"]["name"] for purchase in response.json()]
    assert names == ["P2", "P1"]

    again = await client.get("/purchases/customer/alice@example.com")
    assert again.json() == response.json()

    missing = await client.get("/purchases/customer/ghost@example.com")
    assert missing.status_code == 404


async def test_purchase_crud(client) -> None:
    product = await create_product(client)
    await create_customer(client)
    created = (
        await client.post("/purchases", json={"productId": product["id"], "customerId": "alice@example.com"})
    ).json()

    fetched = await client.get(f"/purchases/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["totalPrice"] == 10.0

    updated = await client.put(f"/purchases/{created['id']}", json={"quantity": 4})
    assert updated.status_code == 200
    assert updated.json()["totalPrice"] == 40.0

    deleted = await client.delete(f"/purchases/{created['id']}")
    assert deleted.status_code == 204

    assert (await client.get(f"/purchases/{created['id']}")).status_code == 404
    assert (await client.delete(f"/purchases/{created['id']}")).status_code == 404


async def test_product_crud(client) -> None:
    product = await create_product(client, description=None)

    listed = await client.get("/products")
    assert [p["id"] for p in listed.json()] == [product["id"]]

    by_region = await client.get("/products", params={"region": "South"})
    assert by_region.json() == []

    updated = await client.put(f"/products/{product['id']}", json={"price": 12.5, "description": "Now described"})
    assert updated.status_code == 200
    assert updated.json()["price"] == 12.5
    assert updated.json()["name"] == "P1"
    assert updated.json()["description"] == "Now described"

    assert (await client.get("/products/999")).status_code == 404
    assert (await client.put("/products/999", json={"price": 1})).status_code == 404

    negative = await client.post("/products", json={"name": "X", "price": -1, "region": "North"})
    assert negative.status_code == 400

    assert (await client.delete(f"/products/{product['id']}")).status_code == 204
    assert (await client.get(f"/products/{product['id']}")).status_code == 404


async def test_customer_crud(client) -> None:
    customer = await create_customer(client)

    duplicate = await client.post(
        "/customers", json={"email": "alice@example.com", "name": "Other", "region": "South"}
    )
    assert duplicate.status_code == 409

    fetched = await client.get(f"/customers/{customer['id']}")
    assert fetched.json()["email"] == "alice@example.com"

    updated = await client.put(f"/customers/{customer['id']}", json={"region": "West"})
    assert updated.json()["region"] == "West"
    assert updated.json()["name"] == "Alice"

    assert (await client.get("/customers/999")).status_code == 404
    assert (await client.delete(f"/customers/{customer['id']}")).status_code == 204
    assert (await client.get("/customers")).json() == []


async def test_referenced_rows_cannot_be_deleted(client) -> None:
    product = await create_product(client)
    customer = await create_customer(client)
    await client.post("/purchases", json={"productId": product["id"], "customerId": "alice@example.com"})

    assert (await client.delete(f"/customers/{customer['id']}")).status_code == 409
    assert (await client.delete(f"/products/{product['id']}")).status_code == 409
    assert (await client.get(f"/customers/{customer['id']}")).status_code == 200


async def test_history_accepts_the_email_used_to_buy(client) -> None:
    product = await create_product(client)
    await create_customer(client, email="Alice@Example.COM")

    bought = await client.post(
        "/purchases", json={"productId": product["id"], "customerId": "Alice@Example.COM", "quantity": 2}
    )
    assert bought.status_code == 201

    history = await client.get("/purchases/customer/Alice@Example.COM")
    assert history.status_code == 200
    assert [purchase["id"] for purchase in history.json()] == [bought.json()["id"]]


async def test_quantity_must_be_a_real_integer(client) -> None:
    product = await create_product(client)
    await create_customer(client)

    for quantity in (True, "2", 1.5):
        response = await client.post(
            "/purchases",
            json={"productId": product["id"], "customerId": "alice@example.com", "quantity": quantity},
        )
        assert response.status_code == 400

    created = (
        await client.post("/purchases", json={"productId": product["id"], "customerId": "alice@example.com"})
    ).json()
    update = await client.put(f"/purchases/{created['id']}", json={"quantity": True})
    assert update.status_code == 400

    assert len((await client.get("/purchases")).json()) == 1
