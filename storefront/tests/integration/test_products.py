"""
Product Catalog Integration Tests
상품 조회(공개) 및 관리(관리자) API 테스트
"""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from storefront.domain.models.product import Product

PRODUCT_PAYLOAD = {
    "id": "xx99-mark-two",
    "productName": "XX99 Mark II Headphones",
    "price": 299.99,
    "category": "headphones",
    "productDesc": "Pristine sound",
    "imageName": "product-xx99-mark-two",
    "productFeatures": ["Noise cancelling", "Wireless"],
    "productAccessories": ["Cable"],
}


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_product(client: AsyncClient, admin_token):
    async def _create_product(**overrides):
        payload = {**PRODUCT_PAYLOAD, **overrides}
        response = await client.post(
            "/api/products", headers=bearer(admin_token), json=payload
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["product"]

    return _create_product


class TestPublicCatalog:
    """공개 조회"""

    async def test_list_empty(self, client: AsyncClient):
        response = await client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == {"status": "success", "results": 0, "data": {"products": []}}

    async def test_list_sorted_by_name(self, client: AsyncClient, create_product):
        await create_product(id="zx9-speaker", productName="ZX9 Speaker", category="speakers")
        await create_product()

        response = await client.get("/api/products")

        body = response.json()
        assert body["results"] == 2
        assert [p["id"] for p in body["data"]["products"]] == ["xx99-mark-two", "zx9-speaker"]

    async def test_get_product(self, client: AsyncClient, create_product):
        await create_product()

        response = await client.get("/api/products/xx99-mark-two")

        assert response.status_code == 200
        product = response.json()["data"]["product"]
        assert product["productName"] == "XX99 Mark II Headphones"
        assert product["price"] == 299.99
        assert product["category"] == "headphones"
        assert product["productFeatures"] == ["Noise cancelling", "Wireless"]
        assert product["isNew"] is True

    async def test_get_missing_product(self, client: AsyncClient):
        response = await client.get("/api/products/nope")

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found with id: nope"

    async def test_list_by_category(self, client: AsyncClient, create_product):
        await create_product()
        await create_product(id="zx9-speaker", productName="ZX9 Speaker", category="speakers")

        response = await client.get("/api/products/category/speakers")

        body = response.json()
        assert body["results"] == 1
        assert body["data"]["products"][0]["id"] == "zx9-speaker"

    async def test_list_by_invalid_category(self, client: AsyncClient):
        response = await client.get("/api/products/category/televisions")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category: televisions"

    async def test_featured_excludes_old_products(
        self, client: AsyncClient, app, create_product
    ):
        await create_product()
        await create_product(id="zx9-speaker", productName="ZX9 Speaker", category="speakers")

        async with app.state.session_factory() as session:
            old = await session.get(Product, "zx9-speaker")
            old.created_at = datetime.utcnow() - timedelta(days=60)
            await session.commit()

        response = await client.get("/api/products/featured")

        body = response.json()
        assert [p["id"] for p in body["data"]["products"]] == ["xx99-mark-two"]


class TestAdminCatalog:
    """관리자 상품 관리"""

    async def test_create_requires_login(self, client: AsyncClient):
        response = await client.post("/api/products", json=PRODUCT_PAYLOAD)

        assert response.status_code == 401

    async def test_create_forbidden_for_customer(self, client: AsyncClient, customer_token):
        response = await client.post(
            "/api/products", headers=bearer(customer_token), json=PRODUCT_PAYLOAD
        )

        assert response.status_code == 403

    async def test_create_product(self, client: AsyncClient, admin_token):
        response = await client.post(
            "/api/products", headers=bearer(admin_token), json=PRODUCT_PAYLOAD
        )

        assert response.status_code == 201
        assert response.json()["data"]["product"]["id"] == "xx99-mark-two"

    async def test_create_duplicate_id(self, client: AsyncClient, admin_token, create_product):
        await create_product()

        response = await client.post(
            "/api/products", headers=bearer(admin_token), json=PRODUCT_PAYLOAD
        )

        assert response.status_code == 400
        assert response.json()["status"] == "fail"

    @pytest.mark.parametrize(
        "override",
        [
            {"id": "ab"},
            {"productName": "XX"},
            {"price": 0},
            {"price": -5},
            {"imageName": ""},
            {"id": "p" * 51},
            {"productDesc": "d" * 251},
        ],
    )
    async def test_create_validation(self, client: AsyncClient, admin_token, override):
        response = await client.post(
            "/api/products",
            headers=bearer(admin_token),
            json={**PRODUCT_PAYLOAD, **override},
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Validation error")

    async def test_create_invalid_category(self, client: AsyncClient, admin_token):
        response = await client.post(
            "/api/products",
            headers=bearer(admin_token),
            json={**PRODUCT_PAYLOAD, "category": "televisions"},
        )

        assert response.status_code == 400
        assert (
            "Category must be one of: headphones, speakers, earphones"
            in response.json()["message"]
        )

    async def test_update_product(self, client: AsyncClient, admin_token, create_product):
        await create_product()

        response = await client.put(
            "/api/products/xx99-mark-two",
            headers=bearer(admin_token),
            json={"price": 249.5, "productDesc": "Updated"},
        )

        assert response.status_code == 200
        product = response.json()["data"]["product"]
        assert product["price"] == 249.5
        assert product["productDesc"] == "Updated"
        assert product["productName"] == "XX99 Mark II Headphones"

    async def test_update_missing_product(self, client: AsyncClient, admin_token):
        response = await client.put(
            "/api/products/nope", headers=bearer(admin_token), json={"price": 10}
        )

        assert response.status_code == 404

    async def test_delete_product(self, client: AsyncClient, admin_token, create_product):
        await create_product()

        response = await client.delete(
            "/api/products/xx99-mark-two", headers=bearer(admin_token)
        )

        assert response.status_code == 204
        assert (await client.get("/api/products/xx99-mark-two")).status_code == 404

    async def test_delete_forbidden_for_customer(
        self, client: AsyncClient, customer_token
    ):
        response = await client.delete(
            "/api/products/xx99-mark-two", headers=bearer(customer_token)
        )

        assert response.status_code == 403
