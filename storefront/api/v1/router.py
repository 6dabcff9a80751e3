from fastapi import APIRouter, Depends

from storefront.api.v1.endpoints import auth, orders, products, users
from storefront.core.rate_limiter import limit_auth_requests

api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
    dependencies=[Depends(limit_auth_requests)],
)
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(products.router, prefix="/products", tags=["Products"])
api_router.include_router(orders.router, prefix="/orders", tags=["Orders"])
