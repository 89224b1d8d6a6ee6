"""
Storefront - Main FastAPI Application

Shell around the storefront client: catalog browsing, the cart overlay and
checkout. The cart store and its collaborators are built once in the
lifespan handler and injected into endpoints from app.state.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront import __version__
from storefront.cart import CartStorage, create_cart_slot, create_cart_store
from storefront.catalog import CatalogClient
from storefront.config import get_settings
from storefront.graphql import GraphQLClient
from storefront.logging import get_logger
from storefront.orders import CheckoutService, OrderClient
from storefront.routers import cart_router, checkout_router, products_router
from storefront.routers.overlay import CartOverlay

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    settings = get_settings()

    store = create_cart_store(CartStorage(create_cart_slot(settings)))
    overlay = CartOverlay()
    store.on_item_added(overlay.open)

    graphql = GraphQLClient(settings.graphql_endpoint, timeout=settings.http_timeout)

    app.state.settings = settings
    app.state.cart_store = store
    app.state.cart_overlay = overlay
    app.state.catalog = CatalogClient(graphql)
    app.state.checkout = CheckoutService(store, OrderClient(graphql))

    logger.info(f"Storefront started (cart storage: {settings.cart_storage})")
    yield
    await graphql.aclose()


app = FastAPI(
    title="Storefront",
    description="Product catalog, cart and checkout",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(products_router, prefix="/api")
app.include_router(cart_router, prefix="/api")
app.include_router(checkout_router, prefix="/api")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront"}
