"""
Food Ordering Service API

This module implements a FastAPI application for a role- and location-aware
food ordering system. Users sign in, browse the menu and place orders;
Admins and Managers maintain the menu and move orders through their status.

Endpoints:
    POST /auth/login: Exchange email and password for an access token
    POST /auth/register: Create an account
    GET /auth/me: Current user and the actions they are allowed
    GET /food/items: List available food items
    POST /food/items: Add a food item (Admin/Manager)
    PUT /food/items/{item_id}: Update a food item (Admin/Manager)
    POST /food/orders: Place an order (cart and payment access required)
    GET /food/orders: List visible orders, newest first
    PATCH /food/orders/{order_id}: Update order status (Admin/Manager)
    PATCH /food/orders/{order_id}/payment: Update payment method (cart and payment access required)
    GET /healthz: Health check endpoint for orchestration systems

Every error response is JSON with a "message" field.

Attributes:
    app (FastAPI): The FastAPI application instance configured with the title "food-ordering-service"
"""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Path, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import auth, catalog, orders, policy, schemas, seed
from .config import CORS_ORIGINS, LOG_LEVEL, SEED_ON_STARTUP, is_production
from .database import get_db
from .exceptions import FoodOrderError, StorageError

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if SEED_ON_STARTUP:
        seed.init_db()
    yield


app = FastAPI(title="food-ordering-service", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------

def _storage_error_response(exc: StorageError) -> JSONResponse:
    content = {"message": exc.message}
    if exc.detail and not is_production():
        content["error"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(FoodOrderError)
async def food_order_error_handler(request: Request, exc: FoodOrderError):
    if isinstance(exc, StorageError):
        return _storage_error_response(exc)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, **exc.extra},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": problems},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Unhandled database error on {request.method} {request.url.path}")
    return _storage_error_response(StorageError(detail=str(exc)))


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

@app.get("/", response_model=dict)
def index():
    """
    Describe the API.

    Returns:
        dict: Service name, version and endpoint summary
    """
    return {
        "message": "Food Ordering API",
        "version": app.version,
        "endpoints": {
            "auth": {
                "login": "POST /auth/login",
                "register": "POST /auth/register",
                "me": "GET /auth/me",
            },
            "food": {
                "getItems": "GET /food/items",
                "addItem": "POST /food/items (Admin/Manager only)",
                "updateItem": "PUT /food/items/:id (Admin/Manager only)",
                "createOrder": "POST /food/orders",
                "getOrders": "GET /food/orders",
                "updateOrderStatus": "PATCH /food/orders/:id (Admin/Manager only)",
                "updatePayment": "PATCH /food/orders/:id/payment",
            },
        },
    }


@app.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the food ordering service.

    Returns:
        dict: {"status": "healthy"} when the service is operational.
    """
    return {"status": "healthy"}


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

@app.post("/auth/login", response_model=schemas.AuthResponse)
def login(credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    """
    Authenticate and login a user.

    Args:
        credentials: User login credentials (email, password)
        db: Database session (injected)

    Returns:
        Access token and the user's profile

    Raises:
        ValidationError: 400 if email or password is blank
        InvalidCredentials: 401 if the email is unknown or the password is wrong
    """
    user = auth.authenticate_user(db, credentials.email, credentials.password)
    return schemas.AuthResponse(
        message="Login successful",
        access_token=auth.create_access_token(user),
        user=schemas.User.model_validate(user),
    )


@app.post("/auth/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user account.

    Args:
        user: Registration data (name, email, password, role, location)
        db: Database session (injected)

    Returns:
        Access token and the new user's profile

    Raises:
        ValidationError: 400 if role or location is not recognised
        ConflictError: 409 if the email is already registered
    """
    db_user = auth.register_user(
        db,
        name=user.name,
        email=user.email,
        password=user.password,
        role=user.role,
        location=user.location,
    )
    return schemas.AuthResponse(
        message="User registered successfully",
        access_token=auth.create_access_token(db_user),
        user=schemas.User.model_validate(db_user),
    )


@app.get("/auth/me", response_model=schemas.Me)
def me(current_user: auth.CurrentUser = Depends(auth.get_current_user)):
    """
    Get the current user and the actions the policy allows them.

    The permission flags are advisory for client UIs; every endpoint enforces
    the same decisions itself.
    """
    return schemas.Me(
        user=schemas.User(**current_user.model_dump()),
        permissions=schemas.Permissions(**policy.permissions_for(current_user.role, current_user.location)),
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@app.get("/food/items", response_model=schemas.FoodItemList)
def list_food_items(
    db: Session = Depends(get_db),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """List all available food items (authenticated users only)."""
    return schemas.FoodItemList(
        items=[schemas.FoodItem.model_validate(item) for item in catalog.list_available(db)]
    )


@app.post("/food/items", response_model=schemas.FoodItemResponse, status_code=status.HTTP_201_CREATED)
def create_food_item(
    item: schemas.FoodItemCreate,
    db: Session = Depends(get_db),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """
    Add a food item (Admin and Manager only).

    Raises:
        ForbiddenError: 403 for Members
        ValidationError: 400 if name or price is missing or price is negative
    """
    db_item = catalog.create_item(db, current_user, item.name, item.description, item.price)
    return schemas.FoodItemResponse(message="Food item added successfully", item=schemas.FoodItem.model_validate(db_item))


@app.put("/food/items/{item_id}", response_model=schemas.FoodItemResponse)
def update_food_item(
    item: schemas.FoodItemUpdate,
    item_id: int = Path(..., ge=1, le=schemas.MAX_ID),
    db: Session = Depends(get_db),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """
    Update a food item (Admin and Manager only). Only provided fields change.

    Raises:
        ForbiddenError: 403 for Members
        NotFoundError: 404 if the food item does not exist
    """
    db_item = catalog.update_item(db, current_user, item_id, item.model_dump(exclude_unset=True))
    return schemas.FoodItemResponse(message="Food item updated successfully", item=schemas.FoodItem.model_validate(db_item))


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

@app.post("/food/orders", response_model=schemas.OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order: schemas.OrderCreate,
    db: Session = Depends(get_db),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """
    Place an order for the current user.

    Admins and Managers can always order; Members only from India.

    Raises:
        ValidationError: 400 if there are no items or no payment method
        ForbiddenError: 403 if the caller has no cart and payment access
        NotFoundError: 404 if a food item is missing or unavailable
        StorageError: 500 if the order could not be saved
    """
    db_order = orders.place_order(db, current_user, order.items, order.payment_method)
    return schemas.OrderResponse(message="Order created successfully", order=schemas.Order.model_validate(db_order))


@app.get("/food/orders", response_model=schemas.OrderList)
def list_orders(
    db: Session = Depends(get_db),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """List orders, newest first (Members see their own, Admins and Managers see all)."""
    return schemas.OrderList(
        orders=[schemas.Order.model_validate(order) for order in orders.list_orders(db, current_user)]
    )


@app.patch("/food/orders/{order_id}", response_model=schemas.Message)
def update_order_status(
    update: schemas.OrderStatusUpdate,
    order_id: int = Path(..., ge=1, le=schemas.MAX_ID),
    db: Session = Depends(get_db),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """
    Update an order's status (Admin and Manager only).

    Raises:
        ForbiddenError: 403 for Members
        ValidationError: 400 if status is missing
        NotFoundError: 404 if the order does not exist
    """
    orders.set_order_status(db, current_user, order_id, update.status)
    return schemas.Message(message="Order status updated successfully")


@app.patch("/food/orders/{order_id}/payment", response_model=schemas.Message)
def update_payment_method(
    update: schemas.PaymentMethodUpdate,
    order_id: int = Path(..., ge=1, le=schemas.MAX_ID),
    db: Session = Depends(get_db),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """
    Update an order's payment method.

    Members can only update their own orders, and only from India.

    Raises:
        ValidationError: 400 if payment method is missing
        ForbiddenError: 403 if the caller has no cart and payment access
        NotFoundError: 404 if the order does not exist or is not the caller's
    """
    orders.set_payment_method(db, current_user, order_id, update.payment_method)
    return schemas.Message(message="Payment method updated successfully")
