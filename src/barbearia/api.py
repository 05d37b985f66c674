"""FastAPI REST API for the barbearia site and admin console."""

from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .auth import (
    AUTH_COOKIE,
    AUTH_COOKIE_MAX_AGE,
    AdminGuardMiddleware,
    auth_cookie_value,
    check_credentials,
)
from .collection_store import Collection, CollectionStore, JsonFileStore
from .dashboard import filter_bookings, summarize
from .errors import (
    BarbeariaError,
    BookingNotFoundError,
    CartEmptyError,
    CartItemNotFoundError,
    ContactNotFoundError,
    InvalidCredentialsError,
    OrderNotFoundError,
    StorageUnavailableError,
    ValidationFailedError,
)
from .managers import BookingManager, CartManager, ContactManager, OrderManager
from .models import Customer
from .validation import (
    validate_booking,
    validate_booking_update,
    validate_cart_item,
    validate_contact,
    validate_customer,
    validate_order_status,
)


# --- Pydantic Schemas ---


class BookingSchema(BaseModel):
    id: str
    nome: str
    email: str
    telefone: str
    data: str
    hora: str
    servico: str
    observacoes: str = ""
    status: str
    createdAt: str


class BookingCreateRequest(BaseModel):
    """Booking form submission. Presence is checked after parsing."""

    nome: Optional[str] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    data: Optional[str] = Field(None, description="YYYY-MM-DD")
    hora: Optional[str] = Field(None, description="HH:MM")
    servico: Optional[str] = None
    observacoes: Optional[str] = None


class BookingUpdateRequest(BaseModel):
    """Partial booking update. Only fields that are sent are merged."""

    nome: Optional[str] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    data: Optional[str] = None
    hora: Optional[str] = None
    servico: Optional[str] = None
    observacoes: Optional[str] = None
    status: Optional[str] = None


class ContactSchema(BaseModel):
    id: str
    nome: str
    email: str
    telefone: str
    servico: str
    mensagem: str
    createdAt: str
    lido: bool


class ContactCreateRequest(BaseModel):
    nome: Optional[str] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    servico: Optional[str] = None
    mensagem: Optional[str] = None


class ContactCreateResponse(BaseModel):
    message: str
    contato: ContactSchema


class CartItemSchema(BaseModel):
    id: str
    produtoId: str
    nome: str
    preco: float
    quantidade: int
    imagem: str


class CartSummarySchema(BaseModel):
    items: list[CartItemSchema]
    total: float
    quantidade: int  # number of rows


class CartItemCreateRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    produtoId: Optional[str] = None
    nome: Optional[str] = None
    preco: Optional[float] = None
    quantidade: Optional[int] = None
    imagem: Optional[str] = None


class CartItemUpdateRequest(BaseModel):
    quantidade: Optional[StrictInt] = None


class CartChangeResponse(BaseModel):
    message: str
    item: Optional[CartItemSchema] = None
    carrinho: CartSummarySchema


class CustomerSchema(BaseModel):
    nome: str
    email: str
    telefone: str
    endereco: str


class OrderSchema(BaseModel):
    id: str
    cliente: CustomerSchema
    items: list[CartItemSchema]
    total: float
    status: str
    createdAt: str


class OrderCreateRequest(BaseModel):
    nome: Optional[str] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    endereco: Optional[str] = None


class OrderCreateResponse(BaseModel):
    message: str
    pedido: OrderSchema


class OrderStatusRequest(BaseModel):
    status: str


class LoginRequest(BaseModel):
    username: str
    password: str


class MessageResponse(BaseModel):
    message: str


# --- Helper Functions ---


def get_store() -> CollectionStore:
    """Get the global collection store. Overridden in tests."""
    return JsonFileStore()


def _cart_summary(cart: CartManager) -> CartSummarySchema:
    return CartSummarySchema(**cart.summary())


# --- FastAPI App ---


app = FastAPI(
    title="Barbearia API",
    description="Bookings, contact messages, cart and orders for the barbershop site",
    version="0.1.0",
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AdminGuardMiddleware)


# --- Global Exception Handler ---


# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    ValidationFailedError: 400,
    CartEmptyError: 400,
    InvalidCredentialsError: 401,
    BookingNotFoundError: 404,
    ContactNotFoundError: 404,
    CartItemNotFoundError: 404,
    OrderNotFoundError: 404,
    StorageUnavailableError: 500,
}


@app.exception_handler(BarbeariaError)
async def barbearia_error_handler(request: Request, exc: BarbeariaError) -> JSONResponse:
    """Map BarbeariaError subclasses to appropriate HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies like any other validation failure."""
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        problems.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return JSONResponse(
        status_code=400,
        content={
            "detail": "; ".join(problems) or "Requisição inválida",
            "error_type": ValidationFailedError.__name__,
        },
    )


# --- Endpoints ---


@app.get("/api/health")
def health_check(store: CollectionStore = Depends(get_store)):
    """Report service status and record counts per collection."""
    return {
        "status": "ok",
        "collections": {c.value: len(store.read_all(c)) for c in Collection},
    }


# --- Booking Endpoints ---


@app.get("/api/agendamento", response_model=list[BookingSchema])
def list_bookings(store: CollectionStore = Depends(get_store)):
    """List all bookings."""
    return [BookingSchema(**b.to_dict()) for b in BookingManager(store).get_all()]


@app.post("/api/agendamento", response_model=BookingSchema, status_code=201)
def create_booking(request: BookingCreateRequest, store: CollectionStore = Depends(get_store)):
    """Submit a booking. The slot must be in the future."""
    body = request.model_dump()
    validate_booking(body)

    booking = BookingManager(store).save(
        name=request.nome,
        email=request.email,
        phone=request.telefone,
        date=request.data,
        time=request.hora,
        service=request.servico,
        notes=request.observacoes or "",
    )
    return BookingSchema(**booking.to_dict())


@app.get("/api/agendamento/{booking_id}", response_model=BookingSchema)
def get_booking(booking_id: str, store: CollectionStore = Depends(get_store)):
    """Get a single booking by ID."""
    booking = BookingManager(store).get_by_id(booking_id)
    if booking is None:
        raise BookingNotFoundError(booking_id)
    return BookingSchema(**booking.to_dict())


@app.patch("/api/agendamento/{booking_id}", response_model=BookingSchema)
def update_booking(
    booking_id: str,
    request: BookingUpdateRequest,
    store: CollectionStore = Depends(get_store),
):
    """Update booking status and/or fields."""
    manager = BookingManager(store)
    if manager.get_by_id(booking_id) is None:
        raise BookingNotFoundError(booking_id)

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    validate_booking_update(update_data)

    booking = manager.update(booking_id, update_data)
    if booking is None:
        raise BookingNotFoundError(booking_id)
    return BookingSchema(**booking.to_dict())


@app.delete("/api/agendamento/{booking_id}", response_model=MessageResponse)
def delete_booking(booking_id: str, store: CollectionStore = Depends(get_store)):
    """Delete a booking permanently."""
    if not BookingManager(store).delete(booking_id):
        raise BookingNotFoundError(booking_id)
    return MessageResponse(message="Agendamento excluído com sucesso")


# --- Cart Endpoints ---


@app.get("/api/carrinho", response_model=CartSummarySchema)
def get_cart(store: CollectionStore = Depends(get_store)):
    """Get cart items, total and row count."""
    return _cart_summary(CartManager(store))


@app.post("/api/carrinho", response_model=CartChangeResponse, status_code=201)
def add_cart_item(request: CartItemCreateRequest, store: CollectionStore = Depends(get_store)):
    """Add a product, merging with an existing row for the same product."""
    validate_cart_item(request.model_dump())

    cart = CartManager(store)
    item = cart.add_item(
        product_id=request.produtoId,
        name=request.nome,
        unit_price=request.preco,
        quantity=request.quantidade,
        image=request.imagem,
    )
    return CartChangeResponse(
        message="Item adicionado ao carrinho",
        item=CartItemSchema(**item.to_dict()),
        carrinho=_cart_summary(cart),
    )


@app.delete("/api/carrinho", response_model=CartChangeResponse)
def clear_cart(store: CollectionStore = Depends(get_store)):
    """Empty the cart."""
    cart = CartManager(store)
    cart.clear()
    return CartChangeResponse(
        message="Carrinho esvaziado com sucesso",
        carrinho=_cart_summary(cart),
    )


@app.patch("/api/carrinho/{item_id}", response_model=CartChangeResponse)
def update_cart_item(
    item_id: str,
    request: CartItemUpdateRequest,
    store: CollectionStore = Depends(get_store),
):
    """Set an item's quantity. Zero or less removes the item."""
    if request.quantidade is None:
        raise ValidationFailedError("Quantidade inválida", ["quantidade"])

    cart = CartManager(store)
    item = cart.update_item(item_id, request.quantidade)
    if item is None and request.quantidade > 0:
        raise CartItemNotFoundError(item_id)

    return CartChangeResponse(
        message="Item atualizado" if request.quantidade > 0 else "Item removido",
        item=CartItemSchema(**item.to_dict()) if item else None,
        carrinho=_cart_summary(cart),
    )


@app.delete("/api/carrinho/{item_id}", response_model=CartChangeResponse)
def remove_cart_item(item_id: str, store: CollectionStore = Depends(get_store)):
    """Remove an item from the cart."""
    cart = CartManager(store)
    if not cart.remove_item(item_id):
        raise CartItemNotFoundError(item_id)
    return CartChangeResponse(
        message="Item removido do carrinho",
        carrinho=_cart_summary(cart),
    )


# --- Contact Endpoints ---


@app.post("/api/contato", response_model=ContactCreateResponse, status_code=201)
def create_contact(request: ContactCreateRequest, store: CollectionStore = Depends(get_store)):
    """Send a contact message."""
    validate_contact(request.model_dump())

    contact = ContactManager(store).save(
        name=request.nome,
        email=request.email,
        phone=request.telefone,
        service=request.servico,
        message=request.mensagem,
    )
    return ContactCreateResponse(
        message="Mensagem enviada com sucesso!",
        contato=ContactSchema(**contact.to_dict()),
    )


# --- Order Endpoints ---


@app.get("/api/pedido", response_model=list[OrderSchema])
def list_orders(store: CollectionStore = Depends(get_store)):
    """List all orders."""
    return [OrderSchema(**o.to_dict()) for o in OrderManager(store).get_all()]


@app.get("/api/pedido/{order_id}", response_model=OrderSchema)
def get_order(order_id: str, store: CollectionStore = Depends(get_store)):
    """Get a single order by ID."""
    order = OrderManager(store).get_by_id(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return OrderSchema(**order.to_dict())


@app.post("/api/pedido", response_model=OrderCreateResponse, status_code=201)
def create_order(request: OrderCreateRequest, store: CollectionStore = Depends(get_store)):
    """Check out the current cart."""
    validate_customer(request.model_dump())

    order = OrderManager(store).create(
        Customer(
            name=request.nome,
            email=request.email,
            phone=request.telefone,
            address=request.endereco,
        )
    )
    return OrderCreateResponse(
        message="Pedido realizado com sucesso",
        pedido=OrderSchema(**order.to_dict()),
    )


# --- Admin Endpoints ---


@app.get("/admin/login", response_model=MessageResponse)
def admin_login_hint():
    """Landing point for guard redirects. Credentials are sent with POST."""
    return MessageResponse(message="Envie usuário e senha via POST /admin/login")


@app.post("/admin/login", response_model=MessageResponse)
def admin_login(request: LoginRequest):
    """Check the admin credentials and set the auth cookie."""
    check_credentials(request.username, request.password)

    response = JSONResponse({"message": "Login realizado com sucesso"})
    response.set_cookie(
        AUTH_COOKIE,
        auth_cookie_value(request.username),
        max_age=AUTH_COOKIE_MAX_AGE,
        path="/",
    )
    return response


@app.post("/admin/logout", response_model=MessageResponse)
def admin_logout():
    """Drop the auth cookie."""
    response = JSONResponse({"message": "Sessão encerrada"})
    response.delete_cookie(AUTH_COOKIE, path="/")
    return response


@app.get("/admin")
def admin_dashboard(store: CollectionStore = Depends(get_store)):
    """Dashboard figures: bookings by status, upcoming slots, revenue, unread messages."""
    return summarize(
        BookingManager(store).get_all(),
        OrderManager(store).get_all(),
        ContactManager(store).get_all(),
    )


@app.get("/admin/agendamentos", response_model=list[BookingSchema])
def admin_list_bookings(
    status: Optional[str] = Query(default=None),
    data: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    store: CollectionStore = Depends(get_store),
):
    """Bookings sorted by slot, optionally filtered by status and date."""
    bookings = filter_bookings(BookingManager(store).get_all(), status=status, date=data)
    return [BookingSchema(**b.to_dict()) for b in bookings]


@app.get("/admin/contatos", response_model=list[ContactSchema])
def admin_list_contacts(
    unread: bool = Query(default=False),
    store: CollectionStore = Depends(get_store),
):
    """Contact messages, newest first."""
    contacts = ContactManager(store).get_all()
    if unread:
        contacts = [c for c in contacts if not c.read]
    contacts.sort(key=lambda c: c.created_at, reverse=True)
    return [ContactSchema(**c.to_dict()) for c in contacts]


@app.post("/admin/contatos/{contact_id}/lido", response_model=ContactSchema)
def admin_mark_contact_read(contact_id: str, store: CollectionStore = Depends(get_store)):
    """Mark a contact message as read."""
    contact = ContactManager(store).mark_read(contact_id)
    if contact is None:
        raise ContactNotFoundError(contact_id)
    return ContactSchema(**contact.to_dict())


@app.patch("/admin/pedidos/{order_id}", response_model=OrderSchema)
def admin_update_order_status(
    order_id: str,
    request: OrderStatusRequest,
    store: CollectionStore = Depends(get_store),
):
    """Move an order to another status."""
    validate_order_status(request.status)
    order = OrderManager(store).update_status(order_id, request.status)
    if order is None:
        raise OrderNotFoundError(order_id)
    return OrderSchema(**order.to_dict())
