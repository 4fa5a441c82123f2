from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NutrientsResponse(BaseModel):
    proteins: int
    fats: int
    carbs: int


class ProductResponse(BaseModel):
    productId: str
    name: str
    category: str
    price: int
    oldPrice: int | None = None
    description: str = ""
    weight: str | None = None
    calories: int | None = None
    nutrients: NutrientsResponse | None = None
    badges: list[str] = Field(default_factory=list)
    modifierGroupIds: list[str] = Field(default_factory=list)


class ModifierOptionResponse(BaseModel):
    modifierId: str
    name: str
    price: int
    calories: int = 0


class ModifierGroupResponse(BaseModel):
    groupId: str
    title: str
    selection: str
    required: bool
    action: str
    options: list[ModifierOptionResponse] = Field(default_factory=list)


class MenuResponse(BaseModel):
    menuVersion: int
    categories: list[str] = Field(default_factory=list)
    products: list[ProductResponse] = Field(default_factory=list)
    modifierGroups: list[ModifierGroupResponse] = Field(default_factory=list)


class ModifierResponse(BaseModel):
    modifierId: str
    name: str
    price: int
    action: str


class CartLineResponse(BaseModel):
    lineId: str
    productId: str
    name: str
    category: str
    quantity: int
    modifiers: list[ModifierResponse] = Field(default_factory=list)
    comment: str = ""
    unitPrice: int
    lineTotal: int


class CartResponse(BaseModel):
    lines: list[CartLineResponse] = Field(default_factory=list)
    total: int
    itemCount: int
    version: int


class OrderResponse(BaseModel):
    orderId: str
    displayCode: str
    customerName: str
    tableNumber: str | None = None
    status: str
    lines: list[CartLineResponse] = Field(default_factory=list)
    totalAmount: int
    createdAt: datetime
    completedAt: datetime | None = None
    priority: bool = False
    allergies: list[str] = Field(default_factory=list)
    paymentMethod: str


class OrderListResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)


class KitchenTicketResponse(BaseModel):
    order: OrderResponse
    elapsedMinutes: int
    urgency: str


class ProductionItemResponse(BaseModel):
    name: str
    count: int
    station: str


class KitchenCountersResponse(BaseModel):
    pending: int
    cooking: int
    ready: int


class KitchenBoardResponse(BaseModel):
    tickets: list[KitchenTicketResponse] = Field(default_factory=list)
    production: list[ProductionItemResponse] = Field(default_factory=list)
    counters: KitchenCountersResponse
    generatedAt: datetime


class HourlyBucketResponse(BaseModel):
    hour: int
    label: str
    revenue: int
    orders: int


class TopProductResponse(BaseModel):
    name: str
    quantity: int
    revenue: int


class SalesAnalyticsResponse(BaseModel):
    range: str
    revenue: int
    orderCount: int
    averageTicket: float
    revenueProgress: float
    averageCookMinutes: float | None = None
    hourly: list[HourlyBucketResponse] = Field(default_factory=list)
    topProducts: list[TopProductResponse] = Field(default_factory=list)


class InsightsResponse(BaseModel):
    range: str
    text: str
