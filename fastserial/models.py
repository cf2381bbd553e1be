"""Data shapes used by the benchmark server."""

from __future__ import annotations

from dataclasses import dataclass

from .encode import fs_field


@dataclass
class SimpleUser:
    id: int
    username: str
    email: str
    age: int
    is_active: bool


@dataclass
class Dimensions:
    width_cm: float
    height_cm: float
    depth_cm: float


@dataclass
class ProductSpecs:
    battery_life_hours: int
    connectivity: list[str]
    driver_size_mm: int
    impedance_ohm: int
    frequency_response: str


@dataclass
class ProductVariant:
    color: str
    sku: str
    stock: int


@dataclass
class Product:
    id: int
    name: str
    description: str
    price: float
    category: str
    tags: list[str]
    stock: int
    is_available: bool
    weight_kg: float
    dimensions: Dimensions
    specs: ProductSpecs
    variants: list[ProductVariant]


@dataclass
class Address:
    street: str
    city: str
    state: str
    zip: str
    country: str


@dataclass
class Customer:
    id: int
    name: str
    email: str
    phone: str
    address: Address


@dataclass
class OrderItem:
    product_id: int
    name: str
    quantity: int
    unit_price: float
    subtotal: float


@dataclass
class Order:
    order_id: str
    customer: Customer
    items: list[OrderItem]
    subtotal: float
    tax: float
    shipping: float
    total: float
    status: str
    created_at: str
    updated_at: str


@dataclass
class SocialLinks:
    twitter: str | None
    github: str | None


@dataclass
class Author:
    id: int
    username: str
    display_name: str
    bio: str
    avatar_url: str
    social_links: SocialLinks


@dataclass
class Category:
    id: int
    name: str
    slug: str


@dataclass
class CommentAuthor:
    id: int
    username: str
    display_name: str


@dataclass
class CommentReply:
    id: int
    author: CommentAuthor
    content: str
    likes: int
    created_at: str


@dataclass
class Comment:
    id: int
    author: CommentAuthor
    content: str
    likes: int
    created_at: str
    replies: list[CommentReply] | None = fs_field(default=None)


@dataclass
class RelatedPost:
    id: int
    title: str
    slug: str


@dataclass
class BlogPost:
    id: int
    title: str
    slug: str
    content: str
    excerpt: str
    author: Author
    category: Category
    tags: list[str]
    featured_image: str
    status: str
    view_count: int
    like_count: int
    comment_count: int
    reading_time_minutes: int
    published_at: str
    updated_at: str
    comments: list[Comment]
    related_posts: list[RelatedPost]


@dataclass
class BatchReport:
    test_type: str
    sample_size: int
    total_records: int
    fastserial_encode_ms: float
    serde_json_encode_ms: float
    fastserial_decode_ms: float
    serde_json_decode_ms: float
    encode_speedup: float
    decode_speedup: float