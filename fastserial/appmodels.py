"""Request and response shapes of the blog API."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from .encode import fs_field

T = TypeVar("T")


@dataclass(kw_only=True)
class User:
    id: int
    username: str
    email: str
    password_hash: str = fs_field(skip=True, default="")
    created_at: datetime | None


@dataclass
class AuthResponse:
    token: str
    user: User


@dataclass
class LoginRequest:
    email: str
    password: str


@dataclass
class RegisterRequest:
    username: str
    email: str
    password: str


@dataclass
class Post:
    id: int
    title: str
    content: str
    user_id: int
    category_id: int | None
    created_at: datetime | None


@dataclass
class PostDetail:
    id: int
    title: str
    content: str
    user_id: int
    author_name: str
    category_id: int | None
    category_name: str | None
    created_at: datetime | None


@dataclass
class CreatePostRequest:
    title: str
    content: str
    category_id: int | None


@dataclass
class Category:
    id: int
    name: str
    created_at: datetime | None


@dataclass
class CreateCategoryRequest:
    name: str


@dataclass
class CategoryStats:
    name: str
    count: int


@dataclass
class StatsResponse:
    total_users: int
    total_posts: int
    total_categories: int
    top_categories: list[CategoryStats]


@dataclass
class ApiResponse(Generic[T]):
    """Envelope for every API reply; encoded with a ``success`` key."""

    ok: bool = fs_field(rename="success")
    message: str
    data: T | None = None

    @classmethod
    def success(cls, data):
        """Build a successful reply carrying data."""
        return cls(ok=True, message="Success", data=data)

    @classmethod
    def error(cls, message):
        """Build a failed reply carrying only a message."""
        return cls(ok=False, message=message, data=None)