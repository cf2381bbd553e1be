import dataclasses
import json

import pytest

from fastserial.decode import MissingFieldError, decode, key_count
from fastserial.encode import encode, schema_hash
from fastserial.models import (
    Address,
    Author,
    BatchReport,
    BlogPost,
    Category,
    Comment,
    CommentAuthor,
    CommentReply,
    Customer,
    Dimensions,
    Order,
    OrderItem,
    Product,
    ProductSpecs,
    ProductVariant,
    RelatedPost,
    SimpleUser,
    SocialLinks,
)

ALL_MODELS = [
    SimpleUser, Dimensions, ProductSpecs, ProductVariant, Product, Address,
    Customer, OrderItem, Order, SocialLinks, Author, Category, CommentAuthor,
    CommentReply, Comment, RelatedPost, BlogPost, BatchReport,
]


def make_product():
    return Product(
        id=101, name="Test", description="Desc", price=99.99, category="Test",
        tags=["test"], stock=10, is_available=True, weight_kg=1.0,
        dimensions=Dimensions(width_cm=10.0, height_cm=10.0, depth_cm=10.0),
        specs=ProductSpecs(
            battery_life_hours=10, connectivity=["usb"], driver_size_mm=10,
            impedance_ohm=32, frequency_response="20Hz",
        ),
        variants=[ProductVariant(color="black", sku="SKU-TEST", stock=3)],
    )


def make_order():
    return Order(
        order_id="ORD-001",
        customer=Customer(
            id=1, name="Test", email="test@example.com", phone="123",
            address=Address(street="123 St", city="City", state="ST",
                            zip="12345", country="USA"),
        ),
        items=[OrderItem(product_id=1, name="Item", quantity=1,
                         unit_price=10.0, subtotal=10.0)],
        subtotal=10.0, tax=1.0, shipping=1.0, total=12.0, status="pending",
        created_at="2024-01-01T00:00:00Z", updated_at="2024-01-01T00:00:00Z",
    )


def make_blog_post():
    commenter = CommentAuthor(id=2, username="reader", display_name="Reader")
    reply = CommentReply(id=3, author=commenter, content="Thanks", likes=1,
                         created_at="2024-01-01T00:00:00Z")
    return BlogPost(
        id=1, title="Test Post", slug="test", content="Content", excerpt="Excerpt",
        author=Author(
            id=1, username="author", display_name="Author", bio="Bio",
            avatar_url="https://example.com/avatar.jpg",
            social_links=SocialLinks(twitter="@author", github=None),
        ),
        category=Category(id=1, name="Tech", slug="tech"),
        tags=["rust"], featured_image="https://example.com/image.jpg",
        status="published", view_count=1000, like_count=100, comment_count=10,
        reading_time_minutes=5, published_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
        comments=[
            Comment(id=4, author=commenter, content="Nice", likes=2,
                    created_at="2024-01-01T00:00:00Z", replies=[reply]),
            Comment(id=5, author=commenter, content="Ok", likes=0,
                    created_at="2024-01-01T00:00:00Z"),
        ],
        related_posts=[RelatedPost(id=9, title="Other", slug="other")],
    )


@pytest.mark.parametrize(
    "factory, cls",
    [(make_product, Product), (make_order, Order), (make_blog_post, BlogPost)],
)
def test_round_trip(factory, cls):
    value = factory()
    assert decode(encode(value), cls) == value


def test_simple_user_list_round_trip():
    users = [SimpleUser(1, "john_doe", "john@example.com", 28, True),
             SimpleUser(2, "jane", "jane@example.com", 30, False)]
    assert decode(encode(users), list[SimpleUser]) == users


def test_comment_without_replies_key():
    raw = json.dumps({
        "id": 1, "author": {"id": 2, "username": "u", "display_name": "U"},
        "content": "c", "likes": 0, "created_at": "2024-01-01T00:00:00Z",
    })
    assert decode(raw, Comment).replies is None


def test_missing_variants_rejected():
    raw = json.loads(encode(make_product()))
    del raw["variants"]
    with pytest.raises(MissingFieldError) as info:
        decode(json.dumps(raw), Product)
    assert info.value.name == "variants"


def test_batch_report_key_order_follows_fields():
    report = BatchReport("Simple User", 10, 10, 1.0, 2.0, 1.5, 3.0, 2.0, 2.0)
    keys = list(json.loads(encode(report)))
    assert keys == [field.name for field in dataclasses.fields(BatchReport)]


@pytest.mark.parametrize("cls", ALL_MODELS)
def test_key_count_matches_fields(cls):
    assert key_count(cls) == len(dataclasses.fields(cls))


@pytest.mark.parametrize("cls", ALL_MODELS)
def test_schema_hash_is_stable(cls):
    assert schema_hash(cls) == schema_hash(cls)
    assert 0 <= schema_hash(cls) < 2 ** 64