"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Keep tests away from real backends and real email
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")
os.environ.setdefault("CART_STORAGE", "memory")
os.environ.pop("RESEND_API_KEY", None)


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client"""
    client = Mock()

    # Every builder call returns the same table mock, so tests set
    # client.table.return_value.execute.return_value.data
    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.insert.return_value = table_mock
    table_mock.update.return_value = table_mock
    table_mock.delete.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.execute.return_value = Mock(data=[])

    client.table.return_value = table_mock

    return client


@pytest.fixture
def sample_product():
    """Sample catalog product row"""
    return {
        "id": 1,
        "name": "Ceramic Mug",
        "description": "Hand-glazed stoneware mug",
        "price": 10.0,
        "category": "Kitchen",
        "image": "https://cdn.example.com/mug.jpg",
        "in_stock": True,
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_customer():
    """Sample checkout details"""
    return {
        "full_name": "Test Customer",
        "phone_number": "+1 555 0100",
        "email": "customer@example.com",
        "delivery_address": "12 Market Street",
        "city": "Springfield",
        "province": "Ontario",
        "note": "Leave at the door",
    }


@pytest.fixture
def sample_order_record():
    """Sample orders table row"""
    return {
        "id": 7,
        "order_id": "ORD-1735689600000",
        "customer_info": {
            "fullName": "Test Customer",
            "phone": "+1 555 0100",
            "email": "customer@example.com",
            "address": "12 Market Street",
            "city": "Springfield",
            "province": "Ontario",
            "note": None,
        },
        "items": [
            {"id": 1, "name": "Ceramic Mug", "price": 10.0, "quantity": 2, "image": "mug.jpg"},
            {"id": 2, "name": "Tea Towel", "price": 5.0, "quantity": 1, "image": "towel.jpg"},
        ],
        "total": 25.0,
        "status": "pending",
        "payment_method": "Cash on Delivery (COD)",
        "created_at": "2025-01-01T00:00:00+00:00",
    }
