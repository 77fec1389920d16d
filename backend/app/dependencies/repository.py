"""Request-scoped access to the process-wide repository"""
from fastapi import Request

from app.services.product_repository import ProductRepository


def get_repository(request: Request) -> ProductRepository:
    return request.app.state.repository
