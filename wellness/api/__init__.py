"""HTTP surface of the wellness tracker"""
from wellness.api.server import create_api_application

__all__ = ["create_api_application"]
