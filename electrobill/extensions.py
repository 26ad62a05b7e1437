# Overview: Flask extension instances (billing API client).

from .api.client import ApiClient

api = ApiClient()
