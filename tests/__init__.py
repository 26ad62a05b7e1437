# ElectroBill Console Test Suite
#
# This package contains:
# - Unit tests for the pure helpers (billing, allocation, pagination, permissions)
# - Service and client tests against a fake billing API (httpx.MockTransport)
# - Page tests through the Flask test client
#
# Run with: pytest [-m smoke|auth]
