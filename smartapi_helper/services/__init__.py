"""SmartAPI Helper - Service Layer

Request serialization, response parsing, HTTP transport and status polling.
"""
