"""Pydantic schemas shared by the endpoints and services."""
