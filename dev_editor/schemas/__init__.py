"""Pydantic request/response contracts for the dev editor API."""
