"""Schemas — pydantic models for the route configuration file."""
